"""
In-memory registry of users and sheets.

The registry owns the two name-keyed collections and enforces name
uniqueness. Sheets are stored as immutable snapshots; ``replace_sheet``
swaps in a new snapshot for an existing name in one assignment.
"""

import logging
from typing import Dict, List, Optional

from collabsheets.result import ErrorKind, Result
from collabsheets.spreadsheet.model import Sheet, User

logger = logging.getLogger(__name__)


def _is_blank(name: Optional[str]) -> bool:
    return not isinstance(name, str) or not name.strip()


class Registry:
    """Name-keyed store of users and sheet snapshots."""

    def __init__(self) -> None:
        self._users: Dict[str, User] = {}
        self._sheets: Dict[str, Sheet] = {}

    def create_user(self, name: str) -> Result[User]:
        """Register a new user.

        Args:
            name: User name (non-blank, case-sensitive)

        Returns:
            Result holding the new User, or INVALID_NAME / ALREADY_EXISTS
        """
        if _is_blank(name):
            return Result.failure(ErrorKind.INVALID_NAME, "User name cannot be empty")
        if name in self._users:
            return Result.failure(ErrorKind.ALREADY_EXISTS, f"User {name} already exists")

        user = User(name)
        self._users[name] = user
        logger.debug("Registered user %s", name)
        return Result.success(user)

    def create_sheet(self, owner: str, name: str) -> Result[Sheet]:
        """Register a new, empty sheet owned by ``owner``.

        Returns:
            Result holding the new Sheet, or USER_NOT_FOUND / INVALID_NAME /
            ALREADY_EXISTS
        """
        if not self.user_exists(owner):
            return Result.failure(ErrorKind.USER_NOT_FOUND, f"User {owner} does not exist")
        if _is_blank(name):
            return Result.failure(ErrorKind.INVALID_NAME, "Sheet name cannot be empty")
        if name in self._sheets:
            return Result.failure(ErrorKind.ALREADY_EXISTS, f"Sheet {name} already exists")

        sheet = Sheet(name=name, owner=owner)
        self._sheets[name] = sheet
        logger.debug("Registered sheet %s for %s", name, owner)
        return Result.success(sheet)

    def replace_sheet(self, sheet: Sheet) -> None:
        """Install ``sheet`` as the current snapshot for its name.

        Raises:
            KeyError: If no sheet with that name was created
        """
        if sheet.name not in self._sheets:
            raise KeyError(sheet.name)
        self._sheets[sheet.name] = sheet

    def get_user(self, name: str) -> Optional[User]:
        return self._users.get(name)

    def get_sheet(self, name: str) -> Optional[Sheet]:
        return self._sheets.get(name)

    def user_exists(self, name: str) -> bool:
        return not _is_blank(name) and name in self._users

    def sheet_exists(self, name: str) -> bool:
        return not _is_blank(name) and name in self._sheets

    def user_names(self) -> List[str]:
        return list(self._users)

    def sheet_names(self) -> List[str]:
        return list(self._sheets)
