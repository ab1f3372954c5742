"""
Concrete access policies.

OpenPolicy lets everyone edit everything and is the default until access
control is enabled. RestrictedPolicy keeps an explicit ``(user, sheet)``
rights table; a pair without an entry is editable.
"""

import logging
from types import MappingProxyType
from typing import Dict, Mapping, Tuple

logger = logging.getLogger(__name__)

RightKey = Tuple[str, str]


class OpenPolicy:
    """Policy used while access control is disabled: every edit is allowed."""

    def can_edit(self, user: str, sheet_name: str) -> bool:
        return True

    def __repr__(self) -> str:
        return "OpenPolicy()"


class RestrictedPolicy:
    """Policy backed by per-user, per-sheet rights.

    Attributes:
        rights: Read-only view of the ``(user, sheet) -> is_read_only`` table
    """

    def __init__(self) -> None:
        self._rights: Dict[RightKey, bool] = {}

    def can_edit(self, user: str, sheet_name: str) -> bool:
        return not self._rights.get((user, sheet_name), False)

    def set_access(self, user: str, sheet_name: str, is_read_only: bool) -> None:
        """Record the right for ``(user, sheet_name)``, replacing any prior entry."""
        self._rights[(user, sheet_name)] = bool(is_read_only)
        logger.debug(
            "Set %s access for %s on %s",
            "read-only" if is_read_only else "editable", user, sheet_name,
        )

    def is_read_only(self, user: str, sheet_name: str) -> bool:
        return self._rights.get((user, sheet_name), False)

    @property
    def rights(self) -> Mapping[RightKey, bool]:
        return MappingProxyType(self._rights)

    def __repr__(self) -> str:
        return f"RestrictedPolicy(rights={len(self._rights)})"
