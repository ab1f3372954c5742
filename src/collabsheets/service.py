"""
Collaboration service.

``CollaborationService`` is the single entry point of the engine. It owns the
registry, the notification hub and the active access policy, and sequences
every operation as lookup → policy check → mutation → notification.

All public methods return ``Result`` values and never raise. Each one runs
under one coarse re-entrant lock, so the access check and the snapshot swap
of ``update_cell`` are observed atomically by concurrent callers.

Usage::

    service = CollaborationService()
    service.create_user("alice")
    service.create_sheet("alice", "Budget")
    result = service.update_cell("alice", "Budget", 0, 0, "100 + 50")
    assert result.value.cell_at(0, 0).value == 150
"""

import functools
import logging
import threading
from typing import Optional

from collabsheets.access import AccessPolicy, OpenPolicy, RestrictedPolicy
from collabsheets.diagnostics import DiagnosticLog, DiagnosticSink
from collabsheets.notifications import NotificationHub, NotificationSink
from collabsheets.registry import Registry
from collabsheets.result import ErrorKind, Result
from collabsheets.spreadsheet.expression import try_evaluate
from collabsheets.spreadsheet.model import Cell, Sheet, User, format_value

logger = logging.getLogger(__name__)


def _serialized(method):
    """Run ``method`` while holding the service lock."""

    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        with self._lock:
            return method(self, *args, **kwargs)

    return wrapper


class CollaborationService:
    """Multi-user sheet editing with access control and change notifications.

    Args:
        registry: User and sheet store (a fresh one by default)
        hub: Notification hub (a fresh one by default)
        diagnostics: Sink for event lines (a file-less DiagnosticLog by default)
        policy: Initial access policy (OpenPolicy by default)
    """

    def __init__(
        self,
        registry: Optional[Registry] = None,
        hub: Optional[NotificationHub] = None,
        diagnostics: Optional[DiagnosticSink] = None,
        policy: Optional[AccessPolicy] = None,
    ) -> None:
        self.registry = registry if registry is not None else Registry()
        self.hub = hub if hub is not None else NotificationHub()
        self.diagnostics = diagnostics if diagnostics is not None else DiagnosticLog(path=None)
        self._policy: AccessPolicy = policy if policy is not None else OpenPolicy()
        self._restricted: Optional[RestrictedPolicy] = (
            self._policy if isinstance(self._policy, RestrictedPolicy) else None
        )
        self._lock = threading.RLock()

    @classmethod
    def from_settings(cls, settings) -> "CollaborationService":
        """Build a service from ``collabsheets.config.Settings``."""
        service = cls(diagnostics=DiagnosticLog(settings.log_file))
        if settings.access_control:
            service.enable_access_control()
        return service

    def _log(self, message: str) -> None:
        try:
            self.diagnostics.log(message)
        except Exception:
            logger.exception("Diagnostic sink failed to record: %s", message)

    # Users and sheets

    @_serialized
    def create_user(self, name: str) -> Result[User]:
        result = self.registry.create_user(name)
        if result.ok:
            self._log(f"User {name} created")
        else:
            self._log(f"Failed to create user {name} - {result.message}")
        return result

    @_serialized
    def create_sheet(self, owner: str, name: str) -> Result[Sheet]:
        result = self.registry.create_sheet(owner, name)
        if result.ok:
            self._log(f"Sheet {name} created by user {owner}")
        else:
            self._log(f"Failed to create sheet {name} for user {owner} - {result.message}")
        return result

    @_serialized
    def get_user(self, name: str) -> Result[User]:
        user = self.registry.get_user(name)
        if user is None:
            self._log(f"Failed to get user: {name} - user does not exist")
            return Result.failure(ErrorKind.USER_NOT_FOUND, f"User {name} does not exist")
        self._log(f"Retrieved user: {name}")
        return Result.success(user)

    @_serialized
    def get_sheet(self, name: str) -> Result[Sheet]:
        sheet = self.registry.get_sheet(name)
        if sheet is None:
            return Result.failure(ErrorKind.SHEET_NOT_FOUND, f"Sheet {name} does not exist")
        return Result.success(sheet)

    @_serialized
    def user_exists(self, name: str) -> bool:
        return self.registry.user_exists(name)

    @_serialized
    def sheet_exists(self, name: str) -> bool:
        return self.registry.sheet_exists(name)

    @_serialized
    def check_user_and_sheet_exist(self, user: str, sheet_name: str) -> bool:
        return self.registry.user_exists(user) and self.registry.sheet_exists(sheet_name)

    @_serialized
    def view_sheet(self, user: str, sheet_name: str) -> Result[Sheet]:
        """Return the sheet snapshot if ``user`` owns it (exact name match)."""
        if not self.registry.user_exists(user):
            return Result.failure(ErrorKind.USER_NOT_FOUND, f"User {user} does not exist")
        sheet = self.registry.get_sheet(sheet_name)
        if sheet is None:
            return Result.failure(ErrorKind.SHEET_NOT_FOUND, f"Sheet {sheet_name} does not exist")
        if not sheet.is_owned_by(user):
            return Result.failure(
                ErrorKind.NOT_OWNER, f"Sheet {sheet_name} does not belong to user {user}"
            )
        self._log(f"Sheet {sheet_name} viewed by user {user}")
        return Result.success(sheet)

    # Cells

    @_serialized
    def update_cell(self, user: str, sheet_name: str, row: int, col: int, text: str) -> Result[Sheet]:
        """Evaluate ``text`` and store it at ``(row, col)`` of ``sheet_name``.

        An expression that fails to evaluate is still stored, with value 0;
        the stored cell's ``error`` records why.

        Returns:
            Result holding the new sheet snapshot, or USER_NOT_FOUND /
            SHEET_NOT_FOUND / ACCESS_DENIED with nothing mutated
        """
        if not self.registry.user_exists(user):
            self._log(f"Failed to update cell - user {user} not found")
            return Result.failure(ErrorKind.USER_NOT_FOUND, f"User {user} does not exist")

        sheet = self.registry.get_sheet(sheet_name)
        if sheet is None:
            self._log(f"Failed to update cell - sheet {sheet_name} not found")
            return Result.failure(ErrorKind.SHEET_NOT_FOUND, f"Sheet {sheet_name} does not exist")

        if not self._policy.can_edit(user, sheet_name):
            self._log(f"Access denied - user {user} attempted to edit sheet {sheet_name}")
            return Result.failure(
                ErrorKind.ACCESS_DENIED,
                f"User {user} has read-only access to sheet {sheet_name}",
            )

        cell = Cell.from_expression(text)
        updated = sheet.with_cell(row, col, cell)
        self.registry.replace_sheet(updated)
        self._log(
            f"Cell updated in sheet {sheet_name} at position ({row},{col}) "
            f"with value {text} by user {user}"
        )
        if cell.is_fallback:
            self._log(f"Expression {text!r} could not be evaluated ({cell.error}); stored 0")

        self.hub.notify(sheet_name, (row, col), format_value(cell.value))
        return Result.success(updated)

    @staticmethod
    def evaluate_expression(text: str) -> Result[float]:
        """Evaluate ``text`` without storing it, reporting failure explicitly."""
        outcome = try_evaluate(text)
        if outcome.failed:
            return Result.failure(ErrorKind.EVALUATION_FAILURE, outcome.error)
        return Result.success(outcome.value)

    # Access control

    @property
    def policy(self) -> AccessPolicy:
        return self._policy

    @property
    def access_control_enabled(self) -> bool:
        return isinstance(self._policy, RestrictedPolicy)

    @_serialized
    def enable_access_control(self, reset: bool = False) -> RestrictedPolicy:
        """Switch to the restricted policy.

        The last restricted policy is reused, so rights recorded before a
        ``disable_access_control`` come back. ``reset=True`` starts from an
        empty rights table instead.
        """
        if reset or self._restricted is None:
            self._restricted = RestrictedPolicy()
        if self._policy is not self._restricted:
            self._policy = self._restricted
            self._log("Access control enabled")
        return self._restricted

    @_serialized
    def disable_access_control(self) -> None:
        """Switch to the open policy. Recorded rights are kept, but not enforced."""
        if isinstance(self._policy, OpenPolicy):
            return
        self._policy = OpenPolicy()
        self._log("Access control disabled")

    @_serialized
    def set_access(self, sheet_name: str, user: str, is_read_only: bool) -> Result[None]:
        if not self.registry.sheet_exists(sheet_name):
            self._log(f"Failed to set access - sheet {sheet_name} not found")
            return Result.failure(ErrorKind.SHEET_NOT_FOUND, f"Sheet {sheet_name} does not exist")
        if not self.registry.user_exists(user):
            self._log(f"Failed to set access - user {user} not found")
            return Result.failure(ErrorKind.USER_NOT_FOUND, f"User {user} does not exist")
        if not isinstance(self._policy, RestrictedPolicy):
            self._log("Failed to set access - access control is not enabled")
            return Result.failure(ErrorKind.POLICY_NOT_ENABLED, "Access control is not enabled")

        self._policy.set_access(user, sheet_name, is_read_only)
        self._log(
            f"Access rights updated for user {user} on sheet {sheet_name} - ReadOnly: {is_read_only}"
        )
        return Result.success()

    @_serialized
    def revoke_access(self, sheet_name: str, user: str) -> Result[None]:
        """Make ``user`` read-only on ``sheet_name`` and stop notifying them about it."""
        if not isinstance(self._policy, RestrictedPolicy):
            self._log(f"Failed to revoke access for {user} - access control is not enabled")
            return Result.failure(ErrorKind.POLICY_NOT_ENABLED, "Access control is not enabled")
        target = self.registry.get_user(user)
        if target is None:
            self._log(f"Failed to revoke access - user {user} not found")
            return Result.failure(ErrorKind.USER_NOT_FOUND, f"User {user} does not exist")

        self._policy.set_access(user, sheet_name, True)
        self.detach(target, sheet_name)
        self._log(f"Access revoked for user {user} on sheet {sheet_name}")
        return Result.success()

    # Subscriptions

    @_serialized
    def attach(self, sink: NotificationSink, sheet_name: str) -> None:
        self.hub.attach(sink, sheet_name)
        self._log(f"Observer {_sink_name(sink)} attached to sheet {sheet_name}")

    @_serialized
    def detach(self, sink: NotificationSink, sheet_name: str) -> None:
        if self.hub.has_subscription(sheet_name):
            self.hub.detach(sink, sheet_name)
            self._log(f"Observer {_sink_name(sink)} detached from sheet {sheet_name}")

    @_serialized
    def share_sheet(self, owner: str, sheet_name: str, collaborator: str) -> Result[User]:
        """Grant ``collaborator`` edit access to ``owner``'s sheet.

        The owner check ignores case. The collaborator is created if needed,
        access control is switched on, the collaborator is made editable, and
        both owner and collaborator are attached for notifications.

        Returns:
            Result holding the collaborator, or USER_NOT_FOUND /
            SHEET_NOT_FOUND / NOT_OWNER / INVALID_NAME
        """
        owner_user = self.registry.get_user(owner)
        if owner_user is None:
            return Result.failure(ErrorKind.USER_NOT_FOUND, f"Sheet owner {owner} does not exist")
        sheet = self.registry.get_sheet(sheet_name)
        if sheet is None:
            return Result.failure(ErrorKind.SHEET_NOT_FOUND, f"Sheet {sheet_name} does not exist")
        if not sheet.is_owned_by(owner, ignore_case=True):
            return Result.failure(
                ErrorKind.NOT_OWNER, f"Sheet {sheet_name} does not belong to {owner}"
            )

        if not self.registry.user_exists(collaborator):
            created = self.create_user(collaborator)
            if created.failed:
                return created
        collaborator_user = self.registry.get_user(collaborator)

        self.enable_access_control()
        self.attach(owner_user, sheet_name)
        self.set_access(sheet_name, collaborator, False)
        self.attach(collaborator_user, sheet_name)
        self._log(f"{owner} shared sheet {sheet_name} with {collaborator}")
        return Result.success(collaborator_user)


def _sink_name(sink: object) -> str:
    return getattr(sink, "name", None) or "Unknown"
