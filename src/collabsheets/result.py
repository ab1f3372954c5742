"""
Result values returned by the collaboration engine.

Every public operation of the engine reports success or failure as a
``Result`` instead of raising. A failed result carries an ``ErrorKind``
that the presentation layer turns into user-facing text.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Generic, Optional, TypeVar

from collabsheets.exceptions import ResultError

T = TypeVar("T")


class ErrorKind(Enum):
    """Recoverable failure categories."""
    ALREADY_EXISTS = "already_exists"
    USER_NOT_FOUND = "user_not_found"
    SHEET_NOT_FOUND = "sheet_not_found"
    ACCESS_DENIED = "access_denied"
    POLICY_NOT_ENABLED = "policy_not_enabled"
    INVALID_NAME = "invalid_name"
    NOT_OWNER = "not_owner"
    EVALUATION_FAILURE = "evaluation_failure"

    @property
    def is_not_found(self) -> bool:
        return self in (ErrorKind.USER_NOT_FOUND, ErrorKind.SHEET_NOT_FOUND)


@dataclass(frozen=True)
class Result(Generic[T]):
    """Outcome of an engine operation.

    Attributes:
        value: The produced value (None on failure)
        error: The failure category (None on success)
        message: Human-readable detail, mostly useful for failures
    """
    value: Optional[T] = None
    error: Optional[ErrorKind] = None
    message: str = ""

    @classmethod
    def success(cls, value: T = None, message: str = "") -> "Result[T]":
        return cls(value=value, error=None, message=message)

    @classmethod
    def failure(cls, error: ErrorKind, message: str = "") -> "Result[T]":
        return cls(value=None, error=error, message=message)

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def failed(self) -> bool:
        return self.error is not None

    def unwrap(self) -> T:
        """Return the value, raising ``ResultError`` if the result failed."""
        if self.error is not None:
            raise ResultError(self.error, self.message or self.error.value)
        return self.value

    def value_or(self, default: T) -> T:
        return default if self.error is not None else self.value

    def __bool__(self) -> bool:
        return self.ok
