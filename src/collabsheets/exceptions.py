"""
Exception classes for collabsheets.

The public service surface never raises: every operation returns a
``Result``. These exceptions are used inside the package (the expression
parser signals failures with ``EvaluationError``) and by callers that opt
into exceptions through ``Result.unwrap()``.
"""


class CollabSheetsError(Exception):
    """Base class for all collabsheets errors."""
    pass


class EvaluationError(CollabSheetsError):
    """Raised when a cell expression cannot be evaluated.

    The evaluator catches this internally and degrades to the fallback
    value ``0``. Common causes:
        - Empty input
        - Malformed numbers (``1.2.3``)
        - Unknown operators or dangling operators (``3 +``, ``3 % 2``)
        - Division by zero
    """
    pass


class ResultError(CollabSheetsError):
    """Raised by ``Result.unwrap()`` when called on a failed result.

    Attributes:
        kind: The ``ErrorKind`` carried by the failed result
    """

    def __init__(self, kind, message: str) -> None:
        super().__init__(message)
        self.kind = kind
