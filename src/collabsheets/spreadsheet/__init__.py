"""
Spreadsheet module.

This module provides the sheet value objects and the cell expression
evaluator used by the collaboration engine.
"""

from collabsheets.spreadsheet.model import (
    User,
    Cell,
    Sheet,
    Position,
    EMPTY_CELL,
    format_value,
)
from collabsheets.spreadsheet.expression import (
    Evaluation,
    FALLBACK_VALUE,
    evaluate,
    try_evaluate,
)

__all__ = [
    "User",
    "Cell",
    "Sheet",
    "Position",
    "EMPTY_CELL",
    "format_value",
    "Evaluation",
    "FALLBACK_VALUE",
    "evaluate",
    "try_evaluate",
]
