"""
Spreadsheet model classes.

This module provides the value objects the collaboration engine works with:
- User: A named participant that can receive change notifications
- Cell: An expression and its computed value
- Sheet: An immutable snapshot of a named, owned grid of cells

Sheets are never edited in place. ``Sheet.with_cell`` returns a new snapshot
and the registry swaps it in, so a snapshot handed to a caller never changes
underneath them.
"""

import logging
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Mapping, Optional, Tuple

import pandas as pd

from collabsheets.spreadsheet.expression import try_evaluate

logger = logging.getLogger(__name__)

Position = Tuple[int, int]


def format_value(value: float) -> str:
    """Render a computed value the way sinks and the CLI display it.

    Integral values drop the trailing ``.0`` (``150.0`` → ``"150"``).
    """
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


@dataclass(frozen=True)
class User:
    """A participant identified by a unique, case-sensitive name.

    Users act as notification sinks: the hub calls ``update`` for every change
    to a sheet the user is attached to.
    """
    name: str

    def update(self, sheet_name: str, position: Position, value: str) -> None:
        row, col = position
        logger.info(
            "User %s received update for sheet %s: Position (%d, %d) changed to %s",
            self.name, sheet_name, row, col, value,
        )

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class Cell:
    """Stored cell content.

    Attributes:
        expression: Raw input text as typed by the user
        value: Computed numeric value (``0`` when evaluation failed)
        error: Evaluation failure reason, None when the value is genuine
    """
    expression: str
    value: float
    error: Optional[str] = None

    @classmethod
    def from_expression(cls, expression: str) -> "Cell":
        """Evaluate ``expression`` and build the cell holding its result."""
        outcome = try_evaluate(expression)
        return cls(expression=expression, value=outcome.value, error=outcome.error)

    @property
    def is_fallback(self) -> bool:
        return self.error is not None

    def __str__(self) -> str:
        return format_value(self.value)


EMPTY_CELL = Cell("0", 0.0)


@dataclass(frozen=True, eq=False)
class Sheet:
    """Immutable snapshot of a sheet.

    Attributes:
        name: Sheet name (unique key in the registry)
        owner: Name of the user who created the sheet
        cells: Read-only mapping from ``(row, col)`` to Cell
    """
    name: str
    owner: str
    cells: Mapping[Position, Cell] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not isinstance(self.cells, MappingProxyType):
            object.__setattr__(self, "cells", MappingProxyType(dict(self.cells)))

    def with_cell(self, row: int, col: int, cell: Cell) -> "Sheet":
        """Return a new snapshot with the cell at ``(row, col)`` replaced.

        All other coordinates are carried over unchanged.
        """
        cells = dict(self.cells)
        cells[(row, col)] = cell
        return replace(self, cells=MappingProxyType(cells))

    def cell_at(self, row: int, col: int) -> Cell:
        """Return the cell at ``(row, col)``, or the empty cell if unset."""
        return self.cells.get((row, col), EMPTY_CELL)

    def is_owned_by(self, user_name: str, ignore_case: bool = False) -> bool:
        if ignore_case:
            return self.owner.lower() == user_name.lower()
        return self.owner == user_name

    def to_frame(self, rows: int = 3, cols: int = 3) -> pd.DataFrame:
        """Render the top-left ``rows`` × ``cols`` window as a DataFrame.

        Values are stringified with ``format_value``; unset cells show ``0``.

        Raises:
            ValueError: If the window dimensions are not positive
        """
        if rows <= 0 or cols <= 0:
            raise ValueError("Window dimensions must be positive integers")
        data = [
            [format_value(self.cell_at(r, c).value) for c in range(cols)]
            for r in range(rows)
        ]
        return pd.DataFrame(data, index=range(rows), columns=range(cols))

    def __repr__(self) -> str:
        return f"Sheet(name={self.name!r}, owner={self.owner!r}, cells={len(self.cells)})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Sheet):
            return NotImplemented
        return (
            self.name == other.name
            and self.owner == other.owner
            and dict(self.cells) == dict(other.cells)
        )

    __hash__ = None
