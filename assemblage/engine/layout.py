"""
Assemblage - Shared Layout

The face-up table of cards (4 rows x 12 columns by default). Players may only
take the outermost card at either end of a row; a taken cell is never refilled.
"""

from dataclasses import dataclass
from typing import Any, Sequence, cast

from assemblage.engine.base import CardInstance, Side
from assemblage.engine.errors import InvalidRowError, RowEmptyError


@dataclass(frozen=True)
class Layout:
    """
    Immutable representation of the shared grid.

    Attributes:
        cells: Tuple of rows, each a tuple of CardInstance or None (taken)
    """
    cells: tuple[tuple[CardInstance | None, ...], ...]

    def __post_init__(self) -> None:
        """Validate grid is rectangular."""
        if not self.cells:
            raise ValueError("Layout must have at least one row")
        width = len(self.cells[0])
        for i, row in enumerate(self.cells):
            if len(row) != width:
                raise ValueError(f"Row {i} has {len(row)} cells (expected {width})")

    @classmethod
    def initialize(cls, cards: Sequence[CardInstance], rows: int, cols: int) -> "Layout":
        """
        Fill a rows x cols grid row-major.

        Raises:
            ValueError: If the number of cards does not fill the grid exactly
        """
        if len(cards) != rows * cols:
            raise ValueError(f"Layout needs {rows * cols} cards, got {len(cards)}")
        return cls(
            cells=tuple(tuple(cards[r * cols:(r + 1) * cols]) for r in range(rows))
        )

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Layout":
        return cls(
            cells=tuple(
                tuple(CardInstance.from_dict(c) if c is not None else None for c in row)
                for row in data["cells"]
            )
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "cells": [
                [c.to_dict() if c is not None else None for c in row]
                for row in self.cells
            ]
        }

    @property
    def rows(self) -> int:
        return len(self.cells)

    @property
    def cols(self) -> int:
        return len(self.cells[0])

    def _row(self, row_index: int) -> tuple[CardInstance | None, ...]:
        if isinstance(row_index, bool) or not isinstance(row_index, int):
            raise InvalidRowError(f"Row index must be an integer, got {row_index!r}.")
        if not (0 <= row_index < self.rows):
            raise InvalidRowError(
                f"Row index must be 0-{self.rows - 1}, got {row_index}."
            )
        return self.cells[row_index]

    def end_column(self, row_index: int, side: Side) -> int | None:
        """Column of the outermost card on one side of a row, or None if empty."""
        row = self._row(row_index)
        columns = range(len(row)) if side == Side.LEFT else range(len(row) - 1, -1, -1)
        for col in columns:
            if row[col] is not None:
                return col
        return None

    def open_ends(self, row_index: int) -> tuple[int, ...]:
        """Columns that may currently be taken from a row (zero, one or two)."""
        left = self.end_column(row_index, Side.LEFT)
        if left is None:
            return tuple()
        right = self.end_column(row_index, Side.RIGHT)
        return (left,) if left == right else (left, right)

    def take_from_end(self, row_index: int, side: Side) -> tuple["Layout", CardInstance]:
        """
        Remove the outermost card on one side of a row.

        Args:
            row_index: Row to take from
            side: Which end of the row

        Returns:
            (new layout with the cell emptied, the taken card)

        Raises:
            InvalidRowError: If the row index is out of range
            RowEmptyError: If the row has no cards left
        """
        col = self.end_column(row_index, side)
        if col is None:
            raise RowEmptyError(f"Row {row_index} has no cards left.")

        row = self.cells[row_index]
        card = cast(CardInstance, row[col])
        new_row = row[:col] + (None,) + row[col + 1:]
        new_cells = self.cells[:row_index] + (new_row,) + self.cells[row_index + 1:]
        return Layout(cells=new_cells), card

    def has_remaining_cards(self) -> bool:
        return any(c is not None for row in self.cells for c in row)

    def remaining_count(self) -> int:
        return sum(1 for row in self.cells for c in row if c is not None)
