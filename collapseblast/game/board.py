"""Logical representation of the collapse grid.

Row 0 is the bottom row of the board; blocks fall toward it.
"""

import logging
from dataclasses import dataclass

import numpy as np

logger = logging.getLogger(__name__)

EMPTY_VALUE = -1

Position = tuple[int, int]


@dataclass(frozen=True)
class Cell:
    """Content of a single grid cell: a color index, or None when empty"""

    color: int | None = None

    @property
    def is_empty(self) -> bool:
        return self.color is None

    @classmethod
    def occupied(cls, color: int) -> "Cell":
        return cls(color)


Cell.EMPTY = Cell()


class Board:

    def __init__(self, row_count: int, column_count: int):
        if row_count <= 0 or column_count <= 0:
            raise ValueError("Board dimensions must be positive")
        self.row_count = row_count
        self.column_count = column_count
        self.cells = np.full((row_count, column_count), EMPTY_VALUE, dtype=np.int16)

    @classmethod
    def from_rows(cls, rows: list[list[int | None]]) -> "Board":
        """Build a board from a list of rows, row 0 first. None marks an empty cell."""
        if not rows or not rows[0]:
            raise ValueError("Board layout must have at least one row and one column")
        column_count = len(rows[0])
        if any(len(row) != column_count for row in rows):
            raise ValueError("All board rows must have the same number of columns.")

        board = cls(len(rows), column_count)
        for row, values in enumerate(rows):
            for col, value in enumerate(values):
                if value is not None:
                    board.set(row, col, Cell.occupied(value))
        return board

    def to_rows(self) -> list[list[int | None]]:
        """Return a copy of the board so callers can't modify it"""
        return [
            [None if value == EMPTY_VALUE else value for value in row]
            for row in self.cells.tolist()
        ]

    def is_valid_position(self, row: int, col: int) -> bool:
        return 0 <= row < self.row_count and 0 <= col < self.column_count

    def get(self, row: int, col: int) -> Cell:
        if not self.is_valid_position(row, col):
            logger.warning("Invalid position: (%d, %d)", row, col)
            return Cell.EMPTY
        value = int(self.cells[row, col])
        if value == EMPTY_VALUE:
            return Cell.EMPTY
        return Cell.occupied(value)

    def set(self, row: int, col: int, cell: Cell):
        if not self.is_valid_position(row, col):
            logger.warning("Invalid position: (%d, %d)", row, col)
            return
        if cell.is_empty:
            self.cells[row, col] = EMPTY_VALUE
            return
        if cell.color < 0:
            raise ValueError(f"Invalid color value {cell.color}, must be non-negative")
        self.cells[row, col] = cell.color

    def clear(self, row: int, col: int):
        if not self.is_valid_position(row, col):
            logger.warning("Invalid position: (%d, %d)", row, col)
            return
        self.cells[row, col] = EMPTY_VALUE

    def clear_all(self):
        self.cells.fill(EMPTY_VALUE)

    def is_empty(self, row: int, col: int) -> bool:
        if not self.is_valid_position(row, col):
            return True
        return bool(self.cells[row, col] == EMPTY_VALUE)

    def color_at(self, row: int, col: int) -> int | None:
        if not self.is_valid_position(row, col):
            return None
        value = int(self.cells[row, col])
        return None if value == EMPTY_VALUE else value

    def swap(self, row1: int, col1: int, row2: int, col2: int):
        if not self.is_valid_position(row1, col1) or not self.is_valid_position(row2, col2):
            logger.warning(
                "Cannot swap (%d, %d) with (%d, %d): position outside the grid",
                row1, col1, row2, col2,
            )
            return
        self.cells[row1, col1], self.cells[row2, col2] = (
            self.cells[row2, col2],
            self.cells[row1, col1],
        )

    def occupied_count(self) -> int:
        return int(np.count_nonzero(self.cells != EMPTY_VALUE))

    def empty_count_in_column(self, col: int) -> int:
        if not 0 <= col < self.column_count:
            return 0
        return int(np.count_nonzero(self.cells[:, col] == EMPTY_VALUE))

    def empty_cells(self) -> list[Position]:
        rows, cols = np.nonzero(self.cells == EMPTY_VALUE)
        return list(zip(rows.tolist(), cols.tolist()))

    def __repr__(self):
        return f"Board({self.row_count}x{self.column_count}, occupied={self.occupied_count()})"
