"""Removal, gravity and refill: the three board mutations that make up a move."""

import logging
import random
from collections.abc import Iterable
from dataclasses import dataclass, field

from collapseblast.game.board import EMPTY_VALUE, Board, Position
from collapseblast.game.errors import InvalidMoveError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Fall:
    """A block that moved down within its column during gravity"""

    column: int
    from_row: int
    to_row: int

    @property
    def distance(self) -> int:
        return self.from_row - self.to_row


@dataclass(frozen=True)
class Spawn:
    """A freshly created block. Rank 1 is spawned closest to the top of the grid."""

    row: int
    column: int
    color: int
    rank: int


@dataclass
class GravityResult:
    falls: list[Fall] = field(default_factory=list)
    max_fall_distance: int = 0


@dataclass
class RefillResult:
    spawns: list[Spawn] = field(default_factory=list)
    max_spawn_rank: int = 0


class MoveApplier:

    def __init__(self, board: Board, num_colors: int, rng: random.Random):
        if num_colors < 1:
            raise ValueError("Must have at least 1 color")
        self.board = board
        self.num_colors = num_colors
        self.rng = rng

    @staticmethod
    def affected_columns(group: Iterable[Position]) -> set[int]:
        return {col for _, col in group}

    def remove(self, group: list[Position]) -> set[int]:
        """Clear every position of the group and return the columns it touched"""
        if group is None or len(group) < 2:
            raise InvalidMoveError(
                f"A group needs at least 2 blocks to be removed, got {0 if group is None else len(group)}"
            )

        for row, col in group:
            self.board.clear(row, col)

        columns = self.affected_columns(group)
        logger.debug("Removed %d blocks from columns %s", len(group), sorted(columns))
        return columns

    def gravity(self, columns: Iterable[int] | None = None) -> GravityResult:
        """
        Compact every given column toward row 0, keeping the vertical order of
        its blocks. All columns are processed when columns is None.
        """
        result = GravityResult()
        for col in self._columns_to_process(columns):
            self._compact_column(col, result)
        return result

    def _compact_column(self, col: int, result: GravityResult):
        cells = self.board.cells
        write_row = 0

        for read_row in range(self.board.row_count):
            if cells[read_row, col] == EMPTY_VALUE:
                continue
            if read_row != write_row:
                cells[write_row, col] = cells[read_row, col]
                cells[read_row, col] = EMPTY_VALUE
                fall = Fall(column=col, from_row=read_row, to_row=write_row)
                result.falls.append(fall)
                result.max_fall_distance = max(result.max_fall_distance, fall.distance)
            write_row += 1

    def refill(self, columns: Iterable[int] | None = None) -> RefillResult:
        """
        Give every empty cell of the given columns a random color.

        Spawn ranks count up from 1 per column in fill order (ascending row),
        so callers can stack new blocks above the grid before dropping them in.
        """
        result = RefillResult()
        cells = self.board.cells

        for col in self._columns_to_process(columns):
            rank = 0
            for row in range(self.board.row_count):
                if cells[row, col] != EMPTY_VALUE:
                    continue
                rank += 1
                color = self.rng.randrange(self.num_colors)
                cells[row, col] = color
                result.spawns.append(Spawn(row=row, column=col, color=color, rank=rank))
            result.max_spawn_rank = max(result.max_spawn_rank, rank)

        return result

    def fill_all(self) -> RefillResult:
        """Initial fill of a fresh board"""
        return self.refill()

    def _columns_to_process(self, columns: Iterable[int] | None) -> list[int]:
        if columns is None:
            return list(range(self.board.column_count))

        valid = []
        for col in sorted(set(columns)):
            if 0 <= col < self.board.column_count:
                valid.append(col)
            else:
                logger.warning("Ignoring column %d outside the grid", col)
        return valid
