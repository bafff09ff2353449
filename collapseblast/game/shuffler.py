"""Deadlock-resolving shuffle that guarantees at least one valid move afterwards."""

import logging
import random
from dataclasses import dataclass

from collapseblast.game.board import EMPTY_VALUE, Board
from collapseblast.game.deadlock import DeadlockDetector

logger = logging.getLogger(__name__)

MAX_GUARANTEE_ATTEMPTS = 10

# right, up, left, down (row 0 is the bottom row)
PAIR_DIRECTIONS = ((0, 1), (1, 0), (0, -1), (-1, 0))


@dataclass
class ShuffleResult:
    """Returned by Shuffler.shuffle once the board has been rearranged"""

    permuted: bool = False
    forced_pairs: int = 0
    guarantee_exceeded: bool = False
    solvable: bool = False


class Shuffler:

    def __init__(self, board: Board, deadlock_detector: DeadlockDetector, rng: random.Random):
        self.board = board
        self.deadlock_detector = deadlock_detector
        self.rng = rng
        self._colors: list[int] = []

    def shuffle(self) -> ShuffleResult:
        """
        Permute the colors of the occupied cells and make sure a move exists.

        The occupancy pattern is kept, only colors move. If the permutation
        leaves the board deadlocked, one neighbour of an occupied cell is
        recolored to form a pair, retried up to MAX_GUARANTEE_ATTEMPTS times.
        """
        result = ShuffleResult()
        positions = self._collect_colors()

        if len(positions) < 2:
            logger.warning("Not enough blocks to shuffle (%d occupied)", len(positions))
            result.solvable = not self.deadlock_detector.fast_check()
            return result

        self._fisher_yates(self._colors)
        cells = self.board.cells
        for (row, col), color in zip(positions, self._colors):
            cells[row, col] = color
        result.permuted = True

        attempts = 0
        while self.deadlock_detector.fast_check():
            if attempts >= MAX_GUARANTEE_ATTEMPTS:
                logger.warning(
                    "Could not guarantee a valid move after %d attempts", MAX_GUARANTEE_ATTEMPTS
                )
                result.guarantee_exceeded = True
                break
            if self._create_valid_pair():
                result.forced_pairs += 1
            attempts += 1

        result.solvable = not result.guarantee_exceeded
        logger.info(
            "Shuffled %d blocks, forced %d pair(s)", len(positions), result.forced_pairs
        )
        return result

    def _collect_colors(self) -> list[tuple[int, int]]:
        """Fill the color scratch list row-major and return the matching positions"""
        self._colors.clear()
        positions = []
        cells = self.board.cells
        for row in range(self.board.row_count):
            for col in range(self.board.column_count):
                value = int(cells[row, col])
                if value != EMPTY_VALUE:
                    self._colors.append(value)
                    positions.append((row, col))
        return positions

    def _fisher_yates(self, values: list[int]):
        for i in range(len(values) - 1, 0, -1):
            j = self.rng.randint(0, i)
            values[i], values[j] = values[j], values[i]

    def _create_valid_pair(self) -> bool:
        """
        Scan the grid from a random offset and recolor the first occupied
        neighbour of the first block that has one. Returns False if no block
        has an occupied neighbour.
        """
        num_rows, num_cols = self.board.row_count, self.board.column_count
        total = num_rows * num_cols
        cells = self.board.cells
        start = self.rng.randrange(total)

        for step in range(total):
            row, col = divmod((start + step) % total, num_cols)
            color = cells[row, col]
            if color == EMPTY_VALUE:
                continue

            for dr, dc in PAIR_DIRECTIONS:
                nr, nc = row + dr, col + dc
                if 0 <= nr < num_rows and 0 <= nc < num_cols and cells[nr, nc] != EMPTY_VALUE:
                    cells[nr, nc] = color
                    logger.debug("Recolored (%d, %d) to match (%d, %d)", nr, nc, row, col)
                    return True

        return False
