from collapseblast.game.board import EMPTY_VALUE, Board
from collapseblast.game.group_finder import GroupFinder


class DeadlockDetector:
    """Tells whether the board has no blastable group left"""

    def __init__(self, board: Board, group_finder: GroupFinder):
        self.board = board
        self.group_finder = group_finder

    def fast_check(self) -> bool:
        """
        True if deadlocked.

        Compares every block with its right and upper neighbour only, which
        covers each adjacent pair exactly once. Any equal-colored pair is a
        valid move, so no group needs to be built.
        """
        cells = self.board.cells
        occupied = cells != EMPTY_VALUE

        horizontal = (cells[:, :-1] == cells[:, 1:]) & occupied[:, :-1]
        if horizontal.any():
            return False

        vertical = (cells[:-1, :] == cells[1:, :]) & occupied[:-1, :]
        return not bool(vertical.any())

    def exhaustive_check(self) -> bool:
        """True if deadlocked, decided by a full group search"""
        return not self.group_finder.has_valid_group()
