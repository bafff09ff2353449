"""
Flood-fill search for connected groups of same-colored blocks.

Visited cells are tracked with a generation stamp per cell: every query bumps
the generation, so a cell counts as visited only if its stamp equals the
current generation. Nothing has to be cleared between queries.
"""

from collections import deque

import numpy as np

from collapseblast.game.board import EMPTY_VALUE, Board, Position

Group = list[Position]

# up, down, left, right
DIRECTIONS = ((1, 0), (-1, 0), (0, -1), (0, 1))


class GroupFinder:

    def __init__(self, board: Board):
        self.board = board
        self._stamps = np.zeros((board.row_count, board.column_count), dtype=np.int64)
        self._generation = 0
        self._queue: deque[Position] = deque()

    def find_group(self, row: int, col: int) -> Group:
        """
        Return every position of the group containing (row, col).

        Returns an empty list when the start cell is empty or outside the grid.
        """
        if self.board.is_empty(row, col):
            return []
        self._next_generation()
        group: Group = []
        self._flood(row, col, group)
        return group

    def group_size(self, row: int, col: int) -> int:
        """Size of the group at (row, col) without materializing its positions"""
        if self.board.is_empty(row, col):
            return 0
        self._next_generation()
        return self._flood(row, col)

    def find_all_groups(self) -> list[Group]:
        """
        Partition the occupied cells into maximal groups.

        Singletons are discovered but not reported: only groups of size >= 2
        are returned, in row-major order of their first discovered cell.
        """
        self._next_generation()
        groups = []
        for row in range(self.board.row_count):
            for col in range(self.board.column_count):
                if self._is_unvisited_block(row, col):
                    group: Group = []
                    self._flood(row, col, group)
                    if len(group) >= 2:
                        groups.append(group)
        return groups

    def has_valid_group(self) -> bool:
        """Same scan as find_all_groups, but stops at the first group of size >= 2"""
        self._next_generation()
        for row in range(self.board.row_count):
            for col in range(self.board.column_count):
                if self._is_unvisited_block(row, col) and self._flood(row, col) >= 2:
                    return True
        return False

    def _next_generation(self):
        self._generation += 1

    def _is_unvisited_block(self, row: int, col: int) -> bool:
        return (
            self._stamps[row, col] != self._generation
            and self.board.cells[row, col] != EMPTY_VALUE
        )

    def _flood(self, row: int, col: int, group: Group | None = None) -> int:
        """BFS from (row, col) under the current generation. Returns the component size."""
        cells = self.board.cells
        stamps = self._stamps
        generation = self._generation
        num_rows, num_cols = self.board.row_count, self.board.column_count
        target_color = cells[row, col]

        queue = self._queue
        queue.clear()
        queue.append((row, col))
        stamps[row, col] = generation
        size = 0

        while queue:
            r, c = queue.popleft()
            size += 1
            if group is not None:
                group.append((r, c))

            for dr, dc in DIRECTIONS:
                nr, nc = r + dr, c + dc
                if (
                    0 <= nr < num_rows
                    and 0 <= nc < num_cols
                    and stamps[nr, nc] != generation
                    and cells[nr, nc] == target_color
                ):
                    stamps[nr, nc] = generation
                    queue.append((nr, nc))

        return size
