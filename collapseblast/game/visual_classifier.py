from collections.abc import Iterable

import numpy as np

from collapseblast.game.board import Board, Position
from collapseblast.game.game_config import DisplayTier, GameConfig
from collapseblast.game.group_finder import GroupFinder


class VisualClassifier:
    """Maps every block to the display tier of the group it belongs to."""

    def __init__(self, board: Board, group_finder: GroupFinder, config: GameConfig):
        self.board = board
        self.group_finder = group_finder
        self.config = config

    def classify(self) -> np.ndarray:
        """Tier per cell as a (rows, cols) array; singletons and empty cells are DEFAULT"""
        tiers = np.full(
            (self.board.row_count, self.board.column_count), DisplayTier.DEFAULT, dtype=np.int8
        )
        for group in self.group_finder.find_all_groups():
            tier = self.config.tier_for_group_size(len(group))
            for row, col in group:
                tiers[row, col] = tier
        return tiers

    def update_positions(self, tiers: np.ndarray, positions: Iterable[Position]):
        """Recompute tiers in place for the groups touching the given positions only"""
        processed = set()
        for row, col in positions:
            if (row, col) in processed or not self.board.is_valid_position(row, col):
                continue
            if self.board.is_empty(row, col):
                tiers[row, col] = DisplayTier.DEFAULT
                continue
            group = self.group_finder.find_group(row, col)
            tier = self.config.tier_for_group_size(len(group))
            for group_pos in group:
                tiers[group_pos] = tier
                processed.add(group_pos)
