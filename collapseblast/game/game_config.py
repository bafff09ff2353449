"""Game configuration system for collapse sessions."""

import os
from dataclasses import dataclass
from enum import IntEnum

from dotenv import load_dotenv


class DisplayTier(IntEnum):
    """Display tier of a block, derived from the size of the group it belongs to"""

    DEFAULT = 0
    TIER1 = 1
    TIER2 = 2
    TIER3 = 3


@dataclass(frozen=True)
class GameConfig:
    """Board dimensions, number of colors and the three group size thresholds.

    Groups of size <= threshold_a are shown with the default icon, sizes above
    threshold_a, threshold_b and threshold_c map to tier 1, 2 and 3.
    """

    num_rows: int = 10
    num_cols: int = 12
    num_colors: int = 6
    threshold_a: int = 4
    threshold_b: int = 7
    threshold_c: int = 9

    @property
    def total_cells(self) -> int:
        return self.num_rows * self.num_cols

    @property
    def thresholds(self) -> tuple[int, int, int]:
        return (self.threshold_a, self.threshold_b, self.threshold_c)

    def tier_for_group_size(self, group_size: int) -> DisplayTier:
        if group_size > self.threshold_c:
            return DisplayTier.TIER3
        if group_size > self.threshold_b:
            return DisplayTier.TIER2
        if group_size > self.threshold_a:
            return DisplayTier.TIER1
        return DisplayTier.DEFAULT

    def validate(self):
        if self.num_rows <= 0 or self.num_cols <= 0:
            raise ValueError("Board dimensions must be positive")
        if self.num_colors < 1:
            raise ValueError("Must have at least 1 color")
        if not (self.threshold_a < self.threshold_b < self.threshold_c):
            raise ValueError(
                f"Thresholds must be strictly increasing, got {self.thresholds}"
            )

    @classmethod
    def from_env(cls) -> "GameConfig":
        """Create config from environment variables or .env file."""
        load_dotenv()
        defaults = cls()
        config = cls(
            num_rows=int(os.getenv("COLLAPSE_ROWS", defaults.num_rows)),
            num_cols=int(os.getenv("COLLAPSE_COLS", defaults.num_cols)),
            num_colors=int(os.getenv("COLLAPSE_COLORS", defaults.num_colors)),
            threshold_a=int(os.getenv("COLLAPSE_THRESHOLD_A", defaults.threshold_a)),
            threshold_b=int(os.getenv("COLLAPSE_THRESHOLD_B", defaults.threshold_b)),
            threshold_c=int(os.getenv("COLLAPSE_THRESHOLD_C", defaults.threshold_c)),
        )
        config.validate()
        return config


class GameFactory:

    @staticmethod
    def small() -> GameConfig:
        config = GameConfig(num_rows=5, num_cols=5, num_colors=3)
        config.validate()
        return config

    @staticmethod
    def medium() -> GameConfig:
        config = GameConfig(num_rows=8, num_cols=8, num_colors=4)
        config.validate()
        return config

    @staticmethod
    def large() -> GameConfig:
        config = GameConfig(num_rows=10, num_cols=12, num_colors=6)
        config.validate()
        return config

    @staticmethod
    def default() -> GameConfig:
        return GameFactory.large()

    @staticmethod
    def custom(
        num_rows: int,
        num_cols: int,
        num_colors: int,
        thresholds: tuple[int, int, int] = (4, 7, 9),
    ) -> GameConfig:
        threshold_a, threshold_b, threshold_c = thresholds
        config = GameConfig(
            num_rows=num_rows,
            num_cols=num_cols,
            num_colors=num_colors,
            threshold_a=threshold_a,
            threshold_b=threshold_b,
            threshold_c=threshold_c,
        )
        config.validate()
        return config
