"""
RandomBot implementation for collapse soak runs.

Selects random valid groups, providing a baseline driver for long
simulations of the engine.
"""

import random

from collapseblast.agents.benchmark_bot_base import BenchmarkBotBase
from collapseblast.game.engine import Engine


class RandomBot(BenchmarkBotBase):
    """
    Bot that randomly selects a cell from one of the valid groups.

    Supports seeded random generation for reproducible testing.
    """

    name = "RandomBot"

    def __init__(self, seed: int = 42):
        self.rng = random.Random(seed)

    def select_action(self, engine: Engine) -> tuple[int, int] | None:
        groups = engine.find_all_groups()

        if not groups:
            return None

        group = self.rng.choice(groups)
        return self.rng.choice(group)
