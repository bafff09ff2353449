"""
LargestGroupBot implementation for collapse soak runs.

Greedily selects the largest available group on each turn.
"""

from collapseblast.agents.benchmark_bot_base import BenchmarkBotBase
from collapseblast.game.engine import Engine


class LargestGroupBot(BenchmarkBotBase):
    """
    Bot that always selects the largest available group.
    """

    name = "LargestGroupBot"

    def select_action(self, engine: Engine) -> tuple[int, int] | None:
        """
        Select a cell of the largest group on the board.

        When multiple groups tie for largest size, selects the first one
        encountered (row-major order of discovery). The returned cell is the
        lowest, leftmost cell of that group.
        """
        groups = engine.find_all_groups()

        if not groups:
            return None

        best_group = None
        for group in groups:
            if best_group is None or len(group) > len(best_group):
                best_group = group

        return min(best_group)
