"""
Base interface for benchmark bots.

Provides a focused interface for bots that select cells on a running
engine without any knowledge of how the board is presented.
"""

from abc import ABC, abstractmethod

from collapseblast.game.engine import Engine


class BenchmarkBotBase(ABC):
    """
    Abstract base class for bots that play a collapse session.
    """

    name = "BenchmarkBot"

    @abstractmethod
    def select_action(self, engine: Engine) -> tuple[int, int] | None:
        """
        Select the next cell to select given the current engine state.

        Args:
            engine: Running engine; bots only read from it

        Returns:
            (row, col) tuple for the cell to select, or None if no valid moves
        """
        pass
