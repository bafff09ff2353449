"""
Benchmark bots for collapseblast.

Bots pick a cell to select on an engine and are used to drive soak
simulations of the engine.
"""

from .benchmark_bot_base import BenchmarkBotBase
from .random_bot import RandomBot
from .largest_group_bot import LargestGroupBot

__all__ = [
    'BenchmarkBotBase',
    'RandomBot',
    'LargestGroupBot',
]
