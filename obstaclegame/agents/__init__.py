"""
Benchmark bots for obstaclegame.

Bots are callers of the rule engine: they inspect a board and pick the
next tap, leaving cascades and bookkeeping to the game.
"""

from .benchmark_bot_base import BenchmarkBotBase
from .random_bot import RandomBot
from .largest_group_bot import LargestGroupBot
from .greedy_singles_bot import GreedySinglesBot

__all__ = [
    'BenchmarkBotBase',
    'RandomBot',
    'LargestGroupBot',
    'GreedySinglesBot',
]
