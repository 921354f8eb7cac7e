"""
RandomBot implementation for benchmarking.

Selects random valid moves from available options, providing a baseline
for evaluating other bots' performance.
"""

import hashlib
import random

from obstaclegame.agents.benchmark_bot_base import BenchmarkBotBase
from obstaclegame.agents.bot_utils import find_valid_moves
from obstaclegame.game.block import Position
from obstaclegame.game.board import Board


def _board_key(board: Board) -> bytes:
    cells = []
    for row in board.cells:
        cells.append(
            [(b.kind.value, b.color, b.threshold) if b is not None else None for b in row]
        )
    return str(cells).encode("utf-8")


class RandomBot(BenchmarkBotBase):
    """
    Bot that randomly selects from available valid moves.

    Picks the same move for the same board, whatever came before.
    """

    name = "RandomBot"

    def __init__(self, seed: int = 42):
        self.seed = seed
        self.rng = random.Random(seed)

    def select_action(self, board: Board) -> Position | None:
        valid_moves = find_valid_moves(board)

        if not valid_moves:
            return None

        stable_hash = int(hashlib.md5(_board_key(board)).hexdigest(), 16)
        self.rng.seed(stable_hash + self.seed)

        return self.rng.choice(valid_moves)
