"""
LargestGroupBot implementation for benchmarking.

Greedily selects the tap that removes the most cells, which is also the
tap with the highest immediate score.
"""

from obstaclegame.agents.benchmark_bot_base import BenchmarkBotBase
from obstaclegame.agents.bot_utils import find_valid_moves
from obstaclegame.game.block import Position
from obstaclegame.game.board import Board
from obstaclegame.game.game import tap


class LargestGroupBot(BenchmarkBotBase):
    """
    Bot that always selects the biggest removal.

    Ties go to the first move in row-major order.
    """

    name = "LargestGroupBot"

    def select_action(self, board: Board) -> Position | None:
        valid_moves = find_valid_moves(board)

        if not valid_moves:
            return None

        best_move = None
        best_removed = 0

        for x, y in valid_moves:
            removed = len(tap(board, x, y).removed)
            if removed > best_removed:
                best_removed = removed
                best_move = (x, y)

        return best_move
