"""
GreedySinglesBot implementation for benchmarking.

Selects moves that minimize the number of isolated single blocks on the board,
providing a strategic benchmark focused on board connectivity.
"""

from obstaclegame.agents.benchmark_bot_base import BenchmarkBotBase
from obstaclegame.agents.bot_utils import count_singles_after_tap, find_valid_moves
from obstaclegame.game.block import Position
from obstaclegame.game.board import Board


class GreedySinglesBot(BenchmarkBotBase):
    """
    Bot that greedily minimizes the number of single isolated blocks.

    Evaluates each possible move by predicting the resulting singles count
    and selects the move that produces the fewest isolated blocks.
    """

    name = "GreedySinglesBot"

    def select_action(self, board: Board) -> Position | None:
        valid_moves = find_valid_moves(board)

        if not valid_moves:
            return None

        best_moves = []
        best_singles_count = float("inf")

        for x, y in valid_moves:
            singles_after = count_singles_after_tap(board, x, y)

            if singles_after < best_singles_count:
                best_singles_count = singles_after
                best_moves = [(x, y)]
            elif singles_after == best_singles_count:
                best_moves.append((x, y))

        return self._break_ties(best_moves)

    def _break_ties(self, tied_moves: list[Position]) -> Position:
        """Deterministic: the move nearest the top, then the left."""
        return min(tied_moves, key=lambda p: (p[1], p[0]))
