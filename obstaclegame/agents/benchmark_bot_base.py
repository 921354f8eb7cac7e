"""
Base interface for benchmark bots.

Bots only pick the next tap; they never mutate the board they are shown.
"""

from abc import ABC, abstractmethod

from obstaclegame.game.block import Position
from obstaclegame.game.board import Board


class BenchmarkBotBase(ABC):
    """Abstract base class for bots that play the game deterministically."""

    name: str = "BenchmarkBot"

    @abstractmethod
    def select_action(self, board: Board) -> Position | None:
        """
        Select the next tap given the current board state.

        Args:
            board: Current board

        Returns:
            (x, y) position to tap, or None if no tap removes anything
        """
        pass
