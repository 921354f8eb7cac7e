"""Data classes for benchmark system."""

from dataclasses import dataclass

from obstaclegame.game.board import Board
from obstaclegame.game.game_config import GameConfig, StageConfig


@dataclass
class GameSnapshot:
    """Initial state of one benchmark game"""

    board: Board
    config: GameConfig
    seed: int
    game_id: int
    stage: StageConfig | None = None


@dataclass
class BotPerformance:
    """Performance metrics for a single bot on a single game"""

    bot_name: str
    game_id: int
    blocks_cleared: int
    singles_remaining: int
    moves_made: int
    score: int
    completed: bool
    stage_cleared: bool = False


@dataclass
class BenchmarkData:
    """Complete benchmark dataset including games and results"""

    games: list[GameSnapshot]
    results: dict[str, list[BotPerformance]]
    config: GameConfig
    num_games: int
    base_seed: int
    stage: StageConfig | None = None
