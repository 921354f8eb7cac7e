"""Board construction from configuration."""

import random

from obstaclegame.game.block import Block, BlockKind
from obstaclegame.game.board import Board
from obstaclegame.game.game_config import GameConfig, StageConfig
from obstaclegame.game.obstacles import has_removable_group

MAX_ATTEMPTS = 10


def create_random_board(config: GameConfig, rng: random.Random, num_colors: int | None = None) -> Board:
    """A board filled with normal blocks of random palette colors."""
    colors = config.palette[: num_colors or config.num_colors]
    board = Board(config.width, config.height)
    for x, y in board.positions():
        board.place(x, y, Block(BlockKind.NORMAL, rng.choice(colors)))
    return board


def _place_obstacles(board: Board, stage: StageConfig, colors: tuple[str, ...], rng: random.Random):
    for obstacle in stage.obstacles:
        color = None
        if obstacle.kind.has_color:
            color = obstacle.color or rng.choice(colors)
        board.place(
            obstacle.x,
            obstacle.y,
            Block(obstacle.kind, color, threshold=obstacle.threshold),
        )


def create_stage_board(config: GameConfig, stage: StageConfig, seed: int | None = None) -> Board:
    """
    Lay out a stage: obstacles at their configured cells, random normal blocks elsewhere.

    Layouts without a single removable group are re-rolled a few times; the
    last attempt is used as is.
    """
    stage.validate(config)
    rng = random.Random(seed)
    colors = config.palette[: stage.num_colors]

    board = None
    for _ in range(MAX_ATTEMPTS):
        board = create_random_board(config, rng, stage.num_colors)
        _place_obstacles(board, stage, colors, rng)
        if has_removable_group(board):
            break
    return board
