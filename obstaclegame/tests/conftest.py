"""
Shared test utilities for obstaclegame tests.

Boards are written as rows of whitespace-separated tokens, top row first:

    .      empty cell
    R      normal block (color initial, see COLOR_CODES)
    R1 R2  ice level 1 / level 2
    R+3    counter block removed in groups of at least 3
    R-3    counter block removed in groups of at most 3
    R*+3   ice-wrapped counter (R*-3 for the at-most variant)
    #      rock
    S      steel (anchor)
"""

import re

import numpy as np

from obstaclegame.game.block import Block, BlockKind
from obstaclegame.game.board import Board
from obstaclegame.game.game_config import GameConfig

COLOR_CODES = {
    "B": "blue",
    "A": "aqua",
    "G": "green",
    "R": "red",
    "Y": "yellow",
    "W": "white",
}
COLOR_LETTERS = {color: letter for letter, color in COLOR_CODES.items()}

TOKEN = re.compile(r"^([BAGRYW])(\*)?(?:([12])|([+-])(\d+))?$")

KIND_SUFFIX = {
    BlockKind.COUNTER_AT_LEAST: "+",
    BlockKind.COUNTER_AT_MOST: "-",
    BlockKind.ICE_COUNTER_AT_LEAST: "*+",
    BlockKind.ICE_COUNTER_AT_MOST: "*-",
}

TEST_BOARD_CONFIGS = {
    "empty_2x2": [". .", ". ."],
    "single_color_2x2": ["R R", "R R"],
    "checkerboard_2x2": ["R B", "B R"],
    "mixed_3x3": ["R R B", "B R B", "B B R"],
    "singles_only": ["R B G", "B G R", "G R B"],
    "winning_scenario": ["R R", "R ."],
    "ice_row": ["R R1 R2", "B B B"],
    "anchored_column": ["R", "S", ".", "B"],
}


def parse_token(token: str, x: int, y: int) -> Block | None:
    if token == ".":
        return None
    if token == "#":
        return Block(BlockKind.ROCK, None, x, y)
    if token == "S":
        return Block(BlockKind.ANCHOR, None, x, y)

    match = TOKEN.match(token)
    if match is None:
        raise ValueError(f"Bad board token {token!r}")
    letter, wrapped, ice_level, sign, threshold = match.groups()
    color = COLOR_CODES[letter]

    if ice_level:
        kind = BlockKind.ICE_LV1 if ice_level == "1" else BlockKind.ICE_LV2
        return Block(kind, color, x, y)
    if sign:
        if sign == "+":
            kind = BlockKind.ICE_COUNTER_AT_LEAST if wrapped else BlockKind.COUNTER_AT_LEAST
        else:
            kind = BlockKind.ICE_COUNTER_AT_MOST if wrapped else BlockKind.COUNTER_AT_MOST
        return Block(kind, color, x, y, threshold=int(threshold))
    return Block(BlockKind.NORMAL, color, x, y)


def parse_board(rows: list[str]) -> Board:
    """Build a board from text rows."""
    grid = [row.split() for row in rows]
    board = Board(len(grid[0]), len(grid))
    for y, row in enumerate(grid):
        for x, token in enumerate(row):
            board.place(x, y, parse_token(token, x, y))
    return board


def render_token(block: Block | None) -> str:
    if block is None:
        return "."
    if block.kind is BlockKind.ROCK:
        return "#"
    if block.kind is BlockKind.ANCHOR:
        return "S"

    letter = COLOR_LETTERS[block.color]
    if block.kind is BlockKind.ICE_LV1:
        return letter + "1"
    if block.kind is BlockKind.ICE_LV2:
        return letter + "2"
    if block.kind in KIND_SUFFIX:
        return f"{letter}{KIND_SUFFIX[block.kind]}{block.threshold}"
    return letter


def render_board(board: Board) -> list[str]:
    """Inverse of parse_board, for readable assertions."""
    return [" ".join(render_token(block) for block in row) for row in board.cells]


def config_for(board: Board, num_colors: int = 6) -> GameConfig:
    return GameConfig(width=board.width, height=board.height, num_colors=num_colors)


def assert_positions_consistent(board: Board):
    """Every block's stored position matches the cell holding it."""
    for (x, y), block in board.occupied():
        assert (block.x, block.y) == (x, y), f"{block} stored at ({x}, {y})"


def assert_valid_observation(obs: np.ndarray, expected_shape: tuple[int, ...]):
    """Assert that an observation has the correct shape and properties"""
    assert isinstance(obs, np.ndarray), "Observation must be numpy array"
    assert (
        obs.shape == expected_shape
    ), f"Observation shape {obs.shape} != expected {expected_shape}"
    assert obs.dtype == np.float32, f"Observation dtype {obs.dtype} != float32"
    assert np.all(
        (obs == 0) | (obs == 1)
    ), "Observation should be one-hot encoded (only 0s and 1s)"


def assert_valid_step_return(step_return: tuple[object, ...]):
    """Assert that a step return follows the (obs, reward, done, info) pattern"""
    assert len(step_return) == 4, "Step return should be (obs, reward, done, info)"
    obs, reward, done, info = step_return
    assert isinstance(obs, np.ndarray), "Observation should be numpy array"
    assert isinstance(reward, (int, float)), "Reward should be numeric"
    assert isinstance(done, bool), "Done should be boolean"
    assert isinstance(info, dict), "Info should be dictionary"


