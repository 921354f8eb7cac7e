import random
from dataclasses import dataclass, field

from obstaclegame.game.block import Position
from obstaclegame.game.board import Board
from obstaclegame.game.connectivity import find_group, neighbours
from obstaclegame.game.game_config import GameConfig, GameFactory, StageConfig
from obstaclegame.game.items import ItemEffectResult, ItemType, apply_item
from obstaclegame.game.obstacles import (
    apply_obstacle_transitions,
    group_is_removable,
    has_removable_group,
    remove_eligible,
)
from obstaclegame.game.physics import Movement, settle
from obstaclegame.game.scoring import ScoreTracker, score
from obstaclegame.game.stage import create_random_board, create_stage_board


@dataclass
class TapResult:
    board: Board
    removed: list[Position] = field(default_factory=list)
    transitioned: list[Position] = field(default_factory=list)
    score: int = 0
    movements: list[Movement] = field(default_factory=list)

    @property
    def changed_board(self) -> bool:
        return bool(self.removed or self.transitioned)


def tap(board: Board, x: int, y: int) -> TapResult:
    """
    Resolve one tap without touching `board`.

    Group search, removability gate, obstacle transitions, removal, gravity,
    compaction and scoring, in that order. A tap on an empty cell or a
    single block returns the board unchanged with a score of 0. Cascades are
    left to the caller: this is one step.
    """
    group = find_group(board, x, y)
    if not group_is_removable(board, group):
        return TapResult(board.copy())

    transitioned = apply_obstacle_transitions(board, group)
    removed_board, removed = remove_eligible(transitioned)
    settled, movements = settle(removed_board)
    return TapResult(settled, removed, transitioned.changed, score(len(removed)), movements)


class Game:

    def __init__(
        self,
        config: GameConfig | None = None,
        stage: StageConfig | None = None,
        seed: int | None = None,
    ):
        if config is None:
            config = GameFactory.default()
        self.config = config
        self.stage = stage
        self.rng = random.Random(seed)
        self.scores = ScoreTracker()
        self.board = self.create_board(seed=seed)
        self.left = self.board.count()

    def create_board(self, seed: int | None = None) -> Board:
        """Create a new board for the stage, or a plain random one, with optional seed for reproducibility."""
        if self.stage is not None:
            return create_stage_board(self.config, self.stage, seed=seed)
        return create_random_board(self.config, random.Random(seed))

    def get_board(self) -> Board:
        """Return a copy of the board to prevent external modifications"""
        return self.board.copy()

    def set_board(self, board: Board):
        # Check for valid dimensions
        if (board.width, board.height) != (self.config.width, self.config.height):
            raise ValueError(
                f"Board size {board.width}x{board.height} does not match expected "
                f"{self.config.width}x{self.config.height}"
            )

        # Check that all colors come from the palette
        for (x, y), block in board.occupied():
            if block.kind.has_color and block.color not in self.config.palette:
                raise ValueError(
                    f"Invalid color {block.color!r} at ({x}, {y}), must be one of {self.config.palette}"
                )
            if (block.x, block.y) != (x, y):
                raise ValueError(f"Block at ({x}, {y}) claims position ({block.x}, {block.y})")

        # Settle and reset internal state
        self.board = settle(board)[0]
        self.left = self.board.count()
        self.scores.reset()

    @property
    def score(self) -> int:
        return self.scores.total

    def move(self, x: int, y: int) -> TapResult:
        """Tap the cell at column x, row y and adopt the resulting board."""
        result = tap(self.board, x, y)
        if result.changed_board:
            self.board = result.board
            self.left = self.board.count()
            result.score = self.scores.add(len(result.removed)) if result.removed else 0
        return result

    def use_item(self, item: ItemType, *args, **kwargs) -> ItemEffectResult:
        """Apply an item; on success adopt its board and settle it if blocks were cleared."""
        if item is ItemType.SHUFFLE and not args:
            kwargs.setdefault("rng", self.rng)
        if item in (ItemType.RECOLOR_ONE, ItemType.RECOLOR_AREA):
            kwargs.setdefault("palette", self.config.palette)

        result = apply_item(self.board, item, *args, **kwargs)
        if not result.success:
            return result

        if result.booster:
            self.scores.activate_booster()
        if result.board is not None:
            board = result.board
            if result.cleared_cells:
                board, result.movements = settle(board)
                result.board = board
            self.board = board
            self.left = self.board.count()
        return result

    def has_moves(self) -> bool:
        return has_removable_group(self.board)

    def all_cleared(self) -> bool:
        return self.left == 0

    def stage_cleared(self) -> bool:
        """Whether a stage is being played and its target score has been reached."""
        return self.stage is not None and self.score >= self.stage.target_score

    def done(self) -> bool:
        return not self.has_moves()

    def get_singles(self) -> int:
        single_counter = 0
        for (x, y), block in self.board.occupied():
            if not block.kind.has_color:
                continue
            found = False
            for nx, ny in neighbours(self.board, x, y):
                neighbour = self.board.cells[ny][nx]
                if neighbour is not None and neighbour.matches(block.color):
                    found = True
            if not found:
                single_counter += 1
        return single_counter
