"""Rule engine: board model, group search, obstacles, physics, scoring and items."""

from obstaclegame.game.block import Block, BlockKind, Position
from obstaclegame.game.board import Board
from obstaclegame.game.connectivity import find_group
from obstaclegame.game.game import Game, TapResult, tap
from obstaclegame.game.game_config import GameConfig, GameFactory, ObstacleConfig, StageConfig
from obstaclegame.game.items import ItemEffectResult, ItemType, apply_item, preview_item
from obstaclegame.game.obstacles import (
    apply_obstacle_transitions,
    group_is_removable,
    is_eligible,
    remove_eligible,
)
from obstaclegame.game.physics import Movement, apply_gravity, apply_horizontal_slide, settle
from obstaclegame.game.scoring import ScoreTracker, score

__all__ = [
    "Block",
    "BlockKind",
    "Position",
    "Board",
    "find_group",
    "Game",
    "TapResult",
    "tap",
    "GameConfig",
    "GameFactory",
    "ObstacleConfig",
    "StageConfig",
    "ItemEffectResult",
    "ItemType",
    "apply_item",
    "preview_item",
    "apply_obstacle_transitions",
    "group_is_removable",
    "is_eligible",
    "remove_eligible",
    "Movement",
    "apply_gravity",
    "apply_horizontal_slide",
    "settle",
    "ScoreTracker",
    "score",
]
