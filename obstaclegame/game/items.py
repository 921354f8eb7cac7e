"""
Item effects: direct board mutations triggered by consumable items.

Every effect works on a copy of the board and reports an `ItemEffectResult`.
Invalid targets never raise; they come back as a failed result whose
message can be shown to the player as is, and the input board is untouched.
Effects that delete blocks do not settle the board; run gravity and
compaction afterwards (``Game.use_item`` does).
"""

import random
from dataclasses import dataclass, field
from enum import Enum

from obstaclegame.game.block import Block, BlockKind, Position
from obstaclegame.game.board import Board
from obstaclegame.game.connectivity import find_group
from obstaclegame.game.physics import Movement


class ItemType(Enum):
    SWAP = "swap"
    RECOLOR_ONE = "changeOne"
    MICRO_CLEAR = "miniBomb"
    SHUFFLE = "shuffle"
    THAW_STEP = "meltingAgent"
    RECOLOR_AREA = "changeArea"
    COUNTER_RESET = "counterReset"
    AREA_BOMB = "bomb"
    COUNTER_PROMOTE = "adPlus"
    SCORE_BOOSTER = "scoreBooster"
    BREAK_ROCK = "hammer"
    BREAK_ANCHOR = "steelHammer"
    BREAK_ANY = "specialHammer"


@dataclass
class ItemEffectResult:
    success: bool
    message: str
    modified: list[Position] = field(default_factory=list)
    board: Board | None = None
    booster: bool = False
    movements: list[Movement] = field(default_factory=list)

    @property
    def cleared_cells(self) -> bool:
        """Whether the effect deleted blocks, so the board needs settling."""
        return self.success and self.board is not None and bool(self.modified) and any(
            self.board.get(x, y) is None for x, y in self.modified
        )


@dataclass
class ItemPreview:
    can_use: bool
    affected: list[Position]
    description: str


def _fail(message: str) -> ItemEffectResult:
    return ItemEffectResult(success=False, message=message)


def _target(board: Board, pos: Position) -> tuple[Block | None, ItemEffectResult | None]:
    """Look up the block an effect is aimed at, or the failure to report."""
    x, y = pos
    if not board.in_bounds(x, y):
        return None, _fail("Invalid position")
    block = board.get(x, y)
    if block is None:
        return None, _fail("There is no block there")
    return block, None


def _is_immovable(block: Block) -> bool:
    return block.kind in (BlockKind.ROCK, BlockKind.ANCHOR)


def swap(board: Board, pos1: Position, pos2: Position) -> ItemEffectResult:
    """Exchange two blocks."""
    first, failure = _target(board, pos1)
    if failure:
        return failure
    second, failure = _target(board, pos2)
    if failure:
        return failure
    if pos1 == pos2:
        return _fail("Pick two different blocks")
    if _is_immovable(first) or _is_immovable(second):
        return _fail("Rock and steel blocks cannot be swapped")

    new_board = board.copy()
    new_board.place(*pos1, second.copy())
    new_board.place(*pos2, first.copy())
    return ItemEffectResult(True, "Swapped the blocks", [pos1, pos2], new_board)


def _check_color(color: str, palette: tuple[str, ...] | None) -> ItemEffectResult | None:
    if not color:
        return _fail("Pick a color")
    if palette is not None and color not in palette:
        return _fail(f"{color} is not a color on this board")
    return None


def recolor_one(
    board: Board, pos: Position, color: str, palette: tuple[str, ...] | None = None
) -> ItemEffectResult:
    """Give a single block a new color."""
    block, failure = _target(board, pos)
    if failure:
        return failure
    if _is_immovable(block):
        return _fail("Rock and steel blocks cannot change color")
    failure = _check_color(color, palette)
    if failure:
        return failure

    new_board = board.copy()
    new_board.place(*pos, block.copy(color=color))
    return ItemEffectResult(True, "Changed the block color", [pos], new_board)


def recolor_area(
    board: Board, pos: Position, color: str, palette: tuple[str, ...] | None = None
) -> ItemEffectResult:
    """Give the whole same-color group at `pos` a new color."""
    block, failure = _target(board, pos)
    if failure:
        return failure
    if _is_immovable(block):
        return _fail("Rock and steel blocks cannot change color")
    failure = _check_color(color, palette)
    if failure:
        return failure

    group = sorted(find_group(board, *pos), key=lambda p: (p[1], p[0]))
    new_board = board.copy()
    for x, y in group:
        new_board.place(x, y, board.cells[y][x].copy(color=color))
    return ItemEffectResult(True, f"Changed the color of {len(group)} blocks", group, new_board)


def shuffle(board: Board, rng: random.Random | None = None) -> ItemEffectResult:
    """Permute the colors of all normal blocks; nothing else moves."""
    if rng is None:
        rng = random.Random()

    positions = [pos for pos, block in board.occupied() if block.kind is BlockKind.NORMAL]
    colors = [board.cells[y][x].color for x, y in positions]
    rng.shuffle(colors)

    new_board = board.copy()
    for (x, y), color in zip(positions, colors):
        new_board.place(x, y, new_board.cells[y][x].copy(color=color))
    return ItemEffectResult(True, "Shuffled the blocks", positions, new_board)


def micro_clear(board: Board, pos: Position) -> ItemEffectResult:
    """Delete one normal block."""
    block, failure = _target(board, pos)
    if failure:
        return failure
    if block.kind is not BlockKind.NORMAL:
        return _fail("Only normal blocks can be cleared")

    new_board = board.copy()
    new_board.clear(*pos)
    return ItemEffectResult(True, "Cleared the block", [pos], new_board)


def area_bomb(board: Board, center: Position, radius: int = 1) -> ItemEffectResult:
    """
    Delete every block except anchors in the square of the given radius around `center`.

    The center may be empty or even off the board; the square is clipped to
    the board and the effect succeeds with however many blocks it cleared.
    """
    if radius < 0:
        return _fail("Blast radius cannot be negative")

    cx, cy = center
    new_board = board.copy()
    cleared = []
    for y in range(max(0, cy - radius), min(board.height, cy + radius + 1)):
        for x in range(max(0, cx - radius), min(board.width, cx + radius + 1)):
            block = new_board.get(x, y)
            if block is None or block.kind is BlockKind.ANCHOR:
                continue
            new_board.clear(x, y)
            cleared.append((x, y))
    return ItemEffectResult(True, f"Cleared {len(cleared)} blocks", cleared, new_board)


def radius_bomb(board: Board, center: Position, radius: int) -> ItemEffectResult:
    return area_bomb(board, center, radius)


def _break(board: Board, pos: Position, kind: BlockKind | None, refusal: str = "") -> ItemEffectResult:
    block, failure = _target(board, pos)
    if failure:
        return failure
    if kind is not None and block.kind is not kind:
        return _fail(refusal)

    new_board = board.copy()
    new_board.clear(*pos)
    return ItemEffectResult(True, "Destroyed the block", [pos], new_board)


def break_rock(board: Board, pos: Position) -> ItemEffectResult:
    return _break(board, pos, BlockKind.ROCK, "This item only works on rock blocks")


def break_anchor(board: Board, pos: Position) -> ItemEffectResult:
    return _break(board, pos, BlockKind.ANCHOR, "This item only works on steel blocks")


def break_any(board: Board, pos: Position) -> ItemEffectResult:
    return _break(board, pos, None)


def _convert(
    board: Board, pos: Position, conversions: dict[BlockKind, BlockKind], refusal: str, message: str
) -> ItemEffectResult:
    block, failure = _target(board, pos)
    if failure:
        return failure
    if block.kind not in conversions:
        return _fail(refusal)

    new_board = board.copy()
    new_board.place(*pos, block.with_kind(conversions[block.kind]))
    return ItemEffectResult(True, message, [pos], new_board)


def counter_promote(board: Board, pos: Position) -> ItemEffectResult:
    """Turn an at-most counter into an at-least counter with the same threshold."""
    return _convert(
        board,
        pos,
        {BlockKind.COUNTER_AT_MOST: BlockKind.COUNTER_AT_LEAST},
        "This item only works on counter blocks",
        "Changed the counter block into a counter+ block",
    )


def counter_reset(board: Board, pos: Position) -> ItemEffectResult:
    """Turn an at-least counter into a normal block."""
    return _convert(
        board,
        pos,
        {BlockKind.COUNTER_AT_LEAST: BlockKind.NORMAL},
        "This item only works on counter+ blocks",
        "Changed the counter+ block into a normal block",
    )


def thaw_step(board: Board, pos: Position) -> ItemEffectResult:
    """Take one level of ice off a block."""
    block = board.get(*pos)
    message = "Melted the ice"
    if block is not None and block.kind is BlockKind.ICE_LV2:
        message = "Lowered the ice level"
    return _convert(
        board,
        pos,
        {BlockKind.ICE_LV2: BlockKind.ICE_LV1, BlockKind.ICE_LV1: BlockKind.NORMAL},
        "This item only works on ice blocks",
        message,
    )


def score_booster() -> ItemEffectResult:
    """No board change; tells the caller to boost score for the rest of the stage."""
    return ItemEffectResult(True, "Score booster active: score x1.5 for this stage", booster=True)


EFFECTS = {
    ItemType.SWAP: swap,
    ItemType.RECOLOR_ONE: recolor_one,
    ItemType.MICRO_CLEAR: micro_clear,
    ItemType.SHUFFLE: shuffle,
    ItemType.THAW_STEP: thaw_step,
    ItemType.RECOLOR_AREA: recolor_area,
    ItemType.COUNTER_RESET: counter_reset,
    ItemType.AREA_BOMB: area_bomb,
    ItemType.COUNTER_PROMOTE: counter_promote,
    ItemType.BREAK_ROCK: break_rock,
    ItemType.BREAK_ANCHOR: break_anchor,
    ItemType.BREAK_ANY: break_any,
}


def apply_item(board: Board, item: ItemType, *args, **kwargs) -> ItemEffectResult:
    """Run the effect for `item` with its own arguments after the board."""
    if item is ItemType.SCORE_BOOSTER:
        return score_booster()
    effect = EFFECTS.get(item)
    if effect is None:
        return _fail(f"Unknown item {item}")
    return effect(board, *args, **kwargs)


DESCRIPTIONS = {
    ItemType.SWAP: "Swaps two blocks",
    ItemType.RECOLOR_ONE: "Changes the color of one block",
    ItemType.MICRO_CLEAR: "Clears one normal block",
    ItemType.SHUFFLE: "Shuffles the colors of all normal blocks",
    ItemType.THAW_STEP: "Takes one level of ice off a block",
    ItemType.RECOLOR_AREA: "Changes the color of a whole group",
    ItemType.COUNTER_RESET: "Turns a counter+ block into a normal block",
    ItemType.AREA_BOMB: "Clears the 3x3 area around a cell",
    ItemType.COUNTER_PROMOTE: "Turns a counter block into a counter+ block",
    ItemType.SCORE_BOOSTER: "Score x1.5 for the rest of the stage",
    ItemType.BREAK_ROCK: "Destroys a rock block",
    ItemType.BREAK_ANCHOR: "Destroys a steel block",
    ItemType.BREAK_ANY: "Destroys any block",
}


def preview_item(board: Board, item: ItemType, pos: Position | None = None) -> ItemPreview:
    """Report whether `item` can be used at `pos` and which cells it would touch."""
    if item is ItemType.SCORE_BOOSTER:
        return ItemPreview(True, [], DESCRIPTIONS[item])
    if item is ItemType.SHUFFLE:
        result = shuffle(board, random.Random(0))
        return ItemPreview(True, result.modified, DESCRIPTIONS[item])
    if pos is None:
        return ItemPreview(False, [], "Pick a block")

    if item is ItemType.SWAP:
        block, failure = _target(board, pos)
        if failure:
            return ItemPreview(False, [], failure.message)
        if _is_immovable(block):
            return ItemPreview(False, [], "Rock and steel blocks cannot be swapped")
        return ItemPreview(True, [pos], DESCRIPTIONS[item])

    if item in (ItemType.RECOLOR_ONE, ItemType.RECOLOR_AREA):
        block = board.get(*pos)
        # recoloring to the current color touches exactly the same cells
        result = apply_item(board, item, pos, block.color if block else "")
    else:
        result = apply_item(board, item, pos)

    if not result.success:
        return ItemPreview(False, [], result.message)
    return ItemPreview(True, result.modified, DESCRIPTIONS[item])
