"""
Removal eligibility and obstacle state updates for a tapped group.

A tap goes through two steps that must run in order:

1. `apply_obstacle_transitions` thaws ice and unwraps ice-wrapped counters
   next to the cells about to be removed, returning a `TransitionedBoard`.
2. `remove_eligible` deletes the cells that are eligible on that
   post-transition board. It refuses anything but a `TransitionedBoard`.
"""

from dataclasses import dataclass, field

from obstaclegame.game.block import BlockKind, Position
from obstaclegame.game.board import Board
from obstaclegame.game.connectivity import find_all_groups, neighbours

MIN_GROUP_SIZE = 2


def group_is_removable(board: Board, group: set[Position] | frozenset[Position]) -> bool:
    """A tap only does anything on a group of at least two cells."""
    return len(group) >= MIN_GROUP_SIZE


def is_eligible(board: Board, group: set[Position] | frozenset[Position], x: int, y: int) -> bool:
    """Decide whether the block at (x, y) is removed as part of `group` this turn."""
    block = board.get(x, y)
    if block is None or (x, y) not in group:
        return False

    size = len(group)
    kind = block.kind
    if kind is BlockKind.NORMAL:
        return size >= MIN_GROUP_SIZE
    if kind is BlockKind.COUNTER_AT_LEAST:
        return size >= block.threshold
    if kind is BlockKind.COUNTER_AT_MOST:
        return size <= block.threshold
    if kind in (
        BlockKind.ICE_LV1,
        BlockKind.ICE_LV2,
        BlockKind.ICE_COUNTER_AT_LEAST,
        BlockKind.ICE_COUNTER_AT_MOST,
        BlockKind.ROCK,
        BlockKind.ANCHOR,
    ):
        return False
    raise ValueError(f"Unhandled block kind {kind}")


def eligible_cells(board: Board, group: set[Position] | frozenset[Position]) -> set[Position]:
    if not group_is_removable(board, group):
        return set()
    return {(x, y) for x, y in group if is_eligible(board, group, x, y)}


def thawed_kind(kind: BlockKind) -> BlockKind | None:
    """Kind a block turns into when a same-color neighbour is removed, or None."""
    if kind is BlockKind.ICE_LV2:
        return BlockKind.ICE_LV1
    if kind is BlockKind.ICE_LV1:
        return BlockKind.NORMAL
    if kind is BlockKind.ICE_COUNTER_AT_LEAST:
        return BlockKind.COUNTER_AT_LEAST
    if kind is BlockKind.ICE_COUNTER_AT_MOST:
        return BlockKind.COUNTER_AT_MOST
    if kind in (
        BlockKind.NORMAL,
        BlockKind.COUNTER_AT_LEAST,
        BlockKind.COUNTER_AT_MOST,
        BlockKind.ROCK,
        BlockKind.ANCHOR,
    ):
        return None
    raise ValueError(f"Unhandled block kind {kind}")


@dataclass(frozen=True)
class TransitionedBoard:
    """Board after obstacle transitions for one tap, ready for removal."""

    board: Board
    group: frozenset[Position]
    changed: list[Position] = field(default_factory=list)

    @property
    def removable(self) -> set[Position]:
        return eligible_cells(self.board, self.group)


def _touches_removed(board: Board, x: int, y: int, removing: set[Position]) -> bool:
    block = board.cells[y][x]
    for nx, ny in neighbours(board, x, y):
        if (nx, ny) in removing and board.cells[ny][nx].matches(block.color):
            return True
    return False


def apply_obstacle_transitions(
    board: Board, group: set[Position] | frozenset[Position]
) -> TransitionedBoard:
    """
    Update ice and ice-wrapped counter blocks in `group` before anything is removed.

    A block reacts when one of its 4-neighbours of the same color is in the
    about-to-be-removed set. That set starts as the cells eligible on the
    incoming board and grows when a thawed block becomes eligible itself, so
    ice further along the group still sees the removal. Each block changes
    at most once per tap, which is why ice level 2 only ever drops to level 1.

    The input board is left untouched.
    """
    result = board.copy()
    group = frozenset(group)
    changed: list[Position] = []
    if not group_is_removable(result, group):
        return TransitionedBoard(result, group, changed)

    removing = eligible_cells(result, group)
    updated = True
    while updated:
        updated = False
        for x, y in sorted(group - removing - set(changed), key=lambda p: (p[1], p[0])):
            block = result.cells[y][x]
            new_kind = thawed_kind(block.kind)
            if new_kind is None or not _touches_removed(result, x, y, removing):
                continue
            result.place(x, y, block.with_kind(new_kind))
            changed.append((x, y))
            updated = True
        removing = eligible_cells(result, group)

    return TransitionedBoard(result, group, changed)


def remove_eligible(transitioned: TransitionedBoard) -> tuple[Board, list[Position]]:
    """
    Delete the eligible cells of the tapped group.

    Returns the new board and the removed positions in row-major order.
    """
    if not isinstance(transitioned, TransitionedBoard):
        raise TypeError(
            "remove_eligible expects the result of apply_obstacle_transitions"
        )

    board = transitioned.board.copy()
    removed = sorted(transitioned.removable, key=lambda p: (p[1], p[0]))
    for x, y in removed:
        board.clear(x, y)
    return board, removed


def has_removable_group(board: Board) -> bool:
    """Whether any tap on the board would remove at least one cell."""
    return any(eligible_cells(board, group) for group in find_all_groups(board))
