"""
Gravity and horizontal compaction.

Anchor blocks never move. In gravity they also pin every block stacked
above the top-most anchor of their column, and no falling block passes
through an anchor. In compaction a column holding an anchor stays at its
index and acts as a barrier that other columns slide up to but not across.
"""

from dataclasses import dataclass

from obstaclegame.game.block import Block, Position
from obstaclegame.game.board import Board


@dataclass(frozen=True)
class Movement:
    """One block relocation, for the rendering layer to animate."""

    block: Block
    from_pos: Position
    to_pos: Position

    @property
    def distance(self) -> int:
        return abs(self.to_pos[0] - self.from_pos[0]) + abs(self.to_pos[1] - self.from_pos[1])


def _fall_span(
    column: list[Block | None],
    top: int,
    bottom: int,
    x: int,
    new_board: Board,
    movements: list[Movement],
):
    """Drop the blocks in rows top..bottom (inclusive) to the bottom of that span."""
    stack = [(y, column[y]) for y in range(top, bottom + 1) if column[y] is not None]
    target = bottom
    for y, block in reversed(stack):
        moved = block.moved_to(x, target)
        new_board.cells[target][x] = moved
        if y != target:
            movements.append(Movement(moved, (x, y), (x, target)))
        target -= 1


def _gravity(board: Board) -> tuple[Board, list[Movement]]:
    new_board = Board(board.width, board.height)
    movements: list[Movement] = []

    for x in range(board.width):
        column = board.column(x)
        anchor_rows = [y for y, block in enumerate(column) if block is not None and block.kind.is_fixed]

        if not anchor_rows:
            _fall_span(column, 0, board.height - 1, x, new_board, movements)
            continue

        # the top-most anchor and everything stacked above it stay put
        for y in range(anchor_rows[0] + 1):
            if column[y] is not None:
                new_board.cells[y][x] = column[y].moved_to(x, y)

        floors = anchor_rows[1:] + [board.height]
        for ceiling, floor in zip(anchor_rows, floors):
            if floor < board.height:
                new_board.cells[floor][x] = column[floor].moved_to(x, floor)
            _fall_span(column, ceiling + 1, floor - 1, x, new_board, movements)

    return new_board, movements


def _horizontal_slide(board: Board) -> tuple[Board, list[Movement]]:
    new_board = Board(board.width, board.height)
    movements: list[Movement] = []
    write_col = 0

    for read_col in range(board.width):
        if board.column_is_empty(read_col):
            continue

        target = read_col if board.column_has_anchor(read_col) else write_col
        for y in range(board.height):
            block = board.cells[y][read_col]
            if block is None:
                continue
            moved = block.moved_to(target, y)
            new_board.cells[y][target] = moved
            if target != read_col:
                movements.append(Movement(moved, (read_col, y), (target, y)))
        write_col = target + 1

    return new_board, movements


def apply_gravity(board: Board) -> Board:
    """Return a new board with every column collapsed downward."""
    return _gravity(board)[0]


def apply_horizontal_slide(board: Board) -> Board:
    """Return a new board with empty columns closed up to the left."""
    return _horizontal_slide(board)[0]


def settle(board: Board) -> tuple[Board, list[Movement]]:
    """Run gravity then compaction, returning the new board and every movement."""
    fallen, falls = _gravity(board)
    slid, slides = _horizontal_slide(fallen)
    return slid, falls + slides


def needs_settling(board: Board) -> bool:
    return not settle(board)[0].same_state(board)
