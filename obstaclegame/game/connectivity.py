"""Same-color group search on the board."""

from obstaclegame.game.block import Position
from obstaclegame.game.board import Board

DIRECTIONS = [(0, -1), (1, 0), (0, 1), (-1, 0)]


def neighbours(board: Board, x: int, y: int) -> list[Position]:
    """In-bounds cells directly above, right, below and left of (x, y)."""
    result = []
    for dx, dy in DIRECTIONS:
        nx, ny = x + dx, y + dy
        if board.in_bounds(nx, ny):
            result.append((nx, ny))
    return result


def find_group(board: Board, x: int, y: int) -> set[Position]:
    """
    Find the maximal 4-connected group of same-colored cells containing (x, y).

    Every kind that carries a color joins the group, so normal, ice and
    counter blocks of one color form a single group. Rock and anchor blocks
    never match. Returns an empty set for an empty or out-of-bounds seed.
    """
    seed = board.get(x, y)
    if seed is None or not seed.kind.has_color:
        return set()

    color = seed.color
    group = {(x, y)}
    stack = [(x, y)]

    while stack:
        cx, cy = stack.pop()
        for nx, ny in neighbours(board, cx, cy):
            if (nx, ny) in group:
                continue
            block = board.cells[ny][nx]
            if block is not None and block.matches(color):
                group.add((nx, ny))
                stack.append((nx, ny))

    return group


def find_all_groups(board: Board) -> list[set[Position]]:
    """Partition every colored cell into its group, in row-major order of first cell."""
    visited: set[Position] = set()
    groups = []
    for (x, y), block in board.occupied():
        if (x, y) in visited or not block.kind.has_color:
            continue
        group = find_group(board, x, y)
        visited |= group
        groups.append(group)
    return groups
