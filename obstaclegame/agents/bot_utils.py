"""
Game analysis utility functions for benchmark bots.

Pure functions for analyzing board states without dependency on specific
bot implementations. `find_valid_moves` doubles as the termination test for
a caller's cascade loop: keep tapping until it comes back empty.
"""

from obstaclegame.game.block import Position
from obstaclegame.game.board import Board
from obstaclegame.game.connectivity import find_all_groups, find_group, neighbours
from obstaclegame.game.game import tap
from obstaclegame.game.obstacles import eligible_cells


def find_valid_moves(board: Board) -> list[Position]:
    """
    Find one tap position per group that would remove at least one cell.

    For each such group returns its top-left-most cell (smallest row, then
    smallest column) as an (x, y) position. Groups made only of ice or of
    counters whose threshold is not met are not valid moves.
    """
    valid_moves = []
    for group in find_all_groups(board):
        if eligible_cells(board, group):
            y, x = min((y, x) for x, y in group)
            valid_moves.append((x, y))
    return valid_moves


def calculate_group_size(board: Board, x: int, y: int) -> int:
    """
    Calculate the size of the connected group at the given position.

    Returns 0 for empty cells and for rock and steel blocks.
    """
    return len(find_group(board, x, y))


def simulate_tap(board: Board, x: int, y: int) -> Board:
    """Return the board that tapping (x, y) would produce, leaving `board` untouched."""
    return tap(board, x, y).board


def count_singles(board: Board) -> int:
    """
    Count colored blocks with no same-colored neighbour.

    Rock and steel blocks are not counted.
    """
    singles = 0
    for (x, y), block in board.occupied():
        if not block.kind.has_color:
            continue
        has_neighbor = False
        for nx, ny in neighbours(board, x, y):
            neighbour = board.cells[ny][nx]
            if neighbour is not None and neighbour.matches(block.color):
                has_neighbor = True
                break
        if not has_neighbor:
            singles += 1
    return singles


def count_singles_after_tap(board: Board, x: int, y: int) -> int:
    """Count single isolated blocks after making the specified tap."""
    return count_singles(simulate_tap(board, x, y))
