"""Board grid model."""

from typing import Iterable, Iterator

from obstaclegame.game.block import Block, BlockKind, Position


class Board:
    """A width x height grid of optional blocks, indexed `cells[y][x]`."""

    def __init__(self, width: int, height: int, cells: list[list[Block | None]] | None = None):
        if width <= 0 or height <= 0:
            raise ValueError("Board dimensions must be positive")
        self.width = width
        self.height = height
        if cells is None:
            cells = [[None] * width for _ in range(height)]
        if len(cells) != height or any(len(row) != width for row in cells):
            raise ValueError(
                f"Cell grid does not match board dimensions {width}x{height}"
            )
        self.cells = cells

    @classmethod
    def from_blocks(cls, width: int, height: int, blocks: Iterable[Block]) -> "Board":
        """Build a board from blocks carrying their own positions."""
        board = cls(width, height)
        for block in blocks:
            if not board.in_bounds(block.x, block.y):
                raise ValueError(
                    f"Block at ({block.x}, {block.y}) is outside a {width}x{height} board"
                )
            if board.cells[block.y][block.x] is not None:
                raise ValueError(f"Two blocks placed at ({block.x}, {block.y})")
            board.cells[block.y][block.x] = block
        return board

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def get(self, x: int, y: int) -> Block | None:
        if not self.in_bounds(x, y):
            return None
        return self.cells[y][x]

    def place(self, x: int, y: int, block: Block | None):
        """Put a block into a cell, syncing its stored position."""
        if block is not None:
            block.x, block.y = x, y
        self.cells[y][x] = block

    def clear(self, x: int, y: int):
        self.cells[y][x] = None

    def copy(self) -> "Board":
        """Return an independent copy; copied blocks have no presentation handle."""
        return Board(
            self.width,
            self.height,
            [[block.copy() if block else None for block in row] for row in self.cells],
        )

    def positions(self) -> Iterator[Position]:
        for y in range(self.height):
            for x in range(self.width):
                yield (x, y)

    def occupied(self) -> Iterator[tuple[Position, Block]]:
        for y, row in enumerate(self.cells):
            for x, block in enumerate(row):
                if block is not None:
                    yield (x, y), block

    def column(self, x: int) -> list[Block | None]:
        return [self.cells[y][x] for y in range(self.height)]

    def column_is_empty(self, x: int) -> bool:
        return all(self.cells[y][x] is None for y in range(self.height))

    def column_has_anchor(self, x: int) -> bool:
        return any(
            block is not None and block.kind.is_fixed for block in self.column(x)
        )

    def count(self, kind: BlockKind | None = None) -> int:
        """Count blocks on the board, optionally of one kind."""
        return sum(1 for _, block in self.occupied() if kind is None or block.kind is kind)

    def is_empty(self) -> bool:
        return self.count() == 0

    def same_state(self, other: "Board") -> bool:
        if (self.width, self.height) != (other.width, other.height):
            return False
        for (x, y) in self.positions():
            mine, theirs = self.cells[y][x], other.cells[y][x]
            if mine is None or theirs is None:
                if mine is not theirs:
                    return False
            elif not mine.same_state(theirs):
                return False
        return True

    def __repr__(self):
        return f"Board({self.width}x{self.height}, blocks={self.count()})"
