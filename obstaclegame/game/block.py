"""Block kinds and the block value object placed on the board."""

from dataclasses import dataclass, field, replace
from enum import Enum
from itertools import count
from typing import Any

Position = tuple[int, int]  # (x, y), x = column, y = row, row 0 at the top

_block_ids = count(1)


class BlockKind(Enum):
    NORMAL = "normal"
    COUNTER_AT_LEAST = "counterPlus"
    COUNTER_AT_MOST = "counterMinus"
    ICE_LV1 = "iceLv1"
    ICE_LV2 = "iceLv2"
    ICE_COUNTER_AT_LEAST = "iceCounterPlus"
    ICE_COUNTER_AT_MOST = "iceCounterMinus"
    ROCK = "rock"
    ANCHOR = "steel"

    @property
    def has_threshold(self) -> bool:
        return self in COUNTER_KINDS or self in ICE_COUNTER_KINDS

    @property
    def has_color(self) -> bool:
        """Rock and anchor blocks match no color."""
        return self not in (BlockKind.ROCK, BlockKind.ANCHOR)

    @property
    def is_ice(self) -> bool:
        return self in ICE_KINDS or self in ICE_COUNTER_KINDS

    @property
    def is_fixed(self) -> bool:
        """Fixed blocks never move under gravity or compaction."""
        return self is BlockKind.ANCHOR


COUNTER_KINDS = frozenset({BlockKind.COUNTER_AT_LEAST, BlockKind.COUNTER_AT_MOST})
ICE_KINDS = frozenset({BlockKind.ICE_LV1, BlockKind.ICE_LV2})
ICE_COUNTER_KINDS = frozenset(
    {BlockKind.ICE_COUNTER_AT_LEAST, BlockKind.ICE_COUNTER_AT_MOST}
)


@dataclass(eq=False)
class Block:
    """A single block occupying one cell.

    `x` and `y` mirror the block's index on the board and are rewritten
    whenever the block is relocated. `handle` belongs to the rendering layer;
    the engine never reads it and every copy starts with `handle=None`.
    `block_id` survives copies so a renderer can follow a block across moves.
    """

    kind: BlockKind
    color: str | None
    x: int = 0
    y: int = 0
    threshold: int | None = None
    handle: Any = None
    block_id: int = field(default_factory=lambda: next(_block_ids))

    def __post_init__(self):
        if self.kind.has_threshold:
            if self.threshold is None or self.threshold < 1:
                raise ValueError(
                    f"{self.kind.value} block needs a positive threshold, got {self.threshold}"
                )
        elif self.threshold is not None:
            raise ValueError(f"{self.kind.value} block does not take a threshold")

        if self.kind.has_color and self.color is None:
            raise ValueError(f"{self.kind.value} block needs a color")
        if not self.kind.has_color:
            self.color = None

    def copy(self, **changes) -> "Block":
        """Return a copy with a cleared presentation handle."""
        return replace(self, handle=None, **changes)

    def moved_to(self, x: int, y: int) -> "Block":
        return self.copy(x=x, y=y)

    def with_kind(self, kind: BlockKind) -> "Block":
        threshold = self.threshold if kind.has_threshold else None
        return self.copy(kind=kind, threshold=threshold)

    def same_state(self, other: "Block | None") -> bool:
        """Compare everything the engine cares about, ignoring identity and handle."""
        if other is None:
            return False
        return (
            self.kind is other.kind
            and self.color == other.color
            and self.threshold == other.threshold
            and (self.x, self.y) == (other.x, other.y)
        )

    def matches(self, color: str | None) -> bool:
        return self.kind.has_color and color is not None and self.color == color

    def __repr__(self):
        threshold = f"({self.threshold})" if self.threshold is not None else ""
        return f"Block({self.kind.name}{threshold}, {self.color}, x={self.x}, y={self.y})"


def normal(color: str, x: int = 0, y: int = 0) -> Block:
    return Block(BlockKind.NORMAL, color, x, y)


def counter_at_least(color: str, threshold: int, x: int = 0, y: int = 0) -> Block:
    return Block(BlockKind.COUNTER_AT_LEAST, color, x, y, threshold=threshold)


def counter_at_most(color: str, threshold: int, x: int = 0, y: int = 0) -> Block:
    return Block(BlockKind.COUNTER_AT_MOST, color, x, y, threshold=threshold)


def ice(color: str, level: int = 1, x: int = 0, y: int = 0) -> Block:
    if level == 1:
        return Block(BlockKind.ICE_LV1, color, x, y)
    if level == 2:
        return Block(BlockKind.ICE_LV2, color, x, y)
    raise ValueError(f"Ice level must be 1 or 2, got {level}")


def rock(x: int = 0, y: int = 0) -> Block:
    return Block(BlockKind.ROCK, None, x, y)


def anchor(x: int = 0, y: int = 0) -> Block:
    return Block(BlockKind.ANCHOR, None, x, y)
