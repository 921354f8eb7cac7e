"""Game configuration system for boards and stage layouts."""

from dataclasses import dataclass, field

from obstaclegame.game.block import BlockKind

PALETTE = ("blue", "aqua", "green", "red", "yellow", "white")


@dataclass
class GameConfig:
    """num_colors is the number of playable colors, taken from the front of PALETTE."""

    width: int = 10
    height: int = 14
    num_colors: int = 5

    @property
    def palette(self) -> tuple[str, ...]:
        return PALETTE[: self.num_colors]

    @property
    def total_cells(self) -> int:
        return self.width * self.height

    @property
    def action_space_size(self) -> int:
        return self.total_cells

    @property
    def observation_shape(self) -> tuple[int, int, int]:
        # one plane per color plus one per block kind
        return (self.num_colors + len(BlockKind), self.height, self.width)

    def validate(self):
        if self.width <= 0 or self.height <= 0:
            raise ValueError("Board dimensions must be positive")
        if self.num_colors < 2:
            raise ValueError("Must have at least 2 colors")
        if self.num_colors > len(PALETTE):
            raise ValueError(f"Maximum {len(PALETTE)} colors supported")


class GameFactory:

    @staticmethod
    def small() -> GameConfig:
        config = GameConfig(width=5, height=5, num_colors=3)
        config.validate()
        return config

    @staticmethod
    def medium() -> GameConfig:
        config = GameConfig(width=8, height=8, num_colors=4)
        config.validate()
        return config

    @staticmethod
    def large() -> GameConfig:
        config = GameConfig(width=10, height=14, num_colors=5)
        config.validate()
        return config

    @staticmethod
    def default() -> GameConfig:
        return GameFactory.large()

    @staticmethod
    def custom(width: int, height: int, num_colors: int) -> GameConfig:
        config = GameConfig(width=width, height=height, num_colors=num_colors)
        config.validate()
        return config


@dataclass
class ObstacleConfig:
    """Placement of one obstacle block. Color is drawn from the palette when omitted."""

    kind: BlockKind
    x: int
    y: int
    threshold: int | None = None
    color: str | None = None

    @classmethod
    def from_dict(cls, data: dict) -> "ObstacleConfig":
        try:
            kind = BlockKind(data["type"])
        except ValueError:
            raise ValueError(f"Unknown obstacle type {data['type']!r}") from None
        return cls(
            kind=kind,
            x=data["x"],
            y=data["y"],
            threshold=data.get("counter"),
            color=data.get("color"),
        )


@dataclass
class StageConfig:
    stage: int
    num_colors: int = 5
    target_score: int = 500
    obstacles: list[ObstacleConfig] = field(default_factory=list)
    name: str | None = None

    @classmethod
    def from_dict(cls, data: dict) -> "StageConfig":
        return cls(
            stage=data["stage"],
            num_colors=data.get("colors", 5),
            target_score=data.get("targetScore", 500),
            obstacles=[ObstacleConfig.from_dict(o) for o in data.get("obstacles", [])],
            name=data.get("name"),
        )

    def validate(self, config: GameConfig):
        if not 2 <= self.num_colors <= config.num_colors:
            raise ValueError(
                f"Stage {self.stage} uses {self.num_colors} colors, "
                f"board supports 2 to {config.num_colors}"
            )
        seen = set()
        for obstacle in self.obstacles:
            pos = (obstacle.x, obstacle.y)
            if not (0 <= obstacle.x < config.width and 0 <= obstacle.y < config.height):
                raise ValueError(f"Obstacle at {pos} is outside the board")
            if pos in seen:
                raise ValueError(f"Two obstacles placed at {pos}")
            seen.add(pos)
            if obstacle.kind is BlockKind.NORMAL:
                raise ValueError(f"Obstacle at {pos} is a normal block")
            if obstacle.kind.has_threshold and obstacle.threshold is None:
                raise ValueError(f"Counter obstacle at {pos} needs a counter value")
            if obstacle.color is not None and obstacle.color not in config.palette:
                raise ValueError(f"Obstacle at {pos} has unknown color {obstacle.color!r}")
