import numpy as np

from obstaclegame.game.block import BlockKind
from obstaclegame.game.board import Board
from obstaclegame.game.game import Game
from obstaclegame.game.game_config import GameConfig, GameFactory, StageConfig

KIND_PLANES = list(BlockKind)


class ObstacleEnv:
    """OpenAI Gym-style environment over the rule engine.

    Each step is a single tap; the game settles the board but never chains
    cascades, so one step is one engine call.

    Args:
        config: Board configuration. Defaults to the large config.
        stage: Optional stage layout with obstacles.
        completion_reward: Reward for completely clearing the board.
        score_weight: Multiplier applied to the tap score.
        invalid_move_penalty: Penalty for taps that remove nothing.
        seed: Seed for the first board; each reset advances it by one.
    """

    def __init__(
        self,
        config: GameConfig | None = None,
        stage: StageConfig | None = None,
        completion_reward: float = 10.0,
        score_weight: float = 0.01,
        invalid_move_penalty: float = -0.01,
        seed: int | None = None,
    ):
        if config is None:
            config = GameFactory.default()

        self.config = config
        self.stage = stage

        self.completion_reward = completion_reward
        self.score_weight = score_weight
        self.invalid_move_penalty = invalid_move_penalty

        self.seed = seed
        self.game = Game(config, stage, seed=seed)
        self.done = self.game.done()

    def reset(self, board: Board | None = None) -> np.ndarray:
        if self.seed is not None:
            self.seed += 1
        self.game = Game(self.config, self.stage, seed=self.seed)
        if board is not None:
            self.game.set_board(board)

        self.done = self.game.done()
        return self.get_observation()

    def step(self, action: int) -> tuple[np.ndarray, float, bool, dict]:
        if self.done:
            raise RuntimeError("Episode done. Call reset()")

        x, y = self._to_2d(action)
        result = self.game.move(x, y)
        self.done = self.game.done()

        reward = self.compute_reward(result.score, len(result.removed))
        info = {
            "removed": len(result.removed),
            "score": result.score,
            "total_score": self.game.score,
            "left": self.game.left,
            "stage_cleared": self.game.stage_cleared(),
        }
        return self.get_observation(), reward, self.done, info

    def compute_reward(self, tap_score: int, removed: int) -> float:
        """Reward a tap.

        - Full board completion: high positive reward on top of the tap score
        - Taps that remove nothing: small negative penalty
        - All other taps: their score scaled by score_weight
        """
        if removed == 0:
            return float(self.invalid_move_penalty)

        reward = tap_score * self.score_weight
        if self.game.all_cleared():
            reward += self.completion_reward
        return float(reward)

    def get_observation(self) -> np.ndarray:
        return self._trainable_game(self.game.board)

    def _trainable_game(self, board: Board) -> np.ndarray:
        """Encode the board as one-hot planes: one per color, then one per block kind."""
        obs = np.zeros(self.config.observation_shape, dtype=np.float32)
        palette = self.config.palette
        for (x, y), block in board.occupied():
            if block.color is not None:
                obs[palette.index(block.color), y, x] = 1
            obs[len(palette) + KIND_PLANES.index(block.kind), y, x] = 1
        return obs

    def _to_2d(self, action: int) -> tuple[int, int]:
        y, x = divmod(action, self.config.width)
        return x, y
