import numpy as np
import pytest

from obstaclegame.environments.obstacle_env import KIND_PLANES, ObstacleEnv
from obstaclegame.game.block import BlockKind
from obstaclegame.game.game_config import GameFactory, StageConfig
from .conftest import assert_valid_observation, assert_valid_step_return, parse_board


@pytest.fixture
def tiny_env():
    return ObstacleEnv(GameFactory.custom(2, 2, 2), seed=0)


class TestEnvironmentBasics:
    """Test reset and observation encoding"""

    def test_reset_observation(self):
        config = GameFactory.small()
        env = ObstacleEnv(config, seed=0)
        obs = env.reset()
        assert_valid_observation(obs, config.observation_shape)
        # every cell has exactly one color plane and one kind plane set
        assert np.all(obs.sum(axis=0) == 2)

    def test_reset_with_board(self, tiny_env):
        tiny_env.reset(parse_board(["A B", "B B"]))
        assert tiny_env.game.left == 4
        assert not tiny_env.done

    def test_reset_advances_seed(self):
        env = ObstacleEnv(GameFactory.medium(), seed=10)
        env.reset()
        assert env.seed == 11

    def test_color_and_kind_planes(self, tiny_env):
        obs = tiny_env.reset(parse_board(["A B", "B B"]))
        palette = tiny_env.config.palette
        normal_plane = len(palette) + KIND_PLANES.index(BlockKind.NORMAL)

        assert obs[palette.index("aqua"), 0, 0] == 1
        assert obs[palette.index("blue"), 0, 0] == 0
        assert obs[normal_plane, 1, 1] == 1

    def test_anchor_has_no_color_plane(self, tiny_env):
        obs = tiny_env.reset(parse_board(["S B", "B B"]))
        anchor_plane = 2 + KIND_PLANES.index(BlockKind.ANCHOR)
        assert obs[anchor_plane, 0, 0] == 1
        assert obs[:2, 0, 0].sum() == 0

    def test_stage_env(self):
        stage = StageConfig(stage=1, num_colors=3)
        env = ObstacleEnv(GameFactory.small(), stage=stage, seed=2)
        obs = env.reset()
        assert_valid_observation(obs, GameFactory.small().observation_shape)


class TestEnvironmentStep:
    """Test step rewards and termination"""

    def test_step_removes_group(self, tiny_env):
        tiny_env.reset(parse_board(["B B", "A B"]))
        step = tiny_env.step(0)
        assert_valid_step_return(step)

        _, reward, done, info = step
        assert info["removed"] == 3
        assert info["score"] == 9
        assert info["left"] == 1
        assert reward == pytest.approx(0.09)
        assert done

    def test_invalid_move_penalty(self, tiny_env):
        tiny_env.reset(parse_board(["A B", "B B"]))
        _, reward, done, info = tiny_env.step(0)
        assert reward == pytest.approx(-0.01)
        assert info["removed"] == 0
        assert not done

    def test_completion_reward(self, tiny_env):
        tiny_env.reset(parse_board(["B B", "B B"]))
        _, reward, done, info = tiny_env.step(0)
        assert reward == pytest.approx(16 * 0.01 + 10.0)
        assert done
        assert info["total_score"] == 16

    def test_stage_cleared_in_info(self):
        stage = StageConfig(stage=1, num_colors=2, target_score=9)
        env = ObstacleEnv(GameFactory.custom(2, 2, 2), stage=stage, seed=0)
        env.reset(parse_board(["B B", "A B"]))
        _, _, _, info = env.step(0)
        assert info["stage_cleared"]

    def test_stage_cleared_false_without_stage(self, tiny_env):
        tiny_env.reset(parse_board(["B B", "A B"]))
        _, _, _, info = tiny_env.step(0)
        assert not info["stage_cleared"]

    def test_step_after_done_raises(self, tiny_env):
        tiny_env.reset(parse_board(["B B", "B B"]))
        tiny_env.step(0)
        with pytest.raises(RuntimeError):
            tiny_env.step(0)

    def test_action_to_position(self, tiny_env):
        assert tiny_env._to_2d(0) == (0, 0)
        assert tiny_env._to_2d(1) == (1, 0)
        assert tiny_env._to_2d(3) == (1, 1)
