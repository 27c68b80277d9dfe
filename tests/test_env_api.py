"""
Tests for Gymnasium environment API.
"""

import dataclasses

import pytest
import numpy as np

from fallcatch.catch_core.config_loader import load_config
from fallcatch.catch_core.env_gym import ACTION_LEFT, ACTION_RIGHT, ACTION_STAY, CatchEnv
from fallcatch.catch_core.lifecycle import Lifecycle


@pytest.fixture
def config():
    return load_config()


@pytest.fixture
def env():
    env = CatchEnv()
    yield env
    env.close()


class TestCatchEnv:
    """Test single environment API."""

    def test_reset_returns_obs_and_info(self, env):
        """Reset should return (observation, info) tuple."""
        result = env.reset(seed=42)

        assert isinstance(result, tuple)
        assert len(result) == 2

        obs, info = result
        assert isinstance(obs, dict)
        assert isinstance(info, dict)

    def test_reset_starts_running(self, env):
        env.reset(seed=42)
        assert env.game.lifecycle is Lifecycle.RUNNING

    def test_observation_in_space(self, env):
        obs, _ = env.reset(seed=42)
        assert env.observation_space.contains(obs)

        obs, _, _, _, _ = env.step(ACTION_STAY)
        assert env.observation_space.contains(obs)

    def test_step_returns_five_values(self, env):
        """Step should return (obs, reward, terminated, truncated, info)."""
        env.reset(seed=42)

        result = env.step(ACTION_STAY)

        assert isinstance(result, tuple)
        assert len(result) == 5

        obs, reward, terminated, truncated, info = result
        assert isinstance(obs, dict)
        assert reward == 0.0
        assert isinstance(terminated, bool)
        assert isinstance(truncated, bool)
        assert "delta_score" in info
        assert "delta_misses" in info

    def test_step_runs_frame_skip_frames(self, env, config):
        env.reset(seed=42)
        _, _, _, _, info = env.step(ACTION_STAY)
        assert info["frames"] == config.loop.frame_skip

    def test_actions_move_paddle(self, env):
        env.reset(seed=42)
        x0 = env.game.paddle.x

        env.step(ACTION_LEFT)
        assert env.game.paddle.x < x0

        x1 = env.game.paddle.x
        env.step(ACTION_RIGHT)
        assert env.game.paddle.x > x1

    def test_numpy_action_accepted(self, env):
        env.reset(seed=42)
        env.step(np.array(ACTION_RIGHT))

    def test_invalid_action_raises(self, env):
        env.reset(seed=42)
        with pytest.raises(ValueError):
            env.step(5)

    def test_same_seed_same_trajectory(self):
        def run():
            env = CatchEnv()
            obs, _ = env.reset(seed=123)
            xs = []
            for i in range(200):
                obs, _, terminated, truncated, _ = env.step(i % 3)
                xs.append(float(obs["item"][0]))
                if terminated or truncated:
                    break
            env.close()
            return xs

        assert run() == run()

    def test_idle_agent_terminates(self, env, config):
        env.reset(seed=42)
        terminated = truncated = False
        info = {}
        steps = 0
        while not (terminated or truncated) and steps < 10_000:
            _, _, terminated, truncated, info = env.step(ACTION_LEFT)
            steps += 1

        assert terminated
        assert info["health"] == 0
        assert info["misses"] >= config.health_max

    def test_frame_cap_truncates(self, config):
        capped = dataclasses.replace(config, caps=dataclasses.replace(config.caps, max_frames=10))
        env = CatchEnv(config=capped)
        env.reset(seed=1)

        truncated = False
        for _ in range(10):
            _, _, terminated, truncated, info = env.step(ACTION_STAY)
            if truncated:
                break

        assert truncated
        assert not terminated
        assert info["frames"] == 10
        env.close()

    def test_reset_after_game_over(self, env, config):
        env.reset(seed=42)
        while not env.game.is_over:
            env.step(ACTION_LEFT)

        obs, info = env.reset(seed=43)

        assert info["score"] == 0
        assert info["health"] == config.health_max
        assert int(obs["lifecycle"]) == 1

    def test_render_none_mode(self, env):
        env.reset(seed=42)
        assert env.render() is None
