"""
Tests for the read-only state snapshot.
"""

import dataclasses

import pytest
import numpy as np

from fallcatch.catch_core.config_loader import load_config
from fallcatch.catch_core.game import CatchGame
from fallcatch.catch_core.input_state import InputMode
from fallcatch.catch_core.lifecycle import Lifecycle
from fallcatch.catch_core.state_snapshot import LIFECYCLE_IDS


@pytest.fixture
def config():
    return load_config()


@pytest.fixture
def game(config):
    game = CatchGame(config=config, seed=42)
    game.reset()
    return game


class TestGameSnapshot:
    """Test snapshot contents."""

    def test_fields(self, game, config):
        snap = game.snapshot()

        assert snap.lifecycle is Lifecycle.RUNNING
        assert snap.score == 0
        assert snap.health == config.health_max
        assert snap.health_max == config.health_max
        assert snap.input_mode is InputMode.NONE
        assert (snap.arena_width, snap.arena_height) == (480, 720)
        assert snap.paddle.x == game.paddle.x
        assert snap.item.vy == game.item.vy

    def test_snapshot_is_detached(self, game):
        snap = game.snapshot()
        game.update(0.05)

        assert snap.item.y != game.item.y
        with pytest.raises(dataclasses.FrozenInstanceError):
            snap.score = 10

    def test_overlay(self, game):
        assert game.snapshot().overlay is None
        assert game.snapshot().running

        game.pause_toggle()
        assert game.snapshot().overlay == "paused"


class TestObservationDict:
    """Test the numpy observation layout."""

    def test_shapes_and_dtypes(self, game):
        obs = game.snapshot().to_obs_dict()

        assert obs["lifecycle"].dtype == np.int32
        assert obs["score"].dtype == np.int64
        assert obs["health"].dtype == np.int32
        assert obs["paddle"].shape == (4,)
        assert obs["item"].shape == (5,)
        assert obs["arena"].shape == (2,)
        assert obs["paddle"].dtype == np.float32

    def test_values(self, game):
        obs = game.snapshot().to_obs_dict()

        assert int(obs["lifecycle"]) == LIFECYCLE_IDS[Lifecycle.RUNNING]
        assert obs["paddle"][0] == pytest.approx(game.paddle.x)
        assert obs["item"][4] == pytest.approx(game.item.vy)
        np.testing.assert_allclose(obs["arena"], [480.0, 720.0])
