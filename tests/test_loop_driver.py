"""
Tests for the frame driver.
"""

import pytest

from fallcatch.catch_core.config_loader import load_config
from fallcatch.catch_core.game import CatchGame
from fallcatch.catch_core.loop_driver import LoopDriver, clamp_dt


class FakeClock:
    """Manually advanced time source."""

    def __init__(self, start: float = 100.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def config():
    return load_config()


@pytest.fixture
def game(config):
    game = CatchGame(config=config, seed=1)
    game.reset()
    return game


@pytest.fixture
def clock():
    return FakeClock()


class TestClampDt:

    @pytest.mark.parametrize("dt,expected", [
        (-0.5, 0.0),
        (0.0, 0.0),
        (0.016, 0.016),
        (0.1, 0.1),
        (3.0, 0.1),
    ])
    def test_clamp(self, dt, expected):
        assert clamp_dt(dt, 0.1) == expected


class TestLoopDriver:
    """Test update/render ordering and time measurement."""

    def test_render_receives_post_update_snapshot(self, game):
        seen = []
        driver = LoopDriver(game, render=seen.append)

        result = driver.tick(0.05)

        assert seen == [result.snapshot]
        assert seen[0].frames == 1

    def test_first_measured_tick_has_zero_dt(self, game, clock):
        driver = LoopDriver(game, clock=clock)
        y = game.item.y

        result = driver.tick()

        assert not result.applied
        assert game.item.y == y

    def test_measured_delta(self, game, clock):
        driver = LoopDriver(game, clock=clock)
        driver.tick()
        y = game.item.y

        clock.advance(0.02)
        result = driver.tick()

        assert result.dt == pytest.approx(0.02)
        assert game.item.y == pytest.approx(y + 220.0 * 0.02)

    def test_long_stall_is_clamped(self, game, clock, config):
        driver = LoopDriver(game, clock=clock)
        driver.tick()
        y = game.item.y

        clock.advance(10.0)
        result = driver.tick()

        assert result.dt == config.loop.max_dt
        assert game.item.y == pytest.approx(y + 220.0 * config.loop.max_dt)

    def test_restart_clock(self, game, clock):
        driver = LoopDriver(game, clock=clock)
        driver.tick()
        clock.advance(0.05)
        driver.restart_clock()
        y = game.item.y

        driver.tick()

        assert game.item.y == y

    def test_run_frames(self, game):
        driver = LoopDriver(game)
        result = driver.run_frames(30, 1 / 60)

        assert driver.frame_count == 30
        assert game.frames == 30
        assert result.applied

    def test_run_zero_frames(self, game):
        driver = LoopDriver(game)
        result = driver.run_frames(0, 1 / 60)

        assert not result.applied
        assert driver.frame_count == 0

    def test_frames_counted_while_paused(self, game):
        driver = LoopDriver(game)
        game.pause_toggle()
        driver.run_frames(5, 1 / 60)

        assert driver.frame_count == 5
        assert game.frames == 0

    def test_invalid_max_dt(self, game):
        with pytest.raises(ValueError):
            LoopDriver(game, max_dt=0.0)
