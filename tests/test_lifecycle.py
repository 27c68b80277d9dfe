"""
Tests for the lifecycle state machine and session commands.
"""

import pytest

from fallcatch.catch_core.config_loader import load_config
from fallcatch.catch_core.game import CatchGame
from fallcatch.catch_core.input_state import Direction, InputMode
from fallcatch.catch_core.lifecycle import Lifecycle, LifecycleMachine


@pytest.fixture
def config():
    return load_config()


@pytest.fixture
def machine():
    return LifecycleMachine()


@pytest.fixture
def game(config):
    return CatchGame(config=config, seed=7)


def catch_once(game):
    """Put the item on the paddle and run one short frame."""
    game.item.x = game.paddle.x
    game.item.y = game.paddle.y
    return game.update(0.001)


def force_game_over(game):
    """Drain health by dropping the item past the floor repeatedly."""
    while not game.is_over:
        game.item.x = 20.0
        game.paddle.x = game.config.arena.width - 40.0
        game.item.y = game.config.arena.height
        game.update(0.01)


class TestLifecycleMachine:
    """Test raw transitions."""

    def test_initial_state(self, machine):
        assert machine.state is Lifecycle.NOT_STARTED
        assert not machine.is_running
        assert machine.can_reset

    def test_start_from_not_started(self, machine):
        assert machine.start()
        assert machine.state is Lifecycle.RUNNING

    def test_start_ignored_while_running(self, machine):
        machine.start()
        assert not machine.start()
        assert machine.state is Lifecycle.RUNNING

    def test_forced_start_from_paused(self, machine):
        machine.start()
        machine.pause_toggle()
        assert machine.start(force=True)
        assert machine.state is Lifecycle.RUNNING

    def test_pause_toggle_round_trip(self, machine):
        machine.start()
        assert machine.pause_toggle()
        assert machine.state is Lifecycle.PAUSED
        assert machine.pause_toggle()
        assert machine.state is Lifecycle.RUNNING

    @pytest.mark.parametrize("setup", ["not_started", "game_over"])
    def test_pause_toggle_ignored_outside_play(self, machine, setup):
        if setup == "game_over":
            machine.start()
            machine.game_over()
        before = machine.state

        assert not machine.pause_toggle()
        assert machine.state is before

    def test_focus_lost_pauses_only_when_running(self, machine):
        assert not machine.focus_lost()
        assert machine.state is Lifecycle.NOT_STARTED

        machine.start()
        assert machine.focus_lost()
        assert machine.state is Lifecycle.PAUSED

        # Never resumes
        assert not machine.focus_lost()
        assert machine.state is Lifecycle.PAUSED

    def test_game_over_allows_reset(self, machine):
        machine.start()
        machine.game_over()
        assert machine.can_reset
        assert machine.start()


class TestSessionLifecycle:
    """Test lifecycle commands on a session."""

    def test_new_game_not_started(self, game, config):
        assert game.lifecycle is Lifecycle.NOT_STARTED
        assert game.score == 0
        assert game.health == config.health_max
        assert game.input_mode is InputMode.NONE

    def test_update_ignored_before_start(self, game):
        y = game.item.y
        result = game.update(0.05)

        assert not result.applied
        assert game.item.y == y
        assert game.frames == 0

    def test_pause_freezes_state(self, game):
        game.reset()
        game.set_discrete_held(Direction.RIGHT, True)
        game.update(0.016)
        game.pause_toggle()

        before = game.snapshot()
        for _ in range(10):
            result = game.update(0.016)
            assert not result.applied
        after = game.snapshot()

        assert after == before
        assert after.overlay == "paused"

    def test_focus_lost_pauses(self, game):
        game.reset()
        game.focus_lost()
        assert game.lifecycle is Lifecycle.PAUSED

    def test_game_over_then_reset(self, game, config):
        game.reset()
        force_game_over(game)

        assert game.lifecycle is Lifecycle.GAME_OVER
        assert game.health == 0
        assert game.snapshot().overlay == "game_over"

        assert game.reset()
        assert game.lifecycle is Lifecycle.RUNNING
        assert game.score == 0
        assert game.health == config.health_max
        assert game.input_mode is InputMode.NONE
        assert game.paddle.x == config.arena.width / 2
        assert game.item.y == -game.item.h

    def test_reset_after_game_over_with_score(self, game, config):
        game.reset()
        for _ in range(47):
            catch_once(game)
        game.set_pointer_target(100.0)
        game.update(0.01)
        force_game_over(game)

        assert game.is_over
        assert game.score == 47
        assert game.snapshot().score == 47

        assert game.reset()
        assert game.lifecycle is Lifecycle.RUNNING
        assert game.score == 0
        assert game.health == config.health_max
        assert game.input_mode is InputMode.NONE
        assert game.paddle.x == config.arena.width / 2
        assert game.item.y == -game.item.h
        assert game.item.vy == config.item.fall_base

    def test_reset_ignored_while_running(self, game):
        game.reset()
        game.update(0.05)
        frames = game.frames

        assert not game.reset()
        assert game.frames == frames

    def test_reset_ignored_while_paused(self, game):
        game.reset()
        game.pause_toggle()

        assert not game.reset()
        assert game.lifecycle is Lifecycle.PAUSED

    def test_restart_from_paused(self, game, config):
        game.reset()
        game.update(0.05)
        game.pause_toggle()

        assert game.restart()
        assert game.lifecycle is Lifecycle.RUNNING
        assert game.frames == 0
        assert game.health == config.health_max

    def test_game_over_ignores_updates(self, game):
        game.reset()
        force_game_over(game)
        before = game.snapshot()

        result = game.update(0.05)

        assert not result.applied
        assert game.snapshot() == before
