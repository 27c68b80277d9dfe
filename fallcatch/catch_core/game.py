"""
Core Game
=========

Main game session combining input, item placement, scoring, rules and the
lifecycle state machine.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple, Union

from fallcatch.catch_core.config_loader import GameConfig, get_config, validate_config
from fallcatch.catch_core.entities import FallingItem, Paddle, fit_size
from fallcatch.catch_core.input_state import Direction, InputBuffer, InputMode
from fallcatch.catch_core.lifecycle import Lifecycle, LifecycleMachine
from fallcatch.catch_core.rng import ItemPlacer, Placement
from fallcatch.catch_core.rules import GameRules
from fallcatch.catch_core.scoring import ScoreTracker
from fallcatch.catch_core.state_snapshot import GameSnapshot, SnapshotBuilder

logger = logging.getLogger(__name__)


@dataclass
class FrameResult:
    """Result of a single update."""
    snapshot: GameSnapshot
    applied: bool        # False when the lifecycle gate skipped the frame
    caught: bool
    missed: bool
    game_over: bool
    delta_score: int
    dt: float

    @staticmethod
    def idle(snapshot: GameSnapshot, dt: float = 0.0) -> "FrameResult":
        return FrameResult(snapshot, False, False, False, False, 0, dt)


class CatchGame:
    """
    One play session.

    Owns the paddle, the single falling item, score, health and lifecycle.
    Input arrives through the staging methods (`set_discrete_held`,
    `set_pointer_target`, `set_mode`) and is read once per `update()`.

    One update, in order:
    - lifecycle gate (nothing happens unless RUNNING)
    - paddle displacement from input, then clamp to the arena
    - fall speed recomputed from score, item integrated
    - catch check, else miss check
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        seed: Optional[int] = None
    ):
        """
        Initialize game.

        Args:
            config: Game configuration. Uses default if None.
            seed: Random seed for item placement.

        Raises:
            ValueError: If the configuration is invalid.
        """
        if config is None:
            config = get_config()
        validate_config(config)

        self._config = config
        self._seed = seed

        # Subsystems
        self._rules = GameRules(config)
        self._placer = ItemPlacer(config, seed)
        self._scorer = ScoreTracker(config.item.milestone_every)
        self._lifecycle = LifecycleMachine()
        self._input = InputBuffer()
        self._snapshot_builder = SnapshotBuilder(config)

        # Entities
        self._player_sprite: Optional[Tuple[int, int]] = None
        self._item_sprite: Optional[Tuple[int, int]] = None
        self._paddle = Paddle()
        self._item = FallingItem()
        self._apply_sizes()

        # Session state
        self._health: int = config.rules.health_max
        self._frames: int = 0
        self._elapsed: float = 0.0

        self._place_item()
        self._paddle.center(config)

    @property
    def config(self) -> GameConfig:
        """Game configuration."""
        return self._config

    @property
    def rules(self) -> GameRules:
        return self._rules

    @property
    def lifecycle(self) -> Lifecycle:
        return self._lifecycle.state

    @property
    def score(self) -> int:
        """Current score."""
        return self._scorer.score

    @property
    def health(self) -> int:
        return self._health

    @property
    def paddle(self) -> Paddle:
        return self._paddle

    @property
    def item(self) -> FallingItem:
        return self._item

    @property
    def input(self) -> InputBuffer:
        return self._input

    @property
    def input_mode(self) -> InputMode:
        return self._input.mode

    @property
    def is_over(self) -> bool:
        """True if the session has ended."""
        return self._lifecycle.state is Lifecycle.GAME_OVER

    @property
    def frames(self) -> int:
        """Updates applied while running."""
        return self._frames

    @property
    def elapsed(self) -> float:
        """Simulated seconds while running."""
        return self._elapsed

    @property
    def catches(self) -> int:
        return self._scorer.catches

    @property
    def misses(self) -> int:
        return self._scorer.misses

    # Lifecycle commands

    def reset(self, seed: Optional[int] = None) -> bool:
        """
        Start a fresh session from NOT_STARTED or GAME_OVER.

        Ignored in any other state.

        Args:
            seed: New placement seed. Uses previous if None.

        Returns:
            True if the session was reset.
        """
        if not self._lifecycle.can_reset:
            logger.debug("reset ignored while %s", self.lifecycle.value)
            return False
        self._reset_state(seed)
        return self._lifecycle.start()

    def restart(self, seed: Optional[int] = None) -> bool:
        """Start a fresh session from any state."""
        self._reset_state(seed)
        return self._lifecycle.start(force=True)

    def pause_toggle(self) -> bool:
        return self._lifecycle.pause_toggle()

    def focus_lost(self) -> bool:
        return self._lifecycle.focus_lost()

    def _reset_state(self, seed: Optional[int]) -> None:
        if seed is not None:
            self._seed = seed
        self._placer.reset(self._seed)
        self._scorer.reset()
        self._health = self._config.rules.health_max
        self._input.set_mode(InputMode.NONE)
        self._frames = 0
        self._elapsed = 0.0
        self._place_item()
        self._paddle.center(self._config)
        logger.info("Session reset (seed=%s)", self._seed)

    # Input staging

    def set_discrete_held(
        self,
        direction: Union[Direction, str],
        held: bool,
        touch: bool = False
    ) -> None:
        self._input.set_discrete_held(direction, held, touch=touch)

    def set_pointer_target(self, x: Optional[float]) -> None:
        self._input.set_pointer_target(x)

    def set_mode(self, mode: Union[InputMode, str]) -> None:
        self._input.set_mode(mode)

    # Assets

    def fit_sprites(
        self,
        player_size: Optional[Tuple[int, int]] = None,
        item_size: Optional[Tuple[int, int]] = None
    ) -> None:
        """
        Resize entities from loaded sprite dimensions and re-center the paddle.

        Args:
            player_size: (width, height) of the paddle sprite, or None for fallback.
            item_size: (width, height) of the item sprite, or None for fallback.
        """
        self._player_sprite = player_size
        self._item_sprite = item_size
        self._apply_sizes()
        self._paddle.center(self._config)

    def _apply_sizes(self) -> None:
        self._paddle.w, self._paddle.h = fit_size(self._config.player.fit, self._player_sprite)
        self._item.w, self._item.h = fit_size(self._config.item.fit, self._item_sprite)

    # Simulation

    def update(self, dt: float) -> FrameResult:
        """
        Advance the session by one frame.

        Args:
            dt: Seconds since the previous frame. Clamped to [0, loop.max_dt].

        Returns:
            FrameResult describing what happened this frame.
        """
        if not self._lifecycle.is_running:
            return FrameResult.idle(self.snapshot())

        dt = max(0.0, min(float(dt), self._config.loop.max_dt))
        if dt == 0.0:
            self._item.vy = self._rules.speed.fall_speed(self._scorer.score)
            return FrameResult.idle(self.snapshot())

        score_before = self._scorer.score

        self._move_paddle(dt)

        self._item.vy = self._rules.speed.fall_speed(self._scorer.score)
        self._item.integrate(dt)

        caught = False
        missed = False
        game_over = False

        if self._rules.collision.is_catch(self._paddle, self._item):
            event = self._scorer.apply_catch()
            caught = True
            if event.milestone_reached:
                logger.info(
                    "Milestone at score %d, fall speed now %.0f",
                    event.total, self._rules.speed.fall_speed(event.total)
                )
            self._place_item()
        elif self._rules.collision.is_miss(self._item):
            missed = True
            game_over = self._lose_health()

        self._frames += 1
        self._elapsed += dt

        return FrameResult(
            snapshot=self.snapshot(),
            applied=True,
            caught=caught,
            missed=missed,
            game_over=game_over,
            delta_score=self._scorer.score - score_before,
            dt=dt
        )

    def _move_paddle(self, dt: float) -> None:
        frame = self._input.read()
        if frame.mode is InputMode.DISCRETE_KEYS:
            self._paddle.x += frame.velocity(self._config.player.move_speed) * dt
        elif frame.mode is InputMode.POINTER_DRAG and frame.pointer_target is not None:
            self._paddle.x = frame.pointer_target
        self._paddle.clamp_to(self._config.arena.width)

    def _lose_health(self) -> bool:
        """Apply a miss. Returns True if the session ended."""
        self._scorer.record_miss()
        result = self._rules.health.lose_health(self._health)
        self._health = result.health
        if result.game_over:
            logger.info("Game over with score %d", self._scorer.score)
            self._lifecycle.game_over()
            return True
        logger.debug("Missed, health now %d", self._health)
        self._place_item()
        return False

    def _place_item(self, placement: Placement = Placement.RESET) -> None:
        self._placer.place(
            self._item,
            self._rules.speed.fall_speed(self._scorer.score),
            placement
        )

    # Views

    def snapshot(self) -> GameSnapshot:
        """Build current game state snapshot."""
        return self._snapshot_builder.build(
            lifecycle=self._lifecycle.state,
            score=self._scorer.score,
            health=self._health,
            paddle=self._paddle,
            item=self._item,
            input_mode=self._input.mode,
            frames=self._frames
        )

    def get_info(self) -> Dict[str, Any]:
        """Get additional info dict for Gymnasium."""
        return {
            "score": self._scorer.score,
            "health": self._health,
            "catches": self._scorer.catches,
            "misses": self._scorer.misses,
            "frames": self._frames,
            "elapsed": self._elapsed,
            "lifecycle": self._lifecycle.state.value,
            "fall_speed": self._rules.speed.fall_speed(self._scorer.score),
        }
