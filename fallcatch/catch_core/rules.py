"""
Game Rules
==========

Handles fall speed scaling, catch/miss detection, and health loss.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from fallcatch.catch_core.config_loader import GameConfig, get_config
from fallcatch.catch_core.entities import FallingItem, Paddle, aabb_overlap


@dataclass
class MissResult:
    """Result of applying a miss to the health pool."""
    health: int
    game_over: bool

    @staticmethod
    def survived(health: int) -> "MissResult":
        return MissResult(health, False)

    @staticmethod
    def depleted() -> "MissResult":
        return MissResult(0, True)


class SpeedRules:
    """
    Fall speed as a pure function of score.

    Every `milestone_every` points adds `fall_scale` to the base speed.
    """

    def __init__(self, config: Optional[GameConfig] = None):
        if config is None:
            config = get_config()

        self._base = config.item.fall_base
        self._scale = config.item.fall_scale
        self._every = config.item.milestone_every

    def milestone(self, score: int) -> int:
        """Number of milestones reached at this score."""
        return score // self._every

    def fall_speed(self, score: int) -> float:
        """Vertical item speed in pixels per second."""
        return self._base + self.milestone(score) * self._scale


class CollisionRules:
    """
    Catch and miss geometry.

    A catch is a box overlap between paddle and item with both half-extent
    sums shrunk by the grace margin. A miss is the item's bottom edge passing
    the arena's bottom edge.
    """

    def __init__(self, config: Optional[GameConfig] = None):
        if config is None:
            config = get_config()

        self._grace = config.rules.catch_grace
        self._arena_height = config.arena.height

    @property
    def grace(self) -> float:
        return self._grace

    def is_catch(self, paddle: Paddle, item: FallingItem) -> bool:
        return aabb_overlap(
            paddle.x, paddle.y, paddle.w, paddle.h,
            item.x, item.y, item.w, item.h,
            grace=self._grace
        )

    def is_miss(self, item: FallingItem) -> bool:
        return item.bottom > self._arena_height


class HealthRules:
    """Health pool bounded to [0, health_max]."""

    def __init__(self, config: Optional[GameConfig] = None):
        if config is None:
            config = get_config()

        self._health_max = config.rules.health_max

    @property
    def health_max(self) -> int:
        return self._health_max

    def lose_health(self, health: int) -> MissResult:
        """
        Apply one miss.

        Args:
            health: Health before the miss.

        Returns:
            MissResult with the clamped new health and whether the session ends.
        """
        health -= 1
        if health <= 0:
            return MissResult.depleted()
        return MissResult.survived(health)


class GameRules:
    """
    Combined interface for all game rules.
    """

    def __init__(self, config: Optional[GameConfig] = None):
        """
        Initialize game rules.

        Args:
            config: Game configuration. Uses default if None.
        """
        if config is None:
            config = get_config()

        self._config = config
        self.speed = SpeedRules(config)
        self.collision = CollisionRules(config)
        self.health = HealthRules(config)
