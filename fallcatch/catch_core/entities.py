"""
Entities
========

The paddle and the falling item. Both are created once per session and
re-placed in place; nothing here is reallocated during play.

Positions are entity centers in arena pixels with Y growing downwards.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from fallcatch.catch_core.config_loader import GameConfig, SpriteFitConfig


def fit_size(
    fit: SpriteFitConfig,
    sprite_size: Optional[Tuple[int, int]] = None
) -> Tuple[float, float]:
    """
    Compute an entity's size from its sprite dimensions.

    Args:
        fit: Sizing rule for the entity.
        sprite_size: (width, height) of the loaded sprite, or None.

    Returns:
        (w, h). A square of the capped shorter sprite edge times the scale,
        or the fallback size when no usable sprite is available.
    """
    if sprite_size is None or min(sprite_size) <= 0:
        return (fit.fallback_width, fit.fallback_height)
    base = min(fit.sprite_cap, sprite_size[0], sprite_size[1])
    side = base * fit.scale
    return (side, side)


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


@dataclass
class Paddle:
    """Player-controlled paddle."""
    x: float = 0.0
    y: float = 0.0
    w: float = 72.0
    h: float = 72.0

    @property
    def half_w(self) -> float:
        return self.w / 2

    @property
    def half_h(self) -> float:
        return self.h / 2

    def x_range(self, arena_width: float) -> Tuple[float, float]:
        """Allowed center X range so the paddle never leaves the arena."""
        return (self.half_w, arena_width - self.half_w)

    def clamp_to(self, arena_width: float) -> None:
        low, high = self.x_range(arena_width)
        self.x = clamp(self.x, low, high)

    def center(self, config: GameConfig) -> None:
        """Center horizontally and recompute the fixed vertical position."""
        self.x = config.arena.width / 2
        self.y = config.arena.height - max(
            config.player.bottom_margin,
            self.h * config.player.bottom_ratio
        )


@dataclass
class FallingItem:
    """The single item falling towards the paddle."""
    x: float = 0.0
    y: float = 0.0
    vy: float = 0.0
    w: float = 48.0
    h: float = 48.0

    @property
    def half_w(self) -> float:
        return self.w / 2

    @property
    def half_h(self) -> float:
        return self.h / 2

    @property
    def bottom(self) -> float:
        return self.y + self.half_h

    def integrate(self, dt: float) -> None:
        self.y += self.vy * dt


def aabb_overlap(
    ax: float, ay: float, aw: float, ah: float,
    bx: float, by: float, bw: float, bh: float,
    grace: float = 0.0
) -> bool:
    """
    Center/half-extent box overlap test with both extents shrunk by grace.

    Touching boxes (distance exactly equal to the shrunk extent) overlap.
    """
    return (
        abs(ax - bx) <= aw / 2 + bw / 2 - grace
        and abs(ay - by) <= ah / 2 + bh / 2 - grace
    )
