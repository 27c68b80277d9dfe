"""
RNG - Item Placement
====================

Provides deterministic item placement above the arena from a seeded
generator, so a fixed seed plus a fixed input/dt sequence reproduces a run.
"""

from __future__ import annotations

import random
from enum import Enum
from typing import Optional, Tuple

from fallcatch.catch_core.config_loader import GameConfig, get_config
from fallcatch.catch_core.entities import FallingItem


class Placement(Enum):
    """Vertical placement variant for a new fall."""
    RESET = "reset"     # Bottom of the item touches the arena's top edge
    RANDOM = "random"   # Somewhere up to spawn_jitter pixels higher


class ItemPlacer:
    """
    Re-places the falling item at the top of the arena.

    X is uniform across the range that keeps the item fully inside the
    arena horizontally. The caller supplies the fall speed so placement stays
    independent of scoring.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        seed: Optional[int] = None
    ):
        """
        Initialize placer.

        Args:
            config: Game configuration. Uses default if None.
            seed: Random seed for reproducibility. Random if None.
        """
        if config is None:
            config = get_config()

        self._config = config
        self._seed = seed
        self._rng = random.Random(seed)

    @property
    def seed(self) -> Optional[int]:
        return self._seed

    def x_range(self, item: FallingItem) -> Tuple[float, float]:
        """Valid center X range for the item."""
        return (item.half_w, self._config.arena.width - item.half_w)

    def y_range(self, item: FallingItem, placement: Placement) -> Tuple[float, float]:
        """
        Range of the starting center Y for a placement variant.

        The random variant excludes its upper bound, so it never coincides
        with the reset position; the reset variant is a single value.
        """
        if placement is Placement.RESET:
            return (-item.h, -item.h)
        return (-(self._config.item.spawn_jitter + item.h), -item.h)

    def place(
        self,
        item: FallingItem,
        vy: float,
        placement: Placement = Placement.RESET
    ) -> None:
        """
        Move the item to a fresh starting position in place.

        Args:
            item: The session's item.
            vy: Fall speed to start with.
            placement: Vertical placement variant.
        """
        width = self._config.arena.width
        item.x = self._rng.random() * (width - item.w) + item.half_w
        if placement is Placement.RESET:
            item.y = -item.h
        else:
            item.y = -(1.0 - self._rng.random()) * self._config.item.spawn_jitter - item.h
        item.vy = vy

    def reset(self, seed: Optional[int] = None) -> None:
        """
        Restart the placement sequence.

        Args:
            seed: New random seed. Reuses the current seed if None.
        """
        if seed is not None:
            self._seed = seed
        self._rng = random.Random(self._seed)
