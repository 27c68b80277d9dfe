"""
Team Template Agent
===================

Your agent must provide one of:
1. A `CatchAgent` class with an `act(obs) -> action` method
2. A standalone `act(obs) -> action` function

Actions are integers: 0 holds left, 1 releases both keys, 2 holds right.

Observation keys: lifecycle, score, health, paddle [x, y, w, h],
item [x, y, w, h, vy], arena [width, height].
"""

from __future__ import annotations

from typing import Dict
import numpy as np


class CatchAgent:
    """
    Your agent implementation.

    Replace the strategy in `act()` with your own logic.
    """

    def __init__(self):
        """Initialize your agent. Load models, set up state, etc."""
        self.rng = np.random.default_rng()

    def act(self, obs: Dict[str, np.ndarray]) -> int:
        """
        Choose an action based on the observation.

        Args:
            obs: Dictionary containing game state.

        Returns:
            action: 0, 1 or 2.
        """
        return int(self.rng.integers(0, 3))

    def reset(self) -> None:
        """Called when a new episode starts (optional)."""
        pass


def act(obs: Dict[str, np.ndarray]) -> int:
    """Standalone act function (alternative to class-based agent)."""
    return int(np.random.default_rng().integers(0, 3))
