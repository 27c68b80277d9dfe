"""
Baseline Tracker Agent - Follows the falling item.

This is a simple heuristic agent that reads the item and paddle positions
from the observation and holds the key that moves the paddle towards the
item's X.

This serves as:
1. A working example of how to read observations and return actions
2. A baseline benchmark to compare against
3. A verification that the environment API works correctly

Strategy:
- Compare item X with paddle X
- Inside a dead zone, release both keys to avoid jitter
- Otherwise hold the key towards the item
"""

import numpy as np
from typing import Any, Dict, Optional

ACTION_LEFT = 0
ACTION_STAY = 1
ACTION_RIGHT = 2


class CatchAgent:
    """
    Baseline agent that tracks the falling item.
    """

    def __init__(self, dead_zone: float = 8.0, debug: bool = False):
        """
        Initialize the agent.

        Args:
            dead_zone: Horizontal distance (px) treated as "already under".
            debug: If True, print decisions to stdout.
        """
        self.dead_zone = dead_zone
        self.debug = debug

    def reset(self, seed: Optional[int] = None) -> None:
        """Reset agent state for a new episode (stateless, nothing to do)."""

    def act(self, observation: Dict[str, Any], debug: bool = False) -> int:
        """
        Choose which key to hold.

        Args:
            observation: Dict of numpy arrays from the environment.
            debug: If True, print debug info for this step.

        Returns:
            0 (left), 1 (stay) or 2 (right).
        """
        paddle_x = float(observation["paddle"][0])
        item_x = float(observation["item"][0])
        offset = item_x - paddle_x

        if abs(offset) <= self.dead_zone:
            action = ACTION_STAY
        elif offset < 0:
            action = ACTION_LEFT
        else:
            action = ACTION_RIGHT

        if debug or self.debug:
            print(f"[Tracker] paddle={paddle_x:.0f} item={item_x:.0f} "
                  f"offset={offset:+.0f} action={action}")

        return action


def act(observation: Dict[str, np.ndarray]) -> int:
    """Standalone act function (alternative to class-based agent)."""
    return CatchAgent().act(observation)


# Convenience function to create agent (used by evaluation harness)
def create_agent(**kwargs) -> CatchAgent:
    """Factory function to create an agent instance."""
    return CatchAgent(**kwargs)
