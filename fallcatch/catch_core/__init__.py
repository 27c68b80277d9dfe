"""
Catch Core - The simulation at the heart of the game.

This module provides the game session, its frame driver, the Gymnasium
environment wrapper, and all supporting systems (input staging, placement
RNG, rules, scoring).

Main exports:
- CatchGame: One play session; call update(dt) once per frame
- LoopDriver: Calls update then render in a fixed order
- InputAggregator: Turns raw device events into staged input
- CatchEnv: Gymnasium environment for agents
- GameConfig: Configuration loaded from game_config.yaml
"""

from fallcatch.catch_core.config_loader import GameConfig, load_config
from fallcatch.catch_core.lifecycle import Lifecycle
from fallcatch.catch_core.input_state import Direction, InputAggregator, InputMode
from fallcatch.catch_core.game import CatchGame, FrameResult
from fallcatch.catch_core.state_snapshot import GameSnapshot
from fallcatch.catch_core.loop_driver import LoopDriver
from fallcatch.catch_core.env_gym import CatchEnv

__all__ = [
    "GameConfig",
    "load_config",
    "Lifecycle",
    "Direction",
    "InputAggregator",
    "InputMode",
    "CatchGame",
    "FrameResult",
    "GameSnapshot",
    "LoopDriver",
    "CatchEnv",
]
