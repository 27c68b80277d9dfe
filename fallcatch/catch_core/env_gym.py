"""
Gymnasium Environment Wrapper
=============================

Provides a standard Gymnasium interface to the catch game.
Reward is always 0.0 - agents compute their own from info.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional, Tuple, Union

import numpy as np

import gymnasium as gym
from gymnasium import spaces

from fallcatch.catch_core.config_loader import GameConfig, load_config
from fallcatch.catch_core.game import CatchGame
from fallcatch.catch_core.input_state import Direction
from fallcatch.catch_core.state_snapshot import GameSnapshot

logger = logging.getLogger(__name__)

ACTION_LEFT = 0
ACTION_STAY = 1
ACTION_RIGHT = 2


class CatchEnv(gym.Env):
    """
    Paddle-and-falling-item game as a Gymnasium environment.

    Action Space:
        Discrete(3): 0 = hold left, 1 = release both, 2 = hold right.

    Each step applies the action as held keys and runs `loop.frame_skip`
    updates of `loop.env_dt` seconds.

    Observation Space:
        Dict built from GameSnapshot.to_obs_dict().

    Reward:
        Always 0.0. Agents must compute their own reward from the info dict.

    Info:
        Contains score, delta_score, health, catches, misses, frames, etc.
    """

    metadata = {
        "render_modes": ["human", "rgb_array"],
        "render_fps": 60,
    }

    def __init__(
        self,
        config_path: Optional[str] = None,
        config: Optional[GameConfig] = None,
        render_mode: Optional[str] = None,
        debug: bool = False,
    ):
        """
        Initialize environment.

        Args:
            config_path: Path to game_config.yaml. Uses default if None.
            config: Already loaded configuration; overrides config_path.
            render_mode: "human" for window, "rgb_array" for numpy, None for headless.
            debug: If True, logs every step at INFO.
        """
        super().__init__()

        self._config = config if config is not None else load_config(config_path)

        self.render_mode = render_mode
        self._debug = debug

        self._game = CatchGame(config=self._config)
        self._renderer = None
        if render_mode == "human":
            # Entity sizes must be fixed before the first episode starts
            self._init_renderer()

        self._dt = self._config.loop.env_dt
        self._frame_skip = self._config.loop.frame_skip
        self._max_frames = self._config.caps.max_frames

        self.action_space = spaces.Discrete(3)
        self.observation_space = self._build_observation_space()

        if self._debug:
            logger.info(
                "CatchEnv initialized: arena %dx%d, dt=%.4f, frame_skip=%d",
                self._config.arena.width, self._config.arena.height,
                self._dt, self._frame_skip
            )

    def _build_observation_space(self) -> spaces.Dict:
        """Build the observation space definition."""
        arena = self._config.arena
        big = float(max(arena.width, arena.height)) * 4

        return spaces.Dict({
            "lifecycle": spaces.Box(low=0, high=3, shape=(), dtype=np.int32),
            "score": spaces.Box(low=0, high=np.iinfo(np.int64).max, shape=(), dtype=np.int64),
            "health": spaces.Box(low=0, high=self._config.rules.health_max, shape=(), dtype=np.int32),
            "paddle": spaces.Box(low=-big, high=big, shape=(4,), dtype=np.float32),
            "item": spaces.Box(low=-np.inf, high=np.inf, shape=(5,), dtype=np.float32),
            "arena": spaces.Box(low=0, high=big, shape=(2,), dtype=np.float32),
        })

    def reset(
        self,
        *,
        seed: Optional[int] = None,
        options: Optional[Dict[str, Any]] = None
    ) -> Tuple[Dict[str, np.ndarray], Dict[str, Any]]:
        """
        Reset the environment.

        Args:
            seed: Random seed for reproducibility.
            options: Additional options (unused).

        Returns:
            (observation, info) tuple.
        """
        super().reset(seed=seed)

        self._game.restart(seed=seed)
        self._game.set_discrete_held(Direction.LEFT, False)
        self._game.set_discrete_held(Direction.RIGHT, False)

        obs = self._snapshot_to_obs(self._game.snapshot())
        info = self._game.get_info()
        info["delta_score"] = 0

        return obs, info

    def step(
        self,
        action: Union[int, np.integer, np.ndarray]
    ) -> Tuple[Dict[str, np.ndarray], float, bool, bool, Dict[str, Any]]:
        """
        Execute one step.

        Args:
            action: 0 (left), 1 (stay) or 2 (right).

        Returns:
            (observation, reward, terminated, truncated, info) tuple.
            Reward is always 0.0.
        """
        if isinstance(action, np.ndarray):
            action = action.item()
        action = int(action)
        if not self.action_space.contains(action):
            raise ValueError(f"Invalid action: {action}")

        self._apply_action(action)

        score_before = self._game.score
        misses_before = self._game.misses
        for _ in range(self._frame_skip):
            result = self._game.update(self._dt)
            if result.game_over or self._game.frames >= self._max_frames:
                break

        obs = self._snapshot_to_obs(self._game.snapshot())
        terminated = self._game.is_over
        truncated = not terminated and self._game.frames >= self._max_frames

        info = self._game.get_info()
        info["delta_score"] = self._game.score - score_before
        info["delta_misses"] = self._game.misses - misses_before

        if self._debug:
            logger.info(
                "Step: action=%d, delta_score=%d, health=%d, frames=%d",
                action, info["delta_score"], info["health"], info["frames"]
            )
            if terminated:
                logger.info("TERMINATED at score %d", info["score"])

        return obs, 0.0, terminated, truncated, info

    def _apply_action(self, action: int) -> None:
        self._game.set_discrete_held(Direction.LEFT, action == ACTION_LEFT)
        self._game.set_discrete_held(Direction.RIGHT, action == ACTION_RIGHT)

    def _snapshot_to_obs(self, snapshot: GameSnapshot) -> Dict[str, np.ndarray]:
        return snapshot.to_obs_dict()

    def _init_renderer(self) -> None:
        """
        Create the renderer. In human mode sprites are loaded and the entity
        sizes are fitted to them, so collisions match what is drawn.
        """
        from fallcatch.catch_core.render_full_pygame import PygameRenderer

        sprites = None
        if self.render_mode == "human":
            from fallcatch.catch_core.sprite_loader import SpriteLoader
            sprites = SpriteLoader()
            self._game.fit_sprites(sprites.natural_size("player"), sprites.natural_size("item"))
        self._renderer = PygameRenderer(
            self._config, sprite_loader=sprites, use_sprites=sprites is not None
        )

    def render(self) -> Optional[np.ndarray]:
        """
        Render the current game state.

        Returns:
            RGB array if render_mode is "rgb_array", None otherwise.
        """
        if self.render_mode is None:
            return None

        if self._renderer is None:
            self._init_renderer()

        snapshot = self._game.snapshot()
        if self.render_mode == "rgb_array":
            return self._renderer.render(snapshot)

        self._renderer.render_to_screen(
            snapshot, self._config.arena.width, self._config.arena.height
        )
        import pygame
        pygame.display.flip()
        return None

    def close(self) -> None:
        """Clean up resources."""
        if self._renderer is not None:
            self._renderer.close()
            self._renderer = None

    @property
    def game(self) -> CatchGame:
        """Access to underlying game (for debugging/tools)."""
        return self._game

    @property
    def config(self) -> GameConfig:
        """Game configuration."""
        return self._config
