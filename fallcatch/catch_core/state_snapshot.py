"""
State Snapshot
==============

Read-only view of a session handed to renderers and agents. Built after an
update completes; holding on to one never exposes live session objects.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional

import numpy as np

from fallcatch.catch_core.config_loader import GameConfig
from fallcatch.catch_core.entities import FallingItem, Paddle
from fallcatch.catch_core.input_state import InputMode
from fallcatch.catch_core.lifecycle import Lifecycle

LIFECYCLE_IDS = {
    Lifecycle.NOT_STARTED: 0,
    Lifecycle.RUNNING: 1,
    Lifecycle.PAUSED: 2,
    Lifecycle.GAME_OVER: 3,
}


@dataclass(frozen=True)
class EntityView:
    """Position and size of one entity (center coordinates)."""
    x: float
    y: float
    w: float
    h: float
    vy: float = 0.0


@dataclass(frozen=True)
class GameSnapshot:
    """Complete render/agent view of the session."""
    lifecycle: Lifecycle
    score: int
    health: int
    health_max: int
    paddle: EntityView
    item: EntityView
    input_mode: InputMode
    arena_width: float
    arena_height: float
    frames: int = 0

    @property
    def overlay(self) -> Optional[str]:
        """Which overlay to show, if any. Game over wins over pause."""
        if self.lifecycle is Lifecycle.GAME_OVER:
            return "game_over"
        if self.lifecycle is Lifecycle.PAUSED:
            return "paused"
        return None

    @property
    def running(self) -> bool:
        return self.lifecycle is Lifecycle.RUNNING

    def to_obs_dict(self) -> Dict[str, np.ndarray]:
        """Convert to Gymnasium observation dictionary."""
        return {
            "lifecycle": np.array(LIFECYCLE_IDS[self.lifecycle], dtype=np.int32),
            "score": np.array(self.score, dtype=np.int64),
            "health": np.array(self.health, dtype=np.int32),
            "paddle": np.array(
                [self.paddle.x, self.paddle.y, self.paddle.w, self.paddle.h],
                dtype=np.float32
            ),
            "item": np.array(
                [self.item.x, self.item.y, self.item.w, self.item.h, self.item.vy],
                dtype=np.float32
            ),
            "arena": np.array([self.arena_width, self.arena_height], dtype=np.float32),
        }


class SnapshotBuilder:
    """Builds snapshots from live session objects."""

    def __init__(self, config: GameConfig):
        self._arena_width = float(config.arena.width)
        self._arena_height = float(config.arena.height)
        self._health_max = config.rules.health_max

    def build(
        self,
        lifecycle: Lifecycle,
        score: int,
        health: int,
        paddle: Paddle,
        item: FallingItem,
        input_mode: InputMode,
        frames: int = 0
    ) -> GameSnapshot:
        return GameSnapshot(
            lifecycle=lifecycle,
            score=score,
            health=health,
            health_max=self._health_max,
            paddle=EntityView(paddle.x, paddle.y, paddle.w, paddle.h),
            item=EntityView(item.x, item.y, item.w, item.h, item.vy),
            input_mode=input_mode,
            arena_width=self._arena_width,
            arena_height=self._arena_height,
            frames=frames
        )
