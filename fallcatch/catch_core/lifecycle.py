"""
Lifecycle
=========

Session-level state machine: NOT_STARTED -> RUNNING <-> PAUSED, RUNNING -> GAME_OVER.

Invalid transitions are ignored (logged at DEBUG) rather than raised, so
input handlers can forward commands without checking preconditions.
"""

from __future__ import annotations

import logging
from enum import Enum

logger = logging.getLogger(__name__)


class Lifecycle(Enum):
    NOT_STARTED = "not_started"
    RUNNING = "running"
    PAUSED = "paused"
    GAME_OVER = "game_over"


class LifecycleMachine:
    """Holds the current lifecycle state and applies transitions."""

    def __init__(self) -> None:
        self._state = Lifecycle.NOT_STARTED

    @property
    def state(self) -> Lifecycle:
        return self._state

    @property
    def is_running(self) -> bool:
        return self._state is Lifecycle.RUNNING

    @property
    def can_reset(self) -> bool:
        return self._state in (Lifecycle.NOT_STARTED, Lifecycle.GAME_OVER)

    def _move(self, new_state: Lifecycle) -> None:
        logger.info("Lifecycle %s -> %s", self._state.value, new_state.value)
        self._state = new_state

    def start(self, force: bool = False) -> bool:
        """
        Enter RUNNING after a reset.

        Args:
            force: Allow starting from RUNNING or PAUSED as well (restart).

        Returns:
            True if the transition happened.
        """
        if not force and not self.can_reset:
            logger.debug("reset ignored while %s", self._state.value)
            return False
        self._move(Lifecycle.RUNNING)
        return True

    def pause_toggle(self) -> bool:
        if self._state is Lifecycle.RUNNING:
            self._move(Lifecycle.PAUSED)
            return True
        if self._state is Lifecycle.PAUSED:
            self._move(Lifecycle.RUNNING)
            return True
        logger.debug("pause toggle ignored while %s", self._state.value)
        return False

    def focus_lost(self) -> bool:
        """Auto-pause; never resumes."""
        if self._state is Lifecycle.RUNNING:
            self._move(Lifecycle.PAUSED)
            return True
        return False

    def game_over(self) -> None:
        self._move(Lifecycle.GAME_OVER)
