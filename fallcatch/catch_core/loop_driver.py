"""
Loop Driver
===========

Runs frames in a fixed order: update the session, then hand a snapshot to
the renderer. The host (a pygame window, a test, a headless benchmark)
decides when frames happen; the driver only measures and clamps time.
"""

from __future__ import annotations

import logging
import time
from typing import Callable, Optional

from fallcatch.catch_core.game import CatchGame, FrameResult
from fallcatch.catch_core.state_snapshot import GameSnapshot

logger = logging.getLogger(__name__)

RenderFn = Callable[[GameSnapshot], None]


def clamp_dt(dt: float, max_dt: float) -> float:
    """Clamp a frame delta into [0, max_dt]."""
    return max(0.0, min(dt, max_dt))


class LoopDriver:
    """
    Explicit frame driver for a CatchGame.

    Example:
        driver = LoopDriver(game, render=renderer.draw)
        while running:
            driver.tick()
    """

    def __init__(
        self,
        game: CatchGame,
        render: Optional[RenderFn] = None,
        clock: Callable[[], float] = time.perf_counter,
        max_dt: Optional[float] = None
    ):
        """
        Args:
            game: Session to advance.
            render: Called with the post-update snapshot each frame.
            clock: Monotonic time source in seconds.
            max_dt: Frame delta clamp. Uses loop.max_dt from config if None.
        """
        self._game = game
        self._render = render
        self._clock = clock
        self._max_dt = max_dt if max_dt is not None else game.config.loop.max_dt
        if self._max_dt <= 0:
            raise ValueError(f"max_dt must be positive, got {self._max_dt}")
        self._last_time: Optional[float] = None
        self._frame_count = 0

    @property
    def frame_count(self) -> int:
        return self._frame_count

    @property
    def max_dt(self) -> float:
        return self._max_dt

    def restart_clock(self) -> None:
        """Forget the previous frame time so the next tick has dt=0."""
        self._last_time = None

    def tick(self, dt: Optional[float] = None) -> FrameResult:
        """
        Run one frame.

        Args:
            dt: Explicit frame delta. Measured from the clock if None.

        Returns:
            The session's FrameResult.
        """
        if dt is None:
            now = self._clock()
            dt = 0.0 if self._last_time is None else now - self._last_time
            self._last_time = now

        clamped = clamp_dt(dt, self._max_dt)
        if clamped < dt:
            logger.debug("Frame delta %.3fs clamped to %.3fs", dt, clamped)

        result = self._game.update(clamped)
        if self._render is not None:
            self._render(result.snapshot)
        self._frame_count += 1
        return result

    def run_frames(self, count: int, dt: float) -> FrameResult:
        """Run a fixed number of frames with a constant delta (headless)."""
        result = None
        for _ in range(count):
            result = self.tick(dt)
        if result is None:
            return FrameResult.idle(self._game.snapshot())
        return result
