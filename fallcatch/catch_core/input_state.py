"""
Input Staging
=============

Collapses raw device events into an abstract per-frame input signal.

Device callbacks only write into an InputBuffer; the game reads the buffer
once per update through `InputBuffer.read()`. Continuous signals (pointer
target) keep the last value written; discrete signals (held directions)
reflect what is held at read time.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Optional, Union

from fallcatch.catch_core.lifecycle import Lifecycle

if TYPE_CHECKING:
    from fallcatch.catch_core.game import CatchGame

logger = logging.getLogger(__name__)


class InputMode(Enum):
    NONE = "none"
    DISCRETE_KEYS = "keys"
    POINTER_DRAG = "pointer"


class Direction(Enum):
    LEFT = "left"
    RIGHT = "right"


def _as_direction(direction: Union[Direction, str]) -> Direction:
    if isinstance(direction, Direction):
        return direction
    try:
        return Direction(str(direction).lower())
    except ValueError:
        raise ValueError(f"Unknown direction: {direction!r}") from None


def _as_mode(mode: Union[InputMode, str]) -> InputMode:
    if isinstance(mode, InputMode):
        return mode
    try:
        return InputMode(str(mode).lower())
    except ValueError:
        raise ValueError(f"Unknown input mode: {mode!r}") from None


@dataclass(frozen=True)
class InputFrame:
    """Input as seen by one update."""
    mode: InputMode
    left: bool
    right: bool
    pointer_target: Optional[float]

    def velocity(self, move_speed: float) -> float:
        """Additive discrete velocity; both directions held cancel out."""
        vx = 0.0
        if self.left:
            vx -= move_speed
        if self.right:
            vx += move_speed
        return vx


class InputBuffer:
    """
    Staging area written by device callbacks and read by the game.

    Keyboard and on-screen button flags are kept apart so releasing one
    source does not cancel a hold from the other.
    """

    def __init__(self) -> None:
        self.clear()

    def clear(self) -> None:
        self.mode = InputMode.NONE
        self.pointer_target: Optional[float] = None
        self._keys = {Direction.LEFT: False, Direction.RIGHT: False}
        self._buttons = {Direction.LEFT: False, Direction.RIGHT: False}

    def set_discrete_held(
        self,
        direction: Union[Direction, str],
        held: bool,
        touch: bool = False
    ) -> None:
        """
        Record a direction hold from a key (or an on-screen button if touch).

        Pressing engages discrete mode and drops any pointer target.
        """
        direction = _as_direction(direction)
        flags = self._buttons if touch else self._keys
        flags[direction] = bool(held)
        if held:
            self.mode = InputMode.DISCRETE_KEYS
            self.pointer_target = None

    def set_pointer_target(self, x: Optional[float]) -> None:
        """
        Record an absolute arena X for the paddle.

        A value engages pointer mode; None drops the target and leaves the
        mode unchanged.
        """
        if x is None:
            self.pointer_target = None
            return
        self.mode = InputMode.POINTER_DRAG
        self.pointer_target = float(x)

    def set_mode(self, mode: Union[InputMode, str]) -> None:
        mode = _as_mode(mode)
        self.mode = mode
        if mode is not InputMode.POINTER_DRAG:
            self.pointer_target = None

    def is_held(self, direction: Union[Direction, str]) -> bool:
        direction = _as_direction(direction)
        return self._keys[direction] or self._buttons[direction]

    def read(self) -> InputFrame:
        return InputFrame(
            mode=self.mode,
            left=self.is_held(Direction.LEFT),
            right=self.is_held(Direction.RIGHT),
            pointer_target=self.pointer_target
        )


LEFT_KEYS = frozenset({"left", "arrowleft", "a"})
RIGHT_KEYS = frozenset({"right", "arrowright", "d"})
PAUSE_KEYS = frozenset({"p"})
RESET_KEYS = frozenset({"r", "enter", "return"})


class InputAggregator:
    """
    Translates raw device events into staged input and lifecycle commands.

    Coordinates arriving from the device are mapped into arena space using
    the current view (the on-screen rectangle the arena is drawn into).
    """

    def __init__(
        self,
        game: "CatchGame",
        view_left: float = 0.0,
        view_width: Optional[float] = None
    ):
        self._game = game
        self._arena_width = game.config.arena.width
        self._view_left = view_left
        self._view_width = view_width if view_width is not None else float(self._arena_width)
        self._dragging = False
        self._active_touch: Optional[int] = None

    @property
    def dragging(self) -> bool:
        return self._dragging

    def set_view(self, view_left: float, view_width: float) -> None:
        """Update the on-screen arena rectangle after a resize."""
        if view_width <= 0:
            raise ValueError(f"view_width must be positive, got {view_width}")
        self._view_left = view_left
        self._view_width = view_width

    def device_to_arena_x(self, device_x: float) -> float:
        return (device_x - self._view_left) * (self._arena_width / self._view_width)

    # Keyboard

    def key_down(self, key: str) -> None:
        key = key.lower()
        started = self._start_on_first_interaction()
        if key in LEFT_KEYS:
            self._game.set_discrete_held(Direction.LEFT, True)
        elif key in RIGHT_KEYS:
            self._game.set_discrete_held(Direction.RIGHT, True)
        elif key in PAUSE_KEYS:
            if not started:
                self._game.pause_toggle()
        elif key in RESET_KEYS:
            self._game.reset()

    def key_up(self, key: str) -> None:
        key = key.lower()
        if key in LEFT_KEYS:
            self._game.set_discrete_held(Direction.LEFT, False)
        elif key in RIGHT_KEYS:
            self._game.set_discrete_held(Direction.RIGHT, False)

    # Pointer drag (mouse or touch)

    def start_drag(self, device_x: float, touch_id: Optional[int] = None) -> None:
        self._start_on_first_interaction()
        self._game.set_pointer_target(self.device_to_arena_x(device_x))
        self._dragging = True
        self._active_touch = touch_id

    def drag_move(self, device_x: float, touch_id: Optional[int] = None) -> None:
        if not self._dragging:
            return
        if touch_id is not None and touch_id != self._active_touch:
            return
        self._game.set_pointer_target(self.device_to_arena_x(device_x))

    def stop_drag(self, touch_id: Optional[int] = None) -> None:
        """
        End the drag.

        Mode stays POINTER_DRAG and the last target is kept, so the paddle
        rests where it was released.
        """
        if touch_id is not None and touch_id != self._active_touch:
            return
        self._dragging = False
        self._active_touch = None

    # On-screen buttons

    def press_touch_button(self, direction: Union[Direction, str], pressed: bool) -> None:
        self._game.set_discrete_held(direction, pressed, touch=True)

    def pause_button(self) -> None:
        self._game.pause_toggle()

    def restart_button(self) -> None:
        self._game.restart()

    # Window

    def focus_lost(self) -> None:
        self._game.focus_lost()

    def _start_on_first_interaction(self) -> bool:
        if self._game.lifecycle is not Lifecycle.NOT_STARTED:
            return False
        logger.debug("First interaction, starting session")
        return self._game.reset()
