"""
Human Play Mode
================

Play Fall Catch interactively with keyboard, mouse or touch.

Controls:
    - Left/Right or A/D: Move paddle
    - Mouse/touch drag: Move paddle to the pointer
    - On-screen buttons: Left, Right, Pause, Restart
    - P: Pause/resume
    - Enter/R: Restart after game over
    - ESC: Quit

The game starts on the first key press or click and pauses itself when the
window loses focus.

Usage:
    python -m tools.play_human [--seed SEED] [--scale SCALE] [--fps FPS]
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Dict, Optional

try:
    import pygame
    PYGAME_AVAILABLE = True
except ImportError:
    PYGAME_AVAILABLE = False

from fallcatch.catch_core.config_loader import load_config, GameConfig
from fallcatch.catch_core.game import CatchGame
from fallcatch.catch_core.input_state import Direction, InputAggregator
from fallcatch.catch_core.loop_driver import LoopDriver
from fallcatch.catch_core.state_snapshot import GameSnapshot

logger = logging.getLogger(__name__)

BUTTON_BAR_HEIGHT = 80


class TouchButtons:
    """On-screen Left / Right / Pause / Restart buttons below the arena."""

    LABELS = (("left", "<"), ("pause", "II"), ("restart", "R"), ("right", ">"))

    def __init__(self, window_width: int, top: int, height: int):
        self._font = pygame.font.Font(None, 40)
        self._fill = (40, 40, 64)
        self._fill_pressed = (70, 70, 110)
        self._border = (255, 255, 255)
        self._text = (255, 255, 255)

        gap = 10
        width = (window_width - gap * (len(self.LABELS) + 1)) // len(self.LABELS)
        self.rects: Dict[str, pygame.Rect] = {}
        for i, (name, _) in enumerate(self.LABELS):
            self.rects[name] = pygame.Rect(gap + i * (width + gap), top + gap, width, height - 2 * gap)
        self.pressed: Dict[str, bool] = {name: False for name, _ in self.LABELS}

    def hit(self, pos) -> Optional[str]:
        for name, rect in self.rects.items():
            if rect.collidepoint(pos):
                return name
        return None

    def draw(self, screen: pygame.Surface) -> None:
        for name, label in self.LABELS:
            rect = self.rects[name]
            color = self._fill_pressed if self.pressed[name] else self._fill
            pygame.draw.rect(screen, color, rect, border_radius=10)
            pygame.draw.rect(screen, self._border, rect, 2, border_radius=10)
            text = self._font.render(label, True, self._text)
            screen.blit(text, text.get_rect(center=rect.center))


class HumanPlayer:
    """
    Human-playable catch game driven by a LoopDriver.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        seed: Optional[int] = None,
        scale: float = 1.0,
        target_fps: Optional[int] = None
    ):
        if not PYGAME_AVAILABLE:
            raise ImportError("pygame required. Install: pip install pygame")

        if config is None:
            config = load_config()

        from fallcatch.catch_core.render_full_pygame import PygameRenderer
        from fallcatch.catch_core.sprite_loader import SpriteLoader

        self._config = config
        self._target_fps = target_fps if target_fps is not None else config.loop.target_fps

        pygame.init()
        self._window_width = int(config.arena.width * scale)
        self._arena_height = int(config.arena.height * scale)
        self._window_height = self._arena_height + BUTTON_BAR_HEIGHT
        self._screen = pygame.display.set_mode((self._window_width, self._window_height))
        pygame.display.set_caption("Fall Catch")
        self._clock = pygame.time.Clock()

        # Game and collaborators
        self._game = CatchGame(config=config, seed=seed)
        sprites = SpriteLoader()
        self._game.fit_sprites(sprites.natural_size("player"), sprites.natural_size("item"))
        self._renderer = PygameRenderer(config, sprite_loader=sprites)
        self._arena_surface = self._screen.subsurface(
            pygame.Rect(0, 0, self._window_width, self._arena_height)
        )
        view = self._renderer.view_rect(self._arena_surface.get_size())
        self._input = InputAggregator(self._game, view.left, view.width)
        self._buttons = TouchButtons(self._window_width, self._arena_height, BUTTON_BAR_HEIGHT)
        self._driver = LoopDriver(self._game, render=self._render)

        self._running = True
        self._last_state = self._game.lifecycle

    @property
    def target_fps(self) -> int:
        return self._target_fps

    def run(self) -> int:
        """Run the game loop. Returns final score."""
        print("=== Fall Catch ===")
        print("Arrows/A-D or drag to move, P to pause, Enter/R to restart, ESC to quit")
        print("Press any key or click to start")
        print()

        while self._running:
            self._handle_events()
            result = self._driver.tick()
            if result.caught:
                print(f"  +1 (Total: {result.snapshot.score})")
            if result.game_over:
                print(f"\nGAME OVER - Score: {result.snapshot.score}")
            pygame.display.flip()
            self._clock.tick(self._target_fps)

        pygame.quit()
        return self._game.score

    def _handle_events(self) -> None:
        """Translate pygame events into aggregator calls."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self._running = False

            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    self._running = False
                else:
                    self._input.key_down(pygame.key.name(event.key))

            elif event.type == pygame.KEYUP:
                self._input.key_up(pygame.key.name(event.key))

            elif event.type == pygame.WINDOWFOCUSLOST:
                self._input.focus_lost()

            # Mouse events synthesized from touches are handled as FINGER events
            elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1 and not getattr(event, "touch", False):
                self._press(event.pos)
            elif event.type == pygame.MOUSEMOTION and not getattr(event, "touch", False):
                self._input.drag_move(event.pos[0])
            elif event.type == pygame.MOUSEBUTTONUP and event.button == 1 and not getattr(event, "touch", False):
                self._release()

            elif event.type == pygame.FINGERDOWN:
                self._press(self._finger_pos(event), touch_id=event.finger_id)
            elif event.type == pygame.FINGERMOTION:
                self._input.drag_move(self._finger_pos(event)[0], touch_id=event.finger_id)
            elif event.type == pygame.FINGERUP:
                self._release(touch_id=event.finger_id)

    def _finger_pos(self, event):
        return (event.x * self._window_width, event.y * self._window_height)

    def _press(self, pos, touch_id: Optional[int] = None) -> None:
        button = self._buttons.hit(pos)
        if button is None:
            self._input.start_drag(pos[0], touch_id=touch_id)
            return

        self._buttons.pressed[button] = True
        if button == "left":
            self._input.press_touch_button(Direction.LEFT, True)
        elif button == "right":
            self._input.press_touch_button(Direction.RIGHT, True)
        elif button == "pause":
            self._input.pause_button()
        elif button == "restart":
            self._input.restart_button()

    def _release(self, touch_id: Optional[int] = None) -> None:
        for name in ("left", "right"):
            if self._buttons.pressed[name]:
                self._input.press_touch_button(name, False)
        for name in self._buttons.pressed:
            self._buttons.pressed[name] = False
        self._input.stop_drag(touch_id=touch_id)

    def _render(self, snapshot: GameSnapshot) -> None:
        """Draw the arena and the button bar."""
        self._renderer.draw(self._arena_surface, snapshot)
        self._screen.fill((0, 0, 0), pygame.Rect(0, self._arena_height, self._window_width, BUTTON_BAR_HEIGHT))
        self._buttons.draw(self._screen)

        if snapshot.lifecycle is not self._last_state:
            logger.debug("Now %s", snapshot.lifecycle.value)
            self._last_state = snapshot.lifecycle


def main():
    parser = argparse.ArgumentParser(description="Play Fall Catch interactively")
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    parser.add_argument("--scale", type=float, default=1.0, help="Window scale (default: 1.0)")
    parser.add_argument("--fps", type=int, default=None,
                        help="Target FPS (default: loop.target_fps from config)")
    parser.add_argument("--config", type=str, default=None, help="Path to game_config.yaml")
    parser.add_argument("--log-level", type=str, default="WARNING", help="Logging level")

    args = parser.parse_args()

    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )

    try:
        config = load_config(args.config)
        player = HumanPlayer(
            config=config,
            seed=args.seed,
            scale=args.scale,
            target_fps=args.fps
        )
        score = player.run()
        print(f"\nFinal Score: {score}")
        return 0
    except ImportError as e:
        print(f"Error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
