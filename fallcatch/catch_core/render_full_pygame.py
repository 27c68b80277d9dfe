"""
Full Pygame Renderer
====================

Draws a GameSnapshot: grid background, item, paddle (on top of the item),
score panel, health pips and the pause/game-over overlays.
Supports both display mode (human play) and headless RGB output.
"""

from __future__ import annotations

from typing import Optional, Tuple

try:
    import pygame
    PYGAME_AVAILABLE = True
except ImportError:
    PYGAME_AVAILABLE = False

import numpy as np

from fallcatch.catch_core.config_loader import GameConfig, get_config
from fallcatch.catch_core.state_snapshot import EntityView, GameSnapshot

GRID_STEP = 40

# Overlay text per overlay kind
OVERLAY_TEXT = {
    "paused": ("PAUSED", "Press P to resume"),
    "game_over": ("GAME OVER", "Press Enter or R to restart"),
}


class PygameRenderer:
    """
    Renderer using pygame.

    The scene is drawn at arena resolution and then scaled into the target
    surface, keeping the arena's aspect ratio.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        sprite_loader: Optional[object] = None,
        use_sprites: bool = True
    ):
        """
        Initialize renderer.

        Args:
            config: Game configuration.
            sprite_loader: A SpriteLoader. Created lazily if None and use_sprites.
            use_sprites: Whether to draw sprites when available.
        """
        if not PYGAME_AVAILABLE:
            raise ImportError("pygame is required for PygameRenderer")

        if config is None:
            config = get_config()

        self._config = config
        self._use_sprites = use_sprites
        self._sprite_loader = sprite_loader

        if not pygame.get_init():
            pygame.init()

        # Display surface (created on demand)
        self._screen: Optional[pygame.Surface] = None
        self._screen_size: Optional[Tuple[int, int]] = None

        self._arena_size = (config.arena.width, config.arena.height)
        self._frame = pygame.Surface(self._arena_size)

        # Fonts
        pygame.font.init()
        self._font_label = pygame.font.Font(None, 24)
        self._font_score = pygame.font.Font(None, 30)
        self._font_title = pygame.font.Font(None, 64)
        self._font_subtitle = pygame.font.Font(None, 26)
        self._font_tip = pygame.font.Font(None, 18)

        # Colors
        self._bg_color = (18, 18, 32)
        self._grid_color = (255, 255, 255, 38)
        self._item_color = (122, 162, 255)
        self._player_color = (41, 209, 126)
        self._panel_fill = (0, 0, 0, 90)
        self._panel_border = (255, 255, 255, 64)
        self._text_color = (255, 255, 255)
        self._score_color = (41, 209, 126)
        self._health_on = (255, 115, 138)
        self._health_off = (58, 58, 95)
        self._health_shine = (255, 255, 255, 64)

        self._grid_surface = self._build_grid()

    def _get_sprite_loader(self):
        """Lazy load the sprite loader."""
        if self._sprite_loader is None and self._use_sprites:
            from fallcatch.catch_core.sprite_loader import SpriteLoader
            self._sprite_loader = SpriteLoader()
        return self._sprite_loader if self._use_sprites else None

    def _build_grid(self) -> pygame.Surface:
        width, height = self._arena_size
        grid = pygame.Surface(self._arena_size, pygame.SRCALPHA)
        for x in range(0, width + 1, GRID_STEP):
            pygame.draw.line(grid, self._grid_color, (x, 0), (x, height))
        for y in range(0, height + 1, GRID_STEP):
            pygame.draw.line(grid, self._grid_color, (0, y), (width, y))
        return grid

    def render(
        self,
        snapshot: GameSnapshot,
        width: Optional[int] = None,
        height: Optional[int] = None
    ) -> np.ndarray:
        """
        Render to RGB array (for agent observation).

        Args:
            snapshot: State to draw.
            width: Output image width. Arena width if None.
            height: Output image height. Arena height if None.

        Returns:
            (height, width, 3) uint8 array.
        """
        width = width or self._arena_size[0]
        height = height or self._arena_size[1]
        surface = pygame.Surface((width, height))
        self.draw(surface, snapshot)
        array = pygame.surfarray.array3d(surface)
        return np.transpose(array, (1, 0, 2))

    def render_to_screen(
        self,
        snapshot: GameSnapshot,
        window_width: int = 480,
        window_height: int = 720
    ) -> pygame.Rect:
        """
        Render to pygame window.

        Returns:
            The on-screen rectangle the arena occupies.
        """
        if self._screen is None or self._screen_size != (window_width, window_height):
            self._screen = pygame.display.set_mode((window_width, window_height))
            self._screen_size = (window_width, window_height)
            pygame.display.set_caption("Fall Catch")

        return self.draw(self._screen, snapshot)

    def view_rect(self, surface_size: Tuple[int, int]) -> pygame.Rect:
        """Where the arena lands inside a surface of the given size."""
        arena_w, arena_h = self._arena_size
        scale = min(surface_size[0] / arena_w, surface_size[1] / arena_h)
        w = int(arena_w * scale)
        h = int(arena_h * scale)
        return pygame.Rect((surface_size[0] - w) // 2, (surface_size[1] - h) // 2, w, h)

    def draw(self, surface: pygame.Surface, snapshot: GameSnapshot) -> pygame.Rect:
        """
        Draw the scene into any surface, letterboxed to the arena aspect.

        Returns:
            The rectangle the arena was drawn into.
        """
        frame = self._frame
        frame.fill(self._bg_color)
        frame.blit(self._grid_surface, (0, 0))

        # Item first so the paddle renders on top
        self._draw_entity(frame, "item", snapshot.item, self._item_color)
        self._draw_entity(frame, "player", snapshot.paddle, self._player_color)

        self._draw_ui(frame, snapshot)

        rect = self.view_rect(surface.get_size())
        surface.fill((0, 0, 0))
        if rect.size == self._arena_size:
            surface.blit(frame, rect.topleft)
        else:
            surface.blit(pygame.transform.smoothscale(frame, rect.size), rect.topleft)
        return rect

    def _draw_entity(
        self,
        surface: pygame.Surface,
        role: str,
        entity: EntityView,
        fallback_color: Tuple[int, int, int]
    ) -> None:
        left = int(entity.x - entity.w / 2)
        top = int(entity.y - entity.h / 2)
        w = int(entity.w)
        h = int(entity.h)

        loader = self._get_sprite_loader()
        sprite = loader.get_sprite(role, w, h) if loader is not None else None
        if sprite is not None:
            surface.blit(sprite, (left, top))
        else:
            pygame.draw.rect(surface, fallback_color, pygame.Rect(left, top, w, h))

    def _draw_ui(self, surface: pygame.Surface, snapshot: GameSnapshot) -> None:
        """Draw score panel, health pips, overlays and the asset tip."""
        width, height = self._arena_size

        # Score panel (top left)
        panel = pygame.Surface((130, 46), pygame.SRCALPHA)
        panel.fill(self._panel_fill)
        pygame.draw.rect(panel, self._panel_border, panel.get_rect(), 1)
        surface.blit(panel, (12, 12))
        surface.blit(self._font_label.render("Score", True, self._text_color), (20, 16))
        surface.blit(
            self._font_score.render(str(snapshot.score), True, self._score_color),
            (20, 34)
        )

        # Health pips (top right)
        bar_w, gap = 24, 8
        count = snapshot.health_max
        x0 = width - (count * bar_w + (count - 1) * gap) - 16
        y0 = 18
        shine = pygame.Surface((bar_w, 6), pygame.SRCALPHA)
        shine.fill(self._health_shine)
        for i in range(count):
            x = x0 + i * (bar_w + gap)
            color = self._health_on if i < snapshot.health else self._health_off
            pygame.draw.rect(surface, color, pygame.Rect(x, y0, bar_w, 12))
            surface.blit(shine, (x, y0 + 14))

        overlay = snapshot.overlay
        if overlay is not None:
            title, subtitle = OVERLAY_TEXT[overlay]
            self._draw_overlay(surface, title, subtitle)

        loader = self._get_sprite_loader()
        if loader is None or not loader.all_loaded:
            tip = self._font_tip.render(
                "Tip: put player.png and item.png in the assets folder",
                True, self._text_color
            )
            tip.set_alpha(204)
            surface.blit(tip, (16, height - 16 - tip.get_height()))

    def _draw_overlay(self, surface: pygame.Surface, title: str, subtitle: str) -> None:
        width, height = self._arena_size
        shade = pygame.Surface(self._arena_size, pygame.SRCALPHA)
        shade.fill((0, 0, 0, 140))
        surface.blit(shade, (0, 0))

        title_surface = self._font_title.render(title, True, self._text_color)
        surface.blit(
            title_surface,
            ((width - title_surface.get_width()) // 2, height // 2 - 10 - title_surface.get_height())
        )
        subtitle_surface = self._font_subtitle.render(subtitle, True, self._text_color)
        surface.blit(
            subtitle_surface,
            ((width - subtitle_surface.get_width()) // 2, height // 2 + 10)
        )

    def handle_events(self) -> bool:
        """Handle pygame events. Returns False if quit requested."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                return False
            if event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                return False
        return True

    def close(self) -> None:
        """Clean up pygame resources."""
        if self._screen is not None:
            self._screen = None
