"""
Sprite Loader
=============

Loads the paddle and item sprites. Either file may be missing; callers get
None for it and fall back to plain rectangles.
"""

from __future__ import annotations

from pathlib import Path
from typing import Dict, Optional, Tuple

try:
    import pygame
    PYGAME_AVAILABLE = True
except ImportError:
    PYGAME_AVAILABLE = False

SPRITES_DIR = Path(__file__).parent.parent / "assets"

SPRITE_FILES = {
    "player": "player.png",
    "item": "item.png",
}


class SpriteLoader:
    """
    Loads and caches sprites by role ("player", "item").

    Scaled copies are cached per (role, size).
    """

    def __init__(self, sprites_dir: Optional[Path] = None):
        """
        Initialize sprite loader.

        Args:
            sprites_dir: Directory holding player.png and item.png. Uses default if None.
        """
        if not PYGAME_AVAILABLE:
            raise ImportError("pygame required for sprite loading")

        self._sprites_dir = Path(sprites_dir) if sprites_dir is not None else SPRITES_DIR
        self._sprites: Dict[str, pygame.Surface] = {}
        self._scaled_cache: Dict[Tuple[str, int, int], pygame.Surface] = {}

        self._load()

    def _load(self) -> None:
        for role, filename in SPRITE_FILES.items():
            path = self._sprites_dir / filename
            if not path.exists():
                continue
            try:
                image = pygame.image.load(str(path))
            except pygame.error:
                # Unreadable file behaves like a missing one
                continue
            if pygame.display.get_surface() is not None:
                image = image.convert_alpha()
            self._sprites[role] = image

    def has_sprite(self, role: str) -> bool:
        return role in self._sprites

    @property
    def all_loaded(self) -> bool:
        return all(role in self._sprites for role in SPRITE_FILES)

    def natural_size(self, role: str) -> Optional[Tuple[int, int]]:
        """Source (width, height) of a sprite, or None if not loaded."""
        sprite = self._sprites.get(role)
        if sprite is None:
            return None
        return sprite.get_size()

    def get_sprite(self, role: str, width: int, height: int) -> Optional[pygame.Surface]:
        """
        Get a sprite scaled to the given size.

        Returns:
            Scaled surface, or None if the sprite is not loaded.
        """
        if role not in self._sprites:
            return None

        cache_key = (role, width, height)
        if cache_key not in self._scaled_cache:
            self._scaled_cache[cache_key] = pygame.transform.smoothscale(
                self._sprites[role], (max(1, width), max(1, height))
            )
        return self._scaled_cache[cache_key]
