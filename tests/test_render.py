"""
Tests for the pygame renderer and sprite loading (headless).
"""

import logging
import os

import pytest
import numpy as np

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
pygame = pytest.importorskip("pygame")

from fallcatch.catch_core.config_loader import load_config
from fallcatch.catch_core.env_gym import CatchEnv
from fallcatch.catch_core.game import CatchGame
from fallcatch.catch_core.render_full_pygame import PygameRenderer
from fallcatch.catch_core import sprite_loader
from fallcatch.catch_core.sprite_loader import SpriteLoader
from tools.play_human import HumanPlayer


@pytest.fixture
def config():
    return load_config()


@pytest.fixture
def empty_sprites(tmp_path):
    return SpriteLoader(tmp_path)


@pytest.fixture
def renderer(config, empty_sprites):
    return PygameRenderer(config, sprite_loader=empty_sprites)


class TestSpriteLoader:

    def test_missing_sprites(self, empty_sprites):
        assert not empty_sprites.has_sprite("player")
        assert not empty_sprites.all_loaded
        assert empty_sprites.natural_size("item") is None
        assert empty_sprites.get_sprite("item", 48, 48) is None

    def test_loads_and_scales(self, tmp_path):
        surface = pygame.Surface((120, 80))
        surface.fill((200, 50, 50))
        pygame.image.save(surface, str(tmp_path / "player.png"))

        loader = SpriteLoader(tmp_path)

        assert loader.has_sprite("player")
        assert not loader.all_loaded
        assert loader.natural_size("player") == (120, 80)
        scaled = loader.get_sprite("player", 72, 72)
        assert scaled.get_size() == (72, 72)
        assert loader.get_sprite("player", 72, 72) is scaled

    def test_sprite_sizes_feed_game(self, tmp_path, config):
        surface = pygame.Surface((120, 80))
        pygame.image.save(surface, str(tmp_path / "player.png"))
        loader = SpriteLoader(tmp_path)

        game = CatchGame(config=config, seed=1)
        game.fit_sprites(loader.natural_size("player"), loader.natural_size("item"))

        assert game.paddle.w == pytest.approx(80 * 0.9)
        assert game.item.w == 48


class TestPygameRenderer:

    def test_render_array_shape(self, renderer, config):
        game = CatchGame(config=config, seed=1)
        frame = renderer.render(game.snapshot())

        assert frame.shape == (720, 480, 3)
        assert frame.dtype == np.uint8

    def test_render_custom_size(self, renderer, config):
        game = CatchGame(config=config, seed=1)
        frame = renderer.render(game.snapshot(), 240, 360)
        assert frame.shape == (360, 240, 3)

    def test_view_rect_letterboxes(self, renderer):
        rect = renderer.view_rect((960, 720))
        assert rect.size == (480, 720)
        assert rect.left == 240

    def test_overlay_changes_frame(self, renderer, config):
        game = CatchGame(config=config, seed=1)
        game.reset()
        running = renderer.render(game.snapshot())
        game.pause_toggle()
        paused = renderer.render(game.snapshot())

        assert not np.array_equal(running, paused)

    def test_env_rgb_array(self):
        env = CatchEnv(render_mode="rgb_array")
        env.reset(seed=3)
        frame = env.render()
        assert frame.shape == (720, 480, 3)
        env.close()

    def test_env_human_fits_sprites(self, tmp_path, monkeypatch, config):
        surface = pygame.Surface((200, 200))
        pygame.image.save(surface, str(tmp_path / "player.png"))
        monkeypatch.setattr(sprite_loader, "SPRITES_DIR", tmp_path)

        env = CatchEnv(render_mode="human")
        env.reset(seed=3)

        assert env.game.paddle.w == pytest.approx(96 * 0.9)
        assert env.game.paddle.x == config.arena.width / 2
        assert env.game.item.w == 48
        env.render()
        env.close()

    def test_env_rgb_array_keeps_fallback_sizes(self, tmp_path, monkeypatch):
        pygame.image.save(pygame.Surface((200, 200)), str(tmp_path / "player.png"))
        monkeypatch.setattr(sprite_loader, "SPRITES_DIR", tmp_path)

        env = CatchEnv(render_mode="rgb_array")
        env.reset(seed=3)
        env.render()

        assert env.game.paddle.w == 72
        env.close()


class TestHumanPlayer:

    def test_fps_defaults_to_config(self, config):
        player = HumanPlayer(config=config, seed=1)
        assert player.target_fps == config.loop.target_fps

    def test_fps_override(self, config):
        player = HumanPlayer(config=config, seed=1, target_fps=30)
        assert player.target_fps == 30

    def test_lifecycle_change_logged(self, config, caplog):
        player = HumanPlayer(config=config, seed=1)
        player._game.reset()

        with caplog.at_level(logging.DEBUG, logger="tools.play_human"):
            player._render(player._game.snapshot())

        assert any(
            r.name == "tools.play_human" and "running" in r.getMessage()
            for r in caplog.records
        )
