"""
Tests for configuration loading and validation.
"""

import dataclasses

import pytest
import yaml

from fallcatch.catch_core.config_loader import (
    get_config,
    load_config,
    parse_config,
    reload_config,
    validate_config,
)


@pytest.fixture
def config():
    return load_config()


@pytest.fixture
def raw_config():
    return {
        "arena": {"width": 480, "height": 720},
        "player": {"move_speed": 520},
        "item": {"fall_base": 220, "fall_scale": 100},
        "rules": {"health_max": 3},
    }


class TestDefaultConfig:
    """Test the shipped game_config.yaml."""

    def test_arena_size(self, config):
        assert config.arena.width == 480
        assert config.arena.height == 720

    def test_movement_and_fall_constants(self, config):
        assert config.move_speed == 520
        assert config.item.fall_base == 220
        assert config.item.fall_scale == 100
        assert config.item.milestone_every == 10

    def test_rules(self, config):
        assert config.health_max == 3
        assert config.rules.catch_grace == 6

    def test_sprite_fit_defaults(self, config):
        assert config.player.fit.fallback_width == 72
        assert config.player.fit.sprite_cap == 96
        assert config.item.fit.fallback_width == 48
        assert config.item.fit.sprite_cap == 64

    def test_config_is_frozen(self, config):
        with pytest.raises(dataclasses.FrozenInstanceError):
            config.arena.width = 100

    def test_get_config_is_cached(self):
        assert get_config() is get_config()

    def test_reload_config_replaces_cache(self):
        first = get_config()
        second = reload_config()
        assert second is get_config()
        assert second == first


class TestParseConfig:
    """Test building configs from raw mappings."""

    def test_optional_sections_use_defaults(self, raw_config):
        config = parse_config(raw_config)

        assert config.rules.catch_grace == 6
        assert config.loop.max_dt == pytest.approx(0.1)
        assert config.caps.max_frames == 36000
        assert config.player.bottom_margin == 80

    def test_missing_required_section_raises(self, raw_config):
        del raw_config["arena"]
        with pytest.raises(KeyError):
            parse_config(raw_config)

    def test_non_positive_value_raises(self, raw_config):
        raw_config["player"]["move_speed"] = 0
        with pytest.raises(ValueError, match="move_speed"):
            parse_config(raw_config)

    def test_negative_grace_raises(self, raw_config):
        raw_config["rules"]["catch_grace"] = -1
        with pytest.raises(ValueError, match="catch_grace"):
            parse_config(raw_config)

    def test_paddle_wider_than_arena_raises(self, raw_config):
        raw_config["arena"]["width"] = 50
        with pytest.raises(ValueError, match="Paddle width"):
            parse_config(raw_config)

    def test_item_wider_than_arena_raises(self, raw_config):
        raw_config["item"]["fallback_width"] = 600
        with pytest.raises(ValueError, match="Item width"):
            parse_config(raw_config)

    def test_item_sprite_cap_wider_than_arena_raises(self, raw_config):
        raw_config["item"]["sprite_cap"] = 1000
        with pytest.raises(ValueError, match="Item width"):
            parse_config(raw_config)


class TestLoadConfig:
    """Test loading from disk."""

    def test_missing_file_raises(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config(str(tmp_path / "nope.yaml"))

    def test_custom_file(self, tmp_path, raw_config):
        raw_config["rules"]["health_max"] = 5
        path = tmp_path / "custom.yaml"
        path.write_text(yaml.safe_dump(raw_config))

        config = load_config(str(path))

        assert config.health_max == 5

    def test_validate_rejects_replaced_values(self, config):
        bad = dataclasses.replace(
            config, loop=dataclasses.replace(config.loop, max_dt=0.0)
        )
        with pytest.raises(ValueError, match="max_dt"):
            validate_config(bad)
