"""
Configuration Loader
====================

Loads and validates game_config.yaml, providing typed access to all parameters.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import yaml


@dataclass(frozen=True)
class ArenaConfig:
    """Logical play surface size."""
    width: int
    height: int


@dataclass(frozen=True)
class SpriteFitConfig:
    """Sizing rule shared by the paddle and the falling item."""
    scale: float           # Multiplier applied to the capped sprite edge
    sprite_cap: int        # Largest source edge considered (pixels)
    fallback_width: float  # Used when no sprite is available
    fallback_height: float


@dataclass(frozen=True)
class PlayerConfig:
    """Paddle movement and placement."""
    move_speed: float
    fit: SpriteFitConfig
    bottom_margin: float
    bottom_ratio: float


@dataclass(frozen=True)
class ItemConfig:
    """Falling item speed and placement."""
    fall_base: float
    fall_scale: float
    milestone_every: int
    fit: SpriteFitConfig
    spawn_jitter: float


@dataclass(frozen=True)
class RulesConfig:
    """Health and collision tuning."""
    health_max: int
    catch_grace: float


@dataclass(frozen=True)
class LoopConfig:
    """Frame timing."""
    max_dt: float
    target_fps: int
    env_dt: float
    frame_skip: int


@dataclass(frozen=True)
class CapsConfig:
    """Environment limits."""
    max_frames: int


@dataclass(frozen=True)
class GameConfig:
    """
    Complete game configuration loaded from YAML.

    All values are immutable to prevent accidental modification during runtime.
    """
    arena: ArenaConfig
    player: PlayerConfig
    item: ItemConfig
    rules: RulesConfig
    loop: LoopConfig
    caps: CapsConfig

    @property
    def move_speed(self) -> float:
        return self.player.move_speed

    @property
    def health_max(self) -> int:
        return self.rules.health_max


def _parse_fit(data: dict, defaults: SpriteFitConfig) -> SpriteFitConfig:
    """Parse sprite sizing keys from a player/item section."""
    return SpriteFitConfig(
        scale=float(data.get("scale", defaults.scale)),
        sprite_cap=int(data.get("sprite_cap", defaults.sprite_cap)),
        fallback_width=float(data.get("fallback_width", defaults.fallback_width)),
        fallback_height=float(data.get("fallback_height", defaults.fallback_height)),
    )


def _require_positive(name: str, value: float) -> None:
    if value <= 0:
        raise ValueError(f"{name} must be positive, got {value}")


def validate_config(config: GameConfig) -> None:
    """
    Validate configuration consistency.

    Raises:
        ValueError: If any value is out of range.
    """
    _require_positive("arena.width", config.arena.width)
    _require_positive("arena.height", config.arena.height)

    _require_positive("player.move_speed", config.player.move_speed)
    _require_positive("player.bottom_margin", config.player.bottom_margin)
    _require_positive("player.bottom_ratio", config.player.bottom_ratio)

    _require_positive("item.fall_base", config.item.fall_base)
    _require_positive("item.fall_scale", config.item.fall_scale)
    _require_positive("item.milestone_every", config.item.milestone_every)
    _require_positive("item.spawn_jitter", config.item.spawn_jitter)

    for section, fit in (("player", config.player.fit), ("item", config.item.fit)):
        _require_positive(f"{section}.scale", fit.scale)
        _require_positive(f"{section}.sprite_cap", fit.sprite_cap)
        _require_positive(f"{section}.fallback_width", fit.fallback_width)
        _require_positive(f"{section}.fallback_height", fit.fallback_height)

    _require_positive("rules.health_max", config.rules.health_max)
    if config.rules.catch_grace < 0:
        raise ValueError(f"rules.catch_grace must not be negative, got {config.rules.catch_grace}")

    _require_positive("loop.max_dt", config.loop.max_dt)
    _require_positive("loop.target_fps", config.loop.target_fps)
    _require_positive("loop.env_dt", config.loop.env_dt)
    _require_positive("loop.frame_skip", config.loop.frame_skip)
    _require_positive("caps.max_frames", config.caps.max_frames)

    # Paddle and item must fit inside the arena or their x ranges invert
    for label, fit in (("Paddle", config.player.fit), ("Item", config.item.fit)):
        widest = max(fit.fallback_width, fit.sprite_cap * fit.scale)
        if widest > config.arena.width:
            raise ValueError(
                f"{label} width ({widest}) exceeds arena width ({config.arena.width})"
            )


_PLAYER_FIT_DEFAULTS = SpriteFitConfig(scale=0.9, sprite_cap=96, fallback_width=72, fallback_height=72)
_ITEM_FIT_DEFAULTS = SpriteFitConfig(scale=0.9, sprite_cap=64, fallback_width=48, fallback_height=48)


def parse_config(raw: dict) -> GameConfig:
    """
    Build a validated GameConfig from an already-parsed YAML mapping.

    Args:
        raw: Mapping with the same layout as game_config.yaml.

    Returns:
        Validated GameConfig instance.
    """
    arena_data = raw["arena"]
    arena = ArenaConfig(
        width=int(arena_data["width"]),
        height=int(arena_data["height"])
    )

    player_data = raw["player"]
    player = PlayerConfig(
        move_speed=float(player_data["move_speed"]),
        fit=_parse_fit(player_data, _PLAYER_FIT_DEFAULTS),
        bottom_margin=float(player_data.get("bottom_margin", 80)),
        bottom_ratio=float(player_data.get("bottom_ratio", 0.65))
    )

    item_data = raw["item"]
    item = ItemConfig(
        fall_base=float(item_data["fall_base"]),
        fall_scale=float(item_data["fall_scale"]),
        milestone_every=int(item_data.get("milestone_every", 10)),
        fit=_parse_fit(item_data, _ITEM_FIT_DEFAULTS),
        spawn_jitter=float(item_data.get("spawn_jitter", 200))
    )

    rules_data = raw["rules"]
    rules = RulesConfig(
        health_max=int(rules_data["health_max"]),
        catch_grace=float(rules_data.get("catch_grace", 6))
    )

    loop_data = raw.get("loop", {})
    loop = LoopConfig(
        max_dt=float(loop_data.get("max_dt", 0.1)),
        target_fps=int(loop_data.get("target_fps", 60)),
        env_dt=float(loop_data.get("env_dt", 1.0 / 60.0)),
        frame_skip=int(loop_data.get("frame_skip", 1))
    )

    caps_data = raw.get("caps", {})
    caps = CapsConfig(
        max_frames=int(caps_data.get("max_frames", 36000))
    )

    config = GameConfig(
        arena=arena,
        player=player,
        item=item,
        rules=rules,
        loop=loop,
        caps=caps
    )

    validate_config(config)
    return config


def load_config(config_path: Optional[str] = None) -> GameConfig:
    """
    Load and validate game configuration from YAML.

    Args:
        config_path: Path to game_config.yaml. If None, uses default location.

    Returns:
        Validated GameConfig instance.

    Raises:
        FileNotFoundError: If config file doesn't exist.
        ValueError: If config validation fails.
    """
    if config_path is None:
        config_path = os.path.join(
            os.path.dirname(os.path.dirname(__file__)),
            "game_config.yaml"
        )

    config_path = Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, "r") as f:
        raw = yaml.safe_load(f)

    return parse_config(raw)


# Module-level cache for convenience
_cached_config: Optional[GameConfig] = None


def get_config() -> GameConfig:
    """Get the cached game configuration, loading if necessary."""
    global _cached_config
    if _cached_config is None:
        _cached_config = load_config()
    return _cached_config


def reload_config(config_path: Optional[str] = None) -> GameConfig:
    """Reload the configuration (useful for testing)."""
    global _cached_config
    _cached_config = load_config(config_path)
    return _cached_config
