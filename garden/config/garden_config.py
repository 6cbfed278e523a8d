"""Lightweight garden configuration helpers."""

import os
from dataclasses import dataclass, field

from garden.config import display, flowers, render, wind
from garden.exceptions import ConfigurationError


@dataclass
class DisplayConfig:
    """Frame timing and ground level."""

    screen_width: int = display.SCREEN_WIDTH
    screen_height: int = display.SCREEN_HEIGHT
    frame_rate: int = display.FRAME_RATE
    reference_frame_rate: float = display.REFERENCE_FRAME_RATE
    baseline_fraction: float = display.BASELINE_FRACTION


@dataclass
class FlowerConfig:
    """Capacity, generative ranges and growth settings."""

    max_flowers: int = flowers.MAX_FLOWERS
    max_stems: int = flowers.MAX_STEMS
    petal_count_range: tuple[int, int] = flowers.PETAL_COUNT_RANGE
    petal_radius_range: tuple[float, float] = flowers.PETAL_RADIUS_RANGE
    sway_frequency_range: tuple[float, float] = flowers.SWAY_FREQUENCY_RANGE
    stem_curvature_range: tuple[float, float] = flowers.STEM_CURVATURE_RANGE
    stem_bend_range: tuple[float, float] = flowers.STEM_BEND_RANGE
    default_stem_height: float = flowers.DEFAULT_STEM_HEIGHT
    initial_scale: float = flowers.INITIAL_SCALE
    max_scale: float = flowers.MAX_SCALE
    grow_tick_seconds: float = flowers.GROW_TICK_SECONDS
    grow_increment: float = flowers.GROW_INCREMENT
    pick_threshold: float = flowers.PICK_THRESHOLD


@dataclass
class WindConfig:
    """Wind defaults, decay and gust shaping."""

    strength_cap: float = wind.WIND_STRENGTH_CAP
    default_strength: float = wind.DEFAULT_WIND_STRENGTH
    default_direction: float = wind.DEFAULT_WIND_DIRECTION
    decay_rate: float = wind.DEFAULT_DECAY_RATE
    snap_epsilon: float = wind.WIND_SNAP_EPSILON
    gyro_direction_gain: float = wind.GYRO_DIRECTION_GAIN
    gyro_strength_gain: float = wind.GYRO_STRENGTH_GAIN
    swipe_max_strength: float = wind.SWIPE_MAX_STRENGTH
    gust_rise_seconds: float = wind.GUST_RISE_SECONDS
    gust_settle_seconds: float = wind.GUST_SETTLE_SECONDS
    gust_rest_strength: float = wind.GUST_REST_STRENGTH


@dataclass
class RenderConfig:
    """Layer toggles and per-layer counts."""

    grain_dot_count: int = render.GRAIN_DOT_COUNT
    star_count: int = render.STAR_COUNT
    star_seed: int = render.STAR_SEED
    grass_blade_count: int = render.GRASS_BLADE_COUNT
    stamen_count: int = render.STAMEN_COUNT
    firefly_count: int = render.FIREFLY_COUNT
    parallax_max_offset: float = render.PARALLAX_MAX_OFFSET
    curve_segments: int = render.CURVE_SEGMENTS


def _env_flag(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() not in {"0", "false", "no", "off"}


@dataclass
class GardenConfig:
    """Top-level configuration injected into the garden core.

    Attributes:
        strict_ranges: Raise on ``lo > hi`` PRNG ranges instead of clamping.
        seed: Optional master seed; ``None`` seeds from the wall clock.
    """

    strict_ranges: bool = True
    seed: int | None = None
    display: DisplayConfig = field(default_factory=DisplayConfig)
    flowers: FlowerConfig = field(default_factory=FlowerConfig)
    wind: WindConfig = field(default_factory=WindConfig)
    render: RenderConfig = field(default_factory=RenderConfig)

    @classmethod
    def from_env(cls, seed: int | None = None) -> "GardenConfig":
        """Build a config honouring ``GARDEN_STRICT_RANGES``."""
        return cls(strict_ranges=_env_flag("GARDEN_STRICT_RANGES", True), seed=seed)

    def validate(self) -> "GardenConfig":
        """Check structural constraints, returning self for chaining.

        Raises:
            ConfigurationError: If a value cannot produce a working garden.
        """
        if self.flowers.max_flowers < 1 or self.flowers.max_stems < 1:
            raise ConfigurationError("Flower and stem capacity must be at least 1")
        if not 0.0 < self.wind.decay_rate < 1.0:
            raise ConfigurationError(
                f"Wind decay rate must be in (0, 1), got {self.wind.decay_rate}"
            )
        if not 0.0 < self.display.baseline_fraction <= 1.0:
            raise ConfigurationError(
                f"Baseline fraction must be in (0, 1], got {self.display.baseline_fraction}"
            )
        if self.flowers.grow_tick_seconds <= 0:
            raise ConfigurationError("Grow tick period must be positive")
        if self.flowers.max_scale < self.flowers.initial_scale:
            raise ConfigurationError("Max scale must not be below the initial scale")
        if self.display.reference_frame_rate <= 0:
            raise ConfigurationError("Reference frame rate must be positive")
        return self
