"""Flower entity and its procedural genome.

A flower is split in two parts:

- ``FlowerGenome``: every generative parameter (petals, color seed, sway
  phase...), drawn once from a ``SeededRandom`` and frozen afterwards.
- ``Flower``: the identity-bearing entity holding the genome plus the few
  time-varying fields (nominal head position and scale).

Sway and glow are pure functions of time and wind, so rendering the same
frame twice always yields the same geometry.
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

from garden.config import wind as wind_constants
from garden.config.garden_config import FlowerConfig
from garden.math_utils import Vector2
from garden.rng import SeededRandom

if TYPE_CHECKING:
    from garden.color import Color
    from garden.palette import Palette

GLOW_PULSE_SPEED = 1.2


@dataclass(frozen=True)
class FlowerGenome:
    """Immutable generative parameters of a flower.

    Attributes:
        seed: Seed the parameters were drawn from
        color_seed: Palette lookup key in [0, 1)
        petal_count: Number of petals in the ring
        petal_radius: Petal length in pixels before scaling
        stem_curvature: Idle sway amplitude multiplier
        sway_frequency: Idle sway angular speed (radians per second)
        sway_phase: Phase offset in [0, 2π)
        rotation: Petal ring orientation in [0, 2π)
        stem_bend: Horizontal Bézier control offset for procedural stems
    """

    seed: int
    color_seed: float
    petal_count: int
    petal_radius: float
    stem_curvature: float
    sway_frequency: float
    sway_phase: float
    rotation: float
    stem_bend: float

    @classmethod
    def create(
        cls,
        seed: int,
        config: Optional[FlowerConfig] = None,
        *,
        strict: bool = True,
    ) -> "FlowerGenome":
        """Draw a genome from a fresh generator seeded with *seed*.

        The draw order is fixed; changing it changes every seeded flower.
        """
        config = config or FlowerConfig()
        rng = SeededRandom(seed, strict=strict)
        return cls(
            seed=rng.seed,
            color_seed=rng.next_double(0.0, 1.0) % 1.0,
            petal_count=rng.next_int(*config.petal_count_range),
            petal_radius=rng.next_double(*config.petal_radius_range),
            stem_curvature=rng.next_double(*config.stem_curvature_range),
            sway_frequency=rng.next_double(*config.sway_frequency_range),
            sway_phase=rng.next_angle(),
            rotation=rng.next_angle(),
            stem_bend=rng.next_double(*config.stem_bend_range),
        )

    @property
    def hue(self) -> float:
        """Alias of ``color_seed``; palettes read it as a hue-like key."""
        return self.color_seed


def wind_lean(strength: float) -> float:
    """Saturating wind response, approaching ``WIND_SATURATION`` asymptotically."""
    saturation = wind_constants.WIND_SATURATION
    return saturation * math.tanh(max(0.0, strength) / saturation)


class Flower:
    """A single generative flower.

    Attributes:
        id: Unique identifier, stable for the flower's lifetime
        genome: Frozen generative parameters
        anchor: Ground anchor (first stem point for drawn stems)
        position: Nominal head position before sway
        scale: Growth multiplier, only increased by hold-to-grow
        stem_path: Hand-drawn stem points, empty for tapped flowers
        stem_id: ID of the drawn ``Stem`` this flower grew from, if any
        height: Nominal stem height
    """

    __slots__ = ("id", "genome", "anchor", "position", "scale", "stem_path", "stem_id", "height")

    def __init__(
        self,
        flower_id: int,
        genome: FlowerGenome,
        position: Vector2,
        *,
        anchor: Optional[Vector2] = None,
        stem_path: Sequence[Vector2] = (),
        stem_id: Optional[int] = None,
        scale: float = 1.0,
        default_height: float = 300.0,
    ) -> None:
        self.id = flower_id
        self.genome = genome
        self.stem_path: tuple[Vector2, ...] = tuple(Vector2.of(p) for p in stem_path)
        self.scale = float(scale)
        self.stem_id = stem_id

        if len(self.stem_path) >= 2:
            first, last = self.stem_path[0], self.stem_path[-1]
            self.anchor = first
            self.position = Vector2.of(last)
            self.height = abs(first.y - last.y)
        else:
            self.position = Vector2.of(position)
            self.anchor = Vector2.of(anchor) if anchor is not None else Vector2(
                self.position.x, self.position.y + default_height
            )
            self.height = abs(self.anchor.y - self.position.y) or default_height

    @property
    def has_drawn_stem(self) -> bool:
        return len(self.stem_path) >= 2

    def color(self, palette: "Palette") -> "Color":
        """Flower color under *palette* (pure; palette changes recolor live)."""
        return palette.color_for_seed(self.genome.color_seed)

    def head_position(self, time: float, wind_strength: float, wind_direction: float) -> Vector2:
        """Compute the swayed head position.

        Combines an idle oscillation (amplitude scaled by ``stem_curvature``)
        with a wind lean and flutter. The wind part uses a saturating
        response, so the offset stays bounded for any strength, and it
        vanishes entirely at zero strength.

        Args:
            time: Animation time in seconds
            wind_strength: Current wind strength (>= 0)
            wind_direction: Wind direction in radians

        Returns:
            Head position in viewport coordinates
        """
        g = self.genome
        angle = time * g.sway_frequency + g.sway_phase
        amplitude = wind_constants.IDLE_SWAY_AMPLITUDE * g.stem_curvature
        dx = math.sin(angle) * amplitude
        dy = math.cos(angle * 0.5) * amplitude * 0.2

        lean = wind_lean(wind_strength)
        if lean > 0.0:
            flutter = math.sin(time * wind_constants.WIND_FLUTTER_FREQUENCY + g.sway_phase)
            dx += flutter * lean * wind_constants.WIND_FLUTTER_GAIN
            dx += math.cos(wind_direction) * lean * wind_constants.WIND_LEAN_GAIN
            dy += (
                math.sin(wind_direction)
                * lean
                * wind_constants.WIND_LEAN_GAIN
                * wind_constants.WIND_LEAN_VERTICAL_RATIO
            )
        return Vector2(self.position.x + dx, self.position.y + dy)

    def glow_pulse(self, time: float) -> float:
        """Periodic brightness envelope in [0, 1]."""
        return (math.sin(time * GLOW_PULSE_SPEED + self.genome.sway_phase) + 1.0) / 2.0

    def __repr__(self) -> str:
        return (
            f"Flower(id={self.id}, petals={self.genome.petal_count}, "
            f"pos=({self.position.x:.1f}, {self.position.y:.1f}), scale={self.scale:.2f})"
        )


__all__ = ["Flower", "FlowerGenome", "wind_lean"]
