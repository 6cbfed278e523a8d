"""Wind state and timed gust targets.

Wind is a scalar strength plus a direction, not a vector field. Two
mechanisms shape the strength over time:

- per-frame multiplicative decay toward zero (``WindPhysics``)
- a ``WindTarget``: a timed ease up to a peak and back down to a resting
  strength, started by a swipe

While a target is active it owns the strength and decay is suspended, so
the two never fight. Any explicit impulse cancels the target.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from garden.config.garden_config import WindConfig
from garden.math_utils import ease_in_out, lerp


@dataclass(frozen=True)
class WindTarget:
    """Eased strength curve: start -> peak over ``rise``, then peak -> rest over ``settle``."""

    start_time: float
    start_strength: float
    peak_strength: float
    rest_strength: float
    rise_seconds: float
    settle_seconds: float

    @property
    def duration(self) -> float:
        return self.rise_seconds + self.settle_seconds

    def strength_at(self, time: float) -> float:
        elapsed = time - self.start_time
        if elapsed <= 0.0:
            return self.start_strength
        if elapsed < self.rise_seconds:
            return lerp(self.start_strength, self.peak_strength, ease_in_out(elapsed / self.rise_seconds))
        settled = elapsed - self.rise_seconds
        if settled < self.settle_seconds:
            return lerp(self.peak_strength, self.rest_strength, ease_in_out(settled / self.settle_seconds))
        return self.rest_strength

    def finished(self, time: float) -> bool:
        return time - self.start_time >= self.duration


@dataclass
class WindState:
    """Current wind.

    Attributes:
        direction: Radians; 0 blows toward +x, π toward -x
        strength: Scalar in [0, cap]
        decay_rate: Per-reference-frame multiplier in (0, 1)
        target: Active gust curve, if any
    """

    direction: float
    strength: float
    decay_rate: float
    target: Optional[WindTarget] = None

    @classmethod
    def defaults(cls, config: WindConfig) -> "WindState":
        return cls(
            direction=config.default_direction,
            strength=config.default_strength,
            decay_rate=config.decay_rate,
        )

    @property
    def gusting(self) -> bool:
        return self.target is not None
