"""Motion input consumed by the garden.

The garden never talks to sensors. A motion collaborator hands it an
already-smoothed ``MotionSample`` each tick; an unavailable sensor is
simply the zero sample. ``MotionSmoother`` is the low-pass filter such a
collaborator can use to turn raw gravity and rotation readings into that
signal.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Optional

logger = logging.getLogger(__name__)

DEFAULT_SMOOTHING_ALPHA = 0.05


def _finite_or_zero(value: Optional[float], name: str) -> float:
    if value is None:
        return 0.0
    value = float(value)
    if not math.isfinite(value):
        logger.warning("Non-finite %s sample %r treated as 0", name, value)
        return 0.0
    return value


@dataclass(frozen=True)
class MotionSample:
    """Smoothed device motion for one tick.

    Attributes:
        tilt_x: Roll-like tilt in [-1, 1] (drives horizontal parallax)
        tilt_y: Pitch-like tilt in [-1, 1] (drives vertical parallax)
        gyro_rate: Rotation rate around the screen normal, radians/second
    """

    tilt_x: float = 0.0
    tilt_y: float = 0.0
    gyro_rate: float = 0.0

    @classmethod
    def from_raw(
        cls,
        tilt_x: Optional[float] = None,
        tilt_y: Optional[float] = None,
        gyro_rate: Optional[float] = None,
    ) -> "MotionSample":
        """Sanitize collaborator input: missing or non-finite values become 0."""
        tx = max(-1.0, min(1.0, _finite_or_zero(tilt_x, "tilt_x")))
        ty = max(-1.0, min(1.0, _finite_or_zero(tilt_y, "tilt_y")))
        return cls(tx, ty, _finite_or_zero(gyro_rate, "gyro_rate"))


ZERO_MOTION = MotionSample()


class MotionSmoother:
    """Exponential low-pass filter for raw tilt readings.

    Tilt is smoothed; the gyro rate passes through unfiltered, as it is
    already a rate.
    """

    def __init__(self, alpha: float = DEFAULT_SMOOTHING_ALPHA) -> None:
        if not 0.0 < alpha <= 1.0:
            raise ValueError(f"Smoothing alpha must be in (0, 1], got {alpha}")
        self.alpha = alpha
        self._tilt_x = 0.0
        self._tilt_y = 0.0

    def update(
        self,
        raw_tilt_x: Optional[float],
        raw_tilt_y: Optional[float],
        gyro_rate: Optional[float] = None,
    ) -> MotionSample:
        raw = MotionSample.from_raw(raw_tilt_x, raw_tilt_y, gyro_rate)
        self._tilt_x = self._tilt_x * (1.0 - self.alpha) + raw.tilt_x * self.alpha
        self._tilt_y = self._tilt_y * (1.0 - self.alpha) + raw.tilt_y * self.alpha
        return MotionSample(self._tilt_x, self._tilt_y, raw.gyro_rate)

    def reset(self) -> None:
        self._tilt_x = 0.0
        self._tilt_y = 0.0


class StaticMotionSource:
    """Motion source returning whatever sample was last set.

    With nothing set it behaves as an unavailable sensor.
    """

    def __init__(self, sample: MotionSample = ZERO_MOTION) -> None:
        self._sample = sample

    def set(self, sample: MotionSample) -> None:
        self._sample = sample

    def sample(self) -> MotionSample:
        return self._sample


__all__ = [
    "MotionSample",
    "MotionSmoother",
    "StaticMotionSource",
    "ZERO_MOTION",
]
