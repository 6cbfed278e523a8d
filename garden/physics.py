"""Per-frame wind integration.

``WindPhysics.update`` is the single physics step run once per frame
tick, before rendering. In order it:

1. advances the garden clock
2. evaluates an active gust target, or else decays the strength
3. lets device rotation stir the wind (when gyro wind is enabled)
4. applies any grow ticks that came due for the hold-to-grow session

Per-frame multipliers are defined against a 60 Hz reference frame and
rescaled by the actual elapsed time, so a 30 Hz host and a 120 Hz host
see the same wind over the same wall-clock interval.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Dict, Optional

from garden.config import wind as wind_constants
from garden.config.garden_config import GardenConfig
from garden.events import WindGustEvent
from garden.motion import ZERO_MOTION, MotionSample
from garden.wind import WindTarget

if TYPE_CHECKING:
    from garden.garden_state import GardenState
    from garden.interfaces import MotionSource

logger = logging.getLogger(__name__)


@dataclass
class PhysicsResult:
    """What one physics step did.

    Attributes:
        dt: Seconds elapsed since the previous step
        strength_before: Wind strength entering the step
        strength_after: Wind strength leaving the step
        gusting: Whether a gust target owned the strength this step
        gust_finished: Whether the gust target completed this step
        grow_ticks: Grow increments applied to the held flower
        details: Extra diagnostics
    """

    dt: float = 0.0
    strength_before: float = 0.0
    strength_after: float = 0.0
    gusting: bool = False
    gust_finished: bool = False
    grow_ticks: int = 0
    details: Dict[str, Any] = field(default_factory=dict)

    @property
    def skipped(self) -> bool:
        """True when time did not advance and nothing happened."""
        return self.dt <= 0.0 and self.grow_ticks == 0


class WindPhysics:
    """Advances wind and growth on each frame tick.

    Args:
        state: Garden to mutate
        config: Wind and display settings (defaults to the state's config)
        motion_source: Collaborator supplying smoothed motion; when None the
            motion passed to ``update`` (or zero motion) is used
    """

    def __init__(
        self,
        state: "GardenState",
        config: Optional[GardenConfig] = None,
        motion_source: Optional["MotionSource"] = None,
    ) -> None:
        self.state = state
        self.config = config or state.config
        self.motion_source = motion_source
        self._update_count = 0

    @property
    def frames_per_second(self) -> float:
        return self.config.display.reference_frame_rate

    def update(self, time: float, motion: Optional[MotionSample] = None) -> PhysicsResult:
        """Run one physics step at absolute garden *time*.

        Args:
            time: Monotonic animation time in seconds
            motion: Smoothed motion for this tick; overrides the motion source

        Returns:
            PhysicsResult describing the step
        """
        state = self.state
        wind = state.wind
        result = PhysicsResult(strength_before=wind.strength)
        result.dt = state.advance_time(time)
        frames = result.dt * self.frames_per_second

        if wind.target is not None:
            result.gusting = True
            wind.strength = wind.target.strength_at(state.current_time)
            if wind.target.finished(state.current_time):
                wind.target = None
                result.gust_finished = True
                logger.debug("Gust settled at strength %.2f", wind.strength)
        elif frames > 0.0:
            self._decay(frames)

        sample = self._resolve_motion(motion)
        if state.knobs.gyro_wind_enabled and sample.gyro_rate != 0.0 and frames > 0.0:
            self._stir(sample.gyro_rate, frames, strength_locked=result.gusting)
            result.details["gyro_rate"] = sample.gyro_rate

        result.grow_ticks = state.advance_growth(state.current_time)
        result.strength_after = wind.strength
        self._update_count += 1
        return result

    def start_gust(self, peak_strength: float, direction: float, source: str = "swipe") -> WindTarget:
        """Start an eased gust toward *peak_strength* that settles to rest.

        Replaces any gust already in progress; the new curve starts from
        the current strength so the transition is continuous.

        Returns:
            The installed target
        """
        settings = self.config.wind
        state = self.state
        peak = max(0.0, min(settings.strength_cap, peak_strength))
        target = WindTarget(
            start_time=state.current_time,
            start_strength=state.wind.strength,
            peak_strength=peak,
            rest_strength=min(settings.gust_rest_strength, settings.strength_cap),
            rise_seconds=settings.gust_rise_seconds,
            settle_seconds=settings.gust_settle_seconds,
        )
        state.wind.direction = direction
        state.wind.target = target
        logger.debug("Gust started: peak %.2f dir %.2f (%s)", peak, direction, source)
        state.bus.emit(WindGustEvent(strength=peak, direction=direction, source=source))
        return target

    def start_swipe_gust(self, dx: float, dy: float = 0.0) -> WindTarget:
        """Translate a horizontal swipe into a gust.

        Direction is 0 for a rightward swipe and π for a leftward one; the
        peak grows with the horizontal distance, capped.
        """
        settings = self.config.wind
        direction = 0.0 if dx >= 0 else math.pi
        peak = min(abs(dx) / wind_constants.SWIPE_STRENGTH_DIVISOR, settings.swipe_max_strength)
        return self.start_gust(peak, direction, source="swipe")

    def _decay(self, frames: float) -> None:
        wind = self.state.wind
        if wind.strength <= 0.0:
            wind.strength = 0.0
            return
        wind.strength *= wind.decay_rate ** frames
        if wind.strength < self.config.wind.snap_epsilon:
            wind.strength = 0.0

    def _stir(self, gyro_rate: float, frames: float, *, strength_locked: bool) -> None:
        settings = self.config.wind
        wind = self.state.wind
        wind.direction = math.remainder(
            wind.direction + gyro_rate * settings.gyro_direction_gain * frames, math.tau
        )
        if not strength_locked:
            boost = abs(gyro_rate) * settings.gyro_strength_gain * frames
            wind.strength = min(settings.strength_cap, wind.strength + boost)

    def _resolve_motion(self, motion: Optional[MotionSample]) -> MotionSample:
        if motion is not None:
            return motion
        if self.motion_source is not None:
            return self.motion_source.sample()
        return ZERO_MOTION

    def get_debug_info(self) -> Dict[str, Any]:
        wind = self.state.wind
        return {
            "updates": self._update_count,
            "strength": wind.strength,
            "direction": wind.direction,
            "gusting": wind.gusting,
        }


__all__ = ["PhysicsResult", "WindPhysics"]
