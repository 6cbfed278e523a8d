"""Frame driver facade.

``GardenEngine`` wires the garden's parts together and exposes the single
per-frame entry point a host calls from its display loop:

    engine = GardenEngine(GardenConfig(seed=7))
    frame = engine.tick(time, Viewport(400, 800))

Each tick runs the physics step and then renders, strictly in that order.
Ticks must never overlap; a tick started from inside another raises
``ReentrantTickError``.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from garden.config.garden_config import GardenConfig
from garden.events import EventBus
from garden.exceptions import ReentrantTickError
from garden.feedback import FeedbackDispatcher
from garden.garden_state import GardenState
from garden.interfaces import FeedbackSink, MotionSource
from garden.motion import ZERO_MOTION, MotionSample
from garden.physics import PhysicsResult, WindPhysics
from garden.render.commands import RenderFrame
from garden.render.renderer import GardenRenderer
from garden.viewport import Viewport

logger = logging.getLogger(__name__)


class GardenEngine:
    """Owns the garden state and runs update-then-draw ticks.

    Attributes:
        config: Garden configuration
        bus: Event bus shared by the state and its collaborators
        state: The garden
        physics: Per-frame wind and growth step
        renderer: Draw-command builder
        feedback: Dispatcher for the feedback sink, if one was given
        frame_count: Completed ticks
        paused: When True, ticks render a frozen frame without advancing
            physics; host time that passes while paused is never integrated
        paused_duration: Host seconds spent paused, subtracted from host
            time to get garden time
    """

    def __init__(
        self,
        config: Optional[GardenConfig] = None,
        *,
        bus: Optional[EventBus] = None,
        motion_source: Optional[MotionSource] = None,
        feedback_sink: Optional[FeedbackSink] = None,
    ) -> None:
        """Initialize the engine.

        Args:
            config: Garden configuration (seed, capacities, ranges)
            bus: Event bus; a private one is created when omitted
            motion_source: Collaborator sampled once per tick for tilt and gyro
            feedback_sink: Collaborator receiving feedback for garden events
        """
        self.config = (config or GardenConfig()).validate()
        self.bus = bus if bus is not None else EventBus()
        self.state = GardenState(self.config, self.bus)
        self.motion_source = motion_source
        self.physics = WindPhysics(self.state, self.config)
        self.renderer = GardenRenderer(self.config)
        self.feedback: Optional[FeedbackDispatcher] = None
        if feedback_sink is not None:
            self.feedback = FeedbackDispatcher(self.bus, feedback_sink)

        self.frame_count = 0
        self.paused = False
        self.paused_duration = 0.0
        self._last_host_time: Optional[float] = None
        self.last_result: Optional[PhysicsResult] = None
        self._in_tick = False

    def sample_motion(self) -> MotionSample:
        """Current motion sample; zero when no sensor is attached."""
        if self.motion_source is None:
            return ZERO_MOTION
        return self.motion_source.sample()

    def update(self, time: float, motion: Optional[MotionSample] = None) -> PhysicsResult:
        """Run the physics step only."""
        sample = motion if motion is not None else self.sample_motion()
        self.last_result = self.physics.update(time, sample)
        return self.last_result

    def render(self, time: float, viewport: Viewport, motion: Optional[MotionSample] = None) -> RenderFrame:
        """Render the current state without advancing it."""
        sample = motion if motion is not None else self.sample_motion()
        return self.renderer.render(self.state, time, viewport, sample)

    def garden_time(self, host_time: float) -> float:
        """Map host clock time onto garden time, skipping paused intervals."""
        return host_time - self.paused_duration

    def tick(self, time: float, viewport: Viewport) -> RenderFrame:
        """Advance to host *time* and render one frame.

        Host time that elapses while ``paused`` is set is folded into
        ``paused_duration``, so resuming continues from where the garden
        stopped instead of catching up on the whole pause in one step.

        Raises:
            ReentrantTickError: If called while another tick is running
        """
        if self._in_tick:
            raise ReentrantTickError("GardenEngine.tick re-entered while a tick was running")
        self._in_tick = True
        try:
            motion = self.sample_motion()
            self._track_pause(time)
            now = self.garden_time(time)
            if not self.paused:
                self.update(now, motion)
            frame = self.renderer.render(self.state, now, viewport, motion)
            self.frame_count += 1
            return frame
        finally:
            self._in_tick = False

    def _track_pause(self, host_time: float) -> None:
        previous = self._last_host_time
        if previous is None:
            previous = self.state.current_time
        if self.paused and host_time > previous:
            self.paused_duration += host_time - previous
        self._last_host_time = host_time

    def get_debug_info(self) -> Dict[str, Any]:
        return {
            "frame_count": self.frame_count,
            "paused": self.paused,
            "paused_duration": self.paused_duration,
            "flowers": self.state.flower_count,
            "stems": len(self.state.stems),
            "palette": self.state.palette.display_name,
            "physics": self.physics.get_debug_info(),
        }


__all__ = ["GardenEngine"]
