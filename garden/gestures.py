"""Resolved-gesture router.

Gesture recognition belongs to the host. The host reports already
resolved gestures (tap, drag start/move/end, pinch, shake) and
``GestureRouter`` turns them into garden operations:

- tap spawns a flower
- a drag in drawing mode draws a stem; on an existing flower it moves
  that flower; elsewhere it spawns a flower and grows it while held
- a drag that travels away from its start stops growing, and a fast
  horizontal one ends as a wind gust
- pinch scales every flower, shake resets the garden
"""

from __future__ import annotations

import logging
import math
from collections.abc import Callable, Sequence
from enum import Enum
from typing import Optional

from garden.config import wind as wind_constants
from garden.events import DrawingEndedEvent, DrawingStartedEvent, ShakeDetectedEvent
from garden.garden_state import GardenState
from garden.math_utils import Vector2
from garden.physics import WindPhysics
from garden.viewport import Viewport

logger = logging.getLogger(__name__)

HOLD_TOLERANCE = 5.0
MIN_PATH_SPACING = 2.0


class DragMode(Enum):
    NONE = "none"
    DRAWING = "drawing"
    MOVING = "moving"
    GROWING = "growing"
    SWIPING = "swiping"


def is_swipe(translation: Vector2 | Sequence[float]) -> bool:
    """Whether a drag translation reads as a horizontal swipe."""
    delta = Vector2.of(translation)
    return (
        delta.length() > wind_constants.SWIPE_MIN_DISTANCE
        and abs(delta.x) > abs(delta.y) * wind_constants.SWIPE_AXIS_RATIO
    )


class GestureRouter:
    """Maps resolved gestures onto garden mutations.

    Args:
        state: Garden to mutate
        physics: Physics step, for swipe gusts
        confirm_reset: Optional callback asked before a shake resets the
            garden; returning False keeps the garden as it is
    """

    def __init__(
        self,
        state: GardenState,
        physics: WindPhysics,
        *,
        confirm_reset: Optional[Callable[[], bool]] = None,
    ) -> None:
        self.state = state
        self.physics = physics
        self.confirm_reset = confirm_reset
        self.mode = DragMode.NONE
        self.active_flower_id: Optional[int] = None
        self.path: list[Vector2] = []
        self._grab_offset = Vector2(0.0, 0.0)

    def tap(self, point: Vector2 | Sequence[float], viewport: Viewport) -> int:
        return self.state.spawn_flower(point, viewport)

    def drag_start(self, point: Vector2 | Sequence[float], viewport: Viewport) -> DragMode:
        """Begin a drag at *point* and decide what it does."""
        start = Vector2.of(point)
        self._reset_drag()
        state = self.state

        if state.drawing_mode:
            self.mode = DragMode.DRAWING
            self.path = [start]
            state.bus.emit(DrawingStartedEvent(x=start.x, y=start.y))
            return self.mode

        picked = state.find_nearest_flower(start)
        if picked is not None:
            self.mode = DragMode.MOVING
            self.active_flower_id = picked.id
            self._grab_offset = picked.position - start
            logger.debug("Picked up flower %d", picked.id)
            return self.mode

        flower_id = state.spawn_flower(start, viewport)
        state.start_growing(flower_id)
        self.mode = DragMode.GROWING
        self.active_flower_id = flower_id
        return self.mode

    def drag_move(
        self,
        point: Vector2 | Sequence[float],
        translation: Vector2 | Sequence[float],
        duration: float = 0.0,
    ) -> None:
        current = Vector2.of(point)
        if self.mode is DragMode.DRAWING:
            if not self.path or self.path[-1].distance_to(current) >= MIN_PATH_SPACING:
                self.path.append(current)
        elif self.mode is DragMode.MOVING and self.active_flower_id is not None:
            self.state.move_flower(self.active_flower_id, current + self._grab_offset)
        elif self.mode is DragMode.GROWING:
            if Vector2.of(translation).length() >= HOLD_TOLERANCE:
                self.state.stop_growing()
                self.mode = DragMode.SWIPING

    def drag_end(
        self,
        point: Vector2 | Sequence[float],
        translation: Vector2 | Sequence[float],
        duration: float = 0.0,
    ) -> Optional[int]:
        """Finish the drag.

        Returns:
            ID of a flower created from a drawn stem, if any
        """
        end = Vector2.of(point)
        delta = Vector2.of(translation)
        mode = self.mode
        created: Optional[int] = None

        if mode is DragMode.DRAWING:
            if not self.path or self.path[-1] != end:
                self.path.append(end)
            created = self.state.spawn_flower_from_stem(self.path)
            self.state.bus.emit(
                DrawingEndedEvent(point_count=len(self.path), accepted=created is not None)
            )
        elif mode is DragMode.MOVING and self.active_flower_id is not None:
            self.state.move_flower(self.active_flower_id, end + self._grab_offset)
        elif mode in (DragMode.GROWING, DragMode.SWIPING):
            self.state.stop_growing()
            if is_swipe(delta):
                self.physics.start_swipe_gust(delta.x, delta.y)

        self._reset_drag()
        return created

    def cancel(self) -> None:
        """Abandon the current drag (host lost the touch)."""
        self.state.stop_growing()
        self._reset_drag()

    def pinch(self, scale_factor: float) -> float:
        """Scale every flower by *scale_factor*, clamped to the knob range.

        Returns:
            The resulting global scale
        """
        knobs = self.state.knobs
        if not math.isfinite(scale_factor) or scale_factor <= 0.0:
            logger.debug("Ignoring pinch factor %r", scale_factor)
            return knobs.global_scale
        return self.state.set_knob("global_scale", knobs.global_scale * scale_factor)

    def shake(self) -> bool:
        """Reset the garden, asking ``confirm_reset`` first when set.

        ``ShakeDetectedEvent`` is emitted before the confirmation, so the
        warning feedback fires whether or not the reset goes ahead.

        Returns:
            True if the garden was reset
        """
        self.state.bus.emit(ShakeDetectedEvent())
        if self.confirm_reset is not None and not self.confirm_reset():
            logger.debug("Shake reset declined")
            return False
        self._reset_drag()
        self.state.reset_to_defaults()
        return True

    def _reset_drag(self) -> None:
        self.mode = DragMode.NONE
        self.active_flower_id = None
        self.path = []
        self._grab_offset = Vector2(0.0, 0.0)


__all__ = ["DragMode", "GestureRouter", "HOLD_TOLERANCE", "is_swipe"]
