"""Protocol interfaces for the garden's collaborators.

The garden core receives its collaborators by injection. These protocols
document what it expects from them, so tests can substitute fakes.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from garden.feedback import FeedbackKind
    from garden.motion import MotionSample


@runtime_checkable
class MotionSource(Protocol):
    """Supplies the smoothed motion signal for the current tick."""

    def sample(self) -> "MotionSample":
        """Latest smoothed sample (zero when the sensor is unavailable)."""
        ...


@runtime_checkable
class FeedbackSink(Protocol):
    """Maps a feedback kind to device feedback (haptics, sound)."""

    def __call__(self, kind: "FeedbackKind") -> None:
        ...

