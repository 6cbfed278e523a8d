"""Feedback collaborator adapter.

The garden only emits semantic events. ``FeedbackDispatcher`` listens on
the event bus and translates those events into ``FeedbackKind`` values
for an injected sink (a haptic engine, a sound player, a logger).

Feedback is best-effort: a failing sink is logged and never allowed to
break the garden mutation that triggered it.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import TYPE_CHECKING, Optional

from garden.events import (
    DrawingEndedEvent,
    DrawingStartedEvent,
    EventBus,
    FlowerGrewEvent,
    FlowerSpawnedEvent,
    GardenClearedEvent,
    GardenResetEvent,
    PaletteChangedEvent,
    ShakeDetectedEvent,
    WindGustEvent,
)

if TYPE_CHECKING:
    from garden.interfaces import FeedbackSink

logger = logging.getLogger(__name__)


class FeedbackKind(Enum):
    """Device-independent feedback styles."""

    LIGHT = "light"
    MEDIUM = "medium"
    HEAVY = "heavy"
    RIGID = "rigid"
    SOFT = "soft"
    SUCCESS = "success"
    WARNING = "warning"


DEFAULT_FEEDBACK_MAP: dict[type, FeedbackKind] = {
    FlowerSpawnedEvent: FeedbackKind.LIGHT,
    FlowerGrewEvent: FeedbackKind.LIGHT,
    PaletteChangedEvent: FeedbackKind.SUCCESS,
    GardenClearedEvent: FeedbackKind.SUCCESS,
    GardenResetEvent: FeedbackKind.SUCCESS,
    ShakeDetectedEvent: FeedbackKind.WARNING,
    WindGustEvent: FeedbackKind.MEDIUM,
    DrawingStartedEvent: FeedbackKind.RIGID,
    DrawingEndedEvent: FeedbackKind.SOFT,
}


class FeedbackDispatcher:
    """Subscribe a feedback sink to the garden's event bus.

    Attributes:
        sink: Callable receiving a ``FeedbackKind``
        mapping: Event type -> feedback kind
        delivered: Count of successfully delivered notifications
        failed: Count of notifications whose sink raised
    """

    def __init__(
        self,
        bus: EventBus,
        sink: "FeedbackSink",
        mapping: Optional[dict[type, FeedbackKind]] = None,
    ) -> None:
        self.sink = sink
        self.mapping = dict(DEFAULT_FEEDBACK_MAP if mapping is None else mapping)
        self.delivered = 0
        self.failed = 0
        self._bus = bus
        for event_type in self.mapping:
            bus.subscribe(event_type, self._on_event)

    def _on_event(self, event: object) -> None:
        kind = self.mapping.get(type(event))
        if kind is None:
            return
        try:
            self.sink(kind)
        except Exception:  # sink failures never reach the garden
            self.failed += 1
            logger.warning("Feedback sink failed for %s", type(event).__name__, exc_info=True)
            return
        self.delivered += 1

    def detach(self) -> None:
        """Stop receiving events."""
        for event_type in self.mapping:
            self._bus.unsubscribe(event_type, self._on_event)


class LoggingFeedbackSink:
    """Sink for hosts without haptics: records feedback at DEBUG level."""

    def __call__(self, kind: FeedbackKind) -> None:
        logger.debug("feedback: %s", kind.value)


__all__ = [
    "DEFAULT_FEEDBACK_MAP",
    "FeedbackDispatcher",
    "FeedbackKind",
    "LoggingFeedbackSink",
]
