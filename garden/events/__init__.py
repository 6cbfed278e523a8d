"""Events module for garden notifications.

Provides the synchronous EventBus plus the typed events the garden emits.
"""

from garden.events.domain_events import (
    DrawingEndedEvent,
    DrawingStartedEvent,
    FlowerEvictedEvent,
    FlowerGrewEvent,
    FlowerMovedEvent,
    FlowerRemovedEvent,
    FlowerSpawnedEvent,
    GardenClearedEvent,
    GardenResetEvent,
    PaletteChangedEvent,
    ShakeDetectedEvent,
    WindGustEvent,
)
from garden.events.event_bus import EventBus

__all__ = [
    "DrawingEndedEvent",
    "DrawingStartedEvent",
    "EventBus",
    "FlowerEvictedEvent",
    "FlowerGrewEvent",
    "FlowerMovedEvent",
    "FlowerRemovedEvent",
    "FlowerSpawnedEvent",
    "GardenClearedEvent",
    "GardenResetEvent",
    "PaletteChangedEvent",
    "ShakeDetectedEvent",
    "WindGustEvent",
]
