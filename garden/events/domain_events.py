"""Domain event definitions for garden notifications.

These events are the semantic notifications the garden emits for its
collaborators (haptic feedback, sound, UI). They are data-only frozen
dataclasses carrying all the context a handler needs.

Design principles:
- Immutable: events are facts that happened
- Complete: handlers never call back into the garden to interpret them
- Typed: dispatch is by event class
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class FlowerSpawnedEvent:
    """A flower was added to the garden.

    Attributes:
        flower_id: ID of the new flower
        x: Nominal head x
        y: Nominal head y (after baseline clamping)
        source: How it was created ("tap", "stem", "random")
        time: Garden time of the spawn
    """

    flower_id: int
    x: float
    y: float
    source: str
    time: float


@dataclass(frozen=True)
class FlowerEvictedEvent:
    """The oldest flower was dropped to respect capacity."""

    flower_id: int
    time: float


@dataclass(frozen=True)
class FlowerGrewEvent:
    """One hold-to-grow tick increased a flower's scale."""

    flower_id: int
    scale: float
    time: float


@dataclass(frozen=True)
class FlowerMovedEvent:
    flower_id: int
    x: float
    y: float


@dataclass(frozen=True)
class FlowerRemovedEvent:
    flower_id: int


@dataclass(frozen=True)
class PaletteChangedEvent:
    """The active palette changed.

    Attributes:
        palette: Display name of the new palette
        previous: Display name of the previous palette
    """

    palette: str
    previous: str


@dataclass(frozen=True)
class GardenClearedEvent:
    """All flowers and stems were discarded."""

    flowers_removed: int
    stems_removed: int


@dataclass(frozen=True)
class GardenResetEvent:
    """The garden was cleared and every knob restored to its default."""

    flowers_removed: int = 0
    stems_removed: int = 0


@dataclass(frozen=True)
class ShakeDetectedEvent:
    """The device was shaken; a reset may follow once confirmed."""


@dataclass(frozen=True)
class WindGustEvent:
    """A wind impulse or swipe gust was applied.

    Attributes:
        strength: Resulting (or target peak) strength
        direction: Direction in radians
        source: "impulse" or "swipe"
    """

    strength: float
    direction: float
    source: str


@dataclass(frozen=True)
class DrawingStartedEvent:
    x: float
    y: float


@dataclass(frozen=True)
class DrawingEndedEvent:
    """A drawn stem gesture finished (accepted or discarded)."""

    point_count: int
    accepted: bool
