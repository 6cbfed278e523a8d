"""Synchronous event bus for garden notifications.

The EventBus decouples garden mutations from the collaborators that react
to them (haptics, sound, UI counters). Dispatch is synchronous and happens
on the caller's thread, so handlers run inside the same logical tick as
the mutation that produced the event.

Design goals:
- Zero overhead when no subscribers (single dict lookup)
- Synchronous and ordered, matching the single-threaded frame model
- Type-safe dispatch via event type, plus catch-all subscribers
"""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Callable
from typing import TypeVar

T = TypeVar("T")


class EventBus:
    """Synchronous event bus for garden events.

    Example:
        bus = EventBus()
        bus.subscribe(FlowerSpawnedEvent, on_spawn)
        bus.emit(FlowerSpawnedEvent(flower_id=1, x=10.0, y=20.0, source="tap", time=0.0))
    """

    def __init__(self) -> None:
        self._handlers: dict[type, list[Callable]] = defaultdict(list)
        self._catch_all: list[Callable[[object], None]] = []

    def emit(self, event: object) -> int:
        """Dispatch *event* to typed handlers, then catch-all handlers.

        Args:
            event: The garden event to dispatch

        Returns:
            Number of handlers invoked
        """
        handlers = self._handlers.get(type(event))
        count = 0
        if handlers:
            for handler in list(handlers):
                handler(event)
                count += 1
        for handler in list(self._catch_all):
            handler(event)
            count += 1
        return count

    def subscribe(self, event_type: type[T], handler: Callable[[T], None]) -> None:
        """Register a handler for a specific event type (called in registration order)."""
        self._handlers[event_type].append(handler)

    def subscribe_all(self, handler: Callable[[object], None]) -> None:
        """Register a handler that receives every event."""
        self._catch_all.append(handler)

    def unsubscribe(self, event_type: type[T], handler: Callable[[T], None]) -> bool:
        """Remove a typed handler.

        Returns:
            True if handler was found and removed, False otherwise
        """
        handlers = self._handlers.get(event_type)
        if handlers and handler in handlers:
            handlers.remove(handler)
            return True
        return False

    def unsubscribe_all(self, handler: Callable[[object], None]) -> bool:
        """Remove a catch-all handler."""
        if handler in self._catch_all:
            self._catch_all.remove(handler)
            return True
        return False

    def clear_subscribers(self) -> None:
        self._handlers.clear()
        self._catch_all.clear()

    def has_subscribers(self, event_type: type) -> bool:
        return bool(self._handlers.get(event_type)) or bool(self._catch_all)

    def subscriber_count(self, event_type: type) -> int:
        """Number of typed handlers for *event_type* (catch-alls excluded)."""
        return len(self._handlers.get(event_type, []))
