"""Pytest configuration and fixtures for garden tests."""

import pytest

from garden.config import GardenConfig
from garden.events import EventBus
from garden.rng import SeededRandom
from garden.viewport import Viewport


@pytest.fixture
def seeded_rng():
    """Provide a deterministic generator for tests."""
    return SeededRandom(42)


@pytest.fixture
def viewport():
    """Portrait viewport matching the default window."""
    return Viewport(400, 800)


@pytest.fixture
def config():
    """Deterministic configuration with strict ranges."""
    return GardenConfig(seed=42)


@pytest.fixture
def event_bus():
    return EventBus()


@pytest.fixture
def garden(config, event_bus):
    """A fresh, empty garden wired to ``event_bus``."""
    from garden.garden_state import GardenState

    return GardenState(config, event_bus)


@pytest.fixture
def engine(config):
    """A seeded engine with no collaborators attached."""
    from garden.engine import GardenEngine

    return GardenEngine(config)


@pytest.fixture
def recorded_events(event_bus):
    """Every event emitted on ``event_bus`` during the test."""
    events: list = []
    event_bus.subscribe_all(events.append)
    return events
