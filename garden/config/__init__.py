"""Configuration package for the garden.

Tunable constants are grouped by concern into small modules
(``display``, ``flowers``, ``wind``, ``render``) and aggregated by the
dataclasses in ``garden_config`` which are injected into the core.
"""

from garden.config.garden_config import (
    DisplayConfig,
    FlowerConfig,
    GardenConfig,
    RenderConfig,
    WindConfig,
)

__all__ = [
    "DisplayConfig",
    "FlowerConfig",
    "GardenConfig",
    "RenderConfig",
    "WindConfig",
]
