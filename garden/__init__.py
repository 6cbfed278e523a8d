"""Generative flower garden core.

Pure Python: no display, sensor or haptics code lives here. Hosts drive a
``GardenEngine`` once per frame and execute the returned draw commands.
"""

from garden.config import GardenConfig
from garden.engine import GardenEngine
from garden.garden_state import GardenState
from garden.gestures import GestureRouter
from garden.motion import MotionSample, MotionSmoother
from garden.palette import Palette
from garden.physics import WindPhysics
from garden.render import GardenRenderer, RenderFrame
from garden.rng import SeededRandom
from garden.viewport import Viewport

__all__ = [
    "GardenConfig",
    "GardenEngine",
    "GardenRenderer",
    "GardenState",
    "GestureRouter",
    "MotionSample",
    "MotionSmoother",
    "Palette",
    "RenderFrame",
    "SeededRandom",
    "Viewport",
    "WindPhysics",
]
