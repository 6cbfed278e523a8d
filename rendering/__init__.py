"""Pygame display collaborators for the garden core."""

from rendering.garden_window import GardenWindow, KeyboardMotionSource
from rendering.pygame_canvas import PygameCanvas, create_canvas

__all__ = ["GardenWindow", "KeyboardMotionSource", "PygameCanvas", "create_canvas"]
