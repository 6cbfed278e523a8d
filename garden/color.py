"""Color value type and conversion utilities.

This module provides the RGBA color type used by palettes and draw
commands, plus hue/saturation/brightness conversion.

Design Note:
    These are pure functions with no garden dependencies.
    They can be tested in isolation and used by any module.
"""

from __future__ import annotations

import colorsys
from dataclasses import dataclass


def _unit(value: float) -> float:
    return 0.0 if value < 0.0 else 1.0 if value > 1.0 else float(value)


@dataclass(frozen=True)
class Color:
    """Linear RGBA color with channels in [0, 1]."""

    r: float
    g: float
    b: float
    a: float = 1.0

    @classmethod
    def from_hsb(cls, hue: float, saturation: float, brightness: float, alpha: float = 1.0) -> "Color":
        """Build a color from hue/saturation/brightness (HSV).

        Args:
            hue: Hue value, wraps around like a color wheel (1.0 == 0.0)
            saturation: 0.0 (gray) to 1.0 (vivid)
            brightness: 0.0 (black) to 1.0 (full)
            alpha: Opacity

        Returns:
            The converted color
        """
        r, g, b = colorsys.hsv_to_rgb(hue % 1.0, _unit(saturation), _unit(brightness))
        return cls(r, g, b, _unit(alpha))

    @classmethod
    def white(cls, level: float = 1.0, alpha: float = 1.0) -> "Color":
        level = _unit(level)
        return cls(level, level, level, _unit(alpha))

    @classmethod
    def rgb(cls, rgb: tuple[float, float, float], alpha: float = 1.0) -> "Color":
        r, g, b = rgb
        return cls(_unit(r), _unit(g), _unit(b), _unit(alpha))

    def with_alpha(self, alpha: float) -> "Color":
        """Return a copy with opacity replaced."""
        return Color(self.r, self.g, self.b, _unit(alpha))

    def fade(self, factor: float) -> "Color":
        """Return a copy with opacity multiplied by *factor*."""
        return Color(self.r, self.g, self.b, _unit(self.a * factor))

    def to_rgba255(self) -> tuple[int, int, int, int]:
        """Convert to 8-bit channels for display surfaces."""
        return (
            int(round(self.r * 255)),
            int(round(self.g * 255)),
            int(round(self.b * 255)),
            int(round(self.a * 255)),
        )

    def hue(self) -> float:
        return colorsys.rgb_to_hsv(self.r, self.g, self.b)[0]


TRANSPARENT = Color(0.0, 0.0, 0.0, 0.0)
BLACK = Color(0.0, 0.0, 0.0, 1.0)
WHITE = Color(1.0, 1.0, 1.0, 1.0)
RED = Color(1.0, 0.0, 0.0, 1.0)
GREEN = Color(0.0, 1.0, 0.0, 1.0)
BLUE = Color(0.0, 0.0, 1.0, 1.0)
