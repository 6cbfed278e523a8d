"""Named color palettes for the garden.

Each palette maps a flower's ``color_seed`` in [0, 1) to a color with its
own hue/saturation/brightness formula. Palettes cycle in declaration
order and wrap around.
"""

from __future__ import annotations

from enum import Enum

from garden.color import Color

# Discrete sunset buckets: (hue, saturation, brightness)
SUNSET_BUCKETS = (
    (0.05, 0.8, 0.9),  # Orange
    (0.12, 0.7, 1.0),  # Yellow
    (0.95, 0.8, 0.8),  # Red-pink
    (0.80, 0.6, 0.7),  # Purple
)


class Palette(Enum):
    """Enumerated color schemes, in cycle order."""

    PASTEL = "Pastel"
    SAKURA = "Sakura"
    NEON = "Neon"
    MONOCHROME = "Monochrome"
    SUNSET = "Sunset"

    @property
    def display_name(self) -> str:
        return self.value

    @property
    def index(self) -> int:
        return list(Palette).index(self)

    @classmethod
    def from_name(cls, name: str) -> "Palette":
        """Look up a palette by display name or member name (case-insensitive)."""
        wanted = name.strip().lower()
        for palette in cls:
            if palette.value.lower() == wanted or palette.name.lower() == wanted:
                return palette
        raise ValueError(f"Unknown palette: {name!r}")

    def next(self) -> "Palette":
        """Return the next palette in the cycle, wrapping to the first."""
        members = list(Palette)
        return members[(members.index(self) + 1) % len(members)]

    def color_for_seed(self, seed: float) -> Color:
        """Map a seed in [0, 1) to this palette's color.

        Args:
            seed: Flower color seed; values outside [0, 1) wrap.

        Returns:
            Opaque color for the flower
        """
        seed = seed % 1.0
        if self is Palette.PASTEL:
            return Color.from_hsb(seed, 0.4, 0.9)
        if self is Palette.SAKURA:
            # Pink/white/red band, 0.9..1.1 wrapped around 1.0
            hue = 0.9 + seed * 0.2
            if hue > 1.0:
                hue -= 1.0
            return Color.from_hsb(hue, 0.3 + seed * 0.4, 0.95)
        if self is Palette.NEON:
            return Color.from_hsb(seed, 0.8, 1.0)
        if self is Palette.MONOCHROME:
            return Color.white(0.2 + seed * 0.8)
        hue, saturation, brightness = SUNSET_BUCKETS[min(int(seed * 4), 3)]
        return Color.from_hsb(hue, saturation, brightness)


DEFAULT_PALETTE = Palette.PASTEL
