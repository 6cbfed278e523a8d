"""Viewport geometry supplied by the frame driver."""

from __future__ import annotations

from dataclasses import dataclass

from garden.exceptions import ConfigurationError
from garden.math_utils import Vector2


@dataclass(frozen=True)
class Viewport:
    """Drawable area in pixels."""

    width: float
    height: float

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ConfigurationError(
                f"Viewport must have positive size, got {self.width}x{self.height}"
            )

    @property
    def center(self) -> Vector2:
        return Vector2(self.width / 2.0, self.height / 2.0)

    def baseline(self, fraction: float) -> float:
        """Ground level y for a baseline *fraction* of the height."""
        return self.height * fraction

    def contains(self, point: Vector2, margin: float = 0.0) -> bool:
        """Whether *point* lies inside the viewport grown by *margin* on every side."""
        return (
            -margin <= point.x <= self.width + margin
            and -margin <= point.y <= self.height + margin
        )
