"""Centralized math utilities for the garden.

Pure Python 2D helpers: a small ``Vector2`` value type plus the cubic
Bézier evaluation used for stems, leaves and grass blades.
"""

from __future__ import annotations

import math
from collections.abc import Sequence


class Vector2:
    """A 2D point/vector with value semantics."""

    __slots__ = ("x", "y")

    def __init__(self, x: float = 0.0, y: float = 0.0) -> None:
        self.x: float = float(x)
        self.y: float = float(y)

    @classmethod
    def of(cls, point: "Vector2 | Sequence[float]") -> "Vector2":
        """Coerce a ``Vector2`` or ``(x, y)`` pair into a new ``Vector2``."""
        if isinstance(point, Vector2):
            return Vector2(point.x, point.y)
        x, y = point
        return cls(x, y)

    def __add__(self, other: "Vector2") -> "Vector2":
        return Vector2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: "Vector2") -> "Vector2":
        return Vector2(self.x - other.x, self.y - other.y)

    def __mul__(self, scalar: float) -> "Vector2":
        return Vector2(self.x * scalar, self.y * scalar)

    __rmul__ = __mul__

    def __truediv__(self, scalar: float) -> "Vector2":
        return Vector2(self.x / scalar, self.y / scalar)

    def __iter__(self):
        yield self.x
        yield self.y

    def length(self) -> float:
        return math.hypot(self.x, self.y)

    def distance_to(self, other: "Vector2") -> float:
        return math.hypot(self.x - other.x, self.y - other.y)

    def normalize(self) -> "Vector2":
        length = math.hypot(self.x, self.y)
        if length == 0:
            return Vector2(0, 0)
        return Vector2(self.x / length, self.y / length)

    def rotate(self, angle: float) -> "Vector2":
        """Return this vector rotated by *angle* radians."""
        c, s = math.cos(angle), math.sin(angle)
        return Vector2(self.x * c - self.y * s, self.x * s + self.y * c)

    def angle(self) -> float:
        return math.atan2(self.y, self.x)

    def as_tuple(self) -> tuple[float, float]:
        return (self.x, self.y)

    def is_finite(self) -> bool:
        return math.isfinite(self.x) and math.isfinite(self.y)

    def __eq__(self, other: object) -> bool:
        """Check if two vectors are equal."""
        if other.__class__ is not Vector2:
            return False
        return abs(self.x - other.x) < 1e-9 and abs(self.y - other.y) < 1e-9

    def __hash__(self) -> int:
        return hash((round(self.x, 9), round(self.y, 9)))

    def __repr__(self) -> str:
        return f"Vector2({self.x}, {self.y})"


def lerp(a: float, b: float, t: float) -> float:
    return a + (b - a) * t


def clamp(value: float, lo: float, hi: float) -> float:
    return lo if value < lo else hi if value > hi else value


def ease_in_out(t: float) -> float:
    """Smoothstep easing on [0, 1]."""
    t = clamp(t, 0.0, 1.0)
    return t * t * (3.0 - 2.0 * t)


def cubic_bezier_point(
    t: float, p0: Vector2, c1: Vector2, c2: Vector2, p1: Vector2
) -> Vector2:
    """Evaluate a cubic Bézier curve at parameter *t*.

    Args:
        t: Curve parameter in [0, 1]
        p0: Start point
        c1: First control point
        c2: Second control point
        p1: End point

    Returns:
        The point on the curve
    """
    mt = 1.0 - t
    a = mt * mt * mt
    b = 3.0 * mt * mt * t
    c = 3.0 * mt * t * t
    d = t * t * t
    return Vector2(
        a * p0.x + b * c1.x + c * c2.x + d * p1.x,
        a * p0.y + b * c1.y + c * c2.y + d * p1.y,
    )


def flatten_cubic(
    p0: Vector2, c1: Vector2, c2: Vector2, p1: Vector2, segments: int
) -> tuple[Vector2, ...]:
    """Sample a cubic Bézier into ``segments + 1`` points (endpoints included)."""
    segments = max(1, segments)
    return tuple(cubic_bezier_point(i / segments, p0, c1, c2, p1) for i in range(segments + 1))


def path_length(points: Sequence[Vector2]) -> float:
    return sum(points[i].distance_to(points[i + 1]) for i in range(len(points) - 1))


__all__ = [
    "Vector2",
    "clamp",
    "cubic_bezier_point",
    "ease_in_out",
    "flatten_cubic",
    "lerp",
    "path_length",
]
