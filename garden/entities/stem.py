"""Hand-drawn stems and their leaves.

A stem is created when the user draws instead of tapping. Its geometry is
frozen at creation: the drawn points plus leaves generated along the path
from the stem's own seed.
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import Enum

from garden.config import flowers as flower_constants
from garden.math_utils import Vector2
from garden.rng import SeededRandom


class LeafSide(Enum):
    LEFT = "left"
    RIGHT = "right"

    def opposite(self) -> "LeafSide":
        return LeafSide.RIGHT if self is LeafSide.LEFT else LeafSide.LEFT


@dataclass(frozen=True)
class Leaf:
    """A leaf attached to a drawn stem.

    Attributes:
        position: Attachment point on the stem
        angle: Leaf orientation in radians
        size: Leaf length in pixels
        side: Which side of the stem the leaf grows on
    """

    position: Vector2
    angle: float
    size: float
    side: LeafSide


@dataclass(frozen=True)
class Stem:
    """An ordered drawn path plus its leaves.

    Attributes:
        id: Unique identifier within the garden
        points: Drawn points, first = ground end, last = head end
        leaves: Leaves generated along the path
        created_at: Garden time when the stem was drawn
        thickness: Stroke width in pixels
        seed: Seed the leaves were generated from
    """

    id: int
    points: tuple[Vector2, ...]
    leaves: tuple[Leaf, ...] = field(default_factory=tuple)
    created_at: float = 0.0
    thickness: float = flower_constants.DEFAULT_STEM_THICKNESS
    seed: int = 0

    @classmethod
    def from_path(
        cls,
        stem_id: int,
        path: Sequence[Vector2],
        seed: int,
        *,
        created_at: float = 0.0,
        strict: bool = True,
    ) -> "Stem":
        """Freeze a drawn path into a stem, generating its leaves."""
        points = tuple(Vector2.of(p) for p in path)
        rng = SeededRandom(seed, strict=strict)
        return cls(
            id=stem_id,
            points=points,
            leaves=generate_leaves(points, rng),
            created_at=created_at,
            seed=rng.seed,
        )

    @property
    def head(self) -> Vector2:
        return self.points[-1]

    @property
    def base(self) -> Vector2:
        return self.points[0]


def generate_leaves(
    points: Sequence[Vector2],
    rng: SeededRandom,
    spacing: float = flower_constants.LEAF_SPACING,
) -> tuple[Leaf, ...]:
    """Place alternating leaves every *spacing* pixels of arc length.

    Args:
        points: Stem polyline
        rng: Generator for the first side and leaf sizes
        spacing: Arc length between consecutive leaves

    Returns:
        Leaves ordered from the ground end upward
    """
    if len(points) < 2 or spacing <= 0:
        return ()

    side = LeafSide.LEFT if rng.next_int(0, 1) == 0 else LeafSide.RIGHT
    leaves: list[Leaf] = []
    travelled = 0.0
    next_mark = spacing

    for i in range(len(points) - 1):
        start, end = points[i], points[i + 1]
        segment = start.distance_to(end)
        if segment == 0:
            continue
        tangent = math.atan2(end.y - start.y, end.x - start.x)
        while travelled + segment >= next_mark:
            t = (next_mark - travelled) / segment
            position = Vector2(start.x + (end.x - start.x) * t, start.y + (end.y - start.y) * t)
            offset = flower_constants.LEAF_ANGLE_OFFSET
            angle = tangent - offset if side is LeafSide.LEFT else tangent + offset
            size = rng.next_double(*flower_constants.LEAF_SIZE_RANGE)
            leaves.append(Leaf(position=position, angle=angle, size=size, side=side))
            side = side.opposite()
            next_mark += spacing
        travelled += segment

    return tuple(leaves)


__all__ = ["Leaf", "LeafSide", "Stem", "generate_leaves"]
