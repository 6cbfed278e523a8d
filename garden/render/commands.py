"""Backend-neutral draw commands.

The renderer never touches a drawing surface. It produces an ordered list
of immutable commands which a display collaborator (see
``rendering/pygame_canvas.py``) executes in sequence. Every command names
the layer it belongs to, how it composites (normal or additive) and an
optional blur radius hint that backends may approximate or ignore.

Geometry is in viewport pixels with y growing downward.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Iterator, Optional

from garden.color import Color
from garden.math_utils import Vector2


class Layer(IntEnum):
    """Paint order; lower layers are composited first."""

    BACKGROUND = 0
    GRAIN = 1
    STARS = 2
    GRASS = 3
    STEMS = 4
    FLOWERS = 5
    FOG = 6


class BlendMode(Enum):
    NORMAL = "normal"
    ADDITIVE = "additive"


@dataclass(frozen=True, kw_only=True)
class DrawCommand:
    """Fields shared by every command."""

    layer: Layer
    blend: BlendMode = BlendMode.NORMAL
    blur: float = 0.0


@dataclass(frozen=True, kw_only=True)
class LinearGradientRect(DrawCommand):
    """Axis-aligned rectangle filled with a vertical gradient.

    Attributes:
        rect: (x, y, width, height)
        stops: Evenly spaced colors from top to bottom
    """

    rect: tuple[float, float, float, float]
    stops: tuple[Color, ...]


@dataclass(frozen=True, kw_only=True)
class RadialGradient(DrawCommand):
    """Disc fading from ``inner`` at the center to ``outer`` at ``radius``."""

    center: Vector2
    radius: float
    inner: Color
    outer: Color


@dataclass(frozen=True, kw_only=True)
class Circle(DrawCommand):
    """Filled disc, or a ring when ``width`` is positive."""

    center: Vector2
    radius: float
    color: Color
    width: float = 0.0


@dataclass(frozen=True, kw_only=True)
class Ellipse(DrawCommand):
    """Filled ellipse rotated by ``angle`` radians around its center."""

    center: Vector2
    radius_x: float
    radius_y: float
    angle: float
    color: Color


@dataclass(frozen=True, kw_only=True)
class Line(DrawCommand):
    start: Vector2
    end: Vector2
    color: Color
    width: float = 1.0


@dataclass(frozen=True, kw_only=True)
class Polyline(DrawCommand):
    """Open stroked path.

    When ``end_color`` is set the stroke blends from ``color`` at the
    first point to ``end_color`` at the last.
    """

    points: tuple[Vector2, ...]
    color: Color
    width: float = 1.0
    end_color: Optional[Color] = None


@dataclass(frozen=True, kw_only=True)
class Polygon(DrawCommand):
    """Closed filled shape.

    When ``end_color`` is set the fill is a linear gradient from ``color``
    at ``gradient_start`` to ``end_color`` at ``gradient_end``.
    """

    points: tuple[Vector2, ...]
    color: Color
    end_color: Optional[Color] = None
    gradient_start: Optional[Vector2] = None
    gradient_end: Optional[Vector2] = None


@dataclass
class RenderFrame:
    """Commands for one frame, in paint order.

    Attributes:
        width: Viewport width
        height: Viewport height
        time: Animation time the frame was rendered at
        commands: Ordered draw commands
        stats: Counters gathered while rendering (flowers drawn/culled...)
    """

    width: float
    height: float
    time: float
    commands: list[DrawCommand]
    stats: dict[str, int]

    def __len__(self) -> int:
        return len(self.commands)

    def __iter__(self) -> Iterator[DrawCommand]:
        return iter(self.commands)

    def by_layer(self, layer: Layer) -> list[DrawCommand]:
        return [command for command in self.commands if command.layer is layer]

    def of_type(self, kind: type) -> list[DrawCommand]:
        return [command for command in self.commands if isinstance(command, kind)]


__all__ = [
    "BlendMode",
    "Circle",
    "DrawCommand",
    "Ellipse",
    "Layer",
    "Line",
    "LinearGradientRect",
    "Polygon",
    "Polyline",
    "RadialGradient",
    "RenderFrame",
]
