"""Ambient render layers: everything except the flower heads.

Each builder is a pure function of its inputs returning a list of draw
commands. Layers that must look the same every frame (stars, grass) build
their own ``SeededRandom`` from a fixed seed on each call instead of
caching geometry, so there is no hidden state between frames.
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from typing import TYPE_CHECKING, Optional

from garden.color import TRANSPARENT, Color
from garden.config import render as render_constants
from garden.config.garden_config import RenderConfig
from garden.entities import Flower, Leaf, LeafSide, Stem
from garden.math_utils import Vector2, clamp, cubic_bezier_point, flatten_cubic
from garden.motion import MotionSample
from garden.render.commands import (
    Circle,
    DrawCommand,
    Layer,
    LinearGradientRect,
    Polygon,
    Polyline,
    RadialGradient,
)
from garden.rng import SeededRandom
from garden.viewport import Viewport

if TYPE_CHECKING:
    from garden.wind import WindState

STEM_BASE = Color.rgb(render_constants.STEM_BASE_COLOR)
STEM_TIP = Color.rgb(render_constants.STEM_TIP_COLOR)
GRASS_BASE = Color.rgb(render_constants.GRASS_BASE_COLOR)
GRASS_TIP = Color.rgb(render_constants.GRASS_TIP_COLOR)
PARALLAX_GLOW_INNER = Color(0.05, 0.1, 0.2, 0.4)
PARALLAX_GLOW_OUTER = Color(0.0, 0.0, 0.0, 0.8)
LEAF_SEGMENTS = 8


def parallax_offset(
    motion: MotionSample, max_offset: float = render_constants.PARALLAX_MAX_OFFSET
) -> Vector2:
    """Tilt-driven background offset, capped to ``max_offset`` pixels per axis."""
    gain = render_constants.PARALLAX_GAIN
    return Vector2(
        clamp(motion.tilt_x * gain, -max_offset, max_offset),
        clamp(motion.tilt_y * gain, -max_offset, max_offset),
    )


def background_layer(
    viewport: Viewport,
    motion: MotionSample,
    *,
    parallax: bool = True,
    max_offset: float = render_constants.PARALLAX_MAX_OFFSET,
) -> list[DrawCommand]:
    commands: list[DrawCommand] = [
        LinearGradientRect(
            layer=Layer.BACKGROUND,
            rect=(0.0, 0.0, viewport.width, viewport.height),
            stops=tuple(Color.rgb(stop) for stop in render_constants.BACKGROUND_STOPS),
        )
    ]
    if parallax:
        commands.append(
            RadialGradient(
                layer=Layer.BACKGROUND,
                center=viewport.center + parallax_offset(motion, max_offset),
                radius=viewport.height * 0.8,
                inner=PARALLAX_GLOW_INNER,
                outer=PARALLAX_GLOW_OUTER,
            )
        )
    return commands


def grain_seed(time: float) -> int:
    """Seed for the grain pattern; changes ``GRAIN_RESEED_HZ`` times per second."""
    return math.floor(time * render_constants.GRAIN_RESEED_HZ)


def grain_layer(
    viewport: Viewport, time: float, dot_count: int = render_constants.GRAIN_DOT_COUNT
) -> list[DrawCommand]:
    """Film-grain dots, reproducible for a given rounded time."""
    rng = SeededRandom(grain_seed(time))
    lo, hi = render_constants.GRAIN_OPACITY_RANGE
    commands: list[DrawCommand] = []
    for _ in range(dot_count):
        x = rng.next_double(0.0, viewport.width)
        y = rng.next_double(0.0, viewport.height)
        opacity = rng.next_double(lo, hi)
        commands.append(
            Circle(layer=Layer.GRAIN, center=Vector2(x, y), radius=0.5, color=Color.white(1.0, opacity))
        )
    return commands


def star_layer(
    viewport: Viewport,
    time: float,
    count: int = render_constants.STAR_COUNT,
    seed: int = render_constants.STAR_SEED,
) -> list[DrawCommand]:
    """Twinkling stars at session-stable positions."""
    rng = SeededRandom(seed)
    commands: list[DrawCommand] = []
    for _ in range(count):
        x = rng.next_double(0.0, viewport.width)
        y = rng.next_double(0.0, viewport.height)
        base_size = rng.next_double(*render_constants.STAR_SIZE_RANGE)
        speed = rng.next_double(*render_constants.STAR_TWINKLE_SPEED_RANGE)
        phase = rng.next_double(0.0, math.tau)

        twinkle = (math.sin(time * speed + phase) + 1.0) / 2.0
        size = base_size * (0.6 + twinkle * 0.4)
        commands.append(
            Circle(
                layer=Layer.STARS,
                center=Vector2(x, y),
                radius=size / 2.0,
                color=Color.white(1.0, 0.4 + twinkle * 0.6),
            )
        )
    return commands


def grass_layer(
    viewport: Viewport,
    baseline: float,
    time: float,
    wind: "WindState",
    count: int = render_constants.GRASS_BLADE_COUNT,
) -> list[DrawCommand]:
    """Grass blades along the baseline.

    Blade ``i`` draws its geometry from ``SeededRandom(i * GRASS_SEED_STRIDE)``
    so blades keep their shape for the whole session; only the sway moves.
    """
    commands: list[DrawCommand] = []
    wind_push = wind.strength * 0.2 * math.cos(wind.direction)
    for i in range(count):
        rng = SeededRandom(i * render_constants.GRASS_SEED_STRIDE)
        x = rng.next_double(-50.0, viewport.width + 50.0)
        height = rng.next_double(*render_constants.GRASS_HEIGHT_RANGE)
        width = rng.next_double(*render_constants.GRASS_WIDTH_RANGE)
        lean = rng.next_double(-0.2, 0.2)
        speed = rng.next_double(1.0, 3.0)
        phase = rng.next_double(0.0, math.tau)

        sway = math.sin(time * speed + phase) * 5.0 + wind_push
        root = Vector2(x, baseline + 10.0)
        curve = flatten_cubic(
            Vector2(0.0, 0.0),
            Vector2(width / 2.0, -height * 0.3),
            Vector2(sway * 0.5, -height * 0.7),
            Vector2(sway, -height),
            6,
        )
        outline = curve + (Vector2(width, 0.0),)
        commands.append(
            Polygon(
                layer=Layer.GRASS,
                points=tuple(root + p.rotate(lean) for p in outline),
                color=GRASS_BASE,
                end_color=GRASS_TIP,
                gradient_start=root,
                gradient_end=root + Vector2(0.0, -height).rotate(lean),
            )
        )
    return commands


def leaf_outline(size: float) -> tuple[Vector2, ...]:
    """Teardrop leaf pointing up and to the right from the origin."""
    w = size * 0.6
    h = size
    origin = Vector2(0.0, 0.0)
    tip = Vector2(w, -h)
    outward = flatten_cubic(origin, Vector2(w * 0.2, -h * 0.2), Vector2(w, -h * 0.8), tip, LEAF_SEGMENTS)
    back = flatten_cubic(tip, Vector2(w * 0.8, -h * 0.2), Vector2(0.0, -h * 0.2), origin, LEAF_SEGMENTS)
    return outward + back[1:-1]


def leaf_polygon(
    position: Vector2,
    angle: float,
    size: float,
    color: Color,
    *,
    mirrored: bool = False,
    base_opacity: float = 0.4,
) -> Polygon:
    """Place a leaf at *position*, rotated by *angle* and optionally flipped."""
    flip = -1.0 if mirrored else 1.0

    def place(p: Vector2) -> Vector2:
        return position + Vector2(p.x * flip, p.y).rotate(angle)

    w = size * 0.6
    return Polygon(
        layer=Layer.STEMS,
        points=tuple(place(p) for p in leaf_outline(size)),
        color=color.with_alpha(base_opacity),
        end_color=color,
        gradient_start=position,
        gradient_end=place(Vector2(w, -size)),
    )


def stem_control_points(anchor: Vector2, head: Vector2, bend: float) -> tuple[Vector2, Vector2]:
    """Bézier controls giving procedural stems their S/C curve."""
    length = abs(head.y - anchor.y)
    return (
        Vector2(anchor.x + bend, anchor.y - length * 0.33),
        Vector2(head.x - bend * 0.5, anchor.y - length * 0.66),
    )


def procedural_stem(
    flower: Flower, head: Vector2, segments: int = render_constants.CURVE_SEGMENTS
) -> list[DrawCommand]:
    """Curved stem from the flower's anchor to its swayed head, with two leaves."""
    anchor = flower.anchor
    c1, c2 = stem_control_points(anchor, head, flower.genome.stem_bend)
    commands: list[DrawCommand] = [
        Polyline(
            layer=Layer.STEMS,
            points=flatten_cubic(anchor, c1, c2, head, segments),
            color=STEM_BASE,
            end_color=STEM_TIP,
            width=2.0,
        )
    ]
    positions = render_constants.STEM_LEAF_POSITIONS
    sizes = render_constants.STEM_LEAF_SIZES
    for index, (t, size) in enumerate(zip(positions, sizes)):
        point = cubic_bezier_point(t, anchor, c1, c2, head)
        mirrored = index % 2 == 1
        angle = 0.8 if mirrored else -0.8
        commands.append(leaf_polygon(point, angle, size, STEM_TIP, mirrored=mirrored))
    return commands


def drawn_stem(stem: Stem) -> list[DrawCommand]:
    """Hand-drawn stem path plus its generated leaves."""
    if len(stem.points) < 2:
        return []
    commands: list[DrawCommand] = [
        Polyline(
            layer=Layer.STEMS,
            points=stem.points,
            color=STEM_BASE,
            end_color=STEM_TIP,
            width=stem.thickness,
        )
    ]
    commands.extend(_leaf_command(leaf) for leaf in stem.leaves)
    return commands


def _leaf_command(leaf: Leaf) -> Polygon:
    # Leaf angles are tangent-relative; the outline points up, so turn it onto the tangent
    return leaf_polygon(
        leaf.position,
        leaf.angle + math.pi / 2.0,
        leaf.size,
        STEM_TIP,
        mirrored=leaf.side is LeafSide.LEFT,
        base_opacity=0.6,
    )


def stem_layer(
    flowers: Sequence[Flower],
    stems: Sequence[Stem],
    heads: dict[int, Vector2],
    config: Optional[RenderConfig] = None,
) -> list[DrawCommand]:
    """All stems: drawn stems first, then each flower's own stem.

    Flowers grown from a drawn stem get a short neck from the end of the
    static path to the swayed head. If the drawn stem was evicted the
    flower still carries its path and draws it itself.

    Args:
        flowers: Live flowers in draw order
        stems: Live drawn stems in draw order
        heads: Swayed head position per flower ID (culled flowers absent)
        config: Render settings
    """
    segments = (config or RenderConfig()).curve_segments
    live_stems = {stem.id for stem in stems}
    commands: list[DrawCommand] = []
    for stem in stems:
        commands.extend(drawn_stem(stem))

    for flower in flowers:
        head = heads.get(flower.id)
        if head is None:
            continue
        if flower.has_drawn_stem:
            if flower.stem_id not in live_stems:
                commands.append(
                    Polyline(
                        layer=Layer.STEMS,
                        points=flower.stem_path,
                        color=STEM_BASE,
                        end_color=STEM_TIP,
                        width=2.0,
                    )
                )
            neck = (flower.stem_path[-1], head)
            commands.append(Polyline(layer=Layer.STEMS, points=neck, color=STEM_TIP, width=2.0))
        else:
            commands.extend(procedural_stem(flower, head, segments))
    return commands


def fog_layer(viewport: Viewport, baseline: float) -> list[DrawCommand]:
    """Dark band fading in just above the baseline to blend blade roots."""
    height = render_constants.FOG_HEIGHT
    return [
        LinearGradientRect(
            layer=Layer.FOG,
            rect=(0.0, baseline - height, viewport.width, height),
            stops=(TRANSPARENT, Color(0.0, 0.0, 0.0, render_constants.FOG_OPACITY)),
        )
    ]


__all__ = [
    "background_layer",
    "drawn_stem",
    "fog_layer",
    "grain_layer",
    "grain_seed",
    "grass_layer",
    "leaf_outline",
    "leaf_polygon",
    "parallax_offset",
    "procedural_stem",
    "star_layer",
    "stem_control_points",
    "stem_layer",
]
