"""Flower head passes.

A head is composited from, bottom to top:

1. soft concentric glow discs pulsing with ``Flower.glow_pulse``
2. the chromatic-aberration petal rings: red shifted by ``(-o, -o)``,
   green unshifted, blue shifted by ``(+o, +o)``, all additive so that
   overlaps go toward white and only the fringes show color
3. a blurred core ring in the flower's true palette color
4. the bright center, stamens and their end dots
5. orbiting fireflies

With a zero offset the three channel rings coincide; ``collapse_passes``
merges them into a single normal-blended white ring drawn in their place.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from garden.color import Color, WHITE
from garden.config import render as render_constants
from garden.entities import Flower
from garden.math_utils import Vector2
from garden.render.commands import BlendMode, Circle, DrawCommand, Ellipse, Layer, Line

FIREFLY_COLORS = tuple(Color.rgb(rgb) for rgb in render_constants.FIREFLY_COLORS)


@dataclass(frozen=True)
class ChannelPass:
    """One petal-ring pass of the chromatic split.

    Attributes:
        channel: "red", "green", "blue", or "combined" after collapsing
        offset: Translation applied to the ring
        color: Ring color including opacity
        blend: Compositing mode
    """

    channel: str
    offset: Vector2
    color: Color
    blend: BlendMode


def channel_passes(offset: float, opacity: float = render_constants.CHANNEL_OPACITY) -> tuple[ChannelPass, ...]:
    """The three RGB passes for a chromatic *offset* (always three, never collapsed)."""
    return (
        ChannelPass("red", Vector2(-offset, -offset), Color(1.0, 0.0, 0.0, opacity), BlendMode.ADDITIVE),
        ChannelPass("green", Vector2(0.0, 0.0), Color(0.0, 1.0, 0.0, opacity), BlendMode.ADDITIVE),
        ChannelPass("blue", Vector2(offset, offset), Color(0.0, 0.0, 1.0, opacity), BlendMode.ADDITIVE),
    )


def collapse_passes(passes: tuple[ChannelPass, ...]) -> tuple[ChannelPass, ...]:
    """Merge additive passes that share one position into a single normal pass.

    Passes at differing positions are returned unchanged.
    """
    if len(passes) < 2:
        return passes
    first = passes[0].offset
    if any(p.offset != first or p.blend is not BlendMode.ADDITIVE for p in passes):
        return passes

    # Sum the premultiplied contributions, then un-premultiply
    r = min(1.0, sum(p.color.r * p.color.a for p in passes))
    g = min(1.0, sum(p.color.g * p.color.a for p in passes))
    b = min(1.0, sum(p.color.b * p.color.a for p in passes))
    alpha = max(r, g, b)
    if alpha == 0.0:
        return (ChannelPass("combined", first, Color(0.0, 0.0, 0.0, 0.0), BlendMode.NORMAL),)
    color = Color(r / alpha, g / alpha, b / alpha, alpha)
    return (ChannelPass("combined", first, color, BlendMode.NORMAL),)


def chromatic_passes(offset: float, opacity: float = render_constants.CHANNEL_OPACITY) -> tuple[ChannelPass, ...]:
    """Channel passes to draw: three additive passes, or one when the offset is zero."""
    return collapse_passes(channel_passes(offset, opacity))


def petal_ring(
    center: Vector2,
    count: int,
    radius: float,
    rotation: float,
    color: Color,
    *,
    blend: BlendMode = BlendMode.NORMAL,
    blur: float = 0.0,
) -> list[DrawCommand]:
    """Ellipse petals evenly spaced around *center*.

    Each petal spans from the center out to *radius* along its axis and is
    half as wide as it is long.
    """
    step = math.tau / max(1, count)
    petals: list[DrawCommand] = []
    for i in range(count):
        angle = rotation + step * i
        axis = Vector2(math.cos(angle), math.sin(angle))
        petals.append(
            Ellipse(
                layer=Layer.FLOWERS,
                center=center + axis * (radius / 2.0),
                radius_x=radius / 2.0,
                radius_y=radius / 4.0,
                angle=angle,
                color=color,
                blend=blend,
                blur=blur,
            )
        )
    return petals


def head_radius(flower: Flower, bloom: float, global_scale: float) -> float:
    return flower.genome.petal_radius * flower.scale * bloom * global_scale


def glow_passes(flower: Flower, head: Vector2, radius: float, color: Color, time: float) -> list[DrawCommand]:
    pulse = flower.glow_pulse(time)
    commands: list[DrawCommand] = []
    for factor, opacity in render_constants.GLOW_PASSES:
        commands.append(
            Circle(
                layer=Layer.FLOWERS,
                center=head,
                radius=radius * factor,
                color=color.with_alpha(opacity * (0.6 + 0.4 * pulse)),
                blend=BlendMode.ADDITIVE,
                blur=radius * factor * 0.25,
            )
        )
    return commands


def stamens(head: Vector2, color: Color, count: int = render_constants.STAMEN_COUNT) -> list[DrawCommand]:
    """Bright center, then radial stamen lines with outlined end dots."""
    inner = render_constants.STAMEN_INNER_RADIUS
    outer = render_constants.STAMEN_OUTER_RADIUS
    commands: list[DrawCommand] = [
        Circle(layer=Layer.FLOWERS, center=head, radius=8.0, color=WHITE.with_alpha(0.9)),
        Circle(layer=Layer.FLOWERS, center=head, radius=6.0, color=WHITE, blur=6.0),
    ]
    step = math.tau / max(1, count)
    for i in range(count):
        axis = Vector2(math.cos(step * i), math.sin(step * i))
        start = head + axis * inner
        end = head + axis * outer
        commands.append(Line(layer=Layer.FLOWERS, start=start, end=end, color=WHITE.with_alpha(0.4), width=2.5))
        commands.append(Line(layer=Layer.FLOWERS, start=start, end=end, color=color.with_alpha(0.7), width=1.5))
        commands.append(
            Circle(layer=Layer.FLOWERS, center=end, radius=4.0, color=color.with_alpha(0.3), blur=1.0)
        )
        commands.append(Circle(layer=Layer.FLOWERS, center=end, radius=3.0, color=color.with_alpha(0.9)))
    return commands


def fireflies(
    head: Vector2, radius: float, time: float, count: int = render_constants.FIREFLY_COUNT
) -> list[DrawCommand]:
    """Glowing dots on a flattened orbit around the head."""
    orbit = radius * render_constants.FIREFLY_ORBIT_FACTOR
    speed = render_constants.FIREFLY_SPEED
    commands: list[DrawCommand] = []
    for i in range(count):
        offset = i * (math.tau / count)
        position = head + Vector2(
            math.cos(time * speed + offset) * orbit,
            math.sin(time * speed + offset) * orbit * 0.5,
        )
        pulse = (math.sin(time * 4.0 + offset) + 1.0) * 0.5
        size = 3.0 + pulse * 3.0
        commands.append(
            Circle(
                layer=Layer.FLOWERS,
                center=position,
                radius=size / 2.0,
                color=FIREFLY_COLORS[i % len(FIREFLY_COLORS)].with_alpha(0.6 + 0.4 * pulse),
                blend=BlendMode.ADDITIVE,
                blur=2.0,
            )
        )
    return commands


def flower_head(
    flower: Flower,
    head: Vector2,
    color: Color,
    time: float,
    *,
    bloom: float = 1.0,
    chromatic_offset: float = 0.0,
    global_scale: float = 1.0,
    show_fireflies: bool = True,
    stamen_count: int = render_constants.STAMEN_COUNT,
    firefly_count: int = render_constants.FIREFLY_COUNT,
) -> list[DrawCommand]:
    """Every pass for one flower head, bottom to top."""
    genome = flower.genome
    radius = head_radius(flower, bloom, global_scale)

    commands = glow_passes(flower, head, radius, color, time)
    for channel in chromatic_passes(chromatic_offset):
        commands.extend(
            petal_ring(
                head + channel.offset,
                genome.petal_count,
                radius,
                genome.rotation,
                channel.color,
                blend=channel.blend,
                blur=render_constants.CHANNEL_BLUR,
            )
        )
    commands.extend(
        petal_ring(
            head,
            genome.petal_count,
            radius * render_constants.CORE_RADIUS_FACTOR,
            genome.rotation,
            color.with_alpha(render_constants.CORE_OPACITY),
            blend=BlendMode.ADDITIVE,
            blur=render_constants.CORE_BLUR,
        )
    )
    commands.extend(stamens(head, color, stamen_count))
    if show_fireflies:
        commands.extend(fireflies(head, radius, time, firefly_count))
    return commands


__all__ = [
    "ChannelPass",
    "channel_passes",
    "chromatic_passes",
    "collapse_passes",
    "fireflies",
    "flower_head",
    "glow_passes",
    "head_radius",
    "petal_ring",
    "stamens",
]
