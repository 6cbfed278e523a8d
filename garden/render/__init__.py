"""Rendering core: turns garden state into backend-neutral draw commands."""

from garden.render.commands import (
    BlendMode,
    Circle,
    DrawCommand,
    Ellipse,
    Layer,
    Line,
    LinearGradientRect,
    Polygon,
    Polyline,
    RadialGradient,
    RenderFrame,
)
from garden.render.flower_head import ChannelPass, channel_passes, chromatic_passes, collapse_passes
from garden.render.renderer import GardenRenderer

__all__ = [
    "BlendMode",
    "ChannelPass",
    "Circle",
    "DrawCommand",
    "Ellipse",
    "GardenRenderer",
    "Layer",
    "Line",
    "LinearGradientRect",
    "Polygon",
    "Polyline",
    "RadialGradient",
    "RenderFrame",
    "channel_passes",
    "chromatic_passes",
    "collapse_passes",
]
