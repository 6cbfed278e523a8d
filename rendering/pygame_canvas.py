"""Execute garden draw commands on a pygame surface.

Every command is drawn onto a small temporary surface covering its
bounding box and then composited onto the target:

- normal commands use a per-pixel-alpha surface and a regular blit
- additive commands draw the color premultiplied by its opacity onto an
  opaque black surface and blit with ``BLEND_ADD``

Blur hints are approximated by a smoothscale down-and-up pass.
"""

from __future__ import annotations

import logging
import math
from typing import Callable, Dict, Optional

import pygame

from garden.color import Color
from garden.math_utils import lerp
from garden.render.commands import (
    BlendMode,
    Circle,
    DrawCommand,
    Ellipse,
    Line,
    LinearGradientRect,
    Polygon,
    Polyline,
    RadialGradient,
    RenderFrame,
)

logger = logging.getLogger(__name__)

RADIAL_STEPS = 32


def mix(a: Color, b: Color, t: float) -> Color:
    return Color(lerp(a.r, b.r, t), lerp(a.g, b.g, t), lerp(a.b, b.b, t), lerp(a.a, b.a, t))


def gradient_color(stops: tuple[Color, ...], t: float) -> Color:
    """Color at *t* in [0, 1] along evenly spaced *stops*."""
    if len(stops) == 1:
        return stops[0]
    t = min(1.0, max(0.0, t))
    scaled = t * (len(stops) - 1)
    index = min(int(scaled), len(stops) - 2)
    return mix(stops[index], stops[index + 1], scaled - index)


def soften(surface: pygame.Surface, radius: float) -> pygame.Surface:
    """Cheap blur: shrink by a factor growing with *radius*, then scale back."""
    if radius < 1.0:
        return surface
    width, height = surface.get_size()
    factor = 1.0 / (1.0 + radius / 2.0)
    small = pygame.transform.smoothscale(
        surface, (max(1, int(width * factor)), max(1, int(height * factor)))
    )
    return pygame.transform.smoothscale(small, (width, height))


class PygameCanvas:
    """Draws ``RenderFrame`` command lists onto a pygame surface.

    Attributes:
        surface: Target surface (usually the display surface)
        blur_enabled: Whether blur hints are honoured
    """

    def __init__(self, surface: pygame.Surface, *, blur_enabled: bool = True) -> None:
        self.surface = surface
        self.blur_enabled = blur_enabled
        self._gradient_cache: Dict[tuple, pygame.Surface] = {}
        self._handlers: Dict[type, Callable[[DrawCommand], None]] = {
            LinearGradientRect: self._draw_linear_gradient,
            RadialGradient: self._draw_radial_gradient,
            Circle: self._draw_circle,
            Ellipse: self._draw_ellipse,
            Line: self._draw_line,
            Polyline: self._draw_polyline,
            Polygon: self._draw_polygon,
        }

    def draw_frame(self, frame: RenderFrame) -> int:
        """Draw every command of *frame* in order.

        Returns:
            Number of commands drawn
        """
        drawn = 0
        for command in frame.commands:
            if self.draw(command):
                drawn += 1
        return drawn

    def draw(self, command: DrawCommand) -> bool:
        handler = self._handlers.get(type(command))
        if handler is None:
            logger.debug("No pygame handler for %s", type(command).__name__)
            return False
        handler(command)
        return True

    # ------------------------------------------------------------------
    # Compositing
    # ------------------------------------------------------------------

    def _layer_surface(self, size: tuple[int, int], blend: BlendMode) -> pygame.Surface:
        if blend is BlendMode.ADDITIVE:
            layer = pygame.Surface(size)
            layer.fill((0, 0, 0))
            return layer
        return pygame.Surface(size, pygame.SRCALPHA)

    @staticmethod
    def _paint(color: Color, blend: BlendMode) -> tuple[int, int, int, int]:
        if blend is BlendMode.ADDITIVE:
            premultiplied = Color(color.r * color.a, color.g * color.a, color.b * color.a, 1.0)
            return premultiplied.to_rgba255()
        return color.to_rgba255()

    def _composite(
        self, layer: pygame.Surface, origin: tuple[float, float], blend: BlendMode, blur: float
    ) -> None:
        if self.blur_enabled and blur > 0.0:
            layer = soften(layer, blur)
        position = (int(math.floor(origin[0])), int(math.floor(origin[1])))
        if blend is BlendMode.ADDITIVE:
            self.surface.blit(layer, position, special_flags=pygame.BLEND_ADD)
        else:
            self.surface.blit(layer, position)

    def _bounded(
        self,
        bounds: tuple[float, float, float, float],
        command: DrawCommand,
        paint: Callable[[pygame.Surface, float, float], None],
    ) -> None:
        """Run *paint* on a temporary surface covering *bounds* plus blur padding.

        *paint* receives the surface and the offset to subtract from
        viewport coordinates.
        """
        pad = int(math.ceil(command.blur * 2.0)) + 2
        left, top, right, bottom = bounds
        x0 = math.floor(left) - pad
        y0 = math.floor(top) - pad
        width = int(math.ceil(right) - x0) + pad
        height = int(math.ceil(bottom) - y0) + pad
        if width <= 0 or height <= 0:
            return
        if not self.surface.get_rect().colliderect(pygame.Rect(x0, y0, width, height)):
            return
        layer = self._layer_surface((width, height), command.blend)
        paint(layer, x0, y0)
        self._composite(layer, (x0, y0), command.blend, command.blur)

    # ------------------------------------------------------------------
    # Handlers
    # ------------------------------------------------------------------

    def _draw_linear_gradient(self, command: LinearGradientRect) -> None:
        x, y, width, height = command.rect
        size = (max(1, int(round(width))), max(1, int(round(height))))
        key = ("linear", size, command.stops, command.blend)
        layer = self._gradient_cache.get(key)
        if layer is None:
            layer = self._layer_surface(size, command.blend)
            for row in range(size[1]):
                t = row / max(1, size[1] - 1)
                color = self._paint(gradient_color(command.stops, t), command.blend)
                pygame.draw.line(layer, color, (0, row), (size[0] - 1, row))
            self._gradient_cache[key] = layer
        self._composite(layer, (x, y), command.blend, command.blur)

    def _draw_radial_gradient(self, command: RadialGradient) -> None:
        radius = max(1, int(round(command.radius)))
        key = ("radial", radius, command.inner, command.outer, command.blend)
        layer = self._gradient_cache.get(key)
        if layer is None:
            layer = self._layer_surface((radius * 2, radius * 2), command.blend)
            for step in range(RADIAL_STEPS, 0, -1):
                t = step / RADIAL_STEPS
                color = self._paint(mix(command.inner, command.outer, t), command.blend)
                pygame.draw.circle(layer, color, (radius, radius), max(1, int(radius * t)))
            self._gradient_cache[key] = layer
        origin = (command.center.x - radius, command.center.y - radius)
        self._composite(layer, origin, command.blend, command.blur)

    def _draw_circle(self, command: Circle) -> None:
        c = command.center
        r = max(0.5, command.radius)
        color = self._paint(command.color, command.blend)
        width = int(round(command.width)) if command.width > 0 else 0

        def paint(layer: pygame.Surface, ox: float, oy: float) -> None:
            pygame.draw.circle(layer, color, (c.x - ox, c.y - oy), max(1, int(round(r))), width)

        self._bounded((c.x - r, c.y - r, c.x + r, c.y + r), command, paint)

    def _draw_ellipse(self, command: Ellipse) -> None:
        rx = max(1, int(round(command.radius_x)))
        ry = max(1, int(round(command.radius_y)))
        shape = self._layer_surface((rx * 2, ry * 2), command.blend)
        pygame.draw.ellipse(shape, self._paint(command.color, command.blend), shape.get_rect())
        # Screen y points down, so a positive angle turns clockwise
        rotated = pygame.transform.rotate(shape, -math.degrees(command.angle))
        w, h = rotated.get_size()
        origin = (command.center.x - w / 2.0, command.center.y - h / 2.0)
        self._composite(rotated, origin, command.blend, command.blur)

    def _draw_line(self, command: Line) -> None:
        a, b = command.start, command.end
        width = max(1, int(round(command.width)))
        color = self._paint(command.color, command.blend)

        def paint(layer: pygame.Surface, ox: float, oy: float) -> None:
            pygame.draw.line(layer, color, (a.x - ox, a.y - oy), (b.x - ox, b.y - oy), width)

        bounds = (min(a.x, b.x) - width, min(a.y, b.y) - width, max(a.x, b.x) + width, max(a.y, b.y) + width)
        self._bounded(bounds, command, paint)

    def _draw_polyline(self, command: Polyline) -> None:
        points = command.points
        if len(points) < 2:
            return
        width = max(1, int(round(command.width)))
        segments = len(points) - 1

        def paint(layer: pygame.Surface, ox: float, oy: float) -> None:
            for i in range(segments):
                color = command.color
                if command.end_color is not None:
                    color = mix(command.color, command.end_color, (i + 0.5) / segments)
                a, b = points[i], points[i + 1]
                pygame.draw.line(
                    layer,
                    self._paint(color, command.blend),
                    (a.x - ox, a.y - oy),
                    (b.x - ox, b.y - oy),
                    width,
                )

        self._bounded(_bounds(points, width), command, paint)

    def _draw_polygon(self, command: Polygon) -> None:
        points = command.points
        if len(points) < 3:
            return

        def paint(layer: pygame.Surface, ox: float, oy: float) -> None:
            local = [(p.x - ox, p.y - oy) for p in points]
            if command.end_color is None:
                pygame.draw.polygon(layer, self._paint(command.color, command.blend), local)
                return
            fill = self._polygon_gradient(layer.get_size(), command, ox, oy)
            mask = pygame.Surface(layer.get_size(), pygame.SRCALPHA)
            pygame.draw.polygon(mask, (255, 255, 255, 255), local)
            fill.blit(mask, (0, 0), special_flags=pygame.BLEND_RGBA_MULT)
            layer.blit(fill, (0, 0))

        self._bounded(_bounds(points, 1.0), command, paint)

    def _polygon_gradient(
        self, size: tuple[int, int], command: Polygon, ox: float, oy: float
    ) -> pygame.Surface:
        """Gradient fill along the dominant axis of the gradient direction."""
        width, height = size
        fill = self._layer_surface(size, command.blend)
        start = command.gradient_start or command.points[0]
        end = command.gradient_end or command.points[-1]
        vertical = abs(end.y - start.y) >= abs(end.x - start.x)
        span = (end.y - start.y) if vertical else (end.x - start.x)
        origin = (start.y - oy) if vertical else (start.x - ox)
        steps = height if vertical else width
        for i in range(steps):
            t = 0.0 if span == 0 else (i - origin) / span
            color = self._paint(
                gradient_color((command.color, command.end_color), t), command.blend
            )
            if vertical:
                pygame.draw.line(fill, color, (0, i), (width - 1, i))
            else:
                pygame.draw.line(fill, color, (i, 0), (i, height - 1))
        return fill


def _bounds(points, pad: float) -> tuple[float, float, float, float]:
    xs = [p.x for p in points]
    ys = [p.y for p in points]
    return (min(xs) - pad, min(ys) - pad, max(xs) + pad, max(ys) + pad)


def create_canvas(size: tuple[int, int], *, headless: bool = False) -> Optional[PygameCanvas]:
    """Create a canvas on an offscreen surface (headless) or the display.

    Returns:
        The canvas, or None when no display mode could be set
    """
    if headless:
        return PygameCanvas(pygame.Surface(size))
    try:
        screen = pygame.display.set_mode(size)
    except pygame.error as e:
        logger.error("Couldn't set the display mode: %s", e)
        return None
    return PygameCanvas(screen)


__all__ = ["PygameCanvas", "create_canvas", "gradient_color", "mix", "soften"]
