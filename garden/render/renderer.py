"""Frame renderer.

``GardenRenderer.render`` turns the garden state at a given time into a
``RenderFrame`` of draw commands. It only reads the state: rendering the
same state at the same time twice yields equal frames, and nothing on the
state changes.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Optional

from garden.config import render as render_constants
from garden.config.garden_config import GardenConfig
from garden.math_utils import Vector2
from garden.motion import ZERO_MOTION, MotionSample
from garden.render import layers
from garden.render.commands import DrawCommand, RenderFrame
from garden.render.flower_head import flower_head, head_radius
from garden.viewport import Viewport

if TYPE_CHECKING:
    from garden.garden_state import GardenState

logger = logging.getLogger(__name__)


class GardenRenderer:
    """Builds the layered draw list for a frame.

    Args:
        config: Render settings; defaults to a stock ``GardenConfig``
    """

    def __init__(self, config: Optional[GardenConfig] = None) -> None:
        self.config = config or GardenConfig()

    def render(
        self,
        state: "GardenState",
        time: float,
        viewport: Viewport,
        motion: MotionSample = ZERO_MOTION,
    ) -> RenderFrame:
        """Render *state* at *time*.

        Args:
            state: Garden to draw (read only)
            time: Animation time; sway, twinkle and grain derive from it
            viewport: Drawable area
            motion: Smoothed tilt for background parallax

        Returns:
            The frame's draw commands in paint order
        """
        settings = self.config.render
        knobs = state.knobs
        baseline = viewport.baseline(self.config.display.baseline_fraction)
        commands: list[DrawCommand] = []
        stats = {"flowers_drawn": 0, "flowers_culled": 0}

        commands.extend(
            layers.background_layer(
                viewport,
                motion,
                parallax=knobs.parallax_enabled,
                max_offset=settings.parallax_max_offset,
            )
        )
        commands.extend(layers.grain_layer(viewport, time, settings.grain_dot_count))
        if knobs.show_stars:
            commands.extend(layers.star_layer(viewport, time, settings.star_count, settings.star_seed))
        if knobs.show_grass:
            commands.extend(layers.grass_layer(viewport, baseline, time, state.wind, settings.grass_blade_count))

        heads = self._visible_heads(state, time, viewport, stats)
        commands.extend(layers.stem_layer(state.flowers, state.stems, heads, settings))

        for flower in state.flowers:
            head = heads.get(flower.id)
            if head is None:
                continue
            commands.extend(
                flower_head(
                    flower,
                    head,
                    flower.color(state.palette),
                    time,
                    bloom=knobs.bloom_intensity,
                    chromatic_offset=knobs.chromatic_offset,
                    global_scale=knobs.global_scale,
                    show_fireflies=knobs.show_fireflies,
                    stamen_count=settings.stamen_count,
                    firefly_count=settings.firefly_count,
                )
            )

        commands.extend(layers.fog_layer(viewport, baseline))
        stats["commands"] = len(commands)
        return RenderFrame(
            width=viewport.width,
            height=viewport.height,
            time=time,
            commands=commands,
            stats=stats,
        )

    def _visible_heads(
        self, state: "GardenState", time: float, viewport: Viewport, stats: dict[str, int]
    ) -> dict[int, Vector2]:
        """Swayed head per flower, leaving out heads far outside the viewport."""
        knobs = state.knobs
        heads: dict[int, Vector2] = {}
        for flower in state.flowers:
            head = flower.head_position(time, state.wind.strength, state.wind.direction)
            reach = head_radius(flower, knobs.bloom_intensity, knobs.global_scale) * 2.0
            if not head.is_finite() or not viewport.contains(
                head, render_constants.OFFSCREEN_MARGIN + reach
            ):
                stats["flowers_culled"] += 1
                continue
            heads[flower.id] = head
            stats["flowers_drawn"] += 1
        return heads


__all__ = ["GardenRenderer"]
