"""Tests for the frame renderer and its layer builders."""

import math

import pytest

from garden.color import WHITE, Color
from garden.config import render as render_constants
from garden.math_utils import Vector2
from garden.motion import MotionSample
from garden.render import (
    BlendMode,
    Circle,
    Ellipse,
    GardenRenderer,
    Layer,
    Line,
    Polygon,
    Polyline,
    RadialGradient,
    channel_passes,
    chromatic_passes,
    collapse_passes,
)
from garden.render.flower_head import stamens
from garden.render.layers import grain_layer, grass_layer, parallax_offset, star_layer
from garden.snapshot import build_snapshot
from garden.wind import WindState


@pytest.fixture
def renderer(config):
    return GardenRenderer(config)


def channel_ellipses(frame):
    """Petal ellipses of the chromatic rings (the core ring has a heavier blur)."""
    return [
        c for c in frame.of_type(Ellipse) if c.blur == render_constants.CHANNEL_BLUR
    ]


class TestLayerOrder:
    def test_empty_garden_draws_environment(self, renderer, garden, viewport):
        frame = renderer.render(garden, 1.0, viewport)
        layers = [command.layer for command in frame]
        assert layers == sorted(layers)
        assert layers[0] is Layer.BACKGROUND
        assert layers[-1] is Layer.FOG
        assert len(frame.by_layer(Layer.GRAIN)) == 500
        assert len(frame.by_layer(Layer.STARS)) == 150
        assert len(frame.by_layer(Layer.GRASS)) == 60
        assert frame.by_layer(Layer.FLOWERS) == []
        assert frame.stats["commands"] == len(frame)

    def test_flowers_paint_over_stems(self, renderer, garden, viewport):
        garden.spawn_flower((100, 300), viewport)
        garden.spawn_flower_from_stem([(200, 620), (210, 500), (200, 400)])
        frame = renderer.render(garden, 0.5, viewport)
        layers = [command.layer for command in frame]
        assert layers == sorted(layers)
        assert frame.stats["flowers_drawn"] == 2
        assert frame.by_layer(Layer.STEMS)
        assert frame.by_layer(Layer.FLOWERS)

    def test_toggles_remove_layers(self, renderer, garden, viewport):
        garden.set_knob("show_stars", False)
        garden.set_knob("show_grass", False)
        frame = renderer.render(garden, 0.0, viewport)
        assert frame.by_layer(Layer.STARS) == []
        assert frame.by_layer(Layer.GRASS) == []

    def test_fireflies_toggle(self, renderer, garden, viewport):
        garden.spawn_flower((200, 300), viewport)
        with_fireflies = len(renderer.render(garden, 0.0, viewport).by_layer(Layer.FLOWERS))
        garden.set_knob("show_fireflies", False)
        without = len(renderer.render(garden, 0.0, viewport).by_layer(Layer.FLOWERS))
        assert with_fireflies - without == render_constants.FIREFLY_COUNT


class TestChromaticAberration:
    """RGB channel split of the petal rings."""

    def test_channel_passes_always_three(self):
        for offset in (0.0, 3.0, 10.0):
            passes = channel_passes(offset)
            assert [p.channel for p in passes] == ["red", "green", "blue"]
            assert all(p.blend is BlendMode.ADDITIVE for p in passes)

    def test_offsets(self):
        red, green, blue = channel_passes(6.0)
        assert (red.offset.x, red.offset.y) == (-6.0, -6.0)
        assert (green.offset.x, green.offset.y) == (0.0, 0.0)
        assert (blue.offset.x, blue.offset.y) == (6.0, 6.0)

    def test_zero_offset_collapses_to_white(self):
        (combined,) = chromatic_passes(0.0)
        assert combined.channel == "combined"
        assert combined.blend is BlendMode.NORMAL
        assert combined.color == Color(1.0, 1.0, 1.0, 0.8)

    def test_nonzero_offset_not_collapsed(self):
        passes = chromatic_passes(4.0)
        assert len(passes) == 3
        assert collapse_passes(passes) == passes

    def test_zero_offset_frame_has_single_ring(self, renderer, garden, viewport):
        flower = garden.get_flower(garden.spawn_flower((200, 300), viewport))
        garden.set_knob("chromatic_offset", 0.0)
        ring = channel_ellipses(renderer.render(garden, 0.0, viewport))
        assert len(ring) == flower.genome.petal_count
        assert all(e.blend is BlendMode.NORMAL for e in ring)

    def test_offset_frame_has_three_rings(self, renderer, garden, viewport):
        flower = garden.get_flower(garden.spawn_flower((200, 300), viewport))
        ring = channel_ellipses(renderer.render(garden, 0.0, viewport))
        assert len(ring) == 3 * flower.genome.petal_count
        assert all(e.blend is BlendMode.ADDITIVE for e in ring)


class TestPurity:
    def test_same_time_same_frame(self, renderer, garden, viewport):
        for x in (80, 200, 320):
            garden.spawn_flower((x, 300), viewport)
        first = renderer.render(garden, 2.25, viewport)
        second = renderer.render(garden, 2.25, viewport)
        assert first.commands == second.commands

    def test_render_does_not_mutate(self, renderer, garden, viewport):
        garden.spawn_flower((120, 300), viewport)
        garden.spawn_flower_from_stem([(300, 620), (300, 420)])
        garden.apply_wind_impulse(30.0, 0.4)
        before = build_snapshot(garden)
        renderer.render(garden, 7.0, viewport, MotionSample(0.5, -0.2, 1.0))
        assert build_snapshot(garden) == before


class TestCulling:
    def test_far_offscreen_flower_is_culled(self, renderer, garden, viewport):
        flower_id = garden.spawn_flower((200, 300), viewport)
        garden.move_flower(flower_id, (-5000, 300))
        frame = renderer.render(garden, 0.0, viewport)
        assert frame.stats == {"flowers_drawn": 0, "flowers_culled": 1, "commands": len(frame)}
        assert frame.by_layer(Layer.FLOWERS) == []

    def test_near_edge_flower_is_kept(self, renderer, garden, viewport):
        flower_id = garden.spawn_flower((200, 300), viewport)
        garden.move_flower(flower_id, (-60, 300))
        frame = renderer.render(garden, 0.0, viewport)
        assert frame.stats["flowers_drawn"] == 1

    def test_non_finite_head_is_culled(self, renderer, garden, viewport):
        flower_id = garden.spawn_flower((200, 300), viewport)
        garden.move_flower(flower_id, (math.nan, 300))
        frame = renderer.render(garden, 0.0, viewport)
        assert frame.stats["flowers_culled"] == 1


class TestStems:
    def test_procedural_stem_has_two_leaves(self, renderer, garden, viewport):
        garden.spawn_flower((200, 300), viewport)
        stems = renderer.render(garden, 0.0, viewport).by_layer(Layer.STEMS)
        assert len([c for c in stems if isinstance(c, Polyline)]) == 1
        assert len([c for c in stems if isinstance(c, Polygon)]) == 2

    def test_drawn_stem_with_neck(self, renderer, garden, viewport):
        path = [(200, 620), (200, 500), (200, 380), (200, 260)]
        garden.spawn_flower_from_stem(path)
        stem = garden.stems[0]
        stems = renderer.render(garden, 0.0, viewport).by_layer(Layer.STEMS)
        polylines = [c for c in stems if isinstance(c, Polyline)]
        assert len(polylines) == 2
        assert polylines[0].points == stem.points
        assert len([c for c in stems if isinstance(c, Polygon)]) == len(stem.leaves)

    def test_evicted_stem_still_drawn_by_flower(self, renderer, garden, viewport):
        flower_id = garden.spawn_flower_from_stem([(50, 620), (50, 400)])
        garden.stems.clear()
        stems = renderer.render(garden, 0.0, viewport).by_layer(Layer.STEMS)
        polylines = [c for c in stems if isinstance(c, Polyline)]
        assert len(polylines) == 2
        assert polylines[0].points == garden.get_flower(flower_id).stem_path


class TestBackground:
    def test_parallax_follows_tilt(self, renderer, garden, viewport):
        frame = renderer.render(garden, 0.0, viewport, MotionSample(tilt_x=0.5, tilt_y=-0.25))
        (glow,) = frame.of_type(RadialGradient)
        assert glow.center.x == pytest.approx(200 + 10)
        assert glow.center.y == pytest.approx(400 - 5)

    def test_parallax_offset_capped(self):
        offset = parallax_offset(MotionSample(tilt_x=1.0, tilt_y=-1.0), max_offset=12.0)
        assert (offset.x, offset.y) == (12.0, -12.0)

    def test_parallax_disabled(self, renderer, garden, viewport):
        garden.set_knob("parallax_enabled", False)
        frame = renderer.render(garden, 0.0, viewport, MotionSample(tilt_x=1.0))
        assert frame.of_type(RadialGradient) == []

    def test_grain_reseeds_ten_times_per_second(self, viewport):
        assert grain_layer(viewport, 0.01) == grain_layer(viewport, 0.09)
        assert grain_layer(viewport, 0.05) != grain_layer(viewport, 0.15)

    def test_stars_keep_their_positions(self, viewport):
        early = star_layer(viewport, 0.0)
        late = star_layer(viewport, 12.5)
        assert [s.center for s in early] == [s.center for s in late]
        assert all(isinstance(s, Circle) for s in early)
        assert [s.color for s in early] != [s.color for s in late]

    def test_grass_blades_keep_their_shape(self, viewport):
        calm = WindState(direction=0.0, strength=0.0, decay_rate=0.98)
        early = grass_layer(viewport, 700.0, 0.0, calm)
        late = grass_layer(viewport, 700.0, 1.0, calm)
        assert len(early) == len(late) == render_constants.GRASS_BLADE_COUNT
        for before, after in zip(early, late):
            assert before.points[0] == after.points[0]
            assert before.gradient_start == after.gradient_start
            assert before.gradient_end == after.gradient_end
            assert before.points[-2] != after.points[-2]


class TestStamens:
    def test_radial_segments_with_outline(self):
        head = Vector2(100.0, 200.0)
        color = Color(1.0, 0.2, 0.4, 1.0)
        lines = [c for c in stamens(head, color) if isinstance(c, Line)]
        count = render_constants.STAMEN_COUNT
        assert count == 12
        assert len(lines) == 2 * count

        for i in range(count):
            outline, stroke = lines[2 * i], lines[2 * i + 1]
            assert outline.color == WHITE.with_alpha(0.4)
            assert stroke.color == color.with_alpha(0.7)
            assert outline.width > stroke.width
            assert (outline.start, outline.end) == (stroke.start, stroke.end)

            angle = i * math.tau / count
            axis = Vector2(math.cos(angle), math.sin(angle))
            assert stroke.start == head + axis * render_constants.STAMEN_INNER_RADIUS
            assert stroke.end == head + axis * render_constants.STAMEN_OUTER_RADIUS
