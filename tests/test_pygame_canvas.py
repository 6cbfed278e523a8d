"""Tests for executing draw commands with pygame on offscreen surfaces."""

import pytest

pygame = pytest.importorskip("pygame")

from garden.color import BLACK, WHITE, Color  # noqa: E402
from garden.math_utils import Vector2  # noqa: E402
from garden.render import (  # noqa: E402
    BlendMode,
    Circle,
    DrawCommand,
    Layer,
    LinearGradientRect,
    Polygon,
)
from rendering.pygame_canvas import PygameCanvas, create_canvas, gradient_color  # noqa: E402


def rgb(surface, point):
    return tuple(surface.get_at(point))[:3]


class TestGradientColor:
    def test_endpoints_and_midpoint(self):
        stops = (BLACK, WHITE)
        assert gradient_color(stops, 0.0) == BLACK
        assert gradient_color(stops, 1.0) == WHITE
        assert gradient_color(stops, 0.5) == Color(0.5, 0.5, 0.5, 1.0)

    def test_out_of_range_is_clamped(self):
        stops = (BLACK, WHITE, BLACK)
        assert gradient_color(stops, -3.0) == BLACK
        assert gradient_color(stops, 0.5) == WHITE
        assert gradient_color(stops, 9.0) == BLACK


class TestPygameCanvas:
    def test_draws_whole_engine_frame(self, engine, viewport):
        engine.state.spawn_flower((200, 300), viewport)
        engine.state.spawn_flower_from_stem([(100, 620), (110, 500), (100, 380)])
        frame = engine.tick(0.5, viewport)
        canvas = create_canvas((400, 800), headless=True)
        assert canvas.draw_frame(frame) == len(frame)

    def test_additive_circle_adds_light(self):
        canvas = PygameCanvas(pygame.Surface((20, 20)), blur_enabled=False)
        red = Circle(layer=Layer.FLOWERS, center=Vector2(10, 10), radius=5, color=Color(1, 0, 0, 1), blend=BlendMode.ADDITIVE)
        green = Circle(layer=Layer.FLOWERS, center=Vector2(10, 10), radius=5, color=Color(0, 1, 0, 1), blend=BlendMode.ADDITIVE)
        canvas.draw(red)
        canvas.draw(green)
        assert rgb(canvas.surface, (10, 10)) == (255, 255, 0)
        assert rgb(canvas.surface, (0, 0)) == (0, 0, 0)

    def test_normal_blend_overwrites(self):
        canvas = PygameCanvas(pygame.Surface((20, 20)), blur_enabled=False)
        canvas.surface.fill((0, 0, 255))
        canvas.draw(Circle(layer=Layer.FLOWERS, center=Vector2(10, 10), radius=4, color=Color(1, 0, 0, 1)))
        assert rgb(canvas.surface, (10, 10)) == (255, 0, 0)

    def test_vertical_gradient_rect(self):
        canvas = PygameCanvas(pygame.Surface((4, 11)))
        canvas.draw(LinearGradientRect(layer=Layer.BACKGROUND, rect=(0, 0, 4, 11), stops=(BLACK, WHITE)))
        assert rgb(canvas.surface, (1, 0)) == (0, 0, 0)
        assert rgb(canvas.surface, (1, 10)) == (255, 255, 255)

    def test_gradient_polygon(self):
        canvas = PygameCanvas(pygame.Surface((30, 30)), blur_enabled=False)
        blade = Polygon(
            layer=Layer.GRASS,
            points=(Vector2(5, 25), Vector2(15, 2), Vector2(25, 25)),
            color=Color(0, 1, 0, 1),
            end_color=Color(0, 0, 1, 1),
            gradient_start=Vector2(15, 25),
            gradient_end=Vector2(15, 2),
        )
        assert canvas.draw(blade)
        assert rgb(canvas.surface, (0, 0)) == (0, 0, 0)
        assert rgb(canvas.surface, (15, 22))[1] > rgb(canvas.surface, (15, 22))[2]

    def test_unknown_command_is_skipped(self):
        canvas = PygameCanvas(pygame.Surface((10, 10)))
        assert canvas.draw(DrawCommand(layer=Layer.FOG)) is False

    def test_offscreen_command_is_harmless(self):
        canvas = PygameCanvas(pygame.Surface((10, 10)))
        canvas.draw(Circle(layer=Layer.FLOWERS, center=Vector2(-500, -500), radius=3, color=WHITE))
        assert rgb(canvas.surface, (5, 5)) == (0, 0, 0)


class TestGardenWindowInput:
    """Keyboard and mouse handling without opening a window."""

    @pytest.fixture
    def window(self, engine):
        from rendering.garden_window import GardenWindow

        return GardenWindow(engine, 400, 800)

    def test_keyboard_motion(self):
        from collections import defaultdict

        from rendering.garden_window import KeyboardMotionSource

        source = KeyboardMotionSource()
        pressed = defaultdict(bool, {pygame.K_RIGHT: True, pygame.K_UP: True})
        sample = source.poll(pressed)
        assert sample.gyro_rate == 2.0
        assert sample.tilt_x > 0.0
        assert sample.tilt_y < 0.0
        assert source.sample() is sample

    def test_keys_drive_garden(self, window):
        state = window.engine.state
        window.handle_key(pygame.K_p)
        assert state.palette.display_name == "Sakura"
        window.handle_key(pygame.K_n)
        assert state.flower_count == 1
        window.handle_key(pygame.K_s)
        assert state.knobs.show_stars is False
        window.handle_key(pygame.K_LEFTBRACKET)
        assert state.knobs.chromatic_offset == 5.0
        window.handle_key(pygame.K_d)
        assert state.drawing_mode is True
        window.handle_key(pygame.K_c)
        assert state.flower_count == 0
        window.handle_key(pygame.K_ESCAPE)
        assert window.running is False

    def test_mouse_drag_spawns_and_grows(self, window):
        state = window.engine.state
        down = pygame.event.Event(pygame.MOUSEBUTTONDOWN, button=1, pos=(200, 300))
        up = pygame.event.Event(pygame.MOUSEBUTTONUP, button=1, pos=(201, 300))
        window.handle_event(down, 0.0)
        assert state.is_growing
        window.handle_event(up, 0.3)
        assert not state.is_growing
        assert state.flower_count == 1
