"""Interactive pygame window for the garden.

Mouse input is turned into resolved gestures:

- left button drag: ``GestureRouter`` drag start / move / end
- right click: tap (spawn without growing)
- wheel: pinch

Keyboard:

    P palette    C clear     R reset      S stars     G gyro wind
    D drawing    N random    [ ] chromatic offset     - = bloom
    arrows: left/right spin (gyro), up/down tilt      Esc quit
"""

from __future__ import annotations

import logging
from typing import Optional

import pygame

from garden.config import display as display_constants
from garden.engine import GardenEngine
from garden.gestures import GestureRouter
from garden.math_utils import Vector2
from garden.motion import MotionSample, MotionSmoother
from garden.viewport import Viewport
from rendering.pygame_canvas import PygameCanvas

logger = logging.getLogger(__name__)

KEY_GYRO_RATE = 2.0
CHROMATIC_STEP = 1.0
BLOOM_STEP = 0.1
PINCH_STEP = 1.1
HUD_COLOR = (200, 220, 255)


class KeyboardMotionSource:
    """Motion source emulating tilt and rotation from the arrow keys."""

    def __init__(self, smoother: Optional[MotionSmoother] = None) -> None:
        self.smoother = smoother or MotionSmoother()
        self._latest = MotionSample()

    def poll(self, pressed) -> MotionSample:
        tilt_x = float(pressed[pygame.K_RIGHT]) - float(pressed[pygame.K_LEFT])
        tilt_y = float(pressed[pygame.K_DOWN]) - float(pressed[pygame.K_UP])
        gyro = tilt_x * KEY_GYRO_RATE
        self._latest = self.smoother.update(tilt_x, tilt_y, gyro)
        return self._latest

    def sample(self) -> MotionSample:
        return self._latest


class GardenWindow:
    """Runs the engine in a pygame window.

    Attributes:
        engine: Garden engine driven once per display frame
        router: Gesture router fed from mouse events
        viewport: Window size
        frame_rate: Target frames per second
    """

    def __init__(
        self,
        engine: GardenEngine,
        width: int = display_constants.SCREEN_WIDTH,
        height: int = display_constants.SCREEN_HEIGHT,
        frame_rate: int = display_constants.FRAME_RATE,
    ) -> None:
        self.engine = engine
        self.viewport = Viewport(width, height)
        self.frame_rate = frame_rate
        self.motion = KeyboardMotionSource()
        engine.motion_source = self.motion
        self.router = GestureRouter(engine.state, engine.physics)
        self.canvas: Optional[PygameCanvas] = None
        self.clock: Optional[pygame.time.Clock] = None
        self.font: Optional[pygame.font.Font] = None
        self.running = False
        self._drag_origin: Optional[Vector2] = None
        self._drag_started_at = 0.0

    def setup(self) -> bool:
        """Open the window. Returns False when no display is available."""
        pygame.init()
        try:
            screen = pygame.display.set_mode((int(self.viewport.width), int(self.viewport.height)))
            pygame.display.set_caption(display_constants.WINDOW_CAPTION)
        except pygame.error as e:
            logger.error("Couldn't set the display mode: %s", e)
            return False
        self.canvas = PygameCanvas(screen)
        self.clock = pygame.time.Clock()
        self.font = pygame.font.Font(None, 22)
        return True

    def run(self, max_frames: Optional[int] = None) -> int:
        """Run until the window closes or *max_frames* have been drawn.

        Returns:
            Number of frames drawn
        """
        if self.canvas is None and not self.setup():
            return 0
        self.running = True
        frames = 0
        try:
            while self.running:
                now = pygame.time.get_ticks() / 1000.0
                for event in pygame.event.get():
                    self.handle_event(event, now)
                self.motion.poll(pygame.key.get_pressed())

                frame = self.engine.tick(now, self.viewport)
                self.canvas.draw_frame(frame)
                self._draw_hud()
                pygame.display.flip()

                frames += 1
                if max_frames is not None and frames >= max_frames:
                    break
                self.clock.tick(self.frame_rate)
        finally:
            pygame.quit()
        logger.info("Window closed after %d frames", frames)
        return frames

    def handle_event(self, event: pygame.event.Event, now: float) -> None:
        if event.type == pygame.QUIT:
            self.running = False
        elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            self._drag_origin = Vector2.of(event.pos)
            self._drag_started_at = now
            self.router.drag_start(self._drag_origin, self.viewport)
        elif event.type == pygame.MOUSEMOTION and self._drag_origin is not None:
            point = Vector2.of(event.pos)
            self.router.drag_move(point, point - self._drag_origin, now - self._drag_started_at)
        elif event.type == pygame.MOUSEBUTTONUP and event.button == 1 and self._drag_origin is not None:
            point = Vector2.of(event.pos)
            self.router.drag_end(point, point - self._drag_origin, now - self._drag_started_at)
            self._drag_origin = None
        elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 3:
            self.router.tap(event.pos, self.viewport)
        elif event.type == pygame.MOUSEWHEEL:
            self.router.pinch(PINCH_STEP if event.y > 0 else 1.0 / PINCH_STEP)
        elif event.type == pygame.KEYDOWN:
            self.handle_key(event.key)

    def handle_key(self, key: int) -> None:
        state = self.engine.state
        knobs = state.knobs
        if key == pygame.K_ESCAPE:
            self.running = False
        elif key == pygame.K_p:
            state.cycle_palette()
        elif key == pygame.K_c:
            state.clear_all()
        elif key == pygame.K_r:
            self.router.shake()
        elif key == pygame.K_s:
            state.set_knob("show_stars", not knobs.show_stars)
        elif key == pygame.K_g:
            state.set_knob("gyro_wind_enabled", not knobs.gyro_wind_enabled)
        elif key == pygame.K_d:
            state.drawing_mode = not state.drawing_mode
            logger.info("Drawing mode %s", "on" if state.drawing_mode else "off")
        elif key == pygame.K_n:
            state.spawn_random_flower(self.viewport)
        elif key == pygame.K_LEFTBRACKET:
            state.set_knob("chromatic_offset", knobs.chromatic_offset - CHROMATIC_STEP)
        elif key == pygame.K_RIGHTBRACKET:
            state.set_knob("chromatic_offset", knobs.chromatic_offset + CHROMATIC_STEP)
        elif key == pygame.K_MINUS:
            state.set_knob("bloom_intensity", knobs.bloom_intensity - BLOOM_STEP)
        elif key == pygame.K_EQUALS:
            state.set_knob("bloom_intensity", knobs.bloom_intensity + BLOOM_STEP)

    def _draw_hud(self) -> None:
        if self.font is None or self.canvas is None:
            return
        state = self.engine.state
        mode = "draw" if state.drawing_mode else "grow"
        text = (
            f"{state.palette.display_name}  flowers {state.flower_count}  "
            f"wind {state.wind.strength:4.1f}  {mode}"
        )
        self.canvas.surface.blit(self.font.render(text, True, HUD_COLOR), (10, 10))


__all__ = ["GardenWindow", "KeyboardMotionSource"]
