"""Garden state: the aggregate root of the garden.

``GardenState`` owns every live flower and stem plus the environment
(wind, palette, visual knobs, current time). All gesture-driven mutations
go through its methods, which apply the change synchronously and emit a
domain event on the injected ``EventBus`` for feedback collaborators.

Threading model: the garden is single-threaded. Gesture callbacks and the
frame tick must be serialized by the host; nothing here takes a lock.

Stale IDs are expected (capacity eviction races with in-flight gestures),
so every ID-taking method is a no-op for unknown IDs and reports it
through its return value instead of raising.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import Any, Optional

from garden.config import flowers as flower_constants
from garden.config.garden_config import GardenConfig
from garden.entities import Flower, FlowerGenome, Stem
from garden.events import (
    EventBus,
    FlowerEvictedEvent,
    FlowerGrewEvent,
    FlowerMovedEvent,
    FlowerRemovedEvent,
    FlowerSpawnedEvent,
    GardenClearedEvent,
    GardenResetEvent,
    PaletteChangedEvent,
    WindGustEvent,
)
from garden.knobs import VisualKnobs
from garden.math_utils import Vector2
from garden.palette import DEFAULT_PALETTE, Palette
from garden.rng import SeededRandom, derive_seed
from garden.viewport import Viewport
from garden.wind import WindState

logger = logging.getLogger(__name__)


@dataclass
class GrowSession:
    """The single active hold-to-grow session.

    Attributes:
        flower_id: Flower being grown
        started_at: Garden time the hold began
        ticks_applied: Grow ticks already processed for this session
    """

    flower_id: int
    started_at: float
    ticks_applied: int = 0


class GardenState:
    """Mutable collection of flowers and stems plus environment parameters.

    Attributes:
        config: Injected configuration
        bus: Event bus receiving garden notifications
        flowers: Live flowers, insertion order == draw order
        stems: Live drawn stems, insertion order == draw order
        wind: Current wind
        palette: Active palette
        knobs: Visual knobs
        current_time: Last observed animation time (monotonic)
        drawing_mode: Whether drags draw stems instead of spawning flowers
    """

    def __init__(
        self,
        config: Optional[GardenConfig] = None,
        bus: Optional[EventBus] = None,
        rng: Optional[SeededRandom] = None,
    ) -> None:
        self.config = (config or GardenConfig()).validate()
        self.bus = bus if bus is not None else EventBus()
        strict = self.config.strict_ranges
        if rng is not None:
            self._rng = rng
        elif self.config.seed is not None:
            self._rng = SeededRandom(self.config.seed, strict=strict)
        else:
            self._rng = SeededRandom.from_time(strict=strict)

        self.flowers: list[Flower] = []
        self.stems: list[Stem] = []
        self.wind = WindState.defaults(self.config.wind)
        self.palette: Palette = DEFAULT_PALETTE
        self.knobs = VisualKnobs()
        self.current_time: float = 0.0
        self.drawing_mode: bool = False
        self.grow_session: Optional[GrowSession] = None
        self._next_flower_id = 1
        self._next_stem_id = 1

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    @property
    def flower_count(self) -> int:
        return len(self.flowers)

    @property
    def flower_ids(self) -> list[int]:
        return [flower.id for flower in self.flowers]

    @property
    def is_growing(self) -> bool:
        return self.grow_session is not None

    def baseline_y(self, viewport: Viewport) -> float:
        return viewport.baseline(self.config.display.baseline_fraction)

    def get_flower(self, flower_id: int) -> Optional[Flower]:
        for flower in self.flowers:
            if flower.id == flower_id:
                return flower
        return None

    def get_stem(self, stem_id: int) -> Optional[Stem]:
        for stem in self.stems:
            if stem.id == stem_id:
                return stem
        return None

    def head_position(self, flower: Flower, time: Optional[float] = None) -> Vector2:
        """Swayed head of *flower* under the current wind."""
        t = self.current_time if time is None else time
        return flower.head_position(t, self.wind.strength, self.wind.direction)

    def find_nearest_flower(
        self, point: Vector2 | Sequence[float], threshold: Optional[float] = None
    ) -> Optional[Flower]:
        """Find the flower whose swayed head is closest to *point*.

        Args:
            point: Query point in viewport coordinates
            threshold: Maximum pick distance (defaults to the configured one)

        Returns:
            The nearest flower strictly within *threshold*, or None
        """
        target = Vector2.of(point)
        best: Optional[Flower] = None
        best_distance = self.config.flowers.pick_threshold if threshold is None else threshold
        for flower in self.flowers:
            distance = self.head_position(flower).distance_to(target)
            if distance < best_distance:
                best_distance = distance
                best = flower
        return best

    # ------------------------------------------------------------------
    # Spawning and removal
    # ------------------------------------------------------------------

    def spawn_flower(
        self,
        point: Vector2 | Sequence[float],
        viewport: Viewport,
        seed: Optional[int] = None,
        *,
        source: str = "tap",
    ) -> int:
        """Spawn a flower at *point*, clamped to the ground baseline.

        A point below the baseline is lifted onto it; the stem is anchored
        on the baseline directly beneath the head.

        Args:
            point: Tap location
            viewport: Current viewport (for the baseline)
            seed: Genome seed; drawn from the garden generator when omitted
            source: Origin reported on the spawn event

        Returns:
            ID of the new flower
        """
        target = Vector2.of(point)
        baseline = self.baseline_y(viewport)
        head = Vector2(target.x, min(target.y, baseline))
        flower = self._make_flower(head, seed=seed, anchor=Vector2(head.x, baseline))
        self._append_flower(flower, source=source)
        return flower.id

    def spawn_flower_from_stem(
        self, path: Sequence[Vector2 | Sequence[float]], seed: Optional[int] = None
    ) -> Optional[int]:
        """Create a drawn stem and grow a flower at its end.

        Args:
            path: Drawn points, ground end first
            seed: Genome seed; drawn from the garden generator when omitted

        Returns:
            ID of the new flower, or None when the path has fewer than 2 points
        """
        points = [Vector2.of(p) for p in path]
        if len(points) < 2:
            logger.debug("Ignoring stem path with %d point(s)", len(points))
            return None

        stem = Stem.from_path(
            self._next_stem_id,
            points,
            derive_seed(self._rng),
            created_at=self.current_time,
            strict=self.config.strict_ranges,
        )
        self._next_stem_id += 1
        while len(self.stems) >= self.config.flowers.max_stems:
            dropped = self.stems.pop(0)
            logger.debug("Evicted stem %d (capacity %d)", dropped.id, self.config.flowers.max_stems)
        self.stems.append(stem)

        flower = self._make_flower(points[-1], seed=seed, stem_path=points, stem_id=stem.id)
        self._append_flower(flower, source="stem")
        return flower.id

    def spawn_random_flower(self, viewport: Viewport) -> int:
        """Spawn a flower at a random point drawn from the garden generator."""
        margin = flower_constants.RANDOM_SPAWN_MARGIN_X
        lo_x, hi_x = margin, viewport.width - margin
        lo_y = flower_constants.RANDOM_SPAWN_TOP
        hi_y = viewport.height - flower_constants.RANDOM_SPAWN_BOTTOM_MARGIN
        # Small viewports collapse the range onto the center
        x = self._rng.next_double(lo_x, hi_x) if lo_x <= hi_x else viewport.width / 2.0
        y = self._rng.next_double(lo_y, hi_y) if lo_y <= hi_y else viewport.height / 2.0
        return self.spawn_flower(Vector2(x, y), viewport, source="random")

    def remove_flower(self, flower_id: int) -> bool:
        for index, flower in enumerate(self.flowers):
            if flower.id == flower_id:
                del self.flowers[index]
                if self.grow_session and self.grow_session.flower_id == flower_id:
                    self.stop_growing()
                self.bus.emit(FlowerRemovedEvent(flower_id=flower_id))
                return True
        logger.debug("remove_flower: unknown flower %s", flower_id)
        return False

    def move_flower(self, flower_id: int, point: Vector2 | Sequence[float]) -> bool:
        """Reposition a flower's nominal head; no-op for unknown IDs."""
        flower = self.get_flower(flower_id)
        if flower is None:
            logger.debug("move_flower: unknown flower %s", flower_id)
            return False
        flower.position = Vector2.of(point)
        self.bus.emit(FlowerMovedEvent(flower_id=flower_id, x=flower.position.x, y=flower.position.y))
        return True

    def clear_all(self) -> None:
        """Discard every flower and stem, stop growing and reset the wind."""
        flowers_removed, stems_removed = self._discard_contents()
        logger.info("Garden cleared (%d flowers, %d stems)", flowers_removed, stems_removed)
        self.bus.emit(GardenClearedEvent(flowers_removed=flowers_removed, stems_removed=stems_removed))

    def reset_to_defaults(self) -> None:
        """Clear the garden and restore palette and knobs to their defaults.

        Emits a single ``GardenResetEvent``; no separate cleared event.
        """
        flowers_removed, stems_removed = self._discard_contents()
        self.palette = DEFAULT_PALETTE
        self.knobs = VisualKnobs()
        self.drawing_mode = False
        logger.info("Garden reset to defaults (%d flowers, %d stems)", flowers_removed, stems_removed)
        self.bus.emit(GardenResetEvent(flowers_removed=flowers_removed, stems_removed=stems_removed))

    def _discard_contents(self) -> tuple[int, int]:
        self.stop_growing()
        flowers_removed = len(self.flowers)
        stems_removed = len(self.stems)
        self.flowers.clear()
        self.stems.clear()
        self.wind = type(self.wind).defaults(self.config.wind)
        return flowers_removed, stems_removed

    # ------------------------------------------------------------------
    # Growth
    # ------------------------------------------------------------------

    def start_growing(self, flower_id: int, now: Optional[float] = None) -> bool:
        """Begin a hold-to-grow session, cancelling any previous one.

        Returns:
            False when *flower_id* is unknown (no session is started)
        """
        self.stop_growing()
        if self.get_flower(flower_id) is None:
            logger.debug("start_growing: unknown flower %s", flower_id)
            return False
        started_at = self.current_time if now is None else now
        self.grow_session = GrowSession(flower_id=flower_id, started_at=started_at)
        logger.debug("Grow session started for flower %d at t=%.3f", flower_id, started_at)
        return True

    def stop_growing(self) -> None:
        """End the active grow session. Safe to call with no session."""
        if self.grow_session is not None:
            logger.debug("Grow session ended for flower %d", self.grow_session.flower_id)
        self.grow_session = None

    def grow_flower(self, flower_id: int, ticks: int = 1) -> int:
        """Apply *ticks* grow increments to a flower, clamped to the max scale.

        Emits one ``FlowerGrewEvent`` per increment that changed the scale.

        Returns:
            Number of increments that changed the scale (0 for unknown IDs)
        """
        flower = self.get_flower(flower_id)
        if flower is None:
            logger.debug("grow_flower: unknown flower %s", flower_id)
            return 0
        settings = self.config.flowers
        grown = 0
        for _ in range(max(0, ticks)):
            if flower.scale >= settings.max_scale:
                break
            flower.scale = min(settings.max_scale, flower.scale + settings.grow_increment)
            grown += 1
            self.bus.emit(
                FlowerGrewEvent(flower_id=flower.id, scale=flower.scale, time=self.current_time)
            )
        return grown

    def advance_growth(self, now: float) -> int:
        """Apply the grow ticks that became due since the session started.

        Called from the frame tick; the fixed grow period is independent of
        the frame rate. A session whose flower has disappeared ends quietly.

        Returns:
            Number of increments applied this call
        """
        session = self.grow_session
        if session is None:
            return 0
        if self.get_flower(session.flower_id) is None:
            self.stop_growing()
            return 0
        period = self.config.flowers.grow_tick_seconds
        due = int(math.floor((now - session.started_at) / period + 1e-9))
        pending = due - session.ticks_applied
        if pending <= 0:
            return 0
        session.ticks_applied = due
        return self.grow_flower(session.flower_id, pending)

    # ------------------------------------------------------------------
    # Environment
    # ------------------------------------------------------------------

    def cycle_palette(self) -> Palette:
        previous = self.palette
        self.palette = previous.next()
        logger.info("Palette %s -> %s", previous.display_name, self.palette.display_name)
        self.bus.emit(PaletteChangedEvent(palette=self.palette.display_name, previous=previous.display_name))
        return self.palette

    def set_palette(self, palette: Palette) -> None:
        if palette is self.palette:
            return
        previous = self.palette
        self.palette = palette
        self.bus.emit(PaletteChangedEvent(palette=palette.display_name, previous=previous.display_name))

    def apply_wind_impulse(self, strength: float, direction: float) -> float:
        """Boost the wind, capped, and point it in *direction*.

        Cancels any active gust curve so the latest input wins.

        Returns:
            The resulting wind strength
        """
        cap = self.config.wind.strength_cap
        self.wind.strength = max(0.0, min(cap, self.wind.strength + strength))
        self.wind.direction = direction
        self.wind.target = None
        self.bus.emit(
            WindGustEvent(strength=self.wind.strength, direction=direction, source="impulse")
        )
        return self.wind.strength

    def set_wind_strength(self, strength: float) -> None:
        """Slider entry point: replace the strength, clamped to [0, cap]."""
        self.wind.strength = max(0.0, min(self.config.wind.strength_cap, float(strength)))
        self.wind.target = None

    def set_knob(self, name: str, value: Any) -> Any:
        """Set a visual knob, clamping sliders into range.

        Raises:
            AttributeError: If *name* is not a knob
        """
        if name not in VisualKnobs.model_fields:
            raise AttributeError(f"Unknown knob: {name}")
        clamped = VisualKnobs.clamp(name, value)
        setattr(self.knobs, name, clamped)
        return clamped

    def advance_time(self, time: float) -> float:
        """Advance ``current_time`` monotonically.

        Returns:
            Elapsed seconds since the previous observation (0 if time went backwards)
        """
        if not math.isfinite(time):
            return 0.0
        dt = time - self.current_time
        if dt <= 0.0:
            return 0.0
        self.current_time = time
        return dt

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _make_flower(
        self,
        head: Vector2,
        *,
        seed: Optional[int],
        anchor: Optional[Vector2] = None,
        stem_path: Iterable[Vector2] = (),
        stem_id: Optional[int] = None,
    ) -> Flower:
        settings = self.config.flowers
        genome_seed = derive_seed(self._rng) if seed is None else seed
        genome = FlowerGenome.create(genome_seed, settings, strict=self.config.strict_ranges)
        flower = Flower(
            self._next_flower_id,
            genome,
            head,
            anchor=anchor,
            stem_path=tuple(stem_path),
            stem_id=stem_id,
            scale=settings.initial_scale,
            default_height=settings.default_stem_height,
        )
        self._next_flower_id += 1
        return flower

    def _append_flower(self, flower: Flower, *, source: str) -> None:
        max_flowers = self.config.flowers.max_flowers
        while len(self.flowers) >= max_flowers:
            evicted = self.flowers.pop(0)
            logger.debug("Evicted flower %d (capacity %d)", evicted.id, max_flowers)
            self.bus.emit(FlowerEvictedEvent(flower_id=evicted.id, time=self.current_time))
        self.flowers.append(flower)
        logger.debug("Spawned %r via %s", flower, source)
        self.bus.emit(
            FlowerSpawnedEvent(
                flower_id=flower.id,
                x=flower.position.x,
                y=flower.position.y,
                source=source,
                time=self.current_time,
            )
        )


__all__ = ["GardenState", "GrowSession"]
