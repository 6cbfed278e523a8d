"""Data models for garden state snapshots.

Snapshots are plain pydantic models describing what is in the garden at
one moment. They are used for headless runs (``main.py --headless``
prints one as JSON) and by tests that want to compare whole gardens.
"""

from typing import List, Optional

from pydantic import BaseModel

from garden.garden_state import GardenState


class FlowerData(BaseModel):
    """A flower as it stands at snapshot time."""

    id: int
    seed: int
    x: float
    y: float
    head_x: float
    head_y: float
    anchor_x: float
    anchor_y: float
    scale: float
    petal_count: int
    petal_radius: float
    color_seed: float
    color: str  # "#rrggbb" under the active palette
    stem_id: Optional[int] = None


class LeafData(BaseModel):
    x: float
    y: float
    angle: float
    size: float
    side: str


class StemData(BaseModel):
    """A drawn stem."""

    id: int
    points: List[List[float]]
    leaves: List[LeafData]
    created_at: float
    thickness: float


class WindData(BaseModel):
    strength: float
    direction: float
    decay_rate: float
    gusting: bool = False


class KnobData(BaseModel):
    bloom_intensity: float
    chromatic_offset: float
    global_scale: float
    show_stars: bool
    show_grass: bool
    show_fireflies: bool
    parallax_enabled: bool
    gyro_wind_enabled: bool


class GardenSnapshot(BaseModel):
    """Everything needed to describe the garden at one instant."""

    time: float
    palette: str
    drawing_mode: bool
    growing_flower_id: Optional[int] = None
    wind: WindData
    knobs: KnobData
    flowers: List[FlowerData]
    stems: List[StemData]

    @property
    def flower_count(self) -> int:
        return len(self.flowers)


def _hex(color) -> str:
    r, g, b, _ = color.to_rgba255()
    return f"#{r:02x}{g:02x}{b:02x}"


def build_snapshot(state: GardenState) -> GardenSnapshot:
    """Capture *state* at its current time."""
    time = state.current_time
    flowers = []
    for flower in state.flowers:
        head = state.head_position(flower, time)
        flowers.append(
            FlowerData(
                id=flower.id,
                seed=flower.genome.seed,
                x=flower.position.x,
                y=flower.position.y,
                head_x=head.x,
                head_y=head.y,
                anchor_x=flower.anchor.x,
                anchor_y=flower.anchor.y,
                scale=flower.scale,
                petal_count=flower.genome.petal_count,
                petal_radius=flower.genome.petal_radius,
                color_seed=flower.genome.color_seed,
                color=_hex(flower.color(state.palette)),
                stem_id=flower.stem_id,
            )
        )

    stems = [
        StemData(
            id=stem.id,
            points=[[p.x, p.y] for p in stem.points],
            leaves=[
                LeafData(
                    x=leaf.position.x,
                    y=leaf.position.y,
                    angle=leaf.angle,
                    size=leaf.size,
                    side=leaf.side.value,
                )
                for leaf in stem.leaves
            ],
            created_at=stem.created_at,
            thickness=stem.thickness,
        )
        for stem in state.stems
    ]

    wind = state.wind
    return GardenSnapshot(
        time=time,
        palette=state.palette.display_name,
        drawing_mode=state.drawing_mode,
        growing_flower_id=state.grow_session.flower_id if state.grow_session else None,
        wind=WindData(
            strength=wind.strength,
            direction=wind.direction,
            decay_rate=wind.decay_rate,
            gusting=wind.gusting,
        ),
        knobs=KnobData(**state.knobs.model_dump()),
        flowers=flowers,
        stems=stems,
    )


__all__ = [
    "FlowerData",
    "GardenSnapshot",
    "KnobData",
    "LeafData",
    "StemData",
    "WindData",
    "build_snapshot",
]
