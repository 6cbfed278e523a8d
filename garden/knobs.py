"""User-adjustable visual knobs.

The knobs are free-standing scalars and toggles with UI slider ranges and
no cross-invariants. They are a pydantic model so that direct assignment
of an out-of-range value fails loudly, while ``clamp`` gives UI layers a
forgiving path.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

# Slider ranges: name -> (min, max)
KNOB_RANGES: dict[str, tuple[float, float]] = {
    "bloom_intensity": (0.2, 3.0),
    "chromatic_offset": (0.0, 10.0),
    "global_scale": (0.5, 2.0),
}


class VisualKnobs(BaseModel):
    """Visual settings exposed by the control panel."""

    model_config = ConfigDict(validate_assignment=True)

    bloom_intensity: float = Field(
        1.2, ge=KNOB_RANGES["bloom_intensity"][0], le=KNOB_RANGES["bloom_intensity"][1]
    )
    chromatic_offset: float = Field(
        6.0, ge=KNOB_RANGES["chromatic_offset"][0], le=KNOB_RANGES["chromatic_offset"][1]
    )
    global_scale: float = Field(
        1.0, ge=KNOB_RANGES["global_scale"][0], le=KNOB_RANGES["global_scale"][1]
    )
    show_stars: bool = True
    show_grass: bool = True
    show_fireflies: bool = True
    parallax_enabled: bool = True
    gyro_wind_enabled: bool = True

    @staticmethod
    def clamp(name: str, value: Any) -> Any:
        """Clamp *value* into the slider range of knob *name* (toggles pass through)."""
        bounds = KNOB_RANGES.get(name)
        if bounds is None:
            return value
        lo, hi = bounds
        return max(lo, min(hi, float(value)))


__all__ = ["KNOB_RANGES", "VisualKnobs"]
