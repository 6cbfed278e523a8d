"""Renderer configuration constants (layer counts, seeds, colors)."""

# Background
BACKGROUND_STOPS = (
    (0.08, 0.10, 0.18),  # Soft deep indigo
    (0.04, 0.06, 0.12),
    (0.02, 0.03, 0.08),
    (0.01, 0.02, 0.05),  # Soft black
)
PARALLAX_GAIN = 20.0  # Pixels per unit of tilt
PARALLAX_MAX_OFFSET = 20.0

# Grain
GRAIN_DOT_COUNT = 500
GRAIN_RESEED_HZ = 10.0
GRAIN_OPACITY_RANGE = (0.02, 0.08)

# Stars
STAR_SEED = 42
STAR_COUNT = 150
STAR_SIZE_RANGE = (0.5, 2.5)
STAR_TWINKLE_SPEED_RANGE = (0.8, 2.0)

# Grass
GRASS_BLADE_COUNT = 60
GRASS_SEED_STRIDE = 999
GRASS_HEIGHT_RANGE = (60.0, 140.0)
GRASS_WIDTH_RANGE = (4.0, 8.0)
GRASS_BASE_COLOR = (0.05, 0.3, 0.35)
GRASS_TIP_COLOR = (0.15, 0.65, 0.7)

# Stems and leaves
STEM_BASE_COLOR = (0.08, 0.46, 0.48)  # #14757a
STEM_TIP_COLOR = (0.22, 0.78, 0.84)  # #39c6d6
STEM_LEAF_POSITIONS = (0.4, 0.7)
STEM_LEAF_SIZES = (30.0, 25.0)
CURVE_SEGMENTS = 24

# Flower heads
GLOW_PASSES = ((1.8, 0.10), (1.45, 0.16), (1.15, 0.24))  # (radius factor, opacity)
CHANNEL_OPACITY = 0.8
CHANNEL_BLUR = 2.0
CORE_RADIUS_FACTOR = 0.9
CORE_OPACITY = 0.6
CORE_BLUR = 4.0
STAMEN_COUNT = 12
STAMEN_INNER_RADIUS = 3.0
STAMEN_OUTER_RADIUS = 14.0
FIREFLY_COUNT = 8
FIREFLY_SPEED = 2.0
FIREFLY_ORBIT_FACTOR = 1.2
FIREFLY_COLORS = ((1.0, 0.98, 0.0), (0.14, 0.94, 1.0))
OFFSCREEN_MARGIN = 100.0

# Fog near the baseline
FOG_HEIGHT = 40.0
FOG_OPACITY = 0.8
