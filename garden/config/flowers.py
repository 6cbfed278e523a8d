"""Flower, stem and growth configuration constants."""

# Capacity (oldest evicted first)
MAX_FLOWERS = 60
MAX_STEMS = 30

# Generative parameter ranges (inclusive)
PETAL_COUNT_RANGE = (5, 12)
PETAL_RADIUS_RANGE = (20.0, 40.0)
SWAY_FREQUENCY_RANGE = (0.8, 1.5)
STEM_CURVATURE_RANGE = (0.3, 1.2)
STEM_BEND_RANGE = (-40.0, 40.0)

# Stem defaults
DEFAULT_STEM_HEIGHT = 300.0
DEFAULT_STEM_THICKNESS = 2.0

# Leaves on drawn stems
LEAF_SPACING = 60.0  # Arc length between leaves, in pixels
LEAF_SIZE_RANGE = (12.0, 20.0)
LEAF_ANGLE_OFFSET = 0.8  # Radians away from the stem tangent

# Hold-to-grow
INITIAL_SCALE = 1.0
MAX_SCALE = 2.5
GROW_TICK_SECONDS = 0.05
GROW_INCREMENT = 0.05

# Hit testing for drag-to-move
PICK_THRESHOLD = 48.0

# Random spawn margins (tap-free "add random flower")
RANDOM_SPAWN_MARGIN_X = 50.0
RANDOM_SPAWN_TOP = 100.0
RANDOM_SPAWN_BOTTOM_MARGIN = 200.0
