"""Wind physics configuration constants."""

# Strength is a scalar in [0, WIND_STRENGTH_CAP]
WIND_STRENGTH_CAP = 100.0
DEFAULT_WIND_STRENGTH = 5.0
DEFAULT_WIND_DIRECTION = 0.0
DEFAULT_DECAY_RATE = 0.98  # Multiplier per reference frame
WIND_SNAP_EPSILON = 0.1

# Gyro stirring (per reference frame)
GYRO_DIRECTION_GAIN = 0.1
GYRO_STRENGTH_GAIN = 2.0

# Swipe gust
SWIPE_MIN_DISTANCE = 50.0
SWIPE_AXIS_RATIO = 1.5  # |dx| must exceed |dy| by this factor
SWIPE_STRENGTH_DIVISOR = 5.0
SWIPE_MAX_STRENGTH = 50.0
GUST_RISE_SECONDS = 2.0
GUST_SETTLE_SECONDS = 4.0
GUST_REST_STRENGTH = 5.0

# Flower lean under wind
WIND_LEAN_GAIN = 0.3
WIND_LEAN_VERTICAL_RATIO = 0.4
WIND_FLUTTER_GAIN = 0.5
WIND_FLUTTER_FREQUENCY = 2.0
WIND_SATURATION = 100.0  # Strength at which lean approaches its ceiling
IDLE_SWAY_AMPLITUDE = 10.0
