"""Display and frame timing configuration constants."""

# Default window size in pixels (portrait, phone-like)
SCREEN_WIDTH = 400
SCREEN_HEIGHT = 800

# Target frame rate for the frame driver
FRAME_RATE = 60

# Per-frame physics constants are expressed against this frame rate
REFERENCE_FRAME_RATE = 60.0

# Ground level as a fraction of viewport height
BASELINE_FRACTION = 0.78

# Window caption for the interactive app
WINDOW_CAPTION = "Generative Garden"
