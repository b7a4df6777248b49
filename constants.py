# constants.py

"""
Application Constants

This module defines static configuration values for the application's framework.
Tunable physics and timing values live in the 'simulation' section of
config.json instead.

Data Contract:
- All values are immutable constants.
- Units are specified in comments where applicable.
"""

# Screen dimensions
WIDTH = 1280  # Pixels
HEIGHT = 720  # Pixels

# Framerate
FPS = 60  # Frames per second

# Colors (RGB)
BLACK = (0, 0, 0)
WHITE = (255, 255, 255)

# Window Title
TITLE = "Click Fireworks"

# Color used when a malformed color reaches the renderer. Drawn fully opaque.
FALLBACK_COLOR = WHITE

# Burst color family, as HSL (saturation and lightness in percent).
# The trail is shifted by TRAIL_HUE_SHIFT degrees from the halo hue.
BURST_SATURATION = 100
BURST_LIGHTNESS = 60
HIGHLIGHT_LIGHTNESS = 80
TRAIL_HUE_SHIFT = 30  # Degrees

# Playback disciplines
FREE_RUNNING = "free_running"
FIXED_INTERVAL = "fixed_interval"

# Mode table. Each mode maps to:
# (particles per elevation, elevation angles in degrees, playback discipline)
MODE_TABLE = {
    1: (20, (0,), FREE_RUNNING),
    2: (60, (0,), FIXED_INTERVAL),
    3: (30, (85, 75, 60, 45, 25, 0), FREE_RUNNING),
}

# Visual Effects
FREE_RUNNING_TRAIL_WIDTH = 2  # Pixels
FREE_RUNNING_TRAIL_OPACITY = 0.8  # Starting opacity of a fresh trail segment.
HALO_BLUR_RADIUS = 3  # Pixels
HALO_BASE_RADIUS = 25  # Pixels
HIGHLIGHT_BASE_RADIUS = 3  # Pixels
SPARK_COLOR = (255, 195, 50)  # Bright orange
SPARK_RADIUS = 1  # Pixels

# Status readout is logged once every this many frames.
FRAME_LOG_INTERVAL = 120
