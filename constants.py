# constants.py
"""
Application-level constants.

These values are static and do not change between animation runs.
They describe the fixed parallax model used when spawning shapes, the
update timing limits, and the host window defaults. Anything a user may
want to tune per run lives in config.json instead.
"""
import math

# Host window settings
WINDOW_SIZE = (480, 800)
FPS = 60
WINDOW_CAPTION = "Floating Shapes"

# --- Spawn Model ---
# Speed is halved at maximum depth: 0.2 at depth 0, 0.05 at depth 1.
BASE_SPEED = 0.2
DEPTH_SPEED_FALLOFF = 0.15
# Near shapes are more opaque than far ones.
BASE_OPACITY = 0.8
DEPTH_OPACITY_FALLOFF = 0.5
# Base radius is drawn uniformly from [MIN_RADIUS, MAX_RADIUS).
MIN_RADIUS = 10.0
MAX_RADIUS = 30.0
# Far shapes shrink to half their size.
DEPTH_RADIUS_FALLOFF = 0.5
# Angular velocity range (rad/s) before the rotation speed multiplier.
MAX_ANGULAR_SPEED = 0.125
# Spawn delay jitter: the delay is scaled by a factor in [0.8, 1.2).
SPAWN_JITTER_MIN = 0.8
SPAWN_JITTER_SPAN = 0.4
TWO_PI = 2.0 * math.pi

# --- Travel Axis ---
# Shapes travelling up start at the bottom edge, shapes travelling down
# start just above the top edge.
START_EDGE_UP = 1.0
START_EDGE_DOWN = -0.1
# Shapes are culled 0.1 beyond the visible range so they finish exiting.
CULL_MIN = -0.1
CULL_MAX = 1.1

# --- Update Timing ---
# Upper bound for a single frame step, in seconds.
MAX_DELTA_TIME = 0.1

# --- Rendering ---
DEFAULT_COLOR = (255, 255, 255)  # White
# Half-size of the local canvas a shape is drawn on, as a multiple of its
# radius. Covers the rotated heart (about 1.6r) and custom callbacks.
CANVAS_RADIUS_RATIO = 2.0
# Icon glyphs are rendered with a font size of ICON_SIZE_RATIO * radius.
ICON_SIZE_RATIO = 2.0
# Number of samples per cubic segment of the heart outline.
HEART_CURVE_SEGMENTS = 24

# Default colour for each built-in shape kind, used when the config file
# does not provide a colour map.
DEFAULT_SHAPE_COLORS = {
    "circle": (33, 150, 243),    # Blue
    "rectangle": (76, 175, 80),  # Green
    "heart": (244, 67, 54),      # Red
    "triangle": (156, 39, 176),  # Purple
}

# Vertical gradient used behind the shapes when no preset provides one.
DEFAULT_BACKDROP = [
    (24, 255, 255),   # Cyan Accent
    (77, 208, 225),   # Cyan 300
    (140, 158, 255),  # Indigo Accent 100
]
