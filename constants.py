# constants.py
"""
Application-level constants.

These are the compiled-in defaults for the matrix rain. Anything listed
under "Streamer defaults" can be overridden from the
`simulation_parameters` section of config.json; the rest are fundamental
to the rendering framework and stay fixed.
"""

# --- Streamer defaults ---
MAX_STREAMERS = 200
# Speeds are whole rows per second, drawn from [MIN_SPEED, MAX_SPEED].
MIN_SPEED = 5
MAX_SPEED = 45
# Number of characters in a streamer, drawn from [MIN_LENGTH, MAX_LENGTH].
MIN_LENGTH = 10
MAX_LENGTH = 90
# Cyrillic band. Both bounds inclusive.
MIN_CODE_POINT = 0x0400
MAX_CODE_POINT = 0x0526
# Streamers slower than this are drawn dark green, faster ones light green.
SLOW_SPEED_THRESHOLD = 15.0
# Number of characters after the head drawn in NEAR_HEAD_COLOR.
NEAR_HEAD_LENGTH = 3

# --- Host settings ---
PREFERRED_SIZE = (400, 400)
TICK_MS = 10
FONT_NAME = "monospace"
FONT_SIZE = 15

# --- Colors ---
BACKGROUND_COLOR = (0, 0, 0)
HEAD_COLOR = (255, 255, 255)
NEAR_HEAD_COLOR = (128, 128, 128)
SLOW_COLOR = (0, 100, 0)      # Dark Green
FAST_COLOR = (144, 238, 144)  # Light Green
GRID_LINE_COLOR = (255, 255, 255)

# Lookup table indexed by the color codes the renderer kernel emits.
COLOR_HEAD = 0
COLOR_NEAR_HEAD = 1
COLOR_SLOW = 2
COLOR_FAST = 3
PALETTE = (HEAD_COLOR, NEAR_HEAD_COLOR, SLOW_COLOR, FAST_COLOR)
