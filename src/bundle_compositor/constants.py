"""
Constants used internally by the bundle compositor.

These are implementation-level values that should not be overridden
via config files or CLI arguments. User-facing defaults live in
``config_defaults``.
"""

# Canvas and encoding
COLOR_MODE_RGBA = "RGBA"
COLOR_MODE_RGB = "RGB"
OUTPUT_FORMAT = "JPEG"

# Internal color constants (RGBA)
COLOR_BLACK = (0, 0, 0, 255)
COLOR_GRAY = (219, 219, 219, 255)
# Fully transparent white; flattens to white on JPEG encode
COLOR_CLEAR_WHITE = (255, 255, 255, 0)

# Character width heuristic, in multiples of the font size
ASCII_CHAR_UNITS = 0.5
WIDE_CHAR_UNITS = 1.0

# Line strokes are emulated with single pixel segments
LINE_WIDTH_PX = 1
