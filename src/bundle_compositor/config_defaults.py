"""Shared default values for user-facing configuration settings."""

# Grid
DEFAULT_PADDING = 20
DEFAULT_COLUMN = 1

# Style, as fractions of the destination canvas width
DEFAULT_CANVAS_WIDTH = 960
DEFAULT_PADDING_RATIO = 0.05
DEFAULT_FONT_RATIO = 0.03
# Cell paddings, as fractions of the font size
DEFAULT_CELL_PADDING_X_RATIO = 0.75
DEFAULT_CELL_PADDING_Y_RATIO = 0.25
# Extra width given to a caption-only canvas when the caption overflows
DEFAULT_CAPTION_MARGIN = 100

# Output
DEFAULT_JPEG_QUALITY = 100

# Table
DEFAULT_TABLE_BORDER = 1

# Execution
DEFAULT_MAX_WORKERS: int | None = None
