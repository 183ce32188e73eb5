"""
Constants and configuration values for Pixelate.

This module centralizes all constant values, magic numbers, and
configuration settings used throughout the application.
"""

# Preprocessing constants
MIN_TARGET_WIDTH = 8
MAX_TARGET_WIDTH = 80
MAX_TARGET_COLORS = 20

# Physical size of one grid cell (bead/brick) in millimeters
BEAD_SIZE_MM = 7.6

# Colors
DEFAULT_BACKGROUND_COLOR = "#ffffff"
DEFAULT_ACTIVE_COLOR = "#000000"
OPAQUE_ALPHA = 255

# Light/dark label threshold on perceived luminance (0-255 scale)
LIGHT_COLOR_THRESHOLD = 127.5

# Instruction labels
DARK_TEXT_CLASS = "dark-text"
LIGHT_TEXT_CLASS = "light-text"
FIRST_INDEX_LETTER = "a"

# File naming
EXPORT_FILE_PREFIX = "pixelate-"
DEFAULT_OUTPUT_FORMAT = "PNG"
PNG_MIME_TYPE = "image/png"
PNG_DATA_URL_PREFIX = "data:image/png;base64,"

# State persistence
STATE_FILE_NAME = "pixelate_state.json"
QUERY_KEY_IMAGE = "b"
QUERY_KEY_MODE = "m"
QUERY_KEY_ACTIVE_COLOR = "c"
QUERY_KEY_CROSSED_COLORS = "bg"
QUERY_KEY_CROSSED_ROWS = "rows"
QUERY_KEY_CROSSED_COLUMNS = "cols"
QUERY_LIST_SEPARATOR = ","

# State field names
FIELD_IMAGE = "image"
FIELD_MODE = "mode"
FIELD_ACTIVE_COLOR = "active_color"
FIELD_CROSSED_COLORS = "crossed_colors"
FIELD_CROSSED_ROWS = "crossed_rows"
FIELD_CROSSED_COLUMNS = "crossed_columns"
