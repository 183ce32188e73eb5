"""
Hex color encoding for Pixelate.

Colors travel through the engine as canonical lowercase `#rrggbb` strings.
This module converts between that form and RGB component tuples.

Functions:
    rgb_to_hex: Encode three 0-255 components as a color string
    hex_to_rgb: Decode a color string into its components
    normalize_color: Canonicalize a color string
    is_hex_color: Check whether a string is a valid color
    is_light_color: Decide whether dark text reads better on a color
"""

import re

from PX_Libs.constants import LIGHT_COLOR_THRESHOLD
from PX_Libs.errors import InvalidColor
from PX_Libs.ImageEditingLib.image_models import Color, RgbColor

_HEX_PATTERN = re.compile(r"#?([0-9a-f]{2})([0-9a-f]{2})([0-9a-f]{2})", re.IGNORECASE)


def rgb_to_hex(r: int, g: int, b: int) -> Color:
    """
    Encode RGB components as a canonical color string.

    Args:
        r: Red component (0-255)
        g: Green component (0-255)
        b: Blue component (0-255)

    Returns:
        Lowercase `#rrggbb` string

    Raises:
        InvalidColor: If any component is outside 0-255
    """
    for component in (r, g, b):
        if not 0 <= component <= 255:
            raise InvalidColor(f"Invalid color component {r}, {g}, {b}")
    return f"#{int(r):02x}{int(g):02x}{int(b):02x}"


def hex_to_rgb(color: str) -> RgbColor:
    """
    Decode a color string into RGB components.

    The leading `#` is optional and hex digits are case-insensitive.

    Raises:
        InvalidColor: If the string is not exactly six hex digits
    """
    match = _HEX_PATTERN.fullmatch(color) if isinstance(color, str) else None
    if match is None:
        raise InvalidColor(f"Invalid color {color!r}")
    return (
        int(match.group(1), 16),
        int(match.group(2), 16),
        int(match.group(3), 16),
    )


def normalize_color(color: str) -> Color:
    return rgb_to_hex(*hex_to_rgb(color))


def is_hex_color(value: str) -> bool:
    try:
        hex_to_rgb(value)
    except InvalidColor:
        return False
    return True


def is_light_color(rgb: RgbColor) -> bool:
    r, g, b = rgb
    return 0.299 * r + 0.587 * g + 0.114 * b > LIGHT_COLOR_THRESHOLD
