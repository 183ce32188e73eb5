"""
Error kinds raised by the Pixelate engine.

Every error derives from PixelateError and from the builtin exception it
refines, so callers may catch either.
"""


class PixelateError(Exception):
    """Base class for all Pixelate errors."""


class InvalidColor(PixelateError, ValueError):
    """A color string is not six hex digits, or a component is out of range."""


class OutOfBounds(PixelateError, IndexError):
    """A coordinate lies outside the pixel grid."""

    def __init__(self, x: int, y: int, width: int, height: int) -> None:
        super().__init__(f"Pixel ({x}, {y}) is outside the {width}x{height} grid")
        self.x = x
        self.y = y


class UnknownTool(PixelateError, RuntimeError):
    """An operation carries a tool tag outside the defined set."""


class EmptyEncodedImage(PixelateError, RuntimeError):
    """The image encoder produced no data."""


class EmptyImage(PixelateError, ValueError):
    """An image has zero width or zero height."""
