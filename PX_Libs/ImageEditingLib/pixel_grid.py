"""
Raw RGBA pixel storage for Pixelate.

PixelGrid owns an interleaved R,G,B,A byte buffer held as a numpy array of
shape (height, width, 4). It only addresses pixels; histogram and cache
bookkeeping live in PixelEditor.
"""

from typing import Optional

import numpy as np

from PX_Libs.constants import OPAQUE_ALPHA
from PX_Libs.errors import EmptyImage, OutOfBounds
from PX_Libs.ImageEditingLib.color_codec import hex_to_rgb, rgb_to_hex
from PX_Libs.ImageEditingLib.image_models import Color


class PixelGrid:
    """
    Fixed-size RGBA raster addressed by (x, y).

    Args:
        width: Grid width in pixels (must be > 0)
        height: Grid height in pixels (must be > 0)
        data: Optional interleaved RGBA bytes of length width * height * 4.
              When omitted the grid starts opaque black.

    Raises:
        EmptyImage: If width or height is zero
        ValueError: If data has the wrong length
    """

    def __init__(self, width: int, height: int, data: Optional[bytes] = None) -> None:
        if width <= 0 or height <= 0:
            raise EmptyImage(f"Cannot create a {width}x{height} pixel grid")

        expected = width * height * 4
        if data is None:
            buffer = np.zeros((height, width, 4), dtype=np.uint8)
            buffer[:, :, 3] = OPAQUE_ALPHA
        else:
            if len(data) != expected:
                raise ValueError(
                    f"RGBA buffer for {width}x{height} must hold {expected} bytes, got {len(data)}"
                )
            buffer = np.frombuffer(bytes(data), dtype=np.uint8).reshape((height, width, 4)).copy()

        self._width = int(width)
        self._height = int(height)
        self._data = buffer

    @classmethod
    def from_array(cls, array: np.ndarray) -> "PixelGrid":
        """
        Build a grid from an (height, width, 3 or 4) array of 0-255 values.

        Raises:
            ValueError: If the shape is wrong or a value is outside 0-255
        """
        if array.ndim != 3 or array.shape[2] not in (3, 4):
            raise ValueError(f"Expected an (h, w, 3|4) array, got shape {array.shape}")
        if array.dtype != np.uint8 and array.size and (array.min() < 0 or array.max() > 255):
            raise ValueError(f"Pixel values must lie in 0-255, got {array.min()}..{array.max()}")
        height, width = array.shape[:2]
        grid = cls(width, height)
        grid._data[:, :, :3] = array[:, :, :3]
        return grid

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    def contains(self, x: int, y: int) -> bool:
        return 0 <= x < self._width and 0 <= y < self._height

    def _check(self, x: int, y: int) -> None:
        if not self.contains(x, y):
            raise OutOfBounds(x, y, self._width, self._height)

    def get(self, x: int, y: int) -> Color:
        self._check(x, y)
        r, g, b = self._data[y, x, :3]
        return rgb_to_hex(int(r), int(g), int(b))

    def set(self, x: int, y: int, color: Color) -> None:
        self._check(x, y)
        r, g, b = hex_to_rgb(color)
        self._data[y, x] = (r, g, b, OPAQUE_ALPHA)

    def rgb_array(self) -> np.ndarray:
        """Copy of the color channels as an (height, width, 3) array."""
        return self._data[:, :, :3].copy()

    def rgba_array(self) -> np.ndarray:
        return self._data.copy()

    def to_bytes(self) -> bytes:
        return self._data.tobytes()

    def region_bytes(self, left: int, top: int, right: int, bottom: int) -> bytes:
        """RGBA bytes of the inclusive rectangle, row-major."""
        self._check(left, top)
        self._check(right, bottom)
        return self._data[top:bottom + 1, left:right + 1].tobytes()
