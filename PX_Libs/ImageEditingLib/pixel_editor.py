"""
Pixel editing engine for Pixelate.

PixelEditor wraps a PixelGrid together with two derived views that are kept
in sync on every write: a row-major cache of color strings (so reads never
re-decode bytes) and a ColorHistogram. All mutations go through a single
`_set_pixel` primitive.

Each editing operation returns the DirtyRegion it touched, or None when the
grid did not change.

Example:
    >>> editor = PixelEditor.blank(2, 2, "#ffffff")
    >>> editor.draw(0, 0, "#ff0000")
    DirtyRegion(left=0, top=0, right=0, bottom=0)
    >>> editor.count()
    {'#ffffff': 3, '#ff0000': 1}
"""

import logging
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

import numpy as np

from PX_Libs.constants import DEFAULT_BACKGROUND_COLOR
from PX_Libs.errors import OutOfBounds, UnknownTool
from PX_Libs.ImageEditingLib.color_codec import hex_to_rgb, normalize_color, rgb_to_hex
from PX_Libs.ImageEditingLib.color_histogram import ColorHistogram
from PX_Libs.ImageEditingLib.dirty_region import DirtyRegion, merge_all
from PX_Libs.ImageEditingLib.image_models import Color, Operation, Tool
from PX_Libs.ImageEditingLib.pixel_grid import PixelGrid

logger = logging.getLogger(__name__)


class PixelEditor:
    """
    Editable pixel grid with an incrementally maintained histogram.

    The editor takes exclusive ownership of the grid it is given; callers
    must not write to the grid afterwards.

    Args:
        grid: The PixelGrid to edit
    """

    def __init__(self, grid: PixelGrid) -> None:
        self._grid = grid
        self._pixels, self._histogram = _decode_grid(grid)

    @classmethod
    def from_rgba(cls, width: int, height: int, data: bytes) -> "PixelEditor":
        return cls(PixelGrid(width, height, data))

    @classmethod
    def from_array(cls, array: np.ndarray) -> "PixelEditor":
        return cls(PixelGrid.from_array(array))

    @classmethod
    def blank(cls, width: int, height: int, color: Color = DEFAULT_BACKGROUND_COLOR) -> "PixelEditor":
        array = np.empty((max(height, 0), max(width, 0), 3), dtype=np.uint8)
        array[:, :] = hex_to_rgb(color)
        return cls(PixelGrid.from_array(array))

    @property
    def width(self) -> int:
        return self._grid.width

    @property
    def height(self) -> int:
        return self._grid.height

    @property
    def grid(self) -> PixelGrid:
        return self._grid

    def pick(self, x: int, y: int) -> Color:
        if not self._grid.contains(x, y):
            raise OutOfBounds(x, y, self.width, self.height)
        return self._pixels[y][x]

    def _set_pixel(self, x: int, y: int, color: Color) -> None:
        previous = self._pixels[y][x]
        self._grid.set(x, y, color)
        self._pixels[y][x] = color
        self._histogram.decrement(previous)
        self._histogram.increment(color)

    def draw(self, x: int, y: int, color: Color) -> Optional[DirtyRegion]:
        """
        Recolor a single pixel.

        Returns:
            The one-pixel dirty region, or None if the pixel already had the color

        Raises:
            OutOfBounds: If (x, y) is outside the grid
            InvalidColor: If color is not a valid color string
        """
        color = normalize_color(color)
        if self.pick(x, y) == color:
            return None
        self._set_pixel(x, y, color)
        return DirtyRegion.at(x, y)

    def fill(self, x: int, y: int, color: Color) -> Optional[DirtyRegion]:
        """
        Paint-bucket fill of the 4-connected region containing (x, y).

        Every pixel reachable from the seed through neighbors sharing the
        seed's original color is recolored. Pixels are recolored as they are
        pushed, so each one enters the stack at most once.

        Returns:
            Bounding box of the recolored region, or None if the seed already had the color
        """
        color = normalize_color(color)
        start_color = self.pick(x, y)
        if start_color == color:
            return None

        width, height = self.width, self.height
        self._set_pixel(x, y, color)
        dirty = DirtyRegion.at(x, y)
        stack: List[Tuple[int, int]] = [(x, y)]

        while stack:
            cx, cy = stack.pop()
            for nx, ny in ((cx - 1, cy), (cx + 1, cy), (cx, cy - 1), (cx, cy + 1)):
                if 0 <= nx < width and 0 <= ny < height and self._pixels[ny][nx] == start_color:
                    self._set_pixel(nx, ny, color)
                    dirty = dirty.include(nx, ny)
                    stack.append((nx, ny))

        logger.debug(f"Region fill from ({x}, {y}) with {color} dirtied {dirty}")
        return dirty

    def fill_all(self, x: int, y: int, color: Color) -> Optional[DirtyRegion]:
        """
        Magic-wand fill: recolor every pixel sharing the color at (x, y).

        Connectivity is ignored. The returned region bounds the touched
        pixels, which is not necessarily the whole grid.
        """
        color = normalize_color(color)
        start_color = self.pick(x, y)
        if start_color == color:
            return None

        remaining = self._histogram.count(start_color)
        dirty: Optional[DirtyRegion] = None
        for row_index, row in enumerate(self._pixels):
            if remaining == 0:
                break
            for column_index, current in enumerate(row):
                if current != start_color:
                    continue
                self._set_pixel(column_index, row_index, color)
                remaining -= 1
                if dirty is None:
                    dirty = DirtyRegion.at(column_index, row_index)
                else:
                    dirty = dirty.include(column_index, row_index)

        logger.debug(f"Global fill of {start_color} with {color} dirtied {dirty}")
        return dirty

    def apply(self, operation: Operation) -> Optional[DirtyRegion]:
        tool = operation.tool
        if tool is Tool.DRAW:
            return self.draw(operation.x, operation.y, operation.color)
        elif tool is Tool.FILL:
            return self.fill(operation.x, operation.y, operation.color)
        elif tool is Tool.MAGIC_WAND:
            return self.fill_all(operation.x, operation.y, operation.color)
        else:
            raise UnknownTool(f"Unknown tool {tool!r}")

    def apply_many(self, operations: Iterable[Operation]) -> Optional[DirtyRegion]:
        """
        Apply operations in order and merge their dirty regions.

        Raises:
            UnknownTool: If an operation's tool is not a Tool member
        """
        return merge_all(self.apply(operation) for operation in operations)

    def pixels(self) -> Tuple[Tuple[Color, ...], ...]:
        """Row-major snapshot of the grid's colors."""
        return tuple(tuple(row) for row in self._pixels)

    def count(self) -> Dict[Color, int]:
        return self._histogram.snapshot()

    def distinct_colors(self) -> int:
        return self._histogram.distinct_colors()

    def rgb_array(self) -> np.ndarray:
        return self._grid.rgb_array()

    def to_rgba_bytes(self) -> bytes:
        return self._grid.to_bytes()

    def region_bytes(self, region: DirtyRegion) -> bytes:
        return self._grid.region_bytes(region.left, region.top, region.right, region.bottom)


def _decode_grid(grid: PixelGrid) -> Tuple[List[List[Color]], ColorHistogram]:
    rgb = grid.rgb_array().astype(np.uint32)
    packed = (rgb[:, :, 0] << 16) | (rgb[:, :, 1] << 8) | rgb[:, :, 2]
    unique, inverse, counts = np.unique(packed.ravel(), return_inverse=True, return_counts=True)

    palette: Sequence[Color] = [
        rgb_to_hex(int(value >> 16) & 0xFF, int(value >> 8) & 0xFF, int(value) & 0xFF)
        for value in unique
    ]
    indices = inverse.reshape(packed.shape)
    pixels = [[palette[index] for index in row] for row in indices.tolist()]

    return pixels, ColorHistogram.from_counts(zip(palette, counts.tolist()))
