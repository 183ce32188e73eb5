"""
Unit tests for pixel_grid module.

Tests raw RGBA addressing, bounds checking and alpha normalization.
"""

import numpy as np
import pytest

from PX_Libs.errors import EmptyImage, OutOfBounds
from PX_Libs.ImageEditingLib.pixel_grid import PixelGrid


class TestPixelGridConstruction:
    """Tests for PixelGrid construction."""

    def test_buffer_length_matches_dimensions(self):
        """Buffer should hold width * height * 4 bytes."""
        grid = PixelGrid(3, 2)
        assert len(grid.to_bytes()) == 3 * 2 * 4

    def test_wraps_given_bytes(self):
        """Should decode colors from an interleaved RGBA buffer."""
        data = bytes([255, 0, 0, 255, 0, 0, 255, 128])
        grid = PixelGrid(2, 1, data)

        assert grid.get(0, 0) == "#ff0000"
        assert grid.get(1, 0) == "#0000ff"

    def test_copies_given_bytes(self):
        """Should not alias the caller's buffer."""
        data = bytearray([10, 20, 30, 255])
        grid = PixelGrid(1, 1, data)
        data[0] = 0

        assert grid.get(0, 0) == "#0a141e"

    def test_rejects_wrong_buffer_length(self):
        """Should raise ValueError when the buffer size is inconsistent."""
        with pytest.raises(ValueError):
            PixelGrid(2, 2, bytes(15))

    @pytest.mark.parametrize("width, height", [(0, 5), (5, 0), (0, 0)])
    def test_rejects_degenerate_size(self, width, height):
        """Should fail fast on zero-width or zero-height grids."""
        with pytest.raises(EmptyImage):
            PixelGrid(width, height)

    def test_from_array(self):
        """Should accept an (h, w, 3) array."""
        array = np.zeros((2, 3, 3), dtype=np.uint8)
        array[1, 2] = (1, 2, 3)
        grid = PixelGrid.from_array(array)

        assert (grid.width, grid.height) == (3, 2)
        assert grid.get(2, 1) == "#010203"

    def test_from_array_accepts_wider_dtype_in_range(self):
        array = np.full((1, 2, 3), 200, dtype=np.int64)

        assert PixelGrid.from_array(array).get(1, 0) == "#c8c8c8"

    @pytest.mark.parametrize("value", [256, 300, -1])
    def test_from_array_rejects_out_of_range_values(self, value):
        """Values outside 0-255 must not wrap around."""
        array = np.zeros((2, 2, 3), dtype=np.int64)
        array[0, 1, 2] = value

        with pytest.raises(ValueError):
            PixelGrid.from_array(array)


class TestPixelGridAccess:
    """Tests for get/set and bounds."""

    def test_set_then_get(self):
        grid = PixelGrid(2, 2)
        grid.set(1, 1, "#abcdef")
        assert grid.get(1, 1) == "#abcdef"

    def test_set_forces_opaque_alpha(self):
        """Writing a color should reset alpha to 255."""
        grid = PixelGrid(1, 1, bytes([0, 0, 0, 0]))
        grid.set(0, 0, "#112233")
        assert grid.to_bytes() == bytes([0x11, 0x22, 0x33, 255])

    def test_get_ignores_alpha(self):
        grid = PixelGrid(1, 1, bytes([1, 2, 3, 0]))
        assert grid.get(0, 0) == "#010203"

    @pytest.mark.parametrize("x, y", [(2, 0), (0, 2), (-1, 0), (0, -1)])
    def test_out_of_bounds(self, x, y):
        """Should raise OutOfBounds outside [0, width) x [0, height)."""
        grid = PixelGrid(2, 2)
        with pytest.raises(OutOfBounds):
            grid.get(x, y)
        with pytest.raises(OutOfBounds):
            grid.set(x, y, "#000000")

    def test_region_bytes(self):
        """Should return only the bytes inside the inclusive rectangle."""
        grid = PixelGrid(3, 3)
        grid.set(1, 1, "#ff0000")
        grid.set(2, 1, "#00ff00")

        assert grid.region_bytes(1, 1, 2, 1) == bytes([255, 0, 0, 255, 0, 255, 0, 255])
