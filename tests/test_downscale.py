"""
Unit tests for downscale module.

Tests block resampling, median-cut palettes, nearest-color assignment and
the output size and palette bounds of the quantizer.
"""

import numpy as np
import pytest

from PX_Libs.errors import EmptyImage
from PX_Libs.ImageEditingLib.downscale import (
    assign_palette,
    downscale,
    median_cut_palette,
    resample_blocks,
)
from PX_Libs.ImageEditingLib.pixel_editor import PixelEditor


class TestResampleBlocks:
    """Tests for resample_blocks function."""

    def test_averages_blocks(self):
        """A 2x2 -> 1x1 resample should average all four pixels."""
        source = np.array([[[0, 0, 0], [100, 0, 0]], [[0, 200, 0], [100, 200, 40]]], dtype=np.uint8)
        result = resample_blocks(source, 1, 1)

        assert result.shape == (1, 1, 3)
        assert np.allclose(result[0, 0], [50, 100, 10])

    def test_uneven_blocks_cover_every_source_pixel(self):
        """With a 3 -> 2 reduction every source pixel lands in exactly one block."""
        source = np.array([[[30, 0, 0], [60, 0, 0], [90, 0, 0]]], dtype=np.uint8)
        result = resample_blocks(source, 2, 1)

        # floor(x * 2 / 3): x=0,1 -> 0 and x=2 -> 1
        assert np.allclose(result[0, :, 0], [45, 90])

    def test_upscaling_uses_nearest_source_pixel(self):
        source = np.array([[[10, 20, 30], [40, 50, 60]]], dtype=np.uint8)
        result = resample_blocks(source, 4, 2)

        assert result.shape == (2, 4, 3)
        assert np.allclose(result[1, 1], [10, 20, 30])
        assert np.allclose(result[0, 3], [40, 50, 60])


class TestMedianCutPalette:
    """Tests for median_cut_palette function."""

    def test_respects_max_colors(self):
        colors = np.array([[i, 255 - i, (i * 3) % 256] for i in range(50)], dtype=np.uint8)
        weights = np.ones(50, dtype=np.int64)

        palette = median_cut_palette(colors, weights, 6)

        assert 1 <= len(palette) <= 6

    def test_never_exceeds_distinct_colors(self):
        colors = np.array([[0, 0, 0], [255, 255, 255]], dtype=np.uint8)
        palette = median_cut_palette(colors, np.array([5, 1]), 10)

        assert sorted(palette) == [(0, 0, 0), (255, 255, 255)]

    def test_single_color_is_weighted_mean(self):
        colors = np.array([[0, 0, 0], [100, 100, 100]], dtype=np.uint8)
        palette = median_cut_palette(colors, np.array([3, 1]), 1)

        assert palette == [(25, 25, 25)]

    def test_rejects_zero_colors(self):
        with pytest.raises(ValueError):
            median_cut_palette(np.zeros((1, 3), dtype=np.uint8), np.ones(1), 0)


class TestAssignPalette:
    """Tests for assign_palette function."""

    def test_picks_nearest(self):
        pixels = np.array([[[10, 10, 10], [250, 240, 245]]], dtype=np.float64)
        result = assign_palette(pixels, [(0, 0, 0), (255, 255, 255)])

        assert result.tolist() == [[[0, 0, 0], [255, 255, 255]]]

    def test_ties_go_to_first_palette_entry(self):
        pixels = np.array([[[100, 0, 0]]], dtype=np.float64)
        result = assign_palette(pixels, [(50, 0, 0), (150, 0, 0)])

        assert result.tolist() == [[[50, 0, 0]]]


class TestDownscale:
    """Tests for downscale function."""

    def test_scenario_16x16_to_8x8_with_4_colors(self, gradient_16x16):
        """200 distinct colors reduced to an 8x8 grid with at most 4 colors."""
        assert gradient_16x16.distinct_colors() == 200

        result = downscale(gradient_16x16, 8, 8, 4)

        assert (result.width, result.height) == (8, 8)
        assert 1 <= result.distinct_colors() <= 4
        assert sum(result.count().values()) == 64

    @pytest.mark.parametrize("width, height, colors", [(5, 3, 1), (16, 16, 20), (20, 7, 3), (1, 1, 2)])
    def test_output_bounds(self, gradient_16x16, width, height, colors):
        result = downscale(gradient_16x16, width, height, colors)

        assert (result.width, result.height) == (width, height)
        assert result.distinct_colors() <= colors

    def test_does_not_mutate_source(self, gradient_16x16):
        before = (gradient_16x16.pixels(), gradient_16x16.count())
        downscale(gradient_16x16, 4, 4, 2)

        assert (gradient_16x16.pixels(), gradient_16x16.count()) == before

    def test_two_color_image_keeps_colors(self):
        editor = PixelEditor.blank(8, 8, "#ffffff")
        for y in range(8):
            for x in range(4):
                editor.draw(x, y, "#000000")

        result = downscale(editor, 4, 4, 5)

        assert result.count() == {"#000000": 8, "#ffffff": 8}

    def test_is_deterministic(self, gradient_16x16):
        first = downscale(gradient_16x16, 6, 6, 5)
        second = downscale(gradient_16x16, 6, 6, 5)

        assert first.pixels() == second.pixels()

    @pytest.mark.parametrize("width, height", [(0, 4), (4, 0)])
    def test_rejects_empty_target(self, gradient_16x16, width, height):
        with pytest.raises(EmptyImage):
            downscale(gradient_16x16, width, height, 4)

    def test_rejects_zero_colors(self, gradient_16x16):
        with pytest.raises(ValueError):
            downscale(gradient_16x16, 4, 4, 0)
