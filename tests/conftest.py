"""
Pytest configuration and shared fixtures for Pixelate tests.

This module provides shared test fixtures and configuration
used across multiple test modules.
"""

import numpy as np
import pytest

from PX_Libs.ImageEditingLib.pixel_editor import PixelEditor

RED = "#ff0000"
GREEN = "#00ff00"
BLUE = "#0000ff"
WHITE = "#ffffff"
BLACK = "#000000"


@pytest.fixture
def white_2x2():
    """
    Provide a 2x2 editor filled with white.

    Returns:
        PixelEditor whose four pixels are #ffffff
    """
    return PixelEditor.blank(2, 2, WHITE)


@pytest.fixture
def striped_4x1():
    """Provide a 4x1 editor colored [red, white, red, white]."""
    editor = PixelEditor.blank(4, 1, WHITE)
    editor.draw(0, 0, RED)
    editor.draw(2, 0, RED)
    return editor


@pytest.fixture
def gradient_16x16():
    """
    Provide a 16x16 true-color editor with 200 distinct colors.

    Returns:
        PixelEditor whose first 200 pixels (row-major) are unique and the
        remaining 56 repeat the first ones
    """
    array = np.zeros((16, 16, 3), dtype=np.uint8)
    for index in range(256):
        value = index % 200
        array[index // 16, index % 16] = (value, (value * 7) % 256, 255 - value)
    return PixelEditor.from_array(array)


@pytest.fixture
def sample_colors():
    """
    Provide a list of sample color strings for testing.

    Returns:
        List of #rrggbb strings with common test colors
    """
    return [
        RED,
        GREEN,
        BLUE,
        WHITE,
        BLACK,
        "#808080",  # Gray
    ]
