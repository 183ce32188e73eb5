"""
Preprocessing parameters for turning a loaded image into a mural grid.

Derives the quantizer's target size and palette bound from the source image
and runs the quantizer once per settings change.
"""

import logging
import math
from dataclasses import dataclass, replace
from typing import Optional

from PX_Libs.constants import (
    BEAD_SIZE_MM,
    MAX_TARGET_COLORS,
    MAX_TARGET_WIDTH,
    MIN_TARGET_WIDTH,
)
from PX_Libs.errors import EmptyImage
from PX_Libs.ImageEditingLib.downscale import downscale
from PX_Libs.ImageEditingLib.pixel_editor import PixelEditor

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PreprocessSettings:
    target_width: int
    target_height: int
    target_colors: int


def default_target_width(source_width: int) -> int:
    """
    Pick a starting target width for a source image.

    The width is halved while it exceeds min(MAX_TARGET_WIDTH, source_width)
    and doubled while it is below MIN_TARGET_WIDTH.

    Raises:
        EmptyImage: If source_width is zero or negative
    """
    if source_width <= 0:
        raise EmptyImage(f"Source width must be positive, got {source_width}")

    max_width = min(MAX_TARGET_WIDTH, source_width)
    width = float(source_width)
    while width > max_width:
        width /= 2
    while width < MIN_TARGET_WIDTH:
        width *= 2
    return _round_half_up(width)


def target_height_for(source_width: int, source_height: int, target_width: int) -> int:
    """Aspect-preserving target height, at least one row."""
    if source_width <= 0 or source_height <= 0:
        raise EmptyImage(f"Cannot scale a {source_width}x{source_height} image")
    return max(1, _round_half_up(source_height / source_width * target_width))


def max_target_width(editor: PixelEditor) -> int:
    return max(MIN_TARGET_WIDTH, min(MAX_TARGET_WIDTH, editor.width))


def clamp_target_width(target_width: int, editor: PixelEditor) -> int:
    return max(MIN_TARGET_WIDTH, min(int(target_width), max_target_width(editor)))


def max_target_colors(editor: PixelEditor) -> int:
    return min(MAX_TARGET_COLORS, editor.distinct_colors())


def clamp_target_colors(target_colors: int, editor: PixelEditor) -> int:
    return max(1, min(int(target_colors), max_target_colors(editor)))


def default_settings(editor: PixelEditor) -> PreprocessSettings:
    target_width = default_target_width(editor.width)
    return PreprocessSettings(
        target_width=target_width,
        target_height=target_height_for(editor.width, editor.height, target_width),
        target_colors=max_target_colors(editor),
    )


def settings_for(
    editor: PixelEditor,
    target_width: Optional[int] = None,
    target_colors: Optional[int] = None,
) -> PreprocessSettings:
    """
    Default settings with optional user overrides applied and clamped.

    Args:
        editor: Source image
        target_width: Requested width, clamped to [MIN_TARGET_WIDTH, max_target_width];
                      the height follows the aspect ratio
        target_colors: Requested palette size, clamped to [1, max_target_colors]
    """
    settings = default_settings(editor)
    if target_width is not None:
        width = clamp_target_width(target_width, editor)
        settings = replace(
            settings,
            target_width=width,
            target_height=target_height_for(editor.width, editor.height, width),
        )
    if target_colors is not None:
        settings = replace(settings, target_colors=clamp_target_colors(target_colors, editor))
    return settings


def preprocess(editor: PixelEditor, settings: PreprocessSettings) -> PixelEditor:
    logger.debug(f"Preprocessing {editor.width}x{editor.height} with {settings}")
    return downscale(
        editor,
        settings.target_width,
        settings.target_height,
        settings.target_colors,
    )


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def real_size_mm(cells: int) -> float:
    return cells * BEAD_SIZE_MM
