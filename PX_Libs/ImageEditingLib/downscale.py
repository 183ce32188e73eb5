"""
Resampling and color quantization for Pixelate.

Turns a full-resolution PixelEditor into a small grid with a bounded palette,
suitable for bead/brick assembly:

1. resample_blocks: area-average the source into a true-color grid of the
   target size. Source pixel (sx, sy) belongs to target pixel
   (floor(sx * tw / sw), floor(sy * th / sh)), so every source pixel lands in
   exactly one block. Target pixels whose block is empty (upscaling) take
   the nearest source pixel instead.
2. median_cut_palette: split the color space into at most k boxes, always
   splitting the box with the widest channel range at its weighted median.
3. assign_palette: map every pixel to its nearest palette color by Euclidean
   RGB distance. Ties go to the earlier palette entry.

Example:
    >>> small = downscale(editor, target_width=32, target_height=24, max_colors=12)
    >>> small.distinct_colors() <= 12
    True
"""

import logging
from typing import List, Tuple

import numpy as np

from PX_Libs.errors import EmptyImage
from PX_Libs.ImageEditingLib.image_models import RgbColor
from PX_Libs.ImageEditingLib.pixel_editor import PixelEditor

logger = logging.getLogger(__name__)


def resample_blocks(source: np.ndarray, target_width: int, target_height: int) -> np.ndarray:
    """
    Area-average an (h, w, 3) array down (or up) to the target size.

    Args:
        source: Source colors as an (height, width, 3) array
        target_width: Output width in pixels
        target_height: Output height in pixels

    Returns:
        Float array of shape (target_height, target_width, 3)
    """
    source_height, source_width = source.shape[:2]

    target_xs = (np.arange(source_width) * target_width) // source_width
    target_ys = (np.arange(source_height) * target_height) // source_height
    block_index = (target_ys[:, None] * target_width + target_xs[None, :]).ravel()

    block_count = target_width * target_height
    colors = source.reshape(-1, 3).astype(np.float64)
    sums = np.zeros((block_count, 3), dtype=np.float64)
    np.add.at(sums, block_index, colors)
    sizes = np.bincount(block_index, minlength=block_count).astype(np.float64)

    result = np.empty((block_count, 3), dtype=np.float64)
    filled = sizes > 0
    result[filled] = sums[filled] / sizes[filled, None]

    if not filled.all():
        # Upscaled axes leave blocks without source pixels.
        nearest_xs = (np.arange(target_width) * source_width) // target_width
        nearest_ys = (np.arange(target_height) * source_height) // target_height
        nearest = source[nearest_ys[:, None], nearest_xs[None, :]].reshape(-1, 3)
        result[~filled] = nearest[~filled]

    return result.reshape(target_height, target_width, 3)


def median_cut_palette(colors: np.ndarray, weights: np.ndarray, max_colors: int) -> List[RgbColor]:
    """
    Build a palette of at most max_colors entries with weighted median cut.

    Args:
        colors: Distinct colors as an (n, 3) uint8 array
        weights: Pixel count of each color, shape (n,)
        max_colors: Upper bound on the palette size

    Returns:
        Palette colors in box-creation order, without duplicates
    """
    if max_colors < 1:
        raise ValueError(f"max_colors must be >= 1, got {max_colors}")

    boxes: List[Tuple[np.ndarray, np.ndarray]] = [(colors, weights)]

    while len(boxes) < max_colors:
        splittable = [
            (int(np.ptp(box_colors, axis=0).max()), index)
            for index, (box_colors, _) in enumerate(boxes)
            if len(box_colors) > 1
        ]
        if not splittable:
            break

        _, index = max(splittable, key=lambda item: (item[0], -item[1]))
        box_colors, box_weights = boxes[index]
        channel = int(np.argmax(np.ptp(box_colors, axis=0)))

        order = np.argsort(box_colors[:, channel], kind="stable")
        box_colors = box_colors[order]
        box_weights = box_weights[order]

        cumulative = np.cumsum(box_weights)
        split = int(np.searchsorted(cumulative, cumulative[-1] / 2.0, side="right"))
        split = max(1, min(split, len(box_colors) - 1))

        boxes[index] = (box_colors[:split], box_weights[:split])
        boxes.insert(index + 1, (box_colors[split:], box_weights[split:]))

    palette: List[RgbColor] = []
    for box_colors, box_weights in boxes:
        mean = np.average(box_colors.astype(np.float64), axis=0, weights=box_weights)
        color = tuple(int(channel) for channel in np.clip(np.rint(mean), 0, 255))
        if color not in palette:
            palette.append(color)
    return palette


def assign_palette(pixels: np.ndarray, palette: List[RgbColor]) -> np.ndarray:
    """
    Replace each pixel with its nearest palette color.

    Args:
        pixels: Colors as an (..., 3) array
        palette: Candidate colors; earlier entries win ties

    Returns:
        uint8 array with the same shape as pixels
    """
    flat = pixels.reshape(-1, 3).astype(np.float64)
    candidates = np.asarray(palette, dtype=np.float64)
    distances = ((flat[:, None, :] - candidates[None, :, :]) ** 2).sum(axis=2)
    nearest = np.argmin(distances, axis=1)
    return candidates[nearest].astype(np.uint8).reshape(pixels.shape)


def downscale(
    source: PixelEditor,
    target_width: int,
    target_height: int,
    max_colors: int,
) -> PixelEditor:
    """
    Resample and quantize a PixelEditor into a new, smaller one.

    The source is never modified.

    Args:
        source: Full-resolution editor to read from
        target_width: Exact output width
        target_height: Exact output height
        max_colors: Upper bound on distinct output colors (k)

    Returns:
        A new PixelEditor of size target_width x target_height with at most
        min(max_colors, distinct resampled colors) colors

    Raises:
        EmptyImage: If the target size is zero or negative
        ValueError: If max_colors < 1
    """
    if target_width <= 0 or target_height <= 0:
        raise EmptyImage(f"Cannot downscale to {target_width}x{target_height}")
    if max_colors < 1:
        raise ValueError(f"max_colors must be >= 1, got {max_colors}")

    provisional = np.clip(
        np.rint(resample_blocks(source.rgb_array(), target_width, target_height)), 0, 255
    ).astype(np.uint8)

    distinct, counts = np.unique(provisional.reshape(-1, 3), axis=0, return_counts=True)
    palette = median_cut_palette(distinct, counts, max_colors)
    quantized = assign_palette(provisional, palette)

    logger.debug(
        f"Downscaled {source.width}x{source.height} to {target_width}x{target_height}: "
        f"{len(distinct)} resampled colors reduced to a palette of {len(palette)}"
    )
    return PixelEditor.from_array(quantized)
