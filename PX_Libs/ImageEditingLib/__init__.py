"""
ImageEditingLib - Core pixel editing functionality

This module provides the pixel editing engine, the downscaling quantizer,
image I/O and assembly instructions for the Pixelate project.
"""

from PX_Libs.ImageEditingLib.image_models import Color, Operation, RgbColor, Tool
from PX_Libs.ImageEditingLib.color_codec import (
    hex_to_rgb,
    is_hex_color,
    is_light_color,
    normalize_color,
    rgb_to_hex,
)
from PX_Libs.ImageEditingLib.pixel_grid import PixelGrid
from PX_Libs.ImageEditingLib.color_histogram import ColorHistogram
from PX_Libs.ImageEditingLib.dirty_region import DirtyRegion, merge_all, merge_dirty_regions
from PX_Libs.ImageEditingLib.pixel_editor import PixelEditor
from PX_Libs.ImageEditingLib.downscale import downscale
from PX_Libs.ImageEditingLib.canvas_surface import CanvasSurface, ImageRenderTarget, RenderTarget
from PX_Libs.ImageEditingLib.image_io import (
    editor_from_image,
    export_file_name,
    from_data_url,
    load_image_bytes,
    load_image_file,
    save_png,
    to_data_url,
    to_image,
    to_png_bytes,
)
from PX_Libs.ImageEditingLib.preprocess import (
    PreprocessSettings,
    default_settings,
    default_target_width,
    preprocess,
    settings_for,
)
from PX_Libs.ImageEditingLib.instructions import Instructions, LegendEntry

__all__ = [
    "Color",
    "Operation",
    "RgbColor",
    "Tool",
    "hex_to_rgb",
    "is_hex_color",
    "is_light_color",
    "normalize_color",
    "rgb_to_hex",
    "PixelGrid",
    "ColorHistogram",
    "DirtyRegion",
    "merge_all",
    "merge_dirty_regions",
    "PixelEditor",
    "downscale",
    "CanvasSurface",
    "ImageRenderTarget",
    "RenderTarget",
    "editor_from_image",
    "export_file_name",
    "from_data_url",
    "load_image_bytes",
    "load_image_file",
    "save_png",
    "to_data_url",
    "to_image",
    "to_png_bytes",
    "PreprocessSettings",
    "default_settings",
    "default_target_width",
    "preprocess",
    "settings_for",
    "Instructions",
    "LegendEntry",
]
