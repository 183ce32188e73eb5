"""
Image ingestion and export for Pixelate.

Decoding and PNG encoding are delegated to Pillow; the engine only exchanges
RGBA pixel data and dimensions with it.

Functions:
    editor_from_image: Build a PixelEditor from a decoded Pillow image
    load_image_file: Decode an image file from disk into a PixelEditor
    load_image_bytes: Decode in-memory image data into a PixelEditor
    to_image: Render a PixelEditor as a Pillow RGBA image
    to_png_bytes: Encode a PixelEditor as PNG
    to_data_url: Encode a PixelEditor as a PNG data URL
    from_data_url: Decode a PNG data URL, or None if it is not one
    export_file_name: Default download name for a given day
    save_png: Write a PixelEditor as a PNG file into a directory
"""

import base64
import binascii
import io
import logging
from datetime import date
from pathlib import Path
from typing import Any, Optional

from PX_Libs.constants import (
    DEFAULT_BACKGROUND_COLOR,
    DEFAULT_OUTPUT_FORMAT,
    EXPORT_FILE_PREFIX,
    PNG_DATA_URL_PREFIX,
)
from PX_Libs.errors import EmptyEncodedImage, EmptyImage
from PX_Libs.ImageEditingLib.pixel_editor import PixelEditor
from PX_Libs.pillow_compat import Image

logger = logging.getLogger(__name__)


def editor_from_image(image: Any) -> PixelEditor:
    """
    Build a PixelEditor from a decoded Pillow image.

    Transparent areas are composited over white so every pixel is opaque.

    Args:
        image: A PIL Image in any mode

    Returns:
        A PixelEditor holding the flattened pixels

    Raises:
        EmptyImage: If the image has zero width or height
    """
    width, height = image.size
    if width == 0 or height == 0:
        raise EmptyImage(f"Cannot edit an empty {width}x{height} image")

    rgba = image.convert("RGBA") if image.mode != "RGBA" else image
    background = Image.new("RGBA", (width, height), DEFAULT_BACKGROUND_COLOR)
    flattened = Image.alpha_composite(background, rgba)
    return PixelEditor.from_rgba(width, height, flattened.tobytes())


def load_image_file(path: Path) -> PixelEditor:
    with Image.open(path) as image:
        image.load()
        editor = editor_from_image(image)
    logger.info(f"Loaded {path} ({editor.width}x{editor.height}, {editor.distinct_colors()} colors)")
    return editor


def load_image_bytes(data: bytes) -> PixelEditor:
    with Image.open(io.BytesIO(data)) as image:
        image.load()
        return editor_from_image(image)


def to_image(editor: PixelEditor) -> Any:
    return Image.frombytes("RGBA", (editor.width, editor.height), editor.to_rgba_bytes())


def to_png_bytes(editor: PixelEditor) -> bytes:
    """
    Encode the editor's pixels as PNG.

    Raises:
        EmptyEncodedImage: If the encoder produced no data
    """
    buffer = io.BytesIO()
    to_image(editor).save(buffer, format=DEFAULT_OUTPUT_FORMAT)
    data = buffer.getvalue()
    if not data:
        raise EmptyEncodedImage("PNG encoder returned no data")
    return data


def to_data_url(editor: PixelEditor) -> str:
    encoded = base64.b64encode(to_png_bytes(editor)).decode("ascii")
    return f"{PNG_DATA_URL_PREFIX}{encoded}"


def from_data_url(text: Optional[str]) -> Optional[PixelEditor]:
    """
    Decode a PNG data URL produced by to_data_url.

    Anything without the `data:image/png;base64,` prefix, or whose payload
    cannot be decoded as an image, is treated as absent.

    Returns:
        A PixelEditor, or None if the text is not a usable PNG data URL
    """
    if not text or not text.startswith(PNG_DATA_URL_PREFIX):
        return None

    payload = text[len(PNG_DATA_URL_PREFIX):]
    try:
        data = base64.b64decode(payload, validate=True)
        return load_image_bytes(data)
    except (binascii.Error, OSError, EmptyImage) as exc:
        logger.warning(f"Ignoring undecodable PNG data URL: {exc}")
        return None


def export_file_name(day: Optional[date] = None) -> str:
    day = day or date.today()
    return f"{EXPORT_FILE_PREFIX}{day.isoformat()}.{DEFAULT_OUTPUT_FORMAT.lower()}"


def save_png(editor: PixelEditor, output_dir: Path, name: Optional[str] = None) -> Path:
    """
    Save the editor's pixels as a PNG file.

    Args:
        editor: The PixelEditor to export
        output_dir: Existing directory to write into
        name: File name; defaults to export_file_name()

    Returns:
        Path of the written file

    Raises:
        OSError: If the directory does not exist or is not a directory
    """
    if not output_dir.exists():
        raise OSError(f"Output directory does not exist: {output_dir}")

    if not output_dir.is_dir():
        raise OSError(f"Output path is not a directory: {output_dir}")

    save_path = output_dir / (name or export_file_name())
    save_path.write_bytes(to_png_bytes(editor))
    logger.info(f"Saved {editor.width}x{editor.height} image to {save_path}")
    return save_path
