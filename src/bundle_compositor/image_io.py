"""Image decoding, encoding, canvas allocation, and font loading."""
from __future__ import annotations

import io
from typing import TYPE_CHECKING

from PIL import Image, ImageFont, UnidentifiedImageError

from bundle_compositor.config_defaults import DEFAULT_JPEG_QUALITY
from bundle_compositor.constants import (
    COLOR_CLEAR_WHITE,
    COLOR_MODE_RGB,
    COLOR_MODE_RGBA,
    OUTPUT_FORMAT,
)
from bundle_compositor.errors import CodecError, DecodeError, InvalidFontError
from bundle_compositor.logging_utils import logger

if TYPE_CHECKING:  # pragma: no cover
    from collections.abc import Iterable


def load_image(buffer: bytes) -> Image.Image:
    """
    Decode image bytes into an RGBA image.

    Args:
        buffer: Encoded image bytes in any format Pillow can read

    Returns:
        Fully loaded PIL Image in RGBA mode

    Raises:
        DecodeError: If the bytes are empty or cannot be decoded

    """
    if not buffer:
        msg = "Image buffer is empty"
        raise DecodeError(msg)
    try:
        with Image.open(io.BytesIO(buffer)) as img:
            img.load()
            return img.convert(COLOR_MODE_RGBA)
    except (
        UnidentifiedImageError,
        Image.DecompressionBombError,
        OSError,
        ValueError,
    ) as e:
        msg = f"Error decoding image: {e!s}"
        raise DecodeError(msg) from e


def load_images(buffers: Iterable[bytes]) -> list[Image.Image]:
    """Decode every buffer, failing on the first malformed one."""
    images = []
    for i, buffer in enumerate(buffers):
        try:
            images.append(load_image(buffer))
        except DecodeError as e:
            msg = f"Image no {i + 1} could not be decoded: {e!s}"
            raise DecodeError(msg) from e
    return images


def new_canvas(width: int, height: int) -> Image.Image:
    """Allocate a fully transparent white RGBA canvas."""
    logger.debug("create image buf %dx%d", width, height)
    return Image.new(COLOR_MODE_RGBA, (width, height), COLOR_CLEAR_WHITE)


def encode_jpeg(canvas: Image.Image, quality: int = DEFAULT_JPEG_QUALITY) -> bytes:
    """
    Encode a canvas as JPEG bytes.

    Alpha is dropped, so transparent white background pixels become white.

    Raises:
        CodecError: If the canvas is empty or the encoder fails

    """
    if canvas.width <= 0 or canvas.height <= 0:
        msg = f"Cannot encode an empty canvas {canvas.width}x{canvas.height}"
        raise CodecError(msg)
    out = io.BytesIO()
    try:
        canvas.convert(COLOR_MODE_RGB).save(
            out, format=OUTPUT_FORMAT, quality=quality,
        )
    except (OSError, ValueError) as e:
        msg = f"Error encoding image: {e!s}"
        raise CodecError(msg) from e
    return out.getvalue()


def load_font(font_bytes: bytes, size: float) -> ImageFont.FreeTypeFont:
    """
    Build a TrueType/OpenType font from raw bytes at the given size.

    Raises:
        InvalidFontError: If the bytes are empty or not a usable font

    """
    if not font_bytes:
        msg = "Font buffer is empty"
        raise InvalidFontError(msg)
    try:
        return ImageFont.truetype(io.BytesIO(font_bytes), size=size)
    except (OSError, ValueError) as e:
        msg = f"Error loading font: {e!s}"
        raise InvalidFontError(msg) from e
