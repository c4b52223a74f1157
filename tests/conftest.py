"""
Test configuration and shared fixtures for bundle_compositor.

This module defines reusable pytest fixtures for building encoded images
in memory, loading a real TrueType font, and making the shared logger
visible to ``caplog``.

Note:
    This file is automatically loaded by pytest and should not be
    renamed.

"""
import io
from collections.abc import Callable

import pytest
from PIL import Image, ImageFont

from bundle_compositor.constants import COLOR_MODE_RGB
from bundle_compositor.logging_utils import logger
from bundle_compositor.table import TableSpec

ImageBytesFactory = Callable[..., bytes]


def encode(img: Image.Image, fmt: str = "PNG") -> bytes:
    """Encode a PIL image to bytes in the given format."""
    out = io.BytesIO()
    img.save(out, format=fmt)
    return out.getvalue()


@pytest.fixture
def make_image_bytes() -> ImageBytesFactory:
    """Factory for solid-color encoded images of arbitrary size."""

    def _make(
        width: int,
        height: int,
        color: str | tuple[int, ...] = "red",
        fmt: str = "PNG",
    ) -> bytes:
        return encode(Image.new(COLOR_MODE_RGB, (width, height), color), fmt)

    return _make


@pytest.fixture
def sample_image() -> Image.Image:
    """Create a sample 100x100 red RGBA PIL image."""
    return Image.new("RGBA", (100, 100), color="red")


@pytest.fixture(scope="session")
def font_bytes() -> bytes:
    """
    Raw bytes of a TrueType font.

    Uses the font Pillow embeds for ``load_default``; skips when Pillow
    was built without FreeType.
    """
    font = ImageFont.load_default(size=12)
    data = getattr(font, "font_bytes", None)
    if not data:
        pytest.skip("Pillow was built without FreeType support")
    return data


@pytest.fixture
def size_table() -> TableSpec:
    """A small two-column measurement table."""
    return TableSpec.from_rows(
        ["Size", "Length"],
        [["S", "60"], ["M", "62"]],
        border=1,
    )


@pytest.fixture(autouse=True)
def enable_logger_propagation(monkeypatch: pytest.MonkeyPatch) -> None:
    """Enable propagation for the compositor logger to allow caplog to work."""
    monkeypatch.setattr(logger, "propagate", True)
