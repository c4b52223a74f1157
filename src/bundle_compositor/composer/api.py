"""
Composition pipelines that turn raw image bytes into one bundled JPEG.

Every entry point shares one skeleton: decode, pick a member size, resize
in parallel, size the canvas (reserving a strip above the grid for a table
or caption when requested), compose the grid, draw the overlay, and encode.
All validation that can fail happens before anything is drawn, so a failing
call never produces partial output.
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

from bundle_compositor.config import CompositorConfig, GridOptions, StyleConfig
from bundle_compositor.constants import COLOR_BLACK, COLOR_GRAY
from bundle_compositor.errors import (
    EmptyBundleError,
    InvalidTableError,
    InvalidTextError,
)
from bundle_compositor.image_grid import (
    GridGeometry,
    TextMetrics,
    draw_caption,
    draw_table,
    grid_geometry,
    infer_dimension,
    paste_grid,
    resize_images,
    text_metrics,
)
from bundle_compositor.image_io import (
    encode_jpeg,
    load_font,
    load_image,
    load_images,
    new_canvas,
)
from bundle_compositor.logging_utils import logger

if TYPE_CHECKING:  # pragma: no cover
    from collections.abc import Sequence

    from PIL import Image

    from bundle_compositor.table import Table, TableSpec


def _resolve_config(
    options: GridOptions | None,
    config: CompositorConfig | None,
) -> tuple[GridOptions, CompositorConfig]:
    cfg = config or CompositorConfig.model_validate({})
    return options or cfg.grid, cfg


def _prepare_members(
    buffers: Sequence[bytes],
    options: GridOptions,
    config: CompositorConfig,
) -> tuple[list[Image.Image], GridGeometry]:
    """Decode, size, and resize the members of a bundle."""
    logger.debug("process %d images into 1", len(buffers))
    if not buffers:
        msg = "at least one image is required to build a bundle"
        raise EmptyBundleError(msg)
    images = load_images(buffers)
    member_size = options.dimension or infer_dimension(images)
    resized = resize_images(
        images, member_size, max_workers=config.execution.max_workers,
    )
    geometry = grid_geometry(
        len(resized), member_size, options.padding, options.column,
    )
    return resized, geometry


def build_table(
    table: TableSpec,
    canvas_width: float,
    style: StyleConfig | None = None,
) -> tuple[Table, TextMetrics]:
    """
    Size ``table`` for a destination canvas ``canvas_width`` pixels wide.

    Returns the table geometry together with the text metrics used to build
    it, so callers can size strips and place text consistently.
    """
    style = style or StyleConfig.model_validate({})
    metrics = text_metrics(canvas_width, style)
    sized = table.build(
        metrics.cell_padding_x, metrics.cell_padding_y, metrics.font_size,
    )
    logger.debug(
        "table width is %s, table height is %s",
        sized.table_width(),
        sized.table_height(),
    )
    return sized, metrics


def compose_grid(
    buffers: Sequence[bytes],
    options: GridOptions | None = None,
    *,
    config: CompositorConfig | None = None,
) -> bytes:
    """Compose images into a grid and return it as JPEG bytes."""
    options, cfg = _resolve_config(options, config)
    images, geometry = _prepare_members(buffers, options, cfg)
    canvas = new_canvas(*geometry.size())
    paste_grid(canvas, images, geometry)
    return encode_jpeg(canvas, cfg.style.jpeg_quality)


def compose_grid_with_table(
    buffers: Sequence[bytes],
    table: TableSpec,
    font_bytes: bytes,
    options: GridOptions | None = None,
    *,
    config: CompositorConfig | None = None,
) -> bytes:
    """
    Compose a grid with a measurement table drawn in a strip above it.

    Raises:
        InvalidTableError: If the padded table is wider than the grid

    """
    options, cfg = _resolve_config(options, config)
    images, geometry = _prepare_members(buffers, options, cfg)
    canvas_width = geometry.width
    sized, metrics = build_table(table, canvas_width, cfg.style)

    table_canvas_width = math.ceil(sized.table_width() + metrics.padding * 2)
    if table_canvas_width > canvas_width:
        logger.debug("table would be wider than the bundle, return error")
        msg = (
            f"table size over, table width is {table_canvas_width}, "
            f"canvas width is {canvas_width}"
        )
        raise InvalidTableError(msg)
    font = load_font(font_bytes, metrics.font_size)

    strip_height = metrics.table_strip_height(sized)
    canvas = new_canvas(canvas_width, geometry.height + strip_height)
    paste_grid(canvas, images, geometry, y_offset=strip_height)
    draw_table(
        canvas, sized, metrics, font,
        canvas_width=canvas_width, line_color=COLOR_GRAY,
    )
    return encode_jpeg(canvas, cfg.style.jpeg_quality)


def compose_grid_with_caption(
    buffers: Sequence[bytes],
    caption: str,
    font_bytes: bytes,
    options: GridOptions | None = None,
    *,
    config: CompositorConfig | None = None,
) -> bytes:
    """
    Compose a grid with a caption drawn in a strip above it.

    Raises:
        InvalidTextError: If the padded caption is wider than the grid

    """
    options, cfg = _resolve_config(options, config)
    images, geometry = _prepare_members(buffers, options, cfg)
    canvas_width = geometry.width
    metrics = text_metrics(canvas_width, cfg.style)

    text_canvas_width = math.ceil(metrics.caption_width(caption))
    if text_canvas_width > canvas_width:
        msg = (
            "text canvas width is bigger than image canvas "
            f"text:{text_canvas_width},image:{canvas_width}"
        )
        raise InvalidTextError(msg)
    font = load_font(font_bytes, metrics.font_size)

    strip_height = metrics.caption_strip_height()
    canvas = new_canvas(canvas_width, geometry.height + strip_height)
    paste_grid(canvas, images, geometry, y_offset=strip_height)
    draw_caption(canvas, caption, metrics, font)
    return encode_jpeg(canvas, cfg.style.jpeg_quality)


def render_table(
    table: TableSpec,
    font_bytes: bytes,
    *,
    config: CompositorConfig | None = None,
) -> bytes:
    """
    Render a table on its own canvas.

    Text sizes derive from the configured canvas width; the canvas itself
    is sized to the table plus padding.
    """
    cfg = config or CompositorConfig.model_validate({})
    sized, metrics = build_table(table, cfg.style.canvas_width, cfg.style)
    canvas_width = math.ceil(sized.table_width() + metrics.padding * 2)
    font = load_font(font_bytes, metrics.font_size)

    canvas = new_canvas(canvas_width, metrics.table_strip_height(sized))
    draw_table(
        canvas, sized, metrics, font,
        canvas_width=canvas_width, line_color=COLOR_BLACK,
    )
    return encode_jpeg(canvas, cfg.style.jpeg_quality)


def render_caption(
    caption: str,
    font_bytes: bytes,
    *,
    config: CompositorConfig | None = None,
) -> bytes:
    """
    Render a caption on its own canvas.

    The canvas keeps the configured width unless the caption overflows it,
    in which case it grows to the caption width plus a fixed margin.
    """
    cfg = config or CompositorConfig.model_validate({})
    canvas_width = cfg.style.canvas_width
    metrics = text_metrics(canvas_width, cfg.style)
    text_canvas_width = math.ceil(metrics.caption_width(caption))
    if text_canvas_width > canvas_width:
        canvas_width = text_canvas_width + cfg.style.caption_margin
        logger.debug("caption overflows, widen canvas to %d", canvas_width)
    font = load_font(font_bytes, metrics.font_size)

    canvas = new_canvas(canvas_width, metrics.caption_strip_height())
    draw_caption(canvas, caption, metrics, font)
    return encode_jpeg(canvas, cfg.style.jpeg_quality)


def append_table_above(
    buffer: bytes,
    table: TableSpec,
    font_bytes: bytes,
    *,
    config: CompositorConfig | None = None,
) -> bytes:
    """
    Add a table strip above an existing image.

    Raises:
        InvalidTableError: If the table is wider than the image

    """
    cfg = config or CompositorConfig.model_validate({})
    origin = load_image(buffer)
    sized, metrics = build_table(table, origin.width, cfg.style)
    if sized.table_width() > origin.width:
        logger.debug("table would be wider than the image, return error")
        msg = (
            f"table size over, table width is {sized.table_width()}, "
            f"canvas width is {origin.width}"
        )
        raise InvalidTableError(msg)
    font = load_font(font_bytes, metrics.font_size)

    strip_height = metrics.table_strip_height(sized)
    canvas = new_canvas(origin.width, origin.height + strip_height)
    logger.debug(
        "full canvas size is width:%d height:%d", *canvas.size,
    )
    draw_table(
        canvas, sized, metrics, font,
        canvas_width=origin.width, line_color=COLOR_BLACK,
    )
    canvas.paste(origin, (0, strip_height))
    return encode_jpeg(canvas, cfg.style.jpeg_quality)


__all__ = [
    "append_table_above",
    "build_table",
    "compose_grid",
    "compose_grid_with_caption",
    "compose_grid_with_table",
    "render_caption",
    "render_table",
]
