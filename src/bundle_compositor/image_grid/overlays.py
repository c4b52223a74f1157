"""Text metrics and drawing of table and caption strips onto a canvas."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import TYPE_CHECKING

from PIL import ImageDraw

from bundle_compositor.constants import COLOR_BLACK, LINE_WIDTH_PX
from bundle_compositor.logging_utils import logger
from bundle_compositor.table import text_len

if TYPE_CHECKING:  # pragma: no cover
    from PIL import Image, ImageFont

    from bundle_compositor.config import StyleConfig
    from bundle_compositor.table import Table

_RGBA = tuple[int, int, int, int]


@dataclass(frozen=True)
class TextMetrics:
    """Paddings and font size derived from a destination canvas width."""

    padding: float
    font_size: float
    cell_padding_x: float
    cell_padding_y: float

    @property
    def strip_padding(self) -> int:
        """Padding rounded up to whole pixels for strip sizing."""
        return math.ceil(self.padding)

    def table_strip_height(self, table: Table) -> int:
        """Height of the strip reserved above a grid for ``table``."""
        return math.ceil(table.table_height()) + self.strip_padding * 2

    def caption_width(self, caption: str) -> float:
        """Pixel width of a caption including padding on both sides."""
        return text_len(caption) * self.font_size + self.padding * 2

    def caption_strip_height(self) -> int:
        """Height of the strip reserved above a grid for a caption."""
        return math.ceil(self.font_size + self.padding * 2)


def text_metrics(canvas_width: float, style: StyleConfig) -> TextMetrics:
    """
    Derive paddings and font size from ``canvas_width``.

    Padding is a fraction of the width and the font size a fraction of
    the width left after padding both sides. Cell paddings follow the
    font size.
    """
    padding = canvas_width * style.padding_ratio
    font_size = (canvas_width - padding * 2) * style.font_ratio
    logger.debug("font size is %s", font_size)
    return TextMetrics(
        padding=padding,
        font_size=font_size,
        cell_padding_x=font_size * style.cell_padding_x_ratio,
        cell_padding_y=font_size * style.cell_padding_y_ratio,
    )


def draw_table(  # noqa: PLR0913
    canvas: Image.Image,
    table: Table,
    metrics: TextMetrics,
    font: ImageFont.FreeTypeFont,
    *,
    canvas_width: float,
    line_color: _RGBA,
    text_color: _RGBA = COLOR_BLACK,
) -> None:
    """
    Draw table text and border lines onto the top of ``canvas``.

    The table is centered on ``canvas_width``, which may differ from the
    canvas width when the canvas was sized to fit the table.
    """
    draw = ImageDraw.Draw(canvas)
    for top, left, text in table.text_top_left_position(
        metrics.padding, canvas_width, metrics.cell_padding_y,
    ):
        draw.text(
            (math.ceil(left), math.ceil(top)),
            text,
            font=font,
            fill=text_color,
        )
    for start, end in table.table_line_position(metrics.padding, canvas_width):
        draw.line([start, end], fill=line_color, width=LINE_WIDTH_PX)


def draw_caption(
    canvas: Image.Image,
    caption: str,
    metrics: TextMetrics,
    font: ImageFont.FreeTypeFont,
    *,
    text_color: _RGBA = COLOR_BLACK,
) -> None:
    """Draw ``caption`` at the padded top-left corner of ``canvas``."""
    draw = ImageDraw.Draw(canvas)
    origin = (metrics.strip_padding, metrics.strip_padding)
    draw.text(origin, caption, font=font, fill=text_color)
