"""
Table layout engine for measurement tables drawn above a bundle.

A :class:`TableSpec` holds the raw head and body strings. Building it with
cell paddings and a font size yields a :class:`Table` whose cells all carry
pixel sizes, plus helpers that turn the geometry into text anchors and the
single-pixel line segments used to draw borders.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from bundle_compositor.constants import ASCII_CHAR_UNITS, WIDE_CHAR_UNITS
from bundle_compositor.errors import InvalidTableError
from bundle_compositor.logging_utils import logger

if TYPE_CHECKING:  # pragma: no cover
    from collections.abc import Iterable, Sequence

Point = tuple[float, float]
Segment = tuple[Point, Point]
TextAnchor = tuple[float, float, str]


def text_len(text: str) -> int:
    """
    Return the width of ``text`` in font-size units.

    ASCII characters count as half a unit and every other character as a
    full unit. The sum is truncated to an integer.
    """
    units = sum(
        ASCII_CHAR_UNITS if char.isascii() else WIDE_CHAR_UNITS
        for char in text
    )
    return int(units)


@dataclass(frozen=True)
class TableCell:
    """One sized table entry."""

    width: float
    height: float
    text: str
    text_len: float

    @classmethod
    def sized(
        cls,
        width: float,
        height: float,
        text: str,
        font_size: float,
    ) -> TableCell:
        """Build a cell, deriving the text pixel length from font size."""
        return cls(width, height, text, text_len(text) * font_size)


def _reject_bare_strings(head: object, body: Iterable[object]) -> None:
    """Refuse a plain string where a sequence of labels is expected."""
    if isinstance(head, str):
        msg = f"table head must be a sequence of labels, got {head!r}"
        raise InvalidTableError(msg)
    if isinstance(body, str):
        msg = f"table body must be a sequence of rows, got {body!r}"
        raise InvalidTableError(msg)
    for row in body:
        if isinstance(row, str):
            msg = f"table body row must be a sequence of cells, got {row!r}"
            raise InvalidTableError(msg)


@dataclass(frozen=True)
class TableSpec:
    """Head labels, body rows, and border thickness of a table."""

    head: tuple[str, ...]
    body: tuple[tuple[str, ...], ...]
    border: int = 1

    def __post_init__(self) -> None:
        rows = self.body if isinstance(self.body, str) else list(self.body)
        _reject_bare_strings(self.head, rows)
        head = tuple(self.head)
        body = tuple(tuple(row) for row in rows)
        if not head:
            msg = "table head must have at least one column"
            raise InvalidTableError(msg)
        if not isinstance(self.border, int) or isinstance(self.border, bool):
            msg = f"table border must be an integer, got {self.border!r}"
            raise InvalidTableError(msg)
        if self.border < 0:
            msg = f"table border must be non-negative, got {self.border}"
            raise InvalidTableError(msg)
        for row in body:
            if len(row) != len(head):
                logger.debug("body column is not equal to head column")
                msg = (
                    "body column is not equal to head column "
                    f"head:{len(head)},body:{len(row)}"
                )
                raise InvalidTableError(msg)
        object.__setattr__(self, "head", head)
        object.__setattr__(self, "body", body)

    @classmethod
    def from_rows(
        cls,
        head: Iterable[str],
        body: Iterable[Iterable[str]],
        border: int = 1,
    ) -> TableSpec:
        """Build from any iterables of strings."""
        rows = list(body)
        _reject_bare_strings(head, rows)
        return cls(
            tuple(head),
            tuple(tuple(row) for row in rows),
            border,
        )

    def build(
        self,
        cell_padding_x: float,
        cell_padding_y: float,
        font_size: float,
    ) -> Table:
        """
        Size every cell for the given paddings and font size.

        Each column is as wide as its longest entry plus horizontal padding
        and border. All rows share one height.
        """
        cell_height = cell_padding_y * 2 + font_size + self.border
        head: list[TableCell] = []
        for i, label in enumerate(self.head):
            longest = max(
                [text_len(label)] + [text_len(row[i]) for row in self.body],
            )
            width = cell_padding_x * 2 + self.border + font_size * longest
            head.append(TableCell.sized(width, cell_height, label, font_size))

        body = [
            [
                TableCell.sized(head[j].width, cell_height, text, font_size)
                for j, text in enumerate(row)
            ]
            for row in self.body
        ]
        return Table(
            tuple(head),
            tuple(tuple(row) for row in body),
            self.border,
        )


@dataclass(frozen=True)
class Table:
    """Sized table geometry; placement is computed per destination canvas."""

    head: tuple[TableCell, ...]
    body: tuple[tuple[TableCell, ...], ...]
    border: int

    @property
    def row_height(self) -> float:
        """Height shared by the head row and every body row."""
        return self.head[0].height

    def table_width(self) -> float:
        """Sum of column widths plus one border."""
        return self.border + sum(cell.width for cell in self.head)

    def table_height(self) -> float:
        """Head row plus every body row plus one border."""
        return self.row_height + self.border + sum(
            row[0].height for row in self.body
        )

    def _left_edge(self, canvas_width: float) -> float:
        return canvas_width * 0.5 - self.table_width() * 0.5

    def _row_anchors(
        self,
        cells: Sequence[TableCell],
        text_top: float,
        left_edge: float,
    ) -> list[TextAnchor]:
        anchors: list[TextAnchor] = []
        cell_x = left_edge
        for cell in cells:
            left = cell_x + cell.width * 0.5 - cell.text_len * 0.5
            anchors.append((text_top, left, cell.text))
            cell_x += cell.width
        return anchors

    def text_top_left_position(
        self,
        padding: float,
        canvas_width: float,
        cell_padding_y: float,
    ) -> list[TextAnchor]:
        """
        Return ``(top, left, text)`` for every cell, head row first.

        The table is centered horizontally on ``canvas_width`` and each text
        is centered inside its cell. The vertical origin sits a fixed offset
        below the top of its row.
        """
        left_edge = self._left_edge(canvas_width)
        text_offset = cell_padding_y + self.border
        anchors = self._row_anchors(
            self.head, padding + text_offset, left_edge,
        )
        for i, row in enumerate(self.body):
            row_top = padding + row[0].height + i * row[0].height
            anchors.extend(
                self._row_anchors(row, row_top + text_offset, left_edge),
            )
        return anchors

    def table_line_position(
        self,
        padding: float,
        canvas_width: float,
    ) -> list[Segment]:
        """
        Return the single-pixel segments that draw the table borders.

        A border ``N`` pixels thick is drawn as ``N`` parallel lines, each
        shifted by one more pixel.
        """
        segments: list[Segment] = []
        start_x = self._left_edge(canvas_width)
        end_x = (self.border - 1) + canvas_width * 0.5 + self.table_width() * 0.5
        height = self.table_height()

        # top and bottom edges
        for shift in range(self.border):
            top_y = shift + padding
            bottom_y = shift + padding + height
            segments.append(((start_x, top_y), (end_x, top_y)))
            segments.append(((start_x, bottom_y), (end_x, bottom_y)))

        # left edge of every column
        column_top = padding
        column_bottom = (self.border - 1) + padding + height
        for shift in range(self.border):
            column_x = shift + start_x
            for cell in self.head:
                segments.append(
                    ((column_x, column_top), (column_x, column_bottom)),
                )
                column_x += cell.width

        # separator below the head row and every body row but the last
        for shift in range(self.border):
            for i, row in enumerate(self.body):
                row_y = shift + column_top + (i + 1) * row[0].height
                segments.append(((start_x, row_y), (end_x, row_y)))

        # right edge
        for shift in range(self.border):
            right_x = shift + end_x
            segments.append(((right_x, column_top), (right_x, column_bottom)))
        return segments


__all__ = [
    "Segment",
    "Table",
    "TableCell",
    "TableSpec",
    "TextAnchor",
    "text_len",
]
