"""Core primitives for sizing, resizing, and composing a bundle grid."""

from __future__ import annotations

import math
from concurrent.futures import ThreadPoolExecutor, wait
from dataclasses import dataclass
from typing import TYPE_CHECKING

from PIL import Image

from bundle_compositor.errors import CodecError, ConcurrencyError
from bundle_compositor.logging_utils import logger

if TYPE_CHECKING:  # pragma: no cover
    from collections.abc import Sequence


@dataclass(frozen=True)
class GridGeometry:
    """Cell and canvas sizes for ``count`` members laid out in columns."""

    count: int
    member_width: int
    member_height: int
    padding: int
    columns: int

    @property
    def rows(self) -> int:
        """Number of grid rows, the last one possibly partial."""
        return math.ceil(self.count / self.columns)

    @property
    def cell_width(self) -> int:
        """Member width plus padding."""
        return self.member_width + self.padding

    @property
    def cell_height(self) -> int:
        """Member height plus padding."""
        return self.member_height + self.padding

    @property
    def width(self) -> int:
        """Width of the grid area on the canvas."""
        return self.columns * self.cell_width

    @property
    def height(self) -> int:
        """Height of the grid area on the canvas."""
        return self.rows * self.cell_height

    def size(self) -> tuple[int, int]:
        """Return (width, height) of the grid area."""
        return self.width, self.height

    def cell_origin(
        self,
        index: int,
        image_height: int,
        y_offset: int = 0,
    ) -> tuple[int, int]:
        """
        Return the paste position of member ``index``.

        Members shorter than the nominal height are centered vertically in
        their cell; taller ones are pasted at the cell top.
        """
        column = index % self.columns
        row = index // self.columns
        shift = 0
        if image_height <= self.member_height:
            shift = (self.member_height - image_height) // 2
        return (
            column * self.cell_width,
            row * self.cell_height + shift + y_offset,
        )


def grid_geometry(
    count: int,
    member_size: tuple[int, int],
    padding: int,
    columns: int,
) -> GridGeometry:
    """Compute the grid layout for ``count`` members of ``member_size``."""
    if columns < 1:
        msg = f"column count must be at least 1, got {columns}"
        raise ValueError(msg)
    geometry = GridGeometry(
        count=count,
        member_width=member_size[0],
        member_height=member_size[1],
        padding=padding,
        columns=columns,
    )
    logger.debug(
        "grid %d rows x %d columns, canvas %dx%d",
        geometry.rows,
        geometry.columns,
        *geometry.size(),
    )
    return geometry


def _resize_one(
    index: int,
    image: Image.Image,
    target_size: tuple[int, int],
) -> Image.Image:
    """Resize to the exact target size unless the height already matches."""
    if image.height == target_size[1]:
        return image
    logger.debug("resize image no %d", index + 1)
    return image.resize(target_size, Image.Resampling.LANCZOS)


def resize_images(
    images: Sequence[Image.Image],
    target_size: tuple[int, int],
    *,
    max_workers: int | None = None,
) -> list[Image.Image]:
    """
    Resize every image in parallel and return them in input order.

    Only the height is compared against the target, so an image whose
    height already matches keeps its own width. Aspect ratio is not kept.

    Raises:
        ConcurrencyError: If any resize task fails; raised only after all
            tasks have finished

    """
    with ThreadPoolExecutor(max_workers=max_workers) as ex:
        futures = [
            ex.submit(_resize_one, i, image, target_size)
            for i, image in enumerate(images)
        ]
        wait(futures)

    resized = []
    for i, future in enumerate(futures):
        exc = future.exception()
        if exc is not None:
            msg = f"resize task for image no {i + 1} failed: {exc!s}"
            raise ConcurrencyError(msg) from exc
        resized.append(future.result())
    return resized


def paste_grid(
    canvas: Image.Image,
    images: Sequence[Image.Image],
    geometry: GridGeometry,
    *,
    y_offset: int = 0,
) -> Image.Image:
    """
    Copy every member into its grid cell on ``canvas``.

    Cells never overlap, so members are written one after another in
    index order. ``y_offset`` shifts the whole grid down to leave room for
    a table or caption strip.

    Raises:
        CodecError: If a member does not fit inside the canvas

    """
    for i, image in enumerate(images):
        x, y = geometry.cell_origin(i, image.height, y_offset)
        if x + image.width > canvas.width or y + image.height > canvas.height:
            msg = (
                f"image no {i + 1} ({image.width}x{image.height}) at "
                f"({x}, {y}) exceeds canvas {canvas.width}x{canvas.height}"
            )
            raise CodecError(msg)
        logger.debug("write image no %d", i)
        canvas.paste(image, (x, y))
    return canvas
