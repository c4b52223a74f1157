"""Pick a common member size for a batch of heterogeneous images."""

from __future__ import annotations

from typing import TYPE_CHECKING

from bundle_compositor.logging_utils import logger

if TYPE_CHECKING:  # pragma: no cover
    from collections.abc import Iterable

    from PIL import Image


def infer_dimension(images: Iterable[Image.Image]) -> tuple[int, int]:
    """
    Return the (width, height) every member should be resized to.

    Prefers the most frequent size in the batch. When no two images share
    a size, the image with the largest width + height wins instead.

    Ties are order dependent: the most frequent size only changes when a
    count strictly exceeds the best so far, so among equally frequent
    sizes the first to reach that count is kept. The same holds for the
    largest-sum candidate.
    """
    counts: dict[tuple[int, int], int] = {}
    max_dimension = (0, 0)
    most_frequent = (0, 0)
    max_count = 0
    for image in images:
        size = (image.width, image.height)
        if sum(size) > sum(max_dimension):
            max_dimension = size
            logger.debug(
                "update max_dimension : width:%d, height:%d", *max_dimension,
            )
        counts[size] = counts.get(size, 0) + 1
        if counts[size] > max_count:
            most_frequent = size
            max_count = counts[size]
            logger.debug(
                "update most_frequent_dimension : width:%d, height:%d "
                "count:%d",
                *most_frequent,
                max_count,
            )

    if max_count == 1:
        logger.debug("max_count is 1 use: width:%d height:%d", *max_dimension)
        return max_dimension
    logger.debug(
        "it's a frequent dimension width:%d height:%d count: %d",
        *most_frequent,
        max_count,
    )
    return most_frequent
