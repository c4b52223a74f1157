"""
Grid utilities split into dimension inference, core layout, and overlays.

The package exposes the most commonly used entry points directly so the
composition pipelines can import from a single place.
"""

from __future__ import annotations

from . import core, dimension, overlays
from .core import (
    GridGeometry,
    grid_geometry,
    paste_grid,
    resize_images,
)
from .dimension import infer_dimension
from .overlays import (
    TextMetrics,
    draw_caption,
    draw_table,
    text_metrics,
)

__all__ = [
    "GridGeometry",
    "TextMetrics",
    "core",
    "dimension",
    "draw_caption",
    "draw_table",
    "grid_geometry",
    "infer_dimension",
    "overlays",
    "paste_grid",
    "resize_images",
    "text_metrics",
]
