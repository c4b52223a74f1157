"""Public composition pipeline re-exports."""

from __future__ import annotations

from .api import (
    append_table_above,
    build_table,
    compose_grid,
    compose_grid_with_caption,
    compose_grid_with_table,
    render_caption,
    render_table,
)

__all__ = [
    "append_table_above",
    "build_table",
    "compose_grid",
    "compose_grid_with_caption",
    "compose_grid_with_table",
    "render_caption",
    "render_table",
]
