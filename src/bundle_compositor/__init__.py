"""Public package exports for the bundle compositor."""

from __future__ import annotations

from importlib import metadata as _metadata

try:
    __version__ = _metadata.version("bundle-compositor")
except _metadata.PackageNotFoundError:  # running from a source checkout
    __version__ = "0.0.0"

from .composer import (
    append_table_above,
    build_table,
    compose_grid,
    compose_grid_with_caption,
    compose_grid_with_table,
    render_caption,
    render_table,
)
from .config import CompositorConfig, GridOptions, StyleConfig
from .errors import (
    CodecError,
    ConcurrencyError,
    DecodeError,
    EmptyBundleError,
    InvalidFontError,
    InvalidTableError,
    InvalidTextError,
    ProcessorError,
)
from .table import Table, TableCell, TableSpec

__all__ = [
    "CodecError",
    "CompositorConfig",
    "ConcurrencyError",
    "DecodeError",
    "EmptyBundleError",
    "GridOptions",
    "InvalidFontError",
    "InvalidTableError",
    "InvalidTextError",
    "ProcessorError",
    "StyleConfig",
    "Table",
    "TableCell",
    "TableSpec",
    "__version__",
    "append_table_above",
    "build_table",
    "compose_grid",
    "compose_grid_with_caption",
    "compose_grid_with_table",
    "render_caption",
    "render_table",
]
