"""
Configuration schema and loader for the bundle compositor.

Defines Pydantic models for grid options, text styling, and execution,
plus a TOML-based loader for both the configuration and table files.
"""

from pathlib import Path

import tomlkit
from pydantic import BaseModel, Field, PositiveInt

from bundle_compositor.config_defaults import (
    DEFAULT_CANVAS_WIDTH,
    DEFAULT_CAPTION_MARGIN,
    DEFAULT_CELL_PADDING_X_RATIO,
    DEFAULT_CELL_PADDING_Y_RATIO,
    DEFAULT_COLUMN,
    DEFAULT_FONT_RATIO,
    DEFAULT_JPEG_QUALITY,
    DEFAULT_MAX_WORKERS,
    DEFAULT_PADDING,
    DEFAULT_PADDING_RATIO,
    DEFAULT_TABLE_BORDER,
)
from bundle_compositor.table import TableSpec


class GridOptions(BaseModel):
    """Member size, spacing, and column count of a bundle grid."""

    dimension: tuple[PositiveInt, PositiveInt] | None = None
    padding: int = Field(DEFAULT_PADDING, ge=0)
    column: int = Field(DEFAULT_COLUMN, ge=1)

    @classmethod
    def build(
        cls,
        member_dimension: tuple[int, int] | None = None,
        padding: int | None = None,
        column: int | None = None,
    ) -> "GridOptions":
        """Build options, using the defaults for anything left unset."""
        data: dict[str, object] = {"dimension": member_dimension}
        if padding is not None:
            data["padding"] = padding
        if column is not None:
            data["column"] = column
        return cls.model_validate(data)


class StyleConfig(BaseModel):
    """Control how text sizes and paddings derive from canvas width."""

    canvas_width: int = Field(DEFAULT_CANVAS_WIDTH, ge=1)
    padding_ratio: float = Field(DEFAULT_PADDING_RATIO, ge=0, lt=0.5)
    font_ratio: float = Field(DEFAULT_FONT_RATIO, gt=0)
    cell_padding_x_ratio: float = Field(DEFAULT_CELL_PADDING_X_RATIO, ge=0)
    cell_padding_y_ratio: float = Field(DEFAULT_CELL_PADDING_Y_RATIO, ge=0)
    caption_margin: int = Field(DEFAULT_CAPTION_MARGIN, ge=0)
    jpeg_quality: int = Field(DEFAULT_JPEG_QUALITY, ge=1, le=100)


class ExecutionConfig(BaseModel):
    """Size of the worker pool used for resizing."""

    max_workers: int | None = Field(DEFAULT_MAX_WORKERS, ge=1)


class CompositorConfig(BaseModel):
    """
    Root configuration object combining all supported sections.

    Mirrors the structure of config.toml, grouping related parameters
    under logical categories.
    """

    grid: GridOptions = Field(
        default_factory=lambda: GridOptions.model_validate({}),
    )
    style: StyleConfig = Field(
        default_factory=lambda: StyleConfig.model_validate({}),
    )
    execution: ExecutionConfig = Field(
        default_factory=lambda: ExecutionConfig.model_validate({}),
    )


class TableConfig(BaseModel):
    """Table contents as read from a TOML ``[table]`` section."""

    head: list[str]
    body: list[list[str]] = Field(default_factory=list)
    border: int = Field(DEFAULT_TABLE_BORDER, ge=0)

    def to_spec(self) -> TableSpec:
        """Return a validated :class:`TableSpec`."""
        return TableSpec.from_rows(self.head, self.body, self.border)


def _read_toml(path: str | Path) -> dict:
    toml_path = Path(path)
    if not toml_path.is_file():
        msg = f"Config file not found: {path}"
        raise FileNotFoundError(msg)
    with toml_path.open("r", encoding="utf-8") as f:
        return tomlkit.load(f).unwrap()


class ConfigLoader:
    """
    Loads TOML files into typed configuration objects.

    Falls back to defaults for any missing subsections or fields.
    """

    @staticmethod
    def load(path: str | Path) -> CompositorConfig:
        """Load a compositor configuration from a TOML file."""
        return CompositorConfig.model_validate(_read_toml(path))

    @staticmethod
    def load_table(path: str | Path) -> TableSpec:
        """
        Load a table from a TOML file.

        The table may live at the top level or under a ``[table]`` section.
        """
        doc = _read_toml(path)
        data = doc.get("table", doc)
        return TableConfig.model_validate(data).to_spec()
