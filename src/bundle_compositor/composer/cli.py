"""Command-line entry point for bundle, table, and caption rendering."""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import TYPE_CHECKING

from pydantic import ValidationError

from bundle_compositor import __version__
from bundle_compositor.composer.api import (
    append_table_above,
    compose_grid,
    compose_grid_with_caption,
    compose_grid_with_table,
    render_caption,
    render_table,
)
from bundle_compositor.config import (
    CompositorConfig,
    ConfigLoader,
    ExecutionConfig,
    GridOptions,
)
from bundle_compositor.errors import ProcessorError
from bundle_compositor.logging_utils import logger, set_verbosity

if TYPE_CHECKING:  # pragma: no cover
    from collections.abc import Callable, Sequence

_SIZE_PARTS = 2

_BUNDLE_COMMANDS = ("grid", "grid-table", "grid-caption")
_TABLE_COMMANDS = ("grid-table", "table", "append")
_CAPTION_COMMANDS = ("grid-caption", "caption")
_FONT_COMMANDS = _TABLE_COMMANDS + _CAPTION_COMMANDS


def positive_int(text: str) -> int:
    """Argparse-style validator that enforces a strictly positive integer."""
    try:
        value = int(text)
    except ValueError as exc:
        msg = "must be an integer"
        raise ValueError(msg) from exc
    if value <= 0:
        msg = "must be positive"
        raise ValueError(msg)
    return value


def non_negative_int(text: str) -> int:
    """Argparse-style validator that accepts zero and positive integers."""
    try:
        value = int(text)
    except ValueError as exc:
        msg = "must be an integer"
        raise ValueError(msg) from exc
    if value < 0:
        msg = "must not be negative"
        raise ValueError(msg)
    return value


def size_2d(text: str) -> tuple[int, int]:
    """Parse ``WxH`` strings into integer tuples and validate positivity."""
    parts = text.lower().split("x")
    if len(parts) != _SIZE_PARTS:
        msg = "must look like WxH, e.g., 800x1200"
        raise ValueError(msg)
    try:
        width, height = int(parts[0]), int(parts[1])
    except ValueError as exc:
        msg = "width and height must be integers"
        raise ValueError(msg) from exc
    if width <= 0 or height <= 0:
        msg = "width and height must be positive"
        raise ValueError(msg)
    return width, height


def _wrap_validator[T](
    validator: Callable[[str], T],
) -> Callable[[str], T]:
    """Convert ``ValueError`` from a validator into ``ArgumentTypeError``."""

    def wrapper(text: str) -> T:
        try:
            return validator(text)
        except ValueError as exc:
            raise argparse.ArgumentTypeError(str(exc)) from exc

    return wrapper


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--out", required=True, type=Path,
                        help="Where to write the JPEG output.")
    parser.add_argument("--config", type=Path, default=None,
                        help="TOML file with grid, style, and execution "
                             "sections.")
    parser.add_argument("--workers", type=_wrap_validator(positive_int),
                        default=None, help="Size of the resize worker pool.")
    parser.add_argument("--verbose", action="store_true",
                        help="Enable debug logging.")


def _add_grid_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("images", nargs="+", type=Path,
                        help="Member images, in grid order.")
    parser.add_argument("--columns", type=_wrap_validator(positive_int),
                        default=None, help="Number of grid columns.")
    parser.add_argument("--padding", type=_wrap_validator(non_negative_int),
                        default=None, help="Pixels added after each member.")
    parser.add_argument(
        "--member-size",
        type=_wrap_validator(size_2d),
        default=None,
        help="Exact WxH for every member. Inferred when omitted.",
    )


def build_parser() -> argparse.ArgumentParser:
    """Build the command-line parser with one subcommand per pipeline."""
    parser = argparse.ArgumentParser(
        prog="bundle-compositor",
        description=(
            "Compose product photographs into a bundled grid image, "
            "optionally with a measurement table or caption."
        ),
    )
    parser.add_argument("--version", action="version",
                        version=f"%(prog)s {__version__}")
    sub = parser.add_subparsers(dest="command", required=True)

    helps = {
        "grid": "Compose images into a grid.",
        "grid-table": "Compose a grid with a table above it.",
        "grid-caption": "Compose a grid with a caption above it.",
        "table": "Render a table on its own.",
        "caption": "Render a caption on its own.",
        "append": "Add a table above an existing image.",
    }
    for name, help_text in helps.items():
        cmd = sub.add_parser(name, help=help_text)
        if name in _BUNDLE_COMMANDS:
            _add_grid_arguments(cmd)
        if name == "append":
            cmd.add_argument("image", type=Path, help="Image to extend.")
        if name in _TABLE_COMMANDS:
            cmd.add_argument("--table", required=True, type=Path,
                             help="TOML file with head, body, and border.")
        if name in _CAPTION_COMMANDS:
            cmd.add_argument("--caption", required=True, type=str)
        if name in _FONT_COMMANDS:
            cmd.add_argument("--font", required=True, type=Path,
                             help="TrueType or OpenType font file.")
        _add_common_arguments(cmd)
    return parser


def _build_config(args: argparse.Namespace) -> CompositorConfig:
    """Merge the optional config file with command-line overrides."""
    cfg = (
        ConfigLoader.load(args.config)
        if args.config is not None
        else CompositorConfig.model_validate({})
    )
    grid_updates = {
        key: value
        for key, value in (
            ("dimension", getattr(args, "member_size", None)),
            ("padding", getattr(args, "padding", None)),
            ("column", getattr(args, "columns", None)),
        )
        if value is not None
    }
    updates: dict[str, object] = {}
    if grid_updates:
        updates["grid"] = GridOptions.model_validate(
            cfg.grid.model_dump() | grid_updates,
        )
    if args.workers is not None:
        updates["execution"] = ExecutionConfig(max_workers=args.workers)
    return cfg.model_copy(update=updates) if updates else cfg


def _run(args: argparse.Namespace, cfg: CompositorConfig) -> bytes:
    """Dispatch to the pipeline selected by ``args.command``."""
    command = args.command
    font = args.font.read_bytes() if command in _FONT_COMMANDS else b""
    table = (
        ConfigLoader.load_table(args.table)
        if command in _TABLE_COMMANDS
        else None
    )
    if command in _BUNDLE_COMMANDS:
        buffers = [path.read_bytes() for path in args.images]
        if command == "grid-table":
            return compose_grid_with_table(buffers, table, font, config=cfg)
        if command == "grid-caption":
            return compose_grid_with_caption(
                buffers, args.caption, font, config=cfg,
            )
        return compose_grid(buffers, config=cfg)
    if command == "table":
        return render_table(table, font, config=cfg)
    if command == "caption":
        return render_caption(args.caption, font, config=cfg)
    return append_table_above(
        args.image.read_bytes(), table, font, config=cfg,
    )


def main(argv: Sequence[str] | None = None) -> int:
    """Parse command-line arguments and write the rendered image."""
    parser = build_parser()
    args = parser.parse_args(argv)
    set_verbosity(args.verbose)

    try:
        cfg = _build_config(args)
        data = _run(args, cfg)
    except (FileNotFoundError, ProcessorError, ValidationError) as exc:
        parser.error(str(exc))

    args.out.parent.mkdir(parents=True, exist_ok=True)
    args.out.write_bytes(data)
    logger.info("Image saved to: %s", args.out)
    return 0


__all__ = [
    "build_parser",
    "main",
    "non_negative_int",
    "positive_int",
    "size_2d",
]
