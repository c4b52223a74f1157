"""
Exception hierarchy raised by the composition pipelines.

Every failure surfaced to callers derives from :class:`ProcessorError`, so
a single ``except ProcessorError`` covers codec, concurrency, table, text,
and font problems. No pipeline returns partial output.
"""

from __future__ import annotations


class ProcessorError(Exception):
    """Base class for all bundle compositor failures."""


class CodecError(ProcessorError):
    """Encoding failed or an image could not be copied onto the canvas."""


class DecodeError(CodecError):
    """Image bytes could not be decoded."""


class ConcurrencyError(ProcessorError):
    """A worker task failed before its phase could complete."""


class InvalidTableError(ProcessorError):
    """Table is malformed or does not fit its destination canvas."""


class InvalidTextError(ProcessorError):
    """Caption does not fit its destination canvas."""


class InvalidFontError(ProcessorError):
    """Font bytes are missing or cannot be parsed."""


class EmptyBundleError(ProcessorError):
    """A bundle was requested without any member images."""


__all__ = [
    "CodecError",
    "ConcurrencyError",
    "DecodeError",
    "EmptyBundleError",
    "InvalidFontError",
    "InvalidTableError",
    "InvalidTextError",
    "ProcessorError",
]
