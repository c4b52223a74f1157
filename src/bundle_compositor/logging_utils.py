"""
Shared logger for the bundle compositor.

Every module logs through ``logger`` so that layout, resize, and drawing
steps all land on one handler. The command-line front end switches the
level with :func:`set_verbosity`.
"""

import logging

LOGGER_NAME = "bundle_compositor"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(message)s"


def setup_logger(
        name: str = LOGGER_NAME,
        level: int = logging.INFO,
        formatter: logging.Formatter | None = None,
        handler: logging.Handler | None = None,
) -> logging.Logger:
    """
    Return the logger called ``name`` with a single handler attached.

    The handler is installed on the first call only, so repeated calls
    from different modules never duplicate output. Propagation to the
    root logger is turned off once the handler is in place.

    Args:
        name: Logger name.
        level: Logging level applied on every call.
        formatter: Formatter for a newly installed handler.
        handler: Handler to install instead of a ``StreamHandler``.

    Returns:
        The configured logger.

    """
    instance = logging.getLogger(name)
    instance.setLevel(level)
    if instance.handlers:
        return instance
    if handler is None:
        handler = logging.StreamHandler()
    handler.setFormatter(formatter or logging.Formatter(LOG_FORMAT))
    instance.addHandler(handler)
    instance.propagate = False
    return instance


def set_verbosity(
        verbose: bool,  # noqa: FBT001
        target: logging.Logger | None = None,
) -> int:
    """Switch ``target`` (the shared logger by default) to DEBUG or INFO."""
    level = logging.DEBUG if verbose else logging.INFO
    (target or logger).setLevel(level)
    return level


logger = setup_logger()
