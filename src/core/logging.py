"""Logging configuration for the vector and structured SVM packages.

Library modules log through ``logging.getLogger(__name__)`` and never print.
Applications call :func:`configure_logging` once to route those records to
stderr.
"""

from __future__ import annotations

import logging

__all__ = ["PROJECT_LOGGERS", "DEFAULT_FORMAT", "configure_logging", "get_logger"]

PROJECT_LOGGERS = ("core", "vectors", "ssvm")

DEFAULT_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

# Marks handlers installed by configure_logging so repeated calls replace them
_HANDLER_FLAG = "_svm_vectors_handler"


def get_logger(name: str) -> logging.Logger:
    """Return a logger for a module.

    Args:
        name: Logger name, usually ``__name__``.

    Returns:
        The standard library logger.
    """
    return logging.getLogger(name)


def configure_logging(
    level: int | str = logging.INFO,
    fmt: str = DEFAULT_FORMAT,
) -> None:
    """Attach a single stream handler to each project logger.

    Calling this more than once replaces the previously installed handler
    instead of stacking duplicates.

    Args:
        level: Logging level name or number.
        fmt: Format string for the handler.

    Raises:
        ValueError: If ``level`` is an unknown level name.
    """
    if isinstance(level, str):
        resolved = logging.getLevelName(level.upper())
        if not isinstance(resolved, int):
            raise ValueError(f"Unknown logging level: {level!r}")
        level = resolved

    formatter = logging.Formatter(fmt)
    for name in PROJECT_LOGGERS:
        logger = logging.getLogger(name)
        for handler in list(logger.handlers):
            if getattr(handler, _HANDLER_FLAG, False):
                logger.removeHandler(handler)
        handler = logging.StreamHandler()
        handler.setFormatter(formatter)
        setattr(handler, _HANDLER_FLAG, True)
        logger.addHandler(handler)
        logger.setLevel(level)
