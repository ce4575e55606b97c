"""Logging helpers for sbom_scorecard.

All loggers live under the ``sbom_scorecard`` hierarchy so a single call to
:func:`configure_logging` controls the whole package.
"""

from __future__ import annotations

import logging
from typing import Any

_LOGGER_NAME = "sbom_scorecard"
_DEFAULT_FORMAT = "[sbom-scorecard] %(levelname)s %(message)s"


def getLogger(name: str | None = None) -> logging.Logger:
    """Return a logger under the sbom_scorecard hierarchy.

    Module names that already start with the package name are used as-is.
    """
    if not name:
        return logging.getLogger(_LOGGER_NAME)
    if name == _LOGGER_NAME or name.startswith(f"{_LOGGER_NAME}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{_LOGGER_NAME}.{name}")


def configure_logging(*, verbose: bool = False, level: str | int | None = None) -> logging.Logger:
    """Configure the package logger with a single stream handler.

    Args:
        verbose: Force DEBUG level regardless of ``level``.
        level: Level name or number to use when not verbose. Defaults to WARNING.

    Returns:
        The configured package logger.
    """
    if verbose:
        resolved = logging.DEBUG
    elif isinstance(level, str):
        resolved = logging.getLevelName(level.upper())
        if not isinstance(resolved, int):
            raise ValueError(f"Unknown log level: {level}")
    else:
        resolved = level if level is not None else logging.WARNING

    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(resolved)
    logger.propagate = False

    # Drop handlers from earlier calls so repeated CLI invocations don't duplicate output
    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    handler = logging.StreamHandler()
    handler.setLevel(resolved)
    handler.setFormatter(logging.Formatter(_DEFAULT_FORMAT))
    logger.addHandler(handler)
    return logger


def build_log_context(**context: Any) -> dict[str, Any]:
    return {key: value for key, value in context.items() if value is not None}


def log_event(
    logger: logging.Logger,
    level: int,
    event: str,
    **context: Any,
) -> None:
    safe_context = build_log_context(**context)
    suffix = " ".join(f"{key}={value}" for key, value in safe_context.items())
    message = f"{event} {suffix}".strip()
    logger.log(level, message, extra={"context": safe_context})


def log_debug(logger: logging.Logger, event: str, **context: Any) -> None:
    log_event(logger, logging.DEBUG, event, **context)


def log_info(logger: logging.Logger, event: str, **context: Any) -> None:
    log_event(logger, logging.INFO, event, **context)


def log_warning(logger: logging.Logger, event: str, **context: Any) -> None:
    log_event(logger, logging.WARNING, event, **context)


__all__ = [
    "build_log_context",
    "configure_logging",
    "getLogger",
    "log_debug",
    "log_event",
    "log_info",
    "log_warning",
]
