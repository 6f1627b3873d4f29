"""Logging for the ``cashflow_trends`` package.

Library modules only call ``get_logger(__name__)``; output is switched on by
the entrypoint (the CLI root callback) through ``configure_logging``. Until
then the package logger holds a ``NullHandler`` and stays silent.

The level comes from the explicit argument, then ``CASHFLOW_TRENDS_LOG_LEVEL``,
then ``INFO``.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import IO

LOG_LEVEL_ENV = "CASHFLOW_TRENDS_LOG_LEVEL"

_PKG_LOGGER_NAME = "cashflow_trends"
_CONSOLE_HANDLER_NAME = "cashflow_trends.console"
_DEFAULT_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"


def resolve_level(level: int | str | None = None) -> int:
    """Turn a level, level name or numeric string into a logging level.

    ``None`` defers to the environment. Unknown names resolve to ``INFO``.
    """

    if level is None:
        level = os.getenv(LOG_LEVEL_ENV) or logging.INFO
    if isinstance(level, int):
        return level
    name = level.strip().upper()
    if name.isdigit():
        return int(name)
    return logging.getLevelNamesMapping().get(name, logging.INFO)


def _console_handler(logger: logging.Logger) -> logging.Handler | None:
    for h in logger.handlers:
        if h.get_name() == _CONSOLE_HANDLER_NAME:
            return h
    return None


def configure_logging(
    level: int | str | None = None,
    *,
    fmt: str | None = None,
    stream: IO[str] | None = None,
) -> None:
    """Attach the package console handler; later calls are no-ops.

    ``stream`` defaults to ``sys.stderr`` so stdout carries only report lines.
    """

    pkg = logging.getLogger(_PKG_LOGGER_NAME)
    if _console_handler(pkg) is not None:
        return

    for h in [h for h in pkg.handlers if isinstance(h, logging.NullHandler)]:
        pkg.removeHandler(h)

    resolved = resolve_level(level)
    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.set_name(_CONSOLE_HANDLER_NAME)
    handler.setLevel(resolved)
    handler.setFormatter(logging.Formatter(fmt or _DEFAULT_FORMAT))

    pkg.addHandler(handler)
    pkg.setLevel(resolved)
    pkg.propagate = False


def reset_logging() -> None:
    """Detach every package handler and restore propagation (used by tests)."""

    pkg = logging.getLogger(_PKG_LOGGER_NAME)
    for h in list(pkg.handlers):
        pkg.removeHandler(h)
    pkg.setLevel(logging.NOTSET)
    pkg.propagate = True


def get_logger(name: str) -> logging.Logger:
    pkg = logging.getLogger(_PKG_LOGGER_NAME)
    if not pkg.handlers:
        pkg.addHandler(logging.NullHandler())
    return logging.getLogger(name)


__all__ = ["LOG_LEVEL_ENV", "configure_logging", "get_logger", "reset_logging", "resolve_level"]
