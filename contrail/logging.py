"""Diagnostics for contrail.

The prompt itself is written to stdout, so every handler configured here
targets stderr or a file.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

_ROOT = "contrail"
_CONSOLE_FORMAT = "[contrail] %(levelname)s %(message)s"
_FILE_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def get_logger(name: str | None = None) -> logging.Logger:
    """Return ``contrail.<name>``, or the package logger when ``name`` is empty."""
    return logging.getLogger(_ROOT if not name else f"{_ROOT}.{name}")


def _attach(logger: logging.Logger, handler: logging.Handler, fmt: str) -> None:
    handler.setLevel(logger.level)
    handler.setFormatter(logging.Formatter(fmt))
    logger.addHandler(handler)


def configure_logging(
    *, verbose: bool = False, log_file: Path | None = None
) -> logging.Logger:
    """Install stderr (and optionally file) handlers on the package logger.

    Raises ``OSError`` when ``log_file`` cannot be opened; no handler is
    replaced in that case.
    """
    file_handler = (
        logging.FileHandler(log_file, encoding="utf-8") if log_file is not None else None
    )

    logger = get_logger()
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    logger.propagate = False
    # main() may run several times in one process (tests).
    for stale in list(logger.handlers):
        logger.removeHandler(stale)
        stale.close()

    _attach(logger, logging.StreamHandler(sys.stderr), _CONSOLE_FORMAT)
    if file_handler is not None:
        _attach(logger, file_handler, _FILE_FORMAT)
    return logger


__all__ = ["configure_logging", "get_logger"]
