"""
Logging setup for the ``diamondviz`` CLI and scripts.

Console output goes to stderr so scene JSON, CSV listings and quiz text
printed on stdout stay machine-readable.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

PACKAGE_LOGGER = "diamondviz"
LOG_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"
DATE_FORMAT = "%H:%M:%S"

# Marks handlers installed here so repeated setup replaces only its own.
_HANDLER_TAG = "_diamondviz_handler"


def _parse_level(level: int | str) -> int:
    if isinstance(level, int):
        return level
    parsed = logging.getLevelName(str(level).strip().upper())
    if not isinstance(parsed, int):
        msg = f"Unknown log level: {level!r}"
        raise ValueError(msg)
    return parsed


def _tagged(handler: logging.Handler, level: int, formatter: logging.Formatter) -> logging.Handler:
    handler.setLevel(level)
    handler.setFormatter(formatter)
    setattr(handler, _HANDLER_TAG, True)
    return handler


def setup_logging(
    level: int | str = logging.INFO,
    log_file: str | Path | None = None,
    *,
    console: bool = True,
) -> logging.Logger:
    """
    Configure the ``diamondviz`` logger.

    Args:
        level: Level as an int or a name such as ``"debug"``.
        log_file: Optional path; grade fallbacks and cache misses are appended there too.
        console: Write records to stderr.
    """
    numeric_level = _parse_level(level)
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(numeric_level)

    for handler in [h for h in logger.handlers if getattr(h, _HANDLER_TAG, False)]:
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)
    if console:
        logger.addHandler(_tagged(logging.StreamHandler(sys.stderr), numeric_level, formatter))
    if log_file is not None:
        path = Path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(path, mode="a", encoding="utf-8")
        logger.addHandler(_tagged(file_handler, numeric_level, formatter))

    logger.debug("Logging configured at %s", logging.getLevelName(numeric_level))
    return logger


__all__ = ["DATE_FORMAT", "LOG_FORMAT", "PACKAGE_LOGGER", "setup_logging"]
