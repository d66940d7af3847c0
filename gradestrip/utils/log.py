"""Logging helpers for the gradestrip package."""

# Module responsibilities:
# - Configure the ``gradestrip`` logger once: rotating file log plus console output.
# - Render ``extra={...}`` context as ``key=value`` pairs so structured fields reach the log.
# - Let the CLI retune verbosity at runtime.

from __future__ import annotations

import logging
import logging.handlers
import os
from pathlib import Path
from typing import List, Optional

PACKAGE_LOGGER = "gradestrip"
LOG_DIR_ENV = "GRADESTRIP_LOG_DIR"
LOG_FILENAME = "gradestrip.log"
DEFAULT_LOG_BASE = Path.home() / "GradeStrip" / "logs"

_RESERVED_ATTRS = frozenset(
    vars(logging.LogRecord(PACKAGE_LOGGER, logging.INFO, "", 0, "", None, None))
) | {"message", "asctime"}
_LOG_CONFIGURED = False


class ContextFormatter(logging.Formatter):
    """Formatter that appends the record's ``extra`` fields after the message."""

    def format(self, record: logging.LogRecord) -> str:
        text = super().format(record)
        context = {
            key: value
            for key, value in record.__dict__.items()
            if key not in _RESERVED_ATTRS and not key.startswith("_")
        }
        if not context:
            return text
        pairs = " ".join(f"{key}={context[key]!r}" for key in sorted(context))
        return f"{text} | {pairs}"


def log_directory(log_dir: Optional[Path] = None) -> Path:
    """Explicit argument, then ``$GRADESTRIP_LOG_DIR``, then ``~/GradeStrip/logs``."""

    env = os.getenv(LOG_DIR_ENV)
    target = log_dir or (Path(env) if env else DEFAULT_LOG_BASE)
    target.mkdir(parents=True, exist_ok=True)
    return target


def _build_handlers(directory: Path) -> List[logging.Handler]:
    formatter = ContextFormatter(
        fmt="%(asctime)s [%(levelname)s] %(name)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    file_handler = logging.handlers.RotatingFileHandler(
        directory / LOG_FILENAME, maxBytes=2_000_000, backupCount=3, encoding="utf-8"
    )
    # the file keeps debug detail even when the console is quieter
    file_handler.setLevel(logging.DEBUG)
    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.INFO)
    for handler in (file_handler, console_handler):
        handler.setFormatter(formatter)
    return [file_handler, console_handler]


def _configure_logging(log_dir: Optional[Path] = None) -> None:
    global _LOG_CONFIGURED
    if _LOG_CONFIGURED:
        return
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.setLevel(logging.INFO)
    for handler in _build_handlers(log_directory(log_dir)):
        package_logger.addHandler(handler)
    package_logger.propagate = False
    _LOG_CONFIGURED = True


def get_logger(name: str, log_dir: Optional[Path] = None) -> logging.Logger:
    """Return ``gradestrip.<name>``, configuring the package logger on first use."""

    _configure_logging(log_dir)
    return logging.getLogger(f"{PACKAGE_LOGGER}.{name}")


def set_level(level: int) -> None:
    """Change the package level; the console follows it, the file stays at DEBUG."""

    _configure_logging()
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.setLevel(level)
    for handler in package_logger.handlers:
        if not isinstance(handler, logging.handlers.RotatingFileHandler):
            handler.setLevel(level)


__all__ = ["ContextFormatter", "get_logger", "log_directory", "set_level"]
