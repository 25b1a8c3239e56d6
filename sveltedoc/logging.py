"""Logger setup shared by the CLI and the service."""

from __future__ import annotations

import logging
from pathlib import Path

LOGGER_NAME = "sveltedoc"
CONSOLE_FORMAT = "[sveltedoc] %(levelname)s %(message)s"
FILE_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def get_logger(name: str | None = None) -> logging.Logger:
    """Return ``sveltedoc`` or the child logger ``sveltedoc.<name>``."""
    return logging.getLogger(f"{LOGGER_NAME}.{name}" if name else LOGGER_NAME)


def configure_logging(
    *, verbose: bool = False, log_file: Path | None = None
) -> logging.Logger:
    """Send ``sveltedoc.*`` records to stderr and, when given, to ``log_file``.

    Handlers installed by an earlier call are closed and replaced.
    """
    level = logging.DEBUG if verbose else logging.INFO
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    logger.propagate = False

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    sinks: list[tuple[logging.Handler, str]] = [(logging.StreamHandler(), CONSOLE_FORMAT)]
    if log_file is not None:
        sinks.append((logging.FileHandler(log_file, encoding="utf-8"), FILE_FORMAT))
    for handler, fmt in sinks:
        handler.setLevel(level)
        handler.setFormatter(logging.Formatter(fmt))
        logger.addHandler(handler)
    return logger


__all__ = ["configure_logging", "get_logger"]
