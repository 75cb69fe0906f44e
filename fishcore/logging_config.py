"""Centralized logging configuration for the fishing core."""

from __future__ import annotations

import logging
import os
from collections import deque
from typing import Iterable, List

DEFAULT_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
DEFAULT_DATEFMT = "%H:%M:%S"
HUD_FORMAT = "[%(asctime)s.%(msecs)03d] [%(name)s] %(message)s"

RECENT_LOG_CAPACITY = 200


class RecentLogBuffer(logging.Handler):
    """Keeps the last ``capacity`` formatted records for an in-game log panel."""

    def __init__(self, capacity: int = RECENT_LOG_CAPACITY, level: int = logging.NOTSET) -> None:
        super().__init__(level)
        self.capacity = max(1, capacity)
        self._records: deque[str] = deque(maxlen=self.capacity)
        self.setFormatter(logging.Formatter(HUD_FORMAT, datefmt=DEFAULT_DATEFMT))

    def emit(self, record: logging.LogRecord) -> None:
        try:
            self._records.append(self.format(record))
        except Exception:
            self.handleError(record)

    def get_recent_logs(self, count: int) -> List[str]:
        """Most recent first; ``count`` is clamped to [1, capacity]."""
        count = max(1, min(count, self.capacity))
        return list(reversed(self._records))[:count]

    def clear(self) -> None:
        self._records.clear()

    def __len__(self) -> int:
        return len(self._records)


def configure_logging(
    *,
    level: str | None = None,
    format: str = DEFAULT_FORMAT,
    datefmt: str = DEFAULT_DATEFMT,
    recent_buffer: RecentLogBuffer | None = None,
    extra_loggers: Iterable[str] | None = None,
) -> logging.Logger:
    """Configure application logging with sensible defaults.

    Args:
        level: Optional explicit log level. Falls back to ``FISHCORE_LOG_LEVEL``
            env var or INFO when not provided.
        format: Log format string.
        datefmt: Date format string.
        recent_buffer: Optional HUD buffer attached to the ``fishcore`` logger.
        extra_loggers: Additional logger names to align with the configured level.

    Returns:
        The package logger (``fishcore``).
    """

    raw_level = level if level is not None else os.getenv("FISHCORE_LOG_LEVEL")
    resolved_level = (raw_level or "INFO").upper()
    logging.basicConfig(level=resolved_level, format=format, datefmt=datefmt)

    app_logger = logging.getLogger("fishcore")
    app_logger.setLevel(resolved_level)

    if recent_buffer is not None and recent_buffer not in app_logger.handlers:
        app_logger.addHandler(recent_buffer)

    if extra_loggers:
        for logger_name in extra_loggers:
            logging.getLogger(logger_name).setLevel(resolved_level)

    app_logger.debug("Logging configured", extra={"level": resolved_level, "format": format})
    return app_logger
