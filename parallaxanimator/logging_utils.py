"""Logging setup for ParallaxAnimator hosts.

Library modules only call ``logging.getLogger(__name__)`` and tag their
messages (``[parallax]``, ``[events]``, ``[tick]``). Per-tick lines carry
the ``[parallax.trace]`` tag and are dropped by every handler installed
here unless cycle tracing is switched on. The host calls
:func:`setup_logging` once at startup.
"""

from __future__ import annotations

import logging
import logging.handlers
import os
import time
from enum import Enum
from pathlib import Path
from typing import Optional


DEFAULT_LOG_PATH = Path.home() / ".parallaxanimator" / "parallaxanimator.log"
CYCLE_TRACE_ENV_VAR = "PARALLAXANIMATOR_CYCLE_TRACE"
TRACE_TAG = "[parallax.trace]"


class LogMode(str, Enum):
    """Presets: quiet keeps the console at WARNING, perf forces DEBUG and traces."""

    QUIET = "quiet"
    NORMAL = "normal"
    PERF = "perf"


_LOG_MODE: LogMode = LogMode.NORMAL


def set_log_mode(mode: LogMode | str | None) -> LogMode:
    """Set the active preset; unknown names fall back to normal."""
    global _LOG_MODE
    try:
        _LOG_MODE = LogMode(mode.lower()) if mode is not None else LogMode.NORMAL
    except ValueError:
        _LOG_MODE = LogMode.NORMAL
    return _LOG_MODE


def get_log_mode() -> LogMode:
    return _LOG_MODE


def cycle_trace_allowed() -> bool:
    """Per-tick rotation lines are kept in perf mode or when the env flag is set."""
    if _LOG_MODE is LogMode.PERF:
        return True
    return os.environ.get(CYCLE_TRACE_ENV_VAR, "").strip().lower() in {"1", "true", "yes", "on"}


class CycleTraceFilter(logging.Filter):
    """Drops ``[parallax.trace]`` records unless cycle tracing is allowed."""

    def filter(self, record: logging.LogRecord) -> bool:  # type: ignore[override]
        if not isinstance(record.msg, str) or TRACE_TAG not in record.msg:
            return True
        return cycle_trace_allowed()


def setup_logging(
    *,
    level: str | int = "INFO",
    log_file: Optional[str | Path] = None,
    logger_name: Optional[str] = None,
    log_mode: LogMode | str | None = None,
    add_console: bool = True,
) -> logging.Logger:
    """Install a rotating file handler (and console) with the trace filter.

    Calling it again for the same logger only updates levels.

    Args:
        level: Level name or number
        log_file: Rotating log path (default ``~/.parallaxanimator/parallaxanimator.log``)
        logger_name: Logger to configure; root by default
        log_mode: Optional preset, see :class:`LogMode`
        add_console: Also log to stderr
    """
    resolved_level = logging.getLevelName(level.upper()) if isinstance(level, str) else int(level)
    if not isinstance(resolved_level, int):
        resolved_level = logging.INFO
    mode = set_log_mode(log_mode) if log_mode is not None else get_log_mode()
    if mode is LogMode.PERF:
        resolved_level = min(resolved_level, logging.DEBUG)
    console_level = max(logging.WARNING, resolved_level) if mode is LogMode.QUIET else resolved_level

    logger = logging.getLogger(logger_name)
    logger.setLevel(resolved_level)

    if logger.handlers:
        for handler in logger.handlers:
            is_console = type(handler) is logging.StreamHandler
            handler.setLevel(console_level if is_console else resolved_level)
        return logger

    formatter = logging.Formatter("[%(asctime)s] %(levelname)s %(name)s: %(message)s", datefmt="%H:%M:%S")
    trace_filter = CycleTraceFilter()

    log_path = Path(log_file) if log_file else DEFAULT_LOG_PATH
    try:
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.handlers.RotatingFileHandler(
            log_path, maxBytes=1_000_000, backupCount=3, encoding="utf-8"
        )
    except OSError:
        # Read-only home or install dir: console only
        file_handler = None
    if file_handler is not None:
        file_handler.setLevel(resolved_level)
        file_handler.setFormatter(formatter)
        file_handler.addFilter(trace_filter)
        logger.addHandler(file_handler)

    if add_console:
        console = logging.StreamHandler()
        console.setLevel(console_level)
        console.setFormatter(formatter)
        console.addFilter(trace_filter)
        logger.addHandler(console)

    return logger


class BurstSampler:
    """Coalesces frequent events into one count per time window.

    The director records every rotation and logs a single summary line
    whenever :meth:`record` reports a closed window.
    """

    def __init__(self, interval_s: float = 2.0) -> None:
        self.interval_s = max(0.1, float(interval_s))
        self._next_flush = time.monotonic() + self.interval_s
        self._count = 0

    def record(self, amount: int = 1) -> Optional[int]:
        """Register *amount* events; return the total if the window elapsed."""
        self._count += max(0, amount)
        now = time.monotonic()
        if now < self._next_flush:
            return None
        total, self._count = self._count, 0
        self._next_flush = now + self.interval_s
        return total

    def flush(self) -> int:
        """Close the window early and return the accumulated count."""
        total, self._count = self._count, 0
        self._next_flush = time.monotonic() + self.interval_s
        return total
