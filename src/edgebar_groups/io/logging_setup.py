"""Centralized logging bootstrap for edgebar-groups.

Records go to stderr and a rotating file. While the TUI owns the terminal,
route_to_app() swaps the stderr handler for a sink inside the app, and
restore_stderr() swaps it back.

// [LAW:single-enforcer] Logger handler wiring is enforced in this module only.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler
from pathlib import Path

LOGGER_NAME = "edgebar_groups"


@dataclass(frozen=True)
class LoggingRuntime:
    """Resolved runtime logging configuration."""

    level_name: str
    level: int
    file_path: str


_RUNTIME: LoggingRuntime | None = None
_STREAM_HANDLER: logging.Handler | None = None
_APP_HANDLER: logging.Handler | None = None


class _SinkHandler(logging.Handler):
    """Hands each record to a callable, e.g. an App's notify."""

    def __init__(self, sink: Callable[[logging.LogRecord], object], level: int) -> None:
        super().__init__(level)
        self._sink = sink

    def emit(self, record: logging.LogRecord) -> None:
        try:
            self._sink(record)
        except Exception:
            self.handleError(record)


def _parse_level(raw: str) -> tuple[str, int]:
    level = getattr(logging, str(raw or "INFO").strip().upper(), logging.INFO)
    if not isinstance(level, int):
        level = logging.INFO
    return str(logging.getLevelName(level)), level


def _default_log_path() -> str:
    log_dir = Path(
        os.environ.get(
            "EDGEBAR_GROUPS_LOG_DIR",
            os.path.expanduser("~/.local/share/edgebar-groups/logs"),
        )
    )
    ts = datetime.now(timezone.utc).strftime("%Y%m%d-%H%M%S")
    return str(log_dir / f"edgebar-groups-{ts}-{os.getpid()}.log")


def configure(level: str | None = None) -> LoggingRuntime:
    """Configure the edgebar_groups logger with stderr + rotating file handlers.

    ``level`` overrides EDGEBAR_GROUPS_LOG_LEVEL. Idempotent: repeated calls
    return the originally configured runtime.
    """
    global _RUNTIME, _STREAM_HANDLER
    if _RUNTIME is not None:
        return _RUNTIME

    level_name, level_value = _parse_level(level or os.environ.get("EDGEBAR_GROUPS_LOG_LEVEL", "INFO"))
    file_path = os.environ.get("EDGEBAR_GROUPS_LOG_FILE") or _default_log_path()
    Path(file_path).parent.mkdir(parents=True, exist_ok=True)

    _STREAM_HANDLER = logging.StreamHandler()
    _STREAM_HANDLER.setFormatter(logging.Formatter("[%(name)s] %(levelname)s %(message)s"))
    file_handler = RotatingFileHandler(file_path, maxBytes=5 * 1024 * 1024, backupCount=3, encoding="utf-8")
    file_handler.setFormatter(
        logging.Formatter("%(asctime)s %(levelname)s %(name)s %(message)s", datefmt="%Y-%m-%dT%H:%M:%S")
    )

    # [LAW:single-enforcer] All module loggers propagate to this one logger.
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level_value)
    logger.propagate = False
    logger.handlers.clear()
    logger.addHandler(_STREAM_HANDLER)
    logger.addHandler(file_handler)

    _RUNTIME = LoggingRuntime(level_name=level_name, level=level_value, file_path=file_path)
    return _RUNTIME


def get_runtime() -> LoggingRuntime | None:
    """Return configured logging runtime, if configure() has run."""
    return _RUNTIME


def route_to_app(sink: Callable[[logging.LogRecord], object], level: int = logging.ERROR) -> None:
    """Send records at ``level`` and above to ``sink`` instead of stderr.

    The file handler keeps receiving everything. No-op before configure().
    """
    global _APP_HANDLER
    if _RUNTIME is None or _APP_HANDLER is not None:
        return
    logger = logging.getLogger(LOGGER_NAME)
    logger.removeHandler(_STREAM_HANDLER)
    _APP_HANDLER = _SinkHandler(sink, level)
    logger.addHandler(_APP_HANDLER)


def restore_stderr() -> None:
    """Undo route_to_app()."""
    global _APP_HANDLER
    if _APP_HANDLER is None:
        return
    logger = logging.getLogger(LOGGER_NAME)
    logger.removeHandler(_APP_HANDLER)
    _APP_HANDLER = None
    if _STREAM_HANDLER is not None:
        logger.addHandler(_STREAM_HANDLER)


def reset() -> None:
    """Drop handlers and forget the runtime so configure() can run again."""
    global _RUNTIME, _STREAM_HANDLER, _APP_HANDLER
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = True
    _RUNTIME = _STREAM_HANDLER = _APP_HANDLER = None
