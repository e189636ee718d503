# =============================================================================
# lib/logger.py - Console Logger
# =============================================================================
# Process-wide logger with five leveled methods (info, warn, error, debug,
# fatal). Each call renders exactly one line:
#
#   [2024-05-01T12:00:00.000Z] INFO: plain message
#   [2024-05-01T12:00:00.000Z] ERROR: label {"key":"value"}
#
# info/debug lines go to stdout, warn/error/fatal lines go to stderr.
# Every call is emitted; there is no level threshold.
#
# Usage:
#   from lib.logger import logger
#   logger.info("Server started")
#   logger.error({"path": "/blink"}, "Request failed")
# =============================================================================

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from typing import IO, Any

# Method name -> stdlib level. "fatal" maps to CRITICAL but is rendered as FATAL.
LEVELS: dict[str, int] = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "error": logging.ERROR,
    "fatal": logging.CRITICAL,
}


# =============================================================================
# Formatting
# =============================================================================

def format_timestamp(moment: datetime | None = None) -> str:
    """
    Render a UTC timestamp as ISO-8601 with millisecond precision.

    Example:
        format_timestamp()  # "2024-05-01T12:00:00.000Z"
    """
    moment = moment or datetime.now(timezone.utc)
    return moment.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def format_message(
    level: str,
    obj_or_msg: Any,
    msg: str | None = None,
    *,
    now: datetime | None = None,
) -> str:
    """
    Build a single log line.

    Args:
        level: Level name, any casing
        obj_or_msg: Plain string message, or a JSON-serializable object
        msg: Optional label printed before a serialized object
        now: Timestamp override (defaults to the current time)

    Returns:
        The formatted line without a trailing newline

    Raises:
        TypeError, ValueError: If the object cannot be serialized to JSON
    """
    time = format_timestamp(now)
    if isinstance(obj_or_msg, str):
        return f"[{time}] {level.upper()}: {obj_or_msg}"
    payload = json.dumps(obj_or_msg, separators=(",", ":"), ensure_ascii=False)
    return f"[{time}] {level.upper()}: {msg or ''} {payload}"


# =============================================================================
# Handlers
# =============================================================================

class _MaxLevelFilter(logging.Filter):
    """Pass only records strictly below a level."""

    def __init__(self, below: int):
        super().__init__()
        self.below = below

    def filter(self, record: logging.LogRecord) -> bool:
        return record.levelno < self.below


class _ConsoleHandler(logging.StreamHandler):
    """
    StreamHandler that looks up sys.stdout / sys.stderr on every write.

    Keeps working when the standard streams are swapped after import
    (pytest capture, uvicorn reloader). An explicit setStream() pins the
    handler to that stream instead.
    """

    def __init__(self, stream_name: str):
        super().__init__(getattr(sys, stream_name))
        self._stream_name: str | None = stream_name

    def _current_stream(self) -> IO[str]:
        if self._stream_name is not None:
            self.stream = getattr(sys, self._stream_name)
        return self.stream

    def emit(self, record: logging.LogRecord) -> None:
        self._current_stream()
        super().emit(record)

    def flush(self) -> None:
        self._current_stream()
        super().flush()

    def setStream(self, stream: IO[str]) -> IO[str] | None:
        self._stream_name = None
        return super().setStream(stream)


def _make_handler(stream: IO[str] | None, stream_name: str) -> logging.Handler:
    handler = _ConsoleHandler(stream_name) if stream is None else logging.StreamHandler(stream)
    handler.setFormatter(logging.Formatter("%(message)s"))
    return handler


# =============================================================================
# Logger
# =============================================================================

class Logger:
    """
    Leveled console logger.

    Lines are built before they reach the logging machinery, so an
    object that cannot be serialized raises in the caller instead of
    being reported by the handler.

    Example:
        log = Logger(stdout=io.StringIO(), stderr=io.StringIO())
        log.warn("disk almost full")
    """

    def __init__(
        self,
        name: str = "blinkapi",
        *,
        stdout: IO[str] | None = None,
        stderr: IO[str] | None = None,
    ):
        # Unregistered logger: not reachable via logging.getLogger and
        # unaffected by root configuration.
        self._logger = logging.Logger(name, level=logging.DEBUG)
        self._logger.propagate = False

        out_handler = _make_handler(stdout, "stdout")
        out_handler.addFilter(_MaxLevelFilter(logging.WARNING))
        self._logger.addHandler(out_handler)

        err_handler = _make_handler(stderr, "stderr")
        err_handler.setLevel(logging.WARNING)
        self._logger.addHandler(err_handler)

    def _log(self, level: str, obj_or_msg: Any, msg: str | None) -> None:
        line = format_message(level, obj_or_msg, msg)
        self._logger.log(LEVELS[level], line)

    def info(self, obj_or_msg: Any, msg: str | None = None) -> None:
        self._log("info", obj_or_msg, msg)

    def warn(self, obj_or_msg: Any, msg: str | None = None) -> None:
        self._log("warn", obj_or_msg, msg)

    def error(self, obj_or_msg: Any, msg: str | None = None) -> None:
        self._log("error", obj_or_msg, msg)

    def debug(self, obj_or_msg: Any, msg: str | None = None) -> None:
        self._log("debug", obj_or_msg, msg)

    def fatal(self, obj_or_msg: Any, msg: str | None = None) -> None:
        self._log("fatal", obj_or_msg, msg)


def configure_logging(debug: bool = False) -> None:
    """
    Configure the root logger used by third-party libraries (uvicorn, httpx).

    The application's own lines go through `logger` and are not affected.
    """
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


# Process-wide instance
# Usage: from lib.logger import logger
logger = Logger()
