"""
logfmt logging for the stdio server.

stdout carries MCP frames, so every handler installed here writes to stderr.
"""

import logging
import sys
from typing import IO, Any, Iterable, Optional, Tuple

LOG_EXTRA_FIELDS = (
    "request_id",
    "tool",
    "operation",
    "method",
    "endpoint",
    "status",
    "duration_ms",
    "error_type",
)

# Chatty libraries whose INFO lines duplicate op_call / tool_call events
QUIET_LOGGERS = ("httpx", "httpcore")


def logfmt_value(val: Any) -> str:
    if isinstance(val, (bool, int, float)):
        return str(val)
    text = str(val)
    if not text or any(ch in text for ch in ' ="'):
        text = '"' + text.replace('"', '\\"') + '"'
    return text


def logfmt_line(pairs: Iterable[Tuple[str, Any]]) -> str:
    """Join key/value pairs, dropping keys whose value is None."""
    return " ".join(f"{k}={logfmt_value(v)}" for k, v in pairs if v is not None)


class LogfmtFormatter(logging.Formatter):
    """ts, level, logger and event first, then whichever known extras are set."""

    def __init__(self, fields: Iterable[str] = LOG_EXTRA_FIELDS):
        super().__init__()
        self.fields = tuple(fields)

    def format(self, record: logging.LogRecord) -> str:
        pairs = [
            ("ts", self.formatTime(record, "%Y-%m-%dT%H:%M:%S")),
            ("level", record.levelname.lower()),
            ("logger", record.name),
            ("event", record.getMessage() or None),
        ]
        pairs.extend((key, getattr(record, key, None)) for key in self.fields)
        if record.exc_info and record.exc_info[0] is not None:
            pairs.append(("exc_type", record.exc_info[0].__name__))
        return logfmt_line(pairs)


def setup_logging(level: str = "INFO", stream: Optional[IO[str]] = None) -> None:
    """Install a single logfmt handler on the root logger (idempotent)."""
    root = logging.getLogger()
    for existing in list(root.handlers):
        root.removeHandler(existing)

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(LogfmtFormatter())
    root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


__all__ = [
    "setup_logging",
    "LogfmtFormatter",
    "LOG_EXTRA_FIELDS",
    "logfmt_line",
    "logfmt_value",
]
