"""Structured events and the per-invocation request id."""

from __future__ import annotations

import logging
import time
import uuid
from contextvars import ContextVar, Token
from typing import Any, Dict, Optional

# Attributes every LogRecord already has; extras must not overwrite them.
_RECORD_ATTRS = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", None, None))
) | {"message", "asctime"}

_request_id_var: ContextVar[str | None] = ContextVar("request_id", default=None)


def current_request_id() -> Optional[str]:
    return _request_id_var.get()


def bind_request_id(request_id: Optional[str] = None) -> Token:
    """Bind a request id for the current task; returns the token for reset()."""
    return _request_id_var.set(request_id or uuid.uuid4().hex)


def unbind_request_id(token: Token) -> None:
    _request_id_var.reset(token)


def elapsed_ms(start: float) -> int:
    """Milliseconds since a time.perf_counter() reading."""
    return int((time.perf_counter() - start) * 1000)


def event_extra(fields: Dict[str, Any]) -> Dict[str, Any]:
    extra = {k: v for k, v in fields.items() if k not in _RECORD_ATTRS}
    extra.setdefault("request_id", current_request_id())
    return extra


def log_event(event: str, logger: logging.Logger | None = None, **fields: Any) -> None:
    """
    Emit one INFO record named after the event, with fields as record extras.
    The bound request id is attached unless the caller passes one.
    """
    log = logger or logging.getLogger("datahub_mcp.observability")
    log.info(event, extra=event_extra(fields))


__all__ = [
    "log_event",
    "event_extra",
    "elapsed_ms",
    "bind_request_id",
    "unbind_request_id",
    "current_request_id",
]
