"""Request context and DI contract using ContextVars."""

from __future__ import annotations

import uuid
from contextvars import ContextVar, Token
from dataclasses import dataclass
from typing import Iterable, List, Optional

from .client import DatahubClient
from .config import MissingTokenError, load_env_config
from .observability import _request_id_var

# Context variables
_token_var: ContextVar[str | None] = ContextVar("token", default=None)
_host_var: ContextVar[str | None] = ContextVar("host", default=None)


@dataclass(frozen=True)
class RequestContext:
    token: str
    host: str
    request_id: str

    def __repr__(self) -> str:
        return f"RequestContext(host={self.host!r}, request_id={self.request_id!r})"


def ensure_request_id(candidate: Optional[str] = None) -> str:
    return candidate or uuid.uuid4().hex


def seed_from_env(*, use_dotenv: bool = False) -> RequestContext:
    token, host = load_env_config(use_dotenv=use_dotenv)
    if not token:
        raise MissingTokenError("WRIKE_TOKEN not set")
    return RequestContext(token=token, host=host, request_id=ensure_request_id(None))


def apply_request_context(
    token: str,
    host: str,
    request_id: Optional[str] = None,
) -> List[Token]:
    """Set ContextVars for the duration of a request; returns tokens for reset()."""
    return [
        _token_var.set(token),
        _host_var.set(host),
        _request_id_var.set(ensure_request_id(request_id)),
    ]


def reset_context(tokens: Iterable[Token]) -> None:
    for token in reversed(list(tokens)):
        token.var.reset(token)


def get_context(*, require_token: bool = True) -> RequestContext:
    token = _token_var.get()
    host = _host_var.get()

    if require_token and not token:
        raise MissingTokenError("API token is required and missing.")

    return RequestContext(
        token=token or "",
        host=host or "",
        request_id=ensure_request_id(_request_id_var.get()),
    )


def client_from_context() -> DatahubClient:
    ctx = get_context(require_token=True)
    return DatahubClient(token=ctx.token, host=ctx.host)


__all__ = [
    "RequestContext",
    "seed_from_env",
    "get_context",
    "apply_request_context",
    "reset_context",
    "ensure_request_id",
    "client_from_context",
]
