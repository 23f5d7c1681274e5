from __future__ import annotations

import os
from typing import Tuple

from dotenv import load_dotenv

from .client import DEFAULT_HOST, DatahubClient

TOKEN_ENV = "WRIKE_TOKEN"
HOST_ENV = "WRIKE_HOST"
LOG_LEVEL_ENV = "DATAHUB_MCP_LOG_LEVEL"


class MissingTokenError(ValueError):
    """Raised when the API token is required but missing."""


def load_env_config(*, use_dotenv: bool = True) -> Tuple[str, str]:
    """Load the API token and host from environment (optional .env)."""
    if use_dotenv:
        load_dotenv()
    token = os.getenv(TOKEN_ENV, "").strip()
    host = os.getenv(HOST_ENV, "").strip() or DEFAULT_HOST
    return token, host


def log_level_from_env() -> str:
    return os.getenv(LOG_LEVEL_ENV, "").strip() or "INFO"


def create_client_from_env(**kwargs) -> DatahubClient:
    """Create a DatahubClient from environment variables."""
    token, host = load_env_config()
    if not token:
        raise MissingTokenError(f"Please set {TOKEN_ENV} environment variable.")
    return DatahubClient(token=token, host=host, **kwargs)


__all__ = [
    "MissingTokenError",
    "load_env_config",
    "log_level_from_env",
    "create_client_from_env",
    "TOKEN_ENV",
    "HOST_ENV",
    "LOG_LEVEL_ENV",
]
