import json
from typing import Any, Dict

from .client import (
    DatahubClientError,
    DatahubHTTPError,
    DatahubNotFoundError,
    DatahubParseError,
    DatahubPartialCreateError,
    DatahubValidationError,
)


def error_payload(exc: BaseException) -> Dict[str, Any]:
    """The shape every failure takes at the tool boundary."""
    return {"error": str(exc) or type(exc).__name__}


def error_text(exc: BaseException) -> str:
    return json.dumps(error_payload(exc))


__all__ = [
    "DatahubClientError",
    "DatahubHTTPError",
    "DatahubParseError",
    "DatahubValidationError",
    "DatahubNotFoundError",
    "DatahubPartialCreateError",
    "error_payload",
    "error_text",
]
