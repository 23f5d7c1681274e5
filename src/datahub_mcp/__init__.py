"""datahub_mcp package exports."""

from .core import (
    DatahubClient,
    DatahubClientError,
    DatahubHTTPError,
    DatahubNotFoundError,
    DatahubParseError,
    DatahubPartialCreateError,
    DatahubValidationError,
    convert_folder_id,
    discover_tool_modules,
    register_discovered_tools,
)

__version__ = "1.0.0"

__all__ = [
    # Client
    "DatahubClient",
    # Exceptions
    "DatahubClientError",
    "DatahubHTTPError",
    "DatahubParseError",
    "DatahubValidationError",
    "DatahubNotFoundError",
    "DatahubPartialCreateError",
    # Id utilities
    "convert_folder_id",
    # Server utilities
    "discover_tool_modules",
    "register_discovered_tools",
]
