"""Core domain surface for datahub-mcp (transport-agnostic)."""

from .client import (
    DatahubClient,
    DatahubClientError,
    DatahubHTTPError,
    DatahubNotFoundError,
    DatahubParseError,
    DatahubPartialCreateError,
    DatahubValidationError,
)
from .config import MissingTokenError, create_client_from_env, load_env_config
from .context import (
    RequestContext,
    apply_request_context,
    client_from_context,
    ensure_request_id,
    get_context,
    reset_context,
    seed_from_env,
)
from .ids import (
    convert_folder_id,
    database_id_from_internal,
    database_id_to_internal,
    to_internal_folder_id,
    to_public_folder_id,
)
from .query import Filter, FilterOperator, Reference, RootQuery
from .registry import (
    discover_tool_modules,
    iter_tool_functions,
    register_discovered_tools,
)

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
    "to_public_folder_id",
    "to_internal_folder_id",
    "database_id_to_internal",
    "database_id_from_internal",
    # Queries
    "RootQuery",
    "Reference",
    "Filter",
    "FilterOperator",
    # Config helpers
    "MissingTokenError",
    "create_client_from_env",
    "load_env_config",
    # Registry helpers
    "discover_tool_modules",
    "iter_tool_functions",
    "register_discovered_tools",
    # Context
    "RequestContext",
    "seed_from_env",
    "get_context",
    "apply_request_context",
    "reset_context",
    "ensure_request_id",
    "client_from_context",
]
