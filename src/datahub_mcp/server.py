from __future__ import annotations

import asyncio
import logging
import sys
from typing import Any, Callable, Dict, List

from mcp.server.fastmcp import FastMCP
from mcp.server.fastmcp.exceptions import ToolError
from mcp.types import TextContent

from datahub_mcp.core.client import DatahubClient
from datahub_mcp.core.config import MissingTokenError, log_level_from_env
from datahub_mcp.core.context import (
    apply_request_context,
    client_from_context,
    reset_context,
    seed_from_env,
)
from datahub_mcp.core.errors import error_text
from datahub_mcp.core.logging import setup_logging
from datahub_mcp.core.registry import register_discovered_tools

SERVER_NAME = "Wrike DataHub MCP Server"

log = logging.getLogger("datahub_mcp.server")


class DatahubMCP(FastMCP):
    """FastMCP app whose dispatch failures come back as {"error": ...} text."""

    async def call_tool(self, name: str, arguments: Dict[str, Any]) -> Any:
        try:
            return await super().call_tool(name, arguments)
        except ToolError as exc:
            # Unknown tool or arguments that failed schema validation
            log.warning("Tool call %s rejected: %s", name, exc)
            return [TextContent(type="text", text=error_text(exc))]


def build_app(
    client_provider: Callable[[], DatahubClient] | DatahubClient,
) -> DatahubMCP:
    app = DatahubMCP(SERVER_NAME)
    names: List[str] = register_discovered_tools(app, client_provider)
    log.info("Registered %d tools", len(names))
    return app


# --- Entry point ----------------------------------------------------------- #


async def main() -> None:
    # Seed ContextVars from env (stdio bootstrap)
    ctx = seed_from_env(use_dotenv=True)
    setup_logging(log_level_from_env())
    tokens = apply_request_context(
        token=ctx.token, host=ctx.host, request_id=ctx.request_id
    )
    client = client_from_context()

    app = build_app(lambda: client)
    log.info("Starting %s (host=%s)", SERVER_NAME, client.host)
    try:
        await app.run_stdio_async()
    finally:
        await client.aclose()
        reset_context(tokens)


def run() -> None:
    try:
        asyncio.run(main())
    except MissingTokenError as exc:
        log.critical("Fatal error: %s", exc)
        sys.exit(1)


if __name__ == "__main__":
    run()
