from __future__ import annotations

from typing import List

from datahub_mcp.core.client import DatahubClient
from datahub_mcp.core.graph import extract_spaces
from datahub_mcp.core.models import Space
from datahub_mcp.core.query import spaces_query


async def list_spaces(client: DatahubClient) -> List[Space]:
    """
    List spaces available in the workspace.
    Returns [{rootFolderId: "FO...", title, type?: "Public" | "Private"}, ...].
    Use rootFolderId to narrow datahub_list_databases or as a parent folder.
    """
    payload = await client.query(spaces_query(), operation="list spaces")
    return extract_spaces(payload)
