from __future__ import annotations

import uuid
from typing import Any, Dict, List, Optional

from datahub_mcp.core.client import (
    DatahubClient,
    DatahubClientError,
    DatahubNotFoundError,
    DatahubParseError,
    DatahubPartialCreateError,
)
from datahub_mcp.core.graph import extract_database, extract_databases
from datahub_mcp.core.ids import database_id_to_internal
from datahub_mcp.core.models import Database, FieldInput
from datahub_mcp.core.query import database_query, databases_query
from datahub_mcp.core.tools._params import (
    DatabaseId,
    FolderId,
    coerce,
    require_database_id,
    require_value,
)
from datahub_mcp.core.tools.fields import _post_field


def _database_path(client: DatahubClient, *rest: str) -> str:
    return client.public_path("databases", *rest)


async def list_databases(
    client: DatahubClient,
    root_folder_ids: Optional[List[FolderId]] = None,
    name_contains: Optional[str] = None,
) -> List[Database]:
    """
    List databases available in the workspace. Preferred way to search databases.
    - root_folder_ids: only databases under these space root folders (FO...).
    - name_contains: keyword the database name must contain.
    Returns [{databaseId: "DB...", title, rootFolderId: "FO..."}, ...].
    """
    query = databases_query(root_folder_ids, name_contains)
    payload = await client.query(query, operation="list databases")
    return extract_databases(payload)


async def get_database(client: DatahubClient, database_id: DatabaseId) -> Database:
    """
    Get detailed information about a specific database, including record count.
    Returns {databaseId, title, rootFolderId, databaseRecordName?, recordCount}.
    """
    require_database_id(database_id)

    internal_id = database_id_to_internal(database_id)
    payload = await client.query(
        database_query(internal_id), operation="get database"
    )

    database = extract_database(payload, internal_id, database_id)
    if database is None:
        raise DatahubNotFoundError(f"Database not found by id {database_id}")
    return database


async def create_database(
    client: DatahubClient,
    title: str,
    parent_folder_id: FolderId,
    database_record_name: Optional[str] = None,
    fields: Optional[List[FieldInput]] = None,
) -> Dict[str, Any]:
    """
    Create a new database with the specified fields.
    The database is created first, then each field in order. If a field fails,
    the remaining fields are not created and nothing already created is removed;
    the error names the database, the fields created so far and the failing one.
    Returns {database: {id, title, ...}, fields: [{id, title, type}, ...]}.
    """
    require_value(title, "title")
    require_value(parent_folder_id, "parent_folder_id")
    field_inputs = [coerce(FieldInput, f) for f in fields or []]

    body: Dict[str, Any] = {
        "title": title,
        "parentFolderId": parent_folder_id,
        "requestId": str(uuid.uuid4()),
    }
    if database_record_name is not None:
        body["databaseRecordName"] = database_record_name

    database = await client.post(
        _database_path(client), json=body, operation="create database"
    )
    database_id = database.get("id")
    if field_inputs and not database_id:
        raise DatahubParseError("Create database response did not include an id")

    created: List[Dict[str, Any]] = []
    for field in field_inputs:
        try:
            created.append(await _post_field(client, database_id, field))
        except DatahubClientError as exc:
            raise DatahubPartialCreateError(
                database=database,
                fields=created,
                failed_field=field.title,
                cause=exc,
            ) from exc

    return {"database": database, "fields": created}


async def update_database(
    client: DatahubClient,
    database_id: DatabaseId,
    title: Optional[str] = None,
    parent_folder_id: Optional[FolderId] = None,
    database_record_name: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Update database properties. Only the given properties are changed.
    Returns the updated database {id, title, parentFolderId, databaseRecordName}.
    """
    require_database_id(database_id)

    body: Dict[str, Any] = {}
    if title is not None:
        body["title"] = title
    if parent_folder_id is not None:
        body["parentFolderId"] = parent_folder_id
    if database_record_name is not None:
        body["databaseRecordName"] = database_record_name

    return await client.patch(
        _database_path(client, database_id), json=body, operation="update database"
    )


async def delete_database(
    client: DatahubClient, database_id: DatabaseId
) -> Dict[str, bool]:
    """Delete an existing database and all its contents. Returns {success: true}."""
    require_database_id(database_id)

    await client.delete(
        _database_path(client, database_id), operation="delete database"
    )
    return {"success": True}
