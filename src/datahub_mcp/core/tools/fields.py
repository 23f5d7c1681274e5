from __future__ import annotations

import uuid
from typing import Any, Dict, List, Optional

from datahub_mcp.core.client import DatahubClient
from datahub_mcp.core.models import FieldConfig, FieldInput, FieldType
from datahub_mcp.core.tools._params import (
    DatabaseId,
    FieldId,
    PageLimit,
    PageToken,
    clamp_limit,
    coerce,
    require_database_id,
    require_value,
)


def _fields_path(client: DatahubClient, database_id: str, *rest: str) -> str:
    return client.public_path("databases", database_id, "fields", *rest)


async def _post_field(
    client: DatahubClient, database_id: str, field: FieldInput
) -> Dict[str, Any]:
    """Create one field; the body is the field with its config flattened in."""
    payload = {**field.to_payload(), "requestId": str(uuid.uuid4())}
    return await client.post(
        _fields_path(client, database_id), json=payload, operation="create field"
    )


async def list_database_fields(
    client: DatahubClient,
    database_id: DatabaseId,
    field_ids: Optional[List[FieldId]] = None,
    limit: Optional[PageLimit] = None,
    next_page_token: Optional[PageToken] = None,
) -> Dict[str, Any]:
    """
    Get metadata about database fields (columns).
    Returns {data: [{id, title, type, isMirror, ...}], nextPageToken?}.
    A missing nextPageToken means there are no more fields.
    limit is capped at 1000 per page.
    """
    require_database_id(database_id)

    params: Dict[str, Any] = {}
    if field_ids:
        params["fieldIds"] = ",".join(field_ids)
    if limit:
        params["limit"] = clamp_limit(limit)
    if next_page_token:
        params["nextPageToken"] = next_page_token

    return await client.get(
        _fields_path(client, database_id),
        params=params or None,
        operation="list database fields",
    )


async def get_database_field(
    client: DatahubClient, database_id: DatabaseId, field_id: FieldId
) -> Dict[str, Any]:
    """Get metadata about a database field (column): {id, title, type, isMirror, ...}."""  # noqa: E501
    require_database_id(database_id)
    require_value(field_id, "field_id")

    return await client.get(
        _fields_path(client, database_id, field_id), operation="get database field"
    )


async def create_database_field(
    client: DatahubClient,
    database_id: DatabaseId,
    title: str,
    field_type: FieldType,
    config: Optional[FieldConfig] = None,
) -> Dict[str, Any]:
    """
    Create a new field in an existing database.
    config carries type-specific settings: allowedEnumValues for select fields,
    databaseId/allowMultipleEntries/mirrorFields for linkToDatabase fields,
    formula/format for formula fields.
    Returns the created field {id, title, type, ...}.
    """
    require_database_id(database_id)
    require_value(title, "title")
    require_value(field_type, "field_type")

    field = FieldInput(
        title=title,
        type=field_type,
        config=coerce(FieldConfig, config) if config is not None else None,
    )
    return await _post_field(client, database_id, field)


async def update_database_field(
    client: DatahubClient,
    database_id: DatabaseId,
    field_id: FieldId,
    field_type: FieldType,
    title: Optional[str] = None,
    config: Optional[FieldConfig] = None,
) -> Dict[str, Any]:
    """
    Update a field in a database.
    field_type is mandatory: when not changing it, pass the field's current type.
    config may carry allowedEnumValues, mirrorFieldsAdd, mirrorFieldsRemove,
    formula and format.
    """
    require_database_id(database_id)
    require_value(field_id, "field_id")
    require_value(field_type, "field_type")

    payload: Dict[str, Any] = {"type": field_type}
    if title is not None:
        payload["title"] = title
    if config is not None:
        payload.update(coerce(FieldConfig, config).to_payload())

    return await client.patch(
        _fields_path(client, database_id, field_id),
        json=payload,
        operation="update field",
    )


async def delete_database_field(
    client: DatahubClient, database_id: DatabaseId, field_id: FieldId
) -> Dict[str, bool]:
    """Delete a field from a database. Returns {success: true}."""
    require_database_id(database_id)
    require_value(field_id, "field_id")

    await client.delete(
        _fields_path(client, database_id, field_id), operation="delete field"
    )
    return {"success": True}
