from __future__ import annotations

import uuid
from typing import Any, Dict, List, Optional

from datahub_mcp.core.client import (
    DatahubClient,
    DatahubParseError,
    DatahubValidationError,
)
from datahub_mcp.core.models import (
    FieldValueInput,
    RecordInput,
    field_values,
)
from datahub_mcp.core.tools._params import (
    DatabaseId,
    FieldId,
    PageLimit,
    PageToken,
    RecordId,
    clamp_limit,
    coerce,
    require_database_id,
    require_value,
)

DEFAULT_RECORD_LIMIT = 100


def _records_path(client: DatahubClient, database_id: str, *rest: str) -> str:
    return client.public_path("databases", database_id, "records", *rest)


async def list_database_records(
    client: DatahubClient,
    database_id: DatabaseId,
    field_ids: Optional[List[FieldId]] = None,
    filter_expression: Optional[str] = None,
    search_query: Optional[str] = None,
    limit: PageLimit = DEFAULT_RECORD_LIMIT,
    next_page_token: Optional[PageToken] = None,
) -> Dict[str, Any]:
    """
    Fetch records from the database. Always use paging when nextPageToken is provided.
    - field_ids: only include these fields in fieldValues.
    - filter_expression: record filter expression passed through to the API.
    - search_query: full-text search across the records.
    - limit: page size, default 100, capped at 1000.
    Returns {data: [{id, title, fieldValues: {fieldId: value}}], nextPageToken?}.
    """
    require_database_id(database_id)

    params: Dict[str, Any] = {"limit": clamp_limit(limit or DEFAULT_RECORD_LIMIT)}
    if field_ids:
        params["fieldIds"] = ",".join(field_ids)
    if filter_expression:
        params["filter"] = filter_expression
    if search_query:
        params["searchQuery"] = search_query
    if next_page_token:
        params["nextPageToken"] = next_page_token

    return await client.get(
        _records_path(client, database_id),
        params=params,
        operation="list database records",
    )


async def create_database_records(
    client: DatahubClient,
    database_id: DatabaseId,
    records: List[RecordInput],
) -> List[Dict[str, Any]]:
    """
    Create one or more records in a database.
    Each record has a title and fields [{fieldId, value}].
    Returns the created records [{id, title, fieldValues}, ...].
    """
    require_database_id(database_id)
    if not records:
        raise DatahubValidationError("records must contain at least one record")

    payload = {
        "requestId": str(uuid.uuid4()),
        "data": [coerce(RecordInput, r).to_payload() for r in records],
    }
    created = await client.post(
        _records_path(client, database_id), json=payload, operation="create records"
    )

    data = created.get("data")
    if not isinstance(data, list):
        raise DatahubParseError("Expected 'data' list in create records response")
    return data


async def update_database_record(
    client: DatahubClient,
    database_id: DatabaseId,
    record_id: RecordId,
    title: Optional[str] = None,
    fields: Optional[List[FieldValueInput]] = None,
) -> Dict[str, Any]:
    """
    Update an existing record in a database.
    Only the given fields [{fieldId, value}] are changed.
    Returns the updated record {id, title, fieldValues}.
    """
    require_database_id(database_id)
    require_value(record_id, "record_id")

    body: Dict[str, Any] = {
        "fieldValues": field_values([coerce(FieldValueInput, f) for f in fields or []])
    }
    if title is not None:
        body["title"] = title

    return await client.patch(
        _records_path(client, database_id, record_id),
        json=body,
        operation="update record",
    )


async def delete_database_record(
    client: DatahubClient, database_id: DatabaseId, record_id: RecordId
) -> Dict[str, bool]:
    """Delete an existing record from a database. Returns {success: true}."""
    require_database_id(database_id)
    require_value(record_id, "record_id")

    await client.delete(
        _records_path(client, database_id),
        params={"recordIds": record_id},
        operation="delete record",
    )
    return {"success": True}
