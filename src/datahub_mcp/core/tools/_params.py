"""
Shared parameter annotations and precondition checks for DataHub tools.
Pattern hints are advertised in the input schema but not enforced there, so the
checks below own the error message.
"""

from __future__ import annotations

from typing import Annotated, Any, Optional, Type, TypeVar

from pydantic import BaseModel, Field

from datahub_mcp.core.client import DatahubValidationError
from datahub_mcp.core.ids import is_database_id

T = TypeVar("T", bound=BaseModel)

MAX_PAGE_SIZE = 1000

FolderId = Annotated[
    str,
    Field(
        description="Folder ID acquired from a space or folder",
        json_schema_extra={"pattern": r"FO\d+"},
    ),
]
DatabaseId = Annotated[
    str,
    Field(description="ID of the database", json_schema_extra={"pattern": r"DB\d+"}),
]
FieldId = Annotated[
    str,
    Field(description="ID of the field", json_schema_extra={"pattern": r"FI\d+"}),
]
RecordId = Annotated[
    str,
    Field(description="ID of the record", json_schema_extra={"pattern": r"RE\d+"}),
]
PageLimit = Annotated[
    int,
    Field(
        description=(
            "Limit the number of entries to include in the response; "
            "values above 1000 are capped at 1000"
        ),
        json_schema_extra={"minimum": 1, "maximum": MAX_PAGE_SIZE},
    ),
]
PageToken = Annotated[
    str,
    Field(description="Paging token from a previous response to fetch the next batch"),
]


def require_database_id(database_id: Optional[str]) -> str:
    if not database_id:
        raise DatahubValidationError("database_id is required")
    if not is_database_id(database_id):
        raise DatahubValidationError(
            f"database_id must be a public database id (DB...), got {database_id!r}"
        )
    return database_id


def require_value(value: Any, name: str) -> Any:
    if value is None or (isinstance(value, str) and not value.strip()):
        raise DatahubValidationError(f"{name} is required")
    return value


def clamp_limit(limit: int) -> int:
    """Clamp a page limit into a safe range to avoid huge payloads."""
    return max(1, min(limit, MAX_PAGE_SIZE))


def coerce(model: Type[T], value: Any) -> T:
    """Accept either a model instance or its plain-dict form."""
    if isinstance(value, model):
        return value
    return model.model_validate(value)
