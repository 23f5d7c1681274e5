from __future__ import annotations

from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

FieldType = Literal[
    "text",
    "number",
    "percent",
    "checkbox",
    "date",
    "duration",
    "currency",
    "singleSelect",
    "multiSelect",
    "linkToDatabase",
    "formula",
]

OptionColor = Literal[
    "Brown",
    "Red",
    "Purple",
    "Indigo",
    "DarkBlue",
    "Blue",
    "Turquoise",
    "DarkCyan",
    "Green",
    "YellowGreen",
    "Yellow",
    "Orange",
    "Gray",
    "DarkRed",
]

FormulaFormat = Literal["number", "currency", "percent", "hours", "days", "date"]

FORMULA_RULES = """Formula for formula fields. Formula fields are calculated readonly fields.
Formula definition rules:
- Formulas support base operators: *-/+()
- Formula operand must be a reference to a field in the same database or a numeric constant
- Formulas do not support certain operations, such as DATE * DATE or DATE / DATE. On failure, check the error message returned by the API.
- Use the '$today' syntax to represent the 'today' date"""  # noqa: E501

FIELD_VALUE_RULES = """Value for the field. Allowed value formats:
- number, currency, percent: any number
- text: any text
- singleSelect, multiSelect: enum values
- checkbox: boolean
- duration: duration in limited ISO 8601 format, only the PT prefix is supported
- date: date in ISO 8601 format
- linkToDatabase: array of record ids (RE...)"""


# --- Output Models ---


class Space(BaseModel):
    root_folder_id: str = Field(alias="rootFolderId")
    title: str
    type: Optional[str] = Field(
        default=None, description="Public or Private, as reported by the backend"
    )

    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class Database(BaseModel):
    database_id: str = Field(alias="databaseId")
    title: str
    root_folder_id: str = Field(alias="rootFolderId")
    database_record_name: Optional[str] = Field(
        default=None, alias="databaseRecordName"
    )
    record_count: Optional[int] = Field(
        default=None,
        alias="recordCount",
        description="Total amount of records in the database",
    )

    model_config = ConfigDict(populate_by_name=True, extra="ignore")


# --- Input Models (Tool Payloads) ---


class EnumOption(BaseModel):
    name: str = Field(description="Option name")
    color: Optional[OptionColor] = Field(
        default=None, description="Option color (for select fields)"
    )

    model_config = ConfigDict(extra="forbid")


class MirrorField(BaseModel):
    title: str
    field_id: str = Field(alias="fieldId")

    model_config = ConfigDict(populate_by_name=True, extra="forbid")


class MirrorFieldRemoval(BaseModel):
    wrike_field_id: str = Field(alias="wrikeFieldId")

    model_config = ConfigDict(populate_by_name=True, extra="forbid")


class FieldConfig(BaseModel):
    """Field type-specific configuration. Members are sent flattened into the field body."""  # noqa: E501

    allowed_enum_values: Optional[List[EnumOption]] = Field(
        default=None,
        alias="allowedEnumValues",
        description="Options for singleSelect/multiSelect fields",
    )
    database_id: Optional[str] = Field(
        default=None,
        alias="databaseId",
        description="Target database ID for linkToDatabase fields",
    )
    allow_multiple_entries: Optional[bool] = Field(
        default=None,
        alias="allowMultipleEntries",
        description="Allow multiple links for linkToDatabase fields",
    )
    mirror_fields: Optional[List[MirrorField]] = Field(
        default=None,
        alias="mirrorFields",
        description="Mirror field configurations for linkToDatabase fields",
    )
    mirror_fields_add: Optional[List[MirrorField]] = Field(
        default=None,
        alias="mirrorFieldsAdd",
        description="Mirror fields to add (updates only)",
    )
    mirror_fields_remove: Optional[List[MirrorFieldRemoval]] = Field(
        default=None,
        alias="mirrorFieldsRemove",
        description="Mirror fields to remove (updates only)",
    )
    formula: Optional[str] = Field(default=None, description=FORMULA_RULES)
    format: Optional[FormulaFormat] = Field(
        default=None, description="Result field format for formula fields"
    )

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    def to_payload(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class FieldInput(BaseModel):
    title: str = Field(description="Field name")
    type: FieldType = Field(description="Field type")
    config: Optional[FieldConfig] = Field(
        default=None, description="Type-specific configuration"
    )

    model_config = ConfigDict(extra="forbid")

    def to_payload(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"title": self.title, "type": self.type}
        if self.config is not None:
            payload.update(self.config.to_payload())
        return payload


class FieldValueInput(BaseModel):
    field_id: str = Field(alias="fieldId", description="ID of the field")
    value: Any = Field(description=FIELD_VALUE_RULES)

    model_config = ConfigDict(populate_by_name=True, extra="forbid")


class RecordInput(BaseModel):
    title: str = Field(description="Record title")
    fields: List[FieldValueInput] = Field(
        default_factory=list, description="Field values for the record"
    )

    model_config = ConfigDict(extra="forbid")

    def to_payload(self) -> Dict[str, Any]:
        return {"title": self.title, "fieldValues": field_values(self.fields)}


def field_values(fields: Optional[List[FieldValueInput]]) -> Dict[str, Any]:
    """Flatten [{fieldId, value}, ...] into {fieldId: value}; later entries win."""
    return {f.field_id: f.value for f in fields or []}


__all__ = [
    "FieldType",
    "OptionColor",
    "FormulaFormat",
    "Space",
    "Database",
    "EnumOption",
    "MirrorField",
    "MirrorFieldRemoval",
    "FieldConfig",
    "FieldInput",
    "FieldValueInput",
    "RecordInput",
    "field_values",
]
