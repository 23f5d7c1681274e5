"""
Graph queries for the internal query endpoint.

A query is a tree: the root names an object type and root object ids, and each
reference traverses a relation, projects properties, applies filters and may
nest further references. Serialized payloads omit absent members.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, List, Optional, Sequence

from pydantic import BaseModel, ConfigDict, Field

from .ids import to_internal_folder_ids

# Object types / root objects
ROOT_QUERY_TYPE = "s:type:RootQuery"
ROOT_QUERY_ID = "d:query:root"
EXTERNAL_SOURCE_TYPE = "s:type:ExternalSource"
DATAHUB_SOURCE_ID = "s:xsrc:wdh"
LIST_TYPE = "s:type:list"

# Properties
PROP_ID = "s:property:id"
PROP_NAME = "s:property:name"
PROP_SPACE_TYPE = "s:property:spaceType"
PROP_ROOT_FOLDER_ID = "s:property:rootFolderId"
PROP_PARENT_ID = "s:property:parentId"
PROP_ROOT_ID = "s:property:rootId"
PROP_LIST_ITEMS_TYPE_NAME = "s:property:listItemsTypeName"

# References
REF_ROOT_FOLDERS = "s:reference:rootFolders"
REF_SPACE = "s:reference:space"
REF_EXTERNAL_TYPES = "s:reference:externalTypes"
REF_DATA_ITEMS = "s:reference:dataItems"

SPACE_TYPES = ("Public", "Private")


class FilterOperator(str, Enum):
    ANY_OF = "s:comp_optor:anyOf"
    EQUALS = "s:comp_optor:equals"
    STRING_CONTAINS = "s:comp_optor:stringContains"


class Filter(BaseModel):
    property_id: str = Field(alias="propertyId")
    operator: FilterOperator = Field(alias="operatorId")
    value: Any

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    @classmethod
    def any_of(cls, property_id: str, values: Sequence[str]) -> "Filter":
        return cls(
            property_id=property_id, operator=FilterOperator.ANY_OF, value=list(values)
        )

    @classmethod
    def equals(cls, property_id: str, value: Any) -> "Filter":
        return cls(property_id=property_id, operator=FilterOperator.EQUALS, value=value)

    @classmethod
    def contains(cls, property_id: str, text: str) -> "Filter":
        return cls(
            property_id=property_id, operator=FilterOperator.STRING_CONTAINS, value=text
        )


class QueryNode(BaseModel):
    properties: List[str] = Field(default_factory=list)
    references: List["Reference"] = Field(default_factory=list)
    filters: List[Filter] = Field(default_factory=list)

    model_config = ConfigDict(populate_by_name=True)

    def to_payload(self) -> Dict[str, Any]:
        """Serialize with wire names, dropping empty lists and unset members."""
        payload: Dict[str, Any] = {}
        for name, field in type(self).model_fields.items():
            value = getattr(self, name)
            if value is None or value == []:
                continue
            key = field.alias or name
            if name == "references":
                payload[key] = [ref.to_payload() for ref in value]
            elif name == "filters":
                payload[key] = [f.model_dump(mode="json", by_alias=True) for f in value]
            else:
                payload[key] = value
        return payload


class Reference(QueryNode):
    id: str


class RootQuery(QueryNode):
    object_type_id: str = Field(alias="objectTypeId")
    root_object_ids: List[str] = Field(alias="rootObjectIds")
    recursive_reference: Optional[str] = Field(
        default=None, alias="recursiveReference"
    )


QueryNode.model_rebuild()
Reference.model_rebuild()
RootQuery.model_rebuild()


# --- Builders --------------------------------------------------------------- #


def spaces_query() -> RootQuery:
    """Public and private spaces under the workspace root."""
    return RootQuery(
        object_type_id=ROOT_QUERY_TYPE,
        root_object_ids=[ROOT_QUERY_ID],
        references=[
            Reference(
                id=REF_ROOT_FOLDERS,
                properties=[PROP_ID],
                references=[
                    Reference(
                        id=REF_SPACE,
                        properties=[
                            PROP_ID,
                            PROP_NAME,
                            PROP_SPACE_TYPE,
                            PROP_ROOT_FOLDER_ID,
                        ],
                        filters=[Filter.any_of(PROP_SPACE_TYPE, SPACE_TYPES)],
                    )
                ],
            )
        ],
    )


def database_filters(
    root_folder_ids: Optional[Sequence[str]] = None,
    name_contains: Optional[str] = None,
) -> List[Filter]:
    """Only supplied parameters produce a filter."""
    filters: List[Filter] = []
    if root_folder_ids:
        filters.append(
            Filter.any_of(PROP_ROOT_ID, to_internal_folder_ids(root_folder_ids))
        )
    if name_contains:
        filters.append(Filter.contains(PROP_NAME, name_contains))
    return filters


def databases_query(
    root_folder_ids: Optional[Sequence[str]] = None,
    name_contains: Optional[str] = None,
) -> RootQuery:
    return RootQuery(
        object_type_id=EXTERNAL_SOURCE_TYPE,
        root_object_ids=[DATAHUB_SOURCE_ID],
        references=[
            Reference(
                id=REF_EXTERNAL_TYPES,
                properties=[PROP_ID, PROP_NAME, PROP_PARENT_ID, PROP_ROOT_ID],
                filters=database_filters(root_folder_ids, name_contains),
            )
        ],
    )


def database_query(internal_id: str) -> RootQuery:
    return RootQuery(
        object_type_id=LIST_TYPE,
        root_object_ids=[internal_id],
        properties=[PROP_NAME, PROP_ROOT_ID, PROP_LIST_ITEMS_TYPE_NAME],
        references=[Reference(id=REF_DATA_ITEMS, properties=[PROP_ID])],
    )


__all__ = [
    "FilterOperator",
    "Filter",
    "QueryNode",
    "Reference",
    "RootQuery",
    "spaces_query",
    "database_filters",
    "databases_query",
    "database_query",
]
