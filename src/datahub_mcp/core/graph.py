"""
Typed extraction of graph-query responses.

Responses look like {"data": {"objects": {<rootObjectId>: <graph>}}} where the
graph is keyed by the reference and property ids used in the query. A missing
reference means zero results; a missing root object is reported as None so the
caller can decide between "empty" and "not found".
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from .ids import database_id_from_internal, to_public_folder_id
from .models import Database, Space
from .query import (
    DATAHUB_SOURCE_ID,
    PROP_ID,
    PROP_LIST_ITEMS_TYPE_NAME,
    PROP_NAME,
    PROP_ROOT_FOLDER_ID,
    PROP_ROOT_ID,
    PROP_SPACE_TYPE,
    REF_DATA_ITEMS,
    REF_EXTERNAL_TYPES,
    REF_ROOT_FOLDERS,
    REF_SPACE,
    ROOT_QUERY_ID,
)

GraphNode = Dict[str, Any]

# Internal type names look like "w2:Widget"; the prefix is dropped when deriving
# a record name.
TYPE_NAME_PREFIX_LEN = 3


def root_object(payload: Dict[str, Any], object_id: str) -> Optional[GraphNode]:
    data = payload.get("data")
    objects = data.get("objects") if isinstance(data, dict) else None
    if not isinstance(objects, dict):
        return None
    node = objects.get(object_id)
    return node if isinstance(node, dict) else None


def reference_nodes(node: GraphNode, reference_id: str) -> List[GraphNode]:
    """
    Entries of a to-many reference. The backend returns either a list or an
    id-keyed object; both are accepted. Absent references yield [].
    """
    value = node.get(reference_id)
    if isinstance(value, dict):
        value = list(value.values())
    if not isinstance(value, list):
        return []
    return [v for v in value if isinstance(v, dict)]


def reference_node(node: GraphNode, reference_id: str) -> Optional[GraphNode]:
    """Target of a to-one reference, or None."""
    value = node.get(reference_id)
    return value if isinstance(value, dict) else None


def reference_count(node: GraphNode, reference_id: str) -> int:
    value = node.get(reference_id)
    if isinstance(value, (list, dict)):
        return len(value)
    return 0


def _public_folder(value: Any) -> Optional[str]:
    return to_public_folder_id(value) if isinstance(value, str) else None


# --- Per-query extraction --------------------------------------------------- #


def extract_spaces(payload: Dict[str, Any]) -> List[Space]:
    root = root_object(payload, ROOT_QUERY_ID)
    if root is None:
        return []

    spaces: List[Space] = []
    for folder in reference_nodes(root, REF_ROOT_FOLDERS):
        space = reference_node(folder, REF_SPACE)
        if space is None:
            continue
        spaces.append(
            Space(
                root_folder_id=_public_folder(space.get(PROP_ROOT_FOLDER_ID)) or "",
                title=space.get(PROP_NAME) or "",
                type=space.get(PROP_SPACE_TYPE),
            )
        )
    return spaces


def extract_databases(payload: Dict[str, Any]) -> List[Database]:
    root = root_object(payload, DATAHUB_SOURCE_ID)
    if root is None:
        return []

    databases: List[Database] = []
    for item in reference_nodes(root, REF_EXTERNAL_TYPES):
        internal_id = item.get(PROP_ID)
        if not isinstance(internal_id, str):
            continue
        databases.append(
            Database(
                database_id=database_id_from_internal(internal_id),
                title=item.get(PROP_NAME) or "",
                root_folder_id=_public_folder(item.get(PROP_ROOT_ID)) or "",
            )
        )
    return databases


def derive_record_name(type_name: Any) -> Optional[str]:
    """
    Record name from a listItemsTypeName descriptor: the custom singular name
    when set, otherwise the internal type name without its prefix, capitalized.
    """
    if not isinstance(type_name, dict):
        return None

    custom = type_name.get("customNames")
    if isinstance(custom, dict) and custom.get("singular"):
        return str(custom["singular"])

    name = type_name.get("name")
    if name is None:
        return None
    derived = str(name)[TYPE_NAME_PREFIX_LEN:]
    if not derived:
        return None
    return derived[0].upper() + derived[1:]


def extract_database(
    payload: Dict[str, Any], internal_id: str, database_id: str
) -> Optional[Database]:
    node = root_object(payload, internal_id)
    if node is None:
        return None

    return Database(
        database_id=database_id,
        title=node.get(PROP_NAME) or "",
        root_folder_id=_public_folder(node.get(PROP_ROOT_ID)) or "",
        database_record_name=derive_record_name(node.get(PROP_LIST_ITEMS_TYPE_NAME)),
        record_count=reference_count(node, REF_DATA_ITEMS),
    )


__all__ = [
    "root_object",
    "reference_nodes",
    "reference_node",
    "reference_count",
    "extract_spaces",
    "extract_databases",
    "extract_database",
    "derive_record_name",
]
