"""
Identifier normalization between internal object-graph ids and public ids.

Folders:   w2:mod:<digits>  <->  FO<digits>
Databases: w2:mod:<id>      <->  DB<id>
"""

import re
from typing import Iterable, List, Optional

INTERNAL_PREFIX = "w2:mod:"
FOLDER_PREFIX = "FO"
DATABASE_PREFIX = "DB"

_INTERNAL_FOLDER_RE = re.compile(r"^w2:mod:\d+$")
_PUBLIC_FOLDER_RE = re.compile(r"^FO\d+$")


def convert_folder_id(folder_id: str) -> str:
    """
    Swap a folder id between its internal and public forms.
    Ids matching neither form are returned unchanged.
    Example: 'w2:mod:42' -> 'FO42', 'FO42' -> 'w2:mod:42'
    """
    if _INTERNAL_FOLDER_RE.match(folder_id):
        return FOLDER_PREFIX + folder_id[len(INTERNAL_PREFIX) :]
    if _PUBLIC_FOLDER_RE.match(folder_id):
        return INTERNAL_PREFIX + folder_id[len(FOLDER_PREFIX) :]
    return folder_id


def to_public_folder_id(folder_id: str) -> str:
    if _INTERNAL_FOLDER_RE.match(folder_id):
        return convert_folder_id(folder_id)
    return folder_id


def to_internal_folder_id(folder_id: str) -> str:
    if _PUBLIC_FOLDER_RE.match(folder_id):
        return convert_folder_id(folder_id)
    return folder_id


def to_internal_folder_ids(folder_ids: Iterable[str]) -> List[str]:
    return [to_internal_folder_id(f) for f in folder_ids]


def is_database_id(database_id: Optional[str]) -> bool:
    return (
        isinstance(database_id, str)
        and database_id.startswith(DATABASE_PREFIX)
        and len(database_id) > len(DATABASE_PREFIX)
    )


def database_id_to_internal(database_id: str) -> str:
    """'DB123' -> 'w2:mod:123'; anything else is returned unchanged."""
    if is_database_id(database_id):
        return INTERNAL_PREFIX + database_id[len(DATABASE_PREFIX) :]
    return database_id


def database_id_from_internal(internal_id: str) -> str:
    """'w2:mod:123' -> 'DB123'; anything else is returned unchanged."""
    if internal_id.startswith(INTERNAL_PREFIX):
        return DATABASE_PREFIX + internal_id[len(INTERNAL_PREFIX) :]
    return internal_id


__all__ = [
    "convert_folder_id",
    "to_public_folder_id",
    "to_internal_folder_id",
    "to_internal_folder_ids",
    "is_database_id",
    "database_id_to_internal",
    "database_id_from_internal",
]
