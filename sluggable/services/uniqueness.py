"""Sibling counting and collision handling for generated slugs.

The duplicate query is a small document in the style of a document-store
filter::

    {"slug": {"$regex": "^intro(-\\d+)?$", "$options": "i"},
     "id": {"$ne": <record id>}}

merged with whatever the collision scope returns for the record. Any
collection that can count such a document can back the resolver; see
``sluggable.db.collection`` for the SQLAlchemy one.

Known limitation: the suffix is the raw sibling count, so ``foo`` with
siblings ``foo`` and ``foo-2`` becomes ``foo-2`` again. Nothing locks the
table between the count and the write either; a unique index is the only
real guarantee.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Mapping
from typing import Any, Protocol

from sluggable.core.logging import get_logger
from sluggable.services.change_detection import read_field

logger = get_logger(__name__)

Scope = Callable[[Any], Mapping[str, Any]]


class Collection(Protocol):
    """Anything that can count the records matching a query document."""

    def count(self, query: Mapping[str, Any]) -> int: ...


def duplicate_pattern(candidate: str) -> str:
    return "^" + re.escape(candidate) + r"(-\d+)?$"


def deep_merge(base: Mapping[str, Any], override: Mapping[str, Any]) -> dict[str, Any]:
    merged: dict[str, Any] = dict(base)
    for key, value in override.items():
        current = merged.get(key)
        if isinstance(current, Mapping) and isinstance(value, Mapping):
            merged[key] = deep_merge(current, value)
        else:
            merged[key] = value
    return merged


def build_duplicate_query(
    record: Any,
    dest: str,
    id_field: str,
    scope: Scope | None = None,
) -> dict[str, Any]:
    query: dict[str, Any] = {
        dest: {"$regex": duplicate_pattern(read_field(record, dest)), "$options": "i"},
        id_field: {"$ne": read_field(record, id_field)},
    }
    if scope is not None:
        query = deep_merge(query, scope(record) or {})
    return query


def resolve_unique(
    record: Any,
    collection: Collection,
    dest: str,
    *,
    id_field: str,
    message: str,
    scope: Scope | None = None,
    invalidate_on_duplicate: bool = False,
) -> Any:
    """Make ``record.<dest>`` unique among its siblings, or flag it.

    Query errors are logged and re-raised untouched; the record is left
    as it was.
    """
    candidate = read_field(record, dest)
    query = build_duplicate_query(record, dest, id_field, scope)
    try:
        count = collection.count(query)
    except Exception:
        logger.warning("Duplicate count failed for %s=%r", dest, candidate, exc_info=True)
        raise

    if count > 0:
        if invalidate_on_duplicate:
            logger.debug("Slug %r already taken by %d sibling(s); invalidating", candidate, count)
            record.invalidate(dest, message)
        else:
            resolved = f"{candidate}-{count}"
            logger.debug("Slug %r collides with %d sibling(s); using %r", candidate, count, resolved)
            setattr(record, dest, resolved)
    return record
