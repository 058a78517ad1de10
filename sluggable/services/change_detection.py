from __future__ import annotations

from typing import Any, Sequence

from sqlalchemy import inspect
from sqlalchemy.exc import NoInspectionAvailable

from sluggable.services.exceptions import SlugConfigurationError

FieldSpec = str | Sequence[str]


def as_field_list(fields: FieldSpec) -> list[str]:
    if isinstance(fields, str):
        return [fields]
    return list(fields)


def modified_paths(record: Any) -> list[str]:
    """Names of the fields changed since the record was loaded or created.

    Records that track their own changes expose ``modified_paths()``;
    mapped instances are read through SQLAlchemy attribute history.
    """
    own = getattr(record, "modified_paths", None)
    if callable(own):
        return list(own())
    try:
        state = inspect(record)
    except NoInspectionAvailable as exc:
        raise SlugConfigurationError(
            f"{type(record).__name__} does not track modified fields"
        ) from exc
    return [attr.key for attr in state.attrs if attr.history.has_changes()]


def was_modified(record: Any, fields: FieldSpec) -> bool:
    paths = modified_paths(record)
    return any(name in paths for name in as_field_list(fields))


def read_field(record: Any, name: str) -> Any:
    try:
        return getattr(record, name)
    except AttributeError as exc:
        raise SlugConfigurationError(
            f"{type(record).__name__} has no field {name!r}"
        ) from exc


def derive_source(record: Any, fields: FieldSpec) -> str:
    """Join the values of ``fields`` with single spaces and strip the result."""
    values = []
    for name in as_field_list(fields):
        value = read_field(record, name)
        values.append("" if value is None else str(value))
    return " ".join(values).strip()
