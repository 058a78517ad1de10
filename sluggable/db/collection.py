# sluggable/db/collection.py
"""Count query documents against a mapped model."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from sqlalchemy import ColumnElement, and_, func, inspect, select, true
from sqlalchemy.engine import Connection
from sqlalchemy.orm import Session

from sluggable.services.exceptions import SlugConfigurationError

_COMPARISONS = {
    "$eq": lambda column, value: column.is_(None) if value is None else column == value,
    "$ne": lambda column, value: column.is_not(None) if value is None else column != value,
    "$gt": lambda column, value: column > value,
    "$gte": lambda column, value: column >= value,
    "$lt": lambda column, value: column < value,
    "$lte": lambda column, value: column <= value,
    "$in": lambda column, value: column.in_(list(value)),
    "$nin": lambda column, value: column.not_in(list(value)),
}


def _regex_clause(column, pattern: str, options: str) -> ColumnElement[bool]:
    # Inline flags work on SQLite's REGEXP, PostgreSQL AREs and MySQL ICU alike.
    unknown = set(options) - {"i"}
    if unknown:
        raise SlugConfigurationError(f"Unsupported $regex options: {''.join(sorted(unknown))}")
    if "i" in options:
        pattern = "(?i)" + pattern
    return column.regexp_match(pattern)


def _operator_clauses(column, spec: Mapping[str, Any]) -> list[ColumnElement[bool]]:
    clauses: list[ColumnElement[bool]] = []
    for operator, value in spec.items():
        if operator == "$options":
            if "$regex" not in spec:
                raise SlugConfigurationError("$options requires $regex")
            continue
        if operator == "$regex":
            clauses.append(_regex_clause(column, value, spec.get("$options", "")))
            continue
        compare = _COMPARISONS.get(operator)
        if compare is None:
            raise SlugConfigurationError(f"Unsupported query operator: {operator}")
        clauses.append(compare(column, value))
    return clauses


class SqlAlchemyCollection:
    """Counts rows of ``model`` matching a query document.

    ``bind`` is whatever can execute a statement: the ``Connection`` handed
    to mapper events, or a sync ``Session``.
    """

    def __init__(self, bind: Connection | Session, model: Any):
        self.bind = bind
        self.model = model
        self._mapper = inspect(model)

    def _column(self, name: str):
        if name not in self._mapper.column_attrs:
            raise SlugConfigurationError(
                f"{self.model.__name__} has no column attribute {name!r}"
            )
        return self._mapper.columns[name]

    def where(self, query: Mapping[str, Any]) -> ColumnElement[bool]:
        clauses: list[ColumnElement[bool]] = []
        for name, spec in query.items():
            column = self._column(name)
            if isinstance(spec, Mapping):
                if not all(str(key).startswith("$") for key in spec):
                    raise SlugConfigurationError(
                        f"Nested documents are not supported for {name!r}"
                    )
                clauses.extend(_operator_clauses(column, spec))
            else:
                clauses.extend(_operator_clauses(column, {"$eq": spec}))
        return and_(true(), *clauses)

    def count(self, query: Mapping[str, Any]) -> int:
        stmt = select(func.count()).select_from(self._mapper.selectable).where(self.where(query))
        return int(self.bind.execute(stmt).scalar_one())
