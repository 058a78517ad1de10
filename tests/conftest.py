# tests/conftest.py
import sys
from pathlib import Path

ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

import re
from collections.abc import Generator, Mapping
from typing import Any

import pytest
import pytest_asyncio
from sqlalchemy import create_engine
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from sample_models import Base
from sluggable.db.events import attach_slug, detach_slug


# ---------- Fakes for the pure algorithm ----------
class FakeRecord:
    """Record that tracks its own modified fields."""

    def __init__(self, id=None, modified=(), **fields: Any):
        self.id = id
        self._modified = list(modified)
        self.errors: dict[str, str] = {}
        for name, value in fields.items():
            setattr(self, name, value)

    def modified_paths(self) -> list[str]:
        return list(self._modified)

    def invalidate(self, path: str, message: str) -> None:
        self.errors[path] = message


def _matches_spec(value: Any, spec: Any) -> bool:
    if not isinstance(spec, Mapping):
        return value == spec
    for operator, expected in spec.items():
        if operator == "$options":
            continue
        if operator == "$regex":
            flags = re.IGNORECASE if "i" in spec.get("$options", "") else 0
            if value is None or re.search(expected, value, flags) is None:
                return False
        elif operator == "$ne":
            if value == expected:
                return False
        elif operator == "$eq":
            if value != expected:
                return False
        elif operator == "$in":
            if value not in expected:
                return False
        else:
            raise AssertionError(f"unexpected operator {operator}")
    return True


class FakeCollection:
    """In-memory collection of dict rows, recording every count query."""

    def __init__(self, rows=(), error: Exception | None = None):
        self.rows = [dict(row) for row in rows]
        self.error = error
        self.queries: list[Mapping[str, Any]] = []

    def count(self, query: Mapping[str, Any]) -> int:
        self.queries.append(query)
        if self.error is not None:
            raise self.error
        return sum(
            1
            for row in self.rows
            if all(_matches_spec(row.get(field), spec) for field, spec in query.items())
        )


# ---------- Fixtures ----------
@pytest.fixture()
def engine():
    """In-memory SQLite shared by every connection of the test."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture()
def db_session(engine) -> Generator[Session, None, None]:
    session = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)()
    try:
        yield session
    finally:
        session.rollback()
        session.close()


@pytest_asyncio.fixture()
async def async_db_session(tmp_path) -> AsyncSession:
    async_engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'async.db'}")
    async with async_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    session_factory = async_sessionmaker(bind=async_engine, expire_on_commit=False, autoflush=False)
    async with session_factory() as session:
        try:
            yield session
        finally:
            await session.rollback()
    await async_engine.dispose()


@pytest.fixture()
def attach():
    """attach_slug that detaches every hook when the test ends."""
    attached = []

    def _attach(model, *args, **kwargs):
        hook = attach_slug(model, *args, **kwargs)
        attached.append((model, hook))
        return hook

    yield _attach
    for model, hook in attached:
        detach_slug(model, hook)
