# sluggable/db/operations.py
"""Sync/async session helpers that surface unique-index violations.

The duplicate count cannot see rows written by a concurrent flush between
the count and the insert. A unique index on the slug column closes that
gap; these helpers turn its ``IntegrityError`` into ``ConflictError``.
"""

from collections.abc import Iterable
from typing import Any

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import Session

from sluggable.core.logging import get_logger
from sluggable.services.exceptions import ConflictError

logger = get_logger(__name__)


def _coerce_iter(items: Iterable[Any] | None) -> list[Any] | None:
    if not items:
        return None
    return list(items)


def _conflict(exc: IntegrityError) -> ConflictError:
    detail = str(exc.orig) if exc.orig is not None else str(exc)
    logger.warning("Unique constraint rejected the write: %s", detail)
    return ConflictError(detail)


def commit_sync(session: Session) -> None:
    try:
        session.commit()
    except IntegrityError as exc:
        session.rollback()
        raise _conflict(exc) from exc


async def commit_async(session: AsyncSession) -> None:
    try:
        await session.commit()
    except IntegrityError as exc:
        await session.rollback()
        raise _conflict(exc) from exc


def flush_sync(session: Session, *objects: Any) -> None:
    try:
        session.flush(_coerce_iter(objects))
    except IntegrityError as exc:
        session.rollback()
        raise _conflict(exc) from exc


async def flush_async(session: AsyncSession, *objects: Any) -> None:
    try:
        await session.flush(_coerce_iter(objects))
    except IntegrityError as exc:
        await session.rollback()
        raise _conflict(exc) from exc
