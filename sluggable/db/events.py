# sluggable/db/events.py
"""Wire slug hooks into the SQLAlchemy flush.

The hook runs from the mapper ``before_insert`` / ``before_update`` events,
counting siblings through the flush's own connection, so it behaves the
same under ``Session`` and ``AsyncSession``.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from sqlalchemy import event

from sluggable.core.logging import get_logger
from sluggable.db.collection import SqlAlchemyCollection
from sluggable.services.change_detection import FieldSpec
from sluggable.services.exceptions import RecordValidationError
from sluggable.services.slug_service import SlugHook, make_hook

logger = get_logger(__name__)

_SAVE_EVENTS = ("before_insert", "before_update")

_listeners: dict[int, tuple[SlugHook, Callable[..., None]]] = {}


def reject_invalid(record: Any) -> None:
    """Validation stage: abort the save of a record carrying field errors."""
    errors = getattr(record, "validation_errors", None)
    if not errors:
        return
    record.clear_validation_errors()
    logger.info("Rejecting %s: %s", type(record).__name__, errors)
    raise RecordValidationError(errors)


def attach_slug(model: Any, sluggable: FieldSpec, dest: str = "slug", **options: Any) -> SlugHook:
    """Build a slug hook for ``model`` and run it before every insert/update.

    Options are those of :func:`sluggable.services.slug_service.make_hook`.
    Returns the hook so it can be detached or called directly.
    """
    hook = make_hook(model, sluggable, dest, **options)

    def before_save(mapper, connection, target) -> None:
        hook(target, SqlAlchemyCollection(connection, model))
        reject_invalid(target)

    for name in _SAVE_EVENTS:
        event.listen(model, name, before_save, propagate=True)
    _listeners[id(hook)] = (hook, before_save)
    logger.debug("Attached %s hook to %s", hook.dest, model.__name__)
    return hook


def detach_slug(model: Any, hook: SlugHook) -> None:
    entry = _listeners.pop(id(hook), None)
    if entry is None:
        return
    _, before_save = entry
    for name in _SAVE_EVENTS:
        event.remove(model, name, before_save)
