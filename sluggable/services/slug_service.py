from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from pydantic import ValidationError
from sqlalchemy import inspect
from sqlalchemy.exc import NoInspectionAvailable

from sluggable.core.config import settings
from sluggable.core.logging import get_logger
from sluggable.schemas.slug import SlugOptions
from sluggable.services.change_detection import (
    FieldSpec,
    derive_source,
    read_field,
    was_modified,
)
from sluggable.services.exceptions import SlugConfigurationError
from sluggable.services.uniqueness import Collection, Scope, resolve_unique
from sluggable.utils.slugify import to_slug

logger = get_logger(__name__)


@dataclass(frozen=True)
class SlugHook:
    """Pre-save hook that keeps ``options.dest`` in sync with its source fields.

    Calling the hook with a record runs the whole lifecycle and returns the
    same record. The collection used for the duplicate count is either
    passed per call (SQLAlchemy events bind one per flush) or fixed at
    construction time.
    """

    model: Any
    options: SlugOptions
    collection: Collection | None = None

    @property
    def fields(self) -> tuple[str, ...]:
        return self.options.sluggable

    @property
    def dest(self) -> str:
        return self.options.dest

    def __call__(self, record: Any, collection: Collection | None = None) -> Any:
        opts = self.options
        dest_modified = was_modified(record, opts.dest)
        if not dest_modified and not was_modified(record, list(opts.sluggable)):
            return record

        override = read_field(record, opts.dest) if dest_modified else None
        if override not in (None, ""):
            source = str(override)
        else:
            source = derive_source(record, list(opts.sluggable))

        slug = to_slug(source)
        logger.debug("Generated %s=%r for %s", opts.dest, slug, type(record).__name__)
        setattr(record, opts.dest, slug)

        if opts.allow_duplication:
            return record

        target = collection if collection is not None else self.collection
        if target is None:
            raise SlugConfigurationError(
                f"No collection bound to the {opts.dest!r} hook of {_model_name(self.model)}"
            )
        return resolve_unique(
            record,
            target,
            opts.dest,
            id_field=opts.id_field,
            message=opts.duplicate_message,
            scope=opts.scope,
            invalidate_on_duplicate=opts.invalidate_on_duplicate,
        )


def _model_name(model: Any) -> str:
    return getattr(model, "__name__", repr(model))


def _check_model(model: Any, options: SlugOptions) -> None:
    """Fail fast when a mapped model lacks the configured attributes."""
    if model is None:
        raise SlugConfigurationError("A model is required to build a slug hook")
    if options.invalidate_on_duplicate and not callable(getattr(model, "invalidate", None)):
        raise SlugConfigurationError(
            f"{_model_name(model)} must define invalidate() to use invalidate_on_duplicate"
        )
    try:
        mapper = inspect(model)
    except NoInspectionAvailable:
        return

    known = set(mapper.all_orm_descriptors.keys())
    wanted = [*options.sluggable, options.dest, options.id_field]
    missing = [name for name in wanted if name not in known]
    if missing:
        raise SlugConfigurationError(
            f"{_model_name(model)} has no mapped field(s): {', '.join(missing)}"
        )


def make_hook(
    model: Any,
    sluggable: FieldSpec,
    dest: str = "slug",
    *,
    allow_duplication: bool = False,
    invalidate_on_duplicate: bool = False,
    scope: Scope | None = None,
    id_field: str | None = None,
    duplicate_message: str | None = None,
    collection: Collection | None = None,
) -> SlugHook:
    """Build a slug hook for ``model``.

    Args:
        model: The record class whose siblings are checked for duplicates.
            Mapped classes are validated against their attributes.
        sluggable: Field name, or ordered list of names, the slug derives from.
        dest: Field that receives the slug.
        allow_duplication: Skip the uniqueness check entirely.
        invalidate_on_duplicate: Flag the record through
            ``record.invalidate(dest, message)`` instead of suffixing.
        scope: Called with the record on every save; its mapping narrows
            the sibling query and wins over the default constraints.
        id_field: Identity attribute used to exclude the record itself.
            Defaults to ``settings.ID_FIELD``.
        duplicate_message: Message passed to ``invalidate``. Defaults to
            ``settings.DUPLICATE_MESSAGE``.
        collection: Collection used when the hook is called without one.

    Raises:
        SlugConfigurationError: The options or the model do not fit together.
    """
    try:
        options = SlugOptions(
            sluggable=sluggable,
            dest=dest,
            id_field=id_field or settings.ID_FIELD,
            allow_duplication=allow_duplication,
            invalidate_on_duplicate=invalidate_on_duplicate,
            scope=scope,
            duplicate_message=duplicate_message or settings.DUPLICATE_MESSAGE,
        )
    except ValidationError as exc:
        raise SlugConfigurationError(f"Invalid slug options: {exc}") from exc

    _check_model(model, options)
    return SlugHook(model=model, options=options, collection=collection)
