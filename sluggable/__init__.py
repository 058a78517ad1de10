"""
sluggable: slug fields for SQLAlchemy models.

Derives a URL-safe slug from one or more fields before a record is saved,
keeps it unique among sibling rows and writes it back into the record.

Usage:
    from sluggable import attach_slug

    attach_slug(Article, ["title", "subtitle"], "slug")

    session.add(Article(title="Crème brûlée"))
    session.commit()  # article.slug == "creme-brulee"
"""

from .db.collection import SqlAlchemyCollection
from .db.events import attach_slug, detach_slug
from .db.operations import commit_async, commit_sync, flush_async, flush_sync
from .models.mixins import ValidationMixin
from .services.change_detection import derive_source, was_modified
from .services.exceptions import (
    ConflictError,
    RecordValidationError,
    ServiceError,
    SlugConfigurationError,
)
from .services.slug_service import SlugHook, make_hook
from .services.uniqueness import Collection, resolve_unique
from .utils.slugify import to_slug, tokenize
from .utils.transliterate import transliterate

__version__ = "0.1.0"

__all__ = [
    "attach_slug",
    "detach_slug",
    "make_hook",
    "SlugHook",
    "to_slug",
    "tokenize",
    "transliterate",
    "was_modified",
    "derive_source",
    "resolve_unique",
    "Collection",
    "SqlAlchemyCollection",
    "ValidationMixin",
    "commit_sync",
    "commit_async",
    "flush_sync",
    "flush_async",
    "ServiceError",
    "SlugConfigurationError",
    "RecordValidationError",
    "ConflictError",
    "__version__",
]
