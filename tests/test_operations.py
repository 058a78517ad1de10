# tests/test_operations.py
import pytest

from sample_models import Author
from sluggable.db.operations import commit_sync, flush_sync
from sluggable.services.exceptions import ConflictError


def _author(first: str, last: str) -> Author:
    return Author(first_name=first, last_name=last)


def test_commit_sync_turns_unique_violation_into_conflict(db_session, attach):
    # allow_duplication leaves the unique index as the only guard
    attach(Author, ["first_name", "last_name"], "handle", allow_duplication=True)
    db_session.add(_author("Grace", "Hopper"))
    commit_sync(db_session)

    db_session.add(_author("grace", "HOPPER"))
    with pytest.raises(ConflictError) as exc:
        commit_sync(db_session)
    assert "UNIQUE" in exc.value.detail.upper()
    assert not db_session.new


def test_flush_sync_conflict_rolls_back(db_session, attach):
    attach(Author, ["first_name", "last_name"], "handle", allow_duplication=True)
    first = _author("Alan", "Turing")
    db_session.add(first)
    flush_sync(db_session, first)

    second = _author("Alan", "Turing")
    db_session.add(second)
    with pytest.raises(ConflictError):
        flush_sync(db_session, second)
    assert not db_session.new


def test_commit_sync_without_conflict(db_session, attach):
    attach(Author, ["first_name", "last_name"], "handle")
    db_session.add_all([_author("Grace", "Hopper")])
    commit_sync(db_session)
    db_session.add(_author("Grace", "Hopper"))
    commit_sync(db_session)
    handles = sorted(author.handle for author in db_session.query(Author))
    assert handles == ["grace-hopper", "grace-hopper-1"]
