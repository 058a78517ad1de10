# tests/test_change_detection.py
import pytest

from conftest import FakeRecord
from sample_models import Article
from sluggable.services.change_detection import derive_source, modified_paths, was_modified
from sluggable.services.exceptions import SlugConfigurationError


def test_was_modified_single_field():
    record = FakeRecord(modified=["title"], title="Hello")
    assert was_modified(record, "title") is True
    assert was_modified(record, "slug") is False


def test_was_modified_list_is_any():
    record = FakeRecord(modified=["last_name"])
    assert was_modified(record, ["first_name", "last_name"]) is True
    assert was_modified(record, ["last_name", "first_name"]) is True
    assert was_modified(record, ["first_name", "nickname"]) is False
    assert was_modified(record, []) is False


def test_derive_source_joins_and_strips():
    record = FakeRecord(first_name="Ada ", last_name=" Lovelace")
    assert derive_source(record, ["first_name", "last_name"]) == "Ada   Lovelace"


def test_derive_source_single_name_and_coercion():
    record = FakeRecord(title="  Chapter ", number=7, missing=None)
    assert derive_source(record, "title") == "Chapter"
    assert derive_source(record, ["title", "number"]) == "Chapter  7"
    assert derive_source(record, ["missing", "number"]) == "7"


def test_derive_source_unknown_field_fails_fast():
    with pytest.raises(SlugConfigurationError):
        derive_source(FakeRecord(title="x"), ["title", "body"])


def test_modified_paths_reads_sqlalchemy_history(db_session):
    article = Article(title="Hello")
    assert modified_paths(article) == ["title"]

    db_session.add(article)
    db_session.commit()
    assert modified_paths(article) == []

    article.section = "news"
    assert was_modified(article, "section") is True
    assert was_modified(article, ["title", "slug"]) is False


def test_modified_paths_requires_change_tracking():
    class Plain:
        title = "x"

    with pytest.raises(SlugConfigurationError):
        modified_paths(Plain())
