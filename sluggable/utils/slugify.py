import re

from sluggable.utils.transliterate import transliterate

_NON_WORD_RUN = re.compile(r"[^a-z0-9_]+")
_HYPHEN_RUN = re.compile(r"-{2,}")


def tokenize(text: str) -> str:
    # Leading/trailing hyphens are kept: "Hello!" -> "hello-"
    text = _NON_WORD_RUN.sub("-", text.lower())
    return _HYPHEN_RUN.sub("-", text)


def to_slug(text: str) -> str:
    return tokenize(transliterate(text))
