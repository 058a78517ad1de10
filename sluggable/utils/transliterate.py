"""ASCII folding for slug sources.

The fold table maps an ASCII target to the characters that fold into it.
It is compiled once into a ``str.translate`` mapping so every character is
replaced in a single pass; a target produced by one entry is never folded
again by a later one.
"""

from __future__ import annotations

import string
from functools import lru_cache
from typing import Iterable

# ---------------- Tabla de plegado ----------------
_LITERAL_TABLE: tuple[tuple[str, str], ...] = (
    # Latin-1 Supplement
    ("A", "ÀÁÂÃÄÅ"),
    ("a", "àáâãäåª"),
    ("AE", "Æ"),
    ("ae", "æ"),
    ("C", "Ç"),
    ("c", "ç"),
    ("D", "Ð"),
    ("d", "ð"),
    ("E", "ÈÉÊË"),
    ("e", "èéêë"),
    ("I", "ÌÍÎÏ"),
    ("i", "ìíîï"),
    ("N", "Ñ"),
    ("n", "ñ"),
    ("O", "ÒÓÔÕÖØ"),
    ("o", "òóôõöøº"),
    ("U", "ÙÚÛÜ"),
    ("u", "ùúûü"),
    ("Y", "Ý"),
    ("y", "ýÿ"),
    ("TH", "Þ"),
    ("th", "þ"),
    ("ss", "ß"),
    ("1", "¹"),
    ("2", "²"),
    ("3", "³"),
    # Latin Extended-A
    ("A", "ĀĂĄ"),
    ("a", "āăą"),
    ("C", "ĆĈĊČ"),
    ("c", "ćĉċč"),
    ("D", "ĎĐ"),
    ("d", "ďđ"),
    ("E", "ĒĔĖĘĚ"),
    ("e", "ēĕėęě"),
    ("G", "ĜĞĠĢ"),
    ("g", "ĝğġģ"),
    ("H", "ĤĦ"),
    ("h", "ĥħ"),
    ("I", "ĨĪĬĮİ"),
    ("i", "ĩīĭįı"),
    ("IJ", "Ĳ"),
    ("ij", "ĳ"),
    ("J", "Ĵ"),
    ("j", "ĵ"),
    ("K", "Ķ"),
    ("k", "ķĸ"),
    ("L", "ĹĻĽĿŁ"),
    ("l", "ĺļľŀł"),
    ("N", "ŃŅŇŊ"),
    ("n", "ńņňŉŋ"),
    ("O", "ŌŎŐ"),
    ("o", "ōŏő"),
    ("OE", "Œ"),
    ("oe", "œ"),
    ("R", "ŔŖŘ"),
    ("r", "ŕŗř"),
    ("S", "ŚŜŞŠ"),
    ("s", "śŝşšſ"),
    ("T", "ŢŤŦ"),
    ("t", "ţťŧ"),
    ("U", "ŨŪŬŮŰŲ"),
    ("u", "ũūŭůűų"),
    ("W", "Ŵ"),
    ("w", "ŵ"),
    ("Y", "ŶŸ"),
    ("y", "ŷ"),
    ("Z", "ŹŻŽ"),
    ("z", "źżž"),
    # Latin Extended-B
    ("A", "ǍǞǠǺȀȂȦȺ"),
    ("a", "ǎǟǡǻȁȃȧ"),
    ("AE", "ǢǼ"),
    ("ae", "ǣǽ"),
    ("B", "ƁƂɃ"),
    ("b", "ƀƃ"),
    ("C", "ƇȻ"),
    ("c", "ƈȼ"),
    ("D", "ƉƊƋ"),
    ("d", "ƌ"),
    ("DZ", "ǄǱ"),
    ("Dz", "ǅǲ"),
    ("dz", "ǆǳ"),
    ("db", "ȸ"),
    ("E", "ȄȆȨɆ"),
    ("e", "ǝȅȇȩɇ"),
    ("F", "Ƒ"),
    ("f", "ƒ"),
    ("G", "ƓǤǦǴ"),
    ("g", "ǥǧǵ"),
    ("H", "Ȟ"),
    ("h", "ȟ"),
    ("HV", "Ƕ"),
    ("hv", "ƕ"),
    ("I", "ƗǏȈȊ"),
    ("i", "ǐȉȋ"),
    ("J", "Ɉ"),
    ("j", "ǰɉ"),
    ("K", "ƘǨ"),
    ("k", "ƙǩ"),
    ("L", "Ƚ"),
    ("l", "ƚ"),
    ("LJ", "Ǉ"),
    ("Lj", "ǈ"),
    ("lj", "ǉ"),
    ("N", "ƝǸ"),
    ("n", "ƞǹ"),
    ("NJ", "Ǌ"),
    ("Nj", "ǋ"),
    ("nj", "ǌ"),
    ("O", "ƟƠǑǪǬǾȌȎȪȬȮȰ"),
    ("o", "ơǒǫǭǿȍȏȫȭȯȱ"),
    ("OI", "Ƣ"),
    ("oi", "ƣ"),
    ("OU", "Ȣ"),
    ("ou", "ȣ"),
    ("P", "Ƥ"),
    ("p", "ƥ"),
    ("Q", "Ɋ"),
    ("q", "ɋ"),
    ("qp", "ȹ"),
    ("R", "ȐȒɌ"),
    ("r", "ȑȓɍ"),
    ("S", "Ș"),
    ("s", "șȿ"),
    ("T", "ƬƮȚȾ"),
    ("t", "ƫƭț"),
    ("U", "ƯǓǕǗǙǛȔȖɄ"),
    ("u", "ưǔǖǘǚǜȕȗ"),
    ("V", "Ʋ"),
    ("Y", "ƳȲɎ"),
    ("y", "ƴȳɏ"),
    ("Z", "ƵȤ"),
    ("z", "ƶȥɀ"),
    # Latin Extended Additional, outside the paired blocks
    ("a", "ẚ"),
    ("h", "ẖ"),
    ("s", "ẛ"),
    ("t", "ẗ"),
    ("w", "ẘ"),
    ("y", "ẙ"),
    ("SS", "ẞ"),
    # Ligatures
    ("AA", "Ꜳ"),
    ("aa", "ꜳ"),
    ("ff", "ﬀ"),
    ("fi", "ﬁ"),
    ("fl", "ﬂ"),
    ("ffi", "ﬃ"),
    ("ffl", "ﬄ"),
    ("st", "ﬅﬆ"),
)

# Latin Extended Additional alternates capital/small for each letter below.
_EXTENDED_ADDITIONAL_BLOCKS: tuple[tuple[int, str], ...] = (
    (
        0x1E00,
        "A" "BBB" "C" "DDDDD" "EEEEE" "F" "G" "HHHHH" "II" "KKK" "LLLL" "MMM"
        "NNNN" "OOOO" "PP" "RRRR" "SSSSS" "TTTT" "UUUUU" "VV" "WWWWW" "XX"
        "Y" "ZZZ",
    ),
    (0x1EA0, "A" * 12 + "E" * 8 + "I" * 2 + "O" * 12 + "U" * 7 + "Y" * 4),
)

# Enclosed and fullwidth forms run in code point order.
_SEQUENTIAL_BLOCKS: tuple[tuple[int, Iterable[str]], ...] = (
    (0x249C, string.ascii_lowercase),  # parenthesized small letters
    (0x24B6, string.ascii_uppercase),  # circled capital letters
    (0x24D0, string.ascii_lowercase),  # circled small letters
    (0x2460, [str(n) for n in range(1, 21)]),  # circled numbers 1-20
    (0x24EA, "0"),
    (0xFF10, string.digits),
    (0xFF21, string.ascii_uppercase),
    (0xFF41, string.ascii_lowercase),
)


def _paired_entries(start: int, letters: str) -> list[tuple[str, str]]:
    entries = []
    for offset, letter in enumerate(letters):
        upper = chr(start + 2 * offset)
        lower = chr(start + 2 * offset + 1)
        entries.append((letter.upper(), upper))
        entries.append((letter.lower(), lower))
    return entries


def _sequential_entries(start: int, targets: Iterable[str]) -> list[tuple[str, str]]:
    return [(target, chr(start + offset)) for offset, target in enumerate(targets)]


def _build_table() -> tuple[tuple[str, str], ...]:
    entries = list(_LITERAL_TABLE)
    for start, letters in _EXTENDED_ADDITIONAL_BLOCKS:
        entries.extend(_paired_entries(start, letters))
    for start, targets in _SEQUENTIAL_BLOCKS:
        entries.extend(_sequential_entries(start, targets))
    return tuple(entries)


FOLD_TABLE: tuple[tuple[str, str], ...] = _build_table()


@lru_cache(maxsize=1)
def fold_map() -> dict[int, str]:
    """Return the fold table as a ``str.translate`` mapping.

    When two entries name the same source character the earlier one wins,
    which is what applying the table in order would produce.
    """
    mapping: dict[int, str] = {}
    for target, sources in FOLD_TABLE:
        for char in sources:
            mapping.setdefault(ord(char), target)
    return mapping


def transliterate(text: str) -> str:
    """Fold every table character in ``text`` to its ASCII equivalent.

    Characters outside the table are returned unchanged, so the result is
    not guaranteed to be ASCII; the tokenizer takes care of the rest.

    Examples:
        transliterate("Ærøskøbing")  # "AEroskobing"
        transliterate("Straße")  # "Strasse"
        transliterate("Ⓢⓛⓤⓖ")  # "Slug"
    """
    return text.translate(fold_map())
