"""Resource type naming for assembled documents.

Namers are plain ``str -> str`` callables; the assembler applies one to every
type it writes. ``pluralize`` covers regular English nouns plus a small table
of irregular ones, which is all resource type names usually need.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Final, TypeAlias

TypeNamer: TypeAlias = "Callable[[str], str]"

_IRREGULAR: Final[dict[str, str]] = {
    "person": "people",
    "man": "men",
    "woman": "women",
    "child": "children",
    "mouse": "mice",
    "goose": "geese",
    "foot": "feet",
    "tooth": "teeth",
    "ox": "oxen",
}
_UNCOUNTABLE: Final[frozenset[str]] = frozenset(
    {"equipment", "information", "rice", "money", "species", "series", "fish", "sheep", "news"}
)
_SIBILANT_SUFFIXES: Final[tuple[str, ...]] = ("s", "x", "z", "ch", "sh")
_VOWELS: Final[str] = "aeiou"


def verbatim(type_name: str) -> str:
    return type_name


def pluralize(word: str) -> str:
    """Return the plural form of ``word``, keeping compound prefixes intact.

    Only the last ``_``/``-`` separated part is inflected, so ``blog_post``
    becomes ``blog_posts``. Words that already look plural are left alone.
    """

    if not word:
        return word
    head, separator, last = _split_last(word)
    return f"{head}{separator}{_pluralize_word(last)}"


def _split_last(word: str) -> tuple[str, str, str]:
    for index in range(len(word) - 1, -1, -1):
        if word[index] in "_-":
            return word[:index], word[index], word[index + 1 :]
    return "", "", word


def _pluralize_word(word: str) -> str:
    lower = word.lower()
    if not lower or lower in _UNCOUNTABLE:
        return word
    if lower in _IRREGULAR:
        return _match_case(word, _IRREGULAR[lower])
    if lower in _IRREGULAR.values():
        return word
    if lower.endswith("sis"):
        return _match_case(word, word[:-2] + "es")
    if lower.endswith("s") and not lower.endswith(("ss", "us")):
        return word
    if lower.endswith(_SIBILANT_SUFFIXES):
        return _match_case(word, word + "es")
    if lower.endswith("y") and len(lower) > 1 and lower[-2] not in _VOWELS:
        return _match_case(word, word[:-1] + "ies")
    if lower.endswith("fe") and not lower.endswith("ffe"):
        return _match_case(word, word[:-2] + "ves")
    if lower.endswith(("lf", "rf")):
        return _match_case(word, word[:-1] + "ves")
    return _match_case(word, word + "s")


def _match_case(original: str, plural: str) -> str:
    if original.isupper():
        return plural.upper()
    if original[:1].isupper():
        return plural[:1].upper() + plural[1:]
    return plural
