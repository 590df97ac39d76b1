"""Identifier casing helpers exposed to injected templates."""

from __future__ import annotations

import re
import unicodedata
from typing import Iterable

__all__ = ["camel_case", "kebab_case", "pascal_case"]


_WORD_BOUNDARY = re.compile(r"([a-z0-9])([A-Z])")
_SEPARATORS = re.compile(r"[^0-9a-zA-Z]+")


def _words(value: str | Iterable[str]) -> list[str]:
    if isinstance(value, Iterable) and not isinstance(value, (str, bytes)):
        value = " ".join(str(part) for part in value)

    text = unicodedata.normalize("NFKD", str(value))
    text = text.encode("ascii", "ignore").decode("ascii")
    text = _WORD_BOUNDARY.sub(r"\1 \2", text)
    return [word for word in _SEPARATORS.split(text) if word]


def kebab_case(value: str | Iterable[str]) -> str:
    """Return ``value`` as lowercase words joined by hyphens.

    ``"My Project"``, ``"myProject"`` and ``"my_project"`` all become
    ``"my-project"``. Non-ASCII characters are folded to their closest ASCII
    form or dropped.
    """

    return "-".join(word.lower() for word in _words(value))


def pascal_case(value: str | Iterable[str]) -> str:
    """Return ``value`` with every word capitalised and separators removed."""

    return "".join(word[:1].upper() + word[1:].lower() for word in _words(value))


def camel_case(value: str | Iterable[str]) -> str:
    """Return :func:`pascal_case` with a lowercase first letter."""

    pascal = pascal_case(value)
    return pascal[:1].lower() + pascal[1:]
