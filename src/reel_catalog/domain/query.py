"""Store-independent description of a list query.

Adapters translate these values into their own query syntax, so the
repository contract never leaks SQL (or any other store dialect).
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Sequence, Union

_WORD = re.compile(r"\w+")


@dataclass(frozen=True, slots=True)
class MatchAll:
    """Matches every record."""


@dataclass(frozen=True, slots=True)
class TextSearch:
    """Full-text search over title and genres.

    A record matches when any term equals one of its words.
    """

    text: str

    @property
    def terms(self) -> tuple[str, ...]:
        return tuple(tokenize(self.text))


Predicate = Union[MatchAll, TextSearch]


@dataclass(frozen=True, slots=True)
class SortOrder:
    field: str
    descending: bool = False


# Public sort key -> record attribute
SORT_FIELDS: dict[str, str] = {
    "id": "id",
    "title": "title",
    "year": "year",
    "runtime": "runtime",
}

DEFAULT_SORT = SortOrder(field="id")


def tokenize(text: str) -> list[str]:
    """Lowercase word tokens, in order of appearance."""
    return _WORD.findall(text.lower())


def build_predicate(title: str | None, genres: Sequence[str] | None) -> Predicate:
    """
    Turn the caller's title/genre filter into a single predicate.

    Both sides present -> one search over "title, genre1, genre2, ...".
    One side present -> search on that side alone.
    Neither -> MatchAll.
    """
    terms: list[str] = []
    if title:
        terms.append(title)
    if genres:
        terms.extend(genres)

    if not terms:
        return MatchAll()

    return TextSearch(text=", ".join(terms))


def resolve_sort(sort: str) -> SortOrder:
    """Map a safelisted sort key to a field and direction; anything else sorts by ascending id."""
    descending = sort.startswith("-")
    field = SORT_FIELDS.get(sort[1:] if descending else sort)

    if field is None:
        return DEFAULT_SORT

    return SortOrder(field=field, descending=descending)
