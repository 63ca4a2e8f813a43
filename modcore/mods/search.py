# modcore/mods/search.py
from __future__ import annotations
from collections.abc import Callable, Iterable, Sequence
from typing import TypeVar

__all__ = ["scoreFields", "searchList"]

T = TypeVar("T")



_EXACT = 3
_PREFIX = 2
_CONTAINS = 1



def scoreFields(fields: Iterable[str], query: str) -> int:
    """
    Score how well `query` matches any of `fields`, case-insensitively.

    3 = exact match, 2 = prefix, 1 = substring, 0 = no match.
    """
    best = 0
    for value in fields:
        text = value.lower()
        if text == query:
            return _EXACT
        if text.startswith(query):
            best = max(best, _PREFIX)
        elif query in text:
            best = max(best, _CONTAINS)
    return best



def searchList(items: Sequence[T], query: str, fields: Callable[[T], Iterable[str]]) -> list[T]:
    """
    Return the items matching `query`, best matches first.

    Items that don't match at all are dropped. Equal scores keep input order.
    An empty query matches everything.
    """
    needle = query.strip().lower()
    if not needle:
        return list(items)

    scored: list[tuple[int, int, T]] = []
    for idx, item in enumerate(items):
        score = scoreFields((value for value in fields(item) if value), needle)
        if score > 0:
            scored.append((-score, idx, item))

    scored.sort(key=lambda entry: (entry[0], entry[1]))
    return [item for _score, _idx, item in scored]
