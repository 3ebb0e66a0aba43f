"""Client-side text search over row values.

A row matches when any of its values, stringified, contains the query as a
case-insensitive substring. Nested mappings and sequences are searched
through their leaf values; the containers themselves are never stringified.
``None`` never matches a non-empty query.
"""
from __future__ import annotations
from typing import Any, Iterable, Iterator, List, Mapping
import logging

from .columns import Row

logger = logging.getLogger(__name__)

_CONTAINERS = (list, tuple, set, frozenset)


def _leaf_values(value: Any) -> Iterator[Any]:
    if isinstance(value, Mapping):
        for nested in value.values():
            yield from _leaf_values(nested)
    elif isinstance(value, _CONTAINERS):
        for nested in value:
            yield from _leaf_values(nested)
    else:
        yield value


def row_matches(row: Row, query: str) -> bool:
    """Check whether any value in ``row`` contains ``query`` (case-insensitive).

    Args:
        row: Row mapping
        query: Search text; empty matches everything

    Returns:
        True if the row matches
    """
    if not query:
        return True
    needle = query.lower()
    for value in _leaf_values(row):
        if value is None:
            continue
        if needle in str(value).lower():
            return True
    return False


def filter_rows(rows: Iterable[Row], query: str) -> List[Row]:
    """Return the subsequence of rows matching ``query``, in original order."""
    if not query:
        return list(rows)
    result = [row for row in rows if row_matches(row, query)]
    logger.debug(f"Search '{query}' matched {len(result)} rows")
    return result


__all__ = ["row_matches", "filter_rows"]
