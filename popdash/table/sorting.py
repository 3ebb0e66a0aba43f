"""Sort engine: tri-state header interaction and stable row ordering."""
from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from functools import cmp_to_key
from typing import Any, Iterable, List, Optional, Tuple
import logging

from .columns import Row

logger = logging.getLogger(__name__)


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"


@dataclass(frozen=True)
class SortState:
    """Current sort column and direction.

    Invariant: ``column is None`` iff ``direction is None``.
    """

    column: Optional[str] = None
    direction: Optional[SortDirection] = None

    def __post_init__(self):
        if (self.column is None) != (self.direction is None):
            raise ValueError(
                f"Sort column and direction must be set together: "
                f"column={self.column!r}, direction={self.direction!r}"
            )

    @property
    def is_active(self) -> bool:
        return self.column is not None

    def indicator_for(self, column: Optional[str]) -> Optional[SortDirection]:
        """Sort indicator for a header (None when the column is not sorted)."""
        if column is None or column != self.column:
            return None
        return self.direction


UNSORTED = SortState()


def next_sort_state(state: SortState, column: Optional[str], sortable: bool = True) -> SortState:
    """Compute the state after clicking a column header.

    Same column cycles none -> asc -> desc -> none. A different column always
    starts at asc. Non-sortable headers leave the state untouched.

    Args:
        state: Current sort state
        column: Sort key of the clicked column (None for derived columns)
        sortable: Whether the clicked column is sortable

    Returns:
        New SortState
    """
    if not sortable or column is None:
        return state

    if state.column != column:
        return SortState(column, SortDirection.ASC)
    if state.direction is SortDirection.ASC:
        return SortState(column, SortDirection.DESC)
    return UNSORTED


def compare_values(a: Any, b: Any) -> int:
    """Three-way comparison using ``<``.

    Pairs that cannot be ordered (TypeError) compare as equal so that the
    surrounding stable sort keeps their original order.
    """
    try:
        if a < b:
            return -1
        if b < a:
            return 1
    except TypeError:
        return 0
    return 0


def _rank(value: Any) -> Tuple[int, str]:
    """Group key: numbers, then other types by name, then missing values."""
    if value is None:
        return (2, "")
    if isinstance(value, (int, float)):
        return (0, "")
    return (1, type(value).__name__)


def sort_rows(rows: Iterable[Row], column: Optional[str], direction: Optional[SortDirection]) -> List[Row]:
    """Return rows ordered by the raw value at ``column``.

    Values are grouped as numbers, then other types (by type name), then
    missing/None. Groups keep that order in both directions; the direction
    applies within a group. Ties keep their original relative order.
    With no direction (or no column) the rows are returned in original order.

    Args:
        rows: Input rows (not modified)
        column: Field key to compare
        direction: SortDirection or None

    Returns:
        New list, a permutation of ``rows``
    """
    result = list(rows)
    if column is None or direction is None:
        return result

    sign = 1 if SortDirection(direction) is SortDirection.ASC else -1

    def _cmp(a: Row, b: Row) -> int:
        va, vb = a.get(column), b.get(column)
        ra, rb = _rank(va), _rank(vb)
        if ra != rb:
            return -1 if ra < rb else 1
        if va is None:
            return 0
        return sign * compare_values(va, vb)

    # list.sort is stable; descending negates the comparison rather than
    # reversing, so equal keys are never reordered
    result.sort(key=cmp_to_key(_cmp))
    logger.debug(f"Sorted {len(result)} rows by {column} {direction}")
    return result


__all__ = [
    "SortDirection",
    "SortState",
    "UNSORTED",
    "next_sort_state",
    "compare_values",
    "sort_rows",
]
