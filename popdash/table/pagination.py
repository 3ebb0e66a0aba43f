"""Pagination windower: page slices and compressed page-selector tokens.

Token sequence for a page selector:

    total_pages <= 7      ->  1 2 3 4 5 6 7
    total_pages=20, p=10  ->  1 … 9 10 11 … 20

Malformed descriptors (page_size <= 0, current_page < 1 or past the last
page) are a caller error; they produce an empty slice instead of raising.
"""
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Sequence, Union
import logging

from .columns import Row

logger = logging.getLogger(__name__)

MAX_PAGES_WITHOUT_ELLIPSIS = 7


class _Ellipsis:
    """Marker for a collapsed run of page numbers. Never clickable."""

    _instance: Optional["_Ellipsis"] = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "ELLIPSIS"

    def __str__(self) -> str:
        return "..."


ELLIPSIS = _Ellipsis()

PageToken = Union[int, _Ellipsis]


def is_ellipsis(token: PageToken) -> bool:
    return token is ELLIPSIS


@dataclass(frozen=True)
class PaginationDescriptor:
    page_size: int
    current_page: int = 1
    total_pages: int = 0


@dataclass(frozen=True)
class PageWindow:
    """Visible rows for the current page plus the page-selector tokens."""
    rows: List[Row]
    tokens: List[PageToken]


@dataclass(frozen=True)
class Controlled:
    """Host owns the current page; changes are reported via ``on_page_change``."""
    on_page_change: Callable[[int], None]
    current_page: int = 1


@dataclass(frozen=True)
class Uncontrolled:
    """Engine owns the current page, starting at ``initial_page``."""
    initial_page: int = 1


PaginationMode = Union[Controlled, Uncontrolled]


def count_pages(total_rows: int, page_size: int) -> int:
    """Number of pages needed for ``total_rows`` (0 when there are no rows)."""
    if page_size <= 0 or total_rows <= 0:
        return 0
    return -(-total_rows // page_size)


def page_slice(rows: Sequence[Row], descriptor: PaginationDescriptor) -> List[Row]:
    """Rows visible on ``descriptor.current_page``.

    Args:
        rows: Already sorted and filtered rows
        descriptor: Pagination descriptor

    Returns:
        Slice of rows, clipped to the available length
    """
    if descriptor.page_size <= 0 or descriptor.current_page < 1:
        logger.debug(f"Malformed pagination descriptor, empty slice: {descriptor}")
        return []
    start = (descriptor.current_page - 1) * descriptor.page_size
    return list(rows[start:start + descriptor.page_size])


def build_page_tokens(total_pages: int, current_page: int) -> List[PageToken]:
    """Build the compressed page-selector sequence.

    Args:
        total_pages: Number of pages
        current_page: 1-based current page

    Returns:
        Page numbers with ELLIPSIS markers for collapsed runs
    """
    if total_pages <= MAX_PAGES_WITHOUT_ELLIPSIS:
        return list(range(1, total_pages + 1))

    tokens: List[PageToken] = [1]
    left = max(2, current_page - 1)
    right = min(total_pages - 1, current_page + 1)

    if left > 2:
        tokens.append(ELLIPSIS)
    tokens.extend(range(left, right + 1))
    if right < total_pages - 1:
        tokens.append(ELLIPSIS)

    tokens.append(total_pages)
    return tokens


def paginate(rows: Sequence[Row], descriptor: PaginationDescriptor) -> PageWindow:
    """Slice ``rows`` and build tokens for ``descriptor``."""
    return PageWindow(
        rows=page_slice(rows, descriptor),
        tokens=build_page_tokens(descriptor.total_pages, descriptor.current_page),
    )


@dataclass
class Paginator:
    """Page navigation for one table, in controlled or uncontrolled mode.

    In controlled mode every accepted change goes to ``on_page_change`` and
    ``current_page`` only moves when the host calls ``set_current_page``.
    In uncontrolled mode the paginator moves ``current_page`` itself.

    Example:
        pager = Paginator(Uncontrolled())
        pager.total_pages = 20
        pager.next()          # current_page == 2
    """

    mode: PaginationMode = field(default_factory=Uncontrolled)
    total_pages: int = 0
    current_page: int = field(init=False)

    def __post_init__(self):
        if isinstance(self.mode, Controlled):
            self.current_page = self.mode.current_page
        else:
            self.current_page = self.mode.initial_page

    @property
    def is_controlled(self) -> bool:
        return isinstance(self.mode, Controlled)

    @property
    def can_previous(self) -> bool:
        return self.current_page > 1

    @property
    def can_next(self) -> bool:
        return self.current_page < self.total_pages

    def select(self, token: PageToken) -> bool:
        """Request a page change.

        Ellipsis tokens, the current page and pages outside
        ``1..max(total_pages, 1)`` are no-ops.

        Returns:
            True if a change was requested
        """
        if is_ellipsis(token) or token == self.current_page:
            return False
        page = int(token)
        if not 1 <= page <= max(self.total_pages, 1):
            logger.debug(f"Ignoring out-of-range page {page} (total {self.total_pages})")
            return False
        if isinstance(self.mode, Controlled):
            logger.debug(f"Reporting page change to host: {self.current_page} → {page}")
            self.mode.on_page_change(page)
        else:
            logger.debug(f"Page changed: {self.current_page} → {page}")
            self.current_page = page
        return True

    def previous(self) -> bool:
        if not self.can_previous:
            return False
        return self.select(self.current_page - 1)

    def next(self) -> bool:
        if not self.can_next:
            return False
        return self.select(self.current_page + 1)

    def set_current_page(self, page: int):
        """Apply a page chosen by the host (controlled mode) or reset the page."""
        self.current_page = page

    def reset(self):
        """Return to the first page (uncontrolled mode only)."""
        if not self.is_controlled:
            self.current_page = 1


__all__ = [
    "ELLIPSIS",
    "PageToken",
    "is_ellipsis",
    "PaginationDescriptor",
    "PageWindow",
    "Controlled",
    "Uncontrolled",
    "PaginationMode",
    "count_pages",
    "page_slice",
    "build_page_tokens",
    "paginate",
    "Paginator",
]
