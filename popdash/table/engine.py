"""TableEngine - composition root of the tabular data engine.

Fixed pipeline, recomputed from current inputs:

    rows ──► sort(sort_state) ──► filter(search_query) ──► paginate(page)
                                                               │
                                                               ▼
                                                        TableSnapshot

State policy:
- The engine keeps its own immutable copy of the caller's rows; changes go
  through ``set_rows`` and the other state-setting operations.
- Local search is skipped when an ``on_search`` delegate is configured (the
  host is expected to supply already-filtered rows).
- ``total_pages`` is derived from the sorted-and-filtered row count.
- New rows or a new search query send an engine-owned page back to page 1.
- Loading takes precedence over empty.

Derivations are memoized: processed rows are keyed on
(rows generation, sort state, effective query) and the page window on that
plus (page size, current page). ``cache_info()`` exposes hit/miss counters.
"""
from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, Hashable, Iterable, List, Optional, Tuple
import logging

from .actions import RowAction, visible_actions
from .columns import ColumnDefinition, Row
from .pagination import (
    PageToken,
    PageWindow,
    PaginationDescriptor,
    PaginationMode,
    Paginator,
    Uncontrolled,
    count_pages,
    paginate,
)
from .search import filter_rows
from .sorting import UNSORTED, SortDirection, SortState, next_sort_state, sort_rows

logger = logging.getLogger(__name__)

DEFAULT_EMPTY_STATE_MESSAGE = "No data available"


class RenderState(str, Enum):
    LOADING = "loading"
    EMPTY = "empty"
    POPULATED = "populated"


@dataclass(frozen=True)
class CacheInfo:
    hits: int
    misses: int


class _DerivationCache:
    """Single-entry cache: recomputes only when the key changes."""

    _MISSING = object()

    def __init__(self):
        self._key: Any = self._MISSING
        self._value: Any = None
        self.hits = 0
        self.misses = 0

    def get(self, key: Hashable, compute: Callable[[], Any]) -> Any:
        if self._key is not self._MISSING and self._key == key:
            self.hits += 1
            return self._value
        self.misses += 1
        self._value = compute()
        self._key = key
        return self._value


@dataclass(frozen=True)
class TableSnapshot:
    """Everything the presentation layer needs for one render.

    Attributes:
        render_state: LOADING, EMPTY or POPULATED
        columns: Column definitions, in display order
        rows: Visible rows for the current page
        sort_indicators: Per-column sort direction (aligned with ``columns``)
        page_tokens: Page-selector tokens (empty without pagination)
        current_page: Current 1-based page
        total_pages: Pages available for the processed rows
        total_rows: Sorted-and-filtered row count
        range_start: 1-based index of the first visible row (0 when none)
        range_end: 1-based index of the last visible row (0 when none)
        can_previous: Whether "previous" is enabled
        can_next: Whether "next" is enabled
        show_pagination: Whether the pagination footer should be rendered
        empty_state_message: Message for the EMPTY state
    """

    render_state: RenderState
    columns: Tuple[ColumnDefinition, ...]
    rows: Tuple[Row, ...]
    sort_indicators: Tuple[Optional[SortDirection], ...]
    page_tokens: Tuple[PageToken, ...]
    current_page: int
    total_pages: int
    total_rows: int
    range_start: int
    range_end: int
    can_previous: bool
    can_next: bool
    show_pagination: bool
    empty_state_message: str

    @property
    def is_loading(self) -> bool:
        return self.render_state is RenderState.LOADING

    @property
    def is_empty(self) -> bool:
        return self.render_state is RenderState.EMPTY

    def summary(self) -> str:
        """Footer text, e.g. 'Showing 11 to 20 of 57 results'."""
        return f"Showing {self.range_start} to {self.range_end} of {self.total_rows} results"


class TableEngine:
    """Sort, search and paginate rows for one table instance.

    Example:
        engine = TableEngine(
            columns=[key_column("label", sortable=True), key_column("value", sortable=True)],
            rows=rows,
            page_size=10,
        )
        engine.click_header(1)              # value ascending
        engine.set_search_query("texas")
        snapshot = engine.snapshot()
    """

    def __init__(
        self,
        columns: Iterable[ColumnDefinition],
        rows: Iterable[Row] = (),
        *,
        actions: Iterable[RowAction] = (),
        page_size: Optional[int] = None,
        pagination_mode: Optional[PaginationMode] = None,
        on_search: Optional[Callable[[str], Any]] = None,
        on_download: Optional[Callable[[], Any]] = None,
        on_row_click: Optional[Callable[[Row], Any]] = None,
        loading: bool = False,
        empty_state_message: str = DEFAULT_EMPTY_STATE_MESSAGE,
    ):
        """Initialize engine.

        Args:
            columns: Column definitions
            rows: Initial rows (copied)
            actions: Row actions
            page_size: Rows per page, or None to disable pagination
            pagination_mode: Controlled(...) or Uncontrolled(...) (default: Uncontrolled())
            on_search: External search delegate; disables local filtering
            on_download: Export hook invoked by ``download()``
            on_row_click: Row activation hook
            loading: Initial loading flag
            empty_state_message: Text shown when no rows remain
        """
        self.columns: Tuple[ColumnDefinition, ...] = tuple(columns)
        self.actions: Tuple[RowAction, ...] = tuple(actions)
        self.page_size = page_size
        self.on_search = on_search
        self.on_download = on_download
        self.on_row_click = on_row_click
        self.empty_state_message = empty_state_message
        self._loading = loading
        self._sort_state = UNSORTED
        self._search_query = ""
        self._paginator = Paginator(pagination_mode or Uncontrolled())
        self._rows: Tuple[Row, ...] = tuple(rows)
        self._generation = 1
        self._processed_cache = _DerivationCache()
        self._window_cache = _DerivationCache()

    # ---- inputs -------------------------------------------------------

    @property
    def rows(self) -> Tuple[Row, ...]:
        return self._rows

    @property
    def loading(self) -> bool:
        return self._loading

    @property
    def sort_state(self) -> SortState:
        return self._sort_state

    @property
    def search_query(self) -> str:
        return self._search_query

    @property
    def is_paginated(self) -> bool:
        return self.page_size is not None

    @property
    def is_controlled(self) -> bool:
        return self._paginator.is_controlled

    @property
    def current_page(self) -> int:
        return self._paginator.current_page

    def set_rows(self, rows: Iterable[Row]):
        """Replace the raw rows. An engine-owned page goes back to page 1."""
        self._rows = tuple(rows)
        self._generation += 1
        self._paginator.reset()
        logger.debug(f"Table rows replaced: {len(self._rows)} rows (generation {self._generation})")

    def set_loading(self, loading: bool):
        self._loading = bool(loading)

    def set_sort(self, state: SortState):
        if state != self._sort_state:
            logger.debug(f"Sort changed: {self._sort_state} → {state}")
            self._sort_state = state

    def click_header(self, column_index: int) -> bool:
        """Handle a click on a column header.

        Args:
            column_index: Index into ``columns``

        Returns:
            True if the sort state changed
        """
        column = self.columns[column_index]
        new_state = next_sort_state(self._sort_state, column.sort_key, column.is_sortable)
        if new_state == self._sort_state:
            return False
        self.set_sort(new_state)
        return True

    def set_search_query(self, query: str):
        """Update the search text and forward it to ``on_search`` if configured."""
        query = query or ""
        changed = query != self._search_query
        self._search_query = query
        if changed:
            self._paginator.reset()
        if self.on_search is not None:
            self.on_search(query)

    # ---- derivations --------------------------------------------------

    @property
    def effective_query(self) -> str:
        """Query applied locally ('' when an external delegate handles search)."""
        return "" if self.on_search is not None else self._search_query

    def _processed_key(self) -> Tuple[Hashable, ...]:
        return (self._generation, self._sort_state, self.effective_query)

    def processed_rows(self) -> List[Row]:
        """Rows after sorting and local filtering (before pagination)."""
        return list(self._processed())

    def _processed(self) -> Tuple[Row, ...]:
        return self._processed_cache.get(self._processed_key(), self._compute_processed)

    def _compute_processed(self) -> Tuple[Row, ...]:
        state = self._sort_state
        ordered = sort_rows(self._rows, state.column, state.direction)
        return tuple(filter_rows(ordered, self.effective_query))

    def pagination_descriptor(self) -> Optional[PaginationDescriptor]:
        """Descriptor for the current page, or None when pagination is off."""
        if self.page_size is None:
            return None
        total_pages = count_pages(len(self._processed()), self.page_size)
        self._paginator.total_pages = total_pages
        return PaginationDescriptor(
            page_size=self.page_size,
            current_page=self._paginator.current_page,
            total_pages=total_pages,
        )

    def page_window(self) -> PageWindow:
        """Visible rows and page tokens for the current page."""
        processed = self._processed()
        descriptor = self.pagination_descriptor()
        if descriptor is None:
            return PageWindow(rows=list(processed), tokens=[])
        key = (self._processed_key(), descriptor)
        window = self._window_cache.get(key, lambda: paginate(processed, descriptor))
        return PageWindow(rows=list(window.rows), tokens=list(window.tokens))

    def visible_rows(self) -> List[Row]:
        return self.page_window().rows

    def sort_indicator(self, column_index: int) -> Optional[SortDirection]:
        return self._sort_state.indicator_for(self.columns[column_index].sort_key)

    def actions_for(self, row: Row) -> List[RowAction]:
        return visible_actions(row, self.actions)

    def cache_info(self) -> Dict[str, CacheInfo]:
        return {
            "processed": CacheInfo(self._processed_cache.hits, self._processed_cache.misses),
            "window": CacheInfo(self._window_cache.hits, self._window_cache.misses),
        }

    def snapshot(self) -> TableSnapshot:
        """Derive the full render state for the presentation layer."""
        window = self.page_window()
        total_rows = len(self._processed())
        descriptor = self.pagination_descriptor()

        if self._loading:
            render_state = RenderState.LOADING
        elif not window.rows:
            render_state = RenderState.EMPTY
        else:
            render_state = RenderState.POPULATED

        if window.rows:
            offset = 0
            if descriptor is not None:
                offset = (descriptor.current_page - 1) * descriptor.page_size
            range_start = offset + 1
            range_end = offset + len(window.rows)
        else:
            range_start = range_end = 0

        return TableSnapshot(
            render_state=render_state,
            columns=self.columns,
            rows=tuple(window.rows),
            sort_indicators=tuple(self.sort_indicator(i) for i in range(len(self.columns))),
            page_tokens=tuple(window.tokens),
            current_page=self._paginator.current_page,
            total_pages=descriptor.total_pages if descriptor else (1 if total_rows else 0),
            total_rows=total_rows,
            range_start=range_start,
            range_end=range_end,
            can_previous=descriptor is not None and self._paginator.can_previous,
            can_next=descriptor is not None and self._paginator.can_next,
            show_pagination=descriptor is not None and render_state is RenderState.POPULATED,
            empty_state_message=self.empty_state_message,
        )

    # ---- navigation ---------------------------------------------------

    def go_to_page(self, token: PageToken) -> bool:
        """Select a page token. Ellipsis and the current page are no-ops."""
        if self.pagination_descriptor() is None:
            return False
        return self._paginator.select(token)

    def previous_page(self) -> bool:
        if self.pagination_descriptor() is None:
            return False
        return self._paginator.previous()

    def next_page(self) -> bool:
        if self.pagination_descriptor() is None:
            return False
        return self._paginator.next()

    def set_current_page(self, page: int):
        """Apply the host-owned page (controlled mode)."""
        self._paginator.set_current_page(page)

    # ---- hooks --------------------------------------------------------

    def activate_row(self, row: Row) -> bool:
        """Row click. Returns True if a row-click hook ran."""
        if self.on_row_click is None:
            return False
        self.on_row_click(row)
        return True

    def trigger_action(self, action: RowAction, row: Row):
        """Run a row action. Never fires the row-click hook."""
        logger.debug(f"Row action '{action.label}' triggered")
        return action.on_click(row)

    def download(self) -> bool:
        """Invoke the export hook. Returns True if one is configured."""
        if self.on_download is None:
            return False
        self.on_download()
        return True


__all__ = [
    "RenderState",
    "CacheInfo",
    "TableSnapshot",
    "TableEngine",
    "DEFAULT_EMPTY_STATE_MESSAGE",
]
