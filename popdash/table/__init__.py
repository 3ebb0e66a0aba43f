"""Generic tabular data engine: sorting, search and windowed pagination."""
from .columns import ColumnDefinition, Derive, Key, Row, key_column
from .sorting import SortDirection, SortState, UNSORTED, next_sort_state, sort_rows
from .search import filter_rows, row_matches
from .pagination import (
    ELLIPSIS,
    Controlled,
    PageToken,
    PageWindow,
    PaginationDescriptor,
    Paginator,
    Uncontrolled,
    build_page_tokens,
    count_pages,
    is_ellipsis,
    page_slice,
    paginate,
)
from .actions import RowAction, visible_actions
from .engine import RenderState, TableEngine, TableSnapshot

__all__ = [
    'ColumnDefinition', 'Derive', 'Key', 'Row', 'key_column',
    'SortDirection', 'SortState', 'UNSORTED', 'next_sort_state', 'sort_rows',
    'filter_rows', 'row_matches',
    'ELLIPSIS', 'Controlled', 'PageToken', 'PageWindow', 'PaginationDescriptor',
    'Paginator', 'Uncontrolled', 'build_page_tokens', 'count_pages', 'is_ellipsis',
    'page_slice', 'paginate',
    'RowAction', 'visible_actions',
    'RenderState', 'TableEngine', 'TableSnapshot',
]
