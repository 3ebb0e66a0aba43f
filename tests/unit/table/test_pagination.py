"""Tests for page slicing, page-selector tokens and the Paginator."""
import pytest

from popdash.table import (
    ELLIPSIS,
    Controlled,
    PaginationDescriptor,
    Paginator,
    Uncontrolled,
    build_page_tokens,
    count_pages,
    is_ellipsis,
    page_slice,
    paginate,
)

ROWS = [{'id': i} for i in range(1, 26)]


class TestCountPages:

    @pytest.mark.parametrize("total,size,expected", [
        (0, 10, 0),
        (1, 10, 1),
        (10, 10, 1),
        (11, 10, 2),
        (25, 10, 3),
        (25, 0, 0),
        (25, -1, 0),
    ])
    def test_ceil_division(self, total, size, expected):
        assert count_pages(total, size) == expected


class TestPageSlice:

    def test_first_and_last_page(self):
        assert [r['id'] for r in page_slice(ROWS, PaginationDescriptor(10, 1, 3))] == list(range(1, 11))
        assert [r['id'] for r in page_slice(ROWS, PaginationDescriptor(10, 3, 3))] == list(range(21, 26))

    def test_page_past_end_is_empty(self):
        assert page_slice(ROWS, PaginationDescriptor(10, 4, 3)) == []

    @pytest.mark.parametrize("descriptor", [
        PaginationDescriptor(0, 1, 0),
        PaginationDescriptor(-5, 1, 0),
        PaginationDescriptor(10, 0, 3),
        PaginationDescriptor(10, -2, 3),
    ])
    def test_malformed_descriptor_yields_empty_slice(self, descriptor):
        assert page_slice(ROWS, descriptor) == []

    def test_returns_new_list(self):
        rows = list(ROWS)
        result = page_slice(rows, PaginationDescriptor(30, 1, 1))
        assert result == rows
        assert result is not rows


class TestPageTokens:

    def test_few_pages_listed_in_full(self):
        assert build_page_tokens(5, 1) == [1, 2, 3, 4, 5]
        assert build_page_tokens(7, 4) == [1, 2, 3, 4, 5, 6, 7]

    def test_no_pages(self):
        assert build_page_tokens(0, 1) == []

    def test_middle_page_collapses_both_sides(self):
        assert build_page_tokens(20, 10) == [1, ELLIPSIS, 9, 10, 11, ELLIPSIS, 20]

    def test_first_page(self):
        assert build_page_tokens(20, 1) == [1, 2, ELLIPSIS, 20]

    def test_last_page(self):
        assert build_page_tokens(20, 20) == [1, ELLIPSIS, 19, 20]

    def test_near_start_has_no_leading_ellipsis(self):
        assert build_page_tokens(20, 3) == [1, 2, 3, 4, ELLIPSIS, 20]

    @pytest.mark.parametrize("current", range(1, 21))
    def test_first_last_and_current_always_present(self, current):
        tokens = build_page_tokens(20, current)
        assert tokens[0] == 1
        assert tokens[-1] == 20
        assert current in tokens
        # no two ellipses side by side
        for a, b in zip(tokens, tokens[1:]):
            assert not (is_ellipsis(a) and is_ellipsis(b))

    def test_ellipsis_marker(self):
        assert is_ellipsis(ELLIPSIS)
        assert not is_ellipsis(3)
        assert str(ELLIPSIS) == "..."
        assert repr(ELLIPSIS) == "ELLIPSIS"


def test_paginate_combines_slice_and_tokens():
    window = paginate(ROWS, PaginationDescriptor(10, 2, 3))
    assert [r['id'] for r in window.rows] == list(range(11, 21))
    assert window.tokens == [1, 2, 3]


class TestUncontrolledPaginator:

    def test_starts_at_initial_page(self):
        pager = Paginator(Uncontrolled(initial_page=3), total_pages=5)
        assert pager.current_page == 3
        assert not pager.is_controlled

    def test_next_previous_bounds(self):
        pager = Paginator(Uncontrolled(), total_pages=2)
        assert not pager.can_previous
        assert pager.previous() is False
        assert pager.next() is True
        assert pager.current_page == 2
        assert not pager.can_next
        assert pager.next() is False
        assert pager.previous() is True
        assert pager.current_page == 1

    def test_select_ellipsis_and_current_are_noops(self):
        pager = Paginator(Uncontrolled(), total_pages=20)
        assert pager.select(ELLIPSIS) is False
        assert pager.select(1) is False
        assert pager.select(7) is True
        assert pager.current_page == 7

    def test_out_of_range_pages_ignored(self):
        pager = Paginator(Uncontrolled(), total_pages=5)
        assert pager.select(6) is False
        assert pager.select(0) is False
        assert pager.select(-1) is False
        assert pager.current_page == 1
        assert pager.select(5) is True

    def test_controlled_out_of_range_not_reported(self):
        requested = []
        pager = Paginator(Controlled(requested.append), total_pages=3)
        assert pager.select(4) is False
        assert requested == []

    def test_reset(self):
        pager = Paginator(Uncontrolled(initial_page=4), total_pages=5)
        pager.reset()
        assert pager.current_page == 1


class TestControlledPaginator:

    def test_reports_without_moving(self):
        requested = []
        pager = Paginator(Controlled(requested.append, current_page=2), total_pages=5)
        assert pager.is_controlled
        assert pager.next() is True
        assert requested == [3]
        assert pager.current_page == 2

    def test_host_applies_page(self):
        requested = []
        pager = Paginator(Controlled(requested.append), total_pages=5)
        pager.select(4)
        pager.set_current_page(requested[-1])
        assert pager.current_page == 4

    def test_ellipsis_never_reported(self):
        requested = []
        pager = Paginator(Controlled(requested.append), total_pages=20)
        pager.select(ELLIPSIS)
        assert requested == []

    def test_reset_does_not_move_host_page(self):
        pager = Paginator(Controlled(lambda page: None, current_page=3), total_pages=5)
        pager.reset()
        assert pager.current_page == 3
