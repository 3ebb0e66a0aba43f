"""Tests for the sort engine: tri-state cycle, stability, mixed types."""
import pytest

from popdash.table import SortDirection, SortState, UNSORTED, next_sort_state, sort_rows
from popdash.table.sorting import compare_values


class TestSortState:

    def test_unsorted_has_no_column_and_no_direction(self):
        assert UNSORTED.column is None
        assert UNSORTED.direction is None
        assert not UNSORTED.is_active

    def test_column_without_direction_rejected(self):
        with pytest.raises(ValueError):
            SortState("value", None)

    def test_direction_without_column_rejected(self):
        with pytest.raises(ValueError):
            SortState(None, SortDirection.ASC)

    def test_indicator_only_for_sorted_column(self):
        state = SortState("value", SortDirection.DESC)
        assert state.indicator_for("value") is SortDirection.DESC
        assert state.indicator_for("name") is None
        assert state.indicator_for(None) is None


class TestTriStateCycle:

    def test_same_column_cycles_asc_desc_none(self):
        state = next_sort_state(UNSORTED, "value")
        assert state == SortState("value", SortDirection.ASC)
        state = next_sort_state(state, "value")
        assert state == SortState("value", SortDirection.DESC)
        state = next_sort_state(state, "value")
        assert state == UNSORTED

    @pytest.mark.parametrize("direction", [SortDirection.ASC, SortDirection.DESC])
    def test_other_column_resets_to_asc(self, direction):
        state = SortState("name", direction)
        assert next_sort_state(state, "value") == SortState("value", SortDirection.ASC)

    def test_non_sortable_is_noop(self):
        state = SortState("name", SortDirection.DESC)
        assert next_sort_state(state, "value", sortable=False) is state

    def test_derived_column_is_noop(self):
        assert next_sort_state(UNSORTED, None) is UNSORTED


class TestSortRows:

    def test_ascending_and_descending(self, state_rows):
        asc = sort_rows(state_rows, "value", SortDirection.ASC)
        assert [r["value"] for r in asc] == [5, 120, 120, 300]
        desc = sort_rows(state_rows, "value", SortDirection.DESC)
        assert [r["value"] for r in desc] == [300, 120, 120, 5]

    @pytest.mark.parametrize("direction", [SortDirection.ASC, SortDirection.DESC])
    def test_ties_keep_original_order(self, state_rows, direction):
        result = sort_rows(state_rows, "value", direction)
        tied = [r["id"] for r in result if r["value"] == 120]
        assert tied == [2, 4]

    def test_no_direction_is_identity(self, state_rows):
        assert sort_rows(state_rows, None, None) == state_rows
        assert sort_rows(state_rows, "value", None) == state_rows

    def test_input_not_mutated(self, state_rows):
        before = list(state_rows)
        sort_rows(state_rows, "value", SortDirection.ASC)
        assert state_rows == before

    def test_idempotent(self, state_rows):
        once = sort_rows(state_rows, "name", SortDirection.DESC)
        twice = sort_rows(once, "name", SortDirection.DESC)
        assert once == twice

    def test_accepts_plain_string_direction(self, state_rows):
        result = sort_rows(state_rows, "name", "asc")
        assert [r["name"] for r in result] == ["State A", "State B", "State C", "State D"]

    def test_mixed_types_do_not_raise(self):
        rows = [
            {"id": 1, "value": 10},
            {"id": 2, "value": None},
            {"id": 3, "value": "n/a"},
            {"id": 4},
        ]
        result = sort_rows(rows, "value", SortDirection.ASC)
        assert sorted(r["id"] for r in result) == [1, 2, 3, 4]

    def test_missing_values_keep_relative_order(self):
        rows = [{"id": 1}, {"id": 2, "value": None}, {"id": 3}]
        result = sort_rows(rows, "value", SortDirection.DESC)
        assert [r["id"] for r in result] == [1, 2, 3]


def test_missing_value_does_not_block_ordering():
    rows = [{"id": 1, "value": 3}, {"id": 2, "value": None}, {"id": 3, "value": 1}]
    assert [r["id"] for r in sort_rows(rows, "value", SortDirection.ASC)] == [3, 1, 2]
    assert [r["id"] for r in sort_rows(rows, "value", SortDirection.DESC)] == [1, 3, 2]


def test_mixed_types_grouped_numbers_first():
    rows = [
        {"id": 1, "value": "n/a"},
        {"id": 2, "value": 10},
        {"id": 3},
        {"id": 4, "value": 2},
        {"id": 5, "value": "b"},
    ]
    result = sort_rows(rows, "value", SortDirection.ASC)
    assert [r["id"] for r in result] == [4, 2, 5, 1, 3]
    result = sort_rows(rows, "value", SortDirection.DESC)
    assert [r["id"] for r in result] == [2, 4, 1, 5, 3]


def test_compare_values_incomparable_is_equal():
    assert compare_values(1, "a") == 0
    assert compare_values(None, 3) == 0
    assert compare_values(1, 2) == -1
    assert compare_values("b", "a") == 1
