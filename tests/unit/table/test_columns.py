"""Tests for column definitions and accessors."""
from popdash.table import ColumnDefinition, Derive, Key, key_column


def test_key_column_defaults():
    column = key_column('value')
    assert column.header == 'Value'
    assert column.accessor == Key('value')
    assert column.sort_key == 'value'
    assert not column.sortable
    assert not column.is_sortable


def test_key_column_custom_header():
    assert key_column('label', 'Geography', sortable=True).header == 'Geography'


def test_derived_column_never_sortable():
    column = ColumnDefinition('Both', Derive(lambda row: f"{row['a']}-{row['b']}"), sortable=True)
    assert column.sort_key is None
    assert not column.is_sortable
    assert column.raw_value({'a': 1, 'b': 2}) is None
    assert column.render({'a': 1, 'b': 2}) == '1-2'


def test_render_missing_field_is_empty_string():
    column = key_column('value')
    assert column.render({}) == ''
    assert column.render({'value': None}) == ''
    assert column.render({'value': 0}) == 0


def test_cell_renderer_wins_over_accessor():
    column = key_column('value', cell_renderer=lambda row: f"{row['value']:,}")
    assert column.render({'value': 1234567}) == '1,234,567'
    assert column.raw_value({'value': 1234567}) == 1234567
