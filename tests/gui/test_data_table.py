"""Tests for the DataTable widget."""

import pytest
from PySide6.QtWidgets import QApplication

from popdash.gui.components import DataTable
from popdash.gui.components.data_table import LOADING_TEXT
from popdash.table import RowAction, TableEngine, key_column


@pytest.fixture(scope="module")
def qapp():
    """Create QApplication instance for GUI tests."""
    app = QApplication.instance()
    if app is None:
        app = QApplication([])
    yield app


@pytest.fixture
def engine():
    rows = [{'id': i, 'name': f"Row {i}", 'value': i * 100} for i in range(1, 26)]
    return TableEngine(
        [key_column('name', sortable=True), key_column('value', sortable=True)],
        rows,
        page_size=10,
    )


@pytest.fixture
def table(qapp, engine):
    return DataTable(engine, title="Data Table", searchable=True)


class TestDataTableRendering:
    """Snapshot states map onto widgets."""

    def test_populated(self, table):
        assert table.model.rowCount() == 10
        assert table.state_label.isHidden()
        assert not table.pagination_bar.isHidden()

    def test_loading(self, table):
        table.set_loading(True)
        assert table.state_label.text() == LOADING_TEXT
        assert not table.state_label.isHidden()
        assert table.model.rowCount() == 0
        assert table.pagination_bar.isHidden()

    def test_empty_message(self, qapp):
        engine = TableEngine([key_column('name')], [], empty_state_message="Nothing yet")
        table = DataTable(engine)
        assert table.state_label.text() == "Nothing yet"
        assert not table.state_label.isHidden()

    def test_show_message_replaces_rows(self, table):
        table.show_message("Failed to load")
        assert table.state_label.text() == "Failed to load"
        assert table.model.rowCount() == 0

    def test_set_rows_clears_loading(self, table, engine):
        table.set_loading(True)
        table.set_rows([{'id': 1, 'name': 'Only', 'value': 1}])
        assert not engine.loading
        assert table.model.rowCount() == 1

    def test_export_button_only_with_hook(self, qapp, engine):
        assert DataTable(engine).export_button.isHidden()
        engine.on_download = lambda: None
        assert not DataTable(engine).export_button.isHidden()

    def test_search_hidden_unless_searchable(self, qapp, engine):
        assert DataTable(engine).search_field.isHidden()


class TestDataTableInteraction:
    """User input is forwarded to the engine."""

    def test_header_click_sorts(self, table, engine):
        table.table_view.horizontalHeader().sectionClicked.emit(1)
        assert engine.sort_state.column == 'value'
        table.table_view.horizontalHeader().sectionClicked.emit(1)
        assert table.model.get_row_data(0)['value'] == 2500

    def test_search_applies_after_debounce(self, table):
        table.search_field.setText("Row 2")
        assert table.model.rowCount() == 10
        table._search_timer.stop()
        table._apply_search()
        # Row 2 and Row 20..25
        assert table.model.rowCount() == 7

    def test_pager_navigation(self, table, engine):
        table.pagination_bar.next_button.click()
        assert engine.current_page == 2
        assert table.model.get_row_data(0)['id'] == 11
        table.pagination_bar.page_buttons[-1].click()
        assert engine.current_page == 3
        assert table.model.rowCount() == 5

    def test_action_does_not_fire_row_click(self, qapp):
        clicked, acted = [], []
        action = RowAction('View', acted.append)
        engine = TableEngine([key_column('name')], [{'name': 'A'}], actions=[action], on_row_click=clicked.append)
        table = DataTable(engine)
        table._on_row_clicked(table.model.index(0, table.model.actions_column))
        assert clicked == []
        table._on_row_clicked(table.model.index(0, 0))
        assert clicked == [{'name': 'A'}]
        engine.trigger_action(action, {'name': 'A'})
        assert acted == [{'name': 'A'}]
