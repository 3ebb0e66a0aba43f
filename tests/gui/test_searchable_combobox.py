"""Tests for SearchableComboBox."""

import pytest
from PySide6.QtWidgets import QApplication

from popdash.gui.components import SearchableComboBox

OPTIONS = [
    {'value': 'Nation', 'label': 'United States'},
    {'value': '04000US06', 'label': 'California'},
    {'value': '04000US48', 'label': 'Texas'},
]


@pytest.fixture(scope="module")
def qapp():
    """Create QApplication instance for GUI tests."""
    app = QApplication.instance()
    if app is None:
        app = QApplication([])
    yield app


@pytest.fixture
def combo(qapp):
    combo = SearchableComboBox()
    combo.populate_options(OPTIONS)
    return combo


class TestSearchableComboBox:

    def test_labels_and_values_kept_separate(self, combo):
        assert combo.count() == 3
        assert combo.itemText(1) == 'California'
        assert combo.itemData(1) == '04000US06'

    def test_set_selected_value(self, combo):
        combo.set_selected_value('04000US48')
        assert combo.get_selected_value() == '04000US48'
        assert combo.currentText() == 'Texas'

    def test_unknown_value_leaves_selection(self, combo):
        combo.set_selected_value('04000US06')
        combo.set_selected_value('bogus')
        assert combo.get_selected_value() == '04000US06'

    def test_activation_emits_value(self, combo):
        received = []
        combo.value_selected.connect(received.append)
        combo.activated.emit(2)
        assert received == ['04000US48']

    def test_repopulate_keeps_selection(self, combo):
        combo.set_selected_value('04000US06')
        combo.populate_options(list(reversed(OPTIONS)))
        assert combo.get_selected_value() == '04000US06'
