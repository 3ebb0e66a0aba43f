"""Searchable ComboBox for {value, label} option lists.

Typing filters the options (case-insensitive, substring match); the selected
option's ``value`` is stored as item data so labels and IDs stay separate
(e.g. label "California", value "04000US06").
"""

from __future__ import annotations
from typing import Any, Dict, Iterable, Optional
from PySide6.QtWidgets import QComboBox, QCompleter
from PySide6.QtCore import Qt, Signal
import logging

logger = logging.getLogger(__name__)


class SearchableComboBox(QComboBox):
    """Editable combobox with autocomplete over option labels.

    Signals:
        value_selected(str): Emitted with the option value when the user picks one

    Usage:
        combo = SearchableComboBox()
        combo.populate_options([{"value": "Nation", "label": "United States"}, ...])
        combo.value_selected.connect(store.set_selected_state)
    """

    value_selected = Signal(str)

    def __init__(self, parent: Optional[QComboBox] = None):
        super().__init__(parent)

        self.setEditable(True)
        self.setInsertPolicy(QComboBox.InsertPolicy.NoInsert)
        completer = QCompleter(self)
        completer.setCompletionMode(QCompleter.CompletionMode.PopupCompletion)
        completer.setCaseSensitivity(Qt.CaseSensitivity.CaseInsensitive)
        completer.setFilterMode(Qt.MatchFlag.MatchContains)
        self.setCompleter(completer)
        self.setMaxVisibleItems(15)

        self.activated.connect(self._on_activated)
        self.lineEdit().editingFinished.connect(self._on_editing_finished)

    def _on_activated(self, index: int):
        if index < 0:
            return
        self.setEditText(self.itemText(index))
        value = self.itemData(index)
        if value is not None:
            self.value_selected.emit(str(value))

    def _on_editing_finished(self):
        """Snap typed text to a matching option, or restore the current one."""
        typed_text = self.currentText().strip()
        index = self.findText(typed_text, Qt.MatchFlag.MatchFixedString)
        if index >= 0:
            if index != self.currentIndex():
                self.setCurrentIndex(index)
                self._on_activated(index)
        elif self.currentIndex() >= 0:
            self.setEditText(self.itemText(self.currentIndex()))

    def populate_options(self, options: Iterable[Dict[str, Any]]):
        """Replace options, keeping the current value selected if still present."""
        current = self.get_selected_value()
        self.blockSignals(True)
        try:
            self.clear()
            for option in options:
                self.addItem(str(option.get("label", option.get("value"))), option.get("value"))
            self.completer().setModel(self.model())
        finally:
            self.blockSignals(False)
        if current is not None:
            self.set_selected_value(current)

    def get_selected_value(self) -> Optional[str]:
        index = self.currentIndex()
        if index < 0:
            return None
        value = self.itemData(index)
        return None if value is None else str(value)

    def set_selected_value(self, value: Optional[str]):
        """Programmatically select an option by value (no value_selected emission)."""
        if value is None:
            return
        index = self.findData(value)
        if index >= 0:
            self.setCurrentIndex(index)
        else:
            logger.debug(f"Value {value!r} not in options; selection unchanged")


__all__ = ["SearchableComboBox"]
