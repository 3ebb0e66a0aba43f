"""Pagination footer: Previous, page-token buttons, Next and a result summary."""
from __future__ import annotations
from typing import List, Optional
from PySide6.QtWidgets import QWidget, QHBoxLayout, QLabel, QPushButton
from PySide6.QtCore import Signal
import logging

from ...table import PageToken, TableSnapshot, is_ellipsis

logger = logging.getLogger(__name__)


class PaginationBar(QWidget):
    """Renders page tokens from a TableSnapshot.

    Ellipsis tokens become disabled "..." buttons; the current page is a
    checked, disabled button.

    Signals:
        previous_requested: "Previous" clicked
        next_requested: "Next" clicked
        page_requested(int): A page-number button clicked
    """

    previous_requested = Signal()
    next_requested = Signal()
    page_requested = Signal(int)

    def __init__(self, parent: Optional[QWidget] = None):
        super().__init__(parent)

        self.summary_label = QLabel()
        self.prev_button = QPushButton("Previous")
        self.next_button = QPushButton("Next")
        self.prev_button.clicked.connect(lambda: self.previous_requested.emit())
        self.next_button.clicked.connect(lambda: self.next_requested.emit())
        self.page_buttons: List[QPushButton] = []

        self._layout = QHBoxLayout(self)
        self._layout.setContentsMargins(0, 4, 0, 4)
        self._layout.addWidget(self.summary_label)
        self._layout.addStretch(1)
        self._layout.addWidget(self.prev_button)
        self._pages_index = self._layout.count()
        self._layout.addWidget(self.next_button)

    def update_from_snapshot(self, snapshot: TableSnapshot):
        """Rebuild buttons for the snapshot (hidden when pagination does not apply)."""
        self.setVisible(snapshot.show_pagination)
        if not snapshot.show_pagination:
            return

        self.summary_label.setText(snapshot.summary())
        self.prev_button.setEnabled(snapshot.can_previous)
        self.next_button.setEnabled(snapshot.can_next)

        for button in self.page_buttons:
            self._layout.removeWidget(button)
            button.deleteLater()
        self.page_buttons = []

        for offset, token in enumerate(snapshot.page_tokens):
            button = self._make_button(token, snapshot.current_page)
            self._layout.insertWidget(self._pages_index + offset, button)
            self.page_buttons.append(button)

    def _make_button(self, token: PageToken, current_page: int) -> QPushButton:
        if is_ellipsis(token):
            button = QPushButton("...")
            button.setEnabled(False)
            button.setFlat(True)
            return button

        button = QPushButton(str(token))
        if token == current_page:
            button.setCheckable(True)
            button.setChecked(True)
            button.setEnabled(False)
        else:
            button.clicked.connect(lambda _checked=False, page=token: self.page_requested.emit(page))
        return button


__all__ = ["PaginationBar"]
