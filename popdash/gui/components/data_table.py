"""DataTable widget: title, search, export, grid, loading/empty state and pager.

All table logic lives in TableEngine; this widget forwards user input to the
engine and re-renders the resulting snapshot:

    header click  → engine.click_header(col)
    search typing → engine.set_search_query(text)   (debounced)
    pager         → engine.previous_page / next_page / go_to_page
    action button → engine.trigger_action(action, row)
    row click     → engine.activate_row(row)
"""
from __future__ import annotations
from typing import Iterable, Optional
from PySide6.QtWidgets import (
    QHBoxLayout, QHeaderView, QLabel, QLineEdit, QPushButton, QTableView, QVBoxLayout, QWidget,
)
from PySide6.QtCore import QModelIndex, QTimer, Qt
import logging

from ...table import RenderState, Row, RowAction, TableEngine
from ..models import EngineTableModel
from .pagination_bar import PaginationBar

logger = logging.getLogger(__name__)

LOADING_TEXT = "Loading data..."


class DataTable(QWidget):
    """Table widget driven by a TableEngine.

    Example:
        engine = TableEngine(population_columns(), page_size=10)
        table = DataTable(engine, title="Data Table", searchable=True)
        engine.set_rows(rows)
        table.refresh()
    """

    def __init__(
        self,
        engine: TableEngine,
        title: str = "",
        subtitle: str = "",
        searchable: bool = False,
        search_placeholder: str = "Search...",
        hide_header: bool = False,
        debounce_ms: int = 250,
        parent: Optional[QWidget] = None,
    ):
        """Initialize data table.

        Args:
            engine: Engine holding rows and table state
            title: Title above the grid
            subtitle: Smaller text under the title
            searchable: Show the search box
            search_placeholder: Placeholder for the search box
            hide_header: Hide title/search/export row entirely
            debounce_ms: Delay after the last keystroke before searching
            parent: Parent widget
        """
        super().__init__(parent)
        self.engine = engine
        self.model = EngineTableModel(engine, self)

        # Header row: title, search, export
        self.header_widget = QWidget()
        header_layout = QHBoxLayout(self.header_widget)
        header_layout.setContentsMargins(0, 0, 0, 0)
        titles = QVBoxLayout()
        self.title_label = QLabel(title)
        self.title_label.setStyleSheet("font-weight: 600; font-size: 14pt;")
        self.title_label.setVisible(bool(title))
        self.subtitle_label = QLabel(subtitle)
        self.subtitle_label.setVisible(bool(subtitle))
        titles.addWidget(self.title_label)
        titles.addWidget(self.subtitle_label)
        header_layout.addLayout(titles)
        header_layout.addStretch(1)

        self.search_field = QLineEdit()
        self.search_field.setPlaceholderText(search_placeholder)
        self.search_field.setClearButtonEnabled(True)
        self.search_field.setVisible(searchable)
        header_layout.addWidget(self.search_field)

        self.export_button = QPushButton("Export")
        self.export_button.setVisible(engine.on_download is not None)
        self.export_button.clicked.connect(self._on_export_clicked)
        header_layout.addWidget(self.export_button)
        self.header_widget.setVisible(not hide_header)

        self._search_timer = QTimer(self)
        self._search_timer.setSingleShot(True)
        self._search_timer.setInterval(debounce_ms)
        self._search_timer.timeout.connect(self._apply_search)
        self.search_field.textChanged.connect(lambda _text: self._search_timer.start())

        # Grid
        self.table_view = QTableView()
        self.table_view.setModel(self.model)
        self.table_view.setSelectionBehavior(QTableView.SelectRows)
        self.table_view.setSelectionMode(QTableView.SingleSelection)
        self.table_view.verticalHeader().setVisible(False)
        header = self.table_view.horizontalHeader()
        header.setStretchLastSection(True)
        header.setSectionResizeMode(QHeaderView.Interactive)
        header.setSectionsClickable(True)
        header.sectionClicked.connect(self._on_header_clicked)
        self.table_view.clicked.connect(self._on_row_clicked)

        # Loading / empty placeholder
        self.state_label = QLabel()
        self.state_label.setAlignment(Qt.AlignCenter)
        self.state_label.setStyleSheet("color: gray; padding: 24px;")

        self.pagination_bar = PaginationBar()
        self.pagination_bar.previous_requested.connect(self._on_previous)
        self.pagination_bar.next_requested.connect(self._on_next)
        self.pagination_bar.page_requested.connect(self._on_page)

        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.addWidget(self.header_widget)
        layout.addWidget(self.table_view)
        layout.addWidget(self.state_label)
        layout.addWidget(self.pagination_bar)

        self._apply_column_widths()
        self.refresh()

    # ---- rendering ----------------------------------------------------

    def refresh(self):
        """Re-render from the engine's current state."""
        self.model.refresh()
        snapshot = self.model.snapshot

        if snapshot.render_state is RenderState.LOADING:
            self.state_label.setText(LOADING_TEXT)
        elif snapshot.render_state is RenderState.EMPTY:
            self.state_label.setText(snapshot.empty_state_message)
        self.state_label.setVisible(snapshot.render_state is not RenderState.POPULATED)

        self.pagination_bar.update_from_snapshot(snapshot)
        self._install_action_buttons()

    def set_rows(self, rows: Iterable[Row]):
        self.engine.set_rows(rows)
        self.engine.set_loading(False)
        self.refresh()

    def set_loading(self, loading: bool):
        self.engine.set_loading(loading)
        self.refresh()

    def show_message(self, message: str):
        """Show a message in place of the grid (e.g. a load error)."""
        self.engine.set_rows([])
        self.engine.set_loading(False)
        self.refresh()
        self.state_label.setText(message)

    def _apply_column_widths(self):
        for col, column in enumerate(self.engine.columns):
            width = (column.width or "").strip().lower()
            if width.endswith("px"):
                width = width[:-2]
            if width.isdigit():
                self.table_view.setColumnWidth(col, int(width))

    def _install_action_buttons(self):
        action_col = self.model.actions_column
        if action_col is None:
            return
        for row_index in range(self.model.rowCount()):
            row = self.model.get_row_data(row_index)
            cell = QWidget()
            cell_layout = QHBoxLayout(cell)
            cell_layout.setContentsMargins(2, 0, 2, 0)
            cell_layout.addStretch(1)
            for action in self.engine.actions_for(row):
                cell_layout.addWidget(self._make_action_button(action, row))
            self.table_view.setIndexWidget(self.model.index(row_index, action_col), cell)

    def _make_action_button(self, action: RowAction, row: Row) -> QPushButton:
        button = QPushButton(action.label)
        if action.style:
            button.setStyleSheet(action.style)
        button.clicked.connect(lambda _checked=False, a=action, r=row: self.engine.trigger_action(a, r))
        return button

    # ---- user input ---------------------------------------------------

    def _on_header_clicked(self, section: int):
        if section >= len(self.engine.columns):
            return
        if self.engine.click_header(section):
            self.refresh()

    def _apply_search(self):
        self.engine.set_search_query(self.search_field.text())
        self.refresh()

    def _on_row_clicked(self, index: QModelIndex):
        if index.column() == self.model.actions_column:
            return
        row = self.model.get_row_data(index.row())
        if row is not None:
            self.engine.activate_row(row)

    def _on_export_clicked(self):
        self.engine.download()

    def _on_previous(self):
        if self.engine.previous_page():
            self.refresh()

    def _on_next(self):
        if self.engine.next_page():
            self.refresh()

    def _on_page(self, page: int):
        if self.engine.go_to_page(page):
            self.refresh()


__all__ = ["DataTable", "LOADING_TEXT"]
