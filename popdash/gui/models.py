"""Qt table model backed by a TableEngine.

The model renders the engine's current snapshot; all sorting, searching and
paging happens in the engine. Call ``refresh()`` after changing engine state.
"""
from __future__ import annotations
from typing import Optional
from PySide6.QtCore import Qt, QAbstractTableModel, QModelIndex
import logging

from ..table import RenderState, Row, SortDirection, TableEngine, TableSnapshot

logger = logging.getLogger(__name__)

SORT_ARROWS = {SortDirection.ASC: " ▲", SortDirection.DESC: " ▼"}


class EngineTableModel(QAbstractTableModel):
    """Model exposing the visible page of a TableEngine."""

    def __init__(self, engine: TableEngine, parent=None):
        """Initialize model.

        Args:
            engine: Engine owning rows and table state
            parent: Parent QObject
        """
        super().__init__(parent)
        self.engine = engine
        self._snapshot: TableSnapshot = engine.snapshot()

    @property
    def snapshot(self) -> TableSnapshot:
        return self._snapshot

    def refresh(self):
        """Re-derive the snapshot from the engine and reset views."""
        self.beginResetModel()
        self._snapshot = self.engine.snapshot()
        self.endResetModel()

    def rowCount(self, parent=QModelIndex()):
        if parent.isValid() or self._snapshot.render_state is not RenderState.POPULATED:
            return 0
        return len(self._snapshot.rows)

    @property
    def actions_column(self) -> Optional[int]:
        """Index of the trailing "Actions" column, or None without row actions."""
        if not self.engine.actions:
            return None
        return len(self._snapshot.columns)

    def columnCount(self, parent=QModelIndex()):
        if parent.isValid():
            return 0
        return len(self._snapshot.columns) + (1 if self.engine.actions else 0)

    def headerData(self, section, orientation, role=Qt.DisplayRole):
        if orientation != Qt.Horizontal:
            return None
        if section == self.actions_column:
            return "Actions" if role == Qt.DisplayRole else None
        if not (0 <= section < len(self._snapshot.columns)):
            return None
        column = self._snapshot.columns[section]
        if role == Qt.DisplayRole:
            return column.header + SORT_ARROWS.get(self._snapshot.sort_indicators[section], "")
        if role == Qt.ToolTipRole and column.is_sortable:
            return "Click to sort"
        return None

    def data(self, index, role=Qt.DisplayRole):
        if not index.isValid():
            return None

        row = self.get_row_data(index.row())
        col = index.column()
        if row is None or not (0 <= col < len(self._snapshot.columns)):
            return None
        column = self._snapshot.columns[col]

        if role == Qt.DisplayRole:
            value = column.render(row)
            if isinstance(value, float):
                return f"{value:,.1f}"
            if isinstance(value, int) and not isinstance(value, bool):
                return f"{value:,}"
            return str(value)
        elif role == Qt.TextAlignmentRole:
            if isinstance(column.raw_value(row), (int, float)):
                return int(Qt.AlignRight | Qt.AlignVCenter)
            return None
        elif role == Qt.UserRole:
            # Raw row mapping for delegates and action handlers
            return row
        return None

    def get_row_data(self, row: int) -> Optional[Row]:
        """Get the row mapping at a visible row index (None when out of range)."""
        if 0 <= row < len(self._snapshot.rows):
            return self._snapshot.rows[row]
        return None


__all__ = ["EngineTableModel", "SORT_ARROWS"]
