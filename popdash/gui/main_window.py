"""Main window for the dashboard.

Layout:
- Filter bar: geography and year pickers (backed by FilterStore)
- Population DataTable (sortable, searchable, paginated, CSV export)
"""
from __future__ import annotations
from pathlib import Path
from typing import Any, Dict
from PySide6.QtWidgets import (
    QFileDialog, QHBoxLayout, QLabel, QMainWindow, QMessageBox, QVBoxLayout, QWidget,
)
import logging

from ..services.export_service import export_table
from ..services.population_service import population_columns
from ..table import TableEngine
from .components.data_table import DataTable
from .components.searchable_combobox import SearchableComboBox
from .state import FilterState, FilterStore

logger = logging.getLogger(__name__)


class MainWindow(QMainWindow):
    """Main application window."""

    def __init__(self, config: Dict[str, Any]):
        """Initialize main window.

        Args:
            config: Configuration dict (uses ``table``, ``filters`` and ``export`` sections)
        """
        super().__init__()
        self.config = config
        self.setWindowTitle("Population Dashboard")
        self.resize(1000, 700)

        filters = config.get("filters", {})
        self.filter_store = FilterStore(
            FilterState(
                selected_state=filters.get("default_state", "Nation"),
                selected_year=str(filters.get("default_year", "latest")),
            ),
            self,
        )

        table_cfg = config.get("table", {})
        self.engine = TableEngine(
            population_columns(),
            page_size=table_cfg.get("page_size", 10),
            loading=True,
            empty_state_message=table_cfg.get("empty_state_message", "No data available"),
            on_download=self.export_csv,
        )
        self._create_ui(table_cfg)

    def _create_ui(self, table_cfg: Dict[str, Any]):
        central = QWidget()
        layout = QVBoxLayout(central)

        filter_bar = QHBoxLayout()
        filter_bar.addWidget(QLabel("Geography:"))
        self.geography_combo = SearchableComboBox()
        self.geography_combo.setMinimumWidth(220)
        filter_bar.addWidget(self.geography_combo)
        filter_bar.addWidget(QLabel("Year:"))
        self.year_combo = SearchableComboBox()
        self.year_combo.populate_options([{"value": "latest", "label": "Latest"}])
        filter_bar.addWidget(self.year_combo)
        filter_bar.addStretch(1)
        layout.addLayout(filter_bar)

        self.table = DataTable(
            self.engine,
            title="Data Table",
            subtitle="Population by year",
            searchable=True,
            search_placeholder=table_cfg.get("search_placeholder", "Search..."),
        )
        layout.addWidget(self.table)
        self.setCentralWidget(central)

    def export_csv(self):
        """Ask for a destination and export the sorted/filtered rows."""
        default_dir = Path(self.config.get("export", {}).get("directory", "."))
        path, _ = QFileDialog.getSaveFileName(
            self, "Export table", str(default_dir / "population.csv"), "CSV files (*.csv)"
        )
        if not path:
            return
        try:
            count = export_table(self.engine, Path(path))
        except OSError as e:
            logger.error(f"Export failed: {e}")
            QMessageBox.warning(self, "Export failed", str(e))
            return
        self.statusBar().showMessage(f"Exported {count} rows to {path}", 5000)


__all__ = ["MainWindow"]
