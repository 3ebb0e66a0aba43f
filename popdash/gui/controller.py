"""Dashboard controller: wires FilterStore → background load → DataTable.

    filter bar ──► FilterStore ──filterChanged──► DashboardController
                                                     │ AsyncDataLoader (HTTP)
                                                     ▼
                                                DataTable.set_rows()

Results from superseded requests are dropped (request id check).
"""
from __future__ import annotations
from typing import Any, Dict, List, Optional
import logging

from PySide6.QtCore import QObject

from ..services.population_service import PopulationService, to_table_rows, year_options
from .components.data_table import DataTable
from .components.searchable_combobox import SearchableComboBox
from .state import FilterState, FilterStore
from .utils.async_loader import AsyncDataLoader

logger = logging.getLogger(__name__)


class DashboardController(QObject):
    """Coordinates filter changes, data loading and the population table.

    Example:
        controller = DashboardController(store, service, window.table,
                                         window.geography_combo, window.year_combo)
        controller.start()
    """

    def __init__(
        self,
        store: FilterStore,
        service: PopulationService,
        table: DataTable,
        geography_combo: SearchableComboBox,
        year_combo: SearchableComboBox,
        parent: Optional[QObject] = None,
    ):
        super().__init__(parent)
        self.store = store
        self.service = service
        self.table = table
        self.geography_combo = geography_combo
        self.year_combo = year_combo
        self._request_id = 0
        self._loaders: List[AsyncDataLoader] = []

        self.store.filterChanged.connect(self.on_filter_changed)
        self.geography_combo.value_selected.connect(self.store.set_selected_state)
        self.year_combo.value_selected.connect(self.store.set_selected_year)

    def start(self):
        """Load selectable locations and the initial population table."""
        self._run(0, self.service.locations, self._on_locations_loaded, self._on_locations_failed)
        self.on_filter_changed(self.store.state)

    def on_filter_changed(self, state: FilterState):
        self._request_id += 1
        request_id = self._request_id
        logger.debug(f"Loading population for {state.geography}/{state.selected_year} (#{request_id})")
        self.table.set_loading(True)
        self._run(
            request_id,
            lambda: self.service.load(state.geography, state.selected_year),
            lambda rid, rows: self.on_population_loaded(rid, rows, state),
            self.on_population_failed,
        )

    def on_population_loaded(self, request_id: int, chart_rows: List[Dict[str, Any]], state: FilterState):
        if request_id != self._request_id:
            logger.debug(f"Dropping stale result #{request_id}")
            return
        self.table.set_rows(to_table_rows(chart_rows))
        if state.selected_year == "latest":
            self.year_combo.populate_options(year_options(chart_rows))
            self.year_combo.set_selected_value(state.selected_year)

    def on_population_failed(self, request_id: int, message: str):
        if request_id != self._request_id:
            return
        self.table.show_message(f"Failed to load population data: {message}")

    def _on_locations_loaded(self, _request_id: int, options: List[Dict[str, Any]]):
        self.geography_combo.populate_options(options)
        self.geography_combo.set_selected_value(self.store.state.geography)

    def _on_locations_failed(self, _request_id: int, message: str):
        logger.warning(f"Failed to load locations: {message}")

    def _run(self, request_id: int, load_func, on_loaded, on_failed):
        loader = AsyncDataLoader(request_id, load_func)
        loader.loaded.connect(on_loaded)
        loader.failed.connect(on_failed)
        loader.finished.connect(lambda: self._forget(loader))
        self._loaders.append(loader)
        loader.start()

    def _forget(self, loader: AsyncDataLoader):
        if loader in self._loaders:
            self._loaders.remove(loader)
        loader.deleteLater()

    def shutdown(self):
        """Wait for in-flight loads before the window closes."""
        for loader in list(self._loaders):
            loader.wait(2000)


__all__ = ["DashboardController"]
