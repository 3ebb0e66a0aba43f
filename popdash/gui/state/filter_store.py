"""FilterStore - Single source of truth for the global dashboard filter.

Unidirectional data flow:

    User Action → FilterStore.set_state() → filterChanged signal → Views update

    ┌─────────────┐
    │ FilterStore │  (owns FilterState, emits filterChanged)
    └──────┬──────┘
           │ filterChanged(FilterState)
           ├─────────────────┐
           ▼                 ▼
    ┌────────────┐    ┌────────────┐
    │ Filter bar │    │ Data table │
    └────────────┘    └────────────┘

State Policy:
- A selection is one geography (``"Nation"`` or a state ID) plus one year
- ``"latest"`` means the most recent year the API has
- Changing the geography keeps the selected year
- State is immutable - always create new FilterState, never mutate

Loop Prevention:
- State deduplication: Only emit filterChanged if new_state != current_state
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Optional
from PySide6.QtCore import QObject, Signal
import logging

logger = logging.getLogger(__name__)

NATION = "Nation"
LATEST = "latest"


@dataclass(frozen=True)
class FilterState:
    """Immutable global filter state.

    Attributes:
        selected_state: "Nation", a state geography ID, or None (treated as nation)
        selected_year: Year as string, or "latest"
    """

    selected_state: Optional[str] = NATION
    selected_year: str = LATEST

    @property
    def geography(self) -> str:
        """Geography to query (None falls back to the nation)."""
        return self.selected_state or NATION

    @property
    def is_nation(self) -> bool:
        return self.geography == NATION

    @property
    def drilldown(self) -> str:
        return NATION if self.is_nation else "State"

    def with_state(self, selected_state: Optional[str]) -> FilterState:
        """Create new state with a different geography (year kept)."""
        return FilterState(selected_state=selected_state, selected_year=self.selected_year)

    def with_year(self, selected_year: Optional[str]) -> FilterState:
        """Create new state with a different year (None resets to latest)."""
        return FilterState(selected_state=self.selected_state, selected_year=str(selected_year or LATEST))


class FilterStore(QObject):
    """Single source of truth for the global filter.

    Example usage:
        store = FilterStore()
        store.filterChanged.connect(controller.on_filter_changed)
        store.set_selected_state("04000US06")   # filterChanged emitted
        store.set_selected_state("04000US06")   # no-op, state unchanged
    """

    filterChanged = Signal(FilterState)

    def __init__(self, initial: Optional[FilterState] = None, parent=None):
        """Initialize store.

        Args:
            initial: Initial state (defaults to nation / latest)
            parent: Parent QObject
        """
        super().__init__(parent)
        self._initial = initial or FilterState()
        self._state = self._initial
        logger.debug(f"FilterStore initialized: {self._state}")

    @property
    def state(self) -> FilterState:
        return self._state

    def set_state(self, new_state: FilterState):
        """Set new filter state.

        Only emits filterChanged if state actually changed (deduplication).

        Args:
            new_state: New filter state to apply
        """
        if new_state == self._state:
            logger.debug("State unchanged, skipping emission")
            return

        old_state = self._state
        self._state = new_state
        logger.info(
            f"Filter state changed: {old_state.geography}/{old_state.selected_year} → "
            f"{new_state.geography}/{new_state.selected_year}"
        )
        self.filterChanged.emit(self._state)

    def set_selected_state(self, selected_state: Optional[str]):
        self.set_state(self._state.with_state(selected_state))

    def set_selected_year(self, selected_year: Optional[str]):
        self.set_state(self._state.with_year(selected_year))

    def reset(self):
        """Return to the initial selection."""
        self.set_state(self._initial)
