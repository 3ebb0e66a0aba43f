"""Population service: fetch and shape population data for tables and charts.

Shapes flow as:

    API record {id, year, population}
        → chart row {id, name, value}            (to_chart_rows)
        → table row {id, label, year, value}     (to_table_rows)
"""

from __future__ import annotations
import logging
from typing import Any, Dict, Iterable, List, Optional

from ..providers import DataUSAClient
from ..table import ColumnDefinition, key_column

logger = logging.getLogger(__name__)

LATEST_OPTION = {"value": "latest", "label": "Latest"}


def to_chart_rows(records: Optional[Iterable[Dict[str, Any]]]) -> List[Dict[str, Any]]:
    """Map API records to {id, name, value} rows."""
    return [
        {"id": record.get("id"), "name": record.get("year"), "value": record.get("population")}
        for record in records or []
    ]


def to_table_rows(chart_rows: Iterable[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """Map chart rows to table rows; ``id`` is the row index."""
    return [
        {"id": index, "label": row.get("id"), "year": row.get("name"), "value": row.get("value")}
        for index, row in enumerate(chart_rows)
    ]


def population_columns() -> List[ColumnDefinition]:
    return [
        key_column("label", "Label", sortable=True),
        key_column("year", "Year", sortable=True),
        key_column("value", "Value", sortable=True),
    ]


def year_options(chart_rows: Iterable[Dict[str, Any]]) -> List[Dict[str, str]]:
    """Build {value, label} year options, newest first, after a 'Latest' entry."""
    years = {str(row.get("name")) for row in chart_rows if row.get("name") is not None}
    options = [dict(LATEST_OPTION)]
    options.extend({"value": year, "label": year} for year in sorted(years, reverse=True))
    return options


class PopulationService:
    """Loads population rows for the current global filter selection.

    Example:
        service = PopulationService(DataUSAClient())
        rows = service.load("Nation", "latest")
    """

    def __init__(self, client: DataUSAClient):
        self.client = client

    def load(self, geography: str, year: str) -> List[Dict[str, Any]]:
        """Fetch chart rows ({id, name, value}) for a geography and year."""
        records = self.client.fetch_population(geography, year)
        rows = to_chart_rows(records)
        logger.debug(f"Loaded {len(rows)} population rows for {geography}/{year}")
        return rows

    def load_table_rows(self, geography: str, year: str) -> List[Dict[str, Any]]:
        return to_table_rows(self.load(geography, year))

    def locations(self) -> List[Dict[str, Any]]:
        """State options as {value, label, slug}, with the nation first."""
        options = [{"value": "Nation", "label": "United States", "slug": "united-states"}]
        options.extend(self.client.fetch_locations())
        return options


__all__ = [
    "PopulationService",
    "to_chart_rows",
    "to_table_rows",
    "population_columns",
    "year_options",
]
