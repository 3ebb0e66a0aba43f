"""Export service: write a table's processed rows to CSV.

The export contains every sorted-and-filtered row (not only the visible
page), one column per table column, using the rendered cell values.
"""

from __future__ import annotations
import csv
import logging
from pathlib import Path
from typing import Iterable, Sequence

from ..table import ColumnDefinition, Row, TableEngine

logger = logging.getLogger(__name__)


def write_csv(path: Path, columns: Sequence[ColumnDefinition], rows: Iterable[Row]) -> int:
    """Write rows to ``path`` with the column headers.

    Args:
        path: Output CSV path (parent directories are created)
        columns: Columns to export, in order
        rows: Rows to export

    Returns:
        Number of data rows written
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    count = 0
    with path.open('w', newline='', encoding='utf-8') as fh:
        writer = csv.writer(fh)
        writer.writerow([column.header for column in columns])
        for row in rows:
            writer.writerow([column.render(row) for column in columns])
            count += 1
    logger.info(f"Exported {count} rows to {path}")
    return count


def export_table(engine: TableEngine, path: Path) -> int:
    """Export an engine's processed rows (current sort and search applied)."""
    return write_csv(path, engine.columns, engine.processed_rows())


__all__ = ["write_csv", "export_table"]
