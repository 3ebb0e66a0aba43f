"""Column model for the tabular data engine.

A column describes how to read and display one field of a row. The accessor
is a tagged variant:

- ``Key(name)``: direct field projection. Usable for both display and sorting.
- ``Derive(fn)``: computed display value. Display only, never a sort key,
  since no comparable value is guaranteed for derived output.
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Callable, Mapping, Optional, Union

Row = Mapping[str, Any]


@dataclass(frozen=True)
class Key:
    """Accessor reading ``row[name]`` directly."""
    name: str


@dataclass(frozen=True)
class Derive:
    """Accessor computing a display value from the whole row."""
    fn: Callable[[Row], Any]


Accessor = Union[Key, Derive]


@dataclass(frozen=True)
class ColumnDefinition:
    """One column of a table.

    Attributes:
        header: Header text
        accessor: ``Key`` or ``Derive`` accessor
        width: Optional width hint for the presentation layer (e.g. "120px")
        sortable: Whether clicking the header cycles the sort state
        filterable: Informational flag for hosts offering per-column filters
        cell_renderer: Optional row -> display value; wins over the accessor
    """

    header: str
    accessor: Accessor
    width: Optional[str] = None
    sortable: bool = False
    filterable: bool = False
    cell_renderer: Optional[Callable[[Row], Any]] = None

    @property
    def sort_key(self) -> Optional[str]:
        """Field compared when sorting, or None for derived columns."""
        if isinstance(self.accessor, Key):
            return self.accessor.name
        return None

    @property
    def is_sortable(self) -> bool:
        """True only for sortable columns that project a raw field."""
        return self.sortable and self.sort_key is not None

    def raw_value(self, row: Row) -> Any:
        """Raw value at the column's key (None for missing fields or derived columns)."""
        key = self.sort_key
        if key is None:
            return None
        return row.get(key)

    def render(self, row: Row) -> Any:
        """Display value for a cell. Missing fields render as an empty string."""
        if self.cell_renderer is not None:
            value = self.cell_renderer(row)
        elif isinstance(self.accessor, Derive):
            value = self.accessor.fn(row)
        else:
            value = row.get(self.accessor.name)
        return "" if value is None else value


def key_column(name: str, header: Optional[str] = None, **kwargs: Any) -> ColumnDefinition:
    """Shortcut for the common ``Key`` column.

    Args:
        name: Row field name
        header: Header text (defaults to the capitalized field name)
        **kwargs: Remaining ColumnDefinition fields

    Returns:
        ColumnDefinition projecting ``name``
    """
    return ColumnDefinition(header=header or name.capitalize(), accessor=Key(name), **kwargs)


__all__ = ["Row", "Key", "Derive", "Accessor", "ColumnDefinition", "key_column"]
