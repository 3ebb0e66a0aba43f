"""Reusable GUI components."""
from .data_table import DataTable
from .pagination_bar import PaginationBar
from .searchable_combobox import SearchableComboBox

__all__ = ['DataTable', 'PaginationBar', 'SearchableComboBox']
