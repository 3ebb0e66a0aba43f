"""GUI state stores."""
from .filter_store import FilterState, FilterStore

__all__ = ['FilterState', 'FilterStore']
