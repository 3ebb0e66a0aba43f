"""Per-row actions and their visibility."""
from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Callable, Iterable, List, Optional
import logging

from .columns import Row

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RowAction:
    """Action button rendered in a row's actions cell.

    Attributes:
        label: Button text
        on_click: Called with the row when the action is triggered
        icon: Optional icon name/resource for the presentation layer
        show_condition: Optional predicate; the action is hidden when it returns False
        style: Optional style hint (e.g. a stylesheet snippet)
    """

    label: str
    on_click: Callable[[Row], Any]
    icon: Optional[str] = None
    show_condition: Optional[Callable[[Row], bool]] = None
    style: Optional[str] = None

    def is_visible_for(self, row: Row) -> bool:
        if self.show_condition is None:
            return True
        try:
            return bool(self.show_condition(row))
        except Exception as e:
            logger.warning(f"show_condition for action '{self.label}' failed, hiding it: {e}")
            return False


def visible_actions(row: Row, actions: Iterable[RowAction]) -> List[RowAction]:
    """Actions shown for ``row``, in their configured order."""
    return [action for action in actions if action.is_visible_for(row)]


__all__ = ["RowAction", "visible_actions"]
