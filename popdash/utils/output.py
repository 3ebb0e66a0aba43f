"""Output formatting utilities for consistent CLI reporting."""

from __future__ import annotations
from typing import Any, Iterable, List, Optional, Sequence

import click

from ..table import ColumnDefinition, PageToken, Row, SortDirection, is_ellipsis

_SORT_ARROWS = {SortDirection.ASC: "▲", SortDirection.DESC: "▼"}


def section_header(text: str) -> str:
    """Format a section header with color.

    Args:
        text: Header text

    Returns:
        Formatted header string
    """
    return click.style(f"▶ {text}", fg='cyan', bold=True)


def success(text: str, prefix: str = "✓") -> str:
    return f"{click.style(prefix, fg='green')} {text}"


def error(text: str, prefix: str = "✗") -> str:
    return f"{click.style(prefix, fg='red')} {text}"


def count_badge(count: int, label: str, color: str = 'cyan') -> str:
    """Format a count badge.

    Args:
        count: Count to display
        label: Label for the count
        color: Color for the count (default: cyan)

    Returns:
        Formatted count badge
    """
    return f"{click.style(str(count), fg=color, bold=True)} {label}"


def sort_arrow(direction: Optional[SortDirection]) -> str:
    return _SORT_ARROWS.get(direction, "") if direction else ""


def format_page_tokens(tokens: Iterable[PageToken], current_page: int) -> str:
    """Render page tokens as text, e.g. '1 … 9 [10] 11 … 20'."""
    parts: List[str] = []
    for token in tokens:
        if is_ellipsis(token):
            parts.append("…")
        elif token == current_page:
            parts.append(f"[{token}]")
        else:
            parts.append(str(token))
    return " ".join(parts)


def format_table(
    columns: Sequence[ColumnDefinition],
    rows: Sequence[Row],
    indicators: Optional[Sequence[Optional[SortDirection]]] = None,
) -> str:
    """Render rows as a plain aligned text table.

    Args:
        columns: Columns to render
        rows: Rows (already paginated)
        indicators: Optional per-column sort direction for the header

    Returns:
        Multi-line string (header, rule, rows)
    """
    indicators = indicators or [None] * len(columns)
    headers = [f"{c.header} {sort_arrow(d)}".rstrip() for c, d in zip(columns, indicators)]
    body = [[_cell_text(c.render(row)) for c in columns] for row in rows]
    widths = [len(h) for h in headers]
    for line in body:
        for i, cell in enumerate(line):
            widths[i] = max(widths[i], len(cell))

    def _line(cells: Sequence[str]) -> str:
        return "  ".join(cell.ljust(widths[i]) for i, cell in enumerate(cells)).rstrip()

    out = [_line(headers), "  ".join("-" * w for w in widths)]
    out.extend(_line(line) for line in body)
    return "\n".join(out)


def _cell_text(value: Any) -> str:
    if isinstance(value, float):
        return f"{value:,.1f}"
    if isinstance(value, int) and not isinstance(value, bool):
        return f"{value:,}"
    return str(value)


__all__ = [
    "section_header",
    "success",
    "error",
    "count_badge",
    "sort_arrow",
    "format_page_tokens",
    "format_table",
]
