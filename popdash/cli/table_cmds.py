"""Population table commands: locations, table and export."""

from __future__ import annotations
import logging
from pathlib import Path
from typing import Sequence

import click
import requests

from .helpers import cli, get_population_service
from ..config import validate_table_config
from ..services.export_service import export_table
from ..services.population_service import population_columns
from ..table import ColumnDefinition, RenderState, SortDirection, SortState, TableEngine, TableSnapshot, UNSORTED
from ..utils.output import count_badge, error, format_page_tokens, format_table, section_header, success

logger = logging.getLogger(__name__)


def parse_sort(text: str | None, columns: Sequence[ColumnDefinition]) -> SortState:
    """Parse 'COLUMN[:asc|desc]' into a SortState.

    Args:
        text: --sort value from the command line (None for unsorted)
        columns: Table columns; COLUMN matches a field key or header (case-insensitive)

    Returns:
        SortState

    Raises:
        click.BadParameter: For unknown, non-sortable columns or bad directions
    """
    if not text:
        return UNSORTED
    name, _, direction = text.partition(":")
    direction = (direction or "asc").lower()
    if direction not in ("asc", "desc"):
        raise click.BadParameter(f"Sort direction must be 'asc' or 'desc', got '{direction}'", param_hint="--sort")

    wanted = name.strip().lower()
    for column in columns:
        if wanted in ((column.sort_key or "").lower(), column.header.lower()):
            if not column.is_sortable:
                raise click.BadParameter(f"Column '{column.header}' is not sortable", param_hint="--sort")
            return SortState(column.sort_key, SortDirection(direction))
    available = ", ".join(c.sort_key for c in columns if c.is_sortable)
    raise click.BadParameter(f"Unknown column '{name}'. Sortable: {available}", param_hint="--sort")


def _load_engine(ctx: click.Context, geography: str | None, year: str | None, page_size: int | None) -> TableEngine:
    cfg = ctx.obj
    geography = geography or cfg['filters']['default_state']
    year = year or cfg['filters']['default_year']
    if page_size is None:
        try:
            page_size = validate_table_config(cfg)
        except ValueError as e:
            raise click.ClickException(str(e))
    elif page_size <= 0:
        raise click.BadParameter("Page size must be positive", param_hint="--page-size")

    service = get_population_service(cfg)
    engine = TableEngine(
        population_columns(),
        page_size=page_size,
        loading=True,
        empty_state_message=cfg['table']['empty_state_message'],
    )
    try:
        engine.set_rows(service.load_table_rows(geography, year))
    except requests.RequestException as e:
        logger.debug("Population fetch failed", exc_info=True)
        click.echo(error(f"Failed to fetch population data: {e}"))
        ctx.exit(1)
    engine.set_loading(False)
    return engine


def echo_snapshot(snapshot: TableSnapshot, title: str):
    """Print a table snapshot: header, rows, pagination footer."""
    click.echo(section_header(title))
    if snapshot.render_state is RenderState.LOADING:
        click.echo("Loading data...")
        return
    if snapshot.render_state is RenderState.EMPTY:
        click.echo(format_table(snapshot.columns, [], snapshot.sort_indicators))
        click.echo(snapshot.empty_state_message)
        return
    click.echo(format_table(snapshot.columns, snapshot.rows, snapshot.sort_indicators))
    if snapshot.show_pagination:
        click.echo("")
        prev_label = "< Previous" if snapshot.can_previous else click.style("< Previous", dim=True)
        next_label = "Next >" if snapshot.can_next else click.style("Next >", dim=True)
        click.echo(f"{prev_label}  {format_page_tokens(snapshot.page_tokens, snapshot.current_page)}  {next_label}")
        click.echo(snapshot.summary())


@cli.command(name="locations")
@click.pass_context
def locations(ctx: click.Context):
    """List selectable geographies (nation and states)."""
    service = get_population_service(ctx.obj)
    try:
        options = service.locations()
    except requests.RequestException as e:
        click.echo(error(f"Failed to fetch locations: {e}"))
        ctx.exit(1)
    click.echo(f"{'Value':<16} {'Label':<32}")
    click.echo("-" * 48)
    for option in options:
        click.echo(f"{str(option['value']):<16} {str(option['label']):<32}")
    click.echo(f"\nTotal: {count_badge(len(options), 'locations')}")


@cli.command(name="table")
@click.option("--geography", "-g", default=None, help="'Nation' or a state geography ID (see 'popdash locations').")
@click.option("--year", "-y", default=None, help="Year to show, or 'latest'.")
@click.option("--sort", "sort_option", default=None, help="Sort as COLUMN[:asc|desc], e.g. value:desc.")
@click.option("--search", "-q", default="", help="Case-insensitive text search across all fields.")
@click.option("--page", "-p", type=int, default=1, show_default=True, help="Page to show (1-based).")
@click.option("--page-size", type=int, default=None, help="Rows per page (overrides config).")
@click.pass_context
def show_table(ctx: click.Context, geography: str | None, year: str | None, sort_option: str | None,
               search: str, page: int, page_size: int | None):
    """Show population data as a sorted, searchable, paginated table."""
    engine = _load_engine(ctx, geography, year, page_size)
    engine.set_sort(parse_sort(sort_option, engine.columns))
    engine.set_search_query(search)
    last_page = max(engine.pagination_descriptor().total_pages, 1)
    if not 1 <= page <= last_page:
        raise click.BadParameter(f"Page must be between 1 and {last_page}, got {page}", param_hint="--page")
    engine.set_current_page(page)
    echo_snapshot(engine.snapshot(), "Population")


@cli.command(name="export")
@click.argument("output", type=click.Path(dir_okay=False, path_type=Path))
@click.option("--geography", "-g", default=None, help="'Nation' or a state geography ID.")
@click.option("--year", "-y", default=None, help="Year to export, or 'latest'.")
@click.option("--sort", "sort_option", default=None, help="Sort as COLUMN[:asc|desc].")
@click.option("--search", "-q", default="", help="Only export rows matching this text.")
@click.pass_context
def export(ctx: click.Context, output: Path, geography: str | None, year: str | None,
           sort_option: str | None, search: str):
    """Export all sorted and filtered rows to a CSV file."""
    engine = _load_engine(ctx, geography, year, None)
    engine.set_sort(parse_sort(sort_option, engine.columns))
    engine.set_search_query(search)
    engine.on_download = lambda: export_table(engine, output)
    engine.download()
    click.echo(success(f"Exported {count_badge(len(engine.processed_rows()), 'rows')} to {output}"))


__all__ = ["parse_sort", "echo_snapshot", "locations", "show_table", "export"]
