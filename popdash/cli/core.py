"""Core CLI commands: version, config display and GUI launch."""

from __future__ import annotations
import json as _json
import sys

import click

from .helpers import cli
from ..utils.output import error
from ..version import __version__


@cli.command()
def version():
    """Show the popdash version."""
    click.echo(f"popdash {__version__}")


@cli.command(name="config")
@click.option("--section", "-s", help="Only show a specific top-level section (e.g. api, table, filters).")
@click.pass_context
def show_config(ctx: click.Context, section: str | None):
    """Show current configuration settings."""
    data = ctx.obj
    if section:
        section = section.lower()
        if section not in data:
            raise click.UsageError(f"Unknown section '{section}'. Available: {', '.join(sorted(data.keys()))}")
        data = {section: data[section]}
    click.echo(_json.dumps(data, indent=2, sort_keys=True))


@cli.command()
def gui():
    """Launch the desktop dashboard.

    Requires PySide6 to be installed.
    """
    try:
        from popdash.gui.app import main as gui_main
    except ImportError as e:
        if "PySide6" in str(e):
            click.echo(error("PySide6 not installed"))
            click.echo("The GUI requires PySide6. Install it with:")
            click.echo(click.style("  pip install PySide6>=6.6.0", fg="cyan"))
            sys.exit(1)
        raise
    sys.exit(gui_main())


__all__ = ["version", "show_config", "gui"]
