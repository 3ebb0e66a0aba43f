from __future__ import annotations
import click

from ..config import load_typed_config
from ..version import __version__
from ..providers import build_client
from ..services.population_service import PopulationService


def get_population_service(cfg: dict) -> PopulationService:
    """Build the population service from config.

    Args:
        cfg: Full configuration dict

    Returns:
        PopulationService backed by the configured API client
    """
    return PopulationService(build_client(cfg))


@click.group()
@click.version_option(version=__version__, prog_name="popdash")
@click.pass_context
def cli(ctx: click.Context):
    """Population dashboard: browse population statistics by geography and year.

    \b
    TYPICAL WORKFLOWS:

    \b
    Browse data:
      popdash locations                        # List available states
      popdash table                            # Nation-level, latest year
      popdash table -g 04000US06 --sort value:desc --page 2

    \b
    Export:
      popdash export out.csv --search 2019     # Sorted/filtered rows to CSV

    \b
    Desktop dashboard:
      popdash gui
    """
    if isinstance(ctx.obj, dict):
        return
    ctx.obj = load_typed_config().to_dict()


__all__ = ["cli", "get_population_service"]
