"""CLI package bootstrap.

Defines root group (`cli`) in helpers and imports submodules so their
decorators register commands.
"""
from popdash.cli.helpers import cli  # root group
from popdash.cli import core  # noqa: F401
from popdash.cli import table_cmds  # noqa: F401

__all__ = ["cli"]
