# topmark:header:start
#
#   project      : Headmatter
#   file         : config.py
#   file_relpath : src/headmatter/cli/commands/config.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Headmatter `config` command group.

Provides subcommands for inspecting and scaffolding configuration:

  * ``headmatter config dump``: show the effective merged configuration.
  * ``headmatter config init``: print a starter configuration file.
"""

from __future__ import annotations

import click

from headmatter.cli.commands.config_dump import config_dump_command
from headmatter.cli.commands.config_init import config_init_command
from headmatter.cli.options import CONTEXT_SETTINGS


@click.group(
    name="config",
    help="Inspect and scaffold Headmatter configuration.",
    context_settings=CONTEXT_SETTINGS,
)
def config_command() -> None:
    """Group for configuration-related subcommands; it performs no action itself."""


config_command.add_command(config_dump_command, name="dump")
config_command.add_command(config_init_command, name="init")
