# topmark:header:start
#
#   project      : Headmatter
#   file         : main.py
#   file_relpath : src/headmatter/cli/main.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Headmatter command-line interface.

Key ideas:
- Group-level options (verbosity, color) are initialized once and placed into
  ``ctx.obj``; subcommands read the console and verbosity from there.
- Configuration options live on the subcommands, which resolve a `Config` via
  `headmatter.cli.cmd_common.build_config`.
"""

from __future__ import annotations

import click

from headmatter.cli.commands.body import body_command
from headmatter.cli.commands.check import check_command
from headmatter.cli.commands.config import config_command
from headmatter.cli.commands.headers import headers_command
from headmatter.cli.commands.render import render_command
from headmatter.cli.commands.transforms import transforms_command
from headmatter.cli.commands.version import version_command
from headmatter.cli.console import ClickConsole
from headmatter.cli.options import (
    CONTEXT_SETTINGS,
    ColorMode,
    common_color_options,
    common_verbose_options,
    resolve_color_mode,
    resolve_verbosity,
)
from headmatter.config.logging import get_logger, resolve_env_log_level, setup_logging

logger = get_logger(__name__)


def init_common_state(
    ctx: click.Context,
    *,
    verbose: int,
    quiet: int,
    color_mode: ColorMode | None,
    no_color: bool,
) -> None:
    """Initialize shared state (verbosity & color) on the Click context.

    Args:
        ctx (click.Context): Current Click context; will have ``obj`` and ``color`` set.
        verbose (int): Count of ``-v`` flags.
        quiet (int): Count of ``-q`` flags.
        color_mode (ColorMode | None): Explicit color mode from ``--color`` (or ``None``).
        no_color (bool): Whether ``--no-color`` was passed; forces color off.
    """
    ctx.ensure_object(dict)

    # Program-output verbosity
    ctx.obj["verbosity_level"] = resolve_verbosity(verbose, quiet)

    # Internal logging via env
    level_env: int | None = resolve_env_log_level()
    ctx.obj["log_level"] = level_env
    setup_logging(level=level_env)

    effective_color_mode: ColorMode = (
        ColorMode.NEVER if no_color else (color_mode or ColorMode.AUTO)
    )
    enable_color: bool = resolve_color_mode(cli_mode=effective_color_mode, output_format=None)
    ctx.obj["color_enabled"] = enable_color
    ctx.color = enable_color

    ctx.obj["console"] = ClickConsole(enable_color=enable_color)


@click.group(
    cls=click.Group,
    context_settings=CONTEXT_SETTINGS,
    invoke_without_command=True,
    help="Headmatter: read and rewrite 'Name: value' header blocks at the top of text files.",
)
@common_verbose_options
@common_color_options
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: int,
    quiet: int,
    color_mode: ColorMode | None,
    no_color: bool,
) -> None:
    """Entry point for the Headmatter CLI."""
    init_common_state(
        ctx,
        verbose=verbose,
        quiet=quiet,
        color_mode=color_mode,
        no_color=no_color,
    )
    console: ClickConsole = ctx.obj["console"]

    if ctx.invoked_subcommand is None:
        console.print("Hint: use 'headmatter headers FILE' to list the headers of a file.")
        console.print()
        console.print(ctx.get_help())


cli.add_command(headers_command)

cli.add_command(body_command)

cli.add_command(render_command)

cli.add_command(check_command)

cli.add_command(transforms_command)

cli.add_command(config_command)

cli.add_command(version_command)

if __name__ == "__main__":
    cli()
