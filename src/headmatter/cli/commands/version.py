# topmark:header:start
#
#   project      : Headmatter
#   file         : version.py
#   file_relpath : src/headmatter/cli/commands/version.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Headmatter `version` command.

Prints the current Headmatter version as installed in the active Python environment.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from headmatter.cli.cmd_common import get_effective_verbosity
from headmatter.cli.machine_emitters import emit_machine_object
from headmatter.cli.options import CONTEXT_SETTINGS, output_format_option
from headmatter.constants import HEADMATTER_VERSION
from headmatter.core.formats import OutputFormat, is_machine_format

if TYPE_CHECKING:
    from headmatter.cli.console import ClickConsole


@click.command(
    name="version",
    help="Show the current version of Headmatter.",
    context_settings=CONTEXT_SETTINGS,
)
@output_format_option
def version_command(*, output_format: OutputFormat | None = None) -> None:
    """Show the current version of Headmatter.

    Args:
        output_format (OutputFormat | None): Optional output format.
    """
    ctx: click.Context = click.get_current_context()
    ctx.ensure_object(dict)
    console: ClickConsole = ctx.obj["console"]

    vlevel: int = get_effective_verbosity(ctx)
    fmt: OutputFormat = output_format or OutputFormat.DEFAULT

    if is_machine_format(fmt):
        emit_machine_object(fmt=fmt, kind="version", payload={"version": HEADMATTER_VERSION})
    elif fmt == OutputFormat.MARKDOWN:
        console.print("# Headmatter Version\n")
        console.print(f"**Headmatter version: {HEADMATTER_VERSION}**")
    elif vlevel > 0:
        console.print(console.styled("Headmatter version:\n", bold=True, underline=True))
        console.print(f"    {console.styled(HEADMATTER_VERSION, bold=True)}")
    else:
        console.print(console.styled(HEADMATTER_VERSION, bold=True))
