# topmark:header:start
#
#   project      : Headmatter
#   file         : config_init.py
#   file_relpath : src/headmatter/cli/commands/config_init.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Headmatter `config init` command.

Prints a starter configuration file to stdout, using the annotated default
TOML template bundled with the package. ``--pyproject`` nests it under
``[tool.headmatter]`` for inclusion in ``pyproject.toml``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from headmatter.cli.cmd_common import get_effective_verbosity, render_toml_block
from headmatter.cli.errors import HeadmatterUsageError
from headmatter.cli.machine_emitters import emit_machine_object
from headmatter.cli.options import CONTEXT_SETTINGS, output_format_option
from headmatter.config.io import nest_toml_under_section, read_default_toml_text
from headmatter.config.model import MutableConfig
from headmatter.constants import PYPROJECT_SECTION
from headmatter.core.formats import OutputFormat, is_machine_format

if TYPE_CHECKING:
    from headmatter.cli.console import ClickConsole


@click.command(
    name="init",
    help="Display an initial Headmatter configuration file.",
    context_settings=CONTEXT_SETTINGS,
)
@output_format_option
@click.option(
    "--pyproject",
    "pyproject",
    is_flag=True,
    help="Generate config for inclusion in pyproject.toml ([tool.headmatter]).",
)
def config_init_command(*, output_format: OutputFormat | None, pyproject: bool) -> None:
    """Print a starter config file to stdout.

    Args:
        output_format (OutputFormat | None): Output format to use
            (``default``, ``markdown``, ``json``, or ``ndjson``).
        pyproject (bool): Render as a ``[tool.headmatter]`` table.

    Raises:
        HeadmatterUsageError: When ``--pyproject`` is combined with a machine format.
        NotImplementedError: When providing an unsupported OutputFormat.
    """
    ctx: click.Context = click.get_current_context()
    ctx.ensure_object(dict)
    console: ClickConsole = ctx.obj["console"]

    fmt: OutputFormat = output_format or OutputFormat.DEFAULT
    if is_machine_format(fmt):
        if pyproject:
            raise HeadmatterUsageError(
                f"{ctx.command.name}: --pyproject is not supported "
                "with machine-readable output formats."
            )
        console.enable_color = False
        emit_machine_object(
            fmt=fmt, kind="config", payload=MutableConfig.from_defaults().freeze().to_toml_dict()
        )
        return

    vlevel: int = get_effective_verbosity(ctx)
    toml_text: str = read_default_toml_text()
    if pyproject:
        toml_text = nest_toml_under_section(toml_text, PYPROJECT_SECTION)

    if fmt == OutputFormat.DEFAULT:
        render_toml_block(
            console=console,
            title="Initial Headmatter Configuration (TOML):",
            toml_text=toml_text,
            verbosity_level=vlevel,
        )

    elif fmt == OutputFormat.MARKDOWN:
        console.print("# Initial Headmatter Configuration (TOML)")
        console.print()
        console.print("```toml")
        console.print(toml_text.rstrip("\n"))
        console.print("```")

    else:
        raise NotImplementedError(f"Unsupported output format: {fmt!r}")
