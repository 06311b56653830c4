# topmark:header:start
#
#   project      : Headmatter
#   file         : config_dump.py
#   file_relpath : src/headmatter/cli/commands/config_dump.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Headmatter `config dump` command.

Emits the effective configuration as TOML after applying defaults, user and
project config files, ``--config`` files and CLI overrides. With ``-v`` the
output is wrapped between `TOML_BLOCK_START` and `TOML_BLOCK_END` markers and
preceded by the list of config sources.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from headmatter.cli.cmd_common import build_config, get_effective_verbosity, render_toml_block
from headmatter.cli.machine_emitters import emit_machine_object
from headmatter.cli.options import (
    CONTEXT_SETTINGS,
    common_config_options,
    common_transform_options,
    output_format_option,
)
from headmatter.config.io import to_toml
from headmatter.config.logging import get_logger
from headmatter.core.formats import OutputFormat, is_machine_format

if TYPE_CHECKING:
    from headmatter.cli.console import ClickConsole
    from headmatter.config.logging import HeadmatterLogger
    from headmatter.config.model import Config

logger: HeadmatterLogger = get_logger(__name__)


@click.command(
    name="dump",
    help="Dump the final merged Headmatter configuration as TOML.",
    context_settings=CONTEXT_SETTINGS,
)
@common_config_options
@common_transform_options
@output_format_option
def config_dump_command(
    *,
    no_config: bool,
    config_paths: tuple[str, ...],
    key_transform: str | None,
    raw_transform: str | None,
    output_format: OutputFormat | None,
) -> None:
    """Dump the final merged configuration.

    Args:
        no_config (bool): Skip user and project config discovery.
        config_paths (tuple[str, ...]): Extra config files.
        key_transform (str | None): raw→key preset override.
        raw_transform (str | None): key→raw preset override.
        output_format (OutputFormat | None): Output format.

    Raises:
        NotImplementedError: When providing an unsupported OutputFormat.
    """
    ctx: click.Context = click.get_current_context()
    ctx.ensure_object(dict)
    console: ClickConsole = ctx.obj["console"]
    fmt: OutputFormat = output_format or OutputFormat.DEFAULT
    if is_machine_format(fmt):
        console.enable_color = False

    config: Config = build_config(
        ctx,
        no_config=no_config,
        config_paths=config_paths,
        key_transform=key_transform,
        raw_transform=raw_transform,
        install=False,
    )
    vlevel: int = get_effective_verbosity(ctx, config)
    logger.trace("Config to dump: %s", config)

    if fmt == OutputFormat.DEFAULT:
        if vlevel > 0:
            console.print(f"Config files processed: {len(config.config_files)}")
            for i, c in enumerate(config.config_files, start=1):
                console.print(f"Loaded config {i}: {c}")
        render_toml_block(
            console=console,
            title="Headmatter Config Dump (TOML):",
            toml_text=to_toml(config.to_toml_dict()),
            verbosity_level=vlevel,
        )

    elif is_machine_format(fmt):
        emit_machine_object(fmt=fmt, kind="config", payload=config.to_toml_dict(include_files=True))

    elif fmt == OutputFormat.MARKDOWN:
        console.print("# Headmatter Config Dump (TOML)")
        console.print()
        console.print("```toml")
        console.print(to_toml(config.to_toml_dict()).rstrip("\n"))
        console.print("```")

    else:
        raise NotImplementedError(f"Unsupported output format: {fmt!r}")
