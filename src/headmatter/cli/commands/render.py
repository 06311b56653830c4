# topmark:header:start
#
#   project      : Headmatter
#   file         : render.py
#   file_relpath : src/headmatter/cli/commands/render.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Headmatter `render` command.

Parses one input and writes it back: header block, blank line, body.

Raw names are chosen per header as follows:
  * ``--dynamic`` (or ``[render] dynamic = true``): recomputed from the key
    with the configured key→raw preset. ``[raw_names]`` is ignored.
  * otherwise: a ``[raw_names]`` / ``--raw-name KEY=RAW`` override for the
    header's key, else the raw name as read.

Without ``--dynamic`` or overrides, the output equals the input up to
whitespace around the ``:`` separators and the line breaks of the header
block, which are written as ``\\n``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from headmatter.cli.cli_types import RawNameParam
from headmatter.cli.cmd_common import build_config, read_text_input
from headmatter.cli.options import (
    CONTEXT_SETTINGS,
    common_config_options,
    common_transform_options,
    underscored_trap_option,
)
from headmatter.config.logging import get_logger
from headmatter.document import Document

if TYPE_CHECKING:
    from headmatter.cli.console import ClickConsole
    from headmatter.config.logging import HeadmatterLogger
    from headmatter.config.model import Config

logger: HeadmatterLogger = get_logger(__name__)


@click.command(
    name="render",
    help="Recompose INPUT (a file, or '-' for STDIN) from its parsed headers and body.",
    context_settings=CONTEXT_SETTINGS,
)
@click.argument("source", metavar="INPUT", default="-")
@common_config_options
@common_transform_options
@click.option(
    "--dynamic/--no-dynamic",
    "dynamic",
    default=None,
    help="Recompute raw names from keys with the key→raw preset.",
)
@click.option(
    "--raw-name",
    "raw_names",
    multiple=True,
    metavar="KEY=RAW",
    callback=RawNameParam,
    help="Render the header with key KEY as RAW (repeatable).",
)
@underscored_trap_option("--raw_name")
def render_command(
    *,
    source: str,
    no_config: bool,
    config_paths: tuple[str, ...],
    key_transform: str | None,
    raw_transform: str | None,
    dynamic: bool | None,
    raw_names: dict[str, str],
) -> None:
    """Recompose one input and print it.

    Args:
        source (str): Input path, or ``-`` for STDIN.
        no_config (bool): Skip user and project config discovery.
        config_paths (tuple[str, ...]): Extra config files.
        key_transform (str | None): raw→key preset override.
        raw_transform (str | None): key→raw preset override.
        dynamic (bool | None): Dynamic rendering override.
        raw_names (dict[str, str]): Raw-name overrides from ``--raw-name``.
    """
    ctx: click.Context = click.get_current_context()
    ctx.ensure_object(dict)
    console: ClickConsole = ctx.obj["console"]

    config: Config = build_config(
        ctx,
        no_config=no_config,
        config_paths=config_paths,
        key_transform=key_transform,
        raw_transform=raw_transform,
        dynamic=dynamic,
        raw_names=raw_names,
    )

    document: Document = Document.parse(read_text_input(source))
    if config.dynamic and config.raw_names:
        logger.info("Dynamic rendering: ignoring %d raw-name override(s)", len(config.raw_names))
    console.print(
        document.compose(dynamic=config.dynamic, overrides=config.raw_names),
        nl=False,
    )
