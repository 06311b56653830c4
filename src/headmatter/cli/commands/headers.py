# topmark:header:start
#
#   project      : Headmatter
#   file         : headers.py
#   file_relpath : src/headmatter/cli/commands/headers.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Headmatter `headers` command.

Parses the header block of one input (a file or ``-`` for STDIN) and lists
its headers with their key, raw name and value. Keys are computed with the
configured raw→key preset (``--key-transform`` or ``[transforms] key``).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from headmatter.cli.cmd_common import build_config, get_effective_verbosity, read_text_input
from headmatter.cli.machine_emitters import emit_machine
from headmatter.cli.options import (
    CONTEXT_SETTINGS,
    common_config_options,
    common_transform_options,
    output_format_option,
)
from headmatter.config.logging import get_logger
from headmatter.core.formats import OutputFormat, is_machine_format
from headmatter.core.machine import header_to_payload
from headmatter.document import Document

if TYPE_CHECKING:
    from headmatter.cli.console import ClickConsole
    from headmatter.config.logging import HeadmatterLogger
    from headmatter.config.model import Config
    from headmatter.header import Header

logger: HeadmatterLogger = get_logger(__name__)


def _escape_md(text: str) -> str:
    return text.replace("|", "\\|")


@click.command(
    name="headers",
    help="List the headers of INPUT (a file, or '-' for STDIN).",
    context_settings=CONTEXT_SETTINGS,
)
@click.argument("source", metavar="INPUT", default="-")
@common_config_options
@common_transform_options
@output_format_option
def headers_command(
    *,
    source: str,
    no_config: bool,
    config_paths: tuple[str, ...],
    key_transform: str | None,
    raw_transform: str | None,
    output_format: OutputFormat | None,
) -> None:
    """List the headers of one input.

    Args:
        source (str): Input path, or ``-`` for STDIN.
        no_config (bool): Skip user and project config discovery.
        config_paths (tuple[str, ...]): Extra config files.
        key_transform (str | None): raw→key preset override.
        raw_transform (str | None): key→raw preset override.
        output_format (OutputFormat | None): Output format.
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
    )
    vlevel: int = get_effective_verbosity(ctx, config)

    text: str = read_text_input(source)
    headers: list[Header] = list(Document.parse(text).headers)
    logger.debug("%s: %d header(s)", source, len(headers))

    if is_machine_format(fmt):
        emit_machine(
            fmt=fmt,
            kind="header",
            container="headers",
            items=[header_to_payload(h) for h in headers],
        )
        return

    if fmt == OutputFormat.MARKDOWN:
        console.print(f"# Headers of `{source}`")
        console.print()
        if not headers:
            console.print("_No header block._")
            return
        console.print("| Key | Raw name | Value |")
        console.print("|---|---|---|")
        for h in headers:
            console.print(
                f"| `{_escape_md(str(h.key))}` | `{_escape_md(h.raw)}` | {_escape_md(h.value)} |"
            )
        return

    if not headers:
        if vlevel >= 0:
            console.warn(f"No header block in {source}")
        return

    width: int = max(len(str(h.key)) for h in headers)
    for h in headers:
        key_text: str = console.styled(str(h.key).ljust(width), fg="cyan")
        line: str = f"{key_text}  {h.to_text()}"
        if vlevel > 0 and not h.is_reversible():
            line += console.styled(f"  (renders as '{h.raw_from_key()}')", fg="yellow")
        console.print(line)
