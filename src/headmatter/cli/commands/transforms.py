# topmark:header:start
#
#   project      : Headmatter
#   file         : transforms.py
#   file_relpath : src/headmatter/cli/commands/transforms.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Headmatter `transforms` command.

Lists the registered raw→key and key→raw presets with a worked example each.
The presets selected by the effective configuration are marked.
"""

from __future__ import annotations

from dataclasses import asdict
from typing import TYPE_CHECKING, Any

import click

from headmatter.cli.cmd_common import build_config, get_effective_verbosity
from headmatter.cli.machine_emitters import emit_machine
from headmatter.cli.options import CONTEXT_SETTINGS, common_config_options, output_format_option
from headmatter.core.formats import OutputFormat, is_machine_format
from headmatter.transforms import TransformRegistry

if TYPE_CHECKING:
    from headmatter.cli.console import ClickConsole
    from headmatter.config.model import Config
    from headmatter.transforms import TransformMeta


@click.command(
    name="transforms",
    help="List the available raw→key and key→raw transform presets.",
    context_settings=CONTEXT_SETTINGS,
)
@common_config_options
@output_format_option
def transforms_command(
    *,
    no_config: bool,
    config_paths: tuple[str, ...],
    output_format: OutputFormat | None,
) -> None:
    """List transform presets.

    Args:
        no_config (bool): Skip user and project config discovery.
        config_paths (tuple[str, ...]): Extra config files.
        output_format (OutputFormat | None): Output format.
    """
    ctx: click.Context = click.get_current_context()
    ctx.ensure_object(dict)
    console: ClickConsole = ctx.obj["console"]
    fmt: OutputFormat = output_format or OutputFormat.DEFAULT
    if is_machine_format(fmt):
        console.enable_color = False

    config: Config = build_config(
        ctx, no_config=no_config, config_paths=config_paths, install=False
    )
    vlevel: int = get_effective_verbosity(ctx, config)
    selected: dict[str, str] = {"key": config.key_transform, "raw": config.raw_transform}

    metas: list[TransformMeta] = list(TransformRegistry.iter_meta())

    if is_machine_format(fmt):
        items: list[dict[str, Any]] = [
            {**asdict(meta), "selected": selected[meta.kind] == meta.name} for meta in metas
        ]
        emit_machine(fmt=fmt, kind="transform", container="transforms", items=items)
        return

    if fmt == OutputFormat.MARKDOWN:
        console.print("# Transform presets")
        console.print()
        console.print("| Kind | Name | Selected | Description | Example |")
        console.print("|---|---|:---:|---|---|")
        for meta in metas:
            mark: str = "✓" if selected[meta.kind] == meta.name else ""
            console.print(
                f"| {meta.kind} | `{meta.name}` | {mark} | {meta.description} "
                f"| `{meta.example_in}` → `{meta.example_out}` |"
            )
        return

    titles: dict[str, str] = {"key": "raw→key presets:", "raw": "key→raw presets:"}
    width: int = max(len(meta.name) for meta in metas)
    current_kind: str | None = None
    for meta in metas:
        if meta.kind != current_kind:
            if current_kind is not None:
                console.print()
            console.print(console.styled(titles[meta.kind], bold=True, underline=True))
            current_kind = meta.kind
        mark = "*" if selected[meta.kind] == meta.name else " "
        line: str = f"{mark} {console.styled(meta.name.ljust(width), fg='cyan')}"
        if vlevel > 0:
            line += f"  {meta.description}"
        line += f"  ({meta.example_in} → {meta.example_out})"
        console.print(line)
