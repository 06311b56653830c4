# topmark:header:start
#
#   project      : Headmatter
#   file         : cmd_common.py
#   file_relpath : src/headmatter/cli/cmd_common.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Common command utilities for Click-based commands.

This module holds small, focused helpers used by multiple CLI commands:
effective verbosity, config resolution, reading input text and rendering
config diagnostics or TOML blocks. Policy (exit codes per command, messages)
stays in the commands.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from headmatter.cli.cli_types import build_args_namespace
from headmatter.cli.console import get_console_safely
from headmatter.cli.errors import (
    HeadmatterConfigError,
    HeadmatterEncodingError,
    HeadmatterFileNotFoundError,
    HeadmatterIOError,
)
from headmatter.config.logging import get_logger
from headmatter.config.model import MutableConfig
from headmatter.constants import TOML_BLOCK_END, TOML_BLOCK_START
from headmatter.core.diagnostics import DiagnosticLevel, compute_diagnostic_stats
from headmatter.transforms import default_transforms

if TYPE_CHECKING:
    from headmatter.cli.cli_types import ArgsNamespace
    from headmatter.cli.console import ClickConsole
    from headmatter.config.logging import HeadmatterLogger
    from headmatter.config.model import Config
    from headmatter.core.diagnostics import DiagnosticStats

logger: HeadmatterLogger = get_logger(__name__)

#: Positional value meaning "read the input text from STDIN".
STDIN_DASH: str = "-"


def get_effective_verbosity(ctx: click.Context, config: Config | None = None) -> int:
    """Return the effective program-output verbosity for this command.

    Resolution order (tri-state aware):
        1. Config.verbosity_level if set (not None)
        2. ctx.obj["verbosity_level"] if present
        3. 0 (terse)
    """
    cfg_level: int | None = config.verbosity_level if config is not None else None
    if cfg_level is not None:
        return int(cfg_level)
    obj = ctx.obj if isinstance(ctx.obj, dict) else {}
    return int(obj.get("verbosity_level", 0))


def build_config(
    ctx: click.Context,
    *,
    no_config: bool = False,
    config_paths: tuple[str, ...] | list[str] = (),
    key_transform: str | None = None,
    raw_transform: str | None = None,
    dynamic: bool | None = None,
    raw_names: dict[str, str] | None = None,
    include_patterns: list[str] | None = None,
    exclude_patterns: list[str] | None = None,
    install: bool = True,
) -> Config:
    """Resolve the effective configuration for a command.

    Merges defaults, discovered and explicit config files and the CLI
    overrides, freezes the result and reports its diagnostics. Unless
    ``install`` is False, the configured transform pair becomes the process
    default until the Click context closes.

    Args:
        ctx (click.Context): The current Click context.
        no_config (bool): Skip user and project config discovery.
        config_paths (tuple[str, ...] | list[str]): Extra config files, in order.
        key_transform (str | None): raw→key preset override.
        raw_transform (str | None): key→raw preset override.
        dynamic (bool | None): Dynamic rendering override.
        raw_names (dict[str, str] | None): Raw-name overrides.
        include_patterns (list[str] | None): Extra include patterns.
        exclude_patterns (list[str] | None): Extra exclude patterns.
        install (bool): Install the configured transforms as process default.

    Returns:
        Config: The frozen configuration.

    Raises:
        HeadmatterConfigError: If loading or validating the config produced errors.
    """
    args: ArgsNamespace = build_args_namespace(
        verbosity_level=ctx.obj.get("verbosity_level") if isinstance(ctx.obj, dict) else None,
        key_transform=key_transform,
        raw_transform=raw_transform,
        dynamic=dynamic,
        raw_names=raw_names,
        include_patterns=include_patterns,
        exclude_patterns=exclude_patterns,
    )
    draft: MutableConfig = MutableConfig.load_merged(
        extra_config_files=[Path(p) for p in config_paths],
        no_config=no_config,
    )
    draft.apply_cli_args(args)
    config: Config = draft.freeze()
    logger.trace("Effective config: %s", config)

    render_config_diagnostics(ctx=ctx, config=config)
    errors: list[str] = [d.message for d in config.diagnostics if d.level == DiagnosticLevel.ERROR]
    if errors:
        raise HeadmatterConfigError("; ".join(errors))

    if install:
        ctx.with_resource(default_transforms(config.transforms()))
    return config


def render_config_diagnostics(*, ctx: click.Context, config: Config) -> None:
    """Print warning and info diagnostics collected while resolving ``config``.

    At verbosity 0 a single triage line is printed; with ``-v`` each diagnostic
    follows. Errors are left to the caller, which raises `HeadmatterConfigError`.
    Nothing is printed when there are no diagnostics.
    """
    if not config.diagnostics:
        return

    console: ClickConsole = get_console_safely()
    verbosity: int = get_effective_verbosity(ctx, config)
    stats: DiagnosticStats = compute_diagnostic_stats(config.diagnostics)
    if not (stats.n_warning or stats.n_info):
        return

    parts: list[str] = []
    if stats.n_warning:
        parts.append(f"{stats.n_warning} warning" + ("s" if stats.n_warning != 1 else ""))
    if stats.n_info and not stats.n_warning:
        parts.append(f"{stats.n_info} info" + ("s" if stats.n_info != 1 else ""))
    triage: str = ", ".join(parts)

    if verbosity <= 0:
        console.warn(f"Config diagnostics: {triage} (use '-v' to view details)")
        return

    console.warn(f"Config diagnostics: {triage}")
    for d in config.diagnostics:
        if d.level == DiagnosticLevel.ERROR:
            continue
        console.warn(f"  [{d.level.value}] {d.message}")


def read_text_input(source: str) -> str:
    """Read the text of a file, or STDIN for ``-``.

    Files are read as UTF-8 with newline translation disabled so ``\\r\\n`` line
    endings reach the parser unchanged.

    Args:
        source (str): A file path, or ``-`` for STDIN.

    Returns:
        str: The text.

    Raises:
        HeadmatterFileNotFoundError: If the path does not exist or is a directory.
        HeadmatterEncodingError: If the content is not valid UTF-8.
        HeadmatterIOError: For other I/O errors.
    """
    if source == STDIN_DASH:
        logger.debug("Reading input from STDIN")
        return click.get_text_stream("stdin").read()

    path = Path(source)
    logger.debug("Reading input from %s", path)
    try:
        with open(path, encoding="utf-8", newline="") as fh:
            return fh.read()
    except (FileNotFoundError, IsADirectoryError) as exc:
        raise HeadmatterFileNotFoundError(f"No such file: {source}") from exc
    except UnicodeDecodeError as exc:
        raise HeadmatterEncodingError(f"Cannot decode {source} as UTF-8: {exc.reason}") from exc
    except OSError as exc:
        raise HeadmatterIOError(f"Cannot read {source}: {exc.strerror or exc}") from exc


def render_toml_block(
    *,
    console: ClickConsole,
    title: str,
    toml_text: str,
    verbosity_level: int,
) -> None:
    """Render a TOML snippet with optional banner and BEGIN/END markers.

    Used by ``headmatter config dump`` and ``headmatter config init`` in the
    default (human) output format.

    Args:
        console (ClickConsole): Console instance for printing styled output.
        title (str): Title line shown above the block when verbosity > 0.
        toml_text (str): The TOML content to render.
        verbosity_level (int): Effective verbosity; 0 disables banners.
    """
    if verbosity_level > 0:
        console.print(console.styled(title, bold=True, underline=True))
        console.print(console.styled(TOML_BLOCK_START, fg="cyan", dim=True))

    console.print(console.styled(toml_text.rstrip("\n"), fg="cyan"))

    if verbosity_level > 0:
        console.print(console.styled(TOML_BLOCK_END, fg="cyan", dim=True))
