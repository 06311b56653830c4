# topmark:header:start
#
#   project      : Headmatter
#   file         : options.py
#   file_relpath : src/headmatter/cli/options.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Common CLI option utilities for the Headmatter CLI.

This module centralizes reusable options (verbosity, color, configuration,
transform presets, output format) and their resolution logic, so commands and
groups can stay thin. The helpers here are Click-aware.
"""

from __future__ import annotations

import os
import sys
from enum import Enum
from typing import TYPE_CHECKING, ParamSpec, TypeVar

import click
from click.core import ParameterSource

from headmatter.cli.cli_types import EnumChoiceParam
from headmatter.cli.errors import HeadmatterUsageError
from headmatter.config.logging import get_logger
from headmatter.core.formats import OutputFormat
from headmatter.errors import UnknownTransformError
from headmatter.transforms import TransformRegistry

if TYPE_CHECKING:
    from collections.abc import Callable

    from headmatter.config.logging import HeadmatterLogger

P = ParamSpec("P")
R = TypeVar("R")

logger: HeadmatterLogger = get_logger(__name__)


def resolve_verbosity(verbose_count: int, quiet_count: int) -> int:
    """Resolve the program-output verbosity from ``-v``/``-q`` counts.

    Args:
        verbose_count (int): Number of times ``-v`` was passed.
        quiet_count (int): Number of times ``-q`` was passed.

    Returns:
        int: ``verbose_count`` when positive, ``-quiet_count`` when quiet,
        otherwise 0 (terse).

    Raises:
        HeadmatterUsageError: If both ``--verbose`` and ``--quiet`` are used.
    """
    if verbose_count > 0 and quiet_count > 0:
        raise HeadmatterUsageError("The '--verbose' and '--quiet' options are mutually exclusive.")
    if verbose_count > 0:
        return verbose_count
    return -quiet_count


#: Click context settings shared by all commands.
CONTEXT_SETTINGS: dict[str, list[str]] = {
    "help_option_names": ["-h", "--help"],
}


def common_verbose_options(f: Callable[P, R]) -> Callable[P, R]:
    """Add ``-v/--verbose`` and ``-q/--quiet`` (counted, mutually exclusive)."""
    f = click.option(
        "-v",
        "--verbose",
        count=True,
        help="Increase verbosity. Specify up to twice for more detail.",
    )(f)
    f = click.option(
        "-q",
        "--quiet",
        count=True,
        help="Suppress output. Specify up to twice for even less.",
    )(f)
    return f


class ColorMode(str, Enum):
    """User intent for colorized terminal output."""

    AUTO = "auto"
    ALWAYS = "always"
    NEVER = "never"


def resolve_color_mode(
    *,
    cli_mode: ColorMode | None,
    output_format: OutputFormat | None,
    stdout_isatty: bool | None = None,
) -> bool:
    """Determine whether color output should be enabled.

    Args:
        cli_mode (ColorMode | None): Explicit color mode from CLI options.
        output_format (OutputFormat | None): Output format; JSON/NDJSON disable color.
        stdout_isatty (bool | None): Whether stdout is a TTY; auto-detected if None.

    Returns:
        bool: True if color output should be enabled.

    Behavior:
        Disables color for JSON/NDJSON output formats.
        Honors --color and --no-color CLI flags.
        Honors FORCE_COLOR and NO_COLOR environment variables.
        Defaults to enabling color if stdout is a TTY.
    """
    if output_format in (OutputFormat.JSON, OutputFormat.NDJSON):
        return False
    if cli_mode == ColorMode.ALWAYS:
        return True
    if cli_mode == ColorMode.NEVER:
        return False
    force_color: str | None = os.getenv("FORCE_COLOR")
    if force_color and force_color != "0":
        return True
    if os.getenv("NO_COLOR") is not None:
        return False
    if stdout_isatty is None:
        try:
            stdout_isatty = sys.stdout.isatty()
        except (AttributeError, ValueError):
            stdout_isatty = False
    return bool(stdout_isatty)


def common_color_options(f: Callable[P, R]) -> Callable[P, R]:
    """Add ``--color {auto,always,never}`` and ``--no-color``."""
    f = click.option(
        "--color",
        "color_mode",
        type=EnumChoiceParam(ColorMode),
        default=None,
        help="Color output: auto (default), always, or never.",
    )(f)
    f = click.option(
        "--no-color",
        "no_color",
        is_flag=True,
        help="Disable color output (equivalent to --color=never).",
    )(f)
    return f


def trap_underscored_option(ctx: click.Context, param: click.Parameter, _value: object) -> None:
    """Raise a helpful error for underscored long options (e.g., --key_transform).

    Runs during option parsing (is_eager=True) so we can show a friendly hint
    instead of the generic "No such option" error.
    """
    name: str | None = param.name
    src: ParameterSource | None = ctx.get_parameter_source(name) if name else None
    if src is not ParameterSource.COMMANDLINE:
        return

    bad: str = param.opts[0] if param.opts else "--?"
    logger.debug("Trapped underscored option: %s", bad)
    suggestion: str = bad.replace("_", "-")
    raise HeadmatterUsageError(f"Unknown option: {bad}. Did you mean {suggestion}?")


def underscored_trap_option(*names: str) -> Callable[[Callable[P, R]], Callable[P, R]]:
    """Register hidden underscored spellings that raise a helpful error.

    The hidden option gets a unique destination name so Click's parameter
    source tracking does not overlap with the real option's destination.

    Args:
        *names (str): Underscored long option names to trap, e.g. ``"--no_config"``.

    Returns:
        Callable: A decorator compatible with Click's option stacking.
    """
    if not names:
        raise ValueError("underscored_trap_option requires at least one option name")

    dest = f"_trap_{names[0].lstrip('-').replace('-', '_')}"

    return click.option(
        *names,
        dest,
        hidden=True,
        expose_value=False,
        is_eager=True,
        multiple=True,
        callback=trap_underscored_option,
    )


def common_config_options(f: Callable[P, R]) -> Callable[P, R]:
    """Add ``--config FILE`` (repeatable) and ``--no-config``."""
    f = click.option(
        "--no-config",
        "no_config",
        is_flag=True,
        help="Ignore user and project config files (only use defaults and --config).",
    )(f)
    f = underscored_trap_option("--no_config")(f)
    f = click.option(
        "--config",
        "config_paths",
        multiple=True,
        metavar="FILE",
        type=click.Path(exists=True, file_okay=True, dir_okay=False, readable=True),
        help="Additional config file(s) to load and merge.",
    )(f)
    return f


def _validate_key_transform(
    ctx: click.Context,  # pylint: disable=unused-argument
    param: click.Parameter,  # pylint: disable=unused-argument
    value: str | None,
) -> str | None:
    if value is None:
        return None
    try:
        TransformRegistry.get_key(value)
    except UnknownTransformError as exc:
        raise HeadmatterUsageError(str(exc)) from exc
    return value


def _validate_raw_transform(
    ctx: click.Context,  # pylint: disable=unused-argument
    param: click.Parameter,  # pylint: disable=unused-argument
    value: str | None,
) -> str | None:
    if value is None:
        return None
    try:
        TransformRegistry.get_raw(value)
    except UnknownTransformError as exc:
        raise HeadmatterUsageError(str(exc)) from exc
    return value


def common_transform_options(f: Callable[P, R]) -> Callable[P, R]:
    """Add ``--key-transform`` and ``--raw-transform`` preset selectors.

    Preset names are checked against `TransformRegistry` at parse time; an
    unknown name is a usage error.
    """
    f = click.option(
        "--key-transform",
        "key_transform",
        metavar="PRESET",
        default=None,
        callback=_validate_key_transform,
        help=f"raw→key preset ({', '.join(TransformRegistry.key_names())}).",
    )(f)
    f = underscored_trap_option("--key_transform")(f)
    f = click.option(
        "--raw-transform",
        "raw_transform",
        metavar="PRESET",
        default=None,
        callback=_validate_raw_transform,
        help=f"key→raw preset ({', '.join(TransformRegistry.raw_names())}).",
    )(f)
    f = underscored_trap_option("--raw_transform")(f)
    return f


def output_format_option(f: Callable[P, R]) -> Callable[P, R]:
    """Add ``--format`` selecting an `OutputFormat`."""
    f = click.option(
        "--format",
        "output_format",
        type=EnumChoiceParam(OutputFormat),
        default=None,
        help=f"Output format ({', '.join(v.value for v in OutputFormat)}).",
    )(f)
    return f
