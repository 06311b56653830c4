# topmark:header:start
#
#   project      : Headmatter
#   file         : cli_types.py
#   file_relpath : src/headmatter/cli/cli_types.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Shared CLI parameter types and argument parsing helpers for Headmatter.

This module defines the `ArgsNamespace` TypedDict used to pass parsed CLI
state to the configuration layer (`MutableConfig.apply_cli_args`), plus
custom Click parameter types and validators shared by several commands.
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Generic, NoReturn, Protocol, TypedDict, TypeVar, cast

import click

if TYPE_CHECKING:
    from collections.abc import Iterable

    from click.shell_completion import CompletionItem as ClickCompletionItem

    class ParamTypeBase(Protocol):
        """Typed base to avoid subclassing Any when Click lacks stubs."""

        name: str

else:
    # At runtime, subclass the real Click type
    ParamTypeBase = click.ParamType  # type: ignore[assignment]

# Type variable bounded to Enum for generic EnumChoiceParam
E = TypeVar("E", bound=Enum)


class ArgsNamespace(TypedDict, total=False):
    """Namespace for parsed CLI arguments and options in Headmatter.

    Attributes:
        verbosity_level (int | None): Program-output verbosity (0=terse, 1=verbose).
        key_transform (str | None): raw→key preset name.
        raw_transform (str | None): key→raw preset name.
        dynamic (bool | None): Recompute raw names when rendering.
        raw_names (dict[str, str] | None): Per-key raw-name overrides.
        include_patterns (list[str] | None): Glob patterns of files to include.
        exclude_patterns (list[str] | None): Glob patterns of files to exclude.
    """

    # Global options: retrieve from ctx.obj
    verbosity_level: int | None

    # Command options: transforms
    key_transform: str | None
    raw_transform: str | None

    # Command options: rendering
    dynamic: bool | None
    raw_names: dict[str, str] | None

    # Command options: filtering
    include_patterns: list[str] | None
    exclude_patterns: list[str] | None


def build_args_namespace(
    *,
    verbosity_level: int | None = None,
    key_transform: str | None = None,
    raw_transform: str | None = None,
    dynamic: bool | None = None,
    raw_names: dict[str, str] | None = None,
    include_patterns: list[str] | None = None,
    exclude_patterns: list[str] | None = None,
) -> ArgsNamespace:
    """Build an ArgsNamespace dictionary for CLI argument passing.

    Args:
        verbosity_level (int | None): Program-output verbosity (0=terse, 1=verbose).
        key_transform (str | None): raw→key preset name.
        raw_transform (str | None): key→raw preset name.
        dynamic (bool | None): Recompute raw names when rendering.
        raw_names (dict[str, str] | None): Per-key raw-name overrides.
        include_patterns (list[str] | None): Glob patterns of files to include.
        exclude_patterns (list[str] | None): Glob patterns of files to exclude.

    Returns:
        ArgsNamespace: Dictionary of CLI argument values.
    """
    return {
        "verbosity_level": verbosity_level,
        "key_transform": key_transform,
        "raw_transform": raw_transform,
        "dynamic": dynamic,
        "raw_names": raw_names,
        "include_patterns": include_patterns,
        "exclude_patterns": exclude_patterns,
    }


# --- Custom Click parameter types and validators for the Headmatter CLI ---


class EnumChoiceParam(ParamTypeBase, Generic[E]):
    """A Click parameter type that converts a string to a member of a given Enum."""

    enum_cls: type[E]
    name: str
    choices: list[str]

    def __init__(self, enum_cls: type[E]) -> None:
        self.enum_cls = enum_cls
        self.name = self.enum_cls.__name__.lower()
        # Assume the enum exposes string-valued members (e.g., OutputFormat)
        self.choices = [cast("str", getattr(e, "value", str(e))) for e in self.enum_cls]

    def _fail_noreturn(
        self,
        message: str,
        param: click.Parameter | None,
        ctx: click.Context | None,
    ) -> NoReturn:
        """Raise a BadParameter with a NoReturn signature (clear to type checkers)."""
        raise click.BadParameter(message, param=param, ctx=ctx)

    def convert(
        self,
        value: str | E | None,
        param: click.Parameter | None,
        ctx: click.Context | None,
    ) -> E | None:
        """Convert a string to a member of the Enum (case-insensitive)."""
        if value is None:
            return None
        if isinstance(value, self.enum_cls):
            return value

        lookup: dict[str, E] = {
            cast("str", getattr(choice, "value", str(choice))).lower(): choice
            for choice in cast("Iterable[E]", self.enum_cls)
        }

        key = str(value).lower()
        if key in lookup:
            return lookup[key]

        self._fail_noreturn(
            f"Invalid value '{value}'. Must be one of: {', '.join(self.choices)}",
            param,
            ctx,
        )

    def shell_complete(
        self,
        ctx: click.Context,  # pylint: disable=unused-argument
        param: click.Parameter,  # pylint: disable=unused-argument
        incomplete: str,
    ) -> list[ClickCompletionItem]:
        """Tab completion for Click.

        Bash: `eval "$(_HEADMATTER_COMPLETE=bash_source headmatter)"`
        Zsh: `eval "$(_HEADMATTER_COMPLETE=zsh_source headmatter)"`
        """
        # Runtime import to avoid import-time dependency for non-completion paths
        from click.shell_completion import CompletionItem as RuntimeCompletionItem

        prefix = (incomplete or "").lower()
        items: list[ClickCompletionItem] = []
        for e in cast("Iterable[E]", self.enum_cls):
            val = str(getattr(e, "value", e))
            if val.lower().startswith(prefix):
                items.append(RuntimeCompletionItem(val))
        return items

    def __repr__(self) -> str:
        return f"EnumChoiceParam({self.enum_cls.__name__})"


def RawNameParam(  # noqa: N802
    ctx: click.Context,  # pylint: disable=unused-argument
    param: click.Parameter,  # pylint: disable=unused-argument
    value: Iterable[str] | None,
) -> dict[str, str]:
    """Validator: parse repeated ``KEY=RAW`` options into a mapping.

    Later occurrences of the same key win. Whitespace around ``KEY`` and ``RAW``
    is stripped.

    Args:
        ctx (click.Context): Click context.
        param (click.Parameter): The Click parameter.
        value (Iterable[str] | None): The raw option values.

    Returns:
        dict[str, str]: The parsed ``{key: raw}`` overrides.

    Raises:
        click.BadParameter: If an entry lacks ``=`` or has an empty key or raw name.
    """
    out: dict[str, str] = {}
    for item in value or ():
        key, sep, raw = item.partition("=")
        key, raw = key.strip(), raw.strip()
        if not sep or not key or not raw:
            raise click.BadParameter(f"Expected KEY=RAW, got {item!r}")
        out[key] = raw
    return out
