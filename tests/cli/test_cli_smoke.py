# topmark:header:start
#
#   project      : Headmatter
#   file         : test_cli_smoke.py
#   file_relpath : tests/cli/test_cli_smoke.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Smoke tests for the CLI group, global options and the `version` command."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from headmatter.constants import HEADMATTER_VERSION
from tests.cli.conftest import assert_SUCCESS, assert_USAGE_ERROR, parse_ndjson, run_cli
from tests.conftest import mark_cli, parametrize

if TYPE_CHECKING:
    from click.testing import Result


@mark_cli
def test_no_subcommand_prints_hint_and_help() -> None:
    result: Result = run_cli([])
    assert_SUCCESS(result)
    assert "Hint: use 'headmatter headers FILE'" in result.output
    assert "Usage:" in result.output
    for name in ("headers", "body", "render", "check", "transforms", "config", "version"):
        assert name in result.output


@mark_cli
@parametrize("flag", ["-h", "--help"])
def test_help_flags(flag: str) -> None:
    result: Result = run_cli([flag])
    assert_SUCCESS(result)
    assert "Headmatter" in result.output


@mark_cli
def test_version_default_is_plain() -> None:
    result: Result = run_cli(["version"])
    assert_SUCCESS(result)
    assert result.output == f"{HEADMATTER_VERSION}\n"


@mark_cli
def test_version_verbose_adds_banner() -> None:
    result: Result = run_cli(["-v", "version"])
    assert_SUCCESS(result)
    assert "Headmatter version:" in result.output
    assert HEADMATTER_VERSION in result.output


@mark_cli
def test_version_json_and_ndjson() -> None:
    result: Result = run_cli(["version", "--format", "json"])
    assert_SUCCESS(result)
    payload: dict[str, Any] = json.loads(result.stdout)
    assert payload["version"] == {"version": HEADMATTER_VERSION}
    assert payload["meta"]["tool"] == "headmatter"

    result = run_cli(["version", "--format", "NDJSON"])
    assert_SUCCESS(result)
    records: list[dict[str, Any]] = parse_ndjson(result.stdout)
    assert len(records) == 1
    assert records[0]["kind"] == "version"
    assert records[0]["version"]["version"] == HEADMATTER_VERSION


@mark_cli
def test_version_markdown() -> None:
    result: Result = run_cli(["version", "--format", "markdown"])
    assert_SUCCESS(result)
    assert result.output.startswith("# Headmatter Version")


@mark_cli
def test_verbose_and_quiet_are_exclusive() -> None:
    result: Result = run_cli(["-v", "-q", "version"])
    assert_USAGE_ERROR(result)
    assert "mutually exclusive" in result.output


@mark_cli
def test_unknown_format_is_rejected_by_click() -> None:
    result: Result = run_cli(["version", "--format", "yaml"])
    assert result.exit_code == 2
    assert "Invalid value 'yaml'" in result.output


@mark_cli
def test_color_never_emits_no_ansi() -> None:
    result: Result = run_cli(["--color", "never", "-v", "version"])
    assert_SUCCESS(result)
    assert "\x1b[" not in result.output


@mark_cli
def test_color_always_emits_ansi() -> None:
    result: Result = run_cli(["--color", "always", "version"])
    assert_SUCCESS(result)
    assert "\x1b[" in result.output
