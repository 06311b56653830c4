# topmark:header:start
#
#   project      : Headmatter
#   file         : test_cli_transforms.py
#   file_relpath : tests/cli/test_cli_transforms.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for `headmatter transforms`."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from tests.cli.conftest import assert_CONFIG_ERROR, assert_SUCCESS, parse_ndjson, run_cli_in
from tests.conftest import mark_cli

if TYPE_CHECKING:
    from pathlib import Path

    from click.testing import Result


def _line_for(output: str, name: str) -> str:
    for line in output.splitlines():
        if line[2:].split(" ", 1)[0] == name:
            return line
    raise AssertionError(f"no line for preset {name!r} in:\n{output}")


@mark_cli
def test_transforms_default_listing(tmp_path: Path) -> None:
    result: Result = run_cli_in(tmp_path, ["transforms"])
    assert_SUCCESS(result)
    output: str = result.output
    assert output.index("raw→key presets:") < output.index("key→raw presets:")

    snake: str = _line_for(output, "snake")
    assert snake.startswith("* snake")
    assert snake.endswith("(A-Header-Name → a_header_name)")
    assert _line_for(output, "lower").startswith("  lower")
    assert _line_for(output, "dashed-title").startswith("* dashed-title")
    assert _line_for(output, "dashed-upper").endswith("(a_header_name → A-HEADER-NAME)")


@mark_cli
def test_transforms_marks_configured_presets(tmp_path: Path) -> None:
    (tmp_path / "headmatter.toml").write_text(
        'root = true\n\n[transforms]\nkey = "lower"\nraw = "identity"\n', encoding="utf-8"
    )
    result: Result = run_cli_in(tmp_path, ["transforms"])
    assert_SUCCESS(result)
    assert _line_for(result.output, "lower").startswith("* lower")
    assert _line_for(result.output, "snake").startswith("  snake")
    # "identity" exists in both groups; only the key→raw one is selected.
    identity_lines: list[str] = [
        line for line in result.output.splitlines() if line[2:].startswith("identity")
    ]
    assert [line[0] for line in identity_lines] == [" ", "*"]


@mark_cli
def test_transforms_json(tmp_path: Path) -> None:
    result: Result = run_cli_in(tmp_path, ["transforms", "--format", "json"])
    assert_SUCCESS(result)
    items: list[dict[str, Any]] = json.loads(result.stdout)["transforms"]
    assert len(items) == 7
    assert [(i["kind"], i["name"]) for i in items if i["selected"]] == [
        ("key", "snake"),
        ("raw", "dashed-title"),
    ]
    lower: dict[str, Any] = next(i for i in items if i["name"] == "lower")
    assert (lower["example_in"], lower["example_out"]) == ("A-Header-Name", "a-header-name")


@mark_cli
def test_transforms_ndjson(tmp_path: Path) -> None:
    result: Result = run_cli_in(tmp_path, ["transforms", "--format", "ndjson"])
    assert_SUCCESS(result)
    records: list[dict[str, Any]] = parse_ndjson(result.stdout)
    assert len(records) == 7
    assert {r["kind"] for r in records} == {"transform"}


@mark_cli
def test_transforms_markdown(tmp_path: Path) -> None:
    result: Result = run_cli_in(tmp_path, ["transforms", "--format", "markdown"])
    assert_SUCCESS(result)
    assert "# Transform presets" in result.output
    assert "| key | `snake` | ✓ |" in result.output


@mark_cli
def test_transforms_unknown_preset_in_config(tmp_path: Path) -> None:
    (tmp_path / "headmatter.toml").write_text(
        'root = true\n\n[transforms]\nkey = "kebab"\n', encoding="utf-8"
    )
    result: Result = run_cli_in(tmp_path, ["transforms"])
    assert_CONFIG_ERROR(result)
    assert "Unknown key transform 'kebab'" in result.output
