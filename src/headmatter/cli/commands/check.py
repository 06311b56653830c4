# topmark:header:start
#
#   project      : Headmatter
#   file         : check.py
#   file_relpath : src/headmatter/cli/commands/check.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Headmatter `check` command.

Inspects the header block of every selected file and reports, per file:
  * whether it has a header block and how many headers it holds;
  * every header whose raw name does not survive a raw→key→raw round trip
    under the configured presets (a warning).

Files are selected from positional PATHS (files, directories, globs) and
filtered with ``--include``/``--exclude`` plus the ``[files]`` config patterns.

Exit code policy:
  * a file that cannot be read sets the matching error code (first error wins);
  * otherwise `ExitCode.NOT_REVERSIBLE` if any header is not reversible;
  * otherwise `ExitCode.SUCCESS`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

import click

from headmatter.cli.cmd_common import build_config, get_effective_verbosity, read_text_input
from headmatter.cli.errors import HeadmatterCliError
from headmatter.cli.exit_codes import ExitCode
from headmatter.cli.machine_emitters import emit_machine
from headmatter.cli.options import (
    CONTEXT_SETTINGS,
    common_config_options,
    common_transform_options,
    output_format_option,
)
from headmatter.config.logging import get_logger
from headmatter.core.diagnostics import DiagnosticLevel, DiagnosticLog, compute_diagnostic_stats
from headmatter.core.formats import OutputFormat, is_machine_format
from headmatter.core.machine import diagnostics_to_payload
from headmatter.document import Document
from headmatter.file_resolver import resolve_file_list

if TYPE_CHECKING:
    from pathlib import Path

    from headmatter.cli.console import ClickConsole
    from headmatter.config.logging import HeadmatterLogger
    from headmatter.config.model import Config
    from headmatter.core.diagnostics import DiagnosticStats
    from headmatter.header import Header

logger: HeadmatterLogger = get_logger(__name__)


@dataclass
class FileReport:
    """Outcome of checking one file.

    Attributes:
        path (Path): The checked file.
        has_header_block (bool): Whether a header block was found.
        n_headers (int): Number of parsed headers.
        n_irreversible (int): Number of headers that are not reversible.
        diagnostics (DiagnosticLog): Per-file findings.
        error_code (ExitCode | None): Set when the file could not be checked.
    """

    path: Path
    has_header_block: bool = False
    n_headers: int = 0
    n_irreversible: int = 0
    diagnostics: DiagnosticLog = field(default_factory=DiagnosticLog)
    error_code: ExitCode | None = None

    def to_payload(self) -> dict[str, Any]:
        """Return a JSON-friendly mapping of this report."""
        return {
            "path": str(self.path),
            "has_header_block": self.has_header_block,
            "headers": self.n_headers,
            "irreversible": self.n_irreversible,
            "error_code": int(self.error_code) if self.error_code is not None else None,
            "diagnostics": diagnostics_to_payload(self.diagnostics),
        }


def check_file(path: Path) -> FileReport:
    """Parse ``path`` and collect header-block findings.

    Read failures are recorded as an error diagnostic and an ``error_code``
    instead of being raised, so one bad file does not stop the run.

    Args:
        path (Path): The file to check.

    Returns:
        FileReport: The findings.
    """
    report = FileReport(path=path)
    try:
        text: str = read_text_input(str(path))
    except HeadmatterCliError as exc:
        logger.error("%s", exc.format_message())
        report.diagnostics.add_error(exc.format_message())
        report.error_code = ExitCode(exc.exit_code)
        return report

    document: Document = Document.parse(text)
    headers: list[Header] = list(document.headers)
    report.has_header_block = bool(headers)
    report.n_headers = len(headers)
    if not headers:
        report.diagnostics.add_info("No header block")
        return report

    for header in document.headers.irreversible():
        report.n_irreversible += 1
        report.diagnostics.add_warning(
            f"Header '{header.raw}' is not reversible: "
            f"key {header.key!r} renders as '{header.raw_from_key()}'"
        )
    return report


def _exit_code_for(reports: list[FileReport]) -> ExitCode:
    for report in reports:
        if report.error_code is not None:
            return report.error_code
    if any(report.n_irreversible for report in reports):
        return ExitCode.NOT_REVERSIBLE
    return ExitCode.SUCCESS


def _summary(reports: list[FileReport]) -> dict[str, int]:
    return {
        "files": len(reports),
        "with_header_block": sum(1 for r in reports if r.has_header_block),
        "not_reversible": sum(1 for r in reports if r.n_irreversible),
        "errors": sum(1 for r in reports if r.error_code is not None),
    }


def _render_default(
    console: ClickConsole, reports: list[FileReport], *, verbosity_level: int
) -> None:
    for report in reports:
        stats: DiagnosticStats = compute_diagnostic_stats(report.diagnostics)
        if report.error_code is not None:
            status: str = console.styled("error", fg="bright_red", bold=True)
        elif report.n_irreversible:
            status = console.styled("not reversible", fg="yellow", bold=True)
        elif report.has_header_block:
            status = console.styled("ok", fg="green")
        else:
            status = console.styled("no header block", fg="blue")

        if verbosity_level < 0 and report.error_code is None and not report.n_irreversible:
            continue
        console.print(f"{report.path}: {status} ({report.n_headers} header(s))")
        if verbosity_level > 0 or stats.n_error or stats.n_warning:
            for d in report.diagnostics:
                if d.level == DiagnosticLevel.INFO and verbosity_level <= 0:
                    continue
                console.print(f"  [{d.level.value}] {d.message}")

    if verbosity_level >= 0:
        summary: dict[str, int] = _summary(reports)
        console.print(
            console.styled(
                f"{summary['files']} file(s) checked, "
                f"{summary['with_header_block']} with a header block, "
                f"{summary['not_reversible']} not reversible, "
                f"{summary['errors']} error(s)",
                bold=True,
            )
        )


def _render_markdown(console: ClickConsole, reports: list[FileReport]) -> None:
    console.print("# Headmatter check")
    console.print()
    console.print("| File | Header block | Headers | Not reversible | Diagnostics |")
    console.print("|---|---|---:|---:|---|")
    for report in reports:
        messages: str = "<br>".join(
            f"{d.level.value}: {d.message}".replace("|", "\\|") for d in report.diagnostics
        )
        console.print(
            f"| `{report.path}` | {'yes' if report.has_header_block else 'no'} "
            f"| {report.n_headers} | {report.n_irreversible} | {messages} |"
        )


@click.command(
    name="check",
    help=(
        "Check the header blocks of PATHS (files, directories or globs): "
        "report header names that do not survive a raw→key→raw round trip."
    ),
    context_settings=CONTEXT_SETTINGS,
)
@click.argument("paths", nargs=-1, metavar="PATHS...")
@click.option(
    "--include",
    "-i",
    "include_patterns",
    multiple=True,
    help="Filter: keep only files matching these glob patterns (intersection).",
)
@click.option(
    "--exclude",
    "-e",
    "exclude_patterns",
    multiple=True,
    help="Filter: remove files matching these glob patterns (subtraction).",
)
@common_config_options
@common_transform_options
@output_format_option
def check_command(
    *,
    paths: tuple[str, ...],
    include_patterns: tuple[str, ...],
    exclude_patterns: tuple[str, ...],
    no_config: bool,
    config_paths: tuple[str, ...],
    key_transform: str | None,
    raw_transform: str | None,
    output_format: OutputFormat | None,
) -> None:
    """Check header blocks of the selected files.

    Args:
        paths (tuple[str, ...]): Files, directories or globs.
        include_patterns (tuple[str, ...]): Include filters (gitwildmatch).
        exclude_patterns (tuple[str, ...]): Exclude filters (gitwildmatch).
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
        include_patterns=list(include_patterns),
        exclude_patterns=list(exclude_patterns),
    )
    vlevel: int = get_effective_verbosity(ctx, config)

    file_list: list[Path] = resolve_file_list(
        paths,
        include_patterns=config.include_patterns,
        exclude_patterns=config.exclude_patterns,
    )
    if not file_list:
        if not is_machine_format(fmt) and vlevel >= 0:
            console.print(console.styled("No files to process.", fg="blue"))
        return

    reports: list[FileReport] = []
    for path in file_list:
        try:
            reports.append(check_file(path))
        except Exception as exc:  # pragma: no cover
            logger.exception("Unexpected error checking %s", path)
            report = FileReport(path=path, error_code=ExitCode.UNEXPECTED_ERROR)
            report.diagnostics.add_error(f"Unexpected error: {exc}")
            reports.append(report)

    if is_machine_format(fmt):
        emit_machine(
            fmt=fmt,
            kind="file",
            container="files",
            items=[r.to_payload() for r in reports],
            summary=_summary(reports),
        )
    elif fmt == OutputFormat.MARKDOWN:
        _render_markdown(console, reports)
    else:
        _render_default(console, reports, verbosity_level=vlevel)

    code: ExitCode = _exit_code_for(reports)
    if code != ExitCode.SUCCESS:
        ctx.exit(code)
