# topmark:header:start
#
#   project      : Headmatter
#   file         : formats.py
#   file_relpath : src/headmatter/core/formats.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Output format vocabulary shared by CLI commands.

Machine formats (JSON, NDJSON) are stable and colorless.
"""

from __future__ import annotations

from enum import Enum


class OutputFormat(str, Enum):
    """Output format for CLI rendering.

    Members:
      DEFAULT: Human-friendly text output; may include ANSI color if enabled.
      JSON: A single JSON document (machine-readable).
      NDJSON: One JSON object per line (newline-delimited JSON; machine-readable).
      MARKDOWN: A Markdown document.

    Notes:
      - Use with `headmatter.cli.cli_types.EnumChoiceParam` to parse
        ``--format`` from Click.
    """

    DEFAULT = "default"
    JSON = "json"
    NDJSON = "ndjson"
    MARKDOWN = "markdown"


def is_machine_format(fmt: OutputFormat | None) -> bool:
    """Return True for formats intended for machine consumption."""
    return fmt in {OutputFormat.JSON, OutputFormat.NDJSON}
