# topmark:header:start
#
#   project      : Headmatter
#   file         : constants.py
#   file_relpath : src/headmatter/constants.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Headmatter Constants."""

from __future__ import annotations

import re
from importlib.metadata import version as get_version

HEADMATTER_VERSION: str = get_version("headmatter")

# The character separating a raw header name from its value.
HEADER_NAME_VALUE_SEPARATOR_CHARACTER: str = ":"

# Splits a header line into raw name and value; surrounding whitespace is consumed.
HEADER_NAME_VALUE_SEPARATOR_PATTERN: re.Pattern[str] = re.compile(
    rf"\s*{re.escape(HEADER_NAME_VALUE_SEPARATOR_CHARACTER)}\s*"
)

# The separator emitted between the header block and the body.
HEADERS_SEPARATOR: str = "\n\n"

# One blank line between header block and body; CRLF line breaks are accepted.
HEADERS_SEPARATOR_PATTERN: re.Pattern[str] = re.compile(r"\r?\n\r?\n")

# Line breaks inside a header block. Other Unicode line separators stay in values.
HEADER_LINE_BREAK_PATTERN: re.Pattern[str] = re.compile(r"\r?\n")

# Name of the bundled default config inside the package `headmatter.config`:
DEFAULT_TOML_CONFIG_PACKAGE: str = "headmatter.config"
DEFAULT_TOML_CONFIG_NAME: str = "headmatter-default.toml"

# Project-local config file names, in same-directory precedence order.
PYPROJECT_TOML_NAME: str = "pyproject.toml"
HEADMATTER_TOML_NAME: str = "headmatter.toml"

# Section holding the configuration inside pyproject.toml.
PYPROJECT_SECTION: str = "tool.headmatter"

# Environment variable consulted for the internal log level.
LOG_LEVEL_ENV_VAR: str = "HEADMATTER_LOG_LEVEL"

# Markers around TOML output in the default (human) format with -v.
TOML_BLOCK_START: str = "# === BEGIN[TOML] ==="
TOML_BLOCK_END: str = "# === END[TOML] ==="
