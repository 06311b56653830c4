# topmark:header:start
#
#   project      : Headmatter
#   file         : __init__.py
#   file_relpath : src/headmatter/core/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Core, UI-agnostic primitives shared across Headmatter.

Included modules:

- ``diagnostics``
  Diagnostic types and helpers (levels, messages, aggregation) used to collect
  and report info, warnings, and errors from config loading and file checks.

- ``formats``
  The output format vocabulary shared by CLI commands.

This package must stay free of Click and console dependencies.
"""

from __future__ import annotations
