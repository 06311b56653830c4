# topmark:header:start
#
#   project      : Headmatter
#   file         : __init__.py
#   file_relpath : src/headmatter/cli/commands/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Click subcommands of the ``headmatter`` CLI group."""

from __future__ import annotations
