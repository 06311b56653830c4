# topmark:header:start
#
#   project      : Headmatter
#   file         : __main__.py
#   file_relpath : src/headmatter/__main__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Module entry point for running Headmatter via ``python -m headmatter``.

Equivalent to running the ``headmatter`` console script; it delegates to
`headmatter.cli.main.cli`.

Examples:
    Show the headers of a file::

        python -m headmatter headers notes.txt
"""

from __future__ import annotations

from headmatter.cli.main import cli

if __name__ == "__main__":
    cli()
