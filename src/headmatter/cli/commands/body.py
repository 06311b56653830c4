# topmark:header:start
#
#   project      : Headmatter
#   file         : body.py
#   file_relpath : src/headmatter/cli/commands/body.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Headmatter `body` command.

Prints the body of one input: everything after the header block and the blank
line that ends it. Input without a header block is printed unchanged.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from headmatter.cli.cmd_common import read_text_input
from headmatter.cli.options import CONTEXT_SETTINGS
from headmatter.document import Document

if TYPE_CHECKING:
    from headmatter.cli.console import ClickConsole


@click.command(
    name="body",
    help="Print the body of INPUT (a file, or '-' for STDIN) without its header block.",
    context_settings=CONTEXT_SETTINGS,
)
@click.argument("source", metavar="INPUT", default="-")
def body_command(*, source: str) -> None:
    """Print the body of one input, byte-for-byte as parsed."""
    ctx: click.Context = click.get_current_context()
    ctx.ensure_object(dict)
    console: ClickConsole = ctx.obj["console"]

    document: Document = Document.parse(read_text_input(source))
    console.print(document.to_text(), nl=False)
