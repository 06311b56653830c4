# topmark:header:start
#
#   project      : Headmatter
#   file         : strategies_headmatter.py
#   file_relpath : tests/strategies_headmatter.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

# pyright: strict

"""Hypothesis strategies for header names, header lines and documents.

Generated header lines are *canonical*: a raw name without whitespace or
colons, the ``": "`` separator and a single-line value that does not start
with whitespace. Such lines survive a parse/render round trip byte for byte.
"""

from __future__ import annotations

import string

from hypothesis import strategies as st

LINE_ENDINGS: tuple[str, ...] = ("\n", "\r\n")


def s_key_segment() -> st.SearchStrategy[str]:
    """A non-empty run of lowercase ASCII letters."""
    return st.text(alphabet=string.ascii_lowercase, min_size=1, max_size=8)


def s_snake_key() -> st.SearchStrategy[str]:
    """Keys made of lowercase segments joined by ``_`` (e.g. ``a_header_name``)."""
    return st.lists(s_key_segment(), min_size=1, max_size=4).map("_".join)


def s_raw_name() -> st.SearchStrategy[str]:
    """Raw header names: a letter followed by letters, digits, ``-`` or ``_``."""
    return st.from_regex(r"[A-Za-z][A-Za-z0-9_-]{0,15}", fullmatch=True)


def s_value() -> st.SearchStrategy[str]:
    """Single-line header values; may contain colons and inner spaces."""
    return st.text(
        # No surrogates, control characters or line/paragraph separators.
        alphabet=st.characters(exclude_categories=("Cs", "Cc", "Zl", "Zp")),
        max_size=30,
    ).filter(lambda v: not v[:1].isspace())


@st.composite
def s_header_line(draw: st.DrawFn) -> str:
    """A canonical ``"<raw>: <value>"`` line."""
    raw: str = draw(s_raw_name())
    value: str = draw(s_value())
    return f"{raw}: {value}"


def s_header_block() -> st.SearchStrategy[list[str]]:
    """One to six canonical header lines."""
    return st.lists(s_header_line(), min_size=1, max_size=6)


def s_body() -> st.SearchStrategy[str]:
    """A non-empty body; it may contain blank lines, colons and CRLF."""
    return st.text(
        alphabet=st.characters(exclude_categories=("Cs",)),
        min_size=1,
        max_size=80,
    )
