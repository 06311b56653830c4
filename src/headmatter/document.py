# topmark:header:start
#
#   project      : Headmatter
#   file         : document.py
#   file_relpath : src/headmatter/document.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Body text bound to its leading header block.

A `Document` is parsed from text of the shape::

    Header-One: value
    Header-Two: another value

    body text...

The header block is the leading run of ``name: value`` lines, ended by one
blank line (``\\n\\n`` or ``\\r\\n\\r\\n``) or by the end of the input. Input whose
leading block does not look like headers is kept entirely as body.

The document owns two independent parts: ``content`` (the body, with the
header block and the blank line removed) and ``headers`` (a
`headmatter.collection.HeaderCollection`). Text operations act on ``content``
only; header operations act on ``headers`` only.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, TypedDict

from headmatter.collection import HeaderCollection
from headmatter.config.logging import get_logger
from headmatter.constants import (
    HEADER_LINE_BREAK_PATTERN,
    HEADERS_SEPARATOR,
    HEADERS_SEPARATOR_PATTERN,
)
from headmatter.header import is_header_line

if TYPE_CHECKING:
    import re
    from collections.abc import Callable, Mapping

    from headmatter.transforms import RawToKey

logger = get_logger(__name__)


class HeaderPatch(TypedDict, total=False):
    """Changes applied to one header by `Document.update_headers`."""

    raw: str
    key: Any


def _all_header_lines(text: str) -> bool:
    """Return True if every line of ``text`` looks like a header line."""
    return all(is_header_line(line) for line in HEADER_LINE_BREAK_PATTERN.split(text))


def _split_header_block(text: str) -> tuple[str, str] | None:
    """Return ``(header_text, content)`` when ``text`` starts with a header block.

    The decision is made in three steps:

    1. Empty or whitespace-only text has no header block.
    2. If the text contains a blank-line separator and every line before the
       first one is a header line, the header block ends there and the body is
       everything after it. A blank head does not count as a header block.
    3. Otherwise, if every line of the stripped text is a header line, the
       whole input is a header block with an empty body.

    A header line is any line containing the ``:`` separator; header names are
    not validated.
    """
    stripped: str = text.strip()
    if not stripped:
        return None

    match: re.Match[str] | None = HEADERS_SEPARATOR_PATTERN.search(text)
    if match is not None:
        head: str = text[: match.start()]
        if head.strip() and _all_header_lines(head):
            return head, text[match.end() :]

    if _all_header_lines(stripped):
        logger.trace("Input is a bare header block")
        return stripped, ""

    return None


def has_header_block(text: str) -> bool:
    """Return True if ``text`` starts with a header block.

    Args:
        text (str): Input text.

    Returns:
        bool: Whether a header block was detected (see `_split_header_block`).
    """
    return _split_header_block(text) is not None


class Document:
    """Body content plus its header collection.

    Args:
        content (str): Body text.
        headers (HeaderCollection | None): Headers; an empty collection when omitted.

    Attributes:
        content (str): Body text, without the header block and separator.
        headers (HeaderCollection): The parsed or assigned headers.
    """

    content: str
    headers: HeaderCollection

    def __init__(self, content: str = "", headers: HeaderCollection | None = None) -> None:
        self.content = content
        self.headers = headers if headers is not None else HeaderCollection()

    has_header_block = staticmethod(has_header_block)

    @classmethod
    def parse(cls, text: str, key_transform: RawToKey | None = None) -> Document:
        """Split ``text`` into header block and body.

        Without a header block the whole text is the body and the collection is
        empty. With one, the body is everything after the first blank-line
        separator (or empty for header-only input), and the header block is
        parsed with `HeaderCollection.parse` using ``key_transform``.

        Args:
            text (str): Input text.
            key_transform (RawToKey | None): raw→key function used while
                parsing; not retained.

        Returns:
            Document: The parsed document.
        """
        split: tuple[str, str] | None = _split_header_block(text)
        if split is None:
            logger.debug("No header block detected (%d chars of body)", len(text))
            return cls(text, HeaderCollection())

        header_text, content = split
        headers: HeaderCollection = HeaderCollection.parse(header_text, key_transform)
        logger.debug("Header block with %d header(s), %d chars of body", len(headers), len(content))
        return cls(content, headers)

    # ------------------ Text ------------------

    def to_text(self) -> str:
        """Return the body content; headers are rendered separately."""
        return self.content

    def compose(
        self,
        *,
        dynamic: bool = False,
        overrides: Mapping[Any, str] | None = None,
    ) -> str:
        """Recombine header block, blank line and body into one text.

        Args:
            dynamic (bool): Recompute raw names from keys (`HeaderCollection.to_text_dynamic`).
            overrides (Mapping[Any, str] | None): Per-key raw-name overrides;
                ignored when ``dynamic`` is set.

        Returns:
            str: The full text. Header-only documents have no trailing
            separator; documents without headers are just the body.
        """
        if not self.headers:
            return self.content
        block: str = (
            self.headers.to_text_dynamic() if dynamic else self.headers.to_text(overrides)
        )
        if not self.content:
            return block
        return block + HEADERS_SEPARATOR + self.content

    # Pass-through operations on the body. They never touch the headers.

    def upper(self) -> None:
        """Uppercase the body in place."""
        self.content = self.content.upper()

    def lower(self) -> None:
        """Lowercase the body in place."""
        self.content = self.content.lower()

    def swapcase(self) -> None:
        """Swap the case of the body in place."""
        self.content = self.content.swapcase()

    def reverse(self) -> None:
        """Reverse the body in place."""
        self.content = self.content[::-1]

    def strip(self, chars: str | None = None) -> None:
        """Strip the body in place."""
        self.content = self.content.strip(chars)

    def replace(self, old: str, new: str, count: int = -1) -> None:
        """Replace occurrences of ``old`` with ``new`` in the body, in place."""
        self.content = self.content.replace(old, new, count)

    def append(self, text: str) -> None:
        """Append ``text`` to the body."""
        self.content += text

    def prepend(self, text: str) -> None:
        """Prepend ``text`` to the body."""
        self.content = text + self.content

    def apply(self, func: Callable[[str], str]) -> None:
        """Replace the body with ``func(body)``."""
        self.content = func(self.content)

    def __str__(self) -> str:
        return self.content

    def __len__(self) -> int:
        return len(self.content)

    def __contains__(self, text: object) -> bool:
        return isinstance(text, str) and text in self.content

    def __add__(self, other: object) -> Document:
        if isinstance(other, Document):
            other = other.content
        if not isinstance(other, str):
            return NotImplemented
        return Document(self.content + other, self.headers.copy())

    # ------------------ Headers ------------------

    def update_headers(self, patch: Mapping[Any, HeaderPatch]) -> HeaderCollection:
        """Rename headers in place and return the ones that were changed.

        For every header whose key is in ``patch``, the ``raw`` and ``key``
        entries (when present and not None) are assigned to the existing
        header object. Keys in ``patch`` without a matching header are ignored.

        Example:
            ```python
            doc.update_headers({"a_header_value": {"raw": "X", "key": "y"}})
            assert doc.headers.get("y").raw == "X"
            ```

        Args:
            patch (Mapping[Any, HeaderPatch]): ``{key: {"raw": ..., "key": ...}}``.

        Returns:
            HeaderCollection: A new collection holding exactly the changed
            headers (the same objects), in their original order.
        """
        changing = [header for header in self.headers if header.key in patch]
        for header in changing:
            changes: HeaderPatch = patch[header.key]
            new_raw: str | None = changes.get("raw")
            new_key: Any = changes.get("key")
            if new_raw is not None:
                header.raw = new_raw
            if new_key is not None:
                header.key = new_key
            logger.trace("Updated header %r", header)
        return HeaderCollection(changing)

    def __repr__(self) -> str:
        return f"Document(content={self.content!r}, headers={self.headers!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Document):
            return NotImplemented
        return self.headers == other.headers and self.content == other.content

    __hash__ = None  # type: ignore[assignment]
