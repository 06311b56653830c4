# topmark:header:start
#
#   project      : Headmatter
#   file         : header.py
#   file_relpath : src/headmatter/header.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""A single ``name: value`` header.

A `Header` holds three mutable attributes:

    * ``key``: the canonical identifier used for lookups (``a_header_name``),
    * ``raw``: the header name as written in text (``A-Header-Name``),
    * ``value``: everything after the separator.

Changing ``key`` or ``raw`` never re-parses anything; the two are only tied
together through the transforms consulted by `Header.key_from_raw`,
`Header.raw_from_key`, `Header.to_text_dynamic` and `Header.is_reversible`.

Each header may carry its own raw→key / key→raw overrides. A collection that
owns the header pushes its own overrides into these slots; when a slot is
empty the process-wide default from `headmatter.transforms` is used.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from headmatter.config.logging import get_logger
from headmatter.constants import (
    HEADER_NAME_VALUE_SEPARATOR_CHARACTER,
    HEADER_NAME_VALUE_SEPARATOR_PATTERN,
)
from headmatter.errors import MalformedHeaderLineError
from headmatter.transforms import resolve_to_key, resolve_to_raw

if TYPE_CHECKING:
    import re

    from headmatter.transforms import KeyToRaw, RawToKey

logger = get_logger(__name__)


def is_header_line(line: str) -> bool:
    """Return True if ``line`` contains the name/value separator."""
    return HEADER_NAME_VALUE_SEPARATOR_PATTERN.search(line) is not None


class Header:
    """One header entry: key, raw name, value and optional transform overrides.

    Equality compares ``raw`` and ``value`` only; two headers with different
    keys but the same text are equal. Headers are mutable and not hashable.

    Attributes:
        key (Any): Canonical identifier used for keyed lookup.
        raw (str): Header name as it appears in text.
        value (str): Header value.
        key_transform (RawToKey | None): raw→key override for this header.
        raw_transform (KeyToRaw | None): key→raw override for this header.
    """

    __slots__ = ("key", "raw", "value", "key_transform", "raw_transform")

    key: Any
    raw: str
    value: str
    key_transform: RawToKey | None
    raw_transform: KeyToRaw | None

    def __init__(
        self,
        key: Any,
        raw: str,
        value: str,
        *,
        key_transform: RawToKey | None = None,
        raw_transform: KeyToRaw | None = None,
    ) -> None:
        self.key = key
        self.raw = raw
        self.value = value
        self.key_transform = key_transform
        self.raw_transform = raw_transform

    @classmethod
    def parse(cls, line: str, key_transform: RawToKey | None = None) -> Header:
        """Parse a single ``name: value`` line.

        The line is split at the first separator match: a ``:`` with optional
        whitespace on either side, which is consumed. Later colons remain part
        of the value, and the value is not trimmed any further.

        The ``key_transform`` is used to compute the key only; it is **not**
        stored on the returned header, so later lookups keep cascading to the
        collection and process defaults.

        Args:
            line (str): The header line, without line terminator.
            key_transform (RawToKey | None): raw→key function for this parse;
                the process default is used when omitted.

        Returns:
            Header: The parsed header.

        Raises:
            MalformedHeaderLineError: If ``line`` has no separator.
        """
        match: re.Match[str] | None = HEADER_NAME_VALUE_SEPARATOR_PATTERN.search(line)
        if match is None:
            raise MalformedHeaderLineError(line)

        raw: str = line[: match.start()]
        value: str = line[match.end() :]
        key: Any = resolve_to_key(key_transform)(raw)
        logger.trace("Parsed header line %r -> key=%r raw=%r value=%r", line, key, raw, value)
        return cls(key, raw, value)

    # ------------------ Transforms ------------------

    @property
    def effective_key_transform(self) -> RawToKey:
        """The raw→key function in effect: own override, else the process default."""
        return resolve_to_key(self.key_transform)

    @property
    def effective_raw_transform(self) -> KeyToRaw:
        """The key→raw function in effect: own override, else the process default."""
        return resolve_to_raw(self.raw_transform)

    def key_from_raw(self, raw: str | None = None) -> Any:
        """Compute a key from ``raw`` (default: the stored raw name). Does not mutate."""
        return self.effective_key_transform(self.raw if raw is None else raw)

    def raw_from_key(self, key: Any = None) -> str:
        """Compute a raw name from ``key`` (default: the stored key). Does not mutate."""
        return self.effective_raw_transform(self.key if key is None else key)

    def is_reversible(self) -> bool:
        """Return True if raw→key→raw reproduces the stored raw name exactly.

        This checks the consistency of the transforms currently in effect for
        this header, not whether ``key`` equals ``key_from_raw()``.
        """
        return self.raw_from_key(self.key_from_raw()) == self.raw

    # ------------------ Serialization ------------------

    def _render(self, raw_name: str) -> str:
        return f"{raw_name}{HEADER_NAME_VALUE_SEPARATOR_CHARACTER} {self.value}"

    def to_text(self, raw_name: str | None = None, transform: KeyToRaw | None = None) -> str:
        """Render the header as ``"<raw>: <value>"``.

        The raw name is, in order: ``raw_name`` verbatim, ``transform(key)``,
        or the stored ``raw``. Nothing stored on the header changes.

        Args:
            raw_name (str | None): Raw name to use verbatim.
            transform (KeyToRaw | None): One-off key→raw function.

        Returns:
            str: The rendered header line.
        """
        if raw_name is not None:
            return self._render(raw_name)
        if transform is not None:
            return self._render(transform(self.key))
        return self._render(self.raw)

    def to_text_dynamic(
        self, raw_name: str | None = None, transform: KeyToRaw | None = None
    ) -> str:
        """Render the header, recomputing the raw name from the key.

        Same as `to_text`, except that without ``raw_name`` or ``transform`` the
        raw name is `raw_from_key` instead of the stored ``raw``. Useful to
        normalize names after ``key`` was changed programmatically.
        """
        if raw_name is not None:
            return self._render(raw_name)
        if transform is not None:
            return self._render(transform(self.key))
        return self._render(self.raw_from_key())

    def copy(self) -> Header:
        """Return a detached copy with the same fields and override slots."""
        return Header(
            self.key,
            self.raw,
            self.value,
            key_transform=self.key_transform,
            raw_transform=self.raw_transform,
        )

    def __str__(self) -> str:
        return self.to_text()

    def __repr__(self) -> str:
        return f"Header(key={self.key!r}, raw={self.raw!r}, value={self.value!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Header):
            return NotImplemented
        return self.raw == other.raw and self.value == other.value

    __hash__ = None  # type: ignore[assignment]
