# topmark:header:start
#
#   project      : Headmatter
#   file         : collection.py
#   file_relpath : src/headmatter/collection.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Ordered, mutable collection of headers.

`HeaderCollection` keeps headers in insertion order and offers keyed access
(first match wins), mutation, serialization with per-key raw-name overrides,
and a reversibility check over all members.

Transform overrides:
    A collection may carry its own raw→key / key→raw overrides. Assigning one
    pushes it into every current member's override slot immediately; headers
    created or appended later inherit the overrides set at that moment.

Equality:
    Two collections are equal when every header of one has an equal header
    (same raw name and value) in the other, in both directions. Order does not
    matter.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from headmatter.config.logging import get_logger
from headmatter.constants import (
    HEADER_LINE_BREAK_PATTERN,
    HEADER_NAME_VALUE_SEPARATOR_CHARACTER,
)
from headmatter.errors import MalformedHeaderLineError
from headmatter.header import Header
from headmatter.transforms import resolve_to_raw

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator, Mapping

    from headmatter.transforms import KeyToRaw, RawToKey

logger = get_logger(__name__)


class HeaderCollection:
    """An ordered set of `Header` objects, looked up by key.

    Lookups return the *first* header with a matching key. The underlying list
    may hold several headers with the same key (after `add` or `append`).

    Args:
        headers (Iterable[Header] | None): Initial headers, in order.
        key_transform (RawToKey | None): Collection-wide raw→key override.
        raw_transform (KeyToRaw | None): Collection-wide key→raw override.
    """

    def __init__(
        self,
        headers: Iterable[Header] | None = None,
        *,
        key_transform: RawToKey | None = None,
        raw_transform: KeyToRaw | None = None,
    ) -> None:
        self._headers: list[Header] = list(headers or ())
        self._key_transform: RawToKey | None = None
        self._raw_transform: KeyToRaw | None = None
        if key_transform is not None:
            self.key_transform = key_transform
        if raw_transform is not None:
            self.raw_transform = raw_transform

    @classmethod
    def parse(cls, text: str, key_transform: RawToKey | None = None) -> HeaderCollection:
        """Parse a block of header lines.

        Each non-empty line is parsed with `Header.parse`. Lines without a
        separator are skipped with a warning, so this never raises: empty or
        header-less input gives an empty collection.

        The ``key_transform`` is used while parsing only; it is not kept as an
        override on the collection or its headers.

        Args:
            text (str): Header block text; ``\\n`` and ``\\r\\n`` line endings.
            key_transform (RawToKey | None): raw→key function for this parse.

        Returns:
            HeaderCollection: The parsed headers, in order.
        """
        headers: list[Header] = []
        for lineno, line in enumerate(HEADER_LINE_BREAK_PATTERN.split(text), start=1):
            if not line.strip():
                continue
            try:
                headers.append(Header.parse(line, key_transform))
            except MalformedHeaderLineError as exc:
                logger.warning("Skipping header line %d: %s", lineno, exc)
        logger.debug("Parsed %d header(s)", len(headers))
        return cls(headers)

    # ------------------ Transform overrides ------------------

    @property
    def key_transform(self) -> RawToKey | None:
        """Collection-wide raw→key override (``None`` when unset)."""
        return self._key_transform

    @key_transform.setter
    def key_transform(self, func: RawToKey | None) -> None:
        self._key_transform = func
        for header in self._headers:
            header.key_transform = func

    @property
    def raw_transform(self) -> KeyToRaw | None:
        """Collection-wide key→raw override (``None`` when unset)."""
        return self._raw_transform

    @raw_transform.setter
    def raw_transform(self, func: KeyToRaw | None) -> None:
        self._raw_transform = func
        for header in self._headers:
            header.raw_transform = func

    @property
    def effective_raw_transform(self) -> KeyToRaw:
        """The key→raw function in effect: own override, else the process default."""
        return resolve_to_raw(self._raw_transform)

    def _adopt(self, header: Header) -> Header:
        """Push the collection's current overrides (when set) into ``header``."""
        if self._key_transform is not None:
            header.key_transform = self._key_transform
        if self._raw_transform is not None:
            header.raw_transform = self._raw_transform
        return header

    # ------------------ Lookup & mutation ------------------

    def get(self, key: Any) -> Header | None:
        """Return the first header whose key equals ``key``, or None."""
        for header in self._headers:
            if header.key == key:
                return header
        return None

    def set(self, key: Any, value: str) -> Header:
        """Set the value of the header for ``key``, creating it when missing.

        An existing header is updated in place. Otherwise a new header is
        appended; its raw name is computed with the collection's key→raw
        transform and it inherits the collection's overrides.

        Returns:
            Header: The updated or created header.
        """
        header: Header | None = self.get(key)
        if header is not None:
            header.value = value
            return header
        return self.add(key, value)

    def add(self, key: Any, value: str, raw: str | None = None) -> Header:
        """Append a new header, even if ``key`` already exists.

        Args:
            key (Any): Key of the new header.
            value (str): Its value.
            raw (str | None): Raw name to use verbatim; computed from ``key``
                with the collection's key→raw transform when omitted.

        Returns:
            Header: The created header.
        """
        if raw is None:
            raw = self.effective_raw_transform(key)
        header = Header(
            key,
            raw,
            value,
            key_transform=self._key_transform,
            raw_transform=self._raw_transform,
        )
        self._headers.append(header)
        logger.trace("Added header %r", header)
        return header

    def append(self, header: Header) -> None:
        """Append an existing header as-is; it inherits the collection's overrides."""
        self._headers.append(self._adopt(header))

    def copy(self) -> HeaderCollection:
        """Return a new collection of copied headers with the same overrides.

        Each `Header` belongs to one collection, so the members are copied
        rather than shared.
        """
        duplicate = HeaderCollection(header.copy() for header in self._headers)
        duplicate._key_transform = self._key_transform
        duplicate._raw_transform = self._raw_transform
        return duplicate

    def remove(self, key: Any) -> Header | None:
        """Remove and return the first header for ``key``, or None if absent."""
        for index, header in enumerate(self._headers):
            if header.key == key:
                del self._headers[index]
                logger.trace("Removed header %r", header)
                return header
        return None

    def __getitem__(self, key: Any) -> Header:
        header: Header | None = self.get(key)
        if header is None:
            raise KeyError(key)
        return header

    def __setitem__(self, key: Any, value: str) -> None:
        self.set(key, value)

    def __contains__(self, key: object) -> bool:
        return self.get(key) is not None

    def __iter__(self) -> Iterator[Header]:
        return iter(self._headers)

    def __len__(self) -> int:
        return len(self._headers)

    def keys(self) -> list[Any]:
        """Return the keys of all headers, in order (duplicates included)."""
        return [header.key for header in self._headers]

    def to_dict(self) -> dict[Any, str]:
        """Return a ``{key: value}`` mapping; the first header wins for duplicate keys."""
        result: dict[Any, str] = {}
        for header in self._headers:
            result.setdefault(header.key, header.value)
        return result

    # ------------------ Serialization ------------------

    def to_text(
        self,
        overrides: Mapping[Any, str] | None = None,
        transform: KeyToRaw | None = None,
    ) -> str:
        """Render all headers, one per line, in order.

        For each header, a raw name from ``overrides`` (looked up by key) wins;
        otherwise ``transform`` is applied to the key when given; otherwise the
        stored raw name is used. No header is modified.

        Args:
            overrides (Mapping[Any, str] | None): Per-key raw-name overrides.
            transform (KeyToRaw | None): One-off key→raw fallback.

        Returns:
            str: Newline-joined header lines.
        """
        overrides = overrides or {}
        lines: list[str] = []
        for header in self._headers:
            if header.key in overrides:
                lines.append(header.to_text(overrides[header.key]))
            else:
                lines.append(header.to_text(transform=transform))
        return "\n".join(lines)

    def to_text_dynamic(self, transform: KeyToRaw | None = None) -> str:
        """Render all headers with raw names recomputed from their keys.

        With ``transform`` every header uses it as a one-off key→raw function;
        it is never stored. Without it each header resolves its own key→raw
        transform (own override, collection override, process default).

        Setting a collection override pushes it into every member, so this
        normally matches `effective_raw_transform`. A member given its own
        override afterwards (or appended with one while the collection has
        none) renders with that override instead.
        """
        return "\n".join(header.to_text_dynamic(transform=transform) for header in self._headers)

    def is_reversible(self) -> bool:
        """Return True if every header is reversible under its current transforms."""
        return all(header.is_reversible() for header in self._headers)

    def irreversible(self) -> list[Header]:
        """Return the headers that are not reversible, in order."""
        return [header for header in self._headers if not header.is_reversible()]

    def __str__(self) -> str:
        return self.to_text()

    def __repr__(self) -> str:
        items = ", ".join(
            f"{h.key!r}{HEADER_NAME_VALUE_SEPARATOR_CHARACTER} {h.value!r}" for h in self._headers
        )
        return f"HeaderCollection({{{items}}})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, HeaderCollection):
            return NotImplemented
        return all(any(mine == theirs for theirs in other) for mine in self) and all(
            any(theirs == mine for mine in self) for theirs in other
        )

    __hash__ = None  # type: ignore[assignment]
