# topmark:header:start
#
#   project      : Headmatter
#   file         : transforms.py
#   file_relpath : src/headmatter/transforms.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Raw header name ↔ key transforms.

A *key* is the canonical, normalized identifier of a header (``a_header_name``);
the *raw* name is how the header appears in text (``A-Header-Name``). Two
functions map between them:

    * ``to_key(raw) -> key``   (raw→key)
    * ``to_raw(key) -> raw``   (key→raw)

The default pair is deliberately lossy: many raw names share one key, and
``to_raw(to_key(raw))`` does not always give ``raw`` back. Whether it does is
what `headmatter.header.Header.is_reversible` checks.

Resolution:
    For a given header the transform to use in each direction is the first of
    these that is set: a function passed to the call, the header's own override
    (which also carries overrides pushed down by its collection), the
    collection's override, and finally the process-wide default
    (`get_default_transforms`). `resolve_transform` implements that chain.

Process-wide defaults:
    The default pair is an immutable `NameTransforms` value swapped under a lock.
    Set it once at startup (the CLI does so from configuration); use the
    `default_transforms` context manager for scoped overrides in tests.

Presets:
    `TransformRegistry` names a small set of transforms so configuration files
    and the CLI can select them by string.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Hashable, Iterator, Mapping
from contextlib import contextmanager
from dataclasses import dataclass
from threading import RLock
from types import MappingProxyType
from typing import Any, Final, TypeAlias

from headmatter.config.logging import get_logger
from headmatter.errors import UnknownTransformError

logger = get_logger(__name__)

Key: TypeAlias = Hashable
RawToKey: TypeAlias = Callable[[str], Any]
KeyToRaw: TypeAlias = Callable[[Any], str]

# Runs of characters that are neither letters nor underscores separate key segments.
_KEY_SEGMENT_SPLIT: Final[re.Pattern[str]] = re.compile(r"[^a-z_]+", re.IGNORECASE)


def _drop_trailing_empty(parts: list[str]) -> list[str]:
    """Drop empty segments from the end of ``parts`` (leading ones are kept)."""
    while parts and not parts[-1]:
        parts.pop()
    return parts


def to_key(raw: str) -> str:
    """Convert a raw header name into a key (default raw→key transform).

    Splits on runs of non-letter, non-underscore characters, joins the segments
    with ``_`` and lowercases the result.

    Args:
        raw (str): The raw header name, e.g. ``"A Header!!  Name"``.

    Returns:
        str: The key, e.g. ``"a_header_name"``.
    """
    return "_".join(_drop_trailing_empty(_KEY_SEGMENT_SPLIT.split(raw))).lower()


def to_raw(key: Any) -> str:
    """Convert a key into a raw header name (default key→raw transform).

    Splits the key's string form on ``_``, capitalizes each segment and joins
    them with ``-``.

    Args:
        key (Any): The key, e.g. ``"a_header_name"``.

    Returns:
        str: The raw header name, e.g. ``"A-Header-Name"``.
    """
    return "-".join(s.capitalize() for s in _drop_trailing_empty(str(key).split("_")))


@dataclass(frozen=True)
class NameTransforms:
    """An immutable raw→key / key→raw transform pair.

    Attributes:
        to_key (RawToKey): raw→key function.
        to_raw (KeyToRaw): key→raw function.
    """

    to_key: RawToKey = to_key
    to_raw: KeyToRaw = to_raw

    def replace(
        self,
        *,
        to_key: RawToKey | None = None,
        to_raw: KeyToRaw | None = None,
    ) -> NameTransforms:
        """Return a copy with the given directions replaced."""
        return NameTransforms(
            to_key=to_key if to_key is not None else self.to_key,
            to_raw=to_raw if to_raw is not None else self.to_raw,
        )


DEFAULT_TRANSFORMS: Final[NameTransforms] = NameTransforms()

_defaults_lock = RLock()
_defaults: NameTransforms = DEFAULT_TRANSFORMS


def get_default_transforms() -> NameTransforms:
    """Return the process-wide default transform pair."""
    with _defaults_lock:
        return _defaults


def set_default_transforms(transforms: NameTransforms | None = None) -> NameTransforms:
    """Install a new process-wide default transform pair.

    Intended to be called once at startup. Headers and collections read the
    default on every call, so the change is visible immediately to every
    header without an override of its own.

    Args:
        transforms (NameTransforms | None): The new pair; ``None`` restores the
            built-in defaults.

    Returns:
        NameTransforms: The previously installed pair.
    """
    global _defaults
    with _defaults_lock:
        previous: NameTransforms = _defaults
        _defaults = transforms or DEFAULT_TRANSFORMS
    logger.debug("Default transforms: %s -> %s", previous, _defaults)
    return previous


@contextmanager
def default_transforms(transforms: NameTransforms) -> Iterator[NameTransforms]:
    """Temporarily install ``transforms`` as the process-wide default.

    Example:
        ```python
        with default_transforms(NameTransforms(to_raw=str.upper)):
            assert Header("x", "x", "1").raw_from_key() == "X"
        ```

    Yields:
        NameTransforms: The installed pair.
    """
    previous: NameTransforms = set_default_transforms(transforms)
    try:
        yield transforms
    finally:
        set_default_transforms(previous)


def resolve_transform(*candidates: Callable[..., Any] | None) -> Callable[..., Any] | None:
    """Return the first candidate that is not ``None``.

    Callers list the candidates from most to least specific, ending with the
    process default, e.g. ``resolve_transform(per_call, header.raw_transform,
    get_default_transforms().to_raw)``.
    """
    for candidate in candidates:
        if candidate is not None:
            return candidate
    return None


def resolve_to_key(*candidates: RawToKey | None) -> RawToKey:
    """Resolve a raw→key transform, falling back to the process default."""
    found = resolve_transform(*candidates)
    return found if found is not None else get_default_transforms().to_key


def resolve_to_raw(*candidates: KeyToRaw | None) -> KeyToRaw:
    """Resolve a key→raw transform, falling back to the process default."""
    found = resolve_transform(*candidates)
    return found if found is not None else get_default_transforms().to_raw


# ------------------ Named presets ------------------


def _identity_key(raw: str) -> str:
    return raw


def _identity_raw(key: Any) -> str:
    return str(key)


def _lower_key(raw: str) -> str:
    return raw.lower()


def _dashed_lower(key: Any) -> str:
    return "-".join(_drop_trailing_empty(str(key).split("_"))).lower()


def _dashed_upper(key: Any) -> str:
    return "-".join(_drop_trailing_empty(str(key).split("_"))).upper()


DEFAULT_KEY_PRESET: Final[str] = "snake"
DEFAULT_RAW_PRESET: Final[str] = "dashed-title"


@dataclass(frozen=True)
class TransformMeta:
    """Stable, serializable metadata about a registered transform preset."""

    kind: str
    name: str
    description: str
    example_in: str
    example_out: str


class TransformRegistry:
    """Named raw→key and key→raw transform presets.

    Notes:
        - Mutation hooks are intended for plugin authors and test scaffolding.
          They mutate process-global state; clean up with ``unregister`` in
          ``try/finally`` blocks.
    """

    _lock = RLock()

    _key_presets: dict[str, tuple[RawToKey, str]] = {
        "snake": (to_key, "Split on non-letters, join with '_', lowercase"),
        "lower": (_lower_key, "Lowercase the raw name, keep everything else"),
        "identity": (_identity_key, "Use the raw name unchanged"),
    }
    _raw_presets: dict[str, tuple[KeyToRaw, str]] = {
        "dashed-title": (to_raw, "Split on '_', capitalize segments, join with '-'"),
        "dashed-lower": (_dashed_lower, "Split on '_', join with '-', lowercase"),
        "dashed-upper": (_dashed_upper, "Split on '_', join with '-', uppercase"),
        "identity": (_identity_raw, "Use the key's string form unchanged"),
    }

    @classmethod
    def key_names(cls) -> tuple[str, ...]:
        """Return the registered raw→key preset names (sorted)."""
        with cls._lock:
            return tuple(sorted(cls._key_presets))

    @classmethod
    def raw_names(cls) -> tuple[str, ...]:
        """Return the registered key→raw preset names (sorted)."""
        with cls._lock:
            return tuple(sorted(cls._raw_presets))

    @classmethod
    def get_key(cls, name: str) -> RawToKey:
        """Return the raw→key preset registered as ``name``.

        Raises:
            UnknownTransformError: If no such preset exists.
        """
        with cls._lock:
            try:
                return cls._key_presets[name][0]
            except KeyError:
                raise UnknownTransformError("key", name, tuple(sorted(cls._key_presets))) from None

    @classmethod
    def get_raw(cls, name: str) -> KeyToRaw:
        """Return the key→raw preset registered as ``name``.

        Raises:
            UnknownTransformError: If no such preset exists.
        """
        with cls._lock:
            try:
                return cls._raw_presets[name][0]
            except KeyError:
                raise UnknownTransformError("raw", name, tuple(sorted(cls._raw_presets))) from None

    @classmethod
    def build(
        cls,
        key: str | None = None,
        raw: str | None = None,
    ) -> NameTransforms:
        """Build a transform pair from preset names.

        Args:
            key (str | None): raw→key preset name (defaults to ``"snake"``).
            raw (str | None): key→raw preset name (defaults to ``"dashed-title"``).

        Returns:
            NameTransforms: The resolved pair.
        """
        return NameTransforms(
            to_key=cls.get_key(key or DEFAULT_KEY_PRESET),
            to_raw=cls.get_raw(raw or DEFAULT_RAW_PRESET),
        )

    @classmethod
    def as_mapping(cls) -> Mapping[str, Mapping[str, Callable[..., Any]]]:
        """Return a read-only ``{"key": {...}, "raw": {...}}`` mapping of presets."""
        with cls._lock:
            return MappingProxyType(
                {
                    "key": MappingProxyType({n: f for n, (f, _) in cls._key_presets.items()}),
                    "raw": MappingProxyType({n: f for n, (f, _) in cls._raw_presets.items()}),
                }
            )

    @classmethod
    def iter_meta(cls) -> Iterator[TransformMeta]:
        """Iterate over metadata for every preset, raw→key presets first.

        Yields:
            TransformMeta: Name, description and a worked example.
        """
        with cls._lock:
            key_items = sorted(cls._key_presets.items())
            raw_items = sorted(cls._raw_presets.items())
        for name, (func, description) in key_items:
            example: str = str(func("A-Header-Name"))
            yield TransformMeta("key", name, description, "A-Header-Name", example)
        for name, (func, description) in raw_items:
            yield TransformMeta("raw", name, description, "a_header_name", func("a_header_name"))

    @classmethod
    def register_key(cls, name: str, func: RawToKey, description: str = "") -> None:
        """Register a raw→key preset.

        Raises:
            ValueError: If ``name`` is empty or already registered.
        """
        with cls._lock:
            if not name:
                raise ValueError("Transform preset name is required.")
            if name in cls._key_presets:
                raise ValueError(f"Duplicate key transform preset: {name}")
            cls._key_presets[name] = (func, description)

    @classmethod
    def register_raw(cls, name: str, func: KeyToRaw, description: str = "") -> None:
        """Register a key→raw preset.

        Raises:
            ValueError: If ``name`` is empty or already registered.
        """
        with cls._lock:
            if not name:
                raise ValueError("Transform preset name is required.")
            if name in cls._raw_presets:
                raise ValueError(f"Duplicate raw transform preset: {name}")
            cls._raw_presets[name] = (func, description)

    @classmethod
    def unregister(cls, kind: str, name: str) -> bool:
        """Remove a preset; returns ``True`` if it existed."""
        with cls._lock:
            table: dict[str, Any] = cls._key_presets if kind == "key" else cls._raw_presets
            return table.pop(name, None) is not None
