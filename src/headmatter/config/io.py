# topmark:header:start
#
#   project      : Headmatter
#   file         : io.py
#   file_relpath : src/headmatter/config/io.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Lightweight TOML I/O helpers for Headmatter configuration.

This module centralizes **pure** helpers for reading and writing TOML used by
the configuration layer. Keeping them separate from `headmatter.config.model`
keeps the model classes focused on merge policy.

Typical flow:
    1. Load defaults from the packaged resource (``load_defaults_dict``).
    2. Load project/user TOML files (``read_toml_dict`` or the lenient
       ``load_toml_dict``).
    3. Inspect values using typed helpers (``get_table_value``,
       ``get_string_value_or_none``, ...).
    4. Serialize back to TOML when needed (``to_toml``).
    5. Optionally wrap a TOML document under a dotted section using
       ``nest_toml_under_section`` (e.g., for a ``pyproject.toml`` block).

Notes:
    - Reading and dumping uses `toml`. `tomlkit` is only used by
      ``nest_toml_under_section`` so comments and whitespace of the bundled
      template survive when it is nested under ``[tool.headmatter]``.
"""

from __future__ import annotations

from importlib.resources import files
from typing import TYPE_CHECKING, Any, TypeGuard, cast

import toml
import tomlkit
from tomlkit.exceptions import ParseError as TomlkitParseError
from tomlkit.items import Item, Key, Table

from headmatter.config.logging import get_logger
from headmatter.constants import DEFAULT_TOML_CONFIG_NAME, DEFAULT_TOML_CONFIG_PACKAGE
from headmatter.errors import ConfigFileError

if TYPE_CHECKING:
    from importlib.resources.abc import Traversable
    from pathlib import Path

    from tomlkit.container import Container

    from headmatter.config.logging import HeadmatterLogger

logger: HeadmatterLogger = get_logger(__name__)

TomlTable = dict[str, Any]

# Items in tomlkit's document body: the key may be None for comments/whitespace.
TomlkitBodyItem = tuple[Key | None, Item]


__all__: list[str] = [
    "TomlTable",
    "is_toml_table",
    "get_table_value",
    "get_string_value_or_none",
    "get_bool_value_or_none",
    "get_string_table",
    "load_defaults_dict",
    "read_default_toml_text",
    "read_toml_dict",
    "load_toml_dict",
    "to_toml",
    "nest_toml_under_section",
]


def is_toml_table(val: Any) -> TypeGuard[TomlTable]:
    """Type guard for a TOML table-like mapping.

    Args:
        val (Any): Value to test.

    Returns:
        TypeGuard[TomlTable]: ``True`` if ``val`` is a ``dict[str, Any]``.
    """
    return isinstance(val, dict)


def get_table_value(table: TomlTable, key: str) -> TomlTable:
    """Extract a sub-table from a TOML table.

    Returns a new empty dict if the sub-table is missing or not a mapping.

    Args:
        table (TomlTable): Parent table mapping.
        key (str): Sub-table key.

    Returns:
        TomlTable: The sub-table if present and a mapping, otherwise an empty dict.
    """
    value: Any | None = table.get(key)
    return value if is_toml_table(value) else {}


def get_string_value_or_none(table: TomlTable, key: str) -> str | None:
    """Extract an optional string value from a TOML table.

    ``int``, ``float`` and ``bool`` values are coerced with ``str(...)``.

    Args:
        table (TomlTable): Table to query.
        key (str): Key to extract.

    Returns:
        str | None: The extracted or coerced string value, or ``None`` when
        absent or not coercible.
    """
    value: Any | None = table.get(key)
    if value is None:
        return None
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float, bool)):
        return str(value)
    return None


def get_bool_value_or_none(table: TomlTable, key: str) -> bool | None:
    """Extract an optional boolean value from a TOML table.

    Integers are coerced via ``bool(value)``; other types yield ``None``.

    Args:
        table (TomlTable): Table to query.
        key (str): Key to extract.

    Returns:
        bool | None: The extracted or coerced boolean value, or ``None``
        when absent or not coercible.
    """
    value: Any | None = table.get(key)
    if value is None:
        return None
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        return bool(value)
    return None


def get_string_table(table: TomlTable, key: str) -> tuple[dict[str, str], list[str]]:
    """Extract a ``{name: string}`` sub-table, coercing scalar values to strings.

    Args:
        table (TomlTable): Parent table mapping.
        key (str): Sub-table key (e.g. ``"raw_names"``).

    Returns:
        tuple[dict[str, str], list[str]]: The coerced entries, and the names of
        entries that were dropped because their value is not a scalar.
    """
    out: dict[str, str] = {}
    dropped: list[str] = []
    for name, value in get_table_value(table, key).items():
        if isinstance(value, (str, int, float, bool)):
            out[name] = str(value)
        else:
            dropped.append(name)
    return out, dropped


def read_default_toml_text() -> str:
    """Return the bundled default configuration template, comments included.

    Raises:
        RuntimeError: If the bundled resource cannot be read.
    """
    resource: Traversable = files(DEFAULT_TOML_CONFIG_PACKAGE).joinpath(DEFAULT_TOML_CONFIG_NAME)
    logger.debug("Loading defaults from package resource: %s", resource)
    try:
        return resource.read_text(encoding="utf8")
    except OSError as exc:
        raise RuntimeError(
            f"Cannot read bundled default config {DEFAULT_TOML_CONFIG_PACKAGE!r}/"
            f"{DEFAULT_TOML_CONFIG_NAME!r}: {exc}"
        ) from exc


def load_defaults_dict() -> TomlTable:
    """Return the packaged default configuration as a Python dict.

    Returns:
        TomlTable: The parsed default configuration.

    Raises:
        RuntimeError: If the bundled default config resource cannot be read or
            parsed as TOML.
    """
    text: str = read_default_toml_text()
    try:
        data: TomlTable = toml.loads(text)
    except toml.TomlDecodeError as exc:
        raise RuntimeError(
            f"Bundled default config {DEFAULT_TOML_CONFIG_PACKAGE!r}/"
            f"{DEFAULT_TOML_CONFIG_NAME!r} is invalid TOML: {exc}"
        ) from exc
    return data


def read_toml_dict(path: Path) -> TomlTable:
    """Load and parse a TOML file, raising on failure.

    Args:
        path (Path): Path to a TOML document (``headmatter.toml`` or ``pyproject.toml``).

    Returns:
        TomlTable: The parsed TOML content.

    Raises:
        ConfigFileError: If the file cannot be read or is not valid TOML.
    """
    try:
        return toml.load(path)
    except OSError as exc:
        raise ConfigFileError(str(path), exc.strerror or str(exc)) from exc
    except toml.TomlDecodeError as exc:
        raise ConfigFileError(str(path), f"invalid TOML ({exc})") from exc


def load_toml_dict(path: Path) -> TomlTable:
    """Load and parse a TOML file, returning an empty dict on failure.

    Used where loading is best-effort (e.g. the ``root = true`` check during
    discovery).

    Args:
        path (Path): Path to a TOML document.

    Returns:
        TomlTable: The parsed TOML content, or ``{}``.
    """
    try:
        return read_toml_dict(path)
    except ConfigFileError as exc:
        logger.error("%s", exc)
        return {}


def to_toml(toml_dict: TomlTable) -> str:
    """Serialize a TOML mapping to a string.

    ``None`` values are dropped by the `toml` dumper.

    Args:
        toml_dict (TomlTable): TOML mapping to render.

    Returns:
        str: The rendered TOML document as a string.
    """
    return toml.dumps(toml_dict)


def nest_toml_under_section(toml_doc: str, section_keys: str) -> str:
    r"""Return a new TOML document nested under a dotted section path.

    This helper uses tomlkit to *losslessly* wrap an existing TOML document
    under a nested section, for example:

        nest_toml_under_section("a = 1\\n", "tool.headmatter")

    yields a document equivalent to:

        [tool.headmatter]
        a = 1

    Leading comments (preamble) stay at the top of the new document and
    trailing comments (postamble) after the nested table.

    Args:
        toml_doc (str): Original TOML document to nest.
        section_keys (str): Dotted section path such as ``"tool.headmatter"``.

    Returns:
        str: The nested TOML document.

    Raises:
        ValueError: If ``section_keys`` is empty or only contains dots.
        RuntimeError: If the TOML document cannot be parsed or if an existing
            key along the path is not a table.
    """
    try:
        doc: tomlkit.TOMLDocument = tomlkit.parse(toml_doc)
    except TomlkitParseError as exc:
        raise RuntimeError(f"Error parsing TOML document: {exc}") from exc

    keys: list[str] = [k for k in section_keys.split(".") if k]
    if not keys:
        raise ValueError("section_keys must contain at least one non-empty component")

    # Indices of the first and last keyed items; -1 means the body has none.
    keyed: list[int] = [i for i, (key, _) in enumerate(doc.body) if key is not None]
    start_index: int = keyed[0] if keyed else 0
    end_index: int = keyed[-1] if keyed else -1

    preamble_items: list[TomlkitBodyItem] = doc.body[0:start_index]
    postamble_items: list[TomlkitBodyItem] = doc.body[end_index + 1 :]

    new_doc: tomlkit.TOMLDocument = tomlkit.document()
    new_doc.body.extend(preamble_items)

    current_level: tomlkit.TOMLDocument | Table = new_doc
    for key in keys:
        if key not in current_level:
            current_level.add(key, tomlkit.table())
        next_level: Item | Container = current_level[key]
        if not isinstance(next_level, Table):
            raise RuntimeError(
                f"Cannot nest configuration under [{section_keys}]: "
                f"intermediate key [{key}] is not a table."
            )
        current_level = next_level

    for item_key, item_value in cast("dict[str, Item]", dict(doc.items())).items():
        current_level.add(item_key, item_value)

    new_doc.body.extend(postamble_items)
    return new_doc.as_string()
