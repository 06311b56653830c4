# topmark:header:start
#
#   project      : Headmatter
#   file         : model.py
#   file_relpath : src/headmatter/config/model.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Configuration model and merge policy.

This module defines:
    - `Config`: an immutable, runtime snapshot used by CLI commands.
    - `MutableConfig`: a mutable builder used during discovery/merge; it
      can be frozen into `Config` and thawed back for edits.

Configuration keys (``headmatter.toml`` top level, or ``[tool.headmatter]``
in ``pyproject.toml``)::

    root = true                 # stop upward discovery at this directory

    [transforms]
    key = "snake"               # raw→key preset (see `TransformRegistry`)
    raw = "dashed-title"        # key→raw preset

    [render]
    dynamic = false             # recompute raw names from keys when rendering

    [raw_names]
    content_md5 = "Content-MD5" # per-key raw-name overrides for rendering

    [files]
    include_patterns = ["*.txt"]
    exclude_patterns = []

Immutability:
    - `Config` stores tuples and is ``frozen=True``. Use `Config.thaw` → edit →
      `MutableConfig.freeze` for safe updates.

Tri-state values:
    - Scalar settings are ``None`` when a layer does not set them, so merging
      (`MutableConfig.merge_with`) only lets explicitly set values override.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import TYPE_CHECKING, Any

from headmatter.config.io import (
    get_bool_value_or_none,
    get_string_table,
    get_string_value_or_none,
    get_table_value,
    load_defaults_dict,
    load_toml_dict,
    read_toml_dict,
)
from headmatter.config.logging import get_logger
from headmatter.constants import HEADMATTER_TOML_NAME, PYPROJECT_TOML_NAME
from headmatter.core.diagnostics import Diagnostic, DiagnosticLog
from headmatter.errors import ConfigFileError, UnknownTransformError
from headmatter.transforms import (
    DEFAULT_KEY_PRESET,
    DEFAULT_RAW_PRESET,
    NameTransforms,
    TransformRegistry,
    set_default_transforms,
)

if TYPE_CHECKING:
    from collections.abc import Iterable

    from headmatter.config.io import TomlTable
    from headmatter.config.logging import HeadmatterLogger

# ArgsLike: generic mapping accepted by config loaders (CLI namespaces and plain dicts).
ArgsLike = Mapping[str, Any]

logger: HeadmatterLogger = get_logger(__name__)

# Marker appended to ``config_files`` when CLI overrides were applied.
CLI_OVERRIDE_STR = "<CLI overrides>"


def _list_of_str(table: TomlTable, key: str) -> list[str]:
    value: Any = table.get(key)
    if isinstance(value, list):
        return [str(v) for v in value]  # pyright: ignore[reportUnknownVariableType]
    return []


# ------------------ Immutable runtime config ------------------


@dataclass(frozen=True, slots=True)
class Config:
    """Immutable runtime configuration for Headmatter.

    Produced by `MutableConfig.freeze` after merging defaults, user and project
    files, extra config files and CLI overrides.

    Attributes:
        timestamp (str): ISO-formatted timestamp when the draft was created.
        verbosity_level (int | None): None = inherit, 0 = terse, 1+ = verbose output.
        key_transform (str): Name of the raw→key preset.
        raw_transform (str): Name of the key→raw preset.
        dynamic (bool): Whether rendering recomputes raw names from keys.
        raw_names (Mapping[str, str]): Per-key raw-name overrides used when rendering.
        include_patterns (tuple[str, ...]): Glob patterns to include (``check``).
        exclude_patterns (tuple[str, ...]): Glob patterns to exclude (``check``).
        config_files (tuple[Path | str, ...]): Config sources, in merge order.
        diagnostics (tuple[Diagnostic, ...]): Warnings or errors encountered while
            loading, merging or validating config.
    """

    timestamp: str
    verbosity_level: int | None
    key_transform: str
    raw_transform: str
    dynamic: bool
    raw_names: Mapping[str, str]
    include_patterns: tuple[str, ...]
    exclude_patterns: tuple[str, ...]
    config_files: tuple[Path | str, ...]
    diagnostics: tuple[Diagnostic, ...]

    def transforms(self) -> NameTransforms:
        """Return the transform pair selected by ``key_transform`` / ``raw_transform``.

        Raises:
            UnknownTransformError: If a preset name is not registered.
        """
        return TransformRegistry.build(self.key_transform, self.raw_transform)

    def install_defaults(self) -> NameTransforms:
        """Install this config's transforms as the process-wide default pair.

        Returns:
            NameTransforms: The previously installed pair.
        """
        return set_default_transforms(self.transforms())

    def to_toml_dict(self, *, include_files: bool = False) -> TomlTable:
        """Convert this Config into a TOML-serializable dict.

        Args:
            include_files (bool): Whether to include the list of config sources.

        Returns:
            TomlTable: The TOML-serializable dict.
        """
        toml_dict: TomlTable = {
            "transforms": {
                "key": self.key_transform,
                "raw": self.raw_transform,
            },
            "render": {"dynamic": self.dynamic},
            "raw_names": dict(self.raw_names),
            "files": {
                "include_patterns": list(self.include_patterns),
                "exclude_patterns": list(self.exclude_patterns),
            },
        }
        if include_files:
            toml_dict["files"]["config_files"] = [str(p) for p in self.config_files]
        return toml_dict

    def thaw(self) -> MutableConfig:
        """Return a mutable copy of this frozen config."""
        return MutableConfig(
            timestamp=self.timestamp,
            verbosity_level=self.verbosity_level,
            key_transform=self.key_transform,
            raw_transform=self.raw_transform,
            dynamic=self.dynamic,
            raw_names=dict(self.raw_names),
            include_patterns=list(self.include_patterns),
            exclude_patterns=list(self.exclude_patterns),
            config_files=list(self.config_files),
            diagnostics=DiagnosticLog(items=list(self.diagnostics)),
        )


# -------------------------- Mutable builder --------------------------


@dataclass
class MutableConfig:
    """Mutable configuration used during discovery and merging.

    Attributes:
        timestamp (str): ISO-formatted timestamp when the draft was created.
        verbosity_level (int | None): Program-output verbosity.
        key_transform (str | None): raw→key preset name; None = not set by this layer.
        raw_transform (str | None): key→raw preset name; None = not set by this layer.
        dynamic (bool | None): Dynamic rendering; None = not set by this layer.
        raw_names (dict[str, str]): Per-key raw-name overrides.
        include_patterns (list[str]): Glob patterns to include.
        exclude_patterns (list[str]): Glob patterns to exclude.
        config_files (list[Path | str]): Config sources, in merge order.
        diagnostics (DiagnosticLog): Diagnostics collected while loading.
    """

    timestamp: str = field(default_factory=lambda: datetime.now().isoformat())
    verbosity_level: int | None = None
    key_transform: str | None = None
    raw_transform: str | None = None
    dynamic: bool | None = None
    raw_names: dict[str, str] = field(default_factory=lambda: {})
    include_patterns: list[str] = field(default_factory=lambda: [])
    exclude_patterns: list[str] = field(default_factory=lambda: [])
    config_files: list[Path | str] = field(default_factory=lambda: [])
    diagnostics: DiagnosticLog = field(default_factory=DiagnosticLog)

    # ---------------------------- Build/freeze ----------------------------

    def validate(self) -> None:
        """Check preset names; unknown ones are reported and reset to the default."""
        if self.key_transform is not None:
            try:
                TransformRegistry.get_key(self.key_transform)
            except UnknownTransformError as exc:
                self.diagnostics.add_error(str(exc))
                logger.error("%s", exc)
                self.key_transform = None
        if self.raw_transform is not None:
            try:
                TransformRegistry.get_raw(self.raw_transform)
            except UnknownTransformError as exc:
                self.diagnostics.add_error(str(exc))
                logger.error("%s", exc)
                self.raw_transform = None

    def freeze(self) -> Config:
        """Validate this builder and freeze it into an immutable `Config`.

        Unset tri-state values take their built-in defaults here.
        """
        self.validate()
        return Config(
            timestamp=self.timestamp,
            verbosity_level=self.verbosity_level,
            key_transform=self.key_transform or DEFAULT_KEY_PRESET,
            raw_transform=self.raw_transform or DEFAULT_RAW_PRESET,
            dynamic=bool(self.dynamic),
            raw_names=dict(self.raw_names),
            include_patterns=tuple(self.include_patterns),
            exclude_patterns=tuple(self.exclude_patterns),
            config_files=tuple(self.config_files),
            diagnostics=tuple(self.diagnostics),
        )

    # --------------------------- Loaders/parsers --------------------------

    @classmethod
    def from_defaults(cls) -> MutableConfig:
        """Load the default configuration from the bundled headmatter-default.toml file."""
        return cls.from_toml_dict(load_defaults_dict(), config_file=None)

    @classmethod
    def from_toml_dict(cls, data: TomlTable, config_file: Path | None = None) -> MutableConfig:
        """Create a draft config from a parsed TOML dict.

        Args:
            data (TomlTable): The parsed TOML table (top level of ``headmatter.toml``
                or the ``[tool.headmatter]`` table).
            config_file (Path | None): Source file, recorded in ``config_files``.

        Returns:
            MutableConfig: The resulting draft.
        """
        transforms_tbl: TomlTable = get_table_value(data, "transforms")
        logger.trace("TOML [transforms]: %s", transforms_tbl)
        render_tbl: TomlTable = get_table_value(data, "render")
        logger.trace("TOML [render]: %s", render_tbl)
        files_tbl: TomlTable = get_table_value(data, "files")
        logger.trace("TOML [files]: %s", files_tbl)

        draft: MutableConfig = cls()
        if config_file is not None:
            draft.config_files = [config_file]

        draft.key_transform = get_string_value_or_none(transforms_tbl, "key")
        draft.raw_transform = get_string_value_or_none(transforms_tbl, "raw")
        draft.dynamic = get_bool_value_or_none(render_tbl, "dynamic")

        raw_names, dropped = get_string_table(data, "raw_names")
        for name in dropped:
            msg = f"Ignoring unsupported [raw_names] value for '{name}'"
            logger.warning(msg)
            draft.diagnostics.add_warning(msg)
        draft.raw_names = raw_names

        draft.include_patterns = _list_of_str(files_tbl, "include_patterns")
        draft.exclude_patterns = _list_of_str(files_tbl, "exclude_patterns")

        return draft

    @classmethod
    def from_toml_file(cls, path: Path) -> MutableConfig | None:
        """Load configuration from a single TOML file.

        Supports both ``headmatter.toml`` and ``pyproject.toml`` (using its
        ``[tool.headmatter]`` table).

        Args:
            path (Path): Path to the TOML file.

        Returns:
            MutableConfig | None: The draft; None for a ``pyproject.toml`` without
            a ``[tool.headmatter]`` table. A file that cannot be loaded yields an
            empty draft carrying an error diagnostic.
        """
        logger.debug("Creating MutableConfig from TOML config: %s", path)
        try:
            toml_data: TomlTable = read_toml_dict(path)
        except ConfigFileError as exc:
            logger.error("%s", exc)
            draft = cls(config_files=[path])
            draft.diagnostics.add_error(str(exc))
            return draft

        if path.name == PYPROJECT_TOML_NAME:
            tool_tbl: TomlTable = get_table_value(toml_data, "tool")
            tool_section: TomlTable = get_table_value(tool_tbl, "headmatter")
            if not tool_section:
                logger.info("No [tool.headmatter] section in %s", path)
                return None
            toml_data = tool_section

        draft: MutableConfig = cls.from_toml_dict(toml_data, config_file=path)
        logger.debug("Generated MutableConfig: %s", draft)
        return draft

    @classmethod
    def discover_local_config_files(cls, start: Path) -> list[Path]:
        """Return config files discovered by walking upward from ``start``.

        Layered discovery semantics:
          * Walk from the anchor directory up to the filesystem root and collect
            config files in **root-most → nearest** order.
          * In a given directory, consider both ``pyproject.toml`` and
            ``headmatter.toml``; ``pyproject.toml`` comes first so that
            ``headmatter.toml`` wins the later merge.
          * A config setting ``root = true`` stops the walk after its directory.

        Args:
            start (Path): Where discovery starts (a file's parent is used).

        Returns:
            list[Path]: Discovered config file paths ordered for merging.
        """
        per_dir: list[list[Path]] = []
        cur: Path = start.resolve()
        if cur.is_file():
            cur = cur.parent

        while True:
            root_stop_here = False
            dir_entries: list[Path] = []

            for name in (PYPROJECT_TOML_NAME, HEADMATTER_TOML_NAME):
                p: Path = cur / name
                if not p.is_file():
                    continue
                data: TomlTable = load_toml_dict(p)
                if name == PYPROJECT_TOML_NAME:
                    data = get_table_value(get_table_value(data, "tool"), "headmatter")
                    if not data:
                        continue
                dir_entries.append(p)
                logger.debug("Discovered config file: %s", p)
                if get_bool_value_or_none(data, "root"):
                    root_stop_here = True

            if dir_entries:
                per_dir.append(dir_entries)

            parent: Path = cur.parent
            if parent == cur:
                break
            if root_stop_here:
                logger.debug("Stopping upward config discovery at %s due to root=true", cur)
                break
            cur = parent

        ordered: list[Path] = []
        for dir_list in reversed(per_dir):
            ordered.extend(dir_list)
        return ordered

    @classmethod
    def discover_user_config_file(cls) -> Path | None:
        """Return the user-scoped config path if it exists.

        Looks under ``$XDG_CONFIG_HOME/headmatter/headmatter.toml`` (default
        ``~/.config``).
        """
        xdg: str | None = os.environ.get("XDG_CONFIG_HOME")
        base: Path = Path(xdg) if xdg else Path.home() / ".config"
        xdg_path: Path = base / "headmatter" / HEADMATTER_TOML_NAME
        return xdg_path if xdg_path.is_file() else None

    @classmethod
    def load_merged(
        cls,
        *,
        anchor: Path | None = None,
        extra_config_files: Iterable[Path] | None = None,
        no_config: bool = False,
    ) -> MutableConfig:
        """Discover and merge configuration layers into a draft `MutableConfig`.

        Merge order (lowest → highest precedence):
            1) Built-in defaults
            2) User config (XDG)
            3) Project configs discovered upward, root-most first
            4) Extra config files passed explicitly via ``--config``

        Args:
            anchor (Path | None): Where upward discovery starts (default: CWD).
            extra_config_files (Iterable[Path] | None): Files merged after discovery,
                in the given order.
            no_config (bool): If True, skip user and project discovery.

        Returns:
            MutableConfig: The merged draft, ready for CLI overrides and `freeze`.
        """
        draft: MutableConfig = cls.from_defaults()

        if not no_config:
            user_cfg_path: Path | None = cls.discover_user_config_file()
            if user_cfg_path is not None:
                logger.info("Loading user config: %s", user_cfg_path)
                user_cfg: MutableConfig | None = cls.from_toml_file(user_cfg_path)
                if user_cfg is not None:
                    draft = draft.merge_with(user_cfg)

            start: Path = anchor if anchor is not None else Path.cwd()
            logger.debug("Config discovery anchor: %s", start)
            for cfg_path in cls.discover_local_config_files(start):
                found: MutableConfig | None = cls.from_toml_file(cfg_path)
                if found is not None:
                    draft = draft.merge_with(found)

        for extra in extra_config_files or ():
            logger.info("Loading explicit config: %s", extra)
            mc: MutableConfig | None = cls.from_toml_file(Path(extra))
            if mc is None:
                msg = f"Ignoring config without [tool.headmatter]: {extra}"
                logger.warning(msg)
                draft.diagnostics.add_warning(msg)
                continue
            draft = draft.merge_with(mc)

        return draft

    # ------------------------------- Merging -------------------------------

    def merge_with(self, other: MutableConfig) -> MutableConfig:
        """Return a new draft where values set in ``other`` override this draft.

        Scalars override when ``other`` sets them; ``raw_names`` merge key-wise;
        pattern lists are replaced when ``other`` has any; config sources and
        diagnostics are concatenated.

        Args:
            other (MutableConfig): The higher-precedence layer.

        Returns:
            MutableConfig: The merged draft.
        """
        diagnostics = DiagnosticLog(items=list(self.diagnostics))
        diagnostics.extend(other.diagnostics)
        return MutableConfig(
            timestamp=self.timestamp,
            verbosity_level=other.verbosity_level
            if other.verbosity_level is not None
            else self.verbosity_level,
            key_transform=other.key_transform
            if other.key_transform is not None
            else self.key_transform,
            raw_transform=other.raw_transform
            if other.raw_transform is not None
            else self.raw_transform,
            dynamic=other.dynamic if other.dynamic is not None else self.dynamic,
            raw_names={**self.raw_names, **other.raw_names},
            include_patterns=list(other.include_patterns or self.include_patterns),
            exclude_patterns=list(other.exclude_patterns or self.exclude_patterns),
            config_files=self.config_files + other.config_files,
            diagnostics=diagnostics,
        )

    def apply_cli_args(self, args: ArgsLike) -> MutableConfig:
        """Apply overrides from an arguments mapping (CLI or API) in place.

        Keys that are absent or None leave the current value untouched. Pattern
        lists given on the command line are appended to configured ones.

        Args:
            args (ArgsLike): Parsed arguments mapping.

        Returns:
            MutableConfig: This draft, updated.
        """
        logger.debug("Applying CLI arguments to MutableConfig: %s", args)
        self.config_files.append(CLI_OVERRIDE_STR)

        if args.get("verbosity_level") is not None:
            self.verbosity_level = int(args["verbosity_level"])
        if args.get("key_transform") is not None:
            self.key_transform = str(args["key_transform"])
        if args.get("raw_transform") is not None:
            self.raw_transform = str(args["raw_transform"])
        if args.get("dynamic") is not None:
            self.dynamic = bool(args["dynamic"])
        if args.get("raw_names"):
            self.raw_names.update({str(k): str(v) for k, v in args["raw_names"].items()})
        self.include_patterns.extend(args.get("include_patterns") or [])
        self.exclude_patterns.extend(args.get("exclude_patterns") or [])

        logger.debug("Patched MutableConfig: %s", self)
        return self
