# topmark:header:start
#
#   project      : Headmatter
#   file         : file_resolver.py
#   file_relpath : src/headmatter/file_resolver.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Resolve input files for Headmatter based on paths and filters.

This module expands positional arguments, applies include/exclude patterns
and returns a deterministic, sorted list of files. Globs are expanded relative
to the current working directory; include/exclude patterns use gitwildmatch
semantics (`pathspec`) matched against paths relative to ``root``.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from pathspec import PathSpec
from pathspec.patterns.gitwildmatch import GitWildMatchPattern

from headmatter.config.logging import get_logger

if TYPE_CHECKING:
    from collections.abc import Iterable

    from headmatter.config.logging import HeadmatterLogger

logger: HeadmatterLogger = get_logger(__name__)

_GLOB_CHARS = "*?["


def _rel_for_match(path: Path, base: Path) -> str:
    """Return a POSIX-style relative path (or absolute as fallback) for PathSpec matching."""
    try:
        return path.resolve().relative_to(base.resolve()).as_posix()
    except ValueError:
        return path.as_posix()


def _is_glob(raw: str) -> bool:
    return any(ch in raw for ch in _GLOB_CHARS)


def expand_path(raw: str) -> list[Path]:
    """Expand one positional argument into files and directories.

    Handles globs (relative to CWD, recursive with ``**``), directories
    (recursively) and plain files. Missing paths expand to nothing.

    Args:
        raw (str): Path or glob as given on the command line.

    Returns:
        list[Path]: Expanded paths.
    """
    p = Path(raw)
    if _is_glob(raw):
        if p.is_absolute():
            anchor = Path(p.anchor)
            return list(anchor.glob(str(p.relative_to(anchor))))
        return list(Path(".").glob(raw))
    if p.is_dir():
        return list(p.rglob("*"))
    if p.is_file():
        return [p]
    return []


def resolve_file_list(
    paths: Iterable[str],
    include_patterns: Iterable[str] = (),
    exclude_patterns: Iterable[str] = (),
    *,
    root: Path | None = None,
) -> list[Path]:
    """Return the list of input files to process.

    The resolver implements these semantics:
      1. **Candidate set**: expand ``paths`` (files, directories recursively, globs).
      2. **File-only**: only files (not directories) are kept.
      3. **Include intersection**: with include patterns, keep only files matching
         *any* of them.
      4. **Exclude subtraction**: remove files matching any exclude pattern.
      5. Return a **sorted**, de-duplicated list.

    Args:
        paths (Iterable[str]): Positional paths and globs.
        include_patterns (Iterable[str]): gitwildmatch include patterns.
        exclude_patterns (Iterable[str]): gitwildmatch exclude patterns.
        root (Path | None): Directory patterns are matched against (default: CWD).

    Returns:
        list[Path]: Sorted list of selected files.
    """
    includes: list[str] = list(include_patterns)
    excludes: list[str] = list(exclude_patterns)
    workspace_root: Path = root if root is not None else Path.cwd()

    candidate_set: set[Path] = set()
    for raw in paths:
        expanded: list[Path] = expand_path(raw)
        if not expanded:
            if _is_glob(raw):
                logger.warning("No matches for glob pattern: %s", raw)
            elif not Path(raw).exists():
                logger.warning("No such file or directory: %s", raw)
        candidate_set.update(expanded)

    candidate_set = {p for p in candidate_set if p.is_file()}

    if includes:
        spec_include: PathSpec = PathSpec.from_lines(GitWildMatchPattern, includes)
        candidate_set = {
            p for p in candidate_set if spec_include.match_file(_rel_for_match(p, workspace_root))
        }

    if excludes:
        spec_exclude: PathSpec = PathSpec.from_lines(GitWildMatchPattern, excludes)
        candidate_set = {
            p
            for p in candidate_set
            if not spec_exclude.match_file(_rel_for_match(p, workspace_root))
        }

    logger.trace("Files to process: %d -- %s", len(candidate_set), sorted(candidate_set))
    return sorted(candidate_set)
