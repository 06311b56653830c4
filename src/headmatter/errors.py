# topmark:header:start
#
#   project      : Headmatter
#   file         : errors.py
#   file_relpath : src/headmatter/errors.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Exceptions raised by the Headmatter library.

Usage:
    Only a handful of operations can fail. Lookups that miss (``get``,
    ``remove``, unknown keys passed to ``update_headers``) return ``None`` or
    are ignored instead of raising.

    - `MalformedHeaderLineError` is raised by `headmatter.header.Header.parse`
      when a line has no name/value separator. Block-level parsers validate
      before calling it, so it never escapes `headmatter.document.Document.parse`.
    - `UnknownTransformError` is raised when a named transform preset is not
      registered.
    - `ConfigFileError` is raised by `headmatter.config.io.read_toml_dict` when
      a configuration file is missing, unreadable or not valid TOML.

CLI errors live in `headmatter.cli.errors`; they wrap these with exit codes.
"""

from __future__ import annotations


class HeadmatterError(Exception):
    """Base class for all Headmatter library errors."""


class MalformedHeaderLineError(HeadmatterError, ValueError):
    """A single header line does not contain the name/value separator.

    Attributes:
        line (str): The offending line, verbatim.
    """

    def __init__(self, line: str) -> None:
        self.line = line
        super().__init__(f"Malformed header line (no separator found): {line!r}")


class UnknownTransformError(HeadmatterError, KeyError):
    """A transform preset name is not registered.

    Attributes:
        kind (str): Either ``"key"`` (raw→key) or ``"raw"`` (key→raw).
        name (str): The unknown preset name.
    """

    def __init__(self, kind: str, name: str, known: tuple[str, ...] = ()) -> None:
        self.kind = kind
        self.name = name
        self.known = known
        super().__init__(kind, name)

    def __str__(self) -> str:
        """Return a readable message (``KeyError`` would quote the args tuple)."""
        msg = f"Unknown {self.kind} transform {self.name!r}"
        if self.known:
            msg += f" (known: {', '.join(self.known)})"
        return msg


class ConfigFileError(HeadmatterError):
    """A configuration file cannot be read or is not valid TOML.

    Attributes:
        path (str): The offending file.
    """

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        super().__init__(f"Cannot load config file {path}: {reason}")
