# topmark:header:start
#
#   project      : Headmatter
#   file         : exit_codes.py
#   file_relpath : src/headmatter/cli/exit_codes.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Exit codes for the Headmatter CLI.

Headmatter aligns with the BSD `sysexits` convention where practical, so other
tooling can interpret failures consistently. The one deliberate divergence is
`NOT_REVERSIBLE=2`, returned by ``headmatter check`` when a header name does
not survive a raw→key→raw round trip. Click's own usage errors also exit with
2; those print a ``Usage:`` line, which tells the two apart.
"""

from enum import IntEnum


class ExitCode(IntEnum):
    """Standardized exit codes for the Headmatter CLI.

    Attributes:
        SUCCESS: Successful execution with no errors.
        FAILURE: Generic failure (non-specific error).
        NOT_REVERSIBLE: ``check`` found header names that are not reversible
            under the configured transforms.
        USAGE_ERROR: Command-line invocation error. Mirrors BSD ``EX_USAGE (64)``.
        ENCODING_ERROR: Input is not valid UTF-8. Mirrors BSD ``EX_DATAERR (65)``.
        FILE_NOT_FOUND: Input path does not exist. Mirrors BSD ``EX_NOINPUT (66)``.
        IO_ERROR: I/O error reading a file. Mirrors BSD ``EX_IOERR (74)``.
        CONFIG_ERROR: Missing/invalid/malformed config. Mirrors BSD ``EX_CONFIG (78)``.
        UNEXPECTED_ERROR: Unhandled/unknown error (last resort).
    """

    SUCCESS = 0
    FAILURE = 1
    NOT_REVERSIBLE = 2  # deliberate divergence from sysexits; see class docstring

    USAGE_ERROR = 64  # EX_USAGE
    ENCODING_ERROR = 65  # EX_DATAERR
    FILE_NOT_FOUND = 66  # EX_NOINPUT
    IO_ERROR = 74  # EX_IOERR
    CONFIG_ERROR = 78  # EX_CONFIG

    UNEXPECTED_ERROR = 255
