# topmark:header:start
#
#   project      : Headmatter
#   file         : logging.py
#   file_relpath : src/headmatter/config/logging.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Internal logging for Headmatter.

Adds a ``TRACE`` level below ``DEBUG`` (used for per-line parse decisions),
a logger class exposing ``.trace()``, and a yachalk formatter writing to
stderr. Program output goes through `headmatter.cli.console` instead.

The level comes from the CLI or from ``HEADMATTER_LOG_LEVEL``; logging stays
silent (``CRITICAL``) otherwise.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import TYPE_CHECKING, Final, cast

from yachalk import chalk

from headmatter.constants import LOG_LEVEL_ENV_VAR

if TYPE_CHECKING:
    from collections.abc import Callable

TRACE_LEVEL: Final[int] = logging.DEBUG - 5

logging.addLevelName(TRACE_LEVEL, "TRACE")


class HeadmatterLogger(logging.Logger):
    """Logger with a `trace` method for the level below DEBUG."""

    def trace(self, msg: object, *args: object) -> None:
        """Log ``msg % args`` at TRACE level."""
        if self.isEnabledFor(TRACE_LEVEL):
            self._log(TRACE_LEVEL, msg, args, stacklevel=2)


logging.setLoggerClass(HeadmatterLogger)

LOG_FORMAT: Final[str] = "[%(levelname)s] %(message)s"
DEBUG_LOG_FORMAT: Final[str] = "[%(levelname)s] [%(name)s:%(lineno)d] %(message)s"

# Checked from most to least severe; the first threshold reached picks the style.
_LEVEL_STYLES: Final[tuple[tuple[int, Callable[[str], str]], ...]] = (
    (logging.ERROR, chalk.red_bright),
    (logging.WARNING, chalk.yellow),
    (logging.INFO, chalk.green),
    (logging.DEBUG, chalk.gray),
    (TRACE_LEVEL, chalk.blue),
)


class ChalkFormatter(logging.Formatter):
    """Formatter colouring each record by severity."""

    def format(self, record: logging.LogRecord) -> str:
        message: str = super().format(record)
        for threshold, style in _LEVEL_STYLES:
            if record.levelno >= threshold:
                return style(message)
        return message


def resolve_env_log_level() -> int | None:
    """Return the level named by ``HEADMATTER_LOG_LEVEL``, or None.

    Accepts level names (``TRACE``, ``debug``, ...) and integers. Unknown
    values are ignored.
    """
    raw: str = os.environ.get(LOG_LEVEL_ENV_VAR, "").strip().upper()
    if not raw:
        return None
    if raw.isdigit():
        return int(raw)
    level: object = logging.getLevelName(raw)
    return level if isinstance(level, int) else None


def setup_logging(level: int | None = None) -> None:
    """Route all records at ``level`` or above to stderr (CRITICAL when None).

    Replaces any handler already installed on the root logger, so repeated
    calls (one per CLI invocation) do not duplicate output.
    """
    effective: int = logging.CRITICAL if level is None else level
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        ChalkFormatter(LOG_FORMAT if effective >= logging.INFO else DEBUG_LOG_FORMAT)
    )

    root_logger: logging.Logger = logging.getLogger()
    for existing in root_logger.handlers[:]:
        root_logger.removeHandler(existing)
    root_logger.addHandler(handler)
    root_logger.setLevel(effective)


def get_logger(name: str) -> HeadmatterLogger:
    """Return the `HeadmatterLogger` for ``name`` (usually ``__name__``)."""
    return cast("HeadmatterLogger", logging.getLogger(name))
