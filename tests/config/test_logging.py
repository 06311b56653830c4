# topmark:header:start
#
#   project      : Headmatter
#   file         : test_logging.py
#   file_relpath : tests/config/test_logging.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for internal logging setup (headmatter.config.logging)."""

from __future__ import annotations

import logging

import pytest

from headmatter.config.logging import (
    TRACE_LEVEL,
    ChalkFormatter,
    HeadmatterLogger,
    get_logger,
    resolve_env_log_level,
    setup_logging,
)
from headmatter.constants import LOG_LEVEL_ENV_VAR
from headmatter.header import Header
from tests.conftest import parametrize


@parametrize(
    "raw, expected",
    [
        ("trace", TRACE_LEVEL),
        (" DEBUG ", logging.DEBUG),
        ("10", 10),
        ("warning", logging.WARNING),
        ("bogus", None),
        ("", None),
    ],
)
def test_resolve_env_log_level(
    monkeypatch: pytest.MonkeyPatch, raw: str, expected: int | None
) -> None:
    monkeypatch.setenv(LOG_LEVEL_ENV_VAR, raw)
    assert resolve_env_log_level() == expected


def test_resolve_env_log_level_unset(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv(LOG_LEVEL_ENV_VAR, raising=False)
    assert resolve_env_log_level() is None


def test_trace_records_per_line_parse(caplog: pytest.LogCaptureFixture) -> None:
    assert isinstance(get_logger("headmatter.header"), HeadmatterLogger)
    with caplog.at_level(TRACE_LEVEL, logger="headmatter.header"):
        Header.parse("A: 1")
    assert any(record.levelname == "TRACE" for record in caplog.records)


def test_chalk_formatter_keeps_message() -> None:
    formatter = ChalkFormatter("[%(levelname)s] %(message)s")
    record = logging.LogRecord("x", logging.WARNING, __file__, 1, "hello %s", ("you",), None)
    assert "[WARNING] hello you" in formatter.format(record)


def test_setup_logging_replaces_root_handler() -> None:
    root: logging.Logger = logging.getLogger()
    try:
        setup_logging(None)
        setup_logging(None)
        assert root.level == logging.CRITICAL
        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0].formatter, ChalkFormatter)
    finally:
        setup_logging(TRACE_LEVEL)
