# topmark:header:start
#
#   project      : Headmatter
#   file         : test_diagnostics.py
#   file_relpath : tests/core/test_diagnostics.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for diagnostic collection and aggregation."""

from __future__ import annotations

from headmatter.core.diagnostics import (
    Diagnostic,
    DiagnosticLevel,
    DiagnosticLog,
    DiagnosticStats,
    compute_diagnostic_stats,
    diagnostics_counts_to_dict,
)


def test_log_collects_in_order() -> None:
    log = DiagnosticLog()
    log.add_info("i")
    log.add_warning("w")
    log.add_error("e")
    assert [(d.level, d.message) for d in log] == [
        (DiagnosticLevel.INFO, "i"),
        (DiagnosticLevel.WARNING, "w"),
        (DiagnosticLevel.ERROR, "e"),
    ]
    assert len(log) == 3
    assert log.has_error()


def test_extend_and_stats() -> None:
    log = DiagnosticLog()
    log.extend(
        [Diagnostic(DiagnosticLevel.WARNING, "a"), Diagnostic(DiagnosticLevel.WARNING, "b")]
    )
    stats: DiagnosticStats = log.stats()
    assert stats == DiagnosticStats(n_info=0, n_warning=2, n_error=0)
    assert stats.total == 2
    assert not log.has_error()


def test_counts_dict_for_empty_input() -> None:
    assert compute_diagnostic_stats([]).total == 0
    assert diagnostics_counts_to_dict([]) == {"info": 0, "warning": 0, "error": 0}


def test_level_colors_are_callable() -> None:
    for level in DiagnosticLevel:
        assert "msg" in level.color("msg")
