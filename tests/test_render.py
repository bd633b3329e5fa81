# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for console rendering of scan results and scores."""

from __future__ import annotations

from pathlib import Path

from react_doctor.core.models import EstimatedScoreResult, ScanResult, ScoreResult
from react_doctor.core.severity import Severity
from react_doctor.reporting import group_by_rule, render_scan, render_score, render_score_only
from react_doctor.reporting.render import score_style

ESTIMATE = EstimatedScoreResult(current_score=70, current_label="Needs work", estimated_score=88, estimated_label="Great")


def test_group_by_rule_orders_errors_first_then_by_count(make_diagnostic) -> None:
    diagnostics = [
        make_diagnostic("react-perf", "jsx-no-new-object-as-prop", message="New object"),
        make_diagnostic("react-perf", "jsx-no-new-object-as-prop", message="New object"),
        make_diagnostic("react-perf", "jsx-no-new-object-as-prop", message="New object"),
        make_diagnostic("react", "jsx-key", Severity.ERROR),
        make_diagnostic("jsx-a11y", "alt-text", message="Missing alt"),
        make_diagnostic("react", "no-danger", message="Danger"),
        make_diagnostic("react", "no-danger", Severity.ERROR, message="Danger"),
    ]

    groups = group_by_rule(diagnostics)

    assert [(group.rule_key, group.count) for group in groups] == [
        ("react/no-danger", 2),
        ("react/jsx-key", 1),
        ("react-perf/jsx-no-new-object-as-prop", 3),
        ("jsx-a11y/alt-text", 1),
    ]
    assert groups[0].severity is Severity.ERROR


def test_render_scan_lists_rules_and_summary(make_diagnostic, logger) -> None:
    diagnostics = (
        make_diagnostic("react", "jsx-key", Severity.ERROR, file_path="src/A.tsx", line=4),
        make_diagnostic("react", "jsx-key", Severity.ERROR, file_path="src/B.tsx", line=9),
    )
    result = ScanResult(directory=Path("."), diagnostics=diagnostics, file_count=12, elapsed_seconds=1.25)

    render_scan(result, verbose=False, logger=logger)

    assert "✗ Missing key (2)" in logger.output
    assert "src/A.tsx:4" not in logger.output
    assert "Found 2 errors in 2 files (scanned 12, 1.2s)" in logger.output


def test_render_scan_verbose_lists_locations(make_diagnostic, logger) -> None:
    diagnostics = (
        make_diagnostic("react", "jsx-key", file_path="src/A.tsx", line=4),
        make_diagnostic("knip", "files", file_path="src/Old.tsx", line=0, message="Unused file"),
    )
    result = ScanResult(directory=Path("."), diagnostics=diagnostics, file_count=1)

    render_scan(result, verbose=True, logger=logger)

    assert "src/A.tsx:4" in logger.output
    assert "    src/Old.tsx\n" in logger.output
    assert "Found 2 warnings in 2 files" in logger.output


def test_render_score_prefers_authoritative_score(logger) -> None:
    render_score(ScoreResult(score=72, label="Needs work"), ESTIMATE, logger=logger)

    assert "Score: 72 Needs work" in logger.output
    assert "~88 Great" in logger.output
    assert "estimated locally" not in logger.output


def test_render_score_marks_local_estimate(logger) -> None:
    render_score(None, ESTIMATE, logger=logger)

    assert "Score: 70 Needs work (estimated locally)" in logger.output


def test_render_score_without_improvement_omits_projection(logger) -> None:
    perfect = EstimatedScoreResult(current_score=100, current_label="Great", estimated_score=100, estimated_label="Great")

    render_score(None, perfect, logger=logger)

    assert "→" not in logger.output


def test_score_only_output(quiet_logger) -> None:
    render_score_only(ScoreResult(score=64, label="Needs work"), logger=quiet_logger)
    render_score_only(None, logger=quiet_logger)

    assert quiet_logger.output == "64\n"


def test_score_style_bands() -> None:
    assert [score_style(value) for value in (100, 75, 74, 50, 49)] == ["green", "green", "yellow", "yellow", "red"]
