# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for the single-project scan pipeline."""

from __future__ import annotations

from pathlib import Path

import pytest

from react_doctor.analysis.engine import AnalysisRequest
from react_doctor.config import ScanOptions
from react_doctor.core.errors import ToolNotFoundError
from react_doctor.core.models import RawFinding
from react_doctor.core.severity import Severity
from react_doctor.scan import count_source_files, scan


class FakeAnalyzer:
    def __init__(self, findings: list[RawFinding]) -> None:
        self.findings = findings
        self.requests: list[AnalysisRequest] = []

    def run(self, directory: Path, request: AnalysisRequest) -> list[RawFinding]:
        self.requests.append(request)
        return list(self.findings)


LINT = [
    RawFinding(file_path="src/App.tsx", code="react(jsx-key)", severity=Severity.ERROR, message="Missing key"),
    RawFinding(file_path="src/App.tsx", code="react(jsx-key)", severity=Severity.ERROR, message="Missing key"),
    RawFinding(file_path="src/hooks.ts", code="react-hooks(exhaustive-deps)", message="Missing dependency"),
]
DEAD_CODE = [
    RawFinding(file_path="src/hooks.ts", code="knip(exports)", message="Unused export: useThing"),
    RawFinding(file_path="src/Old.tsx", code="knip(files)", message="Unused file"),
]


@pytest.fixture
def project(tmp_path: Path) -> Path:
    (tmp_path / "src").mkdir()
    for name in ("App.tsx", "hooks.ts", "Old.tsx"):
        (tmp_path / "src" / name).write_text("export {};\n", encoding="utf-8")
    (tmp_path / "src" / "styles.css").write_text("", encoding="utf-8")
    (tmp_path / "package.json").write_text('{"name": "shop"}', encoding="utf-8")
    return tmp_path


def test_scan_combines_lint_and_dead_code(project: Path, logger) -> None:
    lint, dead = FakeAnalyzer(LINT), FakeAnalyzer(DEAD_CODE)

    result = scan(project, ScanOptions(), logger=logger, analyzer=lint, dead_code_analyzer=dead)

    assert [(diag.file_path, diag.rule) for diag in result.diagnostics] == [
        ("src/App.tsx", "jsx-key"),
        ("src/App.tsx", "jsx-key"),
        ("src/hooks.ts", "exports"),
        ("src/Old.tsx", "files"),
    ]
    assert result.error_count == 2
    assert result.file_count == 3
    assert lint.requests[0].project.name == "shop"
    assert "Missing key (2)" in logger.output


def test_scan_respects_disabled_passes(project: Path, logger) -> None:
    lint, dead = FakeAnalyzer(LINT), FakeAnalyzer(DEAD_CODE)

    result = scan(
        project,
        ScanOptions(lint=False, dead_code=False),
        logger=logger,
        analyzer=lint,
        dead_code_analyzer=dead,
    )

    assert result.diagnostics == ()
    assert lint.requests == [] and dead.requests == []
    assert "No issues found in 3 files" in logger.output


def test_scan_in_diff_mode_limits_paths(project: Path, logger) -> None:
    lint, dead = FakeAnalyzer(LINT), FakeAnalyzer(DEAD_CODE)
    options = ScanOptions(include_paths=("src/App.tsx", "src/hooks.ts"))

    result = scan(project, options, logger=logger, analyzer=lint, dead_code_analyzer=dead)

    assert lint.requests[0].targets == ["src/App.tsx", "src/hooks.ts"]
    assert "src/Old.tsx" not in {diag.file_path for diag in result.diagnostics}
    assert result.file_count == 2


def test_scan_in_score_mode_prints_nothing(project: Path, logger) -> None:
    result = scan(
        project,
        ScanOptions(score_only=True),
        logger=logger,
        analyzer=FakeAnalyzer(LINT),
        dead_code_analyzer=FakeAnalyzer([]),
    )

    assert len(result.diagnostics) == 2
    assert logger.output == ""


def test_scan_neutralizes_directives_during_lint(tmp_path: Path, logger) -> None:
    source = tmp_path / "App.tsx"
    source.write_bytes(b"// oxlint-disable\nexport {};\n")
    seen: list[bytes] = []

    class Peek(FakeAnalyzer):
        def run(self, directory: Path, request: AnalysisRequest) -> list[RawFinding]:
            seen.append(source.read_bytes())
            return super().run(directory, request)

    scan(tmp_path, ScanOptions(dead_code=False), logger=logger, analyzer=Peek([]))

    assert seen == [b"// oxlint_disable\nexport {};\n"]
    assert source.read_bytes() == b"// oxlint-disable\nexport {};\n"


def test_count_source_files_ignores_dependencies(project: Path) -> None:
    (project / "node_modules" / "react").mkdir(parents=True)
    (project / "node_modules" / "react" / "index.js").write_text("", encoding="utf-8")

    assert count_source_files(project) == 3
    assert count_source_files(project, ("a.tsx",)) == 1


def test_scan_reports_dependency_issues_from_package_json(project: Path, logger) -> None:
    dead = FakeAnalyzer(
        [RawFinding(file_path="package.json", code="knip(dependencies)", message="Unused dependency: lodash")],
    )

    result = scan(project, ScanOptions(lint=False), logger=logger, dead_code_analyzer=dead)

    assert [(diag.file_path, diag.rule) for diag in result.diagnostics] == [("package.json", "dependencies")]
    assert result.warning_count == 1
    assert "Unused dependency: lodash" in logger.output


class MissingTool(FakeAnalyzer):
    def run(self, directory: Path, request: AnalysisRequest) -> list[RawFinding]:
        self.requests.append(request)
        raise ToolNotFoundError("knip")


def test_scan_warns_through_logger_when_dead_code_tool_is_missing(project: Path, logger) -> None:
    result = scan(project, ScanOptions(lint=False), logger=logger, dead_code_analyzer=MissingTool([]))

    assert result.diagnostics == ()
    assert "knip not found for shop; skipping dead code detection" in logger.output


def test_scan_missing_dead_code_tool_is_silent_when_quiet(project: Path, quiet_logger) -> None:
    scan(project, ScanOptions(lint=False, score_only=True), logger=quiet_logger, dead_code_analyzer=MissingTool([]))

    assert quiet_logger.output == ""
