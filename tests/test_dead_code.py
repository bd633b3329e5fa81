# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for knip-based dead code detection."""

from __future__ import annotations

import json
import subprocess
from pathlib import Path

import pytest

from react_doctor.analysis import dead_code as dead_code_module
from react_doctor.analysis.dead_code import DEAD_CODE_FILE_PATTERN, KnipAnalyzer, parse_knip_report
from react_doctor.analysis.engine import AnalysisRequest
from react_doctor.analysis.engine_config import ProjectInfo
from react_doctor.core.errors import EngineError, ToolNotFoundError
from react_doctor.core.models import Category
from react_doctor.core.severity import Severity
from react_doctor.diagnostics import normalize

KNIP_REPORT = {
    "files": ["src/Unused.tsx"],
    "issues": [
        {
            "file": "src/utils.ts",
            "exports": [{"name": "formatPrice", "line": 12, "col": 14, "pos": 200}],
            "types": [{"name": "PriceProps", "line": 3, "col": 1}],
            "duplicates": [[{"name": "Button"}, {"name": "default"}]],
        },
        {"file": "package.json", "dependencies": [{"name": "moment", "line": 8, "col": 6}]},
        {"file": "src/Legacy.jsx", "files": True},
        {"exports": [{"name": "orphan"}]},
    ],
}


def test_parse_knip_report() -> None:
    findings = parse_knip_report(KNIP_REPORT)

    summary = [(finding.file_path, finding.code, finding.message) for finding in findings]
    assert summary == [
        ("src/Unused.tsx", "knip(files)", "Unused file"),
        ("src/utils.ts", "knip(exports)", "Unused export: formatPrice"),
        ("src/utils.ts", "knip(types)", "Unused exported type: PriceProps"),
        ("src/utils.ts", "knip(duplicates)", "Duplicate export: Button, default"),
        ("package.json", "knip(dependencies)", "Unused dependency: moment"),
        ("src/Legacy.jsx", "knip(files)", "Unused file"),
    ]
    assert all(finding.severity is Severity.WARNING for finding in findings)
    assert findings[1].labels[0].span.line == 12


def test_dead_code_findings_keep_sources_and_manifest() -> None:
    diagnostics = normalize(parse_knip_report(KNIP_REPORT), file_pattern=DEAD_CODE_FILE_PATTERN)

    assert {diag.file_path for diag in diagnostics} == {
        "src/Unused.tsx",
        "src/utils.ts",
        "src/Legacy.jsx",
        "package.json",
    }
    assert all(diag.plugin == "knip" and diag.category is Category.OTHER for diag in diagnostics)


@pytest.fixture
def request_for(tmp_path: Path) -> AnalysisRequest:
    return AnalysisRequest(project=ProjectInfo(directory=tmp_path, name="app"))


@pytest.fixture
def knip_binary(tmp_path: Path) -> str:
    binary = tmp_path / "tools" / "knip"
    binary.parent.mkdir()
    binary.write_text("#!/bin/sh\n", encoding="utf-8")
    binary.chmod(0o755)
    return str(binary)


def _stub_run(monkeypatch, *, stdout: str, stderr: str = "") -> list:
    calls: list = []

    def run(args, *, options=None):
        calls.append(list(args))
        return subprocess.CompletedProcess(args, 1, stdout=stdout, stderr=stderr)

    monkeypatch.setattr(dead_code_module, "run_command", run)
    return calls


def test_knip_analyzer_runs_json_reporter(tmp_path: Path, monkeypatch, knip_binary: str, request_for) -> None:
    calls = _stub_run(monkeypatch, stdout=json.dumps(KNIP_REPORT))

    findings = KnipAnalyzer(executable=knip_binary).run(tmp_path, request_for)

    assert len(findings) == 6
    assert calls[0][:3] == [knip_binary, "--reporter", "json"]


def test_missing_knip_raises_tool_not_found(tmp_path: Path, monkeypatch, request_for) -> None:
    monkeypatch.setenv("PATH", str(tmp_path / "empty"))
    calls = _stub_run(monkeypatch, stdout="{}")

    with pytest.raises(ToolNotFoundError) as excinfo:
        KnipAnalyzer().run(tmp_path, request_for)

    assert excinfo.value.tool == "knip"
    assert calls == []


@pytest.mark.parametrize("path", ["package.json", "packages/ui/package.json", "src/App.tsx", "src/util.js"])
def test_dead_code_pattern_accepts_sources_and_manifests(path: str) -> None:
    assert DEAD_CODE_FILE_PATTERN.search(path)


@pytest.mark.parametrize("path", ["styles.css", "my-package.json", "README.md"])
def test_dead_code_pattern_rejects_other_files(path: str) -> None:
    assert DEAD_CODE_FILE_PATTERN.search(path) is None


def test_knip_garbage_output_is_an_engine_failure(tmp_path: Path, monkeypatch, knip_binary: str, request_for) -> None:
    _stub_run(monkeypatch, stdout="Error: could not find entry files")

    with pytest.raises(EngineError, match="Failed to parse knip output"):
        KnipAnalyzer(executable=knip_binary).run(tmp_path, request_for)
