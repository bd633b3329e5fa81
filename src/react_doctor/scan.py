# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Single-project scan pipeline."""

from __future__ import annotations

import logging
import time
from pathlib import Path

from .analysis.dead_code import DEAD_CODE_FILE_PATTERN, KnipAnalyzer
from .analysis.engine import AnalysisRequest, Analyzer, OxlintAnalyzer, analyze_paths
from .analysis.engine_config import detect_project
from .analysis.suppression import iter_candidate_files
from .config import ScanOptions
from .constants import SOURCE_FILE_PATTERN
from .core.errors import ToolNotFoundError
from .core.logging import CLILogger
from .core.models import Diagnostic, ScanResult
from .diagnostics import normalize
from .reporting import render_scan

LOGGER = logging.getLogger(__name__)


def count_source_files(directory: Path, include_paths: tuple[str, ...] | None = None) -> int:
    """Return how many source files a scan of ``directory`` covers."""

    if include_paths:
        return len(include_paths)
    return sum(1 for path in iter_candidate_files(directory) if SOURCE_FILE_PATTERN.search(path.name))


def _dead_code_diagnostics(
    analyzer: Analyzer,
    directory: Path,
    request: AnalysisRequest,
    logger: CLILogger,
) -> list[Diagnostic]:
    try:
        findings = analyzer.run(directory, request)
    except ToolNotFoundError as exc:
        logger.warn(f"{exc.tool} not found for {request.project.name}; skipping dead code detection")
        return []
    diagnostics = normalize(findings, file_pattern=DEAD_CODE_FILE_PATTERN)
    if request.include_paths:
        included = set(request.include_paths)
        diagnostics = [diag for diag in diagnostics if diag.file_path in included]
    return diagnostics


def scan(
    directory: Path,
    options: ScanOptions,
    *,
    logger: CLILogger,
    analyzer: Analyzer | None = None,
    dead_code_analyzer: Analyzer | None = None,
) -> ScanResult:
    """Scan one project and render its report.

    Lint findings are collected with suppression directives neutralised and
    kept for ``.tsx``/``.jsx`` files; dead-code findings cover every source
    file plus dependency issues reported against ``package.json``.

    Args:
        directory: Project directory.
        options: Effective scan options.
        logger: Destination for the per-project report.
        analyzer: Lint analyzer; defaults to :class:`OxlintAnalyzer`.
        dead_code_analyzer: Dead-code analyzer; defaults to :class:`KnipAnalyzer`.

    Returns:
        ScanResult: Normalised diagnostics plus run metadata.

    Raises:
        EngineError: If an analyzer fails.
        RestoreError: If neutralised files could not be restored.
    """

    started = time.perf_counter()
    project = detect_project(directory)
    request = AnalysisRequest(project=project, include_paths=options.include_paths)
    LOGGER.debug("scanning %s (%s)", project.name, project.framework.value)

    diagnostics: list[Diagnostic] = []
    if options.lint:
        lint_findings = analyze_paths(analyzer or OxlintAnalyzer(), directory, request)
        diagnostics.extend(normalize(lint_findings))
    if options.dead_code:
        diagnostics.extend(_dead_code_diagnostics(dead_code_analyzer or KnipAnalyzer(), directory, request, logger))

    result = ScanResult(
        directory=directory,
        diagnostics=tuple(diagnostics),
        file_count=count_source_files(directory, options.include_paths),
        elapsed_seconds=time.perf_counter() - started,
    )
    if not options.score_only:
        render_scan(result, verbose=options.verbose, logger=logger)
    return result


__all__ = ["count_source_files", "scan"]
