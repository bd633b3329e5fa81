# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Orchestration behind the ``react-doctor`` command."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from .. import __version__
from ..analysis.engine import Analyzer
from ..config import load_project_config, resolve_diff_setting, resolve_scan_options
from ..core.errors import ConfigError, EngineError, RestoreError
from ..core.logging import CLILogger
from ..core.models import Diagnostic
from ..discovery.git import GitRunner, default_git_runner
from ..discovery.projects import ProjectSelectionError, discover_projects
from ..discovery.scope import Confirm, build_scope_decision, resolve_project_scope, should_skip_prompts
from ..reporting import render_score, render_score_only
from ..scan import scan
from ..scoring import ScoreClient
from .shared import EXIT_FAILURE, EXIT_RESTORE_FAILURE, CLIError

LOGGER = logging.getLogger(__name__)


@dataclass(slots=True)
class DoctorRequest:
    """Raw command-line inputs; ``None`` marks an option that was not passed."""

    directory: Path
    lint: bool | None = None
    dead_code: bool | None = None
    verbose: bool | None = None
    score_only: bool = False
    yes: bool = False
    project: str | None = None
    diff: bool | None = None
    diff_base: str | None = None
    offline: bool = False


@dataclass(slots=True)
class DoctorServices:
    """Collaborators injected into :func:`run_doctor`."""

    analyzer: Analyzer
    dead_code_analyzer: Analyzer
    score_client: ScoreClient
    confirm: Confirm
    env: Mapping[str, str] = field(default_factory=dict)
    stdin_isatty: bool = False
    git_runner: GitRunner = default_git_runner


def run_doctor(request: DoctorRequest, services: DoctorServices, *, logger: CLILogger) -> list[Diagnostic]:
    """Scan every selected project and print the combined score.

    Args:
        request: Command-line inputs.
        services: Analyzers, scoring client and prompt callback.
        logger: Console logger; quiet in score-only mode.

    Returns:
        list[Diagnostic]: Diagnostics accumulated across all projects.

    Raises:
        CLIError: On configuration, project selection, engine or restore failures.
    """

    root = request.directory.resolve()
    if not root.is_dir():
        raise CLIError(f"Directory not found: {request.directory}")
    try:
        return _run(root, request, services, logger=logger)
    except RestoreError as exc:
        for path, reason in exc.failed:
            logger.fail(f"Could not restore {path}: {reason}")
        raise CLIError(
            "Source files were left with neutralized suppression comments; restore them from version control.",
            exit_code=EXIT_RESTORE_FAILURE,
        ) from exc
    except (ConfigError, EngineError, ProjectSelectionError) as exc:
        raise CLIError(str(exc), exit_code=EXIT_FAILURE) from exc


def _run(root: Path, request: DoctorRequest, services: DoctorServices, *, logger: CLILogger) -> list[Diagnostic]:
    loaded = load_project_config(root)
    for warning in loaded.warnings:
        logger.warn(warning)

    if not request.score_only:
        logger.log(f"react-doctor v{__version__}")
        logger.blank()

    options = resolve_scan_options(
        loaded.config,
        lint=request.lint,
        dead_code=request.dead_code,
        verbose=request.verbose,
        score_only=request.score_only,
        offline=request.offline,
    )
    skip_prompts = should_skip_prompts(yes=request.yes, env=services.env, stdin_isatty=services.stdin_isatty)
    projects = discover_projects(root, request.project)
    LOGGER.debug("scanning %d project(s) under %s", len(projects), root)
    effective_diff = resolve_diff_setting(loaded.config, diff=request.diff, diff_base=request.diff_base)
    decision = build_scope_decision(
        root,
        effective_diff,
        skip_prompts=skip_prompts,
        score_only=request.score_only,
        confirm=services.confirm,
        logger=logger,
        runner=services.git_runner,
    )
    if decision.is_diff and decision.diff_info is not None:
        logger.log(f"Scanning changes: {decision.diff_info.current_branch} → {decision.diff_info.base_branch}")
        logger.blank()

    diagnostics: list[Diagnostic] = []
    for directory in projects:
        scope = resolve_project_scope(directory, decision, runner=services.git_runner)
        if scope.skip:
            logger.dim(f"No changed source files in {directory}, skipping.")
            logger.blank()
            continue
        logger.dim(f"Scanning {directory}...")
        logger.blank()
        result = scan(
            directory,
            options.model_copy(update={"include_paths": scope.include_paths}),
            logger=logger,
            analyzer=services.analyzer,
            dead_code_analyzer=services.dead_code_analyzer,
        )
        diagnostics.extend(result.diagnostics)
        logger.blank()

    score = services.score_client.calculate_score(diagnostics)
    if request.score_only:
        render_score_only(score, logger=logger)
        return diagnostics
    estimate = services.score_client.fetch_estimated_score(diagnostics)
    render_score(score, estimate, logger=logger)
    return diagnostics


__all__ = ["DoctorRequest", "DoctorServices", "run_doctor"]
