# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Decide whether a run scans every file or only changed files."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

from ..constants import AUTOMATION_ENV_VARS
from ..core.logging import CLILogger
from .git import DiffInfo, GitRunner, default_git_runner, filter_source_files, get_diff_info

Confirm = Callable[[str], bool]
DiffSetting = bool | str | None

UNRESOLVED_DIFF_WARNING = "Not on a feature branch or could not determine base branch. Running full scan."


class ScopeMode(str, Enum):
    """Scope of files analysed by a run."""

    FULL = "full"
    DIFF = "diff"


class ScopeDecision(BaseModel):
    """Immutable scope decision made once per invocation."""

    model_config = ConfigDict(frozen=True)

    mode: ScopeMode = ScopeMode.FULL
    diff_info: DiffInfo | None = None
    explicit_base: str | None = None

    @property
    def is_diff(self) -> bool:
        """Return ``True`` when only changed files are analysed."""

        return self.mode is ScopeMode.DIFF

    @property
    def changed_files(self) -> frozenset[str]:
        """Return the filtered changed source files for diff mode."""

        if not self.is_diff or self.diff_info is None:
            return frozenset()
        return frozenset(filter_source_files(self.diff_info.changed_files))

    @property
    def reference_description(self) -> str | None:
        """Return the reference point description for diff mode."""

        return self.diff_info.reference_description if self.is_diff and self.diff_info else None


class ProjectScope(BaseModel):
    """Scope applied to one scanned project directory."""

    model_config = ConfigDict(frozen=True)

    directory: Path
    skip: bool = False
    include_paths: tuple[str, ...] | None = Field(default=None)


def explicit_base_from(effective_diff: DiffSetting) -> str | None:
    """Return the base branch named by a ``diff`` setting, if any."""

    return effective_diff if isinstance(effective_diff, str) and effective_diff else None


def is_automated_environment(env: Mapping[str, str]) -> bool:
    """Return ``True`` when an automation or agent environment is detected."""

    return any(env.get(name) for name in AUTOMATION_ENV_VARS)


def should_skip_prompts(*, yes: bool, env: Mapping[str, str], stdin_isatty: bool) -> bool:
    """Return ``True`` when interactive prompts must not be shown.

    Args:
        yes: Explicit "skip prompts" flag.
        env: Process environment used for automation detection.
        stdin_isatty: Whether standard input is an interactive terminal.

    Returns:
        bool: ``True`` when prompts are suppressed.
    """

    return yes or is_automated_environment(env) or not stdin_isatty


def _confirm_message(diff_info: DiffInfo, changed_count: int) -> str:
    if diff_info.is_current_changes:
        return (
            f"Found {changed_count} changed source files with uncommitted changes on "
            f"{diff_info.current_branch}. Only scan these changes?"
        )
    return (
        f"On branch {diff_info.current_branch} ({changed_count} changed files vs "
        f"{diff_info.base_branch}). Only scan this branch?"
    )


def resolve_diff_mode(
    diff_info: DiffInfo | None,
    effective_diff: DiffSetting,
    *,
    skip_prompts: bool,
    score_only: bool,
    confirm: Confirm,
    logger: CLILogger,
) -> bool:
    """Apply the mode-selection policy and return ``True`` for diff mode.

    Args:
        diff_info: Resolved changes, or ``None`` when no reference resolves.
        effective_diff: ``diff`` setting after CLI/config precedence.
        skip_prompts: Whether interactive prompts are suppressed.
        score_only: Whether only the score is printed.
        confirm: Callback asking the operator to narrow the scope.
        logger: Logger used for the unresolved-reference warning.

    Returns:
        bool: ``True`` when only changed files should be analysed.
    """

    if effective_diff is not None and effective_diff is not False:
        if diff_info is not None:
            return True
        if not score_only:
            logger.warn(UNRESOLVED_DIFF_WARNING)
            logger.blank()
        return False

    if effective_diff is False or diff_info is None:
        return False

    changed = filter_source_files(diff_info.changed_files)
    if not changed:
        return False
    if skip_prompts:
        return True
    if score_only:
        return False
    return bool(confirm(_confirm_message(diff_info, len(changed))))


def build_scope_decision(
    root: Path,
    effective_diff: DiffSetting,
    *,
    skip_prompts: bool,
    score_only: bool,
    confirm: Confirm,
    logger: CLILogger,
    runner: GitRunner = default_git_runner,
) -> ScopeDecision:
    """Resolve the scope for the whole invocation rooted at ``root``."""

    explicit_base = explicit_base_from(effective_diff)
    diff_info = get_diff_info(root, explicit_base, runner=runner)
    is_diff = resolve_diff_mode(
        diff_info,
        effective_diff,
        skip_prompts=skip_prompts,
        score_only=score_only,
        confirm=confirm,
        logger=logger,
    )
    return ScopeDecision(
        mode=ScopeMode.DIFF if is_diff else ScopeMode.FULL,
        diff_info=diff_info if is_diff else None,
        explicit_base=explicit_base,
    )


def resolve_project_scope(
    directory: Path,
    decision: ScopeDecision,
    *,
    runner: GitRunner = default_git_runner,
) -> ProjectScope:
    """Repeat scope resolution for one project directory.

    In diff mode a project without changed source files is skipped entirely;
    a project whose changes cannot be resolved is scanned in full.

    Args:
        directory: Project directory being scanned.
        decision: Invocation-wide scope decision.
        runner: Git command runner.

    Returns:
        ProjectScope: Skip flag and the paths handed to the analyzer.
    """

    if not decision.is_diff:
        return ProjectScope(directory=directory)
    project_diff = get_diff_info(directory, decision.explicit_base, runner=runner)
    if project_diff is None:
        return ProjectScope(directory=directory)
    changed = filter_source_files(project_diff.changed_files)
    if not changed:
        return ProjectScope(directory=directory, skip=True)
    return ProjectScope(directory=directory, include_paths=tuple(changed))


__all__ = [
    "UNRESOLVED_DIFF_WARNING",
    "Confirm",
    "DiffSetting",
    "ProjectScope",
    "ScopeDecision",
    "ScopeMode",
    "build_scope_decision",
    "explicit_base_from",
    "is_automated_environment",
    "resolve_diff_mode",
    "resolve_project_scope",
    "should_skip_prompts",
]
