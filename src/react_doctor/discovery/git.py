# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Git-based change discovery."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Sequence
from pathlib import Path
from typing import Final

from pydantic import BaseModel, ConfigDict, Field

from ..constants import SOURCE_FILE_PATTERN
from ..core.process import CommandOptions, run_command

LOGGER = logging.getLogger(__name__)

GitRunner = Callable[[Sequence[str], Path], list[str]]

_DETACHED_HEAD: Final[str] = "HEAD"
_DEFAULT_BASE_CANDIDATES: Final[tuple[str, ...]] = ("main", "master")
_REMOTE_PREFIX: Final[str] = "origin/"


class DiffInfo(BaseModel):
    """Changed files relative to a resolved reference point."""

    model_config = ConfigDict(frozen=True)

    current_branch: str
    base_branch: str
    changed_files: tuple[str, ...] = Field(default_factory=tuple)
    is_current_changes: bool = False

    @property
    def reference_description(self) -> str:
        """Return a short human-readable description of the reference point."""

        if self.is_current_changes:
            return f"uncommitted changes on {self.current_branch}"
        return f"{self.current_branch} vs {self.base_branch}"


def default_git_runner(cmd: Sequence[str], root: Path) -> list[str]:
    """Execute ``cmd`` returning stdout lines while swallowing failures.

    Args:
        cmd: Git command to execute.
        root: Working directory for the command.

    Returns:
        list[str]: Raw stdout lines; empty when git is missing or the command fails.
    """

    try:
        cp = run_command(cmd, options=CommandOptions(cwd=root, capture_output=True, text=True))
    except (FileNotFoundError, OSError) as exc:
        LOGGER.debug("git unavailable for %s: %s", root, exc)
        return []
    if cp.returncode != 0:
        return []
    return (cp.stdout or "").splitlines()


def _first_line(runner: GitRunner, cmd: Sequence[str], root: Path) -> str | None:
    for raw in runner(cmd, root):
        stripped = raw.strip()
        if stripped:
            return stripped
    return None


def _collect(runner: GitRunner, cmd: Sequence[str], root: Path) -> list[str]:
    return [stripped for raw in runner(cmd, root) if (stripped := raw.strip())]


def get_current_branch(directory: Path, *, runner: GitRunner = default_git_runner) -> str | None:
    """Return the checked-out branch name, or ``None`` when detached or not a repository."""

    branch = _first_line(runner, ["git", "rev-parse", "--abbrev-ref", "HEAD"], directory)
    if not branch or branch == _DETACHED_HEAD:
        return None
    return branch


def _ref_exists(runner: GitRunner, ref: str, directory: Path) -> bool:
    return _first_line(runner, ["git", "rev-parse", "--verify", "--quiet", f"{ref}^{{commit}}"], directory) is not None


def resolve_base_branch(
    directory: Path,
    explicit_base: str | None = None,
    *,
    runner: GitRunner = default_git_runner,
) -> str | None:
    """Return the branch changes are compared against.

    Args:
        directory: Directory inside the repository.
        explicit_base: Base branch requested by the operator.
        runner: Git command runner.

    Returns:
        str | None: Resolvable base reference, or ``None`` when none exists.
    """

    if explicit_base:
        return explicit_base if _ref_exists(runner, explicit_base, directory) else None
    candidates: list[str] = []
    remote_head = _first_line(
        runner,
        ["git", "symbolic-ref", "--quiet", "--short", "refs/remotes/origin/HEAD"],
        directory,
    )
    if remote_head:
        candidates.append(remote_head.removeprefix(_REMOTE_PREFIX))
    candidates.extend(name for name in _DEFAULT_BASE_CANDIDATES if name not in candidates)
    for name in candidates:
        if _ref_exists(runner, name, directory):
            return name
        if _ref_exists(runner, f"{_REMOTE_PREFIX}{name}", directory):
            return f"{_REMOTE_PREFIX}{name}"
    return None


def _uncommitted_files(directory: Path, runner: GitRunner) -> list[str]:
    changed = _collect(runner, ["git", "diff", "--name-only", "--relative", "HEAD"], directory)
    untracked = _collect(runner, ["git", "ls-files", "--others", "--exclude-standard"], directory)
    return list(dict.fromkeys([*changed, *untracked]))


def get_diff_info(
    directory: Path,
    explicit_base: str | None = None,
    *,
    runner: GitRunner = default_git_runner,
) -> DiffInfo | None:
    """Resolve the changed-file list for ``directory``.

    When the current branch is the base branch the uncommitted working-tree
    changes (including untracked files) are used; otherwise the files changed
    since the merge-base with the base branch. Any unresolvable state yields
    ``None`` rather than an error.

    Args:
        directory: Project directory inside a git work tree.
        explicit_base: Base branch requested by the operator.
        runner: Git command runner.

    Returns:
        DiffInfo | None: Changed files and reference, or ``None``.
    """

    current_branch = get_current_branch(directory, runner=runner)
    if current_branch is None:
        return None
    base_branch = resolve_base_branch(directory, explicit_base, runner=runner)
    if base_branch is None:
        return None

    if base_branch.removeprefix(_REMOTE_PREFIX) == current_branch:
        changed = _uncommitted_files(directory, runner)
        if not changed:
            return None
        return DiffInfo(
            current_branch=current_branch,
            base_branch=base_branch,
            changed_files=tuple(changed),
            is_current_changes=True,
        )

    merge_base = _first_line(runner, ["git", "merge-base", base_branch, "HEAD"], directory)
    if merge_base is None:
        return None
    changed = _collect(
        runner,
        ["git", "diff", "--name-only", "--diff-filter=ACMR", "--relative", merge_base],
        directory,
    )
    return DiffInfo(current_branch=current_branch, base_branch=base_branch, changed_files=tuple(changed))


def filter_source_files(paths: Iterable[str]) -> list[str]:
    """Return the component source files among ``paths``; others are dropped silently."""

    return [path for path in paths if SOURCE_FILE_PATTERN.search(path)]


__all__ = [
    "DiffInfo",
    "GitRunner",
    "default_git_runner",
    "filter_source_files",
    "get_current_branch",
    "get_diff_info",
    "resolve_base_branch",
]
