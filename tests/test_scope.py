# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for full-versus-diff scope resolution."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

import pytest

from react_doctor.discovery.git import DiffInfo
from react_doctor.discovery.scope import (
    UNRESOLVED_DIFF_WARNING,
    ScopeDecision,
    ScopeMode,
    build_scope_decision,
    is_automated_environment,
    resolve_diff_mode,
    resolve_project_scope,
    should_skip_prompts,
)

BRANCH_DIFF = DiffInfo(current_branch="feature", base_branch="main", changed_files=("src/App.tsx", "README.md"))
DOCS_ONLY = DiffInfo(current_branch="feature", base_branch="main", changed_files=("README.md",))


class Prompt:
    def __init__(self, answer: bool) -> None:
        self.answer = answer
        self.messages: list[str] = []

    def __call__(self, message: str) -> bool:
        self.messages.append(message)
        return self.answer


def _resolve(diff_info, effective_diff, logger, *, skip_prompts=False, score_only=False, answer=True):
    prompt = Prompt(answer)
    result = resolve_diff_mode(
        diff_info,
        effective_diff,
        skip_prompts=skip_prompts,
        score_only=score_only,
        confirm=prompt,
        logger=logger,
    )
    return result, prompt


@pytest.mark.parametrize("effective_diff", [True, "main"])
def test_explicit_diff_uses_resolved_changes(logger, effective_diff) -> None:
    result, prompt = _resolve(BRANCH_DIFF, effective_diff, logger)

    assert result is True
    assert prompt.messages == []


def test_explicit_diff_without_reference_warns_and_scans_everything(logger) -> None:
    result, _ = _resolve(None, True, logger)

    assert result is False
    assert UNRESOLVED_DIFF_WARNING in logger.output


def test_explicit_diff_without_reference_is_silent_in_score_mode(logger) -> None:
    result, _ = _resolve(None, "main", logger, score_only=True)

    assert result is False
    assert logger.output == ""


def test_diff_disabled_never_prompts(logger) -> None:
    result, prompt = _resolve(BRANCH_DIFF, False, logger)

    assert result is False
    assert prompt.messages == []


@pytest.mark.parametrize("diff_info", [None, DOCS_ONLY])
def test_no_relevant_changes_means_full_scan(logger, diff_info) -> None:
    result, prompt = _resolve(diff_info, None, logger)

    assert result is False
    assert prompt.messages == []


def test_skip_prompts_selects_diff_automatically(logger) -> None:
    result, prompt = _resolve(BRANCH_DIFF, None, logger, skip_prompts=True)

    assert result is True
    assert prompt.messages == []


def test_score_mode_without_prompts_scans_everything(logger) -> None:
    result, prompt = _resolve(BRANCH_DIFF, None, logger, score_only=True)

    assert result is False
    assert prompt.messages == []


@pytest.mark.parametrize("answer", [True, False])
def test_interactive_operator_decides(logger, answer: bool) -> None:
    result, prompt = _resolve(BRANCH_DIFF, None, logger, answer=answer)

    assert result is answer
    assert prompt.messages == ["On branch feature (1 changed files vs main). Only scan this branch?"]


def test_prompt_for_uncommitted_changes(logger) -> None:
    info = DiffInfo(current_branch="main", base_branch="main", changed_files=("a.tsx", "b.ts"), is_current_changes=True)

    _, prompt = _resolve(info, None, logger)

    assert prompt.messages == ["Found 2 changed source files with uncommitted changes on main. Only scan these changes?"]


@pytest.mark.parametrize(
    ("yes", "env", "isatty", "expected"),
    [
        (True, {}, True, True),
        (False, {"CI": "true"}, True, True),
        (False, {"CLAUDECODE": "1"}, True, True),
        (False, {"CI": ""}, True, False),
        (False, {}, False, True),
        (False, {}, True, False),
    ],
)
def test_should_skip_prompts(yes: bool, env: dict[str, str], isatty: bool, expected: bool) -> None:
    assert should_skip_prompts(yes=yes, env=env, stdin_isatty=isatty) is expected


def test_is_automated_environment_signals() -> None:
    for name in ("CI", "CURSOR_AGENT", "CODEX_CI", "OPENCODE", "AMP_HOME", "AMI"):
        assert is_automated_environment({name: "1"})
    assert not is_automated_environment({"TERM": "xterm"})


class ScriptedGit:
    def __init__(self, per_directory: dict[Path, list[str] | None]) -> None:
        self.per_directory = per_directory

    def __call__(self, cmd: Sequence[str], root: Path) -> list[str]:
        files = self.per_directory.get(root)
        if files is None:
            return []
        if cmd[:3] == ["git", "rev-parse", "--abbrev-ref"]:
            return ["feature"]
        if cmd[:3] == ["git", "rev-parse", "--verify"]:
            return ["abc"] if "main" in cmd[-1] else []
        if cmd[:2] == ["git", "merge-base"]:
            return ["base"]
        if cmd[:2] == ["git", "diff"]:
            return files
        return []


def test_build_scope_decision_records_explicit_base(logger) -> None:
    root = Path("/work")
    runner = ScriptedGit({root: ["src/App.tsx"]})

    decision = build_scope_decision(
        root,
        "main",
        skip_prompts=True,
        score_only=False,
        confirm=Prompt(True),
        logger=logger,
        runner=runner,
    )

    assert decision.mode is ScopeMode.DIFF
    assert decision.explicit_base == "main"
    assert decision.changed_files == frozenset({"src/App.tsx"})
    assert decision.reference_description == "feature vs main"


def test_project_scope_in_diff_mode() -> None:
    web, docs, unknown = Path("/work/web"), Path("/work/docs"), Path("/work/unknown")
    runner = ScriptedGit({web: ["src/Page.tsx", "package.json"], docs: ["README.md"], unknown: None})
    decision = ScopeDecision(mode=ScopeMode.DIFF, diff_info=BRANCH_DIFF)

    web_scope = resolve_project_scope(web, decision, runner=runner)
    docs_scope = resolve_project_scope(docs, decision, runner=runner)
    unknown_scope = resolve_project_scope(unknown, decision, runner=runner)

    assert (web_scope.skip, web_scope.include_paths) == (False, ("src/Page.tsx",))
    assert docs_scope.skip is True
    assert (unknown_scope.skip, unknown_scope.include_paths) == (False, None)


def test_project_scope_in_full_mode_scans_everything() -> None:
    scope = resolve_project_scope(Path("/work/web"), ScopeDecision(), runner=ScriptedGit({}))

    assert (scope.skip, scope.include_paths) == (False, None)
