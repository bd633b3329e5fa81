# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared pytest fixtures."""

from __future__ import annotations

import shutil
import subprocess
from collections.abc import Callable
from io import StringIO
from pathlib import Path

import pytest
from rich.console import Console

from react_doctor.core.logging import CLILogger
from react_doctor.core.models import Category, Diagnostic
from react_doctor.core.severity import Severity


class RecordingLogger(CLILogger):
    """CLI logger writing plain text into an in-memory buffer."""

    @property
    def output(self) -> str:
        file = self.console.file
        assert isinstance(file, StringIO)
        return file.getvalue()


def _recording_logger(*, quiet: bool = False) -> RecordingLogger:
    console = Console(file=StringIO(), color_system=None, force_terminal=False, width=200, emoji=False)
    return RecordingLogger(console=console, use_emoji=False, quiet=quiet)


@pytest.fixture
def logger() -> RecordingLogger:
    return _recording_logger()


@pytest.fixture
def quiet_logger() -> RecordingLogger:
    return _recording_logger(quiet=True)


DiagnosticFactory = Callable[..., Diagnostic]


@pytest.fixture
def make_diagnostic() -> DiagnosticFactory:
    def factory(
        plugin: str = "react",
        rule: str = "jsx-key",
        severity: Severity = Severity.WARNING,
        *,
        file_path: str = "src/App.tsx",
        message: str = "Missing key",
        line: int = 1,
    ) -> Diagnostic:
        return Diagnostic(
            file_path=file_path,
            plugin=plugin,
            rule=rule,
            severity=severity,
            message=message,
            line=line,
            category=Category.CORRECTNESS,
        )

    return factory


def git(repo: Path, *args: str) -> str:
    completed = subprocess.run(
        ["git", *args],
        cwd=repo,
        check=True,
        capture_output=True,
        text=True,
    )
    return completed.stdout.strip()


@pytest.fixture
def git_repo(tmp_path: Path) -> Path:
    if shutil.which("git") is None:
        pytest.skip("git executable not available")
    repo = tmp_path / "repo"
    repo.mkdir()
    git(repo, "init", "--initial-branch=main")
    git(repo, "config", "user.email", "dev@example.com")
    git(repo, "config", "user.name", "Dev")
    git(repo, "config", "commit.gpgsign", "false")
    (repo / "src").mkdir()
    (repo / "src" / "App.tsx").write_text("export const App = () => <div />;\n", encoding="utf-8")
    (repo / "README.md").write_text("# demo\n", encoding="utf-8")
    git(repo, "add", ".")
    git(repo, "commit", "-m", "initial")
    return repo


@pytest.fixture
def run_git() -> Callable[..., str]:
    return git
