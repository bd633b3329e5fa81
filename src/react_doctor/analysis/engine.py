# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Analysis engine boundary: the analyzer protocol and the oxlint adapter."""

from __future__ import annotations

import json
import logging
import os
import tempfile
from collections.abc import Sequence
from pathlib import Path
from typing import Final, Protocol, runtime_checkable

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from ..core.errors import EngineError
from ..core.models import RawFinding
from ..core.process import CommandOptions, node_bin_directories, resolve_executable, run_command
from .engine_config import ProjectInfo, build_engine_config
from .suppression import neutralized

LOGGER = logging.getLogger(__name__)

OXLINT_EXECUTABLE: Final[str] = "oxlint"
DEFAULT_ENGINE_TIMEOUT_SECONDS: Final[float] = 600.0


class AnalysisRequest(BaseModel):
    """Inputs for one analyzer invocation."""

    model_config = ConfigDict(frozen=True)

    project: ProjectInfo
    include_paths: tuple[str, ...] | None = Field(default=None)

    @property
    def targets(self) -> list[str]:
        """Return the paths handed to the engine (``.`` for a full scan)."""

        return list(self.include_paths) if self.include_paths else ["."]


@runtime_checkable
class Analyzer(Protocol):
    """Capability producing raw findings for a directory."""

    def run(self, directory: Path, request: AnalysisRequest) -> list[RawFinding]:
        """Analyse ``directory`` and return raw findings."""
        ...


def parse_engine_output(stdout: str) -> list[RawFinding]:
    """Parse the engine's JSON report into :class:`RawFinding` records.

    Args:
        stdout: Text written by the engine to standard output.

    Returns:
        list[RawFinding]: Findings in report order; malformed entries are skipped.

    Raises:
        EngineError: If ``stdout`` is not a JSON report with a ``diagnostics`` array.
    """

    text = stdout.strip()
    if not text:
        return []
    try:
        payload = json.loads(text)
    except ValueError as exc:
        raise EngineError("Failed to parse oxlint output", output=text) from exc
    entries = payload.get("diagnostics") if isinstance(payload, dict) else None
    if not isinstance(entries, list):
        raise EngineError("Unexpected oxlint output", output=text)

    findings: list[RawFinding] = []
    for entry in entries:
        if not isinstance(entry, dict):
            continue
        try:
            findings.append(RawFinding.model_validate(entry))
        except ValidationError as exc:
            LOGGER.debug("skipping malformed finding %r: %s", entry, exc)
    return findings


class OxlintAnalyzer:
    """Run oxlint as a subprocess against a project directory."""

    def __init__(
        self,
        *,
        executable: str | None = None,
        plugin_path: Path | None = None,
        timeout: float | None = DEFAULT_ENGINE_TIMEOUT_SECONDS,
    ) -> None:
        """Configure the analyzer.

        Args:
            executable: Explicit oxlint executable; discovered when omitted.
            plugin_path: Optional extra JavaScript rules plugin to load.
            timeout: Seconds before the engine is considered hung.
        """

        self._executable = executable
        self._plugin_path = plugin_path
        self._timeout = timeout

    def resolve_binary(self, directory: Path) -> str:
        """Return the oxlint executable for ``directory``.

        Raises:
            EngineError: If no executable can be found.
        """

        head = self._executable or OXLINT_EXECUTABLE
        resolved = resolve_executable(head, search=node_bin_directories(directory))
        if resolved is None:
            raise EngineError(f"Failed to run oxlint: executable '{head}' not found")
        return resolved

    def build_command(self, binary: str, config_path: Path, request: AnalysisRequest) -> list[str]:
        """Return the argument vector for one engine invocation."""

        args = [binary, "-c", str(config_path), "--format", "json"]
        if request.project.has_typescript:
            args.extend(["--tsconfig", "./tsconfig.json"])
        args.extend(request.targets)
        return args

    def run(self, directory: Path, request: AnalysisRequest) -> list[RawFinding]:
        """Run oxlint in ``directory`` and return its findings.

        Raises:
            EngineError: If the engine cannot start or its output is unusable.
        """

        binary = self.resolve_binary(directory)
        config = build_engine_config(request.project, plugin_path=self._plugin_path)
        fd, raw_path = tempfile.mkstemp(prefix=f"react-doctor-oxlintrc-{os.getpid()}-", suffix=".json")
        config_path = Path(raw_path)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                json.dump(config, handle, indent=2)
            command = self.build_command(binary, config_path, request)
            LOGGER.debug("running %s in %s", command, directory)
            try:
                completed = run_command(
                    command,
                    options=CommandOptions(
                        cwd=directory,
                        capture_output=True,
                        discard_stdin=True,
                        timeout=self._timeout,
                    ),
                )
            except OSError as exc:
                raise EngineError(f"Failed to run oxlint: {exc}") from exc
        finally:
            config_path.unlink(missing_ok=True)

        stdout = (completed.stdout or "").strip()
        stderr = (completed.stderr or "").strip()
        if not stdout and stderr:
            raise EngineError("Failed to run oxlint", output=stderr)
        return parse_engine_output(stdout)


def analyze_paths(analyzer: Analyzer, directory: Path, request: AnalysisRequest) -> Sequence[RawFinding]:
    """Run ``analyzer`` with suppression directives neutralised for the duration."""

    with neutralized(directory):
        return analyzer.run(directory, request)


__all__ = [
    "DEFAULT_ENGINE_TIMEOUT_SECONDS",
    "AnalysisRequest",
    "Analyzer",
    "OxlintAnalyzer",
    "analyze_paths",
    "parse_engine_output",
]
