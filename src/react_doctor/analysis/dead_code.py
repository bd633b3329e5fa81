# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Dead-code detection via knip."""

from __future__ import annotations

import json
import logging
import re
from collections.abc import Mapping
from pathlib import Path
from types import MappingProxyType
from typing import Any, Final

from ..core.errors import EngineError, ToolNotFoundError
from ..core.models import FindingLabel, RawFinding, SourceSpan
from ..core.process import CommandOptions, node_bin_directories, resolve_executable, run_command
from ..core.severity import Severity
from .engine import DEFAULT_ENGINE_TIMEOUT_SECONDS, AnalysisRequest

LOGGER = logging.getLogger(__name__)

KNIP_EXECUTABLE: Final[str] = "knip"
KNIP_PLUGIN: Final[str] = "knip"

# Issue sections reported per file, mapped to the message prefix shown to users.
ISSUE_MESSAGES: Final[Mapping[str, str]] = MappingProxyType(
    {
        "dependencies": "Unused dependency",
        "devDependencies": "Unused devDependency",
        "unlisted": "Unlisted dependency",
        "unresolved": "Unresolved import",
        "exports": "Unused export",
        "nsExports": "Unused namespace export",
        "types": "Unused exported type",
        "nsTypes": "Unused namespace type",
        "enumMembers": "Unused enum member",
        "classMembers": "Unused class member",
        "duplicates": "Duplicate export",
    },
)
UNUSED_FILE_RULE: Final[str] = "files"
UNUSED_FILE_MESSAGE: Final[str] = "Unused file"
# Dependency issues are reported against the manifest rather than a source file.
DEAD_CODE_FILE_PATTERN: Final[re.Pattern[str]] = re.compile(r"(\.(tsx?|jsx?)|(^|/)package\.json)$")


def _finding(file_path: str, rule: str, message: str, line: int = 0, column: int = 0) -> RawFinding:
    labels = (FindingLabel(span=SourceSpan(line=line, column=column)),) if line else ()
    return RawFinding(
        file_path=file_path,
        code=f"{KNIP_PLUGIN}({rule})",
        severity=Severity.WARNING,
        message=message,
        labels=labels,
    )


def _item_name(item: object) -> str:
    if isinstance(item, Mapping):
        return str(item.get("name", ""))
    if isinstance(item, list):
        return ", ".join(_item_name(entry) for entry in item)
    return str(item)


def _coerce_int(value: object) -> int:
    return value if isinstance(value, int) else 0


def parse_knip_report(payload: Mapping[str, Any]) -> list[RawFinding]:
    """Convert a knip JSON report into :class:`RawFinding` records.

    Args:
        payload: Parsed ``knip --reporter json`` document.

    Returns:
        list[RawFinding]: One finding per unused file or symbol.
    """

    findings: list[RawFinding] = []
    unused_files = payload.get("files")
    if isinstance(unused_files, list):
        findings.extend(_finding(str(path), UNUSED_FILE_RULE, UNUSED_FILE_MESSAGE) for path in unused_files)

    issues = payload.get("issues")
    if not isinstance(issues, list):
        return findings
    for issue in issues:
        if not isinstance(issue, Mapping) or not isinstance(issue.get("file"), str):
            continue
        file_path = issue["file"]
        if issue.get("files") is True:
            findings.append(_finding(file_path, UNUSED_FILE_RULE, UNUSED_FILE_MESSAGE))
        for section, prefix in ISSUE_MESSAGES.items():
            items = issue.get(section)
            if not isinstance(items, list):
                continue
            for item in items:
                name = _item_name(item)
                location = item if isinstance(item, Mapping) else {}
                findings.append(
                    _finding(
                        file_path,
                        section,
                        f"{prefix}: {name}" if name else prefix,
                        line=_coerce_int(location.get("line")),
                        column=_coerce_int(location.get("col")),
                    ),
                )
    return findings


class KnipAnalyzer:
    """Run knip to report unused files, exports and dependencies."""

    def __init__(self, *, executable: str | None = None, timeout: float | None = DEFAULT_ENGINE_TIMEOUT_SECONDS) -> None:
        """Configure the analyzer.

        Args:
            executable: Explicit knip executable; discovered when omitted.
            timeout: Seconds before knip is considered hung.
        """

        self._executable = executable
        self._timeout = timeout

    def run(self, directory: Path, request: AnalysisRequest) -> list[RawFinding]:
        """Run knip in ``directory``.

        Raises:
            ToolNotFoundError: If knip is not installed for the project.
            EngineError: If knip runs but its output is not a JSON report.
        """

        head = self._executable or KNIP_EXECUTABLE
        binary = resolve_executable(head, search=node_bin_directories(directory))
        if binary is None:
            raise ToolNotFoundError(KNIP_EXECUTABLE)
        LOGGER.debug("running knip for %s in %s", request.project.name, directory)
        try:
            completed = run_command(
                [binary, "--reporter", "json", "--no-progress", "--no-exit-code"],
                options=CommandOptions(
                    cwd=directory,
                    capture_output=True,
                    discard_stdin=True,
                    timeout=self._timeout,
                ),
            )
        except OSError as exc:
            raise EngineError(f"Failed to run knip: {exc}") from exc

        stdout = (completed.stdout or "").strip()
        if not stdout:
            stderr = (completed.stderr or "").strip()
            if stderr:
                raise EngineError("Failed to run knip", output=stderr)
            return []
        try:
            payload = json.loads(stdout)
        except ValueError as exc:
            raise EngineError("Failed to parse knip output", output=stdout) from exc
        if not isinstance(payload, Mapping):
            raise EngineError("Unexpected knip output", output=stdout)
        return parse_knip_report(payload)


__all__ = ["DEAD_CODE_FILE_PATTERN", "KNIP_PLUGIN", "KnipAnalyzer", "parse_knip_report"]
