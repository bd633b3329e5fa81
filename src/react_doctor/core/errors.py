# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Exception hierarchy shared across react-doctor."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from typing import Final

ERROR_PREVIEW_LENGTH_CHARS: Final[int] = 200


class ReactDoctorError(RuntimeError):
    """Base class for failures raised by react-doctor."""


class ToolNotFoundError(ReactDoctorError):
    """Raised when an optional external tool is not installed."""

    def __init__(self, tool: str) -> None:
        self.tool = tool
        super().__init__(f"{tool} executable not found")


class ConfigError(ReactDoctorError):
    """Raised when project configuration input is invalid."""


class EngineError(ReactDoctorError):
    """Raised when the analysis engine cannot be executed or its output parsed."""

    def __init__(self, message: str, *, output: str | None = None) -> None:
        """Initialise the error, appending a truncated preview of ``output``.

        Args:
            message: Human-readable description of the failure.
            output: Offending engine output, if any.
        """

        self.preview = output[:ERROR_PREVIEW_LENGTH_CHARS] if output else ""
        super().__init__(f"{message}: {self.preview}" if self.preview else message)


class RestoreError(ReactDoctorError):
    """Raised when neutralized files could not be restored to their original content."""

    def __init__(self, failed: Sequence[tuple[Path, str]]) -> None:
        """Record the paths that failed to restore.

        Args:
            failed: ``(path, reason)`` pairs for every file left modified.
        """

        self.failed = tuple(failed)
        listing = ", ".join(f"{path} ({reason})" for path, reason in self.failed)
        super().__init__(f"Failed to restore {len(self.failed)} file(s) after analysis: {listing}")

    @property
    def paths(self) -> tuple[Path, ...]:
        """Return the paths that remain modified."""

        return tuple(path for path, _ in self.failed)


__all__ = [
    "ERROR_PREVIEW_LENGTH_CHARS",
    "ConfigError",
    "EngineError",
    "ReactDoctorError",
    "RestoreError",
    "ToolNotFoundError",
]
