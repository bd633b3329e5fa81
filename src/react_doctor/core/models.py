# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Core data models shared across the react-doctor package."""

from __future__ import annotations

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .severity import Severity, coerce_severity


class Category(str, Enum):
    """Fixed category taxonomy used to group diagnostics."""

    CORRECTNESS = "Correctness"
    PERFORMANCE = "Performance"
    STATE_AND_EFFECTS = "State & Effects"
    ARCHITECTURE = "Architecture"
    BUNDLE_SIZE = "Bundle Size"
    SECURITY = "Security"
    NEXTJS = "Next.js"
    SERVER = "Server"
    REACT_COMPILER = "React Compiler"
    ACCESSIBILITY = "Accessibility"
    OTHER = "Other"


class SourceSpan(BaseModel):
    """Location of a labelled span inside a source file."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    line: int = 0
    column: int = 0
    offset: int = 0
    length: int = 0


class FindingLabel(BaseModel):
    """Labelled span attached to a raw finding."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    label: str | None = None
    span: SourceSpan = Field(default_factory=SourceSpan)


class RawFinding(BaseModel):
    """Finding as emitted by the analysis engine before normalisation."""

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    file_path: str = Field(alias="filename")
    code: str = ""
    severity: Severity = Severity.WARNING
    message: str = ""
    help: str | None = None
    labels: tuple[FindingLabel, ...] = Field(default_factory=tuple)

    @field_validator("severity", mode="before")
    @classmethod
    def _coerce_severity(cls, value: object) -> Severity:
        return coerce_severity(value)

    @field_validator("code", "message", mode="before")
    @classmethod
    def _coerce_text(cls, value: object) -> str:
        return "" if value is None else str(value)


class Diagnostic(BaseModel):
    """Normalized, categorised diagnostic used for reporting and scoring."""

    model_config = ConfigDict(frozen=True)

    file_path: str
    plugin: str
    rule: str
    severity: Severity
    message: str
    help: str = ""
    line: int = 0
    column: int = 0
    category: Category = Category.OTHER

    @property
    def rule_key(self) -> str:
        """Return the ``plugin/rule`` identifier used for grouping."""

        return f"{self.plugin}/{self.rule}"


class ScoreResult(BaseModel):
    """Authoritative health score returned by the scoring service."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    score: int = Field(ge=0, le=100)
    label: str


class EstimatedScoreResult(BaseModel):
    """Current score plus the projected score after an automated fix pass."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    current_score: int = Field(alias="currentScore", ge=0, le=100)
    current_label: str = Field(alias="currentLabel")
    estimated_score: int = Field(alias="estimatedScore", ge=0, le=100)
    estimated_label: str = Field(alias="estimatedLabel")


class ScanResult(BaseModel):
    """Aggregate result for a single project scan."""

    model_config = ConfigDict(frozen=True)

    directory: Path
    diagnostics: tuple[Diagnostic, ...] = Field(default_factory=tuple)
    file_count: int = 0
    elapsed_seconds: float = 0.0

    @property
    def error_count(self) -> int:
        """Return the number of error-level diagnostics."""

        return sum(1 for diag in self.diagnostics if diag.severity is Severity.ERROR)

    @property
    def warning_count(self) -> int:
        """Return the number of warning-level diagnostics."""

        return len(self.diagnostics) - self.error_count


__all__ = [
    "Category",
    "Diagnostic",
    "EstimatedScoreResult",
    "FindingLabel",
    "RawFinding",
    "ScanResult",
    "ScoreResult",
    "SourceSpan",
]
