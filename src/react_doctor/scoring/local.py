# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Deterministic local health scoring."""

from __future__ import annotations

import math
from collections.abc import Iterable
from typing import Final, NamedTuple

from ..constants import PERFECT_SCORE, SCORE_GOOD_THRESHOLD, SCORE_OK_THRESHOLD
from ..core.models import Diagnostic, EstimatedScoreResult
from ..core.severity import Severity

ERROR_RULE_PENALTY: Final[float] = 1.5
WARNING_RULE_PENALTY: Final[float] = 0.75
ERROR_ESTIMATED_FIX_RATE: Final[float] = 0.85
WARNING_ESTIMATED_FIX_RATE: Final[float] = 0.8

LABEL_GREAT: Final[str] = "Great"
LABEL_NEEDS_WORK: Final[str] = "Needs work"
LABEL_CRITICAL: Final[str] = "Critical"


class RuleCounts(NamedTuple):
    """Number of distinct ``(plugin, rule)`` pairs per severity class."""

    errors: int
    warnings: int


def round_half_up(value: float) -> int:
    """Round ``value`` to the nearest integer with halves rounding up.

    The service rounds ``x.5`` towards positive infinity; the builtin
    :func:`round` would use banker's rounding and drift from it.
    """

    return math.floor(value + 0.5)


def score_label(score: int) -> str:
    """Return the label for ``score`` using the fixed thresholds."""

    if score >= SCORE_GOOD_THRESHOLD:
        return LABEL_GREAT
    if score >= SCORE_OK_THRESHOLD:
        return LABEL_NEEDS_WORK
    return LABEL_CRITICAL


def count_unique_rules(diagnostics: Iterable[Diagnostic]) -> RuleCounts:
    """Count distinct rules per severity, ignoring repeat occurrences.

    Args:
        diagnostics: Diagnostics to reduce.

    Returns:
        RuleCounts: Distinct error and warning rule counts.
    """

    error_rules: set[tuple[str, str]] = set()
    warning_rules: set[tuple[str, str]] = set()
    for diagnostic in diagnostics:
        key = (diagnostic.plugin, diagnostic.rule)
        if diagnostic.severity is Severity.ERROR:
            error_rules.add(key)
        else:
            warning_rules.add(key)
    return RuleCounts(errors=len(error_rules), warnings=len(warning_rules))


def score_from_rule_counts(error_rule_count: int, warning_rule_count: int) -> int:
    """Return ``max(0, round(100 - 1.5e - 0.75w))``."""

    penalty = error_rule_count * ERROR_RULE_PENALTY + warning_rule_count * WARNING_RULE_PENALTY
    return max(0, round_half_up(PERFECT_SCORE - penalty))


def calculate_local_score(diagnostics: Iterable[Diagnostic]) -> int:
    """Return the current score for ``diagnostics`` computed locally."""

    counts = count_unique_rules(diagnostics)
    return score_from_rule_counts(counts.errors, counts.warnings)


def estimate_score_locally(diagnostics: Iterable[Diagnostic]) -> EstimatedScoreResult:
    """Estimate the score after an automated fixer resolves most distinct rules.

    Each unfixed count is rounded on its own before being scored, and the
    estimate is not clamped to the current score.

    Args:
        diagnostics: Diagnostics to score.

    Returns:
        EstimatedScoreResult: Current and projected scores with labels.
    """

    counts = count_unique_rules(diagnostics)
    current_score = score_from_rule_counts(counts.errors, counts.warnings)
    unfixed_errors = round_half_up(counts.errors * (1 - ERROR_ESTIMATED_FIX_RATE))
    unfixed_warnings = round_half_up(counts.warnings * (1 - WARNING_ESTIMATED_FIX_RATE))
    estimated_score = score_from_rule_counts(unfixed_errors, unfixed_warnings)
    return EstimatedScoreResult(
        current_score=current_score,
        current_label=score_label(current_score),
        estimated_score=estimated_score,
        estimated_label=score_label(estimated_score),
    )


__all__ = [
    "ERROR_ESTIMATED_FIX_RATE",
    "ERROR_RULE_PENALTY",
    "LABEL_CRITICAL",
    "LABEL_GREAT",
    "LABEL_NEEDS_WORK",
    "WARNING_ESTIMATED_FIX_RATE",
    "WARNING_RULE_PENALTY",
    "RuleCounts",
    "calculate_local_score",
    "count_unique_rules",
    "estimate_score_locally",
    "round_half_up",
    "score_from_rule_counts",
    "score_label",
]
