# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Health scoring (remote-first with a local estimate fallback)."""

from __future__ import annotations

from .client import ScoreClient, build_diagnostic_payload
from .local import (
    calculate_local_score,
    count_unique_rules,
    estimate_score_locally,
    score_from_rule_counts,
    score_label,
)

__all__ = [
    "ScoreClient",
    "build_diagnostic_payload",
    "calculate_local_score",
    "count_unique_rules",
    "estimate_score_locally",
    "score_from_rule_counts",
    "score_label",
]
