# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Reporting helpers for scan output."""

from __future__ import annotations

from .render import (
    build_score_panel,
    group_by_rule,
    render_scan,
    render_score,
    render_score_only,
    render_summary,
)

__all__ = [
    "build_score_panel",
    "group_by_rule",
    "render_scan",
    "render_score",
    "render_score_only",
    "render_summary",
]
