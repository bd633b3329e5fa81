# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Project discovery and change-scope resolution."""

from __future__ import annotations

from .git import DiffInfo, filter_source_files, get_diff_info
from .projects import discover_projects
from .scope import (
    ProjectScope,
    ScopeDecision,
    ScopeMode,
    build_scope_decision,
    resolve_diff_mode,
    resolve_project_scope,
    should_skip_prompts,
)

__all__ = [
    "DiffInfo",
    "ProjectScope",
    "ScopeDecision",
    "ScopeMode",
    "build_scope_decision",
    "discover_projects",
    "filter_source_files",
    "get_diff_info",
    "resolve_diff_mode",
    "resolve_project_scope",
    "should_skip_prompts",
]
