# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Analysis engines and the suppression neutralizer wrapped around them."""

from __future__ import annotations

from .dead_code import KnipAnalyzer, parse_knip_report
from .engine import AnalysisRequest, Analyzer, OxlintAnalyzer, analyze_paths, parse_engine_output
from .engine_config import Framework, ProjectInfo, build_engine_config, detect_project
from .suppression import RestoreHandle, neutralize_content, neutralize_disable_directives, neutralized

__all__ = [
    "AnalysisRequest",
    "Analyzer",
    "Framework",
    "KnipAnalyzer",
    "OxlintAnalyzer",
    "ProjectInfo",
    "RestoreHandle",
    "analyze_paths",
    "build_engine_config",
    "detect_project",
    "neutralize_content",
    "neutralize_disable_directives",
    "neutralized",
    "parse_engine_output",
    "parse_knip_report",
]
