# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Shared constants for react-doctor."""

from __future__ import annotations

import re
from typing import Final

PERFECT_SCORE: Final[int] = 100
SCORE_GOOD_THRESHOLD: Final[int] = 75
SCORE_OK_THRESHOLD: Final[int] = 50

SCORE_API_URL: Final[str] = "https://www.react.doctor/api/score"
ESTIMATE_SCORE_API_URL: Final[str] = "https://www.react.doctor/api/estimate-score"
SCORE_API_URL_ENV: Final[str] = "REACT_DOCTOR_SCORE_URL"
ESTIMATE_SCORE_API_URL_ENV: Final[str] = "REACT_DOCTOR_ESTIMATE_URL"
SCORE_REQUEST_TIMEOUT_SECONDS: Final[float] = 10.0

# Files whose findings are kept after normalisation.
JSX_FILE_PATTERN: Final[re.Pattern[str]] = re.compile(r"\.(tsx|jsx)$")
# Files that count as changed source files when narrowing scope to a diff.
SOURCE_FILE_PATTERN: Final[re.Pattern[str]] = re.compile(r"\.(tsx?|jsx?)$")

CONFIG_FILENAME: Final[str] = "react-doctor.config.json"
PACKAGE_JSON_CONFIG_KEY: Final[str] = "reactDoctor"

AUTOMATION_ENV_VARS: Final[tuple[str, ...]] = (
    "CI",
    "CLAUDECODE",
    "CURSOR_AGENT",
    "CODEX_CI",
    "OPENCODE",
    "AMP_HOME",
    "AMI",
)

IGNORED_DIRECTORIES: Final[frozenset[str]] = frozenset(
    {
        "node_modules",
        ".git",
        ".next",
        ".turbo",
        ".vercel",
        "dist",
        "build",
        "out",
        "coverage",
    },
)

RESCAN_COMMAND_HINT: Final[str] = "react-doctor ."
SEPARATOR_LENGTH_CHARS: Final[int] = 48

__all__ = [
    "AUTOMATION_ENV_VARS",
    "CONFIG_FILENAME",
    "ESTIMATE_SCORE_API_URL",
    "ESTIMATE_SCORE_API_URL_ENV",
    "IGNORED_DIRECTORIES",
    "JSX_FILE_PATTERN",
    "PACKAGE_JSON_CONFIG_KEY",
    "PERFECT_SCORE",
    "RESCAN_COMMAND_HINT",
    "SCORE_API_URL",
    "SCORE_API_URL_ENV",
    "SCORE_GOOD_THRESHOLD",
    "SCORE_OK_THRESHOLD",
    "SCORE_REQUEST_TIMEOUT_SECONDS",
    "SEPARATOR_LENGTH_CHARS",
    "SOURCE_FILE_PATTERN",
]
