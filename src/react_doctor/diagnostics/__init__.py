# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Diagnostic normalisation and categorisation."""

from __future__ import annotations

from .normalize import (
    clean_message,
    normalize,
    normalize_finding,
    parse_rule_code,
    resolve_category,
)

__all__ = [
    "clean_message",
    "normalize",
    "normalize_finding",
    "parse_rule_code",
    "resolve_category",
]
