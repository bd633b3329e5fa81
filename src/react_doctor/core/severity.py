# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Severity related types and helpers."""

from __future__ import annotations

from enum import Enum
from typing import Final


class Severity(str, Enum):
    """Severity levels reported by the analysis engine."""

    ERROR = "error"
    WARNING = "warning"


_SEVERITY_ALIASES: Final[dict[str, Severity]] = {
    "error": Severity.ERROR,
    "deny": Severity.ERROR,
    "warning": Severity.WARNING,
    "warn": Severity.WARNING,
    "advice": Severity.WARNING,
}


def coerce_severity(value: object, default: Severity = Severity.WARNING) -> Severity:
    """Map an engine severity token onto :class:`Severity`.

    Args:
        value: Raw severity token emitted by the engine.
        default: Severity used when ``value`` is not recognised.

    Returns:
        Severity: Normalised severity.
    """

    if isinstance(value, Severity):
        return value
    if not isinstance(value, str):
        return default
    return _SEVERITY_ALIASES.get(value.strip().lower(), default)


__all__ = ["Severity", "coerce_severity"]
