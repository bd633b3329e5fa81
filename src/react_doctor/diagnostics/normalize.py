# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Normalise raw engine findings into categorised diagnostics."""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping
from typing import Final, NamedTuple

from ..constants import JSX_FILE_PATTERN
from ..core.models import Category, Diagnostic, RawFinding
from .catalog import (
    PLUGIN_CATEGORIES,
    REACT_COMPILER_MESSAGE,
    REACT_COMPILER_PLUGIN,
    RULE_CATEGORIES,
    RULE_HELP,
)

UNKNOWN_PLUGIN: Final[str] = "unknown"
_RULE_CODE_PATTERN: Final[re.Pattern[str]] = re.compile(r"^(.+)\((.+)\)$", re.DOTALL)
_ESLINT_PLUGIN_PREFIX: Final[re.Pattern[str]] = re.compile(r"^eslint-plugin-")
# Some upstream messages restate the location as ``path/file.tsx:12:4 ...``.
_FILEPATH_WITH_LOCATION: Final[re.Pattern[str]] = re.compile(r"\S+\.\w+:\d+:\d+.*$", re.DOTALL)


class RuleCode(NamedTuple):
    """Plugin and rule identifiers parsed from an engine rule code."""

    plugin: str
    rule: str


class CleanedMessage(NamedTuple):
    """Human-facing message and remediation hint for a diagnostic."""

    message: str
    help: str


def parse_rule_code(code: str) -> RuleCode:
    """Split ``plugin(rule)`` codes into their components.

    Codes without the parenthesised form degrade to the ``unknown`` plugin
    with the whole code as the rule; this function never raises.

    Args:
        code: Combined rule code emitted by the engine.

    Returns:
        RuleCode: Parsed plugin and rule identifiers.
    """

    match = _RULE_CODE_PATTERN.match(code or "")
    if match is None:
        return RuleCode(UNKNOWN_PLUGIN, code or "")
    plugin = _ESLINT_PLUGIN_PREFIX.sub("", match.group(1))
    return RuleCode(plugin, match.group(2))


def strip_location(message: str) -> str:
    """Return ``message`` without a trailing ``file:line:column`` fragment."""

    return _FILEPATH_WITH_LOCATION.sub("", message).strip()


def clean_message(message: str, help_text: str | None, plugin: str, rule: str) -> CleanedMessage:
    """Produce the displayed message and help text for a finding.

    Args:
        message: Raw engine message.
        help_text: Help text supplied by the engine, if any.
        plugin: Plugin identifier parsed from the rule code.
        rule: Rule identifier parsed from the rule code.

    Returns:
        CleanedMessage: Cleaned message (never empty when ``message`` is not)
        and resolved help text.
    """

    cleaned = strip_location(message)
    if plugin == REACT_COMPILER_PLUGIN:
        return CleanedMessage(REACT_COMPILER_MESSAGE, cleaned or help_text or RULE_HELP.get(rule, ""))
    return CleanedMessage(cleaned or message, help_text or RULE_HELP.get(rule, ""))


def resolve_category(
    plugin: str,
    rule: str,
    overrides: Mapping[str, Category | str] | None = None,
) -> Category:
    """Return the category for ``plugin``/``rule``.

    Resolution order: caller overrides (``plugin/rule`` then ``plugin`` keys),
    the static rule table, the per-plugin default, then ``Other``.

    Args:
        plugin: Plugin identifier.
        rule: Rule identifier.
        overrides: Optional caller-supplied category overrides.

    Returns:
        Category: Resolved category.

    Raises:
        ValueError: If an override names a category outside the taxonomy.
    """

    rule_key = f"{plugin}/{rule}"
    if overrides:
        for key in (rule_key, plugin):
            if key in overrides:
                return Category(overrides[key])
    if rule_key in RULE_CATEGORIES:
        return RULE_CATEGORIES[rule_key]
    return PLUGIN_CATEGORIES.get(plugin, Category.OTHER)


def normalize_finding(
    finding: RawFinding,
    plugin_overrides: Mapping[str, Category | str] | None = None,
) -> Diagnostic:
    """Convert a single :class:`RawFinding` into a :class:`Diagnostic`."""

    plugin, rule = parse_rule_code(finding.code)
    cleaned = clean_message(finding.message, finding.help, plugin, rule)
    span = finding.labels[0].span if finding.labels else None
    return Diagnostic(
        file_path=finding.file_path,
        plugin=plugin,
        rule=rule,
        severity=finding.severity,
        message=cleaned.message,
        help=cleaned.help,
        line=span.line if span is not None else 0,
        column=span.column if span is not None else 0,
        category=resolve_category(plugin, rule, plugin_overrides),
    )


def normalize(
    findings: Iterable[RawFinding],
    plugin_overrides: Mapping[str, Category | str] | None = None,
    *,
    file_pattern: re.Pattern[str] = JSX_FILE_PATTERN,
) -> list[Diagnostic]:
    """Normalise ``findings`` keeping only files matching ``file_pattern``.

    Args:
        findings: Raw findings produced by an analyzer.
        plugin_overrides: Optional category overrides keyed by ``plugin/rule``
            or ``plugin``.
        file_pattern: Pattern a finding's file path must match to be kept.

    Returns:
        list[Diagnostic]: Normalised diagnostics in engine order.
    """

    return [
        normalize_finding(finding, plugin_overrides)
        for finding in findings
        if file_pattern.search(finding.file_path)
    ]


__all__ = [
    "UNKNOWN_PLUGIN",
    "CleanedMessage",
    "RuleCode",
    "clean_message",
    "normalize",
    "normalize_finding",
    "parse_rule_code",
    "resolve_category",
    "strip_location",
]
