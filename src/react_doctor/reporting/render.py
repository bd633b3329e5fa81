# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Console rendering for scan results and health scores."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field

from rich import box
from rich.panel import Panel
from rich.text import Text

from ..constants import SCORE_GOOD_THRESHOLD, SCORE_OK_THRESHOLD, SEPARATOR_LENGTH_CHARS
from ..core.logging import CLILogger
from ..core.models import Diagnostic, EstimatedScoreResult, ScanResult, ScoreResult
from ..core.severity import Severity

ERROR_SYMBOL = "✗"
WARNING_SYMBOL = "⚠"


@dataclass(slots=True)
class RuleGroup:
    """Diagnostics sharing one ``plugin/rule`` identifier."""

    rule_key: str
    severity: Severity
    message: str
    help: str
    diagnostics: list[Diagnostic] = field(default_factory=list)

    @property
    def count(self) -> int:
        """Return the number of occurrences in the group."""

        return len(self.diagnostics)


def group_by_rule(diagnostics: Iterable[Diagnostic]) -> list[RuleGroup]:
    """Group ``diagnostics`` per rule, errors first then by occurrence count.

    A rule reported at both severities is shown as an error.

    Args:
        diagnostics: Diagnostics to group.

    Returns:
        list[RuleGroup]: Groups in display order.
    """

    groups: dict[str, RuleGroup] = {}
    for diag in diagnostics:
        group = groups.get(diag.rule_key)
        if group is None:
            group = RuleGroup(rule_key=diag.rule_key, severity=diag.severity, message=diag.message, help=diag.help)
            groups[diag.rule_key] = group
        elif diag.severity is Severity.ERROR:
            group.severity = Severity.ERROR
        group.diagnostics.append(diag)
    return sorted(
        groups.values(),
        key=lambda group: (group.severity is not Severity.ERROR, -group.count, group.rule_key),
    )


def score_style(score: int) -> str:
    """Return the Rich style matching the score threshold bands."""

    if score >= SCORE_GOOD_THRESHOLD:
        return "green"
    if score >= SCORE_OK_THRESHOLD:
        return "yellow"
    return "red"


def _plural(count: int, noun: str) -> str:
    return f"{count} {noun}" if count == 1 else f"{count} {noun}s"


def _location(diag: Diagnostic) -> str:
    return f"{diag.file_path}:{diag.line}" if diag.line else diag.file_path


def render_diagnostics(diagnostics: Sequence[Diagnostic], *, verbose: bool, logger: CLILogger) -> None:
    """Print the rule-grouped diagnostic listing.

    Args:
        diagnostics: Diagnostics of one project.
        verbose: When ``True`` each occurrence's ``file:line`` is listed.
        logger: Destination logger.
    """

    for group in group_by_rule(diagnostics):
        is_error = group.severity is Severity.ERROR
        line = Text("  ")
        line.append(ERROR_SYMBOL if is_error else WARNING_SYMBOL, style="red" if is_error else "yellow")
        line.append(f" {group.message}")
        if group.count > 1:
            line.append(f" ({group.count})", style="dim")
        logger.render(line)
        if group.help:
            logger.dim(f"    {group.help}")
        if verbose:
            for diag in group.diagnostics:
                logger.dim(f"    {_location(diag)}")
        logger.blank()


def render_summary(result: ScanResult, *, logger: CLILogger) -> None:
    """Print the per-project summary counts."""

    logger.dim("─" * SEPARATOR_LENGTH_CHARS)
    if not result.diagnostics:
        logger.ok(f"No issues found in {_plural(result.file_count, 'file')} ({result.elapsed_seconds:.1f}s)")
        return
    affected = len({diag.file_path for diag in result.diagnostics})
    parts = []
    if result.error_count:
        parts.append(_plural(result.error_count, "error"))
    if result.warning_count:
        parts.append(_plural(result.warning_count, "warning"))
    logger.log(
        f"Found {' and '.join(parts)} in {_plural(affected, 'file')} "
        f"(scanned {result.file_count}, {result.elapsed_seconds:.1f}s)",
    )


def render_scan(result: ScanResult, *, verbose: bool, logger: CLILogger) -> None:
    """Print the full per-project report."""

    render_diagnostics(result.diagnostics, verbose=verbose, logger=logger)
    render_summary(result, logger=logger)


def build_score_panel(score: ScoreResult | None, estimate: EstimatedScoreResult) -> Panel:
    """Return the framed score box.

    The authoritative score is shown when available; otherwise the locally
    computed current score is shown and marked as an estimate.

    Args:
        score: Authoritative score, or ``None`` when the service was unavailable.
        estimate: Current and projected post-fix scores.

    Returns:
        Panel: Rich panel ready for printing.
    """

    current = score.score if score is not None else estimate.current_score
    label = score.label if score is not None else estimate.current_label
    body = Text("Score: ")
    body.append(f"{current} {label}", style=f"bold {score_style(current)}")
    if score is None:
        body.append(" (estimated locally)", style="dim")
    if estimate.estimated_score > current:
        body.append(" → ", style="dim")
        body.append(f"~{estimate.estimated_score} {estimate.estimated_label}", style=score_style(estimate.estimated_score))
        body.append(" after fixes", style="dim")
    return Panel.fit(body, box=box.ROUNDED, border_style="dim", padding=(0, 2))


def render_score(score: ScoreResult | None, estimate: EstimatedScoreResult, *, logger: CLILogger) -> None:
    """Print the framed score box."""

    logger.render(build_score_panel(score, estimate))


def render_score_only(score: ScoreResult | None, *, logger: CLILogger) -> None:
    """Write the bare score for machine consumption; nothing when unavailable."""

    if score is not None:
        logger.echo(str(score.score))


__all__ = [
    "RuleGroup",
    "build_score_panel",
    "group_by_rule",
    "render_diagnostics",
    "render_scan",
    "render_score",
    "render_score_only",
    "render_summary",
    "score_style",
]
