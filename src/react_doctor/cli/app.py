# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Typer application exposing the ``react-doctor`` command."""

from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Annotated

import typer

from .. import __version__
from ..analysis.dead_code import KnipAnalyzer
from ..analysis.engine import OxlintAnalyzer
from ..constants import RESCAN_COMMAND_HINT
from ..core.logging import build_cli_logger
from ..scoring import ScoreClient
from .services import DoctorRequest, DoctorServices, run_doctor
from .shared import EXIT_OK, CLIError

app = typer.Typer(
    name="react-doctor",
    help="Diagnose React codebase health.",
    add_completion=False,
    no_args_is_help=False,
)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"react-doctor v{__version__}")
        raise typer.Exit()


def _confirm(message: str) -> bool:
    return typer.confirm(message, default=True)


def _stdin_isatty() -> bool:
    try:
        return sys.stdin.isatty()
    except (AttributeError, ValueError):
        return False


@app.command()
def main(
    directory: Annotated[Path, typer.Argument(help="Project directory to scan.")] = Path("."),
    lint: Annotated[bool | None, typer.Option("--lint/--no-lint", help="Run or skip linting.")] = None,
    dead_code: Annotated[
        bool | None,
        typer.Option("--dead-code/--no-dead-code", help="Run or skip dead code detection."),
    ] = None,
    verbose: Annotated[
        bool | None,
        typer.Option("--verbose/--no-verbose", help="Show file details per rule."),
    ] = None,
    score: Annotated[bool, typer.Option("--score", help="Output only the score.")] = False,
    yes: Annotated[bool, typer.Option("--yes", "-y", help="Skip prompts and scan all workspace projects.")] = False,
    project: Annotated[
        str | None,
        typer.Option("--project", help="Select workspace projects (comma-separated)."),
    ] = None,
    diff: Annotated[
        bool | None,
        typer.Option("--diff/--no-diff", help="Scan only files changed against the base branch."),
    ] = None,
    diff_base: Annotated[
        str | None,
        typer.Option("--diff-base", metavar="BASE", help="Scan only files changed against BASE."),
    ] = None,
    offline: Annotated[bool, typer.Option("--offline", help="Never contact the scoring service.")] = False,
    version: Annotated[
        bool,
        typer.Option("--version", callback=_version_callback, is_eager=True, help="Show the version and exit."),
    ] = False,
) -> None:
    """Scan a React project and report its health score."""

    logger = build_cli_logger(quiet=score)
    request = DoctorRequest(
        directory=directory,
        lint=lint,
        dead_code=dead_code,
        verbose=verbose,
        score_only=score,
        yes=yes,
        project=project,
        diff=diff,
        diff_base=diff_base,
        offline=offline,
    )
    services = DoctorServices(
        analyzer=OxlintAnalyzer(),
        dead_code_analyzer=KnipAnalyzer(),
        score_client=ScoreClient.from_env(offline=offline),
        confirm=_confirm,
        env=dict(os.environ),
        stdin_isatty=_stdin_isatty(),
    )
    try:
        run_doctor(request, services, logger=logger)
    except (KeyboardInterrupt, typer.Abort) as exc:
        logger.echo("")
        logger.echo("Cancelled.")
        logger.echo(f"Run `{RESCAN_COMMAND_HINT}` to scan again.")
        raise typer.Exit(code=EXIT_OK) from exc
    except CLIError as exc:
        logger.fail(str(exc))
        raise typer.Exit(code=exc.exit_code) from exc


__all__ = ["app", "main"]
