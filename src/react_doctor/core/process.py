# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Safe wrappers around ``subprocess`` execution."""

from __future__ import annotations

import shutil

# Bandit: subprocess usage is intentional; the wrapper normalises arguments and
# never enables ``shell=True``.
import subprocess  # nosec B404
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path
from subprocess import CompletedProcess
from typing import Final

TIMEOUT_RETURNCODE: Final[int] = 124
NODE_BIN_DIRECTORY: Final[Path] = Path("node_modules") / ".bin"


@dataclass(slots=True, frozen=True)
class CommandOptions:
    """Immutable command execution options.

    Commands never raise on a non-zero exit; callers inspect ``returncode``.
    """

    cwd: Path | None = None
    env: Mapping[str, str] | None = None
    capture_output: bool = False
    text: bool = True
    timeout: float | None = None
    discard_stdin: bool = False


def _ensure_text(value: str | bytes | None) -> str | None:
    if value is None or isinstance(value, str):
        return value
    return value.decode(errors="ignore")


def node_bin_directories(directory: Path) -> list[Path]:
    """Return ``node_modules/.bin`` candidates from ``directory`` up to the filesystem root."""

    resolved = directory.resolve()
    return [candidate / NODE_BIN_DIRECTORY for candidate in (resolved, *resolved.parents)]


def resolve_executable(head: str, *, search: Sequence[Path] = ()) -> str | None:
    """Return an absolute path for ``head`` or ``None`` when it cannot be found.

    Args:
        head: Executable name or path.
        search: Extra directories probed before ``PATH``, usually
            :func:`node_bin_directories` of the project.

    Returns:
        str | None: Resolved executable path.
    """

    head_path = Path(head)
    if head_path.is_absolute():
        return str(head_path) if head_path.exists() else None
    for directory in search:
        candidate = directory / head
        if candidate.is_file():
            return str(candidate)
    return shutil.which(head)


def run_command(args: Sequence[str], *, options: CommandOptions | None = None) -> CompletedProcess[str]:
    """Execute ``args`` with the executable resolved against ``PATH``.

    Output streams are drained while the child runs and buffered until it
    exits, so large engine reports cannot dead-lock on a full pipe.

    Args:
        args: Command and argument sequence to execute.
        options: Options configuring execution semantics.

    Returns:
        CompletedProcess: Subprocess execution metadata. A timeout is reported
        as return code ``124`` with the timeout appended to stderr.

    Raises:
        ValueError: If ``args`` is empty.
        FileNotFoundError: If the executable cannot be resolved.
    """

    if not args:
        raise ValueError("subprocess command requires at least one argument")
    head, *rest = args
    resolved = resolve_executable(head)
    if resolved is None:
        raise FileNotFoundError(f"Executable '{head}' was not found on PATH")
    command = [resolved, *rest]
    opts = options or CommandOptions()

    try:
        return subprocess.run(  # nosec B603 - argument list, no shell
            command,
            cwd=str(opts.cwd) if opts.cwd is not None else None,
            env=dict(opts.env) if opts.env is not None else None,
            check=False,
            capture_output=opts.capture_output,
            text=opts.text,
            timeout=opts.timeout,
            stdin=subprocess.DEVNULL if opts.discard_stdin else None,
        )
    except subprocess.TimeoutExpired as exc:
        stderr = _ensure_text(exc.stderr)
        notice = f"Command timed out after {opts.timeout:.1f}s"
        return subprocess.CompletedProcess(
            args=command,
            returncode=TIMEOUT_RETURNCODE,
            stdout=_ensure_text(exc.stdout) or "",
            stderr=f"{stderr}\n{notice}" if stderr else notice,
        )


__all__ = [
    "NODE_BIN_DIRECTORY",
    "TIMEOUT_RETURNCODE",
    "CommandOptions",
    "node_bin_directories",
    "resolve_executable",
    "run_command",
]
