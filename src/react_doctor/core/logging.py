# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""User-facing logging helpers with optional colour and emoji support."""

from __future__ import annotations

import sys
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Literal

from rich.console import Console, RenderableType
from rich.text import Text


def detect_tty() -> bool:
    """Return ``True`` when stdout appears to be backed by a terminal.

    Returns:
        bool: ``True`` when ``sys.stdout`` reports TTY support, ``False`` otherwise.
    """

    try:
        return sys.stdout.isatty()
    except (AttributeError, ValueError):
        return False


@lru_cache(maxsize=8)
def get_console(*, color: bool, emoji: bool) -> Console:
    """Return a cached Rich console configured for ``color`` and ``emoji``.

    Args:
        color: ``True`` when ANSI colour output should be enabled.
        emoji: ``True`` when Rich should render emoji glyphs.

    Returns:
        Console: Console matching the presentation flags.
    """

    tty = detect_tty()
    color_system: Literal["auto"] | None = "auto" if color and tty else None
    return Console(
        color_system=color_system,
        force_terminal=tty,
        no_color=not (color and tty),
        emoji=emoji,
        soft_wrap=True,
        highlight=False,
    )


def emoji(symbol: str, enable: bool) -> str:
    """Return *symbol* when emoji output is enabled, otherwise blank."""

    return symbol if enable else ""


def _print_line(console: Console, msg: str, *, style: str | None) -> None:
    text = Text(msg)
    if style:
        text.stylize(style)
    console.print(text)


@dataclass(slots=True)
class CLILogger:
    """Adapter around the console honouring emoji, quiet and debug settings.

    ``quiet`` is used by score-only runs: every helper becomes a no-op except
    :meth:`echo`, which writes machine-readable output.
    """

    console: Console = field(default_factory=lambda: get_console(color=True, emoji=True))
    use_emoji: bool = True
    quiet: bool = False
    debug_enabled: bool = False

    def info(self, message: str) -> None:
        """Emit an informational message."""

        if not self.quiet:
            _print_line(self.console, message, style="cyan")

    def ok(self, message: str) -> None:
        """Emit a success message."""

        if not self.quiet:
            _print_line(self.console, f"{emoji('✅ ', self.use_emoji)}{message}", style="green")

    def warn(self, message: str) -> None:
        """Emit a warning message."""

        if not self.quiet:
            _print_line(self.console, f"{emoji('⚠️ ', self.use_emoji)}{message}", style="yellow")

    def fail(self, message: str) -> None:
        """Emit an error message.

        Failures are shown even in quiet mode; they go to the same console so
        score-only consumers still see why no score was produced.
        """

        _print_line(self.console, f"{emoji('❌ ', self.use_emoji)}{message}", style="red")

    def dim(self, message: str) -> None:
        """Emit a low-emphasis message."""

        if not self.quiet:
            _print_line(self.console, message, style="dim")

    def log(self, message: str) -> None:
        """Emit an unstyled message."""

        if not self.quiet:
            _print_line(self.console, message, style=None)

    def blank(self) -> None:
        """Emit an empty line."""

        if not self.quiet:
            self.console.print()

    def render(self, renderable: RenderableType) -> None:
        """Print a Rich renderable such as a panel."""

        if not self.quiet:
            self.console.print(renderable)

    def echo(self, message: str) -> None:
        """Write ``message`` regardless of quiet mode."""

        self.console.print(Text(message))

    def debug(self, message: str) -> None:
        """Emit a debug message when debug logging is enabled."""

        if self.debug_enabled:
            text = Text("[debug] ", style="bold cyan")
            text.append(message, style="dim")
            self.console.print(text)


def build_cli_logger(
    *,
    emoji: bool = True,
    quiet: bool = False,
    debug: bool = False,
    no_color: bool = False,
) -> CLILogger:
    """Return a :class:`CLILogger` bound to a shared Rich console.

    Args:
        emoji: Whether log output may include emoji glyphs.
        quiet: Whether only machine-readable output should be written.
        debug: Whether debug logging should be enabled.
        no_color: Whether terminal colour output should be disabled.

    Returns:
        CLILogger: Logger instance bound to a cached Rich console.
    """

    console = get_console(color=not no_color, emoji=emoji)
    return CLILogger(console=console, use_emoji=emoji, quiet=quiet, debug_enabled=debug)


__all__ = ["CLILogger", "build_cli_logger", "detect_tty", "emoji", "get_console"]
