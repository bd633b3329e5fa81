# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Temporarily neutralise inline suppression directives during analysis.

Directives such as ``// eslint-disable-next-line`` would let a project hide
findings from the engine. Before the engine runs, each directive marker is
rewritten in place to a same-length token the engine does not recognise
(``eslint-disable`` becomes ``eslint_disable``), so line and column positions
stay valid. The original bytes are held in memory and written back on every
exit path: normal completion, exceptions, and SIGINT/SIGTERM/SIGHUP.
"""

from __future__ import annotations

import atexit
import logging
import os
import re
import signal
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field
from pathlib import Path
from types import FrameType
from typing import Final

from ..constants import IGNORED_DIRECTORIES
from ..core.errors import RestoreError

LOGGER = logging.getLogger(__name__)

SUPPRESSIBLE_EXTENSIONS: Final[frozenset[str]] = frozenset(
    {".js", ".jsx", ".ts", ".tsx", ".mjs", ".cjs", ".mts", ".cts"},
)
_DIRECTIVE_PATTERN: Final[re.Pattern[bytes]] = re.compile(
    rb"(?P<lead>//[ \t]*|/\*[\s*]*)(?P<tool>eslint|oxlint)-(?P<verb>disable)",
)
_DIRECTIVE_HINT: Final[re.Pattern[bytes]] = re.compile(rb"(?:eslint|oxlint)-disable")
_INTERRUPT_SIGNALS: Final[tuple[str, ...]] = ("SIGINT", "SIGTERM", "SIGHUP")


def neutralize_content(content: bytes) -> bytes:
    """Return ``content`` with every suppression directive marker disabled.

    The result always has the same length as ``content``.
    """

    return _DIRECTIVE_PATTERN.sub(rb"\g<lead>\g<tool>_\g<verb>", content)


def iter_candidate_files(root: Path) -> Iterator[Path]:
    """Yield source files under ``root`` that may carry suppression directives."""

    for current, dirnames, filenames in os.walk(root):
        dirnames[:] = sorted(name for name in dirnames if name not in IGNORED_DIRECTORIES)
        for filename in sorted(filenames):
            if os.path.splitext(filename)[1] in SUPPRESSIBLE_EXTENSIONS:
                yield Path(current, filename)


@dataclass(slots=True, eq=False)
class RestoreHandle:
    """Capability restoring the files rewritten by :func:`neutralize_disable_directives`.

    :meth:`restore` is idempotent: files restored once are forgotten, files
    deleted during the scan are reported once and then dropped, and only
    files whose write failed are retried on later calls.
    """

    root: Path
    _originals: dict[Path, bytes] = field(default_factory=dict)
    _lock: threading.RLock = field(default_factory=threading.RLock)

    @property
    def files(self) -> tuple[Path, ...]:
        """Return the files still awaiting restoration."""

        return tuple(self._originals)

    @property
    def pending(self) -> bool:
        """Return ``True`` while any rewritten file has not been restored."""

        return bool(self._originals)

    def record(self, path: Path, original: bytes) -> None:
        """Remember ``original`` as the content to restore for ``path``."""

        with self._lock:
            self._originals.setdefault(path, original)

    def restore(self) -> None:
        """Write every original file content back.

        All files are attempted even when some fail.

        Raises:
            RestoreError: If any file could not be restored; the error lists
                every file left modified or missing.
        """

        with self._lock:
            failed: list[tuple[Path, str]] = []
            for path, original in list(self._originals.items()):
                if not path.exists():
                    failed.append((path, "file no longer exists"))
                    del self._originals[path]
                    continue
                try:
                    path.write_bytes(original)
                except OSError as exc:
                    failed.append((path, exc.strerror or str(exc)))
                    continue
                del self._originals[path]
            if not self._originals:
                atexit.unregister(self._restore_at_exit)
            if failed:
                raise RestoreError(failed)

    def __call__(self) -> None:
        """Alias for :meth:`restore`."""

        self.restore()

    def _restore_at_exit(self) -> None:
        try:
            self.restore()
        except RestoreError as exc:
            LOGGER.error("%s", exc)


def neutralize_disable_directives(root: Path) -> RestoreHandle:
    """Rewrite suppression directives under ``root`` and return a restore handle.

    The handle also registers an interpreter-exit fallback that runs if the
    caller never restores.

    Args:
        root: Project directory whose source files are rewritten.

    Returns:
        RestoreHandle: Handle that restores the exact original bytes.
    """

    handle = RestoreHandle(root=root)
    atexit.register(handle._restore_at_exit)
    try:
        for path in iter_candidate_files(root):
            try:
                original = path.read_bytes()
            except OSError as exc:
                LOGGER.debug("skipping unreadable %s: %s", path, exc)
                continue
            if not _DIRECTIVE_HINT.search(original):
                continue
            rewritten = neutralize_content(original)
            if rewritten == original:
                continue
            handle.record(path, original)
            try:
                path.write_bytes(rewritten)
            except OSError as exc:
                LOGGER.warning("could not neutralize directives in %s: %s", path, exc)
    except BaseException:
        handle.restore()
        raise
    LOGGER.debug("neutralized suppression directives in %d file(s) under %s", len(handle.files), root)
    return handle


def _raise_interrupt(signum: int, _frame: FrameType | None) -> None:
    raise KeyboardInterrupt(f"received signal {signum}")


@contextmanager
def _interrupts_raise() -> Iterator[None]:
    """Turn termination signals into :class:`KeyboardInterrupt` while active.

    Signal handlers can only be installed from the main thread; elsewhere
    this is a no-op.
    """

    if threading.current_thread() is not threading.main_thread():
        yield
        return
    previous: dict[signal.Signals, object] = {}
    for name in _INTERRUPT_SIGNALS:
        signum = getattr(signal, name, None)
        if signum is None:
            continue
        previous[signum] = signal.getsignal(signum)
        signal.signal(signum, _raise_interrupt)
    try:
        yield
    finally:
        for signum, handler in previous.items():
            signal.signal(signum, handler)  # type: ignore[arg-type]


@contextmanager
def neutralized(root: Path) -> Iterator[RestoreHandle]:
    """Neutralise directives under ``root`` for the duration of the block.

    Restoration runs on every exit path. A restore failure raises
    :class:`RestoreError`, chained to any exception raised by the block.

    Args:
        root: Project directory whose source files are rewritten.

    Yields:
        RestoreHandle: Handle bound to the rewritten files.
    """

    with _interrupts_raise():
        handle = neutralize_disable_directives(root)
        try:
            yield handle
        finally:
            handle.restore()


__all__ = [
    "SUPPRESSIBLE_EXTENSIONS",
    "RestoreHandle",
    "iter_candidate_files",
    "neutralize_content",
    "neutralize_disable_directives",
    "neutralized",
]
