# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for suppression directive neutralisation and restoration."""

from __future__ import annotations

import atexit
from pathlib import Path

import pytest

from react_doctor.analysis.suppression import (
    iter_candidate_files,
    neutralize_content,
    neutralize_disable_directives,
    neutralized,
)
from react_doctor.core.errors import RestoreError

COMPONENT = (
    b"// eslint-disable-next-line react/jsx-key\n"
    b"export const List = () => items.map((item) => <li>{item}</li>);\n"
    b"/* eslint-disable react-hooks/exhaustive-deps */\n"
    b"/* oxlint-disable */\n"
    b"const note = 'eslint-disable in a string stays';\n"
)


def _write_project(root: Path) -> dict[Path, bytes]:
    files = {
        root / "src" / "List.tsx": COMPONENT,
        root / "src" / "util.ts": b"// oxlint-disable-line no-console\nconsole.log(1);\r\n",
        root / "src" / "clean.tsx": b"export const Clean = () => null;\n",
        root / "node_modules" / "lib" / "index.js": b"// eslint-disable\n",
        root / "README.md": b"// eslint-disable\n",
    }
    for path, content in files.items():
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(content)
    return files


def test_neutralize_content_keeps_length_and_disables_directives() -> None:
    rewritten = neutralize_content(COMPONENT)

    assert len(rewritten) == len(COMPONENT)
    assert b"// eslint_disable-next-line react/jsx-key" in rewritten
    assert b"/* eslint_disable react-hooks/exhaustive-deps */" in rewritten
    assert b"/* oxlint_disable */" in rewritten
    assert b"'eslint-disable in a string stays'" in rewritten


@pytest.mark.parametrize(
    "source",
    [
        b"/*\n  eslint-disable react/jsx-key\n*/\nconst a = 1;\n",
        b"/**\n * oxlint-disable no-console\n */\n",
        b"/*\r\n\teslint-disable-next-line\r\n*/ x();\r\n",
    ],
)
def test_neutralize_content_handles_block_directive_on_following_line(source: bytes) -> None:
    rewritten = neutralize_content(source)

    assert len(rewritten) == len(source)
    assert b"eslint-disable" not in rewritten
    assert b"oxlint-disable" not in rewritten


def test_neutralize_content_leaves_line_comment_followed_by_code() -> None:
    source = b"// note\nconst flag = \"eslint-disable\";\n"

    assert neutralize_content(source) == source


def test_iter_candidate_files_skips_ignored_directories(tmp_path: Path) -> None:
    _write_project(tmp_path)

    found = {path.relative_to(tmp_path).as_posix() for path in iter_candidate_files(tmp_path)}

    assert found == {"src/List.tsx", "src/util.ts", "src/clean.tsx"}


def test_neutralized_restores_exact_bytes(tmp_path: Path) -> None:
    files = _write_project(tmp_path)

    with neutralized(tmp_path) as handle:
        assert set(handle.files) == {tmp_path / "src" / "List.tsx", tmp_path / "src" / "util.ts"}
        assert b"eslint_disable" in (tmp_path / "src" / "List.tsx").read_bytes()
        assert (tmp_path / "node_modules" / "lib" / "index.js").read_bytes() == b"// eslint-disable\n"

    for path, content in files.items():
        assert path.read_bytes() == content
    assert not handle.pending


def test_neutralized_restores_when_block_raises(tmp_path: Path) -> None:
    files = _write_project(tmp_path)

    with pytest.raises(RuntimeError, match="engine crashed"):
        with neutralized(tmp_path):
            raise RuntimeError("engine crashed")

    for path, content in files.items():
        assert path.read_bytes() == content


def test_neutralized_restores_on_keyboard_interrupt(tmp_path: Path) -> None:
    files = _write_project(tmp_path)

    with pytest.raises(KeyboardInterrupt):
        with neutralized(tmp_path):
            raise KeyboardInterrupt

    for path, content in files.items():
        assert path.read_bytes() == content


def test_restore_reports_deleted_file_and_restores_the_rest(tmp_path: Path) -> None:
    files = _write_project(tmp_path)
    deleted = tmp_path / "src" / "util.ts"

    handle = neutralize_disable_directives(tmp_path)
    deleted.unlink()
    with pytest.raises(RestoreError) as excinfo:
        handle.restore()

    assert excinfo.value.paths == (deleted,)
    assert (tmp_path / "src" / "List.tsx").read_bytes() == files[tmp_path / "src" / "List.tsx"]
    assert not handle.pending


def test_restore_is_idempotent(tmp_path: Path) -> None:
    files = _write_project(tmp_path)
    target = tmp_path / "src" / "List.tsx"

    handle = neutralize_disable_directives(tmp_path)
    handle.restore()
    target.write_bytes(b"edited after restore\n")
    handle()

    assert target.read_bytes() == b"edited after restore\n"
    assert (tmp_path / "src" / "util.ts").read_bytes() == files[tmp_path / "src" / "util.ts"]


def test_unrestored_handle_is_registered_for_interpreter_exit(tmp_path: Path, monkeypatch) -> None:
    registered = []
    monkeypatch.setattr(atexit, "register", registered.append)
    monkeypatch.setattr(atexit, "unregister", lambda func: registered.remove(func))
    files = _write_project(tmp_path)

    handle = neutralize_disable_directives(tmp_path)
    assert len(registered) == 1

    registered[0]()

    assert registered == []
    assert not handle.pending
    for path, content in files.items():
        assert path.read_bytes() == content


def test_project_without_directives_is_untouched(tmp_path: Path) -> None:
    clean = tmp_path / "App.jsx"
    clean.write_bytes(b"export default () => <main />;\n")

    with neutralized(tmp_path) as handle:
        assert handle.files == ()

    assert clean.read_bytes() == b"export default () => <main />;\n"
