# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Workspace project discovery."""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any, Final

from ..constants import IGNORED_DIRECTORIES
from ..core.errors import ReactDoctorError

LOGGER = logging.getLogger(__name__)

PACKAGE_JSON: Final[str] = "package.json"
_DEPENDENCY_SECTIONS: Final[tuple[str, ...]] = ("dependencies", "devDependencies", "peerDependencies")


class ProjectSelectionError(ReactDoctorError):
    """Raised when a requested workspace project does not exist."""


def read_package_json(directory: Path) -> dict[str, Any] | None:
    """Return the parsed ``package.json`` of ``directory`` or ``None``."""

    path = directory / PACKAGE_JSON
    if not path.is_file():
        return None
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        LOGGER.debug("ignoring unreadable %s: %s", path, exc)
        return None
    return data if isinstance(data, dict) else None


def has_dependency(package: Mapping[str, Any], name: str) -> bool:
    """Return ``True`` when ``package`` declares ``name`` in any dependency section."""

    for section in _DEPENDENCY_SECTIONS:
        entries = package.get(section)
        if isinstance(entries, Mapping) and name in entries:
            return True
    return False


def _workspace_patterns(package: Mapping[str, Any]) -> list[str]:
    workspaces = package.get("workspaces")
    if isinstance(workspaces, Mapping):
        workspaces = workspaces.get("packages")
    if not isinstance(workspaces, list):
        return []
    return [pattern for pattern in workspaces if isinstance(pattern, str) and not pattern.startswith("!")]


def _expand_patterns(root: Path, patterns: Iterable[str]) -> list[Path]:
    found: dict[Path, None] = {}
    for pattern in patterns:
        for candidate in sorted(root.glob(pattern.rstrip("/"))):
            if not candidate.is_dir():
                continue
            if any(part in IGNORED_DIRECTORIES for part in candidate.relative_to(root).parts):
                continue
            found[candidate.resolve()] = None
    return list(found)


def _project_name(directory: Path) -> str:
    package = read_package_json(directory) or {}
    name = package.get("name")
    return name if isinstance(name, str) and name else directory.name


def discover_projects(root: Path, requested: str | None = None) -> list[Path]:
    """Return the project directories to scan under ``root``.

    Workspace members come from the ``workspaces`` field of the root
    ``package.json``; only members that depend on React are kept. A root
    without React workspace members is itself the single project.

    Args:
        root: Directory passed on the command line.
        requested: Comma-separated project names (package name or directory name).

    Returns:
        list[Path]: Resolved project directories in discovery order.

    Raises:
        ProjectSelectionError: If ``requested`` names an unknown project.
    """

    root = root.resolve()
    root_package = read_package_json(root) or {}
    members = [
        member
        for member in _expand_patterns(root, _workspace_patterns(root_package))
        if has_dependency(read_package_json(member) or {}, "react")
    ]
    projects = members or [root]
    if not requested:
        return projects

    by_name: dict[str, Path] = {}
    for project in projects:
        by_name.setdefault(_project_name(project), project)
        by_name.setdefault(project.name, project)
    selected: list[Path] = []
    for name in (item.strip() for item in requested.split(",")):
        if not name:
            continue
        if name not in by_name:
            available = ", ".join(sorted({_project_name(project) for project in projects}))
            raise ProjectSelectionError(f"Project '{name}' not found. Available projects: {available}")
        if by_name[name] not in selected:
            selected.append(by_name[name])
    return selected or projects


__all__ = [
    "PACKAGE_JSON",
    "ProjectSelectionError",
    "discover_projects",
    "has_dependency",
    "read_package_json",
]
