# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Project detection and generated analysis-engine configuration."""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
from pathlib import Path
from types import MappingProxyType
from typing import Any, Final

from pydantic import BaseModel, ConfigDict

from ..constants import IGNORED_DIRECTORIES
from ..diagnostics.catalog import REACT_COMPILER_PLUGIN
from ..discovery.projects import has_dependency, read_package_json

TSCONFIG_FILENAME: Final[str] = "tsconfig.json"
REACT_COMPILER_PACKAGES: Final[tuple[str, ...]] = (
    "babel-plugin-react-compiler",
    "react-compiler-runtime",
)
REACT_HOOKS_PACKAGE: Final[str] = "eslint-plugin-react-hooks"


class Framework(str, Enum):
    """Frameworks that change which rules apply."""

    NEXTJS = "nextjs"
    REMIX = "remix"
    GATSBY = "gatsby"
    VITE = "vite"
    CRA = "cra"
    UNKNOWN = "unknown"


_FRAMEWORK_MARKERS: Final[tuple[tuple[str, Framework], ...]] = (
    ("next", Framework.NEXTJS),
    ("@remix-run/react", Framework.REMIX),
    ("gatsby", Framework.GATSBY),
    ("vite", Framework.VITE),
    ("react-scripts", Framework.CRA),
)

BASE_PLUGINS: Final[tuple[str, ...]] = ("react", "jsx-a11y", "react-perf")

BASE_RULES: Final[Mapping[str, str]] = MappingProxyType(
    {
        "react/jsx-key": "error",
        "react/jsx-no-duplicate-props": "error",
        "react/no-children-prop": "error",
        "react/no-danger-with-children": "error",
        "react/no-direct-mutation-state": "error",
        "react/no-string-refs": "error",
        "react/void-dom-elements-no-children": "error",
        "react/jsx-no-useless-fragment": "warn",
        "react/no-unknown-property": "warn",
        "react/no-danger": "warn",
        "react-hooks/rules-of-hooks": "error",
        "react-hooks/exhaustive-deps": "warn",
        "jsx-a11y/alt-text": "warn",
        "jsx-a11y/anchor-is-valid": "warn",
        "jsx-a11y/click-events-have-key-events": "warn",
        "jsx-a11y/heading-has-content": "warn",
        "jsx-a11y/no-autofocus": "warn",
        "react-perf/jsx-no-new-object-as-prop": "warn",
        "react-perf/jsx-no-new-array-as-prop": "warn",
        "react-perf/jsx-no-jsx-as-prop": "warn",
    },
)

NEXTJS_RULES: Final[Mapping[str, str]] = MappingProxyType(
    {
        "nextjs/no-img-element": "warn",
        "nextjs/no-html-link-for-pages": "warn",
        "nextjs/no-sync-scripts": "warn",
        "nextjs/no-head-element": "warn",
        "nextjs/no-async-client-component": "error",
    },
)


class ProjectInfo(BaseModel):
    """Facts about a project that shape the generated engine configuration."""

    model_config = ConfigDict(frozen=True)

    directory: Path
    name: str
    framework: Framework = Framework.UNKNOWN
    has_typescript: bool = False
    has_react_compiler: bool = False
    react_version: str | None = None


def detect_framework(package: Mapping[str, Any]) -> Framework:
    """Return the framework declared by ``package`` dependencies."""

    for dependency, framework in _FRAMEWORK_MARKERS:
        if has_dependency(package, dependency):
            return framework
    return Framework.UNKNOWN


def _react_version(package: Mapping[str, Any]) -> str | None:
    for section in ("dependencies", "peerDependencies", "devDependencies"):
        entries = package.get(section)
        if isinstance(entries, Mapping) and isinstance(entries.get("react"), str):
            return str(entries["react"])
    return None


def detect_project(directory: Path) -> ProjectInfo:
    """Inspect ``directory`` and return its :class:`ProjectInfo`."""

    package = read_package_json(directory) or {}
    name = package.get("name")
    return ProjectInfo(
        directory=directory,
        name=name if isinstance(name, str) and name else directory.name,
        framework=detect_framework(package),
        has_typescript=(directory / TSCONFIG_FILENAME).is_file(),
        has_react_compiler=any(has_dependency(package, dep) for dep in REACT_COMPILER_PACKAGES),
        react_version=_react_version(package),
    )


def build_engine_config(project: ProjectInfo, *, plugin_path: Path | None = None) -> dict[str, Any]:
    """Return the engine configuration document for ``project``.

    Args:
        project: Detected project facts.
        plugin_path: Optional path to an additional JavaScript rules plugin.

    Returns:
        dict[str, Any]: JSON-serialisable configuration.
    """

    plugins = list(BASE_PLUGINS)
    rules: dict[str, str] = dict(BASE_RULES)
    js_plugins: list[object] = []
    if project.framework is Framework.NEXTJS:
        plugins.append("nextjs")
        rules.update(NEXTJS_RULES)
    if project.has_react_compiler:
        js_plugins.append({"name": REACT_COMPILER_PLUGIN, "specifier": REACT_HOOKS_PACKAGE})
        rules[f"{REACT_COMPILER_PLUGIN}/react-compiler"] = "error"
    if plugin_path is not None:
        js_plugins.append(str(plugin_path))

    config: dict[str, Any] = {
        "plugins": plugins,
        "rules": rules,
        "ignorePatterns": sorted(f"**/{name}/**" for name in IGNORED_DIRECTORIES),
    }
    if js_plugins:
        config["jsPlugins"] = js_plugins
    return config


__all__ = [
    "BASE_PLUGINS",
    "BASE_RULES",
    "NEXTJS_RULES",
    "Framework",
    "ProjectInfo",
    "build_engine_config",
    "detect_framework",
    "detect_project",
]
