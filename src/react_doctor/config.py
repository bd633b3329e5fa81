# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Project configuration loading and CLI precedence resolution."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Final

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .constants import CONFIG_FILENAME, PACKAGE_JSON_CONFIG_KEY
from .core.errors import ConfigError

LOGGER = logging.getLogger(__name__)

PACKAGE_JSON_FILENAME: Final[str] = "package.json"


class ProjectConfig(BaseModel):
    """Settings read from ``react-doctor.config.json`` or ``package.json``."""

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True, strict=True)

    lint: bool = True
    dead_code: bool = Field(default=True, alias="deadCode")
    verbose: bool = False
    diff: bool | str | None = None


class ConfigLoadResult(BaseModel):
    """Container bundling a resolved config with where it came from."""

    model_config = ConfigDict(frozen=True)

    config: ProjectConfig = Field(default_factory=ProjectConfig)
    source: Path | None = None
    warnings: tuple[str, ...] = Field(default_factory=tuple)


class ScanOptions(BaseModel):
    """Effective options for scanning one project."""

    model_config = ConfigDict(frozen=True)

    lint: bool = True
    dead_code: bool = True
    verbose: bool = False
    score_only: bool = False
    offline: bool = False
    include_paths: tuple[str, ...] | None = None


_KNOWN_KEYS: Final[frozenset[str]] = frozenset(
    {key for name, field in ProjectConfig.model_fields.items() for key in (name, field.alias) if key},
)


def _read_json(path: Path) -> Any:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise ConfigError(f"Unable to read {path}: {exc}") from exc
    except ValueError as exc:
        raise ConfigError(f"Invalid JSON in {path}: {exc}") from exc


def _locate(directory: Path) -> tuple[Path, Mapping[str, Any]] | None:
    config_path = directory / CONFIG_FILENAME
    if config_path.is_file():
        payload = _read_json(config_path)
        if not isinstance(payload, Mapping):
            raise ConfigError(f"{config_path} must contain a JSON object")
        return config_path, payload

    package_path = directory / PACKAGE_JSON_FILENAME
    if not package_path.is_file():
        return None
    package = _read_json(package_path)
    if not isinstance(package, Mapping) or PACKAGE_JSON_CONFIG_KEY not in package:
        return None
    section = package[PACKAGE_JSON_CONFIG_KEY]
    if not isinstance(section, Mapping):
        raise ConfigError(f"'{PACKAGE_JSON_CONFIG_KEY}' in {package_path} must be an object")
    return package_path, section


def load_project_config(directory: Path) -> ConfigLoadResult:
    """Load the project configuration for ``directory``.

    ``react-doctor.config.json`` takes priority over the ``reactDoctor`` key
    of ``package.json``. A directory with neither yields the defaults.

    Args:
        directory: Directory passed on the command line.

    Returns:
        ConfigLoadResult: Parsed configuration plus warnings for unknown keys.

    Raises:
        ConfigError: If the file is unreadable, not JSON, or has wrong value types.
    """

    located = _locate(directory)
    if located is None:
        return ConfigLoadResult()
    source, payload = located
    warnings = tuple(f"[{source.name}] Unknown configuration key '{key}'" for key in payload if key not in _KNOWN_KEYS)
    try:
        config = ProjectConfig.model_validate(dict(payload))
    except ValidationError as exc:
        details = "; ".join(f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}" for error in exc.errors())
        raise ConfigError(f"Invalid configuration in {source}: {details}") from exc
    LOGGER.debug("loaded configuration from %s", source)
    return ConfigLoadResult(config=config, source=source, warnings=warnings)


def resolve_scan_options(
    config: ProjectConfig,
    *,
    lint: bool | None = None,
    dead_code: bool | None = None,
    verbose: bool | None = None,
    score_only: bool = False,
    offline: bool = False,
) -> ScanOptions:
    """Merge explicit CLI values over ``config``; ``None`` means "not passed".

    Args:
        config: Loaded project configuration.
        lint: ``--lint/--no-lint`` value.
        dead_code: ``--dead-code/--no-dead-code`` value.
        verbose: ``--verbose/--no-verbose`` value.
        score_only: Whether only the score is printed.
        offline: Whether the scoring service must not be contacted.

    Returns:
        ScanOptions: Effective options.
    """

    return ScanOptions(
        lint=config.lint if lint is None else lint,
        dead_code=config.dead_code if dead_code is None else dead_code,
        verbose=config.verbose if verbose is None else verbose,
        score_only=score_only,
        offline=offline,
    )


def resolve_diff_setting(config: ProjectConfig, *, diff: bool | None, diff_base: str | None) -> bool | str | None:
    """Return the effective ``diff`` setting.

    ``--diff-base`` wins over ``--diff/--no-diff``, which wins over the config
    file. ``None`` means the setting was never given.
    """

    if diff_base:
        return diff_base
    if diff is not None:
        return diff
    return config.diff


__all__ = [
    "ConfigLoadResult",
    "ProjectConfig",
    "ScanOptions",
    "load_project_config",
    "resolve_diff_setting",
    "resolve_scan_options",
]
