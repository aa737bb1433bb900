# Copyright 2025 CrownOps Engineering
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Settings discovery and loading for codehealth.

Settings are read from the first of ``codehealth.toml``, ``.codehealth.toml``
or a ``[tool.codehealth]`` table in ``pyproject.toml`` found while walking up
from a start directory. Standalone files may use a top-level table or the
same ``[tool.codehealth]`` nesting. Environment variables override file
values.
"""

from __future__ import annotations

import logging
import os
import tomllib
from dataclasses import dataclass, replace
from pathlib import Path
from typing import TYPE_CHECKING, Final, cast

from pydantic import ValidationError

from codehealth._internal.logging_utils import structured_extra
from codehealth.core.model_types import LogComponent

from .models import (
    ConfigReadError,
    InvalidConfigFileError,
    Settings,
    SettingsModel,
    settings_from_model,
)

if TYPE_CHECKING:
    from collections.abc import Mapping

logger: logging.Logger = logging.getLogger("codehealth.config")

CONFIG_FILENAMES: Final[tuple[str, ...]] = ("codehealth.toml", ".codehealth.toml", "pyproject.toml")
CLI_PATH_ENV: Final[str] = "CODEHEALTH_CLI_PATH"
ENABLE_CODE_LENSES_ENV: Final[str] = "CODEHEALTH_ENABLE_CODE_LENSES"
_TRUTHY: Final[frozenset[str]] = frozenset({"1", "true", "yes", "on"})
_FALSY: Final[frozenset[str]] = frozenset({"0", "false", "no", "off"})


@dataclass(slots=True, frozen=True)
class LoadedSettings:
    """Container for loaded settings and their source path.

    Attributes:
        settings: Parsed settings instance.
        path: File the settings were loaded from, or None when defaults are used.
    """

    settings: Settings
    path: Path | None


def load_settings(start: Path | None = None, explicit_path: Path | None = None) -> LoadedSettings:
    """Load codehealth settings from disk and the environment.

    Args:
        start: Directory the upward search begins in (defaults to the CWD).
        explicit_path: Configuration file to load instead of searching.

    Returns:
        LoadedSettings: Effective settings and the file they came from.

    Raises:
        ConfigReadError: If a configuration file cannot be read or parsed.
        InvalidConfigFileError: If a configuration file fails validation.
    """
    if explicit_path is not None:
        loaded = _load_candidate(explicit_path, explicit=True)
    else:
        loaded = None
        for candidate in _search_order(start or Path.cwd()):
            loaded = _load_candidate(candidate, explicit=False)
            if loaded is not None:
                break
    if loaded is None:
        loaded = LoadedSettings(settings=Settings(), path=None)
    settings = apply_environment(loaded.settings)
    logger.debug(
        "Loaded settings from %s",
        loaded.path or "defaults",
        extra=structured_extra(LogComponent.CONFIG, path=loaded.path),
    )
    return LoadedSettings(settings=settings, path=loaded.path)


def apply_environment(settings: Settings, environ: Mapping[str, str] | None = None) -> Settings:
    """Return ``settings`` with environment overrides applied.

    Args:
        settings: Settings loaded from file or defaults.
        environ: Environment mapping (defaults to ``os.environ``).

    Returns:
        Settings: Updated settings.
    """
    env = os.environ if environ is None else environ
    cli_path = env.get(CLI_PATH_ENV, "").strip()
    if cli_path:
        settings = replace(settings, cli_path=cli_path)
    lenses = env.get(ENABLE_CODE_LENSES_ENV, "").strip().lower()
    if lenses in _TRUTHY:
        settings = replace(settings, enable_code_lenses=True)
    elif lenses in _FALSY:
        settings = replace(settings, enable_code_lenses=False)
    return settings


def _search_order(start: Path) -> list[Path]:
    directory = start.resolve()
    if directory.is_file():
        directory = directory.parent
    candidates: list[Path] = []
    for folder in (directory, *directory.parents):
        candidates.extend(folder / name for name in CONFIG_FILENAMES)
    return candidates


def _load_candidate(candidate: Path, *, explicit: bool) -> LoadedSettings | None:
    if not candidate.is_file():
        if explicit:
            raise ConfigReadError(candidate, FileNotFoundError(str(candidate)))
        return None
    try:
        raw_map: dict[str, object] = tomllib.loads(candidate.read_text(encoding="utf-8"))
    except (OSError, tomllib.TOMLDecodeError) as exc:
        raise ConfigReadError(candidate, exc) from exc

    payload = _extract_payload(candidate, raw_map)
    if payload is None:
        if explicit:
            message = f"{candidate.name} does not define a [tool.codehealth] table"
            raise InvalidConfigFileError(candidate, ValueError(message))
        return None
    try:
        model = SettingsModel.model_validate(payload)
    except ValidationError as exc:
        raise InvalidConfigFileError(candidate, exc) from exc
    return LoadedSettings(settings=settings_from_model(model), path=candidate.resolve())


def _extract_payload(candidate: Path, raw_map: dict[str, object]) -> dict[str, object] | None:
    """Extract the codehealth table from a parsed TOML document.

    Args:
        candidate: Source configuration path.
        raw_map: Data parsed from the TOML document.

    Returns:
        Mapping to validate, or None when ``pyproject.toml`` has no codehealth table.

    Raises:
        InvalidConfigFileError: If ``[tool.codehealth]`` exists but is not a table.
    """
    tool_section = raw_map.get("tool")
    is_pyproject = candidate.name == "pyproject.toml"
    if isinstance(tool_section, dict):
        section = cast("dict[str, object]", tool_section).get("codehealth")
        if section is not None and not isinstance(section, dict):
            message = "[tool.codehealth] must be a TOML table"
            raise InvalidConfigFileError(candidate, ValueError(message))
        if isinstance(section, dict):
            return cast("dict[str, object]", section)
    if is_pyproject:
        return None
    return {key: value for key, value in raw_map.items() if key != "tool"}


__all__ = [
    "CLI_PATH_ENV",
    "CONFIG_FILENAMES",
    "ENABLE_CODE_LENSES_ENV",
    "LoadedSettings",
    "apply_environment",
    "load_settings",
]
