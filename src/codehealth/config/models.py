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

"""Configuration models and validation for codehealth.

Pydantic models validate raw TOML payloads; validated models are converted to
frozen dataclasses used at runtime.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, ClassVar, Final

from pydantic import BaseModel, ConfigDict, Field, field_validator

from codehealth.analysis.invoker import DEFAULT_MAX_WORKERS, DEFAULT_TOOL
from codehealth.core.model_types import LogFormat
from codehealth.exceptions import CodeHealthValidationError

if TYPE_CHECKING:
    from pathlib import Path

CONFIG_VERSION: Final[int] = 0
LOG_LEVEL_CHOICES: Final[tuple[str, ...]] = ("debug", "info", "warning", "error")


class ConfigValidationError(CodeHealthValidationError):
    """Raised when configuration data contains invalid values."""


class ConfigReadError(ConfigValidationError):
    """Raised when a configuration file cannot be read from disk."""

    def __init__(self, path: Path, error: Exception) -> None:
        """Initialize the exception with file path and underlying error.

        Args:
            path: The path to the configuration file that could not be read.
            error: The underlying exception that caused the read failure.
        """
        self.path = path
        self.error = error
        super().__init__(f"Unable to read {path}: {error}")


class InvalidConfigFileError(ConfigValidationError):
    """Raised when a configuration file fails validation."""

    def __init__(self, path: Path, error: Exception) -> None:
        """Initialize the exception with configuration file path and validation error.

        Args:
            path: The path to the configuration file that failed validation.
            error: The underlying validation exception.
        """
        self.path = path
        self.error = error
        super().__init__(f"Invalid codehealth configuration in {path}: {error}")


class UnsupportedConfigVersionError(ConfigValidationError):
    """Raised when a configuration file declares an unsupported schema version."""

    def __init__(self, provided: int, expected: int) -> None:
        self.provided = provided
        self.expected = expected
        super().__init__(f"Unsupported config_version {provided}; expected {expected}")


@dataclass(slots=True, frozen=True)
class Settings:
    """Runtime settings for a codehealth session.

    Attributes:
        cli_path: Executable of the code health tool.
        enable_code_lenses: Whether the lens provider produces lenses.
        max_workers: Upper bound on concurrently running analyses.
        log_format: Log output format.
        log_level: Log verbosity name.
    """

    cli_path: str = DEFAULT_TOOL
    enable_code_lenses: bool = True
    max_workers: int = DEFAULT_MAX_WORKERS
    log_format: LogFormat = LogFormat.TEXT
    log_level: str = "info"


class SettingsModel(BaseModel):
    """Pydantic model for validating settings loaded from TOML.

    Attributes:
        config_version: Schema version of the file.
        cli_path: Executable of the code health tool.
        enable_code_lenses: Whether lenses are produced.
        max_workers: Upper bound on concurrently running analyses.
        log_format: Log output format.
        log_level: Log verbosity name.
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(populate_by_name=True, extra="forbid")

    config_version: int = CONFIG_VERSION
    cli_path: str = DEFAULT_TOOL
    enable_code_lenses: bool = Field(default=True, alias="enableCodeLenses")
    max_workers: int = Field(default=DEFAULT_MAX_WORKERS, ge=1)
    log_format: LogFormat = LogFormat.TEXT
    log_level: str = "info"

    @field_validator("config_version")
    @classmethod
    def _check_version(cls, value: int) -> int:
        if value != CONFIG_VERSION:
            raise UnsupportedConfigVersionError(value, CONFIG_VERSION)
        return value

    @field_validator("cli_path", mode="before")
    @classmethod
    def _strip_cli_path(cls, value: object) -> object:
        if isinstance(value, str):
            stripped = value.strip()
            if not stripped:
                msg = "cli_path must not be empty"
                raise ValueError(msg)
            return stripped
        return value

    @field_validator("log_format", mode="before")
    @classmethod
    def _coerce_log_format(cls, value: object) -> object:
        if isinstance(value, str):
            return LogFormat.from_str(value)
        return value

    @field_validator("log_level", mode="before")
    @classmethod
    def _coerce_log_level(cls, value: object) -> object:
        if isinstance(value, str):
            level = value.strip().lower()
            if level not in LOG_LEVEL_CHOICES:
                allowed = ", ".join(LOG_LEVEL_CHOICES)
                msg = f"log_level must be one of: {allowed}"
                raise ValueError(msg)
            return level
        return value


def settings_from_model(model: SettingsModel) -> Settings:
    """Convert a validated model into runtime settings."""
    return Settings(
        cli_path=model.cli_path,
        enable_code_lenses=model.enable_code_lenses,
        max_workers=model.max_workers,
        log_format=model.log_format,
        log_level=model.log_level,
    )


__all__ = [
    "CONFIG_VERSION",
    "ConfigReadError",
    "ConfigValidationError",
    "InvalidConfigFileError",
    "Settings",
    "SettingsModel",
    "UnsupportedConfigVersionError",
    "settings_from_model",
]
