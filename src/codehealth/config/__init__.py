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

"""Configuration models and loaders for codehealth."""

from __future__ import annotations

from .loader import (
    CLI_PATH_ENV,
    CONFIG_FILENAMES,
    ENABLE_CODE_LENSES_ENV,
    LoadedSettings,
    apply_environment,
    load_settings,
)
from .models import (
    CONFIG_VERSION,
    ConfigReadError,
    ConfigValidationError,
    InvalidConfigFileError,
    Settings,
    SettingsModel,
    UnsupportedConfigVersionError,
    settings_from_model,
)

__all__ = [
    "CLI_PATH_ENV",
    "CONFIG_FILENAMES",
    "CONFIG_VERSION",
    "ENABLE_CODE_LENSES_ENV",
    "ConfigReadError",
    "ConfigValidationError",
    "InvalidConfigFileError",
    "LoadedSettings",
    "Settings",
    "SettingsModel",
    "UnsupportedConfigVersionError",
    "apply_environment",
    "load_settings",
    "settings_from_model",
]
