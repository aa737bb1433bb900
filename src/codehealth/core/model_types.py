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

"""Model types and enumerations for codehealth.

This module defines the enumerations shared by the analysis pipeline, the
presentation layer and the logging stack:

- Severity levels reported by the analysis tool
- Log formats and loggable components
- Output formats for the command-line interface
"""

from __future__ import annotations

from enum import StrEnum
from typing import Final


class SeverityLevel(StrEnum):
    """Enumeration of diagnostic severity levels.

    Attributes:
        ERROR: Findings that demand action.
        WARNING: Findings that should be addressed.
        INFORMATION: Informational diagnostics such as the health score.
    """

    ERROR = "error"
    WARNING = "warning"
    INFORMATION = "information"

    @classmethod
    def from_str(cls, raw: str) -> SeverityLevel:
        """Create a SeverityLevel enum from its serialised value.

        Args:
            raw: String representation of the severity level.

        Returns:
            SeverityLevel enum value.

        Raises:
            ValueError: If the string does not match any SeverityLevel value.
        """
        value = raw.strip().lower()
        try:
            return cls(value)
        except ValueError as exc:
            msg = f"Unknown severity '{raw}'"
            raise ValueError(msg) from exc

    @classmethod
    def from_token(cls, token: object) -> SeverityLevel:
        """Map a severity token from the tool's report onto a SeverityLevel.

        The mapping is total. Tokens other than ``info``, ``warning`` and
        ``error`` resolve to ERROR so an unexpected level is never downgraded
        to a non-actionable one.

        Args:
            token: Severity token exactly as printed by the tool.

        Returns:
            SeverityLevel enum value, defaulting to ERROR.
        """
        if isinstance(token, str):
            mapped = _TOKEN_SEVERITIES.get(token)
            if mapped is not None:
                return mapped
        return cls.ERROR


_TOKEN_SEVERITIES: Final[dict[str, SeverityLevel]] = {
    "info": SeverityLevel.INFORMATION,
    "warning": SeverityLevel.WARNING,
    "error": SeverityLevel.ERROR,
}


class LogFormat(StrEnum):
    """Enumeration of log output formats.

    Attributes:
        TEXT: Human-readable text format.
        JSON: Machine-readable JSON format.
    """

    TEXT = "text"
    JSON = "json"

    @classmethod
    def from_str(cls, raw: str) -> LogFormat:
        """Create a LogFormat enum from a string value.

        Args:
            raw: String representation of the log format.

        Returns:
            LogFormat enum value.

        Raises:
            ValueError: If the string does not match any LogFormat value.
        """
        value = raw.strip().lower()
        try:
            return cls(value)
        except ValueError as exc:
            msg = f"Unknown log format '{raw}'"
            raise ValueError(msg) from exc


class LogComponent(StrEnum):
    """Enumeration of loggable system components.

    Attributes:
        ENGINE: Analysis invocation (process spawn and exit).
        CACHE: Per-document diagnostic cache.
        PARSER: Report line parsing.
        LENS: Presentation projection.
        CLI: Command-line interface component.
        CONFIG: Settings discovery and validation.
        SERVICES: Shared helpers such as the process wrapper.
    """

    ENGINE = "engine"
    CACHE = "cache"
    PARSER = "parser"
    LENS = "lens"
    CLI = "cli"
    CONFIG = "config"
    SERVICES = "services"


class OutputFormat(StrEnum):
    """Enumeration of diagnostic output formats for the CLI.

    Attributes:
        TEXT: One compiler-style line per diagnostic.
        JSON: A JSON array of diagnostic payloads.
    """

    TEXT = "text"
    JSON = "json"

    @classmethod
    def from_str(cls, raw: str) -> OutputFormat:
        """Create an OutputFormat enum from a string value.

        Args:
            raw: String representation of the output format.

        Returns:
            OutputFormat enum value.

        Raises:
            ValueError: If the string does not match any OutputFormat value.
        """
        value = raw.strip().lower()
        try:
            return cls(value)
        except ValueError as exc:
            msg = f"Unknown output format '{raw}'"
            raise ValueError(msg) from exc


__all__ = ["LogComponent", "LogFormat", "OutputFormat", "SeverityLevel"]
