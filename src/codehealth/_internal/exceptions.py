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

"""Common exception hierarchy for codehealth."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path

__all__ = [
    "CodeHealthError",
    "CodeHealthValidationError",
    "ProcessExecutionError",
    "ProcessSpawnError",
    "UnsupportedDocumentError",
]


class CodeHealthError(Exception):
    """Base error for all codehealth exceptions."""


class CodeHealthValidationError(CodeHealthError, ValueError):
    """Raised when input data fails validation checks."""


class ProcessSpawnError(CodeHealthError):
    """Raised when the analysis tool cannot be started or fed its input."""

    def __init__(self, executable: str, reason: str) -> None:
        """Initialise the error with the executable and failure reason.

        Args:
            executable: Program that could not be launched.
            reason: Human-readable description of the failure.
        """
        self.executable = executable
        self.reason = reason
        super().__init__(f"Unable to run {executable}: {reason}")


class ProcessExecutionError(CodeHealthError):
    """Raised when the analysis tool exits with a non-zero status."""

    def __init__(self, command: Sequence[str], exit_code: int, stderr: str = "") -> None:
        """Initialise the error with the failed command and its captured output.

        Args:
            command: Argument vector that was executed.
            exit_code: Exit status reported by the process.
            stderr: Captured standard error, if any.
        """
        self.command = list(command)
        self.exit_code = exit_code
        self.stderr = stderr
        detail = stderr.strip()
        message = f"{' '.join(self.command)} exited with status {exit_code}"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


class UnsupportedDocumentError(CodeHealthError):
    """Raised when a document cannot be analysed (e.g. it has no file extension)."""

    def __init__(self, path: str | Path) -> None:
        """Initialise the error with the offending document path.

        Args:
            path: Path of the document that cannot be analysed.
        """
        self.path = str(path)
        super().__init__(f"Cannot determine the file type of {self.path}")
