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

"""Core data classes for analysis diagnostics.

These immutable records are produced by the report parser and shared
read-only by every consumer holding the computation that produced them.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Final

from codehealth.exceptions import CodeHealthValidationError

if TYPE_CHECKING:
    from codehealth.compat import Self

    from .model_types import SeverityLevel
    from .type_aliases import IssueCode

DIAGNOSTIC_SOURCE: Final[str] = "CodeScene"


@dataclass(slots=True, frozen=True)
class Range:
    """Zero-based source span with an exclusive end column.

    Attributes:
        start_line: First line of the span (0-indexed).
        start_column: Column where the span starts (0-indexed).
        end_line: Last line of the span (0-indexed).
        end_column: Column where the span ends (exclusive).
    """

    start_line: int
    start_column: int
    end_line: int
    end_column: int

    def __post_init__(self) -> None:
        """Reject negative coordinates and spans that end before they start.

        Raises:
            CodeHealthValidationError: If the coordinates do not form a span.
        """
        if min(self.start_line, self.start_column, self.end_line, self.end_column) < 0:
            msg = f"Range coordinates must be non-negative: {self.as_tuple()}"
            raise CodeHealthValidationError(msg)
        if (self.end_line, self.end_column) < (self.start_line, self.start_column):
            msg = f"Range ends before it starts: {self.as_tuple()}"
            raise CodeHealthValidationError(msg)

    @classmethod
    def empty(cls, line: int = 0, column: int = 0) -> Self:
        """Return a zero-width range anchored at ``line``/``column``."""
        return cls(line, column, line, column)

    @classmethod
    def on_line(cls, line: int, start_column: int, end_column: int) -> Self:
        """Return a single-line range."""
        return cls(line, start_column, line, end_column)

    @property
    def is_empty(self) -> bool:
        """Whether the range covers no characters."""
        return (self.start_line, self.start_column) == (self.end_line, self.end_column)

    def as_tuple(self) -> tuple[int, int, int, int]:
        """Return ``(start_line, start_column, end_line, end_column)``."""
        return (self.start_line, self.start_column, self.end_line, self.end_column)


@dataclass(slots=True, frozen=True)
class Diagnostic:
    """Immutable record describing one finding or summary fact.

    Attributes:
        range: Source span the diagnostic is anchored to.
        severity: Severity level mapped from the tool's token.
        message: Human-readable message.
        issue_code: Optional issue identifier (e.g. ``complex-fn``) that the
            presentation layer can resolve to documentation.
        source: Name of the producing tool.
    """

    range: Range
    severity: SeverityLevel
    message: str
    issue_code: IssueCode | None = None
    source: str = DIAGNOSTIC_SOURCE

    def to_payload(self) -> dict[str, object]:
        """Return a JSON-ready mapping of the diagnostic."""
        return {
            "range": {
                "start": {"line": self.range.start_line, "character": self.range.start_column},
                "end": {"line": self.range.end_line, "character": self.range.end_column},
            },
            "severity": self.severity.value,
            "message": self.message,
            "code": self.issue_code,
            "source": self.source,
        }


__all__ = ["DIAGNOSTIC_SOURCE", "Diagnostic", "Range"]
