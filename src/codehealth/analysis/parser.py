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

"""Parse the analysis tool's textual report into diagnostics.

The tool prints one record per line. Two shapes are recognised and tried in
this order:

- the summary header ``info: <path>:1: Code health score: <score>``
- a finding ``<severity>: <path>:<line>:<function>:<issue-code> <message>``

Records are searched for anywhere in a line, so prefixed output such as
``[cs] warning: ...`` still parses. Every other line (blank lines, banners,
stray output) is ignored. A finding's message is everything after the
issue-code token, so it may contain colons and spaces. The function token
may contain colons (``Foo::bar``); the issue code may not, which is what
separates the two.
"""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING, Final

from codehealth._internal.logging_utils import structured_extra
from codehealth.analysis.ranges import resolve_function_range
from codehealth.core.model_types import LogComponent, SeverityLevel
from codehealth.core.type_aliases import IssueCode
from codehealth.core.types import Diagnostic, Range

if TYPE_CHECKING:
    from codehealth.document import DocumentView

logger: logging.Logger = logging.getLogger("codehealth.parser")

_SUMMARY_LINE: Final[re.Pattern[str]] = re.compile(
    r"info: (?P<path>.+):1: Code health score: (?P<score>.+)$",
)
_FINDING_LINE: Final[re.Pattern[str]] = re.compile(
    r"(?P<severity>\w+): (?P<path>.+?):(?P<line>\d+):"
    r"(?P<function>\S+):(?P<code>[^\s:]+)\s+(?P<message>\S.*)$",
)


def map_severity(token: str) -> SeverityLevel:
    """Map a severity token onto a SeverityLevel; unknown tokens become ERROR."""
    return SeverityLevel.from_token(token)


def summary_diagnostic(score: str) -> Diagnostic:
    """Build the zero-width diagnostic carrying the aggregate health score."""
    return Diagnostic(
        range=Range.empty(),
        severity=SeverityLevel.INFORMATION,
        message=f"Code health score: {score.strip()}",
    )


def parse_line(line: str, document: DocumentView) -> Diagnostic | None:
    """Turn one report line into a diagnostic.

    Args:
        line: A single line of the tool's output.
        document: View of the analysed document, used to resolve the column
            span of the reported function.

    Returns:
        The diagnostic described by the line, or ``None`` when the line is not
        a recognised record or points outside the document.
    """
    text = line.rstrip("\r\n")
    summary = _SUMMARY_LINE.search(text)
    if summary:
        return summary_diagnostic(summary.group("score"))

    finding = _FINDING_LINE.search(text)
    if not finding:
        return None

    line_index = int(finding.group("line")) - 1
    if line_index < 0 or line_index >= document.line_count:
        logger.debug(
            "Skipping finding on line %s outside the document (%s lines)",
            line_index + 1,
            document.line_count,
            extra=structured_extra(
                LogComponent.PARSER,
                details={"line": line_index + 1, "line_count": document.line_count},
            ),
        )
        return None

    start_column, end_column = resolve_function_range(
        document.line_text(line_index),
        finding.group("function"),
    )
    return Diagnostic(
        range=Range.on_line(line_index, start_column, end_column),
        severity=map_severity(finding.group("severity")),
        message=finding.group("message").strip(),
        issue_code=IssueCode(finding.group("code")),
    )


def parse_report(output: str, document: DocumentView) -> list[Diagnostic]:
    """Parse every line of the tool's output, keeping output order.

    Args:
        output: Captured standard output of the tool.
        document: View of the analysed document.

    Returns:
        Diagnostics for all recognised lines; unrecognised lines are dropped.
    """
    diagnostics: list[Diagnostic] = []
    for line in output.split("\n"):
        diagnostic = parse_line(line, document)
        if diagnostic is not None:
            diagnostics.append(diagnostic)
    return diagnostics


__all__ = ["map_severity", "parse_line", "parse_report", "summary_diagnostic"]
