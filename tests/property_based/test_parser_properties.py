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

"""Property-based tests for the report parser and range resolution."""

from __future__ import annotations

from pathlib import Path

import pytest
from hypothesis import given

from codehealth.analysis.parser import parse_line, parse_report
from codehealth.analysis.ranges import resolve_function_range
from codehealth.core.model_types import SeverityLevel
from codehealth.document import DocumentSnapshot
from tests.property_based.strategies import function_names, report_lines, severity_tokens, source_lines

pytestmark = pytest.mark.property

DOCUMENT = DocumentSnapshot(
    Path("/work/src/app.ts"),
    1,
    "\n".join(f"function fn{index}(a, b) {{" for index in range(10)),
)


@given(severity_tokens())
def test_severity_mapping_is_total(token: str) -> None:
    severity = SeverityLevel.from_token(token)
    assert isinstance(severity, SeverityLevel)
    if token not in {"info", "warning"}:
        assert severity is SeverityLevel.ERROR


@given(report_lines())
def test_parse_line_is_pure_and_never_raises(line: str) -> None:
    first = parse_line(line, DOCUMENT)
    second = parse_line(line, DOCUMENT)
    assert first == second
    if first is not None:
        assert 0 <= first.range.start_line < DOCUMENT.line_count


@given(report_lines())
def test_crlf_does_not_change_parsing(line: str) -> None:
    assert parse_report(line + "\r\n", DOCUMENT) == parse_report(line + "\n", DOCUMENT)


@given(source_lines(), function_names())
def test_resolved_range_stays_within_the_line(line: str, name: str) -> None:
    start, end = resolve_function_range(line, name)
    assert 0 <= start <= end <= len(line)
    if name.strip() in line:
        assert line[start:end] == name.strip()
