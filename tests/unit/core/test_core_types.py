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

"""Unit tests for Core Types."""

from __future__ import annotations

import json

import pytest

from codehealth.core.model_types import SeverityLevel
from codehealth.core.type_aliases import IssueCode
from codehealth.core.types import DIAGNOSTIC_SOURCE, Diagnostic, Range
from codehealth.exceptions import CodeHealthValidationError

pytestmark = pytest.mark.unit


def test_range_helpers() -> None:
    empty = Range.empty()
    assert empty.as_tuple() == (0, 0, 0, 0)
    assert empty.is_empty
    span = Range.on_line(4, 2, 9)
    assert span.as_tuple() == (4, 2, 4, 9)
    assert not span.is_empty


@pytest.mark.parametrize(
    "coords",
    [(-1, 0, 0, 0), (0, -1, 0, 0), (2, 0, 1, 0), (1, 5, 1, 4)],
)
def test_range_rejects_invalid_spans(coords: tuple[int, int, int, int]) -> None:
    with pytest.raises(CodeHealthValidationError):
        _ = Range(*coords)


def test_range_validation_error_is_a_value_error() -> None:
    with pytest.raises(ValueError, match="non-negative"):
        _ = Range(0, 0, 0, -3)


def test_diagnostic_defaults_and_payload() -> None:
    diagnostic = Diagnostic(
        range=Range.on_line(2, 9, 12),
        severity=SeverityLevel.WARNING,
        message="Complex Method",
        issue_code=IssueCode("complex-fn"),
    )
    assert diagnostic.source == DIAGNOSTIC_SOURCE == "CodeScene"
    payload = diagnostic.to_payload()
    assert payload == {
        "range": {"start": {"line": 2, "character": 9}, "end": {"line": 2, "character": 12}},
        "severity": "warning",
        "message": "Complex Method",
        "code": "complex-fn",
        "source": "CodeScene",
    }
    _ = json.dumps(payload)


def test_diagnostics_compare_by_value() -> None:
    first = Diagnostic(Range.empty(), SeverityLevel.INFORMATION, "Code health score: 9.1")
    second = Diagnostic(Range.empty(), SeverityLevel.INFORMATION, "Code health score: 9.1")
    assert first == second
    assert first.issue_code is None
