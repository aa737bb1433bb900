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

"""Unit tests for Analysis Ranges."""

from __future__ import annotations

import pytest

from codehealth.analysis.ranges import content_span, resolve_function_range

pytestmark = pytest.mark.unit


def test_resolves_first_literal_occurrence() -> None:
    assert resolve_function_range("function Foo() {", "Foo") == (9, 12)
    assert resolve_function_range("Foo(); Foo();", "Foo") == (0, 3)


def test_function_name_whitespace_is_ignored() -> None:
    assert resolve_function_range("  def run(self):", "  run ") == (6, 9)


def test_name_is_not_treated_as_a_pattern() -> None:
    line = "int operator+(a, b) { return a.+b; }"
    assert resolve_function_range(line, "operator+") == (4, 13)
    assert resolve_function_range("x = a.b", "a.b") == (4, 7)
    assert resolve_function_range("x = axb", "a.b") == (0, 7)


def test_qualified_names_match_literally() -> None:
    assert resolve_function_range("  Widget::render() {}", "Widget::render") == (2, 16)


@pytest.mark.parametrize(
    ("line", "name", "expected"),
    [
        ("  constructor(x) {", "Widget", (2, 18)),
        ("  return 1;   ", "missing", (2, 11)),
        ("", "Foo", (0, 0)),
        ("    ", "Foo", (0, 0)),
        ("\tcall();", "   ", (1, 8)),
    ],
)
def test_falls_back_to_content_span(line: str, name: str, expected: tuple[int, int]) -> None:
    assert resolve_function_range(line, name) == expected


def test_content_span() -> None:
    assert content_span("abc") == (0, 3)
    assert content_span("  abc  ") == (2, 5)
    assert content_span("\t") == (0, 0)
