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

"""Shared Hypothesis strategies for property-based tests."""

from __future__ import annotations

from hypothesis import strategies as st

__all__ = [
    "function_names",
    "report_lines",
    "severity_tokens",
    "source_lines",
]

_IDENTIFIER = st.from_regex(r"[A-Za-z_][A-Za-z0-9_:.-]{0,15}", fullmatch=True)


def severity_tokens() -> st.SearchStrategy[str]:
    """Known tool severity tokens mixed with arbitrary noise."""
    return st.one_of(st.sampled_from(["info", "warning", "error"]), st.text(max_size=12))


def function_names() -> st.SearchStrategy[str]:
    """Function tokens as the tool prints them (no whitespace)."""
    return _IDENTIFIER


def source_lines(max_size: int = 40) -> st.SearchStrategy[str]:
    """Single source lines without line breaks."""
    return st.text(
        alphabet=st.characters(blacklist_categories=("Cs",), blacklist_characters="\r\n"),
        max_size=max_size,
    )


def report_lines() -> st.SearchStrategy[str]:
    """Well-formed findings, summaries and arbitrary noise lines.

    Returns:
        Hypothesis strategy emitting single report lines.
    """
    finding = st.builds(
        "{}: src/app.ts:{}:{}:{} {}".format,
        st.sampled_from(["info", "warning", "error", "fatal", "notice"]),
        st.integers(min_value=0, max_value=12),
        function_names(),
        st.from_regex(r"[a-z][a-z-]{0,12}", fullmatch=True),
        st.text(alphabet=st.characters(blacklist_categories=("Cs", "Cc", "Zl", "Zp")), min_size=1, max_size=30),
    )
    summary = st.builds("info: src/app.ts:1: Code health score: {}".format, st.decimals(0, 10, places=2).map(str))
    return st.one_of(finding, summary, st.text(max_size=60))
