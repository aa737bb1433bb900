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

"""Column resolution for function names reported by the analysis tool."""

from __future__ import annotations


def content_span(line_text: str) -> tuple[int, int]:
    """Return the span of ``line_text`` without leading or trailing whitespace.

    A blank line yields ``(0, 0)``.
    """
    stripped = line_text.strip()
    if not stripped:
        return (0, 0)
    start = len(line_text) - len(line_text.lstrip())
    return (start, start + len(stripped))


def resolve_function_range(line_text: str, function_name: str) -> tuple[int, int]:
    """Locate ``function_name`` on a single source line.

    The name is matched literally (never as a pattern) and the first
    occurrence wins. When the name does not appear on the line, which happens
    for constructors, operator overloads or names the tool prints in a
    different form, the span of the line's content is returned instead so the
    diagnostic stays anchored to the reported line.

    Args:
        line_text: Text of one source line, without its newline.
        function_name: Function name token taken from the report.

    Returns:
        ``(start_column, end_column)`` with an exclusive end column.
    """
    name = function_name.strip()
    if name:
        start = line_text.find(name)
        if start >= 0:
            return (start, start + len(name))
    return content_span(line_text)


__all__ = ["content_span", "resolve_function_range"]
