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

"""Render diagnostics for terminal and machine consumption."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

from codehealth.core.model_types import OutputFormat

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence
    from pathlib import Path

    from codehealth.core.types import Diagnostic


def format_diagnostic(path: Path | str, diagnostic: Diagnostic) -> str:
    """Return a compiler-style line (1-based line and column) for ``diagnostic``."""
    line = diagnostic.range.start_line + 1
    column = diagnostic.range.start_column + 1
    text = f"{path}:{line}:{column}: {diagnostic.severity.value}: {diagnostic.message}"
    if diagnostic.issue_code:
        text = f"{text} [{diagnostic.issue_code}]"
    return text


def render_results(
    results: Mapping[str, Sequence[Diagnostic]],
    output_format: OutputFormat,
) -> str:
    """Render diagnostics grouped by document path.

    Args:
        results: Diagnostics per document path, in display order.
        output_format: Text lines or a JSON array.

    Returns:
        The rendered output without a trailing newline.
    """
    if output_format is OutputFormat.JSON:
        payload = [
            {"path": path, **diagnostic.to_payload()}
            for path, diagnostics in results.items()
            for diagnostic in diagnostics
        ]
        return json.dumps(payload, indent=2, ensure_ascii=False)
    return "\n".join(
        format_diagnostic(path, diagnostic)
        for path, diagnostics in results.items()
        for diagnostic in diagnostics
    )


__all__ = ["format_diagnostic", "render_results"]
