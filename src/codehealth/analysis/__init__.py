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

"""Analysis pipeline: range resolution, report parsing, caching and invocation."""

from __future__ import annotations

from .cache import CacheEntry, DiagnosticCache
from .invoker import (
    DEFAULT_MAX_WORKERS,
    DEFAULT_TOOL,
    CodeHealthChecker,
    build_command,
    document_key,
    file_extension,
    run_check,
)
from .parser import map_severity, parse_line, parse_report, summary_diagnostic
from .ranges import content_span, resolve_function_range

__all__ = [
    "DEFAULT_MAX_WORKERS",
    "DEFAULT_TOOL",
    "CacheEntry",
    "CodeHealthChecker",
    "DiagnosticCache",
    "build_command",
    "content_span",
    "document_key",
    "file_extension",
    "map_severity",
    "parse_line",
    "parse_report",
    "resolve_function_range",
    "run_check",
    "summary_diagnostic",
]
