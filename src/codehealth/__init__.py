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

"""codehealth - code health diagnostics for editing sessions.

Runs the CodeScene ``cs check`` tool against in-memory documents, parses its
report into range-anchored diagnostics, caches runs per document version so
concurrent requests share one process, and projects published diagnostics
onto inline code lenses.
"""

from __future__ import annotations

from typing import Final

from codehealth.exceptions import (
    CodeHealthError,
    CodeHealthValidationError,
    ProcessExecutionError,
    ProcessSpawnError,
    UnsupportedDocumentError,
)

from .analysis import (
    CodeHealthChecker,
    DiagnosticCache,
    parse_line,
    parse_report,
    resolve_function_range,
)
from .config import Settings, load_settings
from .core.model_types import SeverityLevel
from .core.types import Diagnostic, Range
from .document import DocumentSnapshot, DocumentView, TextDocument, VersionedDocument
from .presentation import CodeLens, CodeLensProvider, DiagnosticCollection, publish

__version__: Final[str] = "0.1.0"

__all__ = [
    "CodeHealthChecker",
    "CodeHealthError",
    "CodeHealthValidationError",
    "CodeLens",
    "CodeLensProvider",
    "Diagnostic",
    "DiagnosticCache",
    "DiagnosticCollection",
    "DocumentSnapshot",
    "DocumentView",
    "ProcessExecutionError",
    "ProcessSpawnError",
    "Range",
    "SeverityLevel",
    "Settings",
    "TextDocument",
    "UnsupportedDocumentError",
    "VersionedDocument",
    "load_settings",
    "parse_line",
    "parse_report",
    "publish",
    "resolve_function_range",
    "__version__",
]
