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

"""Presentation projection of published diagnostics."""

from __future__ import annotations

from .lenses import (
    DOC_SCHEME,
    OPEN_DOCS_COMMAND,
    CodeLens,
    CodeLensProvider,
    DiagnosticCollection,
    IssueReference,
    LensCommand,
    issue_reference,
    publish,
)

__all__ = [
    "DOC_SCHEME",
    "OPEN_DOCS_COMMAND",
    "CodeLens",
    "CodeLensProvider",
    "DiagnosticCollection",
    "IssueReference",
    "LensCommand",
    "issue_reference",
    "publish",
]
