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

"""Run the code health tool against in-memory documents.

:class:`CodeHealthChecker` is the session-scoped service an editor host holds
on to. ``check`` consults the per-document cache and, on a miss, runs the
tool in a worker thread: the document text is piped to its standard input,
the process runs in the document's directory so project-local configuration
is picked up, and its report is parsed into diagnostics. Callers receive a
:class:`concurrent.futures.Future`; failures surface as a rejected future and
are never retried automatically.
"""

from __future__ import annotations

import logging
from collections import Counter
from concurrent.futures import Future, ThreadPoolExecutor
from pathlib import Path
from typing import TYPE_CHECKING, Final

from codehealth._internal.logging_utils import structured_extra
from codehealth.analysis.cache import DiagnosticCache
from codehealth.analysis.parser import parse_report
from codehealth.core.model_types import LogComponent
from codehealth.core.type_aliases import DocumentKey, ToolName
from codehealth.document import snapshot_of
from codehealth.exceptions import ProcessExecutionError, UnsupportedDocumentError
from codehealth.runtime import run_command

if TYPE_CHECKING:
    from collections.abc import Iterable
    from types import TracebackType

    from codehealth.compat import Self
    from codehealth.core.model_types import SeverityLevel
    from codehealth.core.type_aliases import Command
    from codehealth.core.types import Diagnostic
    from codehealth.document import DocumentSnapshot, VersionedDocument

logger: logging.Logger = logging.getLogger("codehealth.engine")

DEFAULT_TOOL: Final[ToolName] = ToolName("cs")
DEFAULT_MAX_WORKERS: Final[int] = 4


def document_key(path: str | Path) -> DocumentKey:
    """Return the canonical cache key for a document path."""
    return DocumentKey(str(Path(path).resolve()))


def file_extension(path: str | Path) -> str:
    """Return the file extension without its leading dot (``""`` when absent)."""
    return Path(path).suffix.removeprefix(".")


def build_command(cli_path: str, document: VersionedDocument | DocumentSnapshot) -> Command:
    """Build the tool invocation for ``document``.

    Args:
        cli_path: Path to the tool executable.
        document: Document being analysed; its extension selects the format.

    Returns:
        Command: ``[cli_path, "check", "-f", <extension>]``.

    Raises:
        UnsupportedDocumentError: If the document path has no extension.
    """
    extension = file_extension(document.path)
    if not extension:
        raise UnsupportedDocumentError(document.path)
    return [cli_path, "check", "-f", extension]


def _severity_counts(diagnostics: Iterable[Diagnostic]) -> Counter[SeverityLevel]:
    return Counter(diagnostic.severity for diagnostic in diagnostics)


def run_check(cli_path: str, snapshot: DocumentSnapshot) -> list[Diagnostic]:
    """Run the tool once against ``snapshot`` and parse its report.

    Args:
        cli_path: Path to the tool executable.
        snapshot: Immutable copy of the document content to analyse.

    Returns:
        Diagnostics in the order the tool reported them.

    Raises:
        UnsupportedDocumentError: If the document path has no extension.
        ProcessSpawnError: If the tool cannot be started or fed its input.
        ProcessExecutionError: If the tool exits with a non-zero status.
    """
    command = build_command(cli_path, snapshot)
    cwd = Path(snapshot.path).parent
    logger.info(
        "Running %s on %s",
        " ".join(command),
        snapshot.path,
        extra=structured_extra(
            LogComponent.ENGINE,
            tool=cli_path,
            path=snapshot.path,
            version=snapshot.version,
        ),
    )
    result = run_command(command, cwd=cwd, input_text=snapshot.content)
    if result.exit_code != 0:
        logger.error(
            "%s failed for %s (exit=%s)",
            command[0],
            snapshot.path,
            result.exit_code,
            extra=structured_extra(
                LogComponent.ENGINE,
                tool=cli_path,
                path=snapshot.path,
                version=snapshot.version,
                exit_code=result.exit_code,
                duration_ms=result.duration_ms,
            ),
        )
        raise ProcessExecutionError(result.args, result.exit_code, result.stderr)
    diagnostics = parse_report(result.stdout, snapshot)
    logger.debug(
        "%s completed for %s: diagnostics=%s",
        command[0],
        snapshot.path,
        len(diagnostics),
        extra=structured_extra(
            LogComponent.ENGINE,
            tool=cli_path,
            path=snapshot.path,
            version=snapshot.version,
            exit_code=result.exit_code,
            duration_ms=result.duration_ms,
            counts=_severity_counts(diagnostics),
        ),
    )
    return diagnostics


class CodeHealthChecker:
    """Session service that runs the tool with per-version single-flight caching.

    Attributes:
        cache: Cache of runs per document; injectable so sessions can be isolated.
    """

    def __init__(
        self,
        cache: DiagnosticCache | None = None,
        *,
        max_workers: int = DEFAULT_MAX_WORKERS,
    ) -> None:
        self.cache = cache if cache is not None else DiagnosticCache()
        self._executor = ThreadPoolExecutor(
            max_workers=max_workers,
            thread_name_prefix="codehealth-check",
        )

    def check(
        self,
        cli_path: str,
        document: VersionedDocument,
        skip_cache: bool = False,  # noqa: FBT001, FBT002  # JUSTIFIED: mirrors the host-facing check(tool, doc, skipCache) signature
    ) -> Future[list[Diagnostic]]:
        """Return the diagnostics computation for the document's current version.

        A cached run is returned as-is (pending or settled) when it was started
        for the document's current version. Otherwise a new run starts
        immediately against a snapshot of the current text and replaces the
        cache entry. Runs superseded by a newer version still settle for the
        callers already holding them.

        Args:
            cli_path: Path to the tool executable.
            document: Document to analyse.
            skip_cache: Always start a new run, ignoring any cached entry.

        Returns:
            Future resolving to the diagnostics, or failing with the process error.
        """
        key = document_key(document.path)
        snapshot = snapshot_of(document)

        def start() -> Future[list[Diagnostic]]:
            logger.info(
                "Starting analysis of %s (version %s)",
                key,
                snapshot.version,
                extra=structured_extra(
                    LogComponent.ENGINE,
                    path=key,
                    version=snapshot.version,
                    cached=False,
                ),
            )
            return self._executor.submit(run_check, cli_path, snapshot)

        future, _cached = self.cache.get_or_start(
            key,
            snapshot.version,
            start,
            skip_cache=skip_cache,
        )
        return future

    def check_many(
        self,
        cli_path: str,
        documents: Iterable[VersionedDocument],
        skip_cache: bool = False,  # noqa: FBT001, FBT002  # JUSTIFIED: same shape as check()
    ) -> dict[DocumentKey, Future[list[Diagnostic]]]:
        """Start (or reuse) a run for each document, keyed by document key."""
        return {
            document_key(document.path): self.check(cli_path, document, skip_cache)
            for document in documents
        }

    def cached(self, document: VersionedDocument) -> Future[list[Diagnostic]] | None:
        """Return the cached run for the document's current version, if any."""
        return self.cache.lookup(document_key(document.path), document.version)

    def close(self, *, wait: bool = True) -> None:
        """Shut down the worker pool; outstanding runs finish when ``wait`` is true."""
        self._executor.shutdown(wait=wait)

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()


__all__ = [
    "DEFAULT_MAX_WORKERS",
    "DEFAULT_TOOL",
    "CodeHealthChecker",
    "build_command",
    "document_key",
    "file_extension",
    "run_check",
]
