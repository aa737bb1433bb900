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

"""Project published diagnostics onto inline code lenses.

The presentation layer never runs the tool itself. A host publishes the
diagnostics of a settled ``check`` into a :class:`DiagnosticCollection` and
calls :meth:`CodeLensProvider.update`; listeners then re-request lenses,
which are derived read-only from whatever is currently published.
"""

from __future__ import annotations

import logging
import os
import threading
from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, Final

from codehealth._internal.logging_utils import structured_extra
from codehealth.analysis.invoker import document_key
from codehealth.core.model_types import LogComponent
from codehealth.core.type_aliases import CommandId

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable
    from concurrent.futures import Future
    from pathlib import Path

    from codehealth.compat import Self
    from codehealth.config.models import Settings
    from codehealth.core.type_aliases import DocumentKey, IssueCode
    from codehealth.core.types import Diagnostic, Range
    from codehealth.document import VersionedDocument

logger: logging.Logger = logging.getLogger("codehealth.lens")

DOC_SCHEME: Final[str] = "csdoc"
OPEN_DOCS_COMMAND: Final[CommandId] = CommandId("codescene.openCodeHealthDocs")


@dataclass(slots=True, frozen=True)
class IssueReference:
    """Documentation reference for an issue code.

    Attributes:
        code: Issue code as reported by the tool.
        target: URI of the issue's documentation page.
    """

    code: IssueCode
    target: str


def issue_reference(code: IssueCode) -> IssueReference:
    """Return the documentation reference for ``code`` (``csdoc:<code>.md``)."""
    return IssueReference(code=code, target=f"{DOC_SCHEME}:{code}.md")


@dataclass(slots=True, frozen=True)
class LensCommand:
    """Command a resolved lens shows and triggers.

    Attributes:
        title: Text rendered inline.
        command: Identifier of the host command run on click.
        arguments: Arguments passed to the command.
    """

    title: str
    command: CommandId
    arguments: tuple[IssueReference, ...] = ()


@dataclass(slots=True, frozen=True)
class CodeLens:
    """Presentation entry derived from one diagnostic.

    Attributes:
        range: Span of the source diagnostic.
        diagnostic: The diagnostic the lens was derived from.
        command: Display command, filled in by :meth:`CodeLensProvider.resolve_lens`.
    """

    range: Range
    diagnostic: Diagnostic
    command: LensCommand | None = None

    @property
    def label(self) -> str:
        return self.diagnostic.message

    @property
    def is_resolved(self) -> bool:
        return self.command is not None


class DiagnosticCollection:
    """Diagnostics currently published per document."""

    def __init__(self) -> None:
        self._items: dict[DocumentKey, tuple[Diagnostic, ...]] = {}
        self._lock = threading.Lock()

    def set(self, path: str | Path, diagnostics: Iterable[Diagnostic]) -> None:
        with self._lock:
            self._items[document_key(path)] = tuple(diagnostics)

    def get(self, path: str | Path) -> tuple[Diagnostic, ...]:
        with self._lock:
            return self._items.get(document_key(path), ())

    def delete(self, path: str | Path) -> None:
        with self._lock:
            self._items.pop(document_key(path), None)

    def clear(self) -> None:
        with self._lock:
            self._items.clear()

    def __contains__(self, path: object) -> bool:
        if not isinstance(path, (str, os.PathLike)):
            return False
        with self._lock:
            return document_key(os.fspath(path)) in self._items

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)


class CodeLensProvider:
    """Produce one code lens per published diagnostic of a document."""

    def __init__(
        self,
        collection: DiagnosticCollection,
        *,
        enabled: bool = True,
        command_id: CommandId = OPEN_DOCS_COMMAND,
    ) -> None:
        self._collection = collection
        self.enabled = enabled
        self.command_id = command_id
        self._listeners: list[Callable[[], None]] = []
        self._listeners_lock = threading.Lock()

    @classmethod
    def from_settings(cls, collection: DiagnosticCollection, settings: Settings) -> Self:
        """Build a provider honouring the ``enable_code_lenses`` setting."""
        return cls(collection, enabled=settings.enable_code_lenses)

    def provide_lenses(self, document: VersionedDocument) -> list[CodeLens]:
        """Return unresolved lenses for every diagnostic published for ``document``.

        An absent or empty diagnostic set, or a disabled provider, yields no lenses.
        """
        if not self.enabled:
            return []
        diagnostics = self._collection.get(document.path)
        return [CodeLens(range=diagnostic.range, diagnostic=diagnostic) for diagnostic in diagnostics]

    def resolve_lens(self, lens: CodeLens) -> CodeLens:
        """Return ``lens`` with its display command attached.

        The title is the diagnostic's message. When the diagnostic carries an
        issue code, its documentation reference is passed as the argument.
        """
        code = lens.diagnostic.issue_code
        arguments = (issue_reference(code),) if code else ()
        command = LensCommand(title=lens.diagnostic.message, command=self.command_id, arguments=arguments)
        return replace(lens, command=command)

    def on_did_change(self, listener: Callable[[], None]) -> Callable[[], None]:
        """Subscribe ``listener`` to change notifications.

        Returns:
            Callable that removes the subscription.
        """
        with self._listeners_lock:
            self._listeners.append(listener)

        def dispose() -> None:
            with self._listeners_lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return dispose

    def update(self) -> None:
        """Notify listeners that lenses should be re-requested."""
        with self._listeners_lock:
            callbacks = list(self._listeners)
        for callback in callbacks:
            callback()


def publish(
    result: Future[list[Diagnostic]],
    document: VersionedDocument,
    collection: DiagnosticCollection,
    provider: CodeLensProvider | None = None,
) -> None:
    """Publish a check's diagnostics once it settles and refresh the lenses.

    A failed run is reported with a single warning; the previously published
    diagnostics are left untouched. A run that settles after the document has
    moved past the version it was published for is dropped, so a slow older
    run never replaces the diagnostics of a newer one.

    Args:
        result: Future returned by ``CodeHealthChecker.check``.
        document: Document the check was run for.
        collection: Collection receiving the diagnostics.
        provider: Provider whose listeners are notified after publishing.
    """
    path = document.path
    version = document.version

    def _on_done(done: Future[list[Diagnostic]]) -> None:
        if done.cancelled():
            return
        if document.version != version:
            logger.debug(
                "Dropping diagnostics for %s: version %s superseded by %s",
                path,
                version,
                document.version,
                extra=structured_extra(LogComponent.LENS, path=path, version=version),
            )
            return
        error = done.exception()
        if error is not None:
            logger.warning(
                "Code health analysis failed for %s: %s",
                path,
                error,
                extra=structured_extra(LogComponent.LENS, path=path),
            )
            return
        diagnostics = done.result()
        collection.set(path, diagnostics)
        logger.debug(
            "Published %s diagnostics for %s",
            len(diagnostics),
            path,
            extra=structured_extra(LogComponent.LENS, path=path),
        )
        if provider is not None:
            provider.update()

    result.add_done_callback(_on_done)


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
