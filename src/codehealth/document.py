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

"""Document views consumed by the analysis pipeline.

The editing environment owns the real text buffers. codehealth only needs a
narrow view of them: per-line text for range resolution, and the path, the
full text and a monotonically increasing version for invocation and caching.
``TextDocument`` is an in-memory implementation used by the CLI and tests.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from codehealth.compat import Self


@runtime_checkable
class DocumentView(Protocol):
    """Read-only, line-addressable view of a document's content."""

    @property
    def line_count(self) -> int:
        """Number of lines in the document."""
        ...

    def line_text(self, index: int) -> str:
        """Return the text of the 0-based line ``index`` without its newline.

        Raises:
            IndexError: If ``index`` is outside ``0 <= index < line_count``.
        """
        ...


@runtime_checkable
class VersionedDocument(DocumentView, Protocol):
    """Document view that also carries an identity, its text and a version."""

    @property
    def path(self) -> Path:
        """On-disk path of the document."""
        ...

    @property
    def version(self) -> int:
        """Version counter; increases on every edit."""
        ...

    def text(self) -> str:
        """Return the full in-memory text of the document."""
        ...


def split_lines(text: str) -> tuple[str, ...]:
    """Split ``text`` into lines the way editors count them.

    A trailing newline opens a final empty line, and ``\\r\\n`` endings are
    treated as a single break.
    """
    return tuple(line.removesuffix("\r") for line in text.split("\n"))


@dataclass(slots=True, frozen=True)
class DocumentSnapshot:
    """Immutable copy of a document's content at a given version.

    Attributes:
        path: On-disk path of the document.
        version: Version the snapshot was taken at.
        content: Full document text.
        lines: Content split into lines.
    """

    path: Path
    version: int
    content: str
    lines: tuple[str, ...] = field(init=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "lines", split_lines(self.content))

    @property
    def line_count(self) -> int:
        return len(self.lines)

    def line_text(self, index: int) -> str:
        if index < 0 or index >= len(self.lines):
            msg = f"line {index} is outside the document ({len(self.lines)} lines)"
            raise IndexError(msg)
        return self.lines[index]

    def text(self) -> str:
        return self.content


class TextDocument:
    """Mutable in-memory document with a version counter.

    Every call to :meth:`replace` bumps the version, mirroring how editors
    invalidate per-version caches on each edit.
    """

    __slots__ = ("_path", "_snapshot")

    def __init__(self, path: str | Path, text: str = "", *, version: int = 1) -> None:
        self._path = Path(path)
        self._snapshot = DocumentSnapshot(self._path, version, text)

    @classmethod
    def open(cls, path: str | Path) -> Self:
        """Load a UTF-8 document from disk at version 1."""
        source = Path(path)
        return cls(source, source.read_text(encoding="utf-8"))

    @property
    def path(self) -> Path:
        return self._path

    @property
    def version(self) -> int:
        return self._snapshot.version

    @property
    def line_count(self) -> int:
        return self._snapshot.line_count

    def line_text(self, index: int) -> str:
        return self._snapshot.line_text(index)

    def text(self) -> str:
        return self._snapshot.content

    def replace(self, text: str) -> int:
        """Replace the document content and return the new version."""
        self._snapshot = DocumentSnapshot(self._path, self._snapshot.version + 1, text)
        return self._snapshot.version

    def snapshot(self) -> DocumentSnapshot:
        """Return the current immutable snapshot."""
        return self._snapshot

    def __repr__(self) -> str:
        return f"TextDocument(path={str(self._path)!r}, version={self.version})"


def snapshot_of(document: VersionedDocument) -> DocumentSnapshot:
    """Capture the content of any versioned document at its current version."""
    if isinstance(document, TextDocument):
        return document.snapshot()
    return DocumentSnapshot(Path(document.path), document.version, document.text())


__all__ = [
    "DocumentSnapshot",
    "DocumentView",
    "TextDocument",
    "VersionedDocument",
    "snapshot_of",
    "split_lines",
]
