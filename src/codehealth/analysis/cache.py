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

"""Per-document cache of in-flight and completed analysis runs.

Each document key maps to exactly one entry holding the document version the
run was started for and the future carrying its result. Storing the future
rather than the diagnostics means concurrent requests for the same version
share one external process even while it is still running. An entry is only
served while its version matches the document's current version; any newer
run replaces it wholesale.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import TYPE_CHECKING

from codehealth._internal.logging_utils import structured_extra
from codehealth.core.model_types import LogComponent

if TYPE_CHECKING:
    from collections.abc import Callable
    from concurrent.futures import Future

    from codehealth.core.type_aliases import DocumentKey
    from codehealth.core.types import Diagnostic

logger: logging.Logger = logging.getLogger("codehealth.cache")


@dataclass(slots=True, frozen=True)
class CacheEntry:
    """Cached analysis run for one document.

    Attributes:
        version: Document version the run was started for.
        result: Future resolving to the run's diagnostics (pending or settled).
    """

    version: int
    result: Future[list[Diagnostic]]


class DiagnosticCache:
    """Thread-safe mapping from document key to its latest analysis run.

    The cache is owned by a session object rather than living at module level,
    so independent sessions (and tests) never share entries.
    """

    def __init__(self) -> None:
        self._entries: dict[DocumentKey, CacheEntry] = {}
        self._lock = threading.Lock()

    def lookup(self, key: DocumentKey, version: int) -> Future[list[Diagnostic]] | None:
        """Return the cached run for ``key`` if it was started for ``version``.

        Args:
            key: Canonical document key.
            version: The document's current version.

        Returns:
            The cached future, pending or settled, or ``None`` on a miss.
        """
        with self._lock:
            entry = self._entries.get(key)
        if entry is None or entry.version != version:
            return None
        return entry.result

    def entry(self, key: DocumentKey) -> CacheEntry | None:
        """Return the raw entry for ``key`` regardless of version."""
        with self._lock:
            return self._entries.get(key)

    def store(self, key: DocumentKey, version: int, result: Future[list[Diagnostic]]) -> None:
        """Replace the entry for ``key`` with a run started at ``version``."""
        with self._lock:
            self._entries[key] = CacheEntry(version=version, result=result)

    def get_or_start(
        self,
        key: DocumentKey,
        version: int,
        start: Callable[[], Future[list[Diagnostic]]],
        *,
        skip_cache: bool = False,
    ) -> tuple[Future[list[Diagnostic]], bool]:
        """Return the run for ``key``/``version``, starting one on a miss.

        Lookup, start and store happen under one lock, so two callers racing
        on the same version can never both start a run.

        Args:
            key: Canonical document key.
            version: The document's version at call time.
            start: Callable that launches a new run and returns its future.
                It must not block on the run's completion.
            skip_cache: Ignore any cached entry and always start a new run.

        Returns:
            Tuple of the future and whether it came from the cache.
        """
        with self._lock:
            if not skip_cache:
                entry = self._entries.get(key)
                if entry is not None and entry.version == version:
                    logger.debug(
                        "Returning cached diagnostics for %s (version %s)",
                        key,
                        version,
                        extra=structured_extra(
                            LogComponent.CACHE,
                            path=key,
                            version=version,
                            cached=True,
                        ),
                    )
                    return entry.result, True
            result = start()
            self._entries[key] = CacheEntry(version=version, result=result)
        return result, False

    def clear(self) -> None:
        """Drop every entry."""
        with self._lock:
            self._entries.clear()

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)


__all__ = ["CacheEntry", "DiagnosticCache"]
