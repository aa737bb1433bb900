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

"""Unit tests for Analysis Cache."""

from __future__ import annotations

import threading
from concurrent.futures import Future

import pytest

from codehealth.analysis.cache import CacheEntry, DiagnosticCache
from codehealth.core.type_aliases import DocumentKey
from codehealth.core.types import Diagnostic

pytestmark = [pytest.mark.unit, pytest.mark.cache]

KEY = DocumentKey("/work/src/app.ts")


def _future() -> Future[list[Diagnostic]]:
    return Future()


def test_lookup_requires_matching_version() -> None:
    cache = DiagnosticCache()
    pending = _future()
    cache.store(KEY, 3, pending)

    assert cache.lookup(KEY, 3) is pending
    assert cache.lookup(KEY, 2) is None
    assert cache.lookup(KEY, 4) is None
    assert cache.lookup(DocumentKey("/other.ts"), 3) is None


def test_lookup_returns_settled_and_failed_futures_alike() -> None:
    cache = DiagnosticCache()
    failed = _future()
    failed.set_exception(RuntimeError("boom"))
    cache.store(KEY, 1, failed)

    assert cache.lookup(KEY, 1) is failed


def test_store_replaces_entry_wholesale() -> None:
    cache = DiagnosticCache()
    first, second = _future(), _future()
    cache.store(KEY, 1, first)
    cache.store(KEY, 2, second)

    assert cache.entry(KEY) == CacheEntry(version=2, result=second)
    assert len(cache) == 1
    assert KEY in cache


def test_get_or_start_starts_once_per_version() -> None:
    cache = DiagnosticCache()
    started: list[Future[list[Diagnostic]]] = []

    def start() -> Future[list[Diagnostic]]:
        future = _future()
        started.append(future)
        return future

    first, first_cached = cache.get_or_start(KEY, 1, start)
    again, again_cached = cache.get_or_start(KEY, 1, start)
    newer, newer_cached = cache.get_or_start(KEY, 2, start)

    assert first is again
    assert (first_cached, again_cached, newer_cached) == (False, True, False)
    assert newer is not first
    assert len(started) == 2
    assert cache.lookup(KEY, 1) is None
    assert cache.lookup(KEY, 2) is newer


def test_get_or_start_skip_cache_always_starts() -> None:
    cache = DiagnosticCache()
    first, _ = cache.get_or_start(KEY, 1, _future)
    forced, cached = cache.get_or_start(KEY, 1, _future, skip_cache=True)

    assert forced is not first
    assert cached is False
    assert cache.lookup(KEY, 1) is forced


def test_get_or_start_is_single_flight_under_contention() -> None:
    cache = DiagnosticCache()
    starts = 0
    counter_lock = threading.Lock()
    barrier = threading.Barrier(8)
    results: list[Future[list[Diagnostic]]] = []
    results_lock = threading.Lock()

    def start() -> Future[list[Diagnostic]]:
        nonlocal starts
        with counter_lock:
            starts += 1
        return _future()

    def worker() -> None:
        _ = barrier.wait()
        future, _cached = cache.get_or_start(KEY, 7, start)
        with results_lock:
            results.append(future)

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join(timeout=5)

    assert starts == 1
    assert len(results) == 8
    assert all(future is results[0] for future in results)


def test_clear_and_independent_instances() -> None:
    first, second = DiagnosticCache(), DiagnosticCache()
    first.store(KEY, 1, _future())

    assert KEY not in second
    first.clear()
    assert len(first) == 0
    assert first.entry(KEY) is None
