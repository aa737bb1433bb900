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

"""Test doubles for the process layer used by the analysis invoker."""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from codehealth.runtime import CommandOutput

if TYPE_CHECKING:
    from collections.abc import Iterable
    from pathlib import Path

__all__ = ["RecordedCall", "RecordingRunner"]


@dataclass(slots=True, frozen=True)
class RecordedCall:
    args: list[str]
    cwd: Path | None
    input_text: str | None


@dataclass
class RecordingRunner:
    """Stand-in for ``run_command`` that records every invocation.

    When ``gate`` is set the runner blocks until the test releases it, so a
    run can be held in flight while more requests arrive.
    """

    stdout: str = ""
    stderr: str = ""
    exit_code: int = 0
    gate: threading.Event | None = None
    calls: list[RecordedCall] = field(default_factory=list)
    started: threading.Event = field(default_factory=threading.Event)
    _lock: threading.Lock = field(default_factory=threading.Lock)

    def __call__(
        self,
        args: Iterable[str],
        cwd: Path | None = None,
        *,
        input_text: str | None = None,
    ) -> CommandOutput:
        argv = list(args)
        with self._lock:
            self.calls.append(RecordedCall(args=argv, cwd=cwd, input_text=input_text))
        self.started.set()
        if self.gate is not None and not self.gate.wait(timeout=5):
            msg = "gate was never released"
            raise AssertionError(msg)
        return CommandOutput(
            args=argv,
            stdout=self.stdout,
            stderr=self.stderr,
            exit_code=self.exit_code,
            duration_ms=1.0,
        )

    @property
    def count(self) -> int:
        with self._lock:
            return len(self.calls)
