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

"""Subprocess helpers and typed command wrappers."""

from __future__ import annotations

import logging
import subprocess  # noqa: S404  # JUSTIFIED: centralised wrapper for argv-only subprocess execution
import time
from dataclasses import dataclass
from typing import TYPE_CHECKING, Final

from codehealth._internal.exceptions import ProcessSpawnError
from codehealth._internal.logging_utils import structured_extra
from codehealth.core.model_types import LogComponent

if TYPE_CHECKING:
    from collections.abc import Iterable
    from pathlib import Path

    from codehealth.core.type_aliases import Command

logger: logging.Logger = logging.getLogger("codehealth.internal.process")

STDIN_ENCODING: Final[str] = "utf-8"

__all__ = ["STDIN_ENCODING", "CommandOutput", "run_command"]


@dataclass(slots=True)
class CommandOutput:
    args: Command
    stdout: str
    stderr: str
    exit_code: int
    duration_ms: float


def run_command(
    args: Iterable[str],
    cwd: Path | None = None,
    *,
    input_text: str | None = None,
) -> CommandOutput:
    """Run a subprocess safely, optionally feeding it text, and capture its output.

    Requires an iterable of string arguments and never uses ``shell=True``.

    When ``input_text`` is provided it is encoded as UTF-8, written to the
    child's standard input, and the stream is closed so the child sees EOF.

    Args:
        args: Command line to execute. The first element is treated as the
            executable and must be a non-empty string.
        cwd: Optional working directory for the child process.
        input_text: Optional text piped to the child's standard input.

    Returns:
        ``CommandOutput`` containing the executed argument vector along with the
        captured stdout/stderr, exit code, and duration in milliseconds.

    Raises:
        ValueError: If ``args`` is empty.
        TypeError: If any argument is falsy (for example ``""``).
        ProcessSpawnError: If the executable cannot be started or its input
            channel is unavailable.
    """
    argv: Command = list(args)
    if not argv:
        raise ValueError
    if not all(a for a in argv):
        raise TypeError
    executable = argv[0]
    start = time.perf_counter()
    debug_details: dict[str, object] = {}
    if cwd:
        debug_details["cwd"] = str(cwd)
    if input_text is not None:
        debug_details["stdin_chars"] = len(input_text)
    logger.debug(
        "Executing command: %s",
        " ".join(argv),
        extra=structured_extra(LogComponent.SERVICES, details=debug_details),
    )
    try:
        process = subprocess.Popen(  # noqa: S603 - command arguments provided by caller
            argv,
            cwd=str(cwd) if cwd else None,
            stdin=subprocess.PIPE if input_text is not None else subprocess.DEVNULL,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            text=True,
            encoding=STDIN_ENCODING,
            errors="replace",
        )
    except OSError as exc:
        raise ProcessSpawnError(executable, str(exc)) from exc
    if input_text is not None and process.stdin is None:
        process.kill()
        process.wait()
        raise ProcessSpawnError(executable, "standard input is not available")
    stdout, stderr = process.communicate(input_text)
    duration_ms = (time.perf_counter() - start) * 1000
    if process.returncode != 0:
        warning_details: dict[str, object] = {}
        if cwd:
            warning_details["cwd"] = str(cwd)
        logger.warning(
            "Command failed (exit=%s): %s",
            process.returncode,
            " ".join(argv),
            extra=structured_extra(
                LogComponent.SERVICES,
                exit_code=process.returncode,
                details=warning_details,
            ),
        )
    return CommandOutput(
        args=argv,
        stdout=stdout or "",
        stderr=stderr or "",
        exit_code=process.returncode,
        duration_ms=duration_ms,
    )
