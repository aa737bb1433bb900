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

"""Unit tests for Internal Process."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

from codehealth._internal.utils.process import run_command
from codehealth.exceptions import ProcessSpawnError

pytestmark = pytest.mark.unit

ECHO_STDIN = "import sys; data = sys.stdin.read(); sys.stdout.write(data.upper())"


def test_run_command_pipes_text_to_stdin() -> None:
    result = run_command([sys.executable, "-c", ECHO_STDIN], input_text="hello\n")

    assert result.exit_code == 0
    assert result.stdout == "HELLO\n"
    assert result.args == [sys.executable, "-c", ECHO_STDIN]
    assert result.duration_ms >= 0


def test_run_command_uses_working_directory(tmp_path: Path) -> None:
    script = "import os; print(os.getcwd())"
    result = run_command([sys.executable, "-c", script], cwd=tmp_path)
    assert Path(result.stdout.strip()).resolve() == tmp_path.resolve()


def test_run_command_reports_failures_without_raising() -> None:
    script = "import sys; sys.stderr.write('bad'); sys.exit(3)"
    result = run_command([sys.executable, "-c", script])
    assert result.exit_code == 3
    assert result.stderr == "bad"


def test_missing_executable_raises_spawn_error(tmp_path: Path) -> None:
    missing = str(tmp_path / "no-such-tool")
    with pytest.raises(ProcessSpawnError) as excinfo:
        _ = run_command([missing, "check"], input_text="x")
    assert excinfo.value.executable == missing


def test_run_command_validates_arguments() -> None:
    with pytest.raises(ValueError):  # noqa: PT011
        _ = run_command([])
    with pytest.raises(TypeError):
        _ = run_command([sys.executable, ""])
