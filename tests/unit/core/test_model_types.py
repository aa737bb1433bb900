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

"""Unit tests for Core Model Types."""

from __future__ import annotations

import pytest

from codehealth.core.model_types import LogFormat, OutputFormat, SeverityLevel

pytestmark = pytest.mark.unit


@pytest.mark.parametrize(
    ("token", "expected"),
    [
        ("info", SeverityLevel.INFORMATION),
        ("warning", SeverityLevel.WARNING),
        ("error", SeverityLevel.ERROR),
    ],
)
def test_from_token_maps_known_tokens(token: str, expected: SeverityLevel) -> None:
    assert SeverityLevel.from_token(token) is expected


@pytest.mark.parametrize("token", ["fatal", "", "INFO", "Warning", "information", " info"])
def test_from_token_defaults_to_error(token: str) -> None:
    assert SeverityLevel.from_token(token) is SeverityLevel.ERROR


def test_from_token_rejects_non_strings_as_error() -> None:
    assert SeverityLevel.from_token(None) is SeverityLevel.ERROR
    assert SeverityLevel.from_token(3) is SeverityLevel.ERROR


def test_from_str_is_lenient_about_case() -> None:
    assert SeverityLevel.from_str(" Warning ") is SeverityLevel.WARNING
    with pytest.raises(ValueError, match="Unknown severity"):
        _ = SeverityLevel.from_str("fatal")


def test_log_and_output_formats_round_trip_their_values() -> None:
    assert LogFormat.from_str("JSON") is LogFormat.JSON
    assert OutputFormat.from_str("text") is OutputFormat.TEXT
    with pytest.raises(ValueError, match="Unknown log format"):
        _ = LogFormat.from_str("xml")
    with pytest.raises(ValueError, match="Unknown output format"):
        _ = OutputFormat.from_str("yaml")
