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

"""Compatibility layer for typing features newer than the minimum Python.

`override` landed in the standard library in Python 3.12. This module prefers
the stdlib symbol and falls back to `typing_extensions` on older interpreters,
so callers never branch on the running version.

Notes:
    - When type checking (`TYPE_CHECKING` is true), names come from
      `typing_extensions` so analysers see one consistent API.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from typing_extensions import Self, TypedDict, Unpack, override
else:
    try:
        from typing import TypedDict, override  # py>=3.12
    except ImportError:
        from typing_extensions import TypedDict, override

    from typing import Self, Unpack

__all__ = ["Self", "TypedDict", "Unpack", "override"]
