# Copyright 2026 Firefly Software Solutions Inc.
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
"""Key namespacing: logical cache keys to physical store keys."""

from __future__ import annotations

import re
from dataclasses import dataclass

DEFAULT_KEY_PREFIX = "mikro"
SEPARATOR = ":"

_GLOB_SPECIAL_RE = re.compile(r"([\\*?\[\]])")


@dataclass(frozen=True)
class KeyNamespace:
    """Maps logical keys into ``<prefix>:<key>`` so several namespaces can share a store.

    Usage:
        ns = KeyNamespace("mikro")
        ns.physical("user:1")   # "mikro:user:1"
        ns.pattern              # "mikro:*"
    """

    prefix: str = DEFAULT_KEY_PREFIX

    @property
    def marker(self) -> str:
        """The leading text shared by every physical key in this namespace."""
        return f"{self.prefix}{SEPARATOR}"

    @property
    def pattern(self) -> str:
        """SCAN MATCH pattern selecting every key in this namespace.

        Glob metacharacters in the prefix are escaped so the pattern only
        matches keys that literally start with :attr:`marker`.
        """
        return _GLOB_SPECIAL_RE.sub(r"\\\1", self.marker) + "*"

    def physical(self, key: str) -> str:
        return f"{self.marker}{key}"

    def owns(self, physical_key: str) -> bool:
        return physical_key.startswith(self.marker)
