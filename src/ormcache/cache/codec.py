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
"""JSON value codec for cached entries."""

from __future__ import annotations

import json
from typing import Any

from ormcache.kernel.exceptions import DecodeError, EncodeError


class JsonCodec:
    """Encodes JSON-compatible Python values to compact text and back.

    Encoding is lossy in the same way JSON is: tuples come back as lists,
    non-string dict keys come back as strings.
    """

    def encode(self, value: Any) -> str:
        """Serialize *value*; raises :class:`EncodeError` for non-JSON values."""
        try:
            return json.dumps(value, separators=(",", ":"), ensure_ascii=False, allow_nan=False)
        except (TypeError, ValueError, RecursionError) as exc:
            raise EncodeError(
                f"Value of type {type(value).__name__} is not JSON serializable: {exc}",
                context={"type": type(value).__name__},
            ) from exc

    def decode(self, raw: str | bytes) -> Any:
        """Deserialize stored text; raises :class:`DecodeError` on malformed input."""
        try:
            if isinstance(raw, bytes):
                raw = raw.decode("utf-8")
            return json.loads(raw)
        except ValueError as exc:
            # JSONDecodeError and UnicodeDecodeError are both ValueErrors
            raise DecodeError(f"Stored value is not valid JSON: {exc}") from exc
