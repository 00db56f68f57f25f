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
"""CallableSink — adapts a plain ``fn(message)`` callable to the LogSink port."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any


class CallableSink:
    """Renders each record as ``event | key=value ...`` and passes it to *fn*.

    Usage:
        adapter = RedisCacheAdapter(client=redis, debug=True, logger=CallableSink(print))
    """

    __slots__ = ("_fn",)

    def __init__(self, fn: Callable[[str], Any]) -> None:
        self._fn = fn

    def record(self, event: str, **fields: Any) -> None:
        if fields:
            pairs = " ".join(f"{k}={v!r}" for k, v in fields.items())
            self._fn(f"{event} | {pairs}")
        else:
            self._fn(event)
