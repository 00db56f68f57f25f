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
"""Shared fixtures: an in-memory stub of the redis.asyncio client surface."""

from __future__ import annotations

import re
import time
from typing import Any

import pytest
from redis.exceptions import RedisError


def _glob_to_regex(pattern: str) -> re.Pattern[str]:
    """Translate a Redis glob (``*``, ``?``, ``[...]``, ``\\x`` escapes) to a regex."""
    out: list[str] = []
    i = 0
    while i < len(pattern):
        ch = pattern[i]
        if ch == "\\" and i + 1 < len(pattern):
            out.append(re.escape(pattern[i + 1]))
            i += 2
            continue
        if ch == "*":
            out.append(".*")
        elif ch == "?":
            out.append(".")
        elif ch == "[":
            end = pattern.find("]", i + 1)
            if end == -1:
                out.append(re.escape(ch))
            else:
                out.append("[" + pattern[i + 1 : end] + "]")
                i = end
        else:
            out.append(re.escape(ch))
        i += 1
    return re.compile("".join(out) + r"\Z", re.DOTALL)


def _name(key: Any) -> str:
    return key.decode() if isinstance(key, bytes) else key


class FakePipeline:
    """Queues DEL commands and applies them on execute()."""

    def __init__(self, redis: FakeRedis) -> None:
        self._redis = redis
        self.commands: list[tuple[str, tuple[Any, ...]]] = []

    def delete(self, *names: Any) -> FakePipeline:
        self.commands.append(("DEL", names))
        return self

    async def execute(self, raise_on_error: bool = True) -> list[Any]:
        self._redis.executed_pipelines.append(list(self.commands))
        self._redis.maybe_fail("execute")
        results = [self._redis.delete_now(*names) for _, names in self.commands]
        self.commands = []
        return results


class FakeRedis:
    """Minimal in-memory stub matching the redis.asyncio.Redis interface.

    Values and SCAN keys come back as bytes, as with ``decode_responses=False``.
    ``scan_batch`` controls how many keys each SCAN page walks over.
    """

    def __init__(self, scan_batch: int = 2) -> None:
        self._store: dict[str, tuple[bytes, float | None]] = {}
        self.scan_batch = scan_batch
        self.failures: dict[str, Exception] = {}
        self.set_calls: list[dict[str, Any]] = []
        self.scan_calls: list[dict[str, Any]] = []
        self.executed_pipelines: list[list[tuple[str, tuple[Any, ...]]]] = []
        self.pipeline_transaction: bool | None = None
        self.closed = False
        self.closed_pool: bool | None = None

    def maybe_fail(self, command: str) -> None:
        exc = self.failures.get(command)
        if exc is not None:
            raise exc

    def _live(self, name: str) -> bytes | None:
        entry = self._store.get(name)
        if entry is None:
            return None
        value, expires_at = entry
        if expires_at is not None and time.monotonic() >= expires_at:
            del self._store[name]
            return None
        return value

    def keys(self) -> list[str]:
        return sorted(k for k in list(self._store) if self._live(k) is not None)

    def delete_now(self, *names: Any) -> int:
        count = 0
        for key in names:
            name = _name(key)
            if self._live(name) is not None:
                del self._store[name]
                count += 1
        return count

    async def get(self, name: str) -> bytes | None:
        self.maybe_fail("get")
        return self._live(name)

    async def set(self, name: str, value: str, px: int | None = None) -> bool:
        self.maybe_fail("set")
        self.set_calls.append({"name": name, "value": value, "px": px})
        if px is not None and px <= 0:
            raise RedisError("invalid expire time in 'set' command")
        expires_at = time.monotonic() + px / 1000 if px else None
        self._store[name] = (value.encode() if isinstance(value, str) else value, expires_at)
        return True

    async def delete(self, *names: Any) -> int:
        self.maybe_fail("delete")
        return self.delete_now(*names)

    async def scan(
        self, cursor: int = 0, match: str | None = None, count: int | None = None
    ) -> tuple[int, list[bytes]]:
        self.maybe_fail("scan")
        self.scan_calls.append({"cursor": cursor, "match": match, "count": count})
        snapshot = self.keys()
        page = snapshot[cursor : cursor + self.scan_batch]
        next_cursor = cursor + self.scan_batch
        if next_cursor >= len(snapshot):
            next_cursor = 0
        regex = _glob_to_regex(match) if match is not None else None
        return next_cursor, [k.encode() for k in page if regex is None or regex.match(k)]

    def pipeline(self, transaction: bool = True) -> FakePipeline:
        self.pipeline_transaction = transaction
        return FakePipeline(self)

    async def ping(self) -> bool:
        self.maybe_fail("ping")
        return True

    async def aclose(self, close_connection_pool: bool | None = None) -> None:
        self.maybe_fail("aclose")
        self.closed = True
        self.closed_pool = close_connection_pool


@pytest.fixture
def fake_redis() -> FakeRedis:
    return FakeRedis()
