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
"""Cache adapter protocol and the store client capabilities it consumes."""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class CacheAdapter(Protocol):
    """Cache contract implemented for the host ORM.

    ``origin`` on :meth:`set` is provenance metadata from the host and does
    not influence caching. ``expiration`` is in milliseconds.
    """

    async def get(self, key: str) -> Any | None: ...

    async def set(self, key: str, data: Any, origin: str, expiration: int | None = None) -> None: ...

    async def remove(self, key: str) -> None: ...

    async def clear(self) -> None: ...

    async def close(self) -> None: ...


@runtime_checkable
class StorePipeline(Protocol):
    """Non-transactional command batch; queued commands run on :meth:`execute`."""

    def delete(self, *names: str) -> Any: ...

    async def execute(self, raise_on_error: bool = True) -> list[Any]: ...


@runtime_checkable
class StoreClient(Protocol):
    """Subset of ``redis.asyncio.Redis`` used by the adapter."""

    async def get(self, name: str) -> bytes | str | None: ...

    async def set(self, name: str, value: str, px: int | None = None) -> Any: ...

    async def delete(self, *names: str) -> int: ...

    async def scan(
        self, cursor: int = 0, match: str | None = None, count: int | None = None
    ) -> tuple[int, list[Any]]: ...

    def pipeline(self, transaction: bool = True) -> StorePipeline: ...

    async def ping(self) -> Any: ...

    async def aclose(self, close_connection_pool: bool | None = None) -> None: ...
