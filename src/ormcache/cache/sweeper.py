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
"""Bulk invalidation: SCAN a key namespace, then delete it in one pipeline.

The sweep is best-effort, not atomic. A key written under the prefix while
the cursor is running may or may not be seen, and a key written after
enumeration finishes survives the sweep. Stronger guarantees would need a
different scheme (e.g. versioned namespaces).
"""

from __future__ import annotations

from collections.abc import AsyncIterator, Iterable
from typing import Any

from redis.exceptions import RedisError

from ormcache.cache.keys import KeyNamespace
from ormcache.cache.ports.outbound import StoreClient
from ormcache.kernel.exceptions import SweepError

DEFAULT_SCAN_COUNT = 100


class DeleteBatch:
    """Explicit list of DEL commands submitted together in one pipeline.

    Keys are kept in first-seen order and de-duplicated, since SCAN may
    return the same key more than once.
    """

    def __init__(self) -> None:
        self._keys: dict[Any, None] = {}

    def queue(self, keys: Iterable[Any]) -> None:
        for key in keys:
            self._keys[key] = None

    @property
    def keys(self) -> list[Any]:
        return list(self._keys)

    def __len__(self) -> int:
        return len(self._keys)

    async def execute(self, client: StoreClient) -> list[Any]:
        """Run every queued DEL in a single non-transactional pipeline."""
        pipe = client.pipeline(transaction=False)
        for key in self._keys:
            pipe.delete(key)
        return await pipe.execute(raise_on_error=True)


class InvalidationSweeper:
    """Deletes every key in a :class:`KeyNamespace` without touching other keys."""

    def __init__(
        self,
        client: StoreClient,
        namespace: KeyNamespace,
        scan_count: int = DEFAULT_SCAN_COUNT,
    ) -> None:
        self._client = client
        self._namespace = namespace
        self._scan_count = scan_count

    async def batches(self) -> AsyncIterator[list[Any]]:
        """Yield non-empty key batches until the SCAN cursor returns to zero."""
        cursor = 0
        while True:
            cursor, keys = await self._client.scan(
                cursor=cursor, match=self._namespace.pattern, count=self._scan_count
            )
            if keys:
                yield keys
            if int(cursor) == 0:
                break

    async def collect(self) -> DeleteBatch:
        batch = DeleteBatch()
        async for keys in self.batches():
            batch.queue(keys)
        return batch

    async def sweep(self) -> int:
        """Enumerate then delete; returns how many keys were submitted for deletion.

        Raises :class:`SweepError` if either phase fails. Deletions already
        applied by the store are not rolled back.
        """
        pattern = self._namespace.pattern
        try:
            batch = await self.collect()
        except RedisError as exc:
            raise SweepError(
                f"Failed to enumerate keys matching '{pattern}': {exc}",
                context={"pattern": pattern, "phase": "scan"},
            ) from exc

        if not batch:
            return 0

        try:
            await batch.execute(self._client)
        except RedisError as exc:
            raise SweepError(
                f"Failed to delete {len(batch)} keys matching '{pattern}': {exc}",
                context={"pattern": pattern, "phase": "delete", "count": len(batch)},
            ) from exc
        return len(batch)
