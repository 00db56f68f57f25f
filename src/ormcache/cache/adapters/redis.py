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
"""Redis-backed cache adapter for the host ORM's result cache."""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from redis.exceptions import RedisError

from ormcache.cache.codec import JsonCodec
from ormcache.cache.connection import BuildParams, ConnectionSpec, PrebuiltHandle, resolve
from ormcache.cache.keys import DEFAULT_KEY_PREFIX, KeyNamespace
from ormcache.cache.ports.outbound import StoreClient
from ormcache.cache.sweeper import DEFAULT_SCAN_COUNT, InvalidationSweeper
from ormcache.kernel.exceptions import (
    OrmCacheException,
    StoreConnectionError,
    StoreReadError,
    StoreWriteError,
)
from ormcache.logging.function_sink import CallableSink
from ormcache.logging.port import LogSink
from ormcache.logging.structlog_adapter import StructlogSink

if TYPE_CHECKING:
    from ormcache.config.properties import CacheProperties
    from ormcache.core.config import Config


class RedisCacheAdapter:
    """Cache adapter that stores JSON text under ``<key_prefix>:<key>`` in Redis.

    Expiration is delegated to Redis (``SET ... PX``); nothing is cached in
    process, so every call is a round trip to the store.

    The client is either adopted (``client=`` or ``PrebuiltHandle``) or
    built from parameters (``BuildParams``), in which case the adapter owns
    it. :meth:`close` disconnects the client in both cases.

    Usage:
        adapter = RedisCacheAdapter(redis.asyncio.Redis(), key_prefix="orders", expiration=60_000)
        await adapter.set("user:1", {"name": "a"}, "query")
        await adapter.get("user:1")
    """

    def __init__(
        self,
        client: StoreClient | None = None,
        *,
        connection: ConnectionSpec | None = None,
        key_prefix: str | None = None,
        expiration: int | None = None,
        debug: bool = False,
        logger: LogSink | Callable[[str], Any] | None = None,
        scan_count: int = DEFAULT_SCAN_COUNT,
    ) -> None:
        if client is not None and connection is not None:
            raise ValueError("Pass either 'client' or 'connection', not both")
        if type(expiration) is int and expiration == 0:
            expiration = None
        if expiration is not None and (
            isinstance(expiration, bool) or not isinstance(expiration, int) or expiration < 0
        ):
            raise ValueError(f"expiration must be a non-negative number of milliseconds, got {expiration!r}")

        if connection is None:
            connection = PrebuiltHandle(client) if client is not None else BuildParams()
        bound = resolve(connection)

        self._client = bound.client
        self._owns_client = bound.owned
        self._namespace = KeyNamespace(key_prefix or DEFAULT_KEY_PREFIX)
        self._expiration = expiration
        self._debug = debug
        self._logger = _as_sink(logger)
        self._codec = JsonCodec()
        self._sweeper = InvalidationSweeper(self._client, self._namespace, scan_count=scan_count)

        self._log("cache.created", prefix=self._namespace.prefix, expiration=expiration, owned=self._owns_client)

    @classmethod
    def from_properties(
        cls,
        properties: CacheProperties,
        logger: LogSink | Callable[[str], Any] | None = None,
    ) -> RedisCacheAdapter:
        """Build an adapter that owns a client created from ``properties.redis``."""
        return cls(
            connection=BuildParams(dict(properties.redis)),
            key_prefix=properties.key_prefix,
            expiration=properties.expiration,
            debug=properties.debug,
            logger=logger,
            scan_count=properties.scan_count,
        )

    @classmethod
    def from_config(
        cls,
        config: Config,
        logger: LogSink | Callable[[str], Any] | None = None,
    ) -> RedisCacheAdapter:
        """Build an adapter from the ``ormcache.cache`` section of *config*."""
        from ormcache.config.properties import CacheProperties

        return cls.from_properties(config.bind(CacheProperties), logger=logger)

    @property
    def key_prefix(self) -> str:
        return self._namespace.prefix

    @property
    def expiration(self) -> int | None:
        return self._expiration

    @property
    def debug(self) -> bool:
        return self._debug

    @property
    def owns_client(self) -> bool:
        return self._owns_client

    @property
    def client(self) -> StoreClient:
        return self._client

    def _log(self, event: str, **fields: Any) -> None:
        if self._debug:
            self._logger.record(event, **fields)

    def _key(self, key: str) -> str:
        return self._namespace.physical(key)

    async def get(self, key: str) -> Any | None:
        """Return the cached value, or ``None`` when the key is absent or expired.

        Raises :class:`DecodeError` if the stored text is corrupt.
        """
        full_key = self._key(key)
        try:
            raw = await self._client.get(full_key)
        except RedisError as exc:
            self._log("cache.get.failed", key=full_key, error=str(exc))
            raise StoreReadError(f"GET '{full_key}' failed: {exc}", context={"key": full_key}) from exc

        self._log("cache.get", key=full_key, raw=raw)
        if not raw:
            return None
        try:
            return self._codec.decode(raw)
        except OrmCacheException as exc:
            exc.context.setdefault("key", full_key)
            self._log("cache.get.failed", key=full_key, error=str(exc))
            raise

    async def set(self, key: str, data: Any, origin: str, expiration: int | None = None) -> None:
        """Store *data* under *key*.

        *origin* is accepted for the host contract and ignored. *expiration*
        (milliseconds) overrides the adapter default; ``0`` stores without a TTL.
        """
        full_key = self._key(key)
        effective = self._expiration if expiration is None else expiration
        try:
            text = self._codec.encode(data)
        except OrmCacheException as exc:
            exc.context.setdefault("key", full_key)
            self._log("cache.set.failed", key=full_key, error=str(exc))
            raise

        self._log("cache.set", key=full_key, value=text, expiration=effective)
        try:
            if effective:
                await self._client.set(full_key, text, px=effective)
            else:
                await self._client.set(full_key, text)
        except RedisError as exc:
            self._log("cache.set.failed", key=full_key, error=str(exc))
            raise StoreWriteError(f"SET '{full_key}' failed: {exc}", context={"key": full_key}) from exc

    async def remove(self, key: str) -> None:
        """Delete *key*; deleting an absent key is not an error."""
        full_key = self._key(key)
        try:
            await self._client.delete(full_key)
        except RedisError as exc:
            self._log("cache.remove.failed", key=full_key, error=str(exc))
            raise StoreWriteError(f"DEL '{full_key}' failed: {exc}", context={"key": full_key}) from exc
        self._log("cache.remove", key=full_key)

    async def clear(self) -> None:
        """Delete every key under this adapter's prefix, leaving other keys untouched.

        Best-effort: keys written concurrently with the sweep may survive it.
        Raises :class:`SweepError` on failure; partial deletions stand.
        """
        await self.sweep()

    async def sweep(self) -> int:
        """Same as :meth:`clear`, returning the number of keys deleted."""
        self._log("cache.clear.started", pattern=self._namespace.pattern)
        try:
            deleted = await self._sweeper.sweep()
        except OrmCacheException as exc:
            self._log("cache.clear.failed", pattern=self._namespace.pattern, error=str(exc))
            raise
        self._log("cache.clear.finished", pattern=self._namespace.pattern, deleted=deleted)
        return deleted

    async def start(self) -> None:
        """Validate connectivity by pinging Redis."""
        try:
            await self._client.ping()
        except RedisError as exc:
            self._log("cache.start.failed", error=str(exc))
            raise StoreConnectionError(f"Redis is not reachable: {exc}") from exc

    async def close(self) -> None:
        """Disconnect without draining in-flight commands.

        The connection pool is closed too, even when the client was adopted
        with an explicit ``connection_pool``. Callers must not have operations
        in flight when closing.
        """
        try:
            await self._client.aclose(close_connection_pool=True)
        except RedisError as exc:
            self._log("cache.close.failed", error=str(exc))
            raise StoreConnectionError(f"Failed to close redis client: {exc}") from exc
        self._log("cache.closed", owned=self._owns_client)


def _as_sink(logger: LogSink | Callable[[str], Any] | None) -> LogSink:
    if logger is None:
        return StructlogSink()
    if isinstance(logger, LogSink):
        return logger
    return CallableSink(logger)
