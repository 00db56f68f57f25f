"""ormcache cache — Redis-backed cache adapter with namespaced keys."""

from ormcache.cache.adapters.redis import RedisCacheAdapter
from ormcache.cache.codec import JsonCodec
from ormcache.cache.connection import BuildParams, ConnectionSpec, PrebuiltHandle
from ormcache.cache.keys import KeyNamespace
from ormcache.cache.ports.outbound import CacheAdapter, StoreClient
from ormcache.cache.sweeper import DeleteBatch, InvalidationSweeper

__all__ = [
    "BuildParams",
    "CacheAdapter",
    "ConnectionSpec",
    "DeleteBatch",
    "InvalidationSweeper",
    "JsonCodec",
    "KeyNamespace",
    "PrebuiltHandle",
    "RedisCacheAdapter",
    "StoreClient",
]
