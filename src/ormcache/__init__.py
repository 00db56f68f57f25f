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
"""ormcache — Redis cache adapter for ORM result caching."""

from ormcache.cache import (
    BuildParams,
    CacheAdapter,
    KeyNamespace,
    PrebuiltHandle,
    RedisCacheAdapter,
)
from ormcache.kernel.exceptions import (
    DecodeError,
    EncodeError,
    OrmCacheException,
    StoreConnectionError,
    StoreReadError,
    StoreWriteError,
    SweepError,
)

__version__ = "0.1.0"

__all__ = [
    "BuildParams",
    "CacheAdapter",
    "DecodeError",
    "EncodeError",
    "KeyNamespace",
    "OrmCacheException",
    "PrebuiltHandle",
    "RedisCacheAdapter",
    "StoreConnectionError",
    "StoreReadError",
    "StoreWriteError",
    "SweepError",
    "__version__",
]
