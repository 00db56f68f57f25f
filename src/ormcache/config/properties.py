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
"""Configuration properties for the cache adapter and its logging."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from ormcache.cache.keys import DEFAULT_KEY_PREFIX
from ormcache.core.config import config_properties


@config_properties(prefix="ormcache.cache")
@dataclass
class CacheProperties:
    """Configuration for the cache adapter (ormcache.cache.*).

    ``expiration`` is the default TTL in milliseconds; ``None`` stores entries
    without a TTL. ``redis`` is passed verbatim to the redis client; a ``url``
    key selects ``redis.asyncio.from_url``.
    """

    key_prefix: str = DEFAULT_KEY_PREFIX
    expiration: int | None = None
    debug: bool = False
    scan_count: int = 100
    redis: dict[str, Any] = field(default_factory=lambda: {"url": "redis://localhost:6379/0"})


@config_properties(prefix="ormcache.logging")
@dataclass
class LoggingProperties:
    """Configuration for structlog output (ormcache.logging.*)."""

    level: str = "INFO"
    format: str = "console"
    levels: dict[str, str] = field(default_factory=dict)
