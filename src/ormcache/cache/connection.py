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
"""Client binding: adopt a ready redis client or build one from parameters."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

import redis.asyncio as aioredis

from ormcache.cache.ports.outbound import StoreClient
from ormcache.kernel.exceptions import StoreConnectionError


@dataclass(frozen=True)
class PrebuiltHandle:
    """An already-connected client owned by the caller."""

    client: StoreClient


@dataclass(frozen=True)
class BuildParams:
    """Keyword arguments for ``redis.asyncio.Redis``; a ``url`` entry uses ``from_url``."""

    params: Mapping[str, Any] = field(default_factory=dict)


ConnectionSpec = PrebuiltHandle | BuildParams


@dataclass(frozen=True)
class BoundClient:
    client: StoreClient
    owned: bool


def build_client(params: Mapping[str, Any]) -> StoreClient:
    """Create a ``redis.asyncio.Redis`` from connection parameters."""
    options = dict(params)
    url = options.pop("url", None)
    try:
        if url:
            return aioredis.from_url(url, **options)
        return aioredis.Redis(**options)
    except (TypeError, ValueError) as exc:
        safe = sorted(k for k in params if k != "password")
        raise StoreConnectionError(
            f"Cannot build redis client: {exc}",
            context={"params": safe},
        ) from exc


def resolve(spec: ConnectionSpec) -> BoundClient:
    """Turn a connection spec into the single concrete client the adapter uses."""
    if isinstance(spec, PrebuiltHandle):
        return BoundClient(client=spec.client, owned=False)
    if isinstance(spec, BuildParams):
        return BoundClient(client=build_client(spec.params), owned=True)
    raise TypeError(f"Unsupported connection spec: {type(spec).__name__}")
