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
"""Exception hierarchy for ormcache.

All errors raised by the adapter inherit from OrmCacheException, so callers
can catch one type for every cache failure or a subclass for targeted handling.

Categories:
- CodecException: the value could not be encoded, or stored text could not be decoded
- InfrastructureException: the backing key-value store failed or was unreachable
"""

from __future__ import annotations


# =============================================================================
# Base Exception
# =============================================================================


class OrmCacheException(Exception):
    """Base exception for all ormcache errors.

    Args:
        message: Human-readable error description.
        code: Machine-readable error code (e.g. "STORE_READ").
        context: Arbitrary key-value pairs for error context and debugging.
    """

    default_code: str | None = None

    def __init__(
        self,
        message: str,
        code: str | None = None,
        context: dict | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code if code is not None else self.default_code
        self.context: dict = context if context is not None else {}


# =============================================================================
# Codec Exceptions
# =============================================================================


class CodecException(OrmCacheException):
    """Value could not be converted to or from its stored text form."""


class EncodeError(CodecException):
    """Value is not representable as JSON text (cycles, unsupported types, NaN)."""

    default_code = "CACHE_ENCODE"


class DecodeError(CodecException):
    """Stored text is not valid JSON; the entry is corrupt rather than missing."""

    default_code = "CACHE_DECODE"


# =============================================================================
# Infrastructure Exceptions
# =============================================================================


class InfrastructureException(OrmCacheException):
    """Failures of the external key-value store."""


class StoreException(InfrastructureException):
    """A command sent to the store failed."""


class StoreConnectionError(StoreException):
    """The store client could not be built, reached, or disconnected."""

    default_code = "STORE_CONNECTION"


class StoreReadError(StoreException):
    """A read command failed."""

    default_code = "STORE_READ"


class StoreWriteError(StoreException):
    """A write or delete command failed."""

    default_code = "STORE_WRITE"


class SweepError(StoreWriteError):
    """Bulk invalidation failed; some keys may already have been deleted."""

    default_code = "CACHE_SWEEP"
