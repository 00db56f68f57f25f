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
"""StructlogSink — default LogSink implementation using structlog."""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING, Any

import structlog

if TYPE_CHECKING:
    from ormcache.config.properties import LoggingProperties

DEFAULT_LOGGER_NAME = "ormcache.cache"


class StructlogSink:
    """Writes records to a structlog logger at the configured level."""

    def __init__(self, name: str = DEFAULT_LOGGER_NAME, level: str = "info") -> None:
        self._logger = structlog.get_logger(name)
        self._method = level.lower()

    def record(self, event: str, **fields: Any) -> None:
        getattr(self._logger, self._method)(event, **fields)


def configure_logging(properties: LoggingProperties) -> None:
    """Configure structlog processors and stdlib logging on stdout."""
    log_level = getattr(logging, properties.level.upper(), logging.INFO)

    processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if properties.format.lower() == "json":
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer())

    structlog.configure(
        processors=processors,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=log_level,
        force=True,
    )

    for module, level in properties.levels.items():
        logging.getLogger(module).setLevel(getattr(logging, str(level).upper(), logging.INFO))
