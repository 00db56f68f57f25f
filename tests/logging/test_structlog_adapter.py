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
"""Tests for StructlogSink and configure_logging."""

import logging

import structlog
from structlog.testing import capture_logs

from ormcache.config.properties import LoggingProperties
from ormcache.logging.structlog_adapter import StructlogSink, configure_logging


class TestStructlogSink:
    def test_record_emits_event_with_fields(self):
        with capture_logs() as logs:
            StructlogSink().record("cache.set", key="mikro:a", expiration=50)
        assert logs == [{"event": "cache.set", "key": "mikro:a", "expiration": 50, "log_level": "info"}]

    def test_record_uses_configured_level(self):
        with capture_logs() as logs:
            StructlogSink(level="DEBUG").record("cache.get", key="mikro:a")
        assert logs[0]["log_level"] == "debug"


class TestConfigureLogging:
    def teardown_method(self):
        structlog.reset_defaults()

    def test_sets_root_level(self):
        configure_logging(LoggingProperties(level="WARNING"))
        assert logging.getLogger().level == logging.WARNING

    def test_applies_per_module_levels(self):
        configure_logging(LoggingProperties(levels={"ormcache.cache": "DEBUG"}))
        assert logging.getLogger("ormcache.cache").level == logging.DEBUG

    def test_json_format_uses_json_renderer(self):
        configure_logging(LoggingProperties(format="json"))
        processors = structlog.get_config()["processors"]
        assert isinstance(processors[-1], structlog.processors.JSONRenderer)

    def test_console_format_is_default(self):
        configure_logging(LoggingProperties())
        processors = structlog.get_config()["processors"]
        assert isinstance(processors[-1], structlog.dev.ConsoleRenderer)
