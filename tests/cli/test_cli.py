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
"""Tests for the ormcache CLI."""

from __future__ import annotations

import asyncio
from pathlib import Path
from unittest.mock import patch

import pytest
from click.testing import CliRunner
from redis.exceptions import ResponseError

from ormcache.cache.adapters.redis import RedisCacheAdapter
from ormcache.cli.main import cli


@pytest.fixture
def seeded(fake_redis):
    async def seed() -> None:
        await fake_redis.set("mikro:user:1", '{"name":"a"}')
        await fake_redis.set("mikro:user:2", '{"name":"b"}')
        await fake_redis.set("other:user:1", '{"name":"c"}')

    asyncio.run(seed())
    return fake_redis


def _patched(fake_redis, seen: list | None = None):
    def build(properties):
        if seen is not None:
            seen.append(properties)
        return RedisCacheAdapter(
            fake_redis,
            key_prefix=properties.key_prefix,
            expiration=properties.expiration,
        )

    return patch("ormcache.cli.main._build_adapter", side_effect=build)


class TestCLI:
    def test_help(self):
        result = CliRunner().invoke(cli, ["--help"])
        assert result.exit_code == 0
        for command in ("get", "remove", "clear", "info"):
            assert command in result.output

    def test_get_hit(self, seeded, tmp_path: Path):
        with _patched(seeded):
            result = CliRunner().invoke(cli, ["--config", str(tmp_path / "none.yaml"), "get", "user:1"])
        assert result.exit_code == 0, result.output
        assert '"name": "a"' in result.output
        assert seeded.closed is True

    def test_get_miss(self, seeded, tmp_path: Path):
        with _patched(seeded):
            result = CliRunner().invoke(cli, ["--config", str(tmp_path / "none.yaml"), "get", "user:9"])
        assert result.exit_code == 0, result.output
        assert "(miss)" in result.output

    def test_remove(self, seeded, tmp_path: Path):
        with _patched(seeded):
            result = CliRunner().invoke(cli, ["--config", str(tmp_path / "none.yaml"), "remove", "user:1"])
        assert result.exit_code == 0, result.output
        assert "mikro:user:1" not in seeded.keys()

    def test_clear_reports_count_and_keeps_other_prefixes(self, seeded, tmp_path: Path):
        with _patched(seeded):
            result = CliRunner().invoke(cli, ["--config", str(tmp_path / "none.yaml"), "clear"])
        assert result.exit_code == 0, result.output
        assert "Cleared 2 keys" in result.output
        assert seeded.keys() == ["other:user:1"]

    def test_prefix_option_overrides_config(self, seeded, tmp_path: Path):
        config_file = tmp_path / "ormcache.yaml"
        config_file.write_text("ormcache:\n  cache:\n    key_prefix: mikro\n")
        seen: list = []
        with _patched(seeded, seen):
            result = CliRunner().invoke(cli, ["--config", str(config_file), "--prefix", "other", "clear"])
        assert result.exit_code == 0, result.output
        assert seen[0].key_prefix == "other"
        assert seeded.keys() == ["mikro:user:1", "mikro:user:2"]

    def test_url_option_replaces_redis_params(self, seeded, tmp_path: Path):
        seen: list = []
        with _patched(seeded, seen):
            CliRunner().invoke(
                cli, ["--config", str(tmp_path / "none.yaml"), "--url", "redis://cache:6379/1", "get", "x"]
            )
        assert seen[0].redis == {"url": "redis://cache:6379/1"}

    def test_store_error_exits_with_status_1(self, seeded, tmp_path: Path):
        seeded.failures["execute"] = ResponseError("boom")
        with _patched(seeded):
            result = CliRunner().invoke(cli, ["--config", str(tmp_path / "none.yaml"), "clear"])
        assert result.exit_code == 1
        assert "SweepError" in result.output

    def test_info_masks_secrets(self, tmp_path: Path):
        config_file = tmp_path / "ormcache.yaml"
        config_file.write_text(
            "ormcache:\n  cache:\n    key_prefix: orders\n    expiration: 5000\n"
            "    redis:\n      host: cache\n      password: hunter2\n"
        )
        result = CliRunner().invoke(cli, ["--config", str(config_file), "info"])
        assert result.exit_code == 0, result.output
        assert "orders" in result.output
        assert "5000 ms" in result.output
        assert "hunter2" not in result.output

    def test_zero_expiration_in_config_is_accepted(self, seeded, tmp_path: Path):
        config_file = tmp_path / "ormcache.yaml"
        config_file.write_text("ormcache:\n  cache:\n    expiration: 0\n")
        with _patched(seeded):
            result = CliRunner().invoke(cli, ["--config", str(config_file), "clear"])
        assert result.exit_code == 0, result.output
        assert "Cleared 2 keys" in result.output
