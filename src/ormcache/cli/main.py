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
"""ormcache CLI — inspect and invalidate a cache namespace from the shell."""

from __future__ import annotations

import asyncio
import json
from collections.abc import Awaitable, Callable
from pathlib import Path
from typing import Any, TypeVar

import click
from rich.markup import escape
from rich.table import Table

from ormcache.cache.adapters.redis import RedisCacheAdapter
from ormcache.cli.console import console
from ormcache.config.properties import CacheProperties, LoggingProperties
from ormcache.core.config import Config
from ormcache.kernel.exceptions import OrmCacheException
from ormcache.logging.structlog_adapter import configure_logging

T = TypeVar("T")

_SECRET_KEYS = {"password", "url"}


def _build_adapter(properties: CacheProperties) -> RedisCacheAdapter:
    return RedisCacheAdapter.from_properties(properties)


def _run(properties: CacheProperties, operation: Callable[[RedisCacheAdapter], Awaitable[T]]) -> T:
    """Run *operation* against a fresh adapter, closing it afterwards."""

    async def runner() -> T:
        adapter = _build_adapter(properties)
        try:
            return await operation(adapter)
        finally:
            await adapter.close()

    try:
        return asyncio.run(runner())
    except OrmCacheException as exc:
        console.print(f"[error]{type(exc).__name__}:[/error] {escape(str(exc))}")
        raise click.exceptions.Exit(1) from exc


@click.group()
@click.version_option(package_name="ormcache")
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default="ormcache.yaml",
    show_default=True,
    help="YAML or TOML configuration file.",
)
@click.option("--prefix", default=None, help="Override ormcache.cache.key_prefix.")
@click.option("--url", default=None, help="Override the redis connection URL.")
@click.pass_context
def cli(ctx: click.Context, config_path: Path, prefix: str | None, url: str | None) -> None:
    """ormcache — Redis cache adapter tools."""
    config = Config.from_file(config_path)
    properties = config.bind(CacheProperties)
    if prefix:
        properties.key_prefix = prefix
    if url:
        properties.redis = {"url": url}
    if properties.debug:
        configure_logging(config.bind(LoggingProperties))
    ctx.obj = properties


@cli.command("get")
@click.argument("key")
@click.pass_obj
def get_command(properties: CacheProperties, key: str) -> None:
    """Print the cached value for KEY."""

    async def operation(adapter: RedisCacheAdapter) -> Any:
        return await adapter.get(key)

    value = _run(properties, operation)
    if value is None:
        console.print("[dim](miss)[/dim]")
    else:
        console.print_json(json.dumps(value))


@cli.command("remove")
@click.argument("key")
@click.pass_obj
def remove_command(properties: CacheProperties, key: str) -> None:
    """Delete KEY from the cache."""

    async def operation(adapter: RedisCacheAdapter) -> None:
        await adapter.remove(key)

    _run(properties, operation)
    console.print(f"[success]Removed[/success] {escape(properties.key_prefix)}:{escape(key)}")


@cli.command("clear")
@click.pass_obj
def clear_command(properties: CacheProperties) -> None:
    """Delete every key under the configured prefix."""

    async def operation(adapter: RedisCacheAdapter) -> int:
        return await adapter.sweep()

    deleted = _run(properties, operation)
    console.print(f"[success]Cleared[/success] {deleted} keys under '{escape(properties.key_prefix)}:'")


@cli.command("info")
@click.pass_obj
def info_command(properties: CacheProperties) -> None:
    """Display the effective cache configuration."""
    table = Table(title="Cache configuration", show_header=False, border_style="dim")
    table.add_column("Key", style="info")
    table.add_column("Value")
    table.add_row("key_prefix", properties.key_prefix)
    table.add_row("expiration", "none" if properties.expiration is None else f"{properties.expiration} ms")
    table.add_row("debug", str(properties.debug))
    table.add_row("scan_count", str(properties.scan_count))
    for name, value in sorted(properties.redis.items()):
        table.add_row(f"redis.{name}", "***" if name in _SECRET_KEYS else str(value))
    console.print(table)
