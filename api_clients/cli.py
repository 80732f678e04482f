"""CLI for inspecting the client configuration and checking connectivity"""
import asyncio
import json
import logging
import sys
from dataclasses import replace

import click
from dotenv import load_dotenv

from .config import Settings
from .container import Clients
from .database import ping_database
from .cache import ping_cache
from .exceptions import ConfigurationError


def _load_settings() -> Settings:
    load_dotenv()
    try:
        settings = Settings.from_env()
    except ConfigurationError as e:
        click.echo(f"✗ Invalid configuration: {e}", err=True)
        sys.exit(1)
    logging.basicConfig(
        level=getattr(logging, settings.log_level),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )
    return settings


async def _check(settings: Settings, wait: bool) -> dict:
    # one redis attempt per ping; retries are driven from here
    async with Clients.build(replace(settings, redis_max_retries=0)) as clients:
        if wait:
            await clients.wait_ready()
            return {"database": None, "cache": None}

        results = {}
        for name, probe in (
            ("database", lambda: ping_database(clients.async_engine)),
            ("cache", lambda: ping_cache(clients.async_cache)),
        ):
            try:
                await probe()
                results[name] = None
            except Exception as e:
                results[name] = str(e)
        return results


@click.group()
@click.version_option(version="0.1.0")
def cli():
    """api-clients - database and cache client tools"""
    pass


@cli.group()
def config():
    """Configuration commands"""
    pass


@config.command()
def show():
    """Print the effective configuration"""
    settings = _load_settings()
    click.echo(json.dumps(settings.as_dict(), indent=2))


@cli.command()
@click.option("--wait", is_flag=True, help="Keep retrying with backoff until both are reachable")
def check(wait: bool):
    """Check that the database and the cache are reachable"""
    settings = _load_settings()
    results = asyncio.run(_check(settings, wait))

    failed = False
    for name, error in results.items():
        if error is None:
            click.echo(f"✓ {name} reachable")
        else:
            failed = True
            click.echo(f"✗ {name} unreachable: {error}", err=True)
    if failed:
        sys.exit(1)


if __name__ == "__main__":
    cli()
