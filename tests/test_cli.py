"""Tests for the api-clients command line"""
import json
from unittest.mock import AsyncMock, patch

from click.testing import CliRunner

from api_clients.cli import cli
from api_clients.container import Clients


def test_config_show_prints_masked_settings():
    runner = CliRunner()

    result = runner.invoke(cli, ["config", "show"], env={
        "REDIS_HOST": "redis.local",
        "REDIS_PASSWORD": "topsecret",
    })

    assert result.exit_code == 0
    data = json.loads(result.stdout)
    assert data["redis_host"] == "redis.local"
    assert data["redis_port"] == 6379
    assert data["redis_password"] == "***"
    assert "topsecret" not in result.output


def test_config_show_fails_on_malformed_port():
    runner = CliRunner()

    result = runner.invoke(cli, ["config", "show"], env={"REDIS_PORT": "not-a-port"})

    assert result.exit_code == 1
    assert "REDIS_PORT" in result.output


def test_check_reports_reachable():
    runner = CliRunner()

    with patch("api_clients.cli.ping_database", AsyncMock(return_value=True)), \
            patch("api_clients.cli.ping_cache", AsyncMock(return_value=True)):
        result = runner.invoke(cli, ["check"])

    assert result.exit_code == 0
    assert "database reachable" in result.output
    assert "cache reachable" in result.output


def test_check_fails_when_cache_is_down():
    runner = CliRunner()

    with patch("api_clients.cli.ping_database", AsyncMock(return_value=True)), \
            patch("api_clients.cli.ping_cache", AsyncMock(side_effect=OSError("connection refused"))):
        result = runner.invoke(cli, ["check"])

    assert result.exit_code == 1
    assert "cache unreachable: connection refused" in result.output


def test_check_wait_uses_supervisors():
    runner = CliRunner()

    with patch("api_clients.container.Clients.wait_ready", AsyncMock()) as wait_ready:
        result = runner.invoke(cli, ["check", "--wait"])

    assert result.exit_code == 0
    wait_ready.assert_awaited_once()
    assert "database reachable" in result.output


def test_check_pings_with_single_attempt_clients():
    runner = CliRunner()
    built = []
    real_build = Clients.build

    def build(settings):
        clients = real_build(settings)
        built.append(clients)
        return clients

    with patch("api_clients.cli.Clients.build", side_effect=build), \
            patch("api_clients.cli.ping_database", AsyncMock(return_value=True)), \
            patch("api_clients.cli.ping_cache", AsyncMock(return_value=True)):
        result = runner.invoke(cli, ["check"], env={"REDIS_MAX_RETRIES": "7"})

    assert result.exit_code == 0
    assert len(built) == 1
    assert built[0].settings.redis_max_retries == 0
    for client in (built[0].cache, built[0].async_cache):
        assert client.connection_pool.connection_kwargs["retry"]._retries == 0
