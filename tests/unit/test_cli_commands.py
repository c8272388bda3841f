"""Unit tests for the costplus-mcp CLI."""

import json
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from click.testing import CliRunner

from costplus_mcp import __version__
from costplus_mcp.cli import cli
from costplus_mcp.config.server import ServerConfig
from costplus_mcp.core.client.health import HealthStatus, HealthVerdict


@pytest.fixture
def cli_runner():
    return CliRunner()


@pytest.fixture
def config_file(tmp_path):
    path = tmp_path / "costplus-mcp.toml"
    path.write_text('[logging]\nlevel = "WARNING"\n[api]\nbase_url = "https://api.costplus.test"\n')
    return str(path)


@pytest.fixture(autouse=True)
def no_logging_setup():
    with patch.object(ServerConfig, "setup_logging"):
        yield


def mock_services(status: HealthStatus) -> MagicMock:
    verdict = HealthVerdict(
        status=status,
        latency_ms=3.2,
        endpoints={"graphql_endpoint": status is HealthStatus.HEALTHY},
    )
    services = MagicMock()
    services.health.check = AsyncMock(return_value=verdict)
    return services


class TestVersion:
    """Tests for --version."""

    def test_version(self, cli_runner):
        result = cli_runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output


class TestServeCommand:
    """Tests for the serve command."""

    @patch("costplus_mcp.server.run_server")
    @patch("costplus_mcp.server.create_server")
    def test_defaults_to_configured_transport(self, mock_create, mock_run, cli_runner, config_file):
        result = cli_runner.invoke(cli, ["serve", "--config", config_file])

        assert result.exit_code == 0, result.output
        config = mock_create.call_args.args[0]
        assert config.transport.transport == "stdio"
        assert config.api.base_url == "https://api.costplus.test"
        mock_run.assert_called_once_with(mock_create.return_value, config)

    @patch("costplus_mcp.server.run_server")
    @patch("costplus_mcp.server.create_server")
    def test_transport_overrides(self, mock_create, mock_run, cli_runner, config_file):
        result = cli_runner.invoke(
            cli,
            ["serve", "--config", config_file, "--transport", "http", "--host", "0.0.0.0", "--port", "9001"],
        )

        assert result.exit_code == 0, result.output
        config = mock_create.call_args.args[0]
        assert config.transport.transport == "streamable-http"
        assert config.transport.host == "0.0.0.0"
        assert config.transport.port == 9001

    def test_invalid_transport_rejected(self, cli_runner, config_file):
        result = cli_runner.invoke(cli, ["serve", "--config", config_file, "--transport", "smoke-signals"])
        assert result.exit_code == 2

    def test_invalid_base_url_emits_error(self, cli_runner, tmp_path):
        bad = tmp_path / "bad.toml"
        bad.write_text('[api]\nbase_url = "ftp://nope"\n')

        result = cli_runner.invoke(cli, ["serve", "--config", str(bad)])

        assert result.exit_code == 1
        data = json.loads(result.output)
        assert data["success"] is False
        assert data["data"]["error_code"] == "VALIDATION_ERROR"


class TestHealthCommand:
    """Tests for the health command."""

    @patch("costplus_mcp.core.services.build_services")
    def test_healthy(self, mock_build, cli_runner, config_file):
        mock_build.return_value = mock_services(HealthStatus.HEALTHY)

        result = cli_runner.invoke(cli, ["health", "--config", config_file])

        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["success"] is True
        assert data["data"]["status"] == "healthy"
        assert "warnings" not in data["meta"]

    @patch("costplus_mcp.core.services.build_services")
    def test_degraded_warns(self, mock_build, cli_runner, config_file):
        mock_build.return_value = mock_services(HealthStatus.DEGRADED)

        result = cli_runner.invoke(cli, ["health", "--config", config_file])

        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["meta"]["warnings"] == ["Cost Plus Drugs API is degraded"]

    @patch("costplus_mcp.core.services.build_services")
    def test_unhealthy_exits_nonzero(self, mock_build, cli_runner, config_file):
        mock_build.return_value = mock_services(HealthStatus.UNHEALTHY)

        result = cli_runner.invoke(cli, ["health", "--config", config_file])

        assert result.exit_code == 1
        data = json.loads(result.output)
        assert data["success"] is False
        assert data["data"]["error_code"] == "UPSTREAM_UNAVAILABLE"
        assert data["data"]["verdict"]["status"] == "unhealthy"
