"""Tests for layered configuration loading (defaults -> TOML -> env)."""

import os
from contextlib import contextmanager
from pathlib import Path
from unittest.mock import patch

import pytest

from costplus_mcp.config import ServerConfig
from costplus_mcp.config.domains import DEFAULT_BASE_URL, ApiConfig, TransportConfig


@contextmanager
def isolated(home: Path, cwd: Path, env=None):
    """Run with a fake home directory, a fake cwd and a controlled environment."""
    with patch.object(Path, "home", return_value=home):
        with patch.dict(os.environ, env or {}, clear=True):
            original_cwd = os.getcwd()
            os.chdir(cwd)
            try:
                yield
            finally:
                os.chdir(original_cwd)


@pytest.fixture
def home_dir(tmp_path):
    path = tmp_path / "home"
    path.mkdir()
    return path


@pytest.fixture
def project_dir(tmp_path):
    path = tmp_path / "project"
    path.mkdir()
    return path


class TestDefaults:
    """Tests for values used when nothing is configured."""

    def test_defaults(self, home_dir, project_dir):
        with isolated(home_dir, project_dir):
            config = ServerConfig.from_env()

        assert config.log_level == "INFO"
        assert config.api.base_url == DEFAULT_BASE_URL
        assert config.api.graphql_endpoint == "/graphql/"
        assert config.api.timeout_ms == 30000
        assert config.api.retry_attempts == 3
        assert config.api.retry_delay_ms == 1000
        assert config.transport.transport == "stdio"
        assert config.auth_enabled is False
        assert config.health.enabled is True
        assert config.startup_warnings == []


class TestApiConfig:
    """Tests for ApiConfig helpers."""

    def test_trailing_slash_stripped(self):
        assert ApiConfig(base_url="https://example.test/").base_url == "https://example.test"

    def test_derived_values(self):
        config = ApiConfig(base_url="https://example.test", timeout_ms=1500, retry_delay_ms=250)
        assert config.timeout_seconds == 1.5
        assert config.retry_delay_seconds == 0.25
        assert config.graphql_url == "https://example.test/graphql/"

    def test_from_toml_dict_warnings(self):
        warnings = []
        config = ApiConfig.from_toml_dict(
            {"timeout_ms": "soon", "retry_attempts": 0, "headers": {"X-Client": "tests"}},
            warnings=warnings,
        )

        assert config.timeout_ms == 30000
        assert config.retry_attempts == 1
        assert config.headers["X-Client"] == "tests"
        assert config.headers["Content-Type"] == "application/json"
        assert len(warnings) == 2

    def test_boolean_rejected_as_integer(self):
        warnings = []
        config = ApiConfig.from_toml_dict({"timeout_ms": True}, warnings=warnings)
        assert config.timeout_ms == 30000
        assert warnings


class TestTomlLayers:
    """Tests for XDG -> home -> project layering."""

    def test_home_config(self, home_dir, project_dir):
        (home_dir / ".costplus-mcp.toml").write_text('[logging]\nlevel = "DEBUG"\n')

        with isolated(home_dir, project_dir):
            config = ServerConfig.from_env()

        assert config.log_level == "DEBUG"

    def test_xdg_then_home_then_project(self, home_dir, project_dir):
        xdg_dir = home_dir / ".config" / "costplus-mcp"
        xdg_dir.mkdir(parents=True)
        (xdg_dir / "config.toml").write_text('[logging]\nlevel = "ERROR"\n[api]\ntimeout_ms = 1000\n')
        (home_dir / ".costplus-mcp.toml").write_text('[logging]\nlevel = "DEBUG"\n')
        (project_dir / "costplus-mcp.toml").write_text('[logging]\nlevel = "WARNING"\n')

        with isolated(home_dir, project_dir):
            config = ServerConfig.from_env()

        assert config.log_level == "WARNING"
        assert config.api.timeout_ms == 1000

    def test_hidden_project_config(self, home_dir, project_dir):
        (project_dir / ".costplus-mcp.toml").write_text('[server]\ntransport = "http"\nport = 9000\n')

        with isolated(home_dir, project_dir):
            config = ServerConfig.from_env()

        assert config.transport.transport == "streamable-http"
        assert config.transport.port == 9000

    def test_explicit_config_file_skips_layers(self, home_dir, project_dir, tmp_path):
        (home_dir / ".costplus-mcp.toml").write_text('[logging]\nlevel = "DEBUG"\n')
        explicit = tmp_path / "explicit.toml"
        explicit.write_text('[api]\nbase_url = "https://staging.example.test/"\nretry_attempts = 5\n')

        with isolated(home_dir, project_dir):
            config = ServerConfig.from_env(str(explicit))

        assert config.log_level == "INFO"
        assert config.api.base_url == "https://staging.example.test"
        assert config.api.retry_attempts == 5

    def test_server_name_does_not_reset_transport(self, home_dir, project_dir):
        (project_dir / "costplus-mcp.toml").write_text('[server]\nname = "custom"\n')

        with isolated(home_dir, project_dir, {"COSTPLUS_MCP_PORT": "9100"}):
            config = ServerConfig.from_env()

        assert config.server_name == "custom"
        assert config.transport.port == 9100

    def test_invalid_toml_becomes_warning(self, home_dir, project_dir):
        (project_dir / "costplus-mcp.toml").write_text("[logging\nlevel=")

        with isolated(home_dir, project_dir):
            config = ServerConfig.from_env()

        assert any("could not be loaded" in w for w in config.startup_warnings)

    def test_auth_and_health_sections(self, home_dir, project_dir):
        (project_dir / "costplus-mcp.toml").write_text(
            '[auth]\napi_keys = ["k1", "k2"]\nrequire_auth = true\n'
            '[health]\nenabled = false\nprobe_query = "query Ping { __typename }"\n'
        )

        with isolated(home_dir, project_dir):
            config = ServerConfig.from_env()

        assert config.api_keys == ["k1", "k2"]
        assert config.auth_enabled is True
        assert config.health.enabled is False
        assert config.health.probe_query == "query Ping { __typename }"


class TestEnvironment:
    """Tests for COSTPLUS_MCP_* environment overrides."""

    def test_env_overrides_toml(self, home_dir, project_dir):
        (project_dir / "costplus-mcp.toml").write_text('[api]\ntimeout_ms = 1000\n')
        env = {
            "COSTPLUS_MCP_TIMEOUT_MS": "2500",
            "COSTPLUS_MCP_RETRY_ATTEMPTS": "4",
            "COSTPLUS_MCP_RETRY_DELAY_MS": "0",
            "COSTPLUS_MCP_API_BASE_URL": "http://localhost:9999/",
            "COSTPLUS_MCP_GRAPHQL_ENDPOINT": "graphql",
            "COSTPLUS_MCP_LOG_LEVEL": "debug",
            "COSTPLUS_MCP_TRANSPORT": "streamable-http",
            "COSTPLUS_MCP_HOST": "0.0.0.0",
        }

        with isolated(home_dir, project_dir, env):
            config = ServerConfig.from_env()

        assert config.api.timeout_ms == 2500
        assert config.api.retry_attempts == 4
        assert config.api.retry_delay_ms == 0
        assert config.api.base_url == "http://localhost:9999"
        assert config.api.graphql_endpoint == "/graphql"
        assert config.log_level == "DEBUG"
        assert config.transport.transport == "streamable-http"
        assert config.transport.host == "0.0.0.0"

    def test_invalid_numbers_keep_defaults(self, home_dir, project_dir):
        env = {"COSTPLUS_MCP_TIMEOUT_MS": "fast", "COSTPLUS_MCP_PORT": "eighty"}

        with isolated(home_dir, project_dir, env):
            config = ServerConfig.from_env()

        assert config.api.timeout_ms == 30000
        assert config.transport.port == 8000
        assert len(config.startup_warnings) == 2

    def test_api_keys_and_require_auth(self, home_dir, project_dir):
        env = {"COSTPLUS_MCP_API_KEYS": "a, b,,", "COSTPLUS_MCP_REQUIRE_AUTH": "true"}

        with isolated(home_dir, project_dir, env):
            config = ServerConfig.from_env()

        assert config.api_keys == ["a", "b"]
        assert config.validate_api_key("a") is True
        assert config.validate_api_key("c") is False
        assert config.validate_api_key(None) is False

    def test_require_auth_without_keys_warns(self, home_dir, project_dir):
        with isolated(home_dir, project_dir, {"COSTPLUS_MCP_REQUIRE_AUTH": "1"}):
            config = ServerConfig.from_env()

        assert config.auth_enabled is False
        assert config.validate_api_key(None) is True
        assert any("no API keys" in w for w in config.startup_warnings)

    def test_invalid_log_level_falls_back(self, home_dir, project_dir):
        with isolated(home_dir, project_dir, {"COSTPLUS_MCP_LOG_LEVEL": "chatty"}):
            config = ServerConfig.from_env()
        assert config.log_level == "INFO"

    def test_non_http_base_url_rejected(self, home_dir, project_dir):
        with isolated(home_dir, project_dir, {"COSTPLUS_MCP_API_BASE_URL": "ftp://example.test"}):
            with pytest.raises(ValueError, match="base URL"):
                ServerConfig.from_env()

    def test_config_file_from_env(self, home_dir, project_dir, tmp_path):
        explicit = tmp_path / "env.toml"
        explicit.write_text('[logging]\nlevel = "ERROR"\n')

        with isolated(home_dir, project_dir, {"COSTPLUS_MCP_CONFIG_FILE": str(explicit)}):
            config = ServerConfig.from_env()

        assert config.log_level == "ERROR"


class TestTransportConfig:
    """Tests for TransportConfig parsing."""

    def test_invalid_transport_falls_back_to_stdio(self):
        assert TransportConfig.from_toml_dict({"transport": "carrier-pigeon"}).transport == "stdio"
