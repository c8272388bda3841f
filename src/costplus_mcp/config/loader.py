"""ServerConfig loading and validation logic.

Provides ``_ServerConfigLoader``, a mixin class whose methods are inherited by
``ServerConfig`` (defined in ``server.py``).  Splitting loading/validation
logic into its own module keeps ``server.py`` focused on field definitions and
simple accessor methods.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import TYPE_CHECKING, Any, List, Optional, cast

if TYPE_CHECKING:
    from costplus_mcp.config.server import ServerConfig

try:
    import tomllib
except ImportError:
    import tomli as tomllib  # Python < 3.11 fallback

from costplus_mcp.config.domains import ApiConfig, HealthConfig, TransportConfig
from costplus_mcp.config.parsing import (
    _normalize_log_level,
    _normalize_transport,
    _parse_int,
    _try_parse_bool,
)

logger = logging.getLogger(__name__)

ENV_PREFIX = "COSTPLUS_MCP_"


class _ServerConfigLoader:
    """Mixin providing config-loading methods for ``ServerConfig``.

    These methods are inherited by the ``ServerConfig`` dataclass defined in
    ``server.py``.  At runtime ``self`` is always a ``ServerConfig`` instance.
    """

    if TYPE_CHECKING:
        log_level: str
        structured_logging: bool
        api_keys: List[str]
        require_auth: bool
        server_name: str
        server_version: str
        api: ApiConfig
        health: HealthConfig
        transport: TransportConfig
        startup_warnings: List[str]

        def _add_startup_warning(self, message: str) -> None: ...

    @classmethod
    def from_env(cls, config_file: Optional[str] = None) -> "ServerConfig":
        """
        Create configuration from environment variables and optional TOML file.

        Priority (highest to lowest):
        1. Environment variables
        2. Project TOML config (./costplus-mcp.toml or ./.costplus-mcp.toml)
        3. User TOML config (~/.costplus-mcp.toml)
        4. XDG config (~/.config/costplus-mcp/config.toml)
        5. Default values
        """
        config = cls()

        toml_path = config_file or os.environ.get(f"{ENV_PREFIX}CONFIG_FILE")
        if toml_path:
            config._load_toml(Path(toml_path))
        else:
            xdg_config_home = os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config")
            xdg_config = Path(xdg_config_home) / "costplus-mcp" / "config.toml"
            if xdg_config.exists():
                config._load_toml(xdg_config)
                logger.debug("Loaded XDG config from %s", xdg_config)

            home_config = Path.home() / ".costplus-mcp.toml"
            if home_config.exists():
                config._load_toml(home_config)
                logger.debug("Loaded user config from %s", home_config)

            project_config = Path("costplus-mcp.toml")
            if project_config.exists():
                config._load_toml(project_config)
                logger.debug("Loaded project config from %s", project_config)
            else:
                hidden_config = Path(".costplus-mcp.toml")
                if hidden_config.exists():
                    config._load_toml(hidden_config)
                    logger.debug("Loaded project config from %s", hidden_config)

        config._load_env()
        config._validate_startup_configuration()

        return cast("ServerConfig", config)

    def _load_toml(self, path: Path) -> None:
        """Load configuration from TOML file."""
        if not path.exists():
            logger.warning("Config file not found: %s", path)
            return

        try:
            with open(path, "rb") as f:
                data = tomllib.load(f)
        except (OSError, tomllib.TOMLDecodeError) as e:
            logger.error("Error loading config file %s: %s", path, e)
            self._add_startup_warning(f"Config file {path} could not be loaded: {e}")
            return

        warnings: List[str] = []

        # Logging settings
        if "logging" in data:
            log = data["logging"]
            if "level" in log:
                self.log_level = _normalize_log_level(log["level"])
            if "structured" in log:
                parsed = _try_parse_bool(log["structured"])
                if parsed is None:
                    warnings.append(f"Ignoring [logging].structured in {path}: expected boolean")
                else:
                    self.structured_logging = parsed

        # Auth settings
        if "auth" in data:
            auth = data["auth"]
            if "api_keys" in auth:
                self.api_keys = [str(k) for k in auth["api_keys"] if str(k).strip()]
            if "require_auth" in auth:
                parsed = _try_parse_bool(auth["require_auth"])
                if parsed is None:
                    warnings.append(f"Ignoring [auth].require_auth in {path}: expected boolean")
                else:
                    self.require_auth = parsed

        # Server settings
        if "server" in data:
            srv = data["server"]
            if "name" in srv:
                self.server_name = str(srv["name"])
            if "version" in srv:
                self.server_version = str(srv["version"])
            if any(key in srv for key in ("transport", "host", "port")):
                self.transport = TransportConfig.from_toml_dict(srv, warnings=warnings)

        # Upstream API settings
        if "api" in data:
            api_data = data["api"]
            if isinstance(api_data, dict):
                self.api = ApiConfig.from_toml_dict(api_data, warnings=warnings)
            else:
                warnings.append(f"Ignoring [api] in {path}: expected table/dict, got {type(api_data).__name__}")

        # Health check settings
        if "health" in data:
            self.health = HealthConfig.from_toml_dict(data["health"])

        for warning in warnings:
            self._add_startup_warning(f"{path}: {warning}")

    def _load_env(self) -> None:
        """Load configuration from environment variables."""
        warnings: List[str] = []

        # Log level
        if level := os.environ.get(f"{ENV_PREFIX}LOG_LEVEL"):
            self.log_level = _normalize_log_level(level)

        # API keys
        if keys := os.environ.get(f"{ENV_PREFIX}API_KEYS"):
            self.api_keys = [k.strip() for k in keys.split(",") if k.strip()]

        # Require auth
        if require := os.environ.get(f"{ENV_PREFIX}REQUIRE_AUTH"):
            self.require_auth = require.lower() in ("true", "1", "yes")

        # Upstream API
        if base_url := os.environ.get(f"{ENV_PREFIX}API_BASE_URL"):
            self.api.base_url = base_url.strip().rstrip("/")
        if endpoint := os.environ.get(f"{ENV_PREFIX}GRAPHQL_ENDPOINT"):
            self.api.graphql_endpoint = endpoint.strip()

        numeric: dict[str, Any] = {}
        for field_name, env_suffix in (
            ("timeout_ms", "TIMEOUT_MS"),
            ("retry_attempts", "RETRY_ATTEMPTS"),
            ("retry_delay_ms", "RETRY_DELAY_MS"),
        ):
            raw = os.environ.get(f"{ENV_PREFIX}{env_suffix}")
            if raw:
                numeric[field_name] = raw
        if numeric:
            self.api.set_numeric(numeric, warnings, source="env")

        # Transport
        if transport := os.environ.get(f"{ENV_PREFIX}TRANSPORT"):
            self.transport.transport = _normalize_transport(transport)
        if host := os.environ.get(f"{ENV_PREFIX}HOST"):
            self.transport.host = host.strip()
        if port_raw := os.environ.get(f"{ENV_PREFIX}PORT"):
            port, warning = _parse_int(port_raw, source=f"{ENV_PREFIX}PORT")
            if warning:
                warnings.append(warning)
            elif port is not None:
                self.transport.port = port

        for warning in warnings:
            self._add_startup_warning(warning)

    def _validate_startup_configuration(self) -> None:
        """Validate startup configuration. Raises on critical misconfigurations."""
        if not self.api.base_url.startswith(("http://", "https://")):
            raise ValueError(f"Invalid API base URL {self.api.base_url!r}: expected an http(s) URL")

        if not self.api.graphql_endpoint.startswith("/"):
            self.api.graphql_endpoint = f"/{self.api.graphql_endpoint}"

        if self.require_auth and not self.api_keys:
            self._add_startup_warning(
                "require_auth is enabled but no API keys are configured; HTTP requests will not be authenticated"
            )

        for warning in self.startup_warnings:
            logger.warning("Configuration warning: %s", warning)
