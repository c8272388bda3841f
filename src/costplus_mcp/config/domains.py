"""Domain-specific configuration dataclasses.

Contains small, focused configuration classes for distinct infrastructure
domains: the upstream API client, health checks, and the HTTP transport.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from costplus_mcp.config.parsing import (
    _clamp_min,
    _normalize_transport,
    _parse_bool,
    _parse_headers,
    _parse_int,
)

DEFAULT_BASE_URL = "https://api.costplusdrugs.com"
DEFAULT_GRAPHQL_ENDPOINT = "/graphql/"
DEFAULT_USER_AGENT = "costplus-mcp"


def _default_headers() -> Dict[str, str]:
    return {
        "Content-Type": "application/json",
        "Accept": "application/json",
        "User-Agent": DEFAULT_USER_AGENT,
    }


@dataclass
class ApiConfig:
    """Configuration for the Cost Plus Drugs GraphQL client.

    Attributes:
        base_url: Scheme + host of the upstream API (no trailing slash)
        graphql_endpoint: Path of the GraphQL endpoint, appended to base_url
        timeout_ms: Per-attempt deadline in milliseconds
        retry_attempts: Maximum number of attempts per logical request
        retry_delay_ms: Base delay for linear backoff between attempts
        headers: Default headers sent with every request
        data_source: Label reported in response metadata
        api_version: Version label reported in response metadata
    """

    base_url: str = DEFAULT_BASE_URL
    graphql_endpoint: str = DEFAULT_GRAPHQL_ENDPOINT
    timeout_ms: int = 30000
    retry_attempts: int = 3
    retry_delay_ms: int = 1000
    headers: Dict[str, str] = field(default_factory=_default_headers)
    data_source: str = "Cost Plus Drugs API"
    api_version: str = "v1"

    def __post_init__(self) -> None:
        self.base_url = self.base_url.rstrip("/")

    @property
    def timeout_seconds(self) -> float:
        return self.timeout_ms / 1000.0

    @property
    def retry_delay_seconds(self) -> float:
        return self.retry_delay_ms / 1000.0

    @property
    def graphql_url(self) -> str:
        return f"{self.base_url}{self.graphql_endpoint}"

    @classmethod
    def from_toml_dict(
        cls,
        data: Dict[str, Any],
        *,
        warnings: Optional[List[str]] = None,
    ) -> "ApiConfig":
        """Create config from TOML dict (typically [api] section).

        Invalid numeric values keep their defaults; a message describing each
        rejected value is appended to ``warnings`` when provided.

        Args:
            data: Dict from TOML parsing
            warnings: Optional list collecting startup warnings

        Returns:
            ApiConfig instance
        """
        collected: List[str] = []
        config = cls(
            base_url=str(data.get("base_url", DEFAULT_BASE_URL)),
            graphql_endpoint=str(data.get("graphql_endpoint", DEFAULT_GRAPHQL_ENDPOINT)),
            data_source=str(data.get("data_source", "Cost Plus Drugs API")),
            api_version=str(data.get("api_version", "v1")),
        )
        config.set_numeric(data, collected, source="[api]")

        if "headers" in data:
            extra_headers, header_warnings = _parse_headers(data["headers"], source="[api].headers")
            config.headers.update(extra_headers)
            collected.extend(header_warnings)

        if warnings is not None:
            warnings.extend(collected)
        return config

    def set_numeric(self, values: Dict[str, Any], warnings: List[str], *, source: str) -> None:
        """Apply ``timeout_ms``/``retry_attempts``/``retry_delay_ms`` from a mapping."""
        for name, minimum in (("timeout_ms", 1), ("retry_attempts", 1), ("retry_delay_ms", 0)):
            if name not in values:
                continue
            parsed, warning = _parse_int(values[name], source=f"{source}.{name}")
            if warning:
                warnings.append(warning)
                continue
            assert parsed is not None
            clamped, warning = _clamp_min(parsed, minimum, source=f"{source}.{name}")
            if warning:
                warnings.append(warning)
            setattr(self, name, clamped)


@dataclass
class HealthConfig:
    """Configuration for the upstream health probe.

    Attributes:
        enabled: Whether the health tool and ``/health`` route are registered
        probe_query: GraphQL document sent as the probe
    """

    enabled: bool = True
    probe_query: str = "query { __typename }"

    @classmethod
    def from_toml_dict(cls, data: Dict[str, Any]) -> "HealthConfig":
        """Create config from TOML dict (typically [health] section)."""
        return cls(
            enabled=_parse_bool(data.get("enabled", True)),
            probe_query=str(data.get("probe_query", "query { __typename }")),
        )


@dataclass
class TransportConfig:
    """Configuration for how the MCP server is exposed.

    Attributes:
        transport: ``stdio`` or ``streamable-http``
        host: Bind address for the HTTP transport
        port: Bind port for the HTTP transport
    """

    transport: str = "stdio"
    host: str = "127.0.0.1"
    port: int = 8000

    @classmethod
    def from_toml_dict(
        cls,
        data: Dict[str, Any],
        *,
        warnings: Optional[List[str]] = None,
    ) -> "TransportConfig":
        """Create config from TOML dict (the transport keys of [server])."""
        config = cls(
            transport=_normalize_transport(str(data.get("transport", "stdio"))),
            host=str(data.get("host", "127.0.0.1")),
        )
        if "port" in data:
            port, warning = _parse_int(data["port"], source="[server].port")
            if warning:
                if warnings is not None:
                    warnings.append(warning)
            else:
                assert port is not None
                config.port = port
        return config
