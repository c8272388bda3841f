"""Configuration package for costplus-mcp.

Callers use ``from costplus_mcp.config import ServerConfig`` etc.

Sub-modules:
    parsing    – Boolean/integer/header parsing helpers
    domains    – ApiConfig, HealthConfig, TransportConfig
    server     – ServerConfig dataclass, get_config/set_config globals
    loader     – ServerConfig loading/validation mixin (_ServerConfigLoader)
"""

from costplus_mcp.config.domains import (  # noqa: F401
    DEFAULT_BASE_URL,
    DEFAULT_GRAPHQL_ENDPOINT,
    ApiConfig,
    HealthConfig,
    TransportConfig,
)
from costplus_mcp.config.server import (  # noqa: F401
    _PACKAGE_VERSION,
    ServerConfig,
    get_config,
    set_config,
)
