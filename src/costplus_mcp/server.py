"""FastMCP server assembly and entry point for costplus-mcp.

``create_server`` builds the service container once and hands it to every
tool registration. ``main`` loads configuration, sets up logging and runs the
server over stdio or streamable HTTP.
"""

import logging
from typing import Optional

import httpx
import uvicorn
from mcp.server.fastmcp import FastMCP
from starlette.requests import Request
from starlette.responses import JSONResponse

from costplus_mcp.config.server import ServerConfig, set_config
from costplus_mcp.core.authorization import BearerAuthMiddleware
from costplus_mcp.core.client.health import HealthStatus
from costplus_mcp.core.client.retry import SleepFunc
from costplus_mcp.core.services import ServiceContainer, build_services
from costplus_mcp.resources import register_collection_resources
from costplus_mcp.tools import (
    register_collection_tools,
    register_health_tools,
    register_medicine_tools,
    register_product_tools,
)

logger = logging.getLogger(__name__)

SERVER_INSTRUCTIONS = (
    "Query the Cost Plus Drugs medication catalogue. Use search_medicines for a "
    "medication name, get_collections to find a category ID, and get_all_products "
    "to page through the medications in a category."
)


def _register_routes(mcp: FastMCP, services: ServiceContainer) -> None:
    config = services.config

    @mcp.custom_route("/", methods=["GET"])
    async def root(request: Request) -> JSONResponse:
        return JSONResponse(
            {
                "name": config.server_name,
                "version": config.server_version,
                "transport": config.transport.transport,
            }
        )

    if not config.health.enabled:
        return

    @mcp.custom_route("/health", methods=["GET"])
    async def health(request: Request) -> JSONResponse:
        verdict = await services.health.check()
        status_code = 503 if verdict.status is HealthStatus.UNHEALTHY else 200
        return JSONResponse(verdict.to_dict(), status_code=status_code)


def create_server(
    config: Optional[ServerConfig] = None,
    *,
    transport: Optional[httpx.AsyncBaseTransport] = None,
    sleep_func: Optional[SleepFunc] = None,
) -> FastMCP:
    """Create and configure the FastMCP server instance.

    Args:
        config: Server configuration (defaults to ``ServerConfig.from_env()``)
        transport: Optional httpx transport for the upstream client
        sleep_func: Optional sleep override for retry backoff

    Returns:
        Configured FastMCP server with all tools and resources registered
    """
    if config is None:
        config = ServerConfig.from_env()

    services = build_services(config, transport=transport, sleep_func=sleep_func)

    mcp = FastMCP(
        name=config.server_name,
        instructions=SERVER_INSTRUCTIONS,
        host=config.transport.host,
        port=config.transport.port,
    )

    register_medicine_tools(mcp, services)
    register_collection_tools(mcp, services)
    register_product_tools(mcp, services)
    if config.health.enabled:
        register_health_tools(mcp, services)
    register_collection_resources(mcp, config)
    _register_routes(mcp, services)

    logger.info(
        "Server %s %s ready (upstream %s)",
        config.server_name,
        config.server_version,
        config.api.graphql_url,
    )
    return mcp


def run_server(mcp: FastMCP, config: ServerConfig) -> None:
    """Run ``mcp`` on the configured transport. Blocks until shutdown."""
    if config.transport.transport == "streamable-http":
        app = mcp.streamable_http_app()
        app.add_middleware(BearerAuthMiddleware, config=config)
        logger.info("Serving streamable HTTP on %s:%d", config.transport.host, config.transport.port)
        uvicorn.run(
            app,
            host=config.transport.host,
            port=config.transport.port,
            log_level=config.log_level.lower(),
        )
        return

    logger.info("Serving over stdio")
    mcp.run(transport="stdio")


def main(config_file: Optional[str] = None) -> None:
    """Load configuration, set up logging and run the server."""
    config = ServerConfig.from_env(config_file)
    set_config(config)
    config.setup_logging()
    run_server(create_server(config), config)


if __name__ == "__main__":
    main()
