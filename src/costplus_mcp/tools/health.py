"""Health check tool for costplus-mcp.

Exposes the upstream health probe via MCP for monitoring and orchestration.
"""

import logging
import time
from dataclasses import asdict

from mcp.server.fastmcp import FastMCP

from costplus_mcp.core.naming import canonical_tool
from costplus_mcp.core.services import ServiceContainer

logger = logging.getLogger(__name__)

TOOL_NAME = "health_check"


async def health_check_action(services: ServiceContainer) -> dict:
    """Run the health probe and wrap the verdict in a success envelope.

    An unhealthy upstream is still a successful *check*; the verdict is in
    ``data.payload.status``.
    """
    start = time.perf_counter()
    verdict = await services.health.check()
    warnings = [] if verdict.is_healthy else [f"Cost Plus Drugs API is {verdict.status.value}"]
    return asdict(services.formatter.wrap_success(verdict.to_dict(), start, warnings=warnings))


def register_health_tools(mcp: FastMCP, services: ServiceContainer) -> None:
    """Register health check tools with the FastMCP server.

    Args:
        mcp: FastMCP server instance
        services: Shared service container
    """

    @canonical_tool(
        mcp,
        canonical_name=TOOL_NAME,
    )
    async def health_check() -> dict:
        """
        Check whether the Cost Plus Drugs API is reachable.

        Sends a minimal GraphQL probe and reports a verdict.

        Returns:
            JSON object whose data.payload has:
            - status: "healthy", "degraded", or "unhealthy"
            - latency_ms: Time spent probing
            - endpoints: Probe name -> success flag
        """
        return await health_check_action(services)
