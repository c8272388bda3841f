"""Registration helper for the Cost Plus Drugs MCP tools."""

from __future__ import annotations

from typing import Any, Callable, Optional

from mcp.server.fastmcp import FastMCP
from mcp.types import ToolAnnotations

from costplus_mcp.core.observability import mcp_tool

# Every tool only reads from the public storefront API
STOREFRONT_QUERY = ToolAnnotations(
    readOnlyHint=True,
    destructiveHint=False,
    idempotentHint=True,
    openWorldHint=True,
)


def canonical_tool(
    mcp: FastMCP,
    *,
    canonical_name: str,
    annotations: Optional[ToolAnnotations] = None,
    **tool_kwargs: Any,
) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
    """Register a tool under its canonical name with metrics and audit wrapping.

    Tools default to :data:`STOREFRONT_QUERY` annotations.
    """

    def decorator(func: Callable[..., Any]) -> Callable[..., Any]:
        return mcp.tool(
            name=canonical_name,
            annotations=annotations or STOREFRONT_QUERY,
            **tool_kwargs,
        )(mcp_tool(tool_name=canonical_name)(func))

    return decorator
