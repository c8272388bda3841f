"""MCP tool registrations.

Each module exposes ``register_*_tools(mcp, services)`` plus a plain
``*_action`` coroutine holding the tool logic.
"""

from costplus_mcp.tools.collections import register_collection_tools
from costplus_mcp.tools.health import register_health_tools
from costplus_mcp.tools.medicines import register_medicine_tools
from costplus_mcp.tools.products import register_product_tools

__all__ = [
    "register_collection_tools",
    "register_health_tools",
    "register_medicine_tools",
    "register_product_tools",
]
