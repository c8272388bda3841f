"""MCP server for the Cost Plus Drugs medication catalogue."""

from costplus_mcp.config.server import _PACKAGE_VERSION as __version__

__all__ = ["__version__"]
