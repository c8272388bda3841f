"""MCP resource registrations."""

from costplus_mcp.resources.collections import register_collection_resources

__all__ = ["register_collection_resources"]
