"""Medication category (collection) listing tool."""

import logging
from typing import Any, Dict, Optional

from mcp.server.fastmcp import FastMCP
from pydantic import BaseModel, Field

from costplus_mcp.core.naming import canonical_tool
from costplus_mcp.core.services import ServiceContainer
from costplus_mcp.tools.common import run_tool

logger = logging.getLogger(__name__)

TOOL_NAME = "get_collections"


class GetCollectionsInput(BaseModel):
    """Input for ``get_collections``."""

    search: Optional[str] = Field(
        default=None,
        description="Optional search term to filter collections by name (empty for all)",
    )


async def get_collections_action(services: ServiceContainer, raw_input: Dict[str, Any]) -> dict:
    async def handler(params: GetCollectionsInput) -> Any:
        return await services.client.get_collection_paths(params.search or "")

    return await run_tool(services, TOOL_NAME, GetCollectionsInput, raw_input, handler)


def register_collection_tools(mcp: FastMCP, services: ServiceContainer) -> None:
    """Register collection browsing tools with the FastMCP server.

    Args:
        mcp: FastMCP server instance
        services: Shared service container
    """

    @canonical_tool(
        mcp,
        canonical_name=TOOL_NAME,
    )
    async def get_collections(search: Optional[str] = None) -> dict:
        """
        Browse the medication categories (collections) on Cost Plus Drugs.

        Returns each category's ID, name and slug. Pass the ID (or its
        numeric form, e.g. 31 for Diabetes) to get_all_products to list the
        medications in that category.

        WHEN TO USE:
        - List ALL categories (omit search)
        - Find a category by name (search: "diabetes", "heart")

        Args:
            search: Optional name filter. Leave empty to get every collection.

        Returns:
            JSON object with the collections in data.payload plus result
            metadata in data.additional_info.
        """
        return await get_collections_action(services, {"search": search})
