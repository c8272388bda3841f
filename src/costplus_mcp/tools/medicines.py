"""Medication search tool.

``search_medicines`` runs the ``SearchMedicines`` query and, when a search
term is given, narrows the returned product edges to those whose name,
brand name, or any collection name contains the term (case-insensitive).
"""

import logging
from typing import Any, Dict, List

from mcp.server.fastmcp import FastMCP
from pydantic import BaseModel, Field

from costplus_mcp.core.errors.upstream import ResponseShapeError
from costplus_mcp.core.naming import canonical_tool
from costplus_mcp.core.services import ServiceContainer
from costplus_mcp.tools.common import run_tool

logger = logging.getLogger(__name__)

TOOL_NAME = "search_medicines"


class SearchMedicinesInput(BaseModel):
    """Input for ``search_medicines``."""

    query: str = Field(
        default="",
        description="The medication name or search term to look for (empty for all)",
    )


def _product_matches(product: Dict[str, Any], needle: str) -> bool:
    name = product.get("name") or ""
    if needle in str(name).lower():
        return True

    metafields = product.get("metafields") or {}
    if isinstance(metafields, dict):
        brand = metafields.get("brandName")
        if brand and needle in str(brand).lower():
            return True

    for collection in product.get("collections") or []:
        if isinstance(collection, dict) and needle in str(collection.get("name") or "").lower():
            return True

    return False


def filter_products_by_query(edges: List[Dict[str, Any]], query: str) -> List[Dict[str, Any]]:
    """Return the edges whose product name, brand name or collection name contains ``query``.

    An empty (or whitespace-only) query returns ``edges`` unchanged.
    """
    needle = query.strip().lower()
    if not needle:
        return list(edges)
    return [edge for edge in edges if _product_matches(edge.get("node") or {}, needle)]


def apply_search_filter(payload: Any, query: str, *, endpoint: str = "") -> Any:
    """Filter a ``SearchMedicines`` response by ``query``.

    The filtered response keeps only ``data.products`` with its edges
    replaced. An empty query returns ``payload`` untouched.

    Raises:
        ResponseShapeError: ``query`` is non-empty and the payload has no
            ``data.products.edges`` list (for example a GraphQL error body).
    """
    if not query.strip():
        return payload

    products = (payload.get("data") or {}).get("products") if isinstance(payload, dict) else None
    if not isinstance(products, dict) or not isinstance(products.get("edges"), list):
        upstream_errors = payload.get("errors") if isinstance(payload, dict) else None
        raise ResponseShapeError(
            endpoint,
            "data.products.edges",
            upstream_errors=upstream_errors if isinstance(upstream_errors, list) else None,
        )

    filtered = filter_products_by_query(products["edges"], query)
    logger.debug("Filtered %d of %d products for query %r", len(filtered), len(products["edges"]), query)
    return {"data": {"products": {**products, "edges": filtered}}}


async def search_medicines_action(services: ServiceContainer, raw_input: Dict[str, Any]) -> dict:
    """Validate input, query the storefront and envelope the filtered result."""

    async def handler(params: SearchMedicinesInput) -> Any:
        response = await services.client.search_medicines(params.query or "")
        return apply_search_filter(response, params.query, endpoint=services.client.endpoint)

    return await run_tool(services, TOOL_NAME, SearchMedicinesInput, raw_input, handler)


def register_medicine_tools(mcp: FastMCP, services: ServiceContainer) -> None:
    """Register medication search tools with the FastMCP server.

    Args:
        mcp: FastMCP server instance
        services: Shared service container
    """

    @canonical_tool(
        mcp,
        canonical_name=TOOL_NAME,
    )
    async def search_medicines(query: str = "") -> dict:
        """
        Search for medications by name ONLY.

        Finds medications whose name, brand name, or category name contains
        the query (generic or brand name, e.g. "metformin", "lisinopril").

        To browse by condition or category (like "diabetes"), use
        get_collections to find the category, then get_all_products with its
        collection ID.

        Args:
            query: Exact or partial medication name. Empty returns everything.

        Returns:
            JSON object with the matching products in data.payload plus
            result metadata in data.additional_info.
        """
        return await search_medicines_action(services, {"query": query})
