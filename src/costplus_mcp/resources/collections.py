"""Medication collections resource.

Serves the static collection catalogue without touching the upstream API:

    cost-plus-drugs://collections                     every collection
    cost-plus-drugs://collections/search/{query}      name/slug substring match
    cost-plus-drugs://collections/{collection_id}     exact ID match
"""

import logging
from dataclasses import dataclass
from typing import List, Optional

from mcp.server.fastmcp import FastMCP

from costplus_mcp.config.server import ServerConfig
from costplus_mcp.core.observability import mcp_resource
from costplus_mcp.resources.collections_data import COLLECTIONS

logger = logging.getLogger(__name__)

RESOURCE_NAME = "cost_plus_drugs_collections"
RESOURCE_URI = "cost-plus-drugs://collections"


@dataclass(frozen=True)
class Collection:
    id: str
    name: str
    slug: str

    @property
    def uri(self) -> str:
        return f"{RESOURCE_URI}/{self.id}"

    def to_text(self) -> str:
        return f"ID: {self.id}\nName: {self.name}\nSlug: {self.slug}\nCategory: Medication Collection"


CATALOGUE: tuple[Collection, ...] = tuple(Collection(*entry) for entry in COLLECTIONS)


def search_collections(query: Optional[str] = None) -> List[Collection]:
    """Collections whose name or slug contains ``query`` (case-insensitive).

    An empty query returns the whole catalogue.
    """
    needle = (query or "").strip().lower()
    if not needle:
        return list(CATALOGUE)
    return [c for c in CATALOGUE if needle in c.name.lower() or needle in c.slug.lower()]


def get_collection(collection_id: str) -> Optional[Collection]:
    """Exact-match lookup by collection ID."""
    for collection in CATALOGUE:
        if collection.id == collection_id:
            return collection
    return None


def render_collections(collections: List[Collection]) -> str:
    return "\n\n".join(c.to_text() for c in collections)


def register_collection_resources(mcp: FastMCP, config: ServerConfig) -> None:
    """Register the collections resources with the FastMCP server.

    Args:
        mcp: FastMCP server instance
        config: Server configuration
    """

    @mcp.resource(
        RESOURCE_URI,
        name=RESOURCE_NAME,
        description=(
            f"Medication categories available on Cost Plus Drugs ({len(CATALOGUE)} collections). "
            "Use a collection ID with the get_all_products tool."
        ),
        mime_type="text/plain",
    )
    @mcp_resource(resource_type="collections")
    def list_collections() -> str:
        return render_collections(search_collections())

    @mcp.resource(
        f"{RESOURCE_URI}/search/{{query}}",
        name=f"{RESOURCE_NAME}_search",
        description="Medication categories whose name or slug contains the query.",
        mime_type="text/plain",
    )
    @mcp_resource(resource_type="collections")
    def find_collections(query: str) -> str:
        matches = search_collections(query)
        logger.debug("Collection search %r matched %d collections", query, len(matches))
        return render_collections(matches)

    @mcp.resource(
        f"{RESOURCE_URI}/{{collection_id}}",
        name=f"{RESOURCE_NAME}_by_id",
        description="A single medication category by its collection ID.",
        mime_type="text/plain",
    )
    @mcp_resource(resource_type="collections")
    def read_collection(collection_id: str) -> str:
        collection = get_collection(collection_id)
        if collection is None:
            raise ValueError(f"Collection '{collection_id}' not found")
        return collection.to_text()
