"""Paginated product listing tool.

``get_all_products`` always sorts by name ascending. The ``collection``
filter accepts several shapes, all normalized to a list of storefront
collection IDs (base64 of ``"Collection:{n}"``):

    31                               -> ["Q29sbGVjdGlvbjozMQ=="]
    "31"                             -> ["Q29sbGVjdGlvbjozMQ=="]
    "Q29sbGVjdGlvbjozMQ=="           -> ["Q29sbGVjdGlvbjozMQ=="]
    '["Q29sbGVjdGlvbjozMQ==", 34]'   -> ["Q29sbGVjdGlvbjozMQ==", "Q29sbGVjdGlvbjozNA=="]
    ["Q29sbGVjdGlvbjozMQ==", 34]     -> same as above
"""

import base64
import json
import logging
from typing import Any, Dict, List, Optional, Union

from mcp.server.fastmcp import FastMCP
from pydantic import BaseModel, Field, StrictInt, StrictStr

from costplus_mcp.core.client.graphql import DEFAULT_SORT_DIRECTION, DEFAULT_SORT_FIELD
from costplus_mcp.core.errors.upstream import ToolInputValidationError
from costplus_mcp.core.naming import canonical_tool
from costplus_mcp.core.services import ServiceContainer
from costplus_mcp.tools.common import run_tool

logger = logging.getLogger(__name__)

TOOL_NAME = "get_all_products"
MAX_PAGE_SIZE = 1000
DEFAULT_PAGE_SIZE = 25

CollectionItem = Union[StrictInt, StrictStr]
CollectionFilter = Union[StrictInt, StrictStr, List[CollectionItem]]


class GetAllProductsInput(BaseModel):
    """Input for ``get_all_products``."""

    before: Optional[str] = Field(default=None, description="Cursor for previous page of results")
    after: Optional[str] = Field(default=None, description="Cursor for next page of results")
    first: Optional[int] = Field(
        default=DEFAULT_PAGE_SIZE,
        ge=1,
        le=MAX_PAGE_SIZE,
        description="Number of products to return from the start (default 25, max 1000)",
    )
    last: Optional[int] = Field(
        default=None,
        ge=1,
        le=MAX_PAGE_SIZE,
        description="Number of products to return from the end (max 1000)",
    )
    collection: Optional[CollectionFilter] = Field(
        default=None,
        description=(
            "Collection ID (string like 'Q29sbGVjdGlvbjozMQ=='), numeric ID (like 31), "
            "or array of IDs to filter by category"
        ),
    )


def encode_collection_id(number: int) -> str:
    """Storefront global ID for numeric collection ``number``."""
    return base64.b64encode(f"Collection:{number}".encode("utf-8")).decode("ascii")


def _invalid_collection(message: str) -> ToolInputValidationError:
    return ToolInputValidationError(
        TOOL_NAME,
        [{"loc": ("collection",), "msg": message, "type": "value_error"}],
    )


def _normalize_item(item: Any) -> Optional[str]:
    # JSON array strings can smuggle in true/false, null, floats or objects
    if isinstance(item, bool) or not isinstance(item, (int, str)):
        raise _invalid_collection(f"unsupported collection ID {item!r}")
    if isinstance(item, int):
        return encode_collection_id(item)
    text = item.strip()
    if not text:
        return None
    if text.isascii() and text.isdigit():
        return encode_collection_id(int(text))
    return text


def _normalize_items(items: List[Any]) -> Optional[List[str]]:
    normalized: List[str] = []
    for item in items:
        value = _normalize_item(item)
        if value is not None and value not in normalized:
            normalized.append(value)
    if items and not normalized:
        raise _invalid_collection("collection filter contains no usable IDs")
    return normalized or None


def normalize_collection_filter(value: Optional[CollectionFilter]) -> Optional[List[str]]:
    """Normalize any accepted ``collection`` shape into a list of IDs, or ``None``.

    A string starting with ``[`` is parsed as a JSON array. If that parse
    fails the whole string is used as a single ID and a warning is logged.
    Only ASCII digit strings are read as numeric IDs.

    Raises:
        ToolInputValidationError: an item is not an int or string, or a
            non-empty list holds nothing but blank strings.
    """
    if value is None:
        return None

    if isinstance(value, list):
        return _normalize_items(value)

    if isinstance(value, str):
        text = value.strip()
        if text.startswith("["):
            try:
                parsed = json.loads(text)
            except ValueError:
                logger.warning("Collection filter %r is not a valid JSON array; using it as a single ID", value)
                return [text]
            if isinstance(parsed, list):
                return _normalize_items(parsed)
            return [text]

    item = _normalize_item(value)
    return [item] if item is not None else None


async def get_all_products_action(services: ServiceContainer, raw_input: Dict[str, Any]) -> dict:
    async def handler(params: GetAllProductsInput) -> Any:
        return await services.client.get_all_products(
            first=params.first,
            last=params.last,
            before=params.before,
            after=params.after,
            collection=normalize_collection_filter(params.collection),
            direction=DEFAULT_SORT_DIRECTION,
            product_order_field=DEFAULT_SORT_FIELD,
        )

    # Omitted arguments fall back to the schema defaults (first=25)
    cleaned = {key: value for key, value in raw_input.items() if value is not None}
    return await run_tool(services, TOOL_NAME, GetAllProductsInput, cleaned, handler)


def register_product_tools(mcp: FastMCP, services: ServiceContainer) -> None:
    """Register product listing tools with the FastMCP server.

    Args:
        mcp: FastMCP server instance
        services: Shared service container
    """

    @canonical_tool(
        mcp,
        canonical_name=TOOL_NAME,
    )
    async def get_all_products(
        before: Optional[str] = None,
        after: Optional[str] = None,
        first: Optional[int] = DEFAULT_PAGE_SIZE,
        last: Optional[int] = None,
        collection: Optional[Union[int, str, List[Union[int, str]]]] = None,
    ) -> dict:
        """
        Retrieve medications from Cost Plus Drugs with filtering and pagination.

        Results are always sorted alphabetically by name (A-Z).

        Args:
            before: Cursor for the previous page
            after: Cursor for the next page (pageInfo.endCursor of the last response)
            first: Number of products from the start (default 25, max 1000)
            last: Number of products from the end (max 1000)
            collection: Category filter. Accepts a base64 ID
                ("Q29sbGVjdGlvbjozMQ==" is Diabetes), a numeric ID (31), or an
                array of IDs (["Q29sbGVjdGlvbjozMQ==", "Q29sbGVjdGlvbjozNA=="])

        Returns:
            JSON object with the products, totalCount and pageInfo in
            data.payload plus result metadata in data.additional_info.
        """
        return await get_all_products_action(
            services,
            {
                "before": before,
                "after": after,
                "first": first,
                "last": last,
                "collection": collection,
            },
        )
