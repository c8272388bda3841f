"""GraphQL query layer for the Cost Plus Drugs storefront.

Three fixed queries run against the ``default-channel`` storefront:

    - ``SearchMedicines``    – products matching a medication search term
    - ``GetCollectionPaths`` – medication categories, optionally filtered
    - ``GetAllProducts``     – paginated, name-sorted products filtered by collection

All calls go through the ``RetryOrchestrator`` so they share its timeout,
classification, retry and correlation behaviour.
"""

import json
import logging
from typing import Any, Dict, List, Optional

from costplus_mcp.core.client.retry import RetryOrchestrator

logger = logging.getLogger(__name__)

STOREFRONT_CHANNEL = "default-channel"
DEFAULT_SORT_DIRECTION = "ASC"
DEFAULT_SORT_FIELD = "NAME"

_PRODUCT_NODE_FIELDS = """
              id
              name
              slug
              collections {
                name
                slug
                __typename
              }
              priceCalculation
              retailPrice
              variants {
                id
                sku
                metafields(keys: [
                  "retailPricePerUnit","form","slug","sku","package_size",
                  "is_active","insuranceEligible","cashEligible"
                ])
                images { url __typename }
                specialtyMedication
                __typename
              }
              isAvailable
              metafields(keys: ["brandGeneric","brandName","external_promotion","medication_full_display_name"])
              __typename"""

SEARCH_MEDICINES_QUERY = (
    """
      query SearchMedicines($medicationSearch: String) {
        products(
          channel: "default-channel"
          first: 1000
          medicationSearch: $medicationSearch
        ) {
          edges {
            node {"""
    + _PRODUCT_NODE_FIELDS
    + """
            }
            __typename
          }
          __typename
        }
      }
    """
)

GET_COLLECTION_PATHS_QUERY = """
      query GetCollectionPaths($search: String) {
        collections(first: 1000, channel: "default-channel", filter: { search: $search }) {
          edges {
            node {
              id
              name
              slug
              __typename
            }
            __typename
          }
          __typename
        }
      }
    """

GET_ALL_PRODUCTS_QUERY = (
    """
      query GetAllProducts(
        $before: String, $after: String, $first: Int, $last: Int,
        $direction: OrderDirection!, $productOrderField: ProductOrderField!, $collection: [ID!]
      ) {
        products(
          first: $first
          last: $last
          channel: "default-channel"
          after: $after
          before: $before
          sortBy: { direction: $direction, field: $productOrderField }
          filter: { collections: $collection }
        ) {
          edges {
            node {"""
    + _PRODUCT_NODE_FIELDS
    + """
            }
            __typename
          }
          totalCount
          pageInfo { startCursor endCursor hasNextPage hasPreviousPage __typename }
          __typename
        }
      }
    """
)


def build_graphql_body(query: str, variables: Optional[Dict[str, Any]] = None) -> str:
    """Serialize a GraphQL request body."""
    return json.dumps({"query": query, "variables": variables or {}})


class CostPlusGraphQLClient:
    """Typed entry points for the storefront queries.

    Args:
        orchestrator: Retry orchestrator wrapping the request dispatcher
        endpoint: GraphQL endpoint path (e.g. ``"/graphql/"``)
    """

    def __init__(self, orchestrator: RetryOrchestrator, endpoint: str = "/graphql/"):
        self._orchestrator = orchestrator
        self._endpoint = endpoint

    @property
    def endpoint(self) -> str:
        return self._endpoint

    async def perform_graphql_call(self, query: str, variables: Optional[Dict[str, Any]] = None) -> Any:
        """POST ``{query, variables}`` to the GraphQL endpoint and return the payload."""
        return await self._orchestrator.call(self._endpoint, build_graphql_body(query, variables))

    async def search_medicines(self, medication_search: str = "") -> Any:
        return await self.perform_graphql_call(
            SEARCH_MEDICINES_QUERY,
            {"medicationSearch": medication_search},
        )

    async def get_collection_paths(self, search: str = "") -> Any:
        return await self.perform_graphql_call(
            GET_COLLECTION_PATHS_QUERY,
            {"search": search},
        )

    async def get_all_products(
        self,
        *,
        first: Optional[int] = None,
        last: Optional[int] = None,
        before: Optional[str] = None,
        after: Optional[str] = None,
        collection: Optional[List[str]] = None,
        direction: str = DEFAULT_SORT_DIRECTION,
        product_order_field: str = DEFAULT_SORT_FIELD,
    ) -> Any:
        """Fetch one page of products.

        Unset pagination arguments are omitted from the variables so the
        upstream applies its own defaults.
        """
        variables: Dict[str, Any] = {
            "direction": direction,
            "productOrderField": product_order_field,
        }
        for name, value in (("first", first), ("last", last), ("before", before), ("after", after)):
            if value is not None:
                variables[name] = value
        if collection:
            variables["collection"] = list(collection)

        return await self.perform_graphql_call(GET_ALL_PRODUCTS_QUERY, variables)
