"""Builders and sample payloads shared by the costplus-mcp tests."""

import json
from typing import Any, Callable, Optional
from unittest.mock import MagicMock

import httpx

from costplus_mcp.config.domains import ApiConfig
from costplus_mcp.config.server import ServerConfig

TEST_BASE_URL = "https://api.costplus.test"

Handler = Callable[[httpx.Request], httpx.Response]


# ---------------------------------------------------------------------------
# Sample upstream payloads
# ---------------------------------------------------------------------------

SEARCH_PAYLOAD = {
    "data": {
        "products": {
            "edges": [
                {
                    "node": {
                        "id": "UHJvZHVjdDox",
                        "name": "Metformin ER (Glucophage XR)",
                        "slug": "metformin-er",
                        "metafields": {"brandName": "Glucophage XR"},
                        "collections": [{"name": "Diabetes"}],
                    }
                },
                {
                    "node": {
                        "id": "UHJvZHVjdDoy",
                        "name": "Lisinopril",
                        "slug": "lisinopril",
                        "metafields": {"brandName": "Zestril"},
                        "collections": [{"name": "Heart Health"}],
                    }
                },
                {
                    "node": {
                        "id": "UHJvZHVjdDoz",
                        "name": "Atorvastatin",
                        "slug": "atorvastatin",
                        "metafields": None,
                        "collections": [{"name": "Cholesterol"}],
                    }
                },
            ]
        }
    }
}

COLLECTIONS_PAYLOAD = {
    "data": {
        "collections": {
            "edges": [
                {"node": {"id": "Q29sbGVjdGlvbjozMQ==", "name": "Diabetes", "slug": "diabetes"}},
            ]
        }
    }
}

PRODUCTS_PAYLOAD = {
    "data": {
        "products": {
            "totalCount": 1,
            "pageInfo": {"hasNextPage": False, "endCursor": "WyJhIl0="},
            "edges": [{"node": {"id": "UHJvZHVjdDox", "name": "Metformin"}}],
        }
    }
}


# ---------------------------------------------------------------------------
# Builders
# ---------------------------------------------------------------------------


def make_config(**api_overrides: Any) -> ServerConfig:
    """ServerConfig pointing at a fake upstream, with quiet logging."""
    api = ApiConfig(base_url=TEST_BASE_URL, **api_overrides)
    return ServerConfig(server_name="costplus-mcp-test", server_version="0.1.0", log_level="WARNING", api=api)


def json_handler(payload: Any, status_code: int = 200, headers: Optional[dict] = None) -> Handler:
    """MockTransport handler answering every request with ``payload``."""

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(status_code, json=payload, headers=headers)

    return handler


def text_handler(text: str, status_code: int = 200) -> Handler:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(status_code, text=text)

    return handler


def sequence_handler(*responses: httpx.Response) -> Handler:
    """Answer successive requests with ``responses`` in order."""
    queue = list(responses)

    def handler(request: httpx.Request) -> httpx.Response:
        return queue.pop(0)

    return handler


def request_json(request: httpx.Request) -> Any:
    return json.loads(request.content.decode("utf-8"))


def make_mock_response(
    status_code: int = 200,
    json_data: Optional[dict] = None,
    text: str = "",
    headers: Optional[dict] = None,
) -> MagicMock:
    """Create a mock httpx.Response."""
    response = MagicMock(spec=httpx.Response)
    response.status_code = status_code
    response.is_success = 200 <= status_code < 300
    response.reason_phrase = "OK" if response.is_success else "Error"
    response.text = json.dumps(json_data) if json_data is not None else text
    response.headers = httpx.Headers(headers or {})
    return response

