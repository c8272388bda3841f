"""
Smoke tests for the assembled MCP server.

Verifies that create_server registers every tool and resource without schema
errors, that tools answer end-to-end through the real client stack (with
httpx.MockTransport standing in for the upstream), and that the HTTP routes
and bearer auth are wired.
"""

import json

import httpx
import pytest
from starlette.testclient import TestClient

from costplus_mcp.config.domains import HealthConfig
from costplus_mcp.core.authorization import BearerAuthMiddleware
from costplus_mcp.server import create_server
from tests.helpers import SEARCH_PAYLOAD, json_handler, make_config

pytestmark = pytest.mark.integration

TOOL_NAMES = ("search_medicines", "get_collections", "get_all_products", "health_check")


@pytest.fixture
def test_config():
    return make_config()


@pytest.fixture
def mcp_server(test_config, fake_sleep):
    return create_server(test_config, transport=httpx.MockTransport(json_handler(SEARCH_PAYLOAD)), sleep_func=fake_sleep)


def tool_payload(result) -> dict:
    # call_tool returns either a content list or (content, structured) depending on SDK version
    content = result[0] if isinstance(result, tuple) else result
    return json.loads(content[0].text)


class TestMCPServerCreation:
    """Tests for MCP server creation."""

    def test_server_creates_successfully(self, test_config):
        assert create_server(test_config) is not None

    def test_server_has_name(self, mcp_server, test_config):
        assert mcp_server.name == test_config.server_name


class TestToolRegistration:
    """Tests for tool registration."""

    @pytest.mark.parametrize("name", TOOL_NAMES)
    def test_tool_registered(self, mcp_server, name):
        assert name in mcp_server._tool_manager._tools

    def test_health_tool_disabled(self, test_config):
        test_config.health = HealthConfig(enabled=False)
        server = create_server(test_config)
        assert "health_check" not in server._tool_manager._tools

    @pytest.mark.asyncio
    async def test_tool_schemas_expose_parameters(self, mcp_server):
        tools = {tool.name: tool for tool in await mcp_server.list_tools()}
        assert set(tools["get_all_products"].inputSchema["properties"]) == {
            "before",
            "after",
            "first",
            "last",
            "collection",
        }
        assert "query" in tools["search_medicines"].inputSchema["properties"]

    @pytest.mark.asyncio
    async def test_tools_marked_read_only(self, mcp_server):
        tools = await mcp_server.list_tools()

        assert {tool.name for tool in tools} == set(TOOL_NAMES)
        for tool in tools:
            assert tool.annotations.readOnlyHint is True
            assert tool.annotations.destructiveHint is False
            assert tool.annotations.openWorldHint is True


class TestResourceRegistration:
    """Tests for resource registration."""

    @pytest.mark.asyncio
    async def test_collections_resource_listed(self, mcp_server):
        uris = [str(resource.uri) for resource in await mcp_server.list_resources()]
        assert "cost-plus-drugs://collections" in uris

    @pytest.mark.asyncio
    async def test_collection_templates_listed(self, mcp_server):
        templates = [t.uriTemplate for t in await mcp_server.list_resource_templates()]
        assert "cost-plus-drugs://collections/search/{query}" in templates
        assert "cost-plus-drugs://collections/{collection_id}" in templates


class TestToolCalls:
    """End-to-end tool calls through FastMCP."""

    @pytest.mark.asyncio
    async def test_search_medicines(self, mcp_server):
        payload = tool_payload(await mcp_server.call_tool("search_medicines", {"query": "metformin"}))

        assert payload["success"] is True
        edges = payload["data"]["payload"]["data"]["products"]["edges"]
        assert [e["node"]["name"] for e in edges] == ["Metformin ER (Glucophage XR)"]

    @pytest.mark.asyncio
    async def test_get_all_products_validation_failure(self, mcp_server):
        payload = tool_payload(await mcp_server.call_tool("get_all_products", {"first": 5000}))

        assert payload["success"] is False
        assert payload["data"]["error_code"] == "VALIDATION_ERROR"


class TestHttpRoutes:
    """Tests for the HTTP routes and auth middleware."""

    def test_root_and_health_routes(self, mcp_server):
        client = TestClient(mcp_server.streamable_http_app())

        root = client.get("/")
        assert root.status_code == 200
        assert root.json()["name"] == "costplus-mcp-test"

        health = client.get("/health")
        assert health.status_code == 200
        assert health.json()["status"] == "healthy"

    def test_unhealthy_upstream_returns_503(self, test_config, fake_sleep):
        server = create_server(
            test_config,
            transport=httpx.MockTransport(json_handler({}, status_code=500)),
            sleep_func=fake_sleep,
        )
        response = TestClient(server.streamable_http_app()).get("/health")

        assert response.status_code == 503
        assert response.json()["status"] == "unhealthy"

    def test_mcp_endpoint_requires_bearer_token(self, test_config, fake_sleep):
        test_config.api_keys = ["secret-key"]
        test_config.require_auth = True
        server = create_server(test_config, sleep_func=fake_sleep)
        app = server.streamable_http_app()
        app.add_middleware(BearerAuthMiddleware, config=test_config)
        client = TestClient(app)

        response = client.post("/mcp", json={})
        assert response.status_code == 401
        assert response.json()["code"] == "MISSING_AUTH"

        assert client.get("/").status_code == 200
