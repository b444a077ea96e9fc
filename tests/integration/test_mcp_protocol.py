"""End-to-end tests through a real MCP client session.

Jira itself is replaced by an httpx mock transport, so the full stack runs:
MCP protocol, router, connection gate, client and classification.
"""

import json

import httpx
import pytest
from mcp.shared.memory import create_connected_server_and_client_session

from jira_gateway.gateway.batch import BatchExecutor
from jira_gateway.gateway.connection import ConnectionGate
from jira_gateway.gateway.router import ToolRouter
from jira_gateway.remote.client import JiraClient
from jira_gateway.server import create_server
from jira_gateway.tools import CATALOG


def fake_jira(request: httpx.Request) -> httpx.Response:
    if request.headers.get("Authorization") != "Bearer good-token":
        return httpx.Response(401, json={"errorMessages": ["Unauthorized"]})
    if request.url.path == "/rest/api/2/myself":
        return httpx.Response(200, json={"name": "jdoe", "displayName": "Jane Doe"})
    if request.url.path == "/rest/api/2/issue/PROJ-1":
        return httpx.Response(200, json={"key": "PROJ-1", "fields": {"summary": "Broken build"}})
    return httpx.Response(404, json={"errorMessages": ["Issue does not exist"]})


def build_server(token: str):
    client = JiraClient(
        base_url="https://jira.example.com",
        access_token=token,
        transport=httpx.MockTransport(fake_jira),
    )
    router = ToolRouter(
        catalog=CATALOG,
        client=client,
        gate=ConnectionGate(client),
        batch=BatchExecutor(client),
    )
    return create_server(router)


@pytest.fixture
def server():
    return build_server("good-token")


@pytest.fixture
def rejected_server():
    return build_server("stale-token")


class TestMcpProtocol:
    async def test_list_tools(self, server):
        async with create_connected_server_and_client_session(server) as session:
            result = await session.list_tools()

        assert len(result.tools) == 32
        assert {tool.name for tool in result.tools} == set(CATALOG)

    async def test_call_tool_returns_json_text(self, server):
        async with create_connected_server_and_client_session(server) as session:
            await session.list_tools()
            result = await session.call_tool("jira_get_issue", {"issueKey": "PROJ-1"})

        assert result.isError is False
        assert json.loads(result.content[0].text)["key"] == "PROJ-1"

    async def test_not_found_is_an_error_result(self, server):
        async with create_connected_server_and_client_session(server) as session:
            await session.list_tools()
            result = await session.call_tool("jira_get_issue", {"issueKey": "GONE-1"})

        payload = json.loads(result.content[0].text)
        assert result.isError is True
        assert payload["kind"] == "NotFound"
        assert payload["tool"] == "jira_get_issue"

    async def test_missing_argument_is_reported_by_the_gateway(self, server):
        async with create_connected_server_and_client_session(server) as session:
            await session.list_tools()
            result = await session.call_tool("jira_get_issue", {})

        assert result.isError is True
        assert json.loads(result.content[0].text)["kind"] == "CallerArgumentError"

    async def test_rejected_credentials_hide_tools_and_block_calls(self, rejected_server):
        async with create_connected_server_and_client_session(rejected_server) as session:
            listing = await session.list_tools()
            result = await session.call_tool("jira_get_issue", {"issueKey": "PROJ-1"})

        payload = json.loads(result.content[0].text)
        assert listing.tools == []
        assert result.isError is True
        assert payload["kind"] == "ConnectionUnavailable"
        assert "expired" in payload["details"]
