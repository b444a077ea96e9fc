"""Tests for the HTTP surface."""

import pytest
from fastapi.testclient import TestClient

from jira_gateway.api.app import create_app
from jira_gateway.remote.models import ErrorKind, Failure, Success


@pytest.fixture
def http(tool_router):
    with TestClient(create_app(tool_router)) as client:
        yield client


class TestHealth:
    def test_unvalidated_before_first_listing(self, http, jira_client):
        response = http.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "unvalidated"
        jira_client.call.assert_not_called()

    def test_healthy_after_listing(self, http):
        http.get("/tools")

        body = http.get("/health").json()

        assert body["status"] == "healthy"
        assert body["user"] == "Jane Doe"


class TestTools:
    def test_lists_catalog_with_input_schema(self, http):
        response = http.get("/tools")

        tools = response.json()["tools"]
        assert len(tools) == 32
        assert tools[0]["name"] == "jira_get_issue"
        assert tools[0]["inputSchema"]["required"] == ["issueKey"]
        assert "input_schema" not in tools[0]

    def test_empty_when_connection_invalid(self, http, jira_client, jira_routes):
        jira_client.call.side_effect = jira_routes(
            {("GET", "/rest/api/2/myself"): Failure(ErrorKind.UNREACHABLE, "Cannot connect to Jira")}
        )

        assert http.get("/tools").json() == {"tools": []}
        assert http.get("/health").json()["status"] == "unhealthy"


class TestExecute:
    def test_success(self, http, jira_client, jira_routes):
        jira_client.call.side_effect = jira_routes(
            {("GET", "/rest/api/2/issueLinkType"): Success({"issueLinkTypes": []})}
        )

        response = http.post("/execute", json={"tool_name": "jira_get_issue_link_types"})

        body = response.json()
        assert response.status_code == 200
        assert body["status"] == "success"
        assert body["isError"] is False
        assert body["output"] == {"issueLinkTypes": []}

    def test_unknown_tool_is_reported_in_body(self, http):
        response = http.post("/execute", json={"tool_name": "jira_nope", "arguments": {}})

        body = response.json()
        assert response.status_code == 200
        assert body["status"] == "error"
        assert body["isError"] is True
        assert body["output"]["kind"] == "UnknownOperation"


def test_shutdown_closes_client(tool_router, jira_client):
    with TestClient(create_app(tool_router)):
        pass

    jira_client.close.assert_awaited_once()
