"""Pytest configuration and fixtures."""

from unittest.mock import AsyncMock

import pytest

from jira_gateway.gateway.batch import BatchExecutor
from jira_gateway.gateway.connection import ConnectionGate
from jira_gateway.gateway.router import ToolRouter
from jira_gateway.remote.client import JiraClient
from jira_gateway.remote.models import ErrorKind, Failure, RemoteRequest, Success
from jira_gateway.tools import CATALOG

MYSELF = {"name": "jdoe", "displayName": "Jane Doe", "emailAddress": "jane@example.com"}


def _routes(routes: dict[tuple[str, str], object]):
    """Build a ``JiraClient.call`` side effect answering by (method, path).

    Values may be an outcome or a callable taking the request. Unrouted
    requests fail with NotFound.
    """

    async def call(request: RemoteRequest, timeout=None):
        answer = routes.get((request.method, request.path))
        if answer is None:
            return Failure(ErrorKind.NOT_FOUND, f"HTTP 404: Not Found - {request.path}", 404)
        if callable(answer):
            return answer(request)
        return answer

    return call


@pytest.fixture
def jira_client():
    """A JiraClient double whose identity probe succeeds."""
    client = AsyncMock(spec=JiraClient)
    client.call.side_effect = _routes({("GET", "/rest/api/2/myself"): Success(MYSELF)})
    return client


@pytest.fixture
def gate(jira_client):
    return ConnectionGate(jira_client)


@pytest.fixture
def tool_router(jira_client, gate):
    return ToolRouter(
        catalog=CATALOG,
        client=jira_client,
        gate=gate,
        batch=BatchExecutor(jira_client),
    )


@pytest.fixture
def jira_routes():
    """Factory for ``JiraClient.call`` side effects keyed by (method, path)."""
    return _routes
