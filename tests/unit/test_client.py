"""Tests for the Jira client: request building and outcome classification."""

import asyncio
import json

import httpx
import pytest

from jira_gateway.remote.client import JiraClient
from jira_gateway.remote.models import ErrorKind, Failure, RemoteRequest, Success

BASE_URL = "https://jira.example.com"
TOKEN = "secret-token"


def _client(handler, base_url: str = BASE_URL, timeout: float = 5.0) -> JiraClient:
    return JiraClient(
        base_url=base_url,
        access_token=TOKEN,
        timeout=timeout,
        transport=httpx.MockTransport(handler),
    )


class TestRequestBuilding:
    """Tests for what the client sends to Jira."""

    async def test_sends_bearer_token_and_json_headers(self):
        """Every request carries the static bearer credential."""
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={"ok": True})

        client = _client(handler)
        await client.call(RemoteRequest("GET", "/rest/api/2/myself"))

        assert seen[0].headers["Authorization"] == f"Bearer {TOKEN}"
        assert seen[0].headers["Accept"] == "application/json"
        assert seen[0].url.path == "/rest/api/2/myself"

    async def test_query_drops_none_and_lowercases_booleans(self):
        """None parameters are omitted; booleans use Jira's lowercase form."""
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(204)

        client = _client(handler)
        await client.call(
            RemoteRequest(
                "DELETE",
                "/rest/api/2/issue/PROJ-1",
                params={"deleteSubtasks": False, "expand": None},
            )
        )

        assert dict(seen[0].url.params) == {"deleteSubtasks": "false"}

    async def test_json_body_is_sent(self):
        """Request bodies are JSON encoded."""
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(json.loads(request.content))
            return httpx.Response(201, json={"key": "PROJ-2"})

        client = _client(handler)
        outcome = await client.call(
            RemoteRequest("POST", "/rest/api/2/issue", body={"fields": {"summary": "Hi"}})
        )

        assert seen == [{"fields": {"summary": "Hi"}}]
        assert outcome == Success({"key": "PROJ-2"})

    async def test_base_url_path_prefix_is_kept(self):
        """A context path in JIRA_URL prefixes every endpoint."""
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request.url.path)
            return httpx.Response(200, json={})

        client = _client(handler, base_url="https://example.com/jira/")
        await client.call(RemoteRequest("GET", "/rest/api/2/myself"))

        assert seen == ["/jira/rest/api/2/myself"]


class TestSuccessClassification:
    """2xx and 3xx responses are successes."""

    async def test_json_payload(self):
        client = _client(lambda request: httpx.Response(200, json={"displayName": "Jane"}))

        outcome = await client.call(RemoteRequest("GET", "/rest/api/2/myself"))

        assert isinstance(outcome, Success)
        assert outcome.payload == {"displayName": "Jane"}

    async def test_empty_body_is_none(self):
        client = _client(lambda request: httpx.Response(204))

        outcome = await client.call(RemoteRequest("PUT", "/rest/api/2/issue/PROJ-1"))

        assert outcome == Success(None)

    async def test_non_json_body_is_text(self):
        client = _client(lambda request: httpx.Response(200, text="plain"))

        outcome = await client.call(RemoteRequest("GET", "/status"))

        assert outcome == Success("plain")

    async def test_application_error_body_on_2xx_passes_through(self):
        """Bodies are not reinterpreted on success statuses."""
        body = {"errorMessages": ["partial"], "errors": {}}
        client = _client(lambda request: httpx.Response(200, json=body))

        outcome = await client.call(RemoteRequest("GET", "/rest/api/2/search"))

        assert outcome == Success(body)

    async def test_redirect_is_not_followed(self):
        """A 3xx is returned as-is; the Location is never requested."""
        calls = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request.url.path)
            return httpx.Response(302, headers={"Location": f"{BASE_URL}/login.jsp"})

        client = _client(handler)
        outcome = await client.call(RemoteRequest("GET", "/rest/api/2/myself"))

        assert isinstance(outcome, Success)
        assert calls == ["/rest/api/2/myself"]


class TestFailureClassification:
    """Error statuses and transport problems map onto ErrorKind."""

    @pytest.mark.parametrize(
        "status,kind",
        [
            (401, ErrorKind.UNAUTHORIZED),
            (403, ErrorKind.FORBIDDEN),
            (404, ErrorKind.NOT_FOUND),
            (400, ErrorKind.UPSTREAM_ERROR),
            (500, ErrorKind.UPSTREAM_ERROR),
        ],
    )
    async def test_status_kinds(self, status, kind):
        client = _client(lambda request: httpx.Response(status, json={"errorMessages": ["nope"]}))

        outcome = await client.call(RemoteRequest("GET", "/rest/api/2/issue/PROJ-1"))

        assert isinstance(outcome, Failure)
        assert outcome.kind is kind
        assert outcome.status_code == status
        assert outcome.message.startswith(f"HTTP {status}: ")
        assert "nope" in outcome.message

    async def test_error_body_is_truncated(self):
        """At most 200 characters of the body are kept for diagnostics."""
        client = _client(lambda request: httpx.Response(400, text="x" * 1000))

        outcome = await client.call(RemoteRequest("POST", "/rest/api/2/issue"))

        assert outcome.message == "HTTP 400: Bad Request - " + "x" * 200

    async def test_connect_error_is_unreachable(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        client = _client(handler)
        outcome = await client.call(RemoteRequest("GET", "/rest/api/2/myself"))

        assert outcome.kind is ErrorKind.UNREACHABLE
        assert BASE_URL in outcome.message

    @pytest.mark.parametrize("error", [httpx.ReadTimeout, httpx.ConnectTimeout, httpx.PoolTimeout])
    async def test_transport_timeouts_are_timeout(self, error):
        """Timeouts are never reported as Unreachable, even though no response arrived."""

        def handler(request: httpx.Request) -> httpx.Response:
            raise error("timed out", request=request)

        client = _client(handler)
        outcome = await client.call(RemoteRequest("GET", "/rest/api/2/myself"))

        assert outcome.kind is ErrorKind.TIMEOUT

    async def test_budget_exceeded_is_timeout(self):
        """The overall budget abandons a call that never answers."""

        async def handler(request: httpx.Request) -> httpx.Response:
            await asyncio.sleep(5)
            return httpx.Response(200, json={})

        client = _client(handler, timeout=0.05)
        outcome = await client.call(RemoteRequest("GET", "/rest/api/2/myself"))

        assert outcome.kind is ErrorKind.TIMEOUT
        assert "0.05s" in outcome.message

    async def test_local_fault_is_unknown(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise RuntimeError("boom")

        client = _client(handler)
        outcome = await client.call(RemoteRequest("GET", "/rest/api/2/myself"))

        assert outcome == Failure(ErrorKind.UNKNOWN, "boom")

