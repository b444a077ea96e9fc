"""Async client for the Jira REST API."""

import asyncio
import json
from typing import Any

import httpx

from jira_gateway.core.logging import get_logger
from jira_gateway.remote.models import ErrorKind, Failure, RemoteOutcome, RemoteRequest, Success

logger = get_logger(__name__)

ERROR_BODY_LIMIT = 200


class JiraClient:
    """Issues single Jira REST calls and classifies their outcome.

    Redirects are never followed: a 3xx comes back as a successful outcome so
    a base URL pointing at a login page or proxy is not silently rewritten.

    TLS verification is off by default (``verify_ssl=False``) so that private
    deployments with self-signed certificates work. This trusts whatever
    answers at ``base_url``; enable verification wherever a proper
    certificate chain exists.
    """

    def __init__(
        self,
        base_url: str,
        access_token: str,
        timeout: float = 30.0,
        verify_ssl: bool = False,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            headers={
                "Authorization": f"Bearer {access_token}",
                "Accept": "application/json",
                "Content-Type": "application/json",
            },
            timeout=httpx.Timeout(timeout),
            follow_redirects=False,
            verify=verify_ssl,
            transport=transport,
        )

    async def close(self) -> None:
        """Close the underlying connection pool."""
        await self._client.aclose()

    async def call(self, request: RemoteRequest, timeout: float | None = None) -> RemoteOutcome:
        """Send one request to Jira.

        Args:
            request: Method, path, body and query parameters
            timeout: Overall budget in seconds, defaults to the client's timeout

        Returns:
            Success with the decoded body, or a classified Failure. Never raises
            for transport or HTTP errors.
        """
        budget = timeout or self.timeout
        logger.debug(f"Jira {request.method} {request.path}")

        try:
            response = await asyncio.wait_for(
                self._client.request(
                    request.method,
                    request.path,
                    params=request.query() or None,
                    json=request.body,
                ),
                timeout=budget,
            )
        except (asyncio.TimeoutError, httpx.TimeoutException):
            # Checked before TransportError: a timed out request also got no response
            return Failure(
                ErrorKind.TIMEOUT,
                f"Request to Jira timed out after {budget:g}s. "
                "The server might be slow or unreachable.",
            )
        except (httpx.UnsupportedProtocol, httpx.InvalidURL) as e:
            return Failure(ErrorKind.UNKNOWN, str(e) or type(e).__name__)
        except httpx.TransportError as e:
            logger.warning(f"No response from Jira for {request.method} {request.path}: {e!r}")
            return Failure(
                ErrorKind.UNREACHABLE,
                f"Cannot connect to Jira at {self.base_url}. Please check your JIRA_URL.",
            )
        except Exception as e:
            logger.error(f"Jira request {request.method} {request.path} failed: {e!r}")
            return Failure(
                ErrorKind.UNKNOWN,
                str(e) or "Unknown error occurred while calling Jira API",
            )

        return self._classify(response)

    def _classify(self, response: httpx.Response) -> RemoteOutcome:
        status = response.status_code
        if status >= 400:
            message = f"HTTP {status}: {response.reason_phrase or 'Error'}"
            snippet = _error_snippet(response)
            if snippet:
                message += f" - {snippet}"
            return Failure(ErrorKind.from_status(status), message, status_code=status)

        if 300 <= status < 400:
            logger.warning(
                f"Jira answered {status} redirect to {response.headers.get('location', '?')}; "
                "not following it"
            )
        return Success(_decode(response))


def _decode(response: httpx.Response) -> Any:
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return response.text


def _error_snippet(response: httpx.Response) -> str:
    data = _decode(response)
    if data is None:
        return ""
    text = data if isinstance(data, str) else json.dumps(data)
    return text[:ERROR_BODY_LIMIT]
