"""One-shot validation of the Jira connection."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from enum import Enum
from typing import Any

from jira_gateway.core.logging import get_logger
from jira_gateway.remote.client import JiraClient
from jira_gateway.remote.errors import connection_failure_reason
from jira_gateway.remote.models import Failure, RemoteRequest

logger = get_logger(__name__)

IDENTITY_PROBE = RemoteRequest("GET", "/rest/api/2/myself")


class ConnectionStatus(str, Enum):
    UNVALIDATED = "unvalidated"
    VALID = "valid"
    INVALID = "invalid"


@dataclass(frozen=True)
class ValidationState:
    status: ConnectionStatus
    identity: str | None = None
    reason: str | None = None

    @classmethod
    def unvalidated(cls) -> ValidationState:
        return cls(ConnectionStatus.UNVALIDATED)

    @classmethod
    def valid(cls, identity: str) -> ValidationState:
        return cls(ConnectionStatus.VALID, identity=identity)

    @classmethod
    def invalid(cls, reason: str) -> ValidationState:
        return cls(ConnectionStatus.INVALID, reason=reason)

    @property
    def is_valid(self) -> bool:
        return self.status is ConnectionStatus.VALID

    @property
    def is_invalid(self) -> bool:
        return self.status is ConnectionStatus.INVALID


class ConnectionGate:
    """Decides once per process whether Jira is usable.

    The first ``ensure_validated()`` call probes ``/rest/api/2/myself``; the
    verdict is then frozen. Concurrent first callers wait on the same lock and
    observe the single probe's result.
    """

    def __init__(self, client: JiraClient):
        self.client = client
        self._state = ValidationState.unvalidated()
        self._lock = asyncio.Lock()

    @property
    def state(self) -> ValidationState:
        """Current state, without triggering a probe."""
        return self._state

    async def ensure_validated(self) -> ValidationState:
        """Probe Jira if that has not happened yet and return the verdict."""
        if self._state.status is not ConnectionStatus.UNVALIDATED:
            return self._state

        async with self._lock:
            if self._state.status is ConnectionStatus.UNVALIDATED:
                self._state = await self._probe()
        return self._state

    async def _probe(self) -> ValidationState:
        logger.info("Validating Jira connection...")
        outcome = await self.client.call(IDENTITY_PROBE)

        if isinstance(outcome, Failure):
            reason = connection_failure_reason(outcome)
            logger.error(f"Jira connection failed: {outcome.message}")
            return ValidationState.invalid(reason)

        identity = _identity_label(outcome.payload)
        logger.info(f"Connected to Jira as: {identity}")
        return ValidationState.valid(identity)


def _identity_label(payload: Any) -> str:
    if isinstance(payload, dict):
        for key in ("displayName", "name", "emailAddress", "accountId"):
            if payload.get(key):
                return str(payload[key])
    return "unknown user"
