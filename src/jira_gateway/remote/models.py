"""Request and outcome types exchanged with the Jira REST API."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Union


class ErrorKind(str, Enum):
    """Classification of a failed remote call."""

    UNAUTHORIZED = "Unauthorized"
    FORBIDDEN = "Forbidden"
    NOT_FOUND = "NotFound"
    UNREACHABLE = "Unreachable"
    TIMEOUT = "Timeout"
    UPSTREAM_ERROR = "UpstreamError"
    UNKNOWN = "Unknown"

    @classmethod
    def from_status(cls, status_code: int) -> ErrorKind:
        """Map an HTTP error status to its kind."""
        return _STATUS_KINDS.get(status_code, cls.UPSTREAM_ERROR)


_STATUS_KINDS = {
    401: ErrorKind.UNAUTHORIZED,
    403: ErrorKind.FORBIDDEN,
    404: ErrorKind.NOT_FOUND,
}


@dataclass(frozen=True)
class RemoteRequest:
    """A single Jira REST call.

    ``params`` entries whose value is None are left out of the query string.
    """

    method: str
    path: str
    body: Any = None
    params: dict[str, Any] = field(default_factory=dict)

    def query(self) -> dict[str, Any]:
        query = {}
        for key, value in self.params.items():
            if value is None:
                continue
            # Jira expects lowercase booleans
            query[key] = str(value).lower() if isinstance(value, bool) else value
        return query


@dataclass(frozen=True)
class Success:
    payload: Any = None

    ok = True


@dataclass(frozen=True)
class Failure:
    kind: ErrorKind
    message: str
    status_code: int | None = None

    ok = False


RemoteOutcome = Union[Success, Failure]
