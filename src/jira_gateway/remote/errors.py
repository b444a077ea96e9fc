"""Error taxonomy for failed Jira calls.

Turns a ``Failure`` into a human-readable message and a remediation hint.
The hint is chosen from the failure's ``ErrorKind``, which the client assigns
when it classifies the raw transport or HTTP signal.
"""

from __future__ import annotations

from dataclasses import dataclass

from jira_gateway.remote.models import ErrorKind, Failure

GENERIC_SUGGESTION = "Please check the error details and try again."
NETWORK_SUGGESTION = (
    "Verify that the Jira server is reachable from this machine and that "
    "JIRA_URL points at your Jira base location."
)

SUGGESTIONS: dict[ErrorKind, str] = {
    ErrorKind.UNAUTHORIZED: (
        "Your access token is missing or has expired. "
        "Generate a new one and update JIRA_ACCESS_TOKEN."
    ),
    ErrorKind.FORBIDDEN: "You do not have permission to perform this operation.",
    ErrorKind.NOT_FOUND: (
        "The requested resource was not found. "
        "Verify the issue/project key or ID is correct and accessible to you."
    ),
    ErrorKind.UNREACHABLE: NETWORK_SUGGESTION,
    ErrorKind.TIMEOUT: NETWORK_SUGGESTION,
    ErrorKind.UPSTREAM_ERROR: GENERIC_SUGGESTION,
    ErrorKind.UNKNOWN: GENERIC_SUGGESTION,
}

HEADLINES: dict[ErrorKind, str] = {
    ErrorKind.UNAUTHORIZED: "Authentication failed",
    ErrorKind.FORBIDDEN: "Access denied",
    ErrorKind.NOT_FOUND: "Resource not found",
    ErrorKind.UNREACHABLE: "Cannot reach Jira server",
    ErrorKind.TIMEOUT: "Connection timed out",
    ErrorKind.UPSTREAM_ERROR: "Jira returned an error",
    ErrorKind.UNKNOWN: "Unexpected error",
}


@dataclass(frozen=True)
class ErrorDescription:
    kind: ErrorKind
    human_message: str
    suggestion: str


class RemoteCallError(Exception):
    """Raised inside a dispatch to unwind on a failed Jira call."""

    def __init__(self, failure: Failure):
        super().__init__(failure.message)
        self.failure = failure


def describe(failure: Failure) -> ErrorDescription:
    """Describe a failed call for the caller.

    Args:
        failure: The classified failure returned by the client

    Returns:
        Kind, message and remediation suggestion
    """
    headline = HEADLINES.get(failure.kind, HEADLINES[ErrorKind.UNKNOWN])
    return ErrorDescription(
        kind=failure.kind,
        human_message=f"{headline}: {failure.message}",
        suggestion=SUGGESTIONS.get(failure.kind, GENERIC_SUGGESTION),
    )


def connection_failure_reason(failure: Failure) -> str:
    """Explain why the Jira connection could not be validated."""
    description = describe(failure)
    return f"Failed to connect to Jira. {description.human_message}. {description.suggestion}"
