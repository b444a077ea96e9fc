"""Jira REST access: request/outcome types, client and error taxonomy."""

from jira_gateway.remote.client import JiraClient
from jira_gateway.remote.errors import ErrorDescription, RemoteCallError, describe
from jira_gateway.remote.models import ErrorKind, Failure, RemoteOutcome, RemoteRequest, Success

__all__ = [
    "JiraClient",
    "ErrorDescription",
    "RemoteCallError",
    "describe",
    "ErrorKind",
    "Failure",
    "RemoteOutcome",
    "RemoteRequest",
    "Success",
]
