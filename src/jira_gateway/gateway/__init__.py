"""Tool gateway: connection gate, batch executor and dispatch router."""

from jira_gateway.gateway.batch import BatchExecutor, BatchItemResult
from jira_gateway.gateway.connection import ConnectionGate, ConnectionStatus, ValidationState
from jira_gateway.gateway.router import ToolOutcome, ToolRouter, ToolSummary

__all__ = [
    "BatchExecutor",
    "BatchItemResult",
    "ConnectionGate",
    "ConnectionStatus",
    "ValidationState",
    "ToolOutcome",
    "ToolRouter",
    "ToolSummary",
]
