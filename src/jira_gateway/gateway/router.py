"""Tool dispatch: argument checks, routing to Jira, uniform result envelopes."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any

from jira_gateway.core.logging import bind_context, get_logger, unbind_context
from jira_gateway.gateway.batch import BatchExecutor
from jira_gateway.gateway.connection import ConnectionGate
from jira_gateway.remote.client import JiraClient
from jira_gateway.remote.errors import GENERIC_SUGGESTION, RemoteCallError, describe
from jira_gateway.remote.models import ErrorKind, Failure, RemoteRequest
from jira_gateway.tools import BatchTool, LookupTool, SingleCallTool, ToolArgumentError, ToolDefinition

logger = get_logger(__name__)

CALLER_ARGUMENT_ERROR = "CallerArgumentError"
UNKNOWN_OPERATION = "UnknownOperation"
CONNECTION_UNAVAILABLE = "ConnectionUnavailable"


@dataclass(frozen=True)
class ToolSummary:
    name: str
    description: str
    input_schema: dict[str, Any]


@dataclass(frozen=True)
class ToolOutcome:
    """Result of one tool invocation, serialized for the caller."""

    payload: Any
    is_error: bool = False

    @property
    def text(self) -> str:
        return json.dumps(self.payload, indent=2, default=str)


class ToolRouter:
    """Routes tool invocations to Jira.

    Failures never escape ``invoke``: every outcome, good or bad, comes back
    as a ``ToolOutcome``.
    """

    def __init__(
        self,
        catalog: dict[str, ToolDefinition],
        client: JiraClient,
        gate: ConnectionGate,
        batch: BatchExecutor,
    ):
        self.catalog = catalog
        self.client = client
        self.gate = gate
        self.batch = batch

    async def list_tools(self) -> list[ToolSummary]:
        """Return the catalog, or nothing when Jira cannot be reached."""
        state = await self.gate.ensure_validated()
        if not state.is_valid:
            logger.warning("Jira connection is not available, exposing no tools")
            return []
        return [
            ToolSummary(name=tool.name, description=tool.description, input_schema=tool.input_schema)
            for tool in self.catalog.values()
        ]

    async def invoke(self, name: str, arguments: dict[str, Any] | None = None) -> ToolOutcome:
        """Invoke a tool by name.

        Args:
            name: Tool name from the catalog
            arguments: Caller arguments, may be empty

        Returns:
            The tool's result, or an error envelope with ``is_error`` set
        """
        arguments = arguments or {}
        state = self.gate.state
        if state.is_invalid:
            return self._error(
                name,
                CONNECTION_UNAVAILABLE,
                state.reason or "Jira connection was not validated",
                "Please check your JIRA_URL and JIRA_ACCESS_TOKEN configuration",
                error="Jira connection not available",
            )

        tool = self.catalog.get(name)
        if tool is None:
            return self._error(
                name,
                UNKNOWN_OPERATION,
                f"Unknown tool: {name}",
                "Call tools/list to see the available tools.",
                error="Unknown tool",
            )

        missing = tool.missing_arguments(arguments)
        if missing:
            return self._argument_error(
                name, f"Missing required argument(s): {', '.join(missing)}", tool
            )

        bind_context(tool=name)
        try:
            logger.info(f"Executing tool {name}")
            result = await self._dispatch(tool, tool.with_defaults(arguments))
            return ToolOutcome(result)
        except ToolArgumentError as e:
            return self._argument_error(name, str(e), tool)
        except RemoteCallError as e:
            return self._remote_error(name, e.failure)
        except Exception as e:
            logger.exception(f"Unexpected error executing tool {name}")
            return self._remote_error(name, Failure(ErrorKind.UNKNOWN, str(e) or type(e).__name__))
        finally:
            unbind_context("tool")

    async def _dispatch(self, tool: ToolDefinition, args: dict[str, Any]) -> Any:
        if isinstance(tool, SingleCallTool):
            payload = await self._call(tool.build(args))
            return tool.shape(args, payload)

        if isinstance(tool, LookupTool):
            found = await self._call(tool.lookup(args))
            payload = await self._call(tool.act(args, found))
            return tool.shape(args, found, payload)

        if isinstance(tool, BatchTool):
            return await self._run_batch(tool, args)

        raise TypeError(f"Unsupported tool definition: {type(tool).__name__}")

    async def _call(self, request: RemoteRequest) -> Any:
        outcome = await self.client.call(request)
        if isinstance(outcome, Failure):
            raise RemoteCallError(outcome)
        return outcome.payload

    async def _run_batch(self, tool: BatchTool, args: dict[str, Any]) -> dict[str, Any]:
        items = args[tool.items_argument]
        if not isinstance(items, list):
            raise ToolArgumentError(f"{tool.items_argument} must be an array")
        problems = tool.invalid_items(items)
        if problems:
            raise ToolArgumentError(f"Invalid {tool.items_argument}: {'; '.join(problems)}")

        results = await self.batch.run(items, tool.build_item)
        shaped = [
            tool.shape_success(result.item, result.outcome.payload)
            if result.ok
            else tool.shape_failure(result.item, result.outcome)
            for result in results
        ]
        succeeded = sum(1 for result in results if result.ok)
        return {
            "total": len(results),
            "succeeded": succeeded,
            "failed": len(results) - succeeded,
            "results": shaped,
        }

    def _remote_error(self, name: str, failure: Failure) -> ToolOutcome:
        description = describe(failure)
        logger.error(f"Error executing tool {name}: {failure.message}")
        return self._error(
            name,
            description.kind.value,
            description.human_message,
            description.suggestion,
        )

    def _argument_error(self, name: str, details: str, tool: ToolDefinition) -> ToolOutcome:
        suggestion = GENERIC_SUGGESTION
        if tool.required:
            suggestion = f"Required arguments for {name}: {', '.join(tool.required)}."
        return self._error(name, CALLER_ARGUMENT_ERROR, details, suggestion, error="Invalid arguments")

    @staticmethod
    def _error(
        name: str,
        kind: str,
        details: str,
        suggestion: str,
        error: str = "Failed to execute Jira operation",
    ) -> ToolOutcome:
        return ToolOutcome(
            {
                "error": error,
                "kind": kind,
                "tool": name,
                "details": details,
                "suggestion": suggestion,
            },
            is_error=True,
        )
