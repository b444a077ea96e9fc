"""HTTP routes for the Jira tool gateway."""

import time

from fastapi import APIRouter, HTTPException, Request

from jira_gateway.api.models import (
    ExecuteRequest,
    ExecuteResponse,
    HealthResponse,
    ToolListResponse,
    ToolSchema,
)
from jira_gateway.core.config import settings
from jira_gateway.core.logging import get_logger
from jira_gateway.gateway.connection import ConnectionStatus
from jira_gateway.gateway.router import ToolRouter

logger = get_logger(__name__)

router = APIRouter()


def _tool_router(request: Request) -> ToolRouter:
    tool_router = getattr(request.app.state, "tool_router", None)
    if tool_router is None:
        raise HTTPException(status_code=503, detail="Tool router not initialized")
    return tool_router


@router.get("/health", response_model=HealthResponse)
async def health_check(request: Request) -> HealthResponse:
    """Health check endpoint. Reports the gate state without probing Jira."""
    state = _tool_router(request).gate.state
    status = {
        ConnectionStatus.VALID: "healthy",
        ConnectionStatus.INVALID: "unhealthy",
        ConnectionStatus.UNVALIDATED: "unvalidated",
    }[state.status]
    return HealthResponse(
        status=status,
        version=settings.service_version,
        connection=state.status.value,
        user=state.identity,
        reason=state.reason,
    )


@router.get("/tools", response_model=ToolListResponse)
async def list_tools(request: Request) -> ToolListResponse:
    """List the tools; empty when the Jira connection is not available."""
    tools = await _tool_router(request).list_tools()
    logger.info(f"Returning {len(tools)} tools")
    return ToolListResponse(
        tools=[
            ToolSchema(name=tool.name, description=tool.description, input_schema=tool.input_schema)
            for tool in tools
        ]
    )


@router.post("/execute", response_model=ExecuteResponse)
async def execute_tool(body: ExecuteRequest, request: Request) -> ExecuteResponse:
    """Execute a tool. Tool failures are reported in the body, not as HTTP errors."""
    tool_router = _tool_router(request)
    start_time = time.time()

    outcome = await tool_router.invoke(body.tool_name, body.arguments)

    execution_time_ms = (time.time() - start_time) * 1000
    return ExecuteResponse(
        status="error" if outcome.is_error else "success",
        output=outcome.payload,
        isError=outcome.is_error,
        execution_time_ms=execution_time_ms,
    )
