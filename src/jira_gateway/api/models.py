"""HTTP request/response models."""

from typing import Any, Literal

from pydantic import BaseModel, Field


class ToolSchema(BaseModel):
    """Schema for a tool definition, serialized with the MCP field name."""

    model_config = {"populate_by_name": True}

    name: str
    description: str
    input_schema: dict[str, Any] = Field(serialization_alias="inputSchema")


class ExecuteRequest(BaseModel):
    """Request to execute a tool."""

    tool_name: str
    arguments: dict[str, Any] = Field(default_factory=dict)


class ExecuteResponse(BaseModel):
    """Response from tool execution.

    ``output`` is the same JSON document an MCP caller receives as text.
    """

    status: Literal["success", "error"]
    output: Any = None
    isError: bool = False
    execution_time_ms: float


class ToolListResponse(BaseModel):
    """Response containing list of available tools."""

    tools: list[ToolSchema]


class HealthResponse(BaseModel):
    """Health check response."""

    status: Literal["healthy", "unhealthy", "unvalidated"]
    version: str
    connection: str
    user: str | None = None
    reason: str | None = None
