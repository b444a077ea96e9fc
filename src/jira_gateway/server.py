"""MCP server exposing the Jira tool gateway over stdio.

Uses the low-level MCP server so the tool list can be computed per request:
the catalog stays empty until the Jira connection has been validated.
"""

from typing import Any

from mcp import types
from mcp.server.lowlevel import Server
from mcp.server.stdio import stdio_server

from jira_gateway.core.logging import get_logger
from jira_gateway.gateway.router import ToolRouter

logger = get_logger(__name__)


def create_server(router: ToolRouter, name: str = "jira-mcp-server", version: str = "2.4.0") -> Server:
    """Build an MCP server backed by ``router``."""
    server = Server(name, version=version)

    @server.list_tools()
    async def list_tools() -> list[types.Tool]:
        tools = await router.list_tools()
        return [
            types.Tool(name=tool.name, description=tool.description, inputSchema=tool.input_schema)
            for tool in tools
        ]

    # Argument errors are reported by the router, not by SDK-side schema validation
    @server.call_tool(validate_input=False)
    async def call_tool(name: str, arguments: dict[str, Any] | None) -> types.CallToolResult:
        outcome = await router.invoke(name, arguments or {})
        return types.CallToolResult(
            content=[types.TextContent(type="text", text=outcome.text)],
            isError=outcome.is_error,
        )

    return server


async def run_stdio(server: Server) -> None:
    """Serve MCP over stdin/stdout until the client disconnects."""
    logger.info("Serving MCP over stdio")
    async with stdio_server() as (read_stream, write_stream):
        await server.run(read_stream, write_stream, server.create_initialization_options())
