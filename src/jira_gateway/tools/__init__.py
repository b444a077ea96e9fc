"""Static catalog of Jira tools, keyed by tool name."""

from jira_gateway.tools.base import (
    BatchTool,
    LookupTool,
    SingleCallTool,
    ToolArgumentError,
    ToolDefinition,
)
from jira_gateway.tools.batch import BATCH_TOOLS
from jira_gateway.tools.read import READ_TOOLS
from jira_gateway.tools.write import WRITE_TOOLS

ALL_TOOLS: list[ToolDefinition] = READ_TOOLS + BATCH_TOOLS[:1] + WRITE_TOOLS + BATCH_TOOLS[1:]


def build_catalog(tools: list[ToolDefinition] = ALL_TOOLS) -> dict[str, ToolDefinition]:
    """Index tools by name, rejecting duplicates."""
    catalog: dict[str, ToolDefinition] = {}
    for tool in tools:
        if tool.name in catalog:
            raise ValueError(f"Duplicate tool name: {tool.name}")
        catalog[tool.name] = tool
    return catalog


CATALOG = build_catalog()

__all__ = [
    "ALL_TOOLS",
    "CATALOG",
    "build_catalog",
    "BatchTool",
    "LookupTool",
    "SingleCallTool",
    "ToolArgumentError",
    "ToolDefinition",
]
