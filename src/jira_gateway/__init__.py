"""Jira tool gateway - Jira REST operations exposed as MCP tools."""

__version__ = "2.4.0"
