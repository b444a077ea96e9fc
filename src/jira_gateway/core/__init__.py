"""Core package initialization."""

from jira_gateway.core.config import Settings, settings
from jira_gateway.core.logging import bind_context, get_logger, setup_logging, unbind_context

__all__ = ["Settings", "settings", "setup_logging", "get_logger", "bind_context", "unbind_context"]
