"""HTTP surface for the Jira tool gateway."""

from jira_gateway.api.app import create_app

__all__ = ["create_app"]
