"""Entry point for the Jira tool gateway."""

import asyncio
import sys

from jira_gateway.core.config import Settings, settings
from jira_gateway.core.logging import get_logger, setup_logging
from jira_gateway.gateway.batch import BatchExecutor
from jira_gateway.gateway.connection import ConnectionGate
from jira_gateway.gateway.router import ToolRouter
from jira_gateway.remote.client import JiraClient
from jira_gateway.tools import CATALOG

logger = get_logger(__name__)


def build_router(config: Settings) -> ToolRouter:
    """Wire the Jira client, connection gate and batch executor into a router."""
    client = JiraClient(
        base_url=config.jira_url,
        access_token=config.jira_access_token,
        timeout=config.jira_timeout,
        verify_ssl=config.jira_verify_ssl,
    )
    return ToolRouter(
        catalog=CATALOG,
        client=client,
        gate=ConnectionGate(client),
        batch=BatchExecutor(client, max_concurrency=config.jira_batch_concurrency),
    )


async def serve_stdio(tool_router: ToolRouter) -> None:
    from jira_gateway.server import create_server, run_stdio

    server = create_server(tool_router, name=settings.service_name, version=settings.service_version)
    try:
        await run_stdio(server)
    finally:
        await tool_router.client.close()


def serve_http(tool_router: ToolRouter) -> None:
    import uvicorn

    from jira_gateway.api.app import create_app

    uvicorn.run(
        create_app(tool_router),
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


def main() -> None:
    setup_logging(
        service_name=settings.service_name,
        service_version=settings.service_version,
        log_level=settings.log_level,
        log_format=settings.log_format,
    )

    missing = settings.missing_required()
    if missing:
        logger.error(f"Missing required environment variables: {', '.join(missing)}")
        logger.error("JIRA_ACCESS_TOKEN should be your Jira Personal Access Token")
        sys.exit(1)

    tool_router = build_router(settings)

    logger.info(f"{settings.service_name} v{settings.service_version}")
    logger.info(f"JIRA_URL: {settings.jira_url}")
    if not settings.jira_verify_ssl:
        logger.warning("TLS certificate verification is disabled (JIRA_VERIFY_SSL=false)")
    logger.info("Connection will be validated on first tool request")

    try:
        if settings.transport == "http":
            serve_http(tool_router)
        elif settings.transport == "stdio":
            asyncio.run(serve_stdio(tool_router))
        else:
            logger.error(f"Unknown TRANSPORT: {settings.transport} (expected stdio or http)")
            sys.exit(1)
    except KeyboardInterrupt:
        logger.info("Interrupted, shutting down")


if __name__ == "__main__":
    main()
