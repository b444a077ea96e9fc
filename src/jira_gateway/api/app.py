"""FastAPI application serving the gateway over HTTP."""

from contextlib import asynccontextmanager

from fastapi import FastAPI

from jira_gateway.api.routes import router
from jira_gateway.core.config import settings
from jira_gateway.core.logging import get_logger
from jira_gateway.gateway.router import ToolRouter

logger = get_logger(__name__)


def create_app(tool_router: ToolRouter) -> FastAPI:
    """Build the HTTP application around an existing tool router."""

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("Starting Jira gateway HTTP service...")
        yield
        logger.info("Shutting down Jira gateway HTTP service...")
        await tool_router.client.close()
        logger.info("Jira gateway HTTP service shutdown complete")

    app = FastAPI(
        title="Jira Tool Gateway",
        description="Jira operations exposed as callable tools",
        version=settings.service_version,
        lifespan=lifespan,
    )
    app.state.tool_router = tool_router
    app.include_router(router)

    @app.get("/")
    async def root():
        """Root endpoint."""
        return {
            "service": settings.service_name,
            "version": settings.service_version,
            "status": "running",
        }

    return app
