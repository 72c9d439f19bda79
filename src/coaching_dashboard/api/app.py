"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from coaching_dashboard.api.days import router as days_router
from coaching_dashboard.app_logging import configure_logging
from coaching_dashboard.containers import AppContainer


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        persistence = app.state.container.persistence_service
        if persistence.is_remote_enabled():
            logger.info("Remote store configured, replaying pending saves")
            await persistence.sync_pending()
        else:
            logger.info("Remote store not configured, using the local cache only")
        yield

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    app.include_router(days_router)

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    return app
