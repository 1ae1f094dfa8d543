"""FastAPI application factory."""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from .. import __version__
from ..infrastructure import Container
from .routes import router

logger = logging.getLogger(__name__)


def create_app(container: Container) -> FastAPI:
    """Create the HTTP application.

    Args:
        container: Configured service container.

    Returns:
        FastAPI application serving the ``/api`` routes.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        logger.info("Movie recommender API starting")
        yield
        await container.close()
        logger.info("Movie recommender API stopped")

    app = FastAPI(title="Guarded Movie Recommender", version=__version__, lifespan=lifespan)
    app.state.container = container
    app.include_router(router)
    return app
