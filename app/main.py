"""FastAPI application entry point."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from app.api.routes import health, readings
from app.core.config import settings
from app.core.database import engine, init_db
from app.core.errors import register_exception_handlers
from app.core.logging import configure_logging

configure_logging()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan manager."""
    # Startup: Create database tables
    init_db()
    logger.info("Server listening on %s:%s", settings.HOST, settings.PORT)
    yield
    # Shutdown: release pooled connections
    engine.dispose()


app = FastAPI(
    title=settings.PROJECT_NAME,
    version=settings.VERSION,
    description="Water and gas meter reading confirmation service",
    lifespan=lifespan,
)

register_exception_handlers(app)

# Include API routers
app.include_router(health.router, tags=["health"])
app.include_router(readings.router)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "app.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
    )
