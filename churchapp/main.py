"""FastAPI application factory."""

import logging
from contextlib import asynccontextmanager
from collections.abc import AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from churchapp.config import get_settings
from churchapp.application.services import get_catalog
from churchapp.infrastructure.database import Base, engine
from churchapp.infrastructure.logging.log_config import setup_logging
from churchapp.presentation.api.router import router as api_router
from churchapp.presentation.demo.users import router as demo_users_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan — configure logging, create tables, load the catalog."""
    settings = get_settings()
    setup_logging()

    # 1. Create all database tables
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    # 2. Entity catalog (already parsed when the routers were built)
    catalog = get_catalog()
    logger.info(
        "%s %s started (%s) — serving %d entities",
        settings.app_title,
        settings.app_version,
        settings.app_env,
        len(catalog.served()),
    )

    yield

    # Shutdown
    await engine.dispose()


def create_app() -> FastAPI:
    """Factory function that builds and configures the FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title=settings.app_title,
        version=settings.app_version,
        lifespan=lifespan,
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Demo registration server at the root, records API under /api/v1
    app.include_router(demo_users_router)
    app.include_router(api_router)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "churchapp.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
    )
