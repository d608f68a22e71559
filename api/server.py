"""FastAPI server for the DSR generator.

Main entry point for the API server.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.routes import (
    health,
    shows,
    equipment,
    pdf,
)
from core import __version__
from core.config import get_settings
from core.observability.logging import configure_logging, get_logger


logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler."""
    settings = get_settings()
    configure_logging(level=settings.log_level, json_format=settings.log_json)
    logger.info(f"DSR Generator API starting up (data dir: {settings.data_dir})")

    yield

    logger.info("DSR Generator API shutting down...")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title="DSR Generator API",
        description="Show catalog, equipment expansion and Display Safety Record generation",
        version=__version__,
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(health.router, tags=["Health"])
    app.include_router(shows.router, prefix="/shows", tags=["Shows"])
    app.include_router(equipment.router, prefix="/equipment", tags=["Equipment"])
    app.include_router(pdf.router, prefix="/pdf", tags=["DSR"])

    return app


# Default app instance
app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("api.server:app", host="0.0.0.0", port=8000, reload=True)
