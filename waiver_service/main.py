"""
FastAPI application for cave waiver submissions.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI

from waiver_service import __version__
from waiver_service.config import get_settings
from waiver_service.core.logging import configure_logging, get_logger
from waiver_service.routers.waiver import router as waiver_router

log = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events."""
    settings = get_settings()
    configure_logging(log_level=settings.log_level, json_output=settings.json_logs)
    log.info("application_starting", version=__version__)

    yield

    log.info("application_stopped")


app = FastAPI(
    title="Cave Waiver Service",
    description="Waiver submission handling for Southern Mammoth cave trips",
    version=__version__,
    lifespan=lifespan,
)

app.include_router(waiver_router)


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "healthy", "version": __version__}


# Run with: uvicorn waiver_service.main:app --host 0.0.0.0 --port 8000
