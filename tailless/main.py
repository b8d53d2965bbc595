"""Application entrypoint for the FastAPI server."""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from tailless import __version__
from tailless.api import routers
from tailless.api.deps import respond
from tailless.config import config
from tailless.core import messages
from tailless.core.response import ApiResponse, HttpStatus
from tailless.jobs import setup_all_jobs, shutdown_scheduler, start_scheduler
from tailless.logging import get_logger, setup_logging

setup_logging(config.log_level)
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager for startup and shutdown events."""
    logger.info("Starting application")

    # Ensure all tables exist (dev convenience, idempotent)
    from tailless.storage import close_engine, create_tables

    await create_tables()
    logger.info("Database tables ensured")

    start_scheduler()
    setup_all_jobs()

    yield

    logger.info("Shutting down application")
    shutdown_scheduler()
    await close_engine()


app = FastAPI(
    title="Tailless",
    version=__version__,
    lifespan=lifespan,
)

for router in routers:
    app.include_router(router)


@app.exception_handler(Exception)
async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Unhandled error on {request.method} {request.url.path}: {exc}")
    return respond(
        ApiResponse.failure(HttpStatus.INTERNAL_SERVER_ERROR, messages.UNEXPECTED_ERROR)
    )


@app.get("/health")
async def health_check() -> dict:
    """Health check endpoint."""
    return {"ok": True}


def main() -> None:
    logger.info(f"Starting FastAPI server on {config.host}:{config.port}")
    uvicorn.run(
        "tailless.main:app",
        host=config.host,
        port=config.port,
        reload=False,
    )


if __name__ == "__main__":
    main()
