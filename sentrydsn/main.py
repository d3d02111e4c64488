"""FastAPI application entry point for the DSN resolver."""

import logging
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI

from .config import settings
from .receiver.endpoints import router as receiver_router

VERSION = "1.0.0"

# Configure structured logging
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.processors.JSONRenderer(),
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)

# Set log level
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper()),
    format="%(message)s",
)

logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Log startup and shutdown."""
    logger.info(
        "starting_sentrydsn",
        app_name=settings.app_name,
        host=settings.host,
        port=settings.port,
        auth_header=settings.auth_header,
    )

    yield

    logger.info("shutting_down_sentrydsn")


# Create FastAPI application
app = FastAPI(
    title="sentrydsn",
    description="Recover client DSNs from proxied Sentry SDK requests",
    version=VERSION,
    lifespan=lifespan,
    docs_url="/docs" if settings.debug else None,
    redoc_url="/redoc" if settings.debug else None,
)


@app.get("/health")
async def health_check():
    """
    Health check endpoint.

    Returns basic health status and application info.
    """
    return {
        "status": "healthy",
        "app": settings.app_name,
        "version": VERSION,
    }


# Catch-all ingestion router goes last so /health keeps precedence
app.include_router(receiver_router, tags=["Sentry SDK"])


def main():
    """Run the application with uvicorn."""
    import uvicorn

    uvicorn.run(
        "sentrydsn.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
