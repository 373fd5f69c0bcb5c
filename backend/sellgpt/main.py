"""
SellGPT API - Main Application Entry Point.

Generates and serves llms.txt discovery documents for Shopify stores.
"""
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from sellgpt.core.config import settings
from sellgpt.core.database import close_db, init_db
from sellgpt.core.exceptions import SellGPTError
from sellgpt.core.logging import configure_logging, get_logger
from sellgpt.middleware import ErrorHandlerMiddleware, RequestIdMiddleware, sellgpt_error_handler
from sellgpt.routers import (
    generate_router,
    health_router,
    home_router,
    llms_router,
    shops_router,
    webhooks_router,
)

# Configure logging before anything else
configure_logging()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan manager.
    Handles startup and shutdown events.
    """
    logger.info(
        "Starting application",
        app_name=settings.app_name,
        version=settings.app_version,
        environment=settings.environment,
        storage_root=settings.storage_root,
    )

    await init_db()

    if settings.sentry_dsn:
        import sentry_sdk

        sentry_sdk.init(
            dsn=settings.sentry_dsn,
            environment=settings.environment,
            traces_sample_rate=0.1,
        )
        logger.info("Sentry initialized")

    yield

    logger.info("Shutting down application")
    await close_db()


def create_app() -> FastAPI:
    """
    Application factory function.
    Creates and configures the FastAPI application.
    """
    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="llms.txt generation for Shopify stores",
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
        lifespan=lifespan,
    )

    app.add_exception_handler(SellGPTError, sellgpt_error_handler)

    # Add middleware (order matters - first added = outermost)
    app.add_middleware(ErrorHandlerMiddleware)
    app.add_middleware(RequestIdMiddleware)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=[
            "Authorization",
            "Content-Type",
            "X-Request-ID",
        ],
    )

    app.include_router(home_router)
    app.include_router(health_router)
    app.include_router(llms_router)
    app.include_router(generate_router, prefix="/api")
    app.include_router(shops_router, prefix="/api")
    app.include_router(webhooks_router)

    logger.info(
        "Application created",
        routes=len(app.routes),
        cors_origins=len(settings.allowed_origins),
    )

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "sellgpt.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        log_level=settings.log_level.lower(),
    )
