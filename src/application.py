"""FastAPI application factory and bootstrap helpers."""

from __future__ import annotations

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from src.api.errors import register_error_handlers
from src.api.middleware import build_middleware
from src.api.routes import include_api_routes
from src.config import settings
from src.services.product_service import create_product_gateway

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Open the product store on startup and close it on shutdown."""
    gateway = create_product_gateway()
    app.state.product_gateway = gateway
    logger.info("Product store ready (environment=%s)", settings.ENVIRONMENT)
    try:
        yield
    finally:
        await gateway.close()
        logger.info("Product store closed")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""

    app = FastAPI(
        title="Product Catalog",
        description="Product catalog service backed by MongoDB",
        version="1.0.0",
        lifespan=lifespan,
        middleware=build_middleware(),
    )

    _configure_cors(app)
    register_error_handlers(app)
    include_api_routes(app)

    return app


def _configure_cors(app: FastAPI) -> None:
    """Allow broad access in non-production environments."""

    if settings.is_production:
        return

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=[settings.CORRELATION_ID_HEADER],
    )
