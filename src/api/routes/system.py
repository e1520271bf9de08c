"""System-level routes such as health checks."""

from __future__ import annotations

from fastapi import APIRouter

from src.config import settings
from src.services.product_service import GatewayDependency

router = APIRouter(tags=["system"])


@router.get("/")
async def read_root() -> dict[str, str]:
    """Hello World endpoint used by smoke tests."""

    return {"message": "Hello World"}


@router.get("/health")
async def health_check(gateway: GatewayDependency) -> dict[str, str]:
    """Health check endpoint with product store connectivity check."""

    store_status = "connected" if await gateway.ping() else "disconnected"

    return {
        "status": "healthy",
        "store": store_status,
        "environment": settings.ENVIRONMENT,
    }
