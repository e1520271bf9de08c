"""Routes for managing products in the catalog."""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Request, status

from src.config import settings
from src.models.product import Product
from src.services.product_service import ProductServiceDependency

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/products", tags=["products"])


def enforce_body_limit(request: Request) -> None:
    """Reject bodies whose declared size exceeds ``MAX_BODY_BYTES``."""

    content_length = request.headers.get("content-length")
    if content_length is None:
        return
    try:
        size = int(content_length)
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="invalid content-length header",
        ) from None
    if size > settings.MAX_BODY_BYTES:
        logger.info("Rejected %d byte body on %s", size, request.url.path)
        raise HTTPException(
            status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            detail="request body too large",
        )


@router.get("", summary="List products, optionally filtered by field values")
async def list_products(
    request: Request,
    service: ProductServiceDependency,
) -> list[dict[str, Any]]:
    """Every query parameter becomes an equality match on that field."""

    params = {
        key: request.query_params.getlist(key) for key in request.query_params.keys()
    }
    products = await service.list_products(params)
    return [product.to_wire() for product in products]


@router.get("/{product_id}", summary="Fetch a single product")
async def get_product(
    product_id: str,
    service: ProductServiceDependency,
) -> dict[str, Any]:
    product = await service.get_product(product_id)
    return product.to_wire()


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    summary="Create products and return their identifiers",
    dependencies=[Depends(enforce_body_limit)],
)
async def create_products(
    payload: list[Product],
    service: ProductServiceDependency,
) -> list[str]:
    """Validate the whole batch, then insert each product in order."""

    return await service.create_products(payload)


@router.put("/{product_id}", summary="Replace a product")
async def update_product(
    product_id: str,
    request: Request,
    service: ProductServiceDependency,
) -> dict[str, Any]:
    """The body is parsed only after the product is known to exist."""

    body = await request.body()
    product = await service.update_product(product_id, body)
    return product.to_wire()


@router.delete("/{product_id}", summary="Delete a product")
async def delete_product(
    product_id: str,
    service: ProductServiceDependency,
) -> int:
    """Return the number of deleted products, 0 when nothing matched."""

    return await service.delete_product(product_id)
