"""Product lifecycle orchestration: validation, id resolution, persistence."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Annotated

from fastapi import Depends, Request
from pydantic import ValidationError

from src.config import settings
from src.models.product import Product
from src.services.exceptions import MalformedPayload, NotFound
from src.services.filters import ProductFilter, build_filter
from src.services.identifiers import (
    decode_identifier,
    encode_identifier,
    new_identifier,
)
from src.services.storage.gateway import ProductGateway
from src.services.storage.memory_gateway import InMemoryProductGateway
from src.services.storage.mongo_gateway import create_mongo_gateway
from src.services.validation import validate_product

logger = logging.getLogger(__name__)


class ProductService:
    """Stateless product operations on top of an injected gateway."""

    def __init__(self, gateway: ProductGateway) -> None:
        self.gateway = gateway

    async def list_products(
        self, params: Mapping[str, Sequence[str]] | None = None
    ) -> list[Product]:
        """Return every product matching the query parameters."""

        product_filter = build_filter(params or {})
        documents = await self.gateway.find_many(product_filter)
        logger.debug(
            "Found %d products for filter %s", len(documents), product_filter
        )
        return [Product.from_document(doc) for doc in documents]

    async def get_product(self, product_id: str) -> Product:
        document_id = decode_identifier(product_id)
        document = await self.gateway.find_one(ProductFilter.by_id(document_id))
        if document is None:
            raise NotFound()
        return Product.from_document(document)

    async def create_products(self, products: Sequence[Product]) -> list[str]:
        """Insert ``products`` in order and return their new identifiers.

        The whole batch is validated before the first write. Inserts are not
        atomic as a batch: when one fails, the products inserted before it
        stay in the store.
        """

        for product in products:
            validate_product(product)

        inserted_ids: list[str] = []
        for product in products:
            document = product.to_document(document_id=new_identifier())
            inserted_id = await self.gateway.insert_one(document)
            inserted_ids.append(encode_identifier(inserted_id))

        logger.info("Created %d products", len(inserted_ids))
        return inserted_ids

    async def update_product(self, product_id: str, payload: bytes | str) -> Product:
        """Replace the stored product with the parsed ``payload``.

        Any ``_id`` inside the payload is ignored in favour of ``product_id``.
        """

        document_id = decode_identifier(product_id)
        product_filter = ProductFilter.by_id(document_id)
        if await self.gateway.find_one(product_filter) is None:
            raise NotFound()

        try:
            replacement = Product.model_validate_json(payload)
        except ValidationError as exc:
            logger.info("Rejected product payload for %s: %s", product_id, exc)
            raise MalformedPayload() from exc

        validate_product(replacement)
        replacement = replacement.model_copy(
            update={"id": encode_identifier(document_id)}
        )

        await self.gateway.update_one(
            product_filter, replacement.to_document(document_id=document_id)
        )
        logger.info("Updated product %s", product_id)
        return replacement

    async def delete_product(self, product_id: str) -> int:
        """Delete a product; a missing product yields a count of 0."""

        document_id = decode_identifier(product_id)
        deleted = await self.gateway.delete_one(ProductFilter.by_id(document_id))
        logger.info("Deleted %d product(s) for id %s", deleted, product_id)
        return deleted


def create_product_gateway() -> ProductGateway:
    """Build the gateway selected by ``PRODUCT_STORE``."""

    if settings.use_memory_store:
        logger.info("Using in-memory product store")
        return InMemoryProductGateway()
    return create_mongo_gateway()


def get_product_gateway(request: Request) -> ProductGateway:
    """FastAPI dependency returning the gateway opened by the app lifespan."""

    return request.app.state.product_gateway


GatewayDependency = Annotated[ProductGateway, Depends(get_product_gateway)]


def get_product_service(gateway: GatewayDependency) -> ProductService:
    return ProductService(gateway)


ProductServiceDependency = Annotated[ProductService, Depends(get_product_service)]
