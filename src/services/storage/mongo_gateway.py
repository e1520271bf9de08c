"""MongoDB-backed persistence gateway for products."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from typing import Any, TypeVar

from bson import ObjectId
from bson.errors import BSONError
from pymongo import MongoClient
from pymongo.collection import Collection
from pymongo.errors import PyMongoError

from src.config import settings
from src.services.exceptions import GatewayError
from src.services.filters import ProductFilter
from src.services.storage.gateway import Document, ProductGateway

logger = logging.getLogger(__name__)

T = TypeVar("T")


class MongoProductGateway(ProductGateway):
    """Gateway running pymongo collection calls off the event loop."""

    def __init__(self, collection: Collection, client: MongoClient | None = None):
        self.collection = collection
        self.client = client

    async def _call(self, operation: str, func: Callable[..., T], *args: Any) -> T:
        try:
            return await asyncio.to_thread(func, *args)
        except (PyMongoError, BSONError, OverflowError) as exc:
            logger.error(
                "MongoDB %s failed on %s: %s",
                operation,
                self.collection.name,
                exc,
            )
            raise GatewayError() from exc

    async def find_many(self, product_filter: ProductFilter) -> list[Document]:
        def _find() -> list[Document]:
            return list(self.collection.find(product_filter.to_query()))

        return await self._call("find", _find)

    async def find_one(self, product_filter: ProductFilter) -> Document | None:
        return await self._call(
            "find_one", self.collection.find_one, product_filter.to_query()
        )

    async def insert_one(self, document: Document) -> ObjectId:
        result = await self._call("insert_one", self.collection.insert_one, document)
        return result.inserted_id

    async def update_one(
        self, product_filter: ProductFilter, replacement: Document
    ) -> int:
        result = await self._call(
            "replace_one",
            self.collection.replace_one,
            product_filter.to_query(),
            replacement,
        )
        return result.matched_count

    async def delete_one(self, product_filter: ProductFilter) -> int:
        result = await self._call(
            "delete_one", self.collection.delete_one, product_filter.to_query()
        )
        return result.deleted_count

    async def ping(self) -> bool:
        if self.client is None:
            return True
        try:
            await asyncio.to_thread(self.client.admin.command, "ping")
        except PyMongoError as exc:
            logger.warning("MongoDB ping failed: %s", exc)
            return False
        return True

    async def close(self) -> None:
        if self.client is not None:
            self.client.close()


def create_mongo_gateway(
    uri: str | None = None,
    database: str | None = None,
    collection_name: str | None = None,
) -> MongoProductGateway:
    """Factory function to create a MongoDB gateway from settings."""
    client: MongoClient = MongoClient(
        uri or settings.mongo_uri,
        serverSelectionTimeoutMS=settings.DB_SERVER_SELECTION_TIMEOUT_MS,
    )
    collection = client[database or settings.DB_NAME][
        collection_name or settings.PRODUCT_COLLECTION
    ]
    logger.info(
        "Using MongoDB collection %s.%s", collection.database.name, collection.name
    )
    return MongoProductGateway(collection, client)
