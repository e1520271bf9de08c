"""In-memory product gateway used for local demos and tests."""

from __future__ import annotations

import copy
import logging
from threading import RLock

from bson import ObjectId

from src.models.product import ID_FIELD
from src.services.filters import ProductFilter
from src.services.storage.gateway import Document, ProductGateway

logger = logging.getLogger(__name__)


class InMemoryProductGateway(ProductGateway):
    """Naive in-memory document store keeping insertion order."""

    def __init__(self) -> None:
        self._lock = RLock()
        self._storage: dict[ObjectId, Document] = {}

    async def find_many(self, product_filter: ProductFilter) -> list[Document]:
        with self._lock:
            return [
                copy.deepcopy(doc)
                for doc in self._storage.values()
                if product_filter.matches(doc)
            ]

    async def find_one(self, product_filter: ProductFilter) -> Document | None:
        with self._lock:
            for doc in self._storage.values():
                if product_filter.matches(doc):
                    return copy.deepcopy(doc)
        return None

    async def insert_one(self, document: Document) -> ObjectId:
        stored = copy.deepcopy(document)
        document_id = stored.setdefault(ID_FIELD, ObjectId())
        with self._lock:
            self._storage[document_id] = stored
        logger.debug("Stored product %s", document_id)
        return document_id

    async def update_one(
        self, product_filter: ProductFilter, replacement: Document
    ) -> int:
        with self._lock:
            for document_id, doc in self._storage.items():
                if product_filter.matches(doc):
                    stored = copy.deepcopy(replacement)
                    stored[ID_FIELD] = document_id
                    self._storage[document_id] = stored
                    return 1
        return 0

    async def delete_one(self, product_filter: ProductFilter) -> int:
        with self._lock:
            for document_id, doc in self._storage.items():
                if product_filter.matches(doc):
                    del self._storage[document_id]
                    return 1
        return 0

    def __len__(self) -> int:
        with self._lock:
            return len(self._storage)
