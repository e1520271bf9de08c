"""Persistence gateway abstraction used by the product service."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from bson import ObjectId

from src.services.filters import ProductFilter

Document = dict[str, Any]


class ProductGateway(ABC):
    """Narrow document-store interface required by the product service.

    Every method raises ``GatewayError`` when the underlying store call
    fails. Single-document operations are atomic at the store; nothing at
    this level spans several documents.
    """

    @abstractmethod
    async def find_many(self, product_filter: ProductFilter) -> list[Document]:
        """Return every document matching ``product_filter`` in store order."""

    @abstractmethod
    async def find_one(self, product_filter: ProductFilter) -> Document | None:
        """Return the first document matching ``product_filter`` or None."""

    @abstractmethod
    async def insert_one(self, document: Document) -> ObjectId:
        """Insert ``document`` and return its identifier."""

    @abstractmethod
    async def update_one(
        self, product_filter: ProductFilter, replacement: Document
    ) -> int:
        """Replace the matching document; return the match count."""

    @abstractmethod
    async def delete_one(self, product_filter: ProductFilter) -> int:
        """Delete one matching document; return the deleted count."""

    async def ping(self) -> bool:
        """Return True when the store answers."""
        return True

    async def close(self) -> None:
        """Release connections held by the gateway."""
