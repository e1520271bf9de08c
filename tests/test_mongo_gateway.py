"""Tests for the MongoDB gateway using a mocked pymongo collection."""

from unittest.mock import MagicMock

import bson
import pytest
from bson import ObjectId
from bson.errors import InvalidDocument
from pymongo.collection import Collection
from pymongo.errors import PyMongoError, ServerSelectionTimeoutError

from src.services.exceptions import GatewayError
from src.services.filters import EqualityClause, ProductFilter, build_filter
from src.services.storage.mongo_gateway import MongoProductGateway


def create_mock_collection():
    collection = MagicMock(spec=Collection)
    collection.name = "products"
    return collection


@pytest.mark.asyncio
async def test_find_many_materializes_cursor():
    collection = create_mock_collection()
    docs = [{"_id": ObjectId(), "currency": "SGD"}]
    collection.find.return_value = iter(docs)
    gateway = MongoProductGateway(collection)

    result = await gateway.find_many(build_filter({"currency": ["SGD"]}))

    assert result == docs
    collection.find.assert_called_once_with({"currency": {"$eq": "SGD"}})


@pytest.mark.asyncio
async def test_find_one_queries_by_object_id():
    collection = create_mock_collection()
    collection.find_one.return_value = None
    gateway = MongoProductGateway(collection)
    oid = ObjectId()

    assert await gateway.find_one(ProductFilter.by_id(oid)) is None
    collection.find_one.assert_called_once_with({"_id": oid})


@pytest.mark.asyncio
async def test_insert_returns_inserted_id():
    collection = create_mock_collection()
    oid = ObjectId()
    collection.insert_one.return_value = MagicMock(inserted_id=oid)
    gateway = MongoProductGateway(collection)

    assert await gateway.insert_one({"_id": oid, "product_name": "tv"}) == oid


@pytest.mark.asyncio
async def test_update_uses_full_document_replace():
    collection = create_mock_collection()
    collection.replace_one.return_value = MagicMock(matched_count=1)
    gateway = MongoProductGateway(collection)
    oid = ObjectId()
    replacement = {"_id": oid, "product_name": "tv"}

    assert await gateway.update_one(ProductFilter.by_id(oid), replacement) == 1
    collection.replace_one.assert_called_once_with({"_id": oid}, replacement)
    collection.update_one.assert_not_called()


@pytest.mark.asyncio
async def test_delete_returns_deleted_count():
    collection = create_mock_collection()
    collection.delete_one.return_value = MagicMock(deleted_count=0)
    gateway = MongoProductGateway(collection)

    assert await gateway.delete_one(ProductFilter.by_id(ObjectId())) == 0


@pytest.mark.asyncio
async def test_driver_errors_become_gateway_errors():
    collection = create_mock_collection()
    collection.find.side_effect = ServerSelectionTimeoutError("no servers")
    gateway = MongoProductGateway(collection)

    with pytest.raises(GatewayError) as exc_info:
        await gateway.find_many(ProductFilter())

    assert isinstance(exc_info.value.__cause__, PyMongoError)


@pytest.mark.asyncio
async def test_ping_reports_disconnected_store():
    collection = create_mock_collection()
    client = MagicMock()
    client.admin.command.side_effect = ServerSelectionTimeoutError("no servers")
    gateway = MongoProductGateway(collection, client)

    assert await gateway.ping() is False

    await gateway.close()
    client.close.assert_called_once()


@pytest.mark.asyncio
async def test_bson_encoding_overflow_becomes_gateway_error():
    collection = create_mock_collection()
    collection.insert_one.side_effect = lambda document: bson.encode(document)
    gateway = MongoProductGateway(collection)

    with pytest.raises(GatewayError) as exc_info:
        await gateway.insert_one({"_id": ObjectId(), "discount": 10**20})

    assert isinstance(exc_info.value.__cause__, OverflowError)


@pytest.mark.asyncio
async def test_invalid_document_becomes_gateway_error():
    collection = create_mock_collection()
    collection.find.side_effect = lambda query: bson.encode(query)
    gateway = MongoProductGateway(collection)

    product_filter = ProductFilter([EqualityClause("curr\0ency", "USD")])

    with pytest.raises(GatewayError) as exc_info:
        await gateway.find_many(product_filter)

    assert isinstance(exc_info.value.__cause__, InvalidDocument)
