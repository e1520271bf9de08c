"""Pytest configuration and fixtures for the product catalog service."""

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from src.services.product_service import ProductService, get_product_gateway
from src.services.storage.memory_gateway import InMemoryProductGateway


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "integration: marks tests as integration tests")
    config.addinivalue_line("markers", "unit: marks tests as unit tests")
    config.addinivalue_line("markers", "asyncio: marks tests as async tests")


@pytest.fixture()
def gateway():
    """Provide an empty in-memory product store for each test."""
    return InMemoryProductGateway()


@pytest.fixture()
def service(gateway):
    return ProductService(gateway)


@pytest.fixture()
def product_payload():
    return {
        "product_name": "macbook",
        "price": 250,
        "currency": "USD",
        "vendor": "Apple",
        "accessories": ["charger"],
    }


@pytest_asyncio.fixture()
async def client(gateway):
    """Return an HTTPX async client pointing at the FastAPI app."""
    from src.main import app

    app.dependency_overrides[get_product_gateway] = lambda: gateway
    try:
        async with AsyncClient(
            transport=ASGITransport(app=app),
            base_url="http://testserver",
        ) as test_client:
            yield test_client
    finally:
        app.dependency_overrides.pop(get_product_gateway, None)
