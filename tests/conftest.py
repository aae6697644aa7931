"""
Yolomy Products Backend — Test Configuration (conftest.py)
===========================================================

What:  Shared pytest fixtures for the test suite.
How:   The database is mongomock behind mongoengine's `mongo_client_class`
       hook, so every test gets a fresh in-memory MongoDB. The HTTP client is
       an httpx AsyncClient talking to the ASGI app directly (no server).

Fixture Hierarchy (all function-scoped):
    ├── database:             mongomock-backed DatabaseConnection
    ├── unreachable_database: real pymongo handle pointed at a closed port
    ├── repository:           ProductRepository over `database`
    ├── product_fields:       validated ProductCreate for a sample widget
    ├── sample_image_bytes:   minimal PNG bytes for upload tests
    ├── make_client:          factory for clients on a fresh app + handle
    └── test_client:          AsyncClient wired to an app using `database`
"""

import os

# Override settings BEFORE any yolomy import builds the settings object
os.environ["MONGODB_URI"] = "mongodb://localhost:27017/yolomy_test"
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["EXPOSE_ERROR_DETAILS"] = "false"

from uuid import uuid4

import mongomock
import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from yolomy.database import DatabaseConnection
from yolomy.schemas.product import ImageUpload, ProductCreate
from yolomy.services.product_repository import ProductRepository


def _unique(prefix: str) -> str:
    return f"{prefix}_{uuid4().hex[:12]}"


@pytest.fixture
def database():
    """
    Provides an open connection handle backed by mongomock.

    Each test gets its own alias and database name, so no state leaks
    between tests.
    """
    handle = DatabaseConnection(
        f"mongodb://localhost:27017/{_unique('yolomy_test')}",
        alias=_unique("test"),
        mongo_client_class=mongomock.MongoClient,
    ).connect()
    yield handle
    handle.close()


@pytest.fixture
def unreachable_database():
    """
    Provides a real pymongo handle pointed at a port nobody listens on.

    Every operation fails with ServerSelectionTimeoutError after 100ms,
    which is what the app sees when the database container is down.
    """
    handle = DatabaseConnection(
        "mongodb://127.0.0.1:1/yolomy_down",
        alias=_unique("down"),
        serverSelectionTimeoutMS=100,
        connectTimeoutMS=100,
    ).connect()
    yield handle
    handle.close()


@pytest.fixture
def repository(database):
    return ProductRepository(database)


@pytest.fixture
def sample_image_bytes():
    """
    Minimal PNG: signature + IHDR header bytes.

    Not a decodable image; the API stores image bytes verbatim, so
    this is all the upload tests need.
    """
    return (
        b"\x89PNG\r\n\x1a\n"
        b"\x00\x00\x00\rIHDR\x00\x00\x00\x01\x00\x00\x00\x01\x08\x06\x00\x00\x00"
    )


@pytest.fixture
def widget_data():
    return {
        "name": "Widget",
        "description": "A widget",
        "category": "tools",
        "quantity": 5,
        "price": 9.99,
    }


@pytest.fixture
def product_fields(widget_data, sample_image_bytes):
    return ProductCreate(
        **widget_data,
        image=ImageUpload(
            filename="widget.png",
            content_type="image/png",
            data=sample_image_bytes,
        ),
    )


def build_client(app) -> AsyncClient:
    transport = ASGITransport(app=app)
    return AsyncClient(transport=transport, base_url="http://test")


@pytest.fixture
def make_client():
    """
    Factory for clients on a fresh app bound to a given handle and settings,
    optionally with FastAPI dependency overrides.

    Usage:
        async with make_client(unreachable_database) as client:
            ...
    """
    from yolomy.main import create_app

    def _make(database, config=None, overrides=None) -> AsyncClient:
        app = create_app(config)
        app.state.database = database
        app.dependency_overrides.update(overrides or {})
        return build_client(app)

    return _make


@pytest_asyncio.fixture
async def test_client(database, make_client):
    """
    Provides an async HTTP client for endpoint testing.

    The lifespan does not run under ASGITransport, so the mongomock handle
    is placed on app.state exactly where the lifespan would put it.
    """
    async with make_client(database) as client:
        yield client
