"""
Tienda API: Test Configuration (conftest.py)
============================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy (all function-scoped, fresh per test):
    ├── database:         Database on an in-memory SQLite store with the
    │                     ORM tables created
    ├── db_session:       AsyncSession from that Database
    ├── test_client:      HTTPX AsyncClient talking to create_app(database)
    ├── mock_db_session:  AsyncMock session for tests that need no store
    └── sample_*_payload: valid POST bodies
"""

import os

# Override settings for testing BEFORE any app imports
os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["CATALOG_TABLES"] = ""
os.environ["EXPOSE_STORE_ERRORS"] = "true"

from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy import event
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import StaticPool

from tienda.database import Base, Database
# Register every table with Base.metadata before create_all
from tienda.models.category import Category  # noqa: F401
from tienda.models.client import Client  # noqa: F401
from tienda.models.order import Order  # noqa: F401
from tienda.models.product import Product  # noqa: F401


@pytest_asyncio.fixture
async def database():
    """
    Provides a Database backed by a private in-memory SQLite store.

    StaticPool keeps a single connection so every session sees the same
    in-memory database. Foreign keys are enforced as on PostgreSQL.
    Tables come from the ORM metadata; the service itself never creates
    tables.
    """
    engine = create_async_engine("sqlite+aiosqlite://", poolclass=StaticPool)

    @event.listens_for(engine.sync_engine, "connect")
    def _enable_foreign_keys(dbapi_connection, connection_record):
        # SQLite leaves FOREIGN KEY enforcement off per connection by default
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    db = Database(engine)
    yield db
    await db.dispose()


@pytest_asyncio.fixture
async def db_session(database):
    async with database.session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def test_client(database):
    """
    Provides an async HTTP test client for endpoint testing.

    ASGITransport does not run the lifespan, so the Database is injected
    through create_app() instead of being built from settings.
    """
    from tienda.main import create_app

    app = create_app(database=database)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def mock_db_session():
    """
    Provides a mock async database session.

    Usage:
        mock_db_session.execute.return_value.scalar_one_or_none.return_value = 1
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.add = MagicMock()
    return session


@pytest.fixture
def sample_product_payload():
    return {
        "nombre": "  Martillo de carpintero  ",
        "descripcion": "Mango de fibra",
        "precio": "12.50",
        "stock": 30,
    }


@pytest.fixture
def sample_client_payload():
    return {
        "nombre": "Ana Torres",
        "email": "ana@example.com",
        "direccion": "Av. Siempre Viva 742",
        "telefono": "555-0101",
    }
