"""
Homebase Backend: Test Configuration (conftest.py)
==================================================

What:  Shared pytest fixtures for the entire test suite.

Fixture Hierarchy (all function-scoped):
    ├── mock_db_session: AsyncMock session for service unit tests
    ├── database: Database bound to a fresh SQLite file, tables created
    ├── test_client: HTTPX AsyncClient talking to create_app(database)
    ├── auth_headers: builds an Authorization header for a user id
    └── make_token: signs arbitrary bearer tokens (expired, wrong secret, ...)
"""

import os
import tempfile

# Settings are read at import time, so the environment is set BEFORE any
# homebase import. The module-level app in homebase.main points at this file;
# tests get their own database through the fixtures below.
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///" + os.path.join(
    tempfile.mkdtemp(prefix="homebase_test_"), "import.db"
)
os.environ["TOKEN_SECRET"] = "test-secret-not-real"
os.environ["GOOGLE_MAPS_API_KEY"] = ""
os.environ["LOG_LEVEL"] = "WARNING"

from datetime import datetime, timedelta, timezone
from typing import Optional
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from jose import jwt

from homebase.config import settings
from homebase.database import Database


def _sign_token(
    user_id,
    expires_in: timedelta = timedelta(hours=1),
    secret: Optional[str] = None,
) -> str:
    """Signs a token the way the login service does."""
    payload = {"userId": user_id, "exp": datetime.now(timezone.utc) + expires_in}
    return jwt.encode(payload, secret or settings.token_secret, algorithm=settings.token_algorithm)


@pytest.fixture
def mock_db_session():
    """
    Provides a mock async database session.

    Usage:
        mock_db_session.execute.return_value.scalar_one_or_none.return_value = row
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.flush = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.add = MagicMock()
    return session


@pytest_asyncio.fixture
async def database(tmp_path):
    """A real Database on a throwaway SQLite file with all tables created."""
    db = Database(f"sqlite+aiosqlite:///{tmp_path / 'homebase.db'}")
    await db.create_tables()
    yield db
    await db.dispose()


@pytest_asyncio.fixture
async def test_client(database):
    """
    HTTPX AsyncClient wired to an app serving the `database` fixture.

    Usage:
        async def test_list(test_client, auth_headers):
            response = await test_client.get("/api/movies", headers=auth_headers(1))
    """
    from homebase.main import create_app

    app = create_app(database=database)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def auth_headers():
    def _headers(user_id) -> dict:
        return {"Authorization": f"Bearer {_sign_token(user_id)}"}
    return _headers


@pytest.fixture
def sample_property():
    """A create body using the frontend's camelCase field names."""
    return {
        "formattedAddress": "742 Evergreen Terrace, Springfield, OR 97403",
        "price": 349999.6,
        "priceRangeLow": 330000,
        "priceRangeHigh": 370000.4,
        "propertyType": "Single Family",
        "bedrooms": 4,
        "bathrooms": 2.5,
        "squareFootage": 1850,
        "yearBuilt": 1989,
        "lastSale": "2019-06-14",
        "lastSalePrice": 289000,
    }


@pytest.fixture
def sample_movie():
    return {
        "title": "The Iron Giant",
        "summary": "A boy befriends a giant robot.",
        "imdbLink": "https://www.imdb.com/title/tt0129167/",
        "rating": 5,
    }


@pytest.fixture
def make_token():
    """Signs arbitrary tokens: make_token(7, expires_in=timedelta(seconds=-1))."""
    return _sign_token
