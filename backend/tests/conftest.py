"""Shared pytest fixtures and configuration."""

import os
import tempfile
from pathlib import Path

from passlib.context import CryptContext

# Point settings at throwaway storage before the application is imported
_TEST_ROOT = Path(tempfile.mkdtemp(prefix="estateview-tests-"))
ADMIN_USERNAME = "admin"
ADMIN_PASSWORD = "correct-horse-battery"

os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_TEST_ROOT / 'test.db'}"
os.environ["UPLOADS_DIR"] = str(_TEST_ROOT / "uploads")
os.environ["JWT_SECRET"] = "test-jwt-secret"
os.environ["ADMIN_USERNAME"] = ADMIN_USERNAME
os.environ["ADMIN_PASSWORD_HASH"] = CryptContext(schemes=["pbkdf2_sha256"]).hash(ADMIN_PASSWORD)

from datetime import datetime, timedelta, timezone

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from estateview.config import settings
from estateview.database import Base, async_session_maker, engine, init_db
from estateview.main import app
from estateview.models.property import Property
from estateview.utils.security import create_access_token

BASE_TIME = datetime(2024, 1, 1, tzinfo=timezone.utc)


def build_property(index: int, **overrides) -> Property:
    """Unsaved property whose creation time grows with index."""
    created = BASE_TIME + timedelta(hours=index)
    data = {
        "id": index,
        "title": f"Listing {index}",
        "description": "Sunny home close to schools",
        "type": "Apartment",
        "status": "For Sale",
        "featured": False,
        "bedrooms": 2,
        "bathrooms": 1,
        "area": "1000 sq ft",
        "city": "Pune",
        "state": "Maharashtra",
        "pincode": "411001",
        "price": 1_000_000 + index * 1_000,
        "created_at": created,
        "updated_at": created,
    }
    data.update(overrides)
    prop = Property(**data)
    prop.amenity_list = []
    prop.image_list = []
    prop.refresh_derived_fields()
    return prop


@pytest_asyncio.fixture
async def db():
    """Fresh, empty tables for every test."""
    await init_db()
    async with engine.begin() as conn:
        for table in reversed(Base.metadata.sorted_tables):
            await conn.execute(table.delete())
    yield
    await engine.dispose()


@pytest_asyncio.fixture
async def client(db):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
def admin_headers():
    token = create_access_token(subject=settings.admin_username)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def uploads_dir() -> Path:
    return Path(settings.uploads_dir)


@pytest.fixture
def make_property():
    return build_property


@pytest_asyncio.fixture
async def seed_properties(db):
    async def _seed(*properties: Property):
        async with async_session_maker() as session:
            session.add_all(properties)
            await session.commit()
        return properties
    return _seed
