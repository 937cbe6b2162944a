"""Pytest configuration and shared fixtures."""

import os

# database.py fails fast without a URL; tests build their own engines below
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")

import httpx
import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import create_async_engine

from database import get_session, init_db, make_sessionmaker
from helpers import FakeBookingStore
from main import app
from models import Artist
from stores import SQLBookingStore


@pytest.fixture
def fake_store() -> FakeBookingStore:
    return FakeBookingStore()


@pytest_asyncio.fixture
async def engine(tmp_path):
    # File-backed so that separate sessions get separate connections
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    await init_db(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return make_sessionmaker(engine)


@pytest_asyncio.fixture
async def session(session_factory):
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def artists(session):
    rows = [
        Artist(name="CRISTIANO", bio="Fine line", avatar_url="/artists/cristiano.jpg"),
        Artist(name="SDRAINS", bio="Realism", avatar_url="/artists/sdrains.jpg"),
    ]
    session.add_all(rows)
    await session.commit()
    for row in rows:
        await session.refresh(row)
    return rows


@pytest.fixture
def booking_store(session) -> SQLBookingStore:
    return SQLBookingStore(session)


@pytest_asyncio.fixture
async def client(session_factory):
    async def override_get_session():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_session] = override_get_session
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()
