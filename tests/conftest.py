from typing import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from libs.db.base import Base
from libs.db.session import get_async_db
from services.registrations_service import models as _models  # noqa: F401
from services.registrations_service.app.main import app
from tests.factories import make_token


@pytest_asyncio.fixture
async def test_engine():
    """
    Fresh in-memory SQLite database per test, schema created from metadata.
    StaticPool keeps the single connection alive for the test's duration.
    """
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(test_engine) -> AsyncGenerator[AsyncSession, None]:
    """
    Yield a session bound to the test database. Handlers under test share it
    through the get_async_db override.
    """
    session_factory = async_sessionmaker(
        bind=test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def client(db_session) -> AsyncGenerator[AsyncClient, None]:
    """
    Yield an AsyncClient for the app with the DB dependency overridden.
    """
    app.dependency_overrides[get_async_db] = lambda: db_session

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test"
    ) as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture
def admin_headers() -> dict:
    token = make_token(user_metadata={"role": "admin"})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def user_headers() -> dict:
    token = make_token(
        sub="auth-user-2", email="terapis@pijatjogja.id", user_metadata={}
    )
    return {"Authorization": f"Bearer {token}"}
