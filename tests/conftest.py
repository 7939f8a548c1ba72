"""
Pytest fixtures - in-memory DB, API client, seeded users.
Each test gets a fresh schema; the app shares the test's session through get_db.
"""

from typing import AsyncGenerator, Awaitable, Callable

import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from app.db.base import Base
from app.main import app
from app.db.session import get_db
from app.db.models import UserEntity
from app.db.repositories.user_repository import UserRepository

# Single shared in-memory connection so every session sees the same tables
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest_asyncio.fixture
async def engine():
    engine = create_async_engine(TEST_DATABASE_URL, echo=False, poolclass=StaticPool)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture
async def session(engine) -> AsyncGenerator[AsyncSession, None]:
    async_session = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with async_session() as s:
        yield s


@pytest_asyncio.fixture
async def client(session: AsyncSession):
    async def override_get_db():
        yield session

    app.dependency_overrides[get_db] = override_get_db
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def test_user(session: AsyncSession) -> UserEntity:
    repo = UserRepository(session)
    return await repo.insert(UserEntity(login="jdoe", first_name="John", last_name="Doe"))


@pytest_asyncio.fixture
async def make_users(session: AsyncSession) -> Callable[[int], Awaitable[list[UserEntity]]]:
    """Insert n users with sortable logins user001, user002, ..."""
    repo = UserRepository(session)

    async def _make(n: int) -> list[UserEntity]:
        return [
            await repo.insert(UserEntity(login=f"user{i:03d}", first_name=f"First{i}", last_name=f"Last{i}"))
            for i in range(1, n + 1)
        ]

    return _make
