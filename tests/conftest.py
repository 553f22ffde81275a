"""
Pytest fixtures - test DB, client, seeded users (TDD/BDD support).
Challenge: Isolated tests; fresh in-memory database per test.
"""

import os

# Must be set before app modules read settings (cached on first import)
os.environ.setdefault("BCRYPT_ROUNDS", "4")

from typing import AsyncGenerator

import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from app.db.base import Base
from app.main import app
from app.db.session import get_db
from app.db.models import User
from app.db.repositories.user_repository import UserRepository
from app.mappers.user_mapper import utcnow
from app.core.security import hash_password
from app.services.user_service import UserService


# In-memory SQLite for speed; StaticPool keeps one connection so the DB lives for the test
TEST_DATABASE_URL = "sqlite+aiosqlite://"


@pytest_asyncio.fixture
async def engine():
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def session(engine) -> AsyncGenerator[AsyncSession, None]:
    async_session = async_sessionmaker(
        engine, class_=AsyncSession, expire_on_commit=False
    )
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
async def repo(session: AsyncSession) -> UserRepository:
    return UserRepository(session)


@pytest_asyncio.fixture
async def service(repo: UserRepository) -> UserService:
    return UserService(repo)


async def _add_user(session: AsyncSession, name: str, email: str, active: bool = True) -> User:
    user = User(
        name=name,
        email=email,
        password_hash=hash_password("password123"),
        active=active,
        created_at=utcnow(),
    )
    session.add(user)
    await session.flush()
    await session.refresh(user)
    return user


@pytest_asyncio.fixture
async def test_user(session: AsyncSession) -> User:
    return await _add_user(session, "Test User", "test@example.com")


@pytest_asyncio.fixture
async def inactive_user(session: AsyncSession) -> User:
    return await _add_user(session, "Gone User", "gone@example.com", active=False)
