"""
Shared fixtures: an in-memory database per test, the ASGI app wired to it,
and logged-in users of two separate companies.
"""
import secrets
from datetime import timedelta
from typing import AsyncGenerator, Callable, List

import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.pool import StaticPool

# careers.database is patched per test; routes look the engine up at call time
import careers.database
from careers.database import Base
from careers.database_types import utcnow
import careers.models  # noqa: F401
from careers.models.company import Company
from careers.models.user import User, UserRole
from careers.services.company import create_company_with_admin

from careers.main import app as fastapi_app


TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest_asyncio.fixture
async def db() -> AsyncGenerator[AsyncSession, None]:
    """
    Fresh schema per test, swapped into careers.database for the app.
    """
    # StaticPool keeps a single connection so every session sees the same in-memory database
    test_engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    original_engine = careers.database.engine
    original_sessionmaker = careers.database.AsyncSessionLocal

    careers.database.engine = test_engine
    careers.database.AsyncSessionLocal = async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False
    )

    session = async_sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)()

    try:
        yield session
    finally:
        await session.close()
        async with test_engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)
        await test_engine.dispose()

        careers.database.engine = original_engine
        careers.database.AsyncSessionLocal = original_sessionmaker


@pytest_asyncio.fixture
async def async_client(db: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """
    Unauthenticated HTTP client talking to the app in-process.

    The db fixture already replaced careers.database.engine with the test
    engine, so all endpoints use the test database.
    """
    transport = ASGITransport(app=fastapi_app)

    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


async def login(db: AsyncSession, user: User) -> str:
    """Give the user a valid access token without going through the magic link flow."""
    user.access_token = secrets.token_urlsafe(16)
    user.access_token_expires_at = utcnow() + timedelta(hours=1)
    await db.commit()
    return user.access_token


@pytest_asyncio.fixture
async def admin_user(db: AsyncSession) -> User:
    """Admin of a freshly signed-up company (with default job functions)."""
    user = await create_company_with_admin(db, "Acme", "admin@acme.com", "Ada Admin")
    await login(db, user)
    return user


@pytest_asyncio.fixture
async def company(db: AsyncSession, admin_user: User) -> Company:
    return await db.get(Company, admin_user.company_id)


@pytest_asyncio.fixture
async def make_user(db: AsyncSession, admin_user: User) -> Callable:
    """Factory creating logged-in users in the admin's company (or another one)."""
    counter = {"n": 0}

    async def factory(role: UserRole = UserRole.USER, company_id=None) -> User:
        counter["n"] += 1
        user = User(
            email=f"{role.value}{counter['n']}@acme.com",
            full_name=f"{role.value.title()} {counter['n']}",
            role=role,
            company_id=company_id or admin_user.company_id,
        )
        db.add(user)
        await db.commit()
        await db.refresh(user)
        await login(db, user)
        return user

    return factory


@pytest_asyncio.fixture
async def client_for(db: AsyncSession) -> AsyncGenerator[Callable, None]:
    """Factory returning an authenticated client for a given user."""
    clients: List[AsyncClient] = []

    def factory(user: User) -> AsyncClient:
        client = AsyncClient(
            transport=ASGITransport(app=fastapi_app),
            base_url="http://test",
            headers={"Authorization": f"Bearer {user.access_token}"},
        )
        clients.append(client)
        return client

    yield factory

    for client in clients:
        await client.aclose()


@pytest_asyncio.fixture
async def client(client_for: Callable, admin_user: User) -> AsyncClient:
    """Client authenticated as the company admin."""
    return client_for(admin_user)


@pytest_asyncio.fixture
async def other_company_admin(db: AsyncSession) -> User:
    """Admin of a second, unrelated tenant."""
    user = await create_company_with_admin(db, "Globex", "admin@globex.com", "Gil Globex")
    await login(db, user)
    return user
