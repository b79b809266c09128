"""
Pytest configuration and fixtures for Video Metadata API tests
"""
import os
from typing import AsyncGenerator

import pytest


# Set test environment variables BEFORE any imports
os.environ['DATABASE_URL'] = 'sqlite+aiosqlite:///:memory:'
os.environ['CACHE_BACKEND'] = 'memory'
os.environ['JWT_SECRET'] = 'test-secret-key-for-testing-only-32chars'
os.environ['BCRYPT_ROUNDS'] = '4'
os.environ['ENABLE_METRICS'] = 'false'
os.environ['LOG_LEVEL'] = 'WARNING'


TEST_JWT_SECRET = os.environ['JWT_SECRET']


class FakeClock:
    """Управляемые часы для проверки TTL"""

    def __init__(self, start: float = 1_000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
async def test_engine():
    """In-memory SQLite engine shared by every session of one test"""
    from sqlalchemy.ext.asyncio import create_async_engine
    from sqlalchemy.pool import StaticPool
    from vidmeta.database.models import BaseModel

    engine = create_async_engine(
        'sqlite+aiosqlite:///:memory:',
        echo=False,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(BaseModel.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
def session_maker(test_engine):
    from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

    return async_sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def test_db(session_maker) -> AsyncGenerator:
    """
    Database session for repository and service tests

    Yields:
        AsyncSession: SQLAlchemy async session
    """
    async with session_maker() as session:
        yield session


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def memory_client(clock):
    from vidmeta.cache.memory import MemoryCacheClient

    return MemoryCacheClient(clock=clock)


@pytest.fixture
def video_cache(memory_client):
    from vidmeta.cache.cache_service import CacheService, VideoListCache

    return VideoListCache(CacheService(memory_client), ttl=60)


@pytest.fixture
def security():
    from vidmeta.auth.security import SecurityService

    return SecurityService(rounds=4)


@pytest.fixture
def jwt_service():
    from vidmeta.auth.jwt import JWTService

    return JWTService(secret_key=TEST_JWT_SECRET, expire_minutes=60)


@pytest.fixture
async def test_user(test_db, security):
    """Create a sample user for testing"""
    from vidmeta.database.models import User

    user = User(
        email="owner@example.com",
        hashed_password=security.hash_password("OwnerPass1"),
        name="Owner",
    )
    test_db.add(user)
    await test_db.commit()
    await test_db.refresh(user)
    return user


@pytest.fixture
async def other_user(test_db, security):
    """Second user, owns nothing by default"""
    from vidmeta.database.models import User

    user = User(
        email="other@example.com",
        hashed_password=security.hash_password("OtherPass1"),
    )
    test_db.add(user)
    await test_db.commit()
    await test_db.refresh(user)
    return user


@pytest.fixture
def app(session_maker, video_cache, security, jwt_service):
    """
    Application with the database, cache and auth services replaced
    by per-test instances
    """
    from vidmeta.main import create_app
    from vidmeta.auth.dependencies import get_jwt_service, get_security_service
    from vidmeta.cache.cache_service import get_video_cache
    from vidmeta.database.connection import get_db

    application = create_app()

    async def override_get_db():
        async with session_maker() as session:
            yield session

    application.dependency_overrides[get_db] = override_get_db
    application.dependency_overrides[get_video_cache] = lambda: video_cache
    application.dependency_overrides[get_security_service] = lambda: security
    application.dependency_overrides[get_jwt_service] = lambda: jwt_service
    return application


@pytest.fixture
async def client(app):
    """Async HTTP client bound to the test application"""
    from httpx import AsyncClient, ASGITransport

    async with AsyncClient(
        transport=ASGITransport(app=app, raise_app_exceptions=False),
        base_url="http://test"
    ) as ac:
        yield ac


async def register_and_login(client, email: str, password: str = "secret1") -> str:
    """Регистрация + логин, возвращает bearer токен"""
    response = await client.post("/auth/register", json={"email": email, "password": password})
    assert response.status_code == 201, response.text
    response = await client.post("/auth/login", json={"email": email, "password": password})
    assert response.status_code == 200, response.text
    return response.json()["token"]


def bearer(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
async def auth_headers(client):
    """Headers of a freshly registered user"""
    token = await register_and_login(client, "u1@x.com")
    return bearer(token)
