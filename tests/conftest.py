"""Pytest configuration and fixtures"""

import os

# Must be set before app modules read settings
DEFAULT_TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"
TEST_AUTH_SECRET = "test-secret"

os.environ.setdefault("DATABASE_URL", DEFAULT_TEST_DATABASE_URL)
os.environ.setdefault("GOOGLE_API_KEY", "test")
os.environ.setdefault("YOUTUBE_API_KEY", "test")
os.environ["AUTH_SECRET_KEY"] = TEST_AUTH_SECRET

import pytest
from jose import jwt
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

import models  # noqa: F401  registers all tables on Base.metadata
from app.config import get_settings
from core.database import Base, build_engine, reset_engine


@pytest.fixture(autouse=True, scope="session")
def settings_from_env():
    """Settings resolved from the test environment"""
    get_settings.cache_clear()
    yield get_settings()
    get_settings.cache_clear()


@pytest.fixture(autouse=True)
def reset_db_engine():
    """Drop the app's cached engine around each test"""
    reset_engine()
    yield
    reset_engine()


@pytest.fixture
async def db_engine():
    """Engine with a freshly created schema, dropped afterwards"""
    engine = build_engine(os.environ["DATABASE_URL"])

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
def db_session_maker(db_engine):
    return async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def db_session(db_session_maker):
    """Session for seeding and inspecting test data"""
    async with db_session_maker() as session:
        yield session


@pytest.fixture
def override_get_db(db_session_maker):
    """Request-scoped sessions bound to the test engine"""

    async def _get_test_db():
        async with db_session_maker() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    return _get_test_db


@pytest.fixture
async def client(override_get_db):
    """Async client running the app lifespan against the test database"""
    from asgi_lifespan import LifespanManager
    from httpx import ASGITransport, AsyncClient

    from app.dependencies import get_db_session
    from app.main import app

    app.dependency_overrides[get_db_session] = override_get_db
    try:
        async with LifespanManager(app):
            transport = ASGITransport(app=app)
            async with AsyncClient(transport=transport, base_url="http://test") as test_client:
                yield test_client
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def make_token():
    """Build bearer header values signed with the test secret"""

    def _make_token(uid: str = "user-1", **claims) -> str:
        token = jwt.encode({"sub": uid, **claims}, TEST_AUTH_SECRET, algorithm="HS256")
        return f"Bearer {token}"

    return _make_token


@pytest.fixture
def admin_headers(make_token):
    return {"Authorization": make_token("admin-1", admin=True)}
