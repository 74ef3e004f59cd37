"""
Pytest configuration and shared fixtures.

Every test gets a fresh in-memory SQLite database. The app runs without a
model client and without Redis, so AI operations answer with their defaults.
"""

import os

# Must be set before career_guidance.config.settings is imported
os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"
os.environ.pop("AI_PROJECT_ID", None)
os.environ.pop("OPENAI_API_KEY", None)
os.environ.pop("REDIS_URL", None)

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from career_guidance.config.database import get_db
from career_guidance.core.deps import get_ai_service, get_cache
from career_guidance.main import app as fastapi_app
from career_guidance.models import Base
from career_guidance.repositories.profile_repository import ProfileRepository
from career_guidance.schemas.profile import ProfileCreate
from career_guidance.seed import SAMPLE_CAREER_PATHS, build_career_path
from career_guidance.services.ai import AIService
from career_guidance.services.cache import CacheService

TEST_PASSWORD = "secret123"


def registration_payload(email="asha.verma@studentmail.in", **overrides):
    payload = {
        "name": "Asha Verma",
        "email": email,
        "password": TEST_PASSWORD,
        "phone": "9876543210",
        "date_of_birth": "2005-04-12",
        "gender": "female",
        "location": {"state": "Karnataka", "city": "Bengaluru", "pincode": "560001"},
        "education": {"current_level": "12th", "stream": "science"},
    }
    payload.update(overrides)
    return payload


@pytest.fixture
async def engine():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(engine, expire_on_commit=False)


@pytest.fixture
async def db_session(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
async def profile(db_session):
    """A registered profile, created directly through the repository."""
    created = await ProfileRepository(db_session).create(
        ProfileCreate(**registration_payload())
    )
    await db_session.commit()
    return created


@pytest.fixture
async def other_profile(db_session):
    created = await ProfileRepository(db_session).create(
        ProfileCreate(**registration_payload(email="ravi.kumar@studentmail.in", name="Ravi Kumar"))
    )
    await db_session.commit()
    return created


@pytest.fixture
def ai_service():
    return AIService()


@pytest.fixture
def cache():
    return CacheService()


@pytest.fixture
async def career_paths(session_factory):
    async with session_factory() as session:
        paths = [build_career_path(data) for data in SAMPLE_CAREER_PATHS]
        session.add_all(paths)
        await session.commit()
    return paths


@pytest.fixture
def app(session_factory, ai_service, cache):
    async def override_get_db():
        async with session_factory() as session:
            try:
                yield session
            except Exception:
                await session.rollback()
                raise

    fastapi_app.dependency_overrides[get_db] = override_get_db
    fastapi_app.dependency_overrides[get_ai_service] = lambda: ai_service
    fastapi_app.dependency_overrides[get_cache] = lambda: cache
    yield fastapi_app
    fastapi_app.dependency_overrides.clear()


@pytest.fixture
async def client(app):
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


async def register(client, **overrides):
    response = await client.post("/api/auth/register", json=registration_payload(**overrides))
    assert response.status_code == 201, response.text
    return response.json()


@pytest.fixture
async def auth_headers(client):
    body = await register(client)
    return {"Authorization": f"Bearer {body['access_token']}"}


@pytest.fixture
async def other_auth_headers(client):
    body = await register(client, email="ravi.kumar@studentmail.in", name="Ravi Kumar")
    return {"Authorization": f"Bearer {body['access_token']}"}
