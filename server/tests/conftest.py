"""Test configuration and fixtures."""

import random

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from mi3ad.core.database import Base, get_db
from mi3ad.models import *  # noqa: F403 - Import all models
from mi3ad.models.user import User
from mi3ad.schemas.auth import RegisterRequest
from mi3ad.services.auth_service import AuthService
from mi3ad.services.catalog_service import seed_catalog

# Test database URL (in-memory SQLite for speed)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

TEST_PASSWORD = "secret123"


@pytest_asyncio.fixture(scope="function")
async def test_engine():
    """Create a test database engine."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest_asyncio.fixture(scope="function")
async def test_session(test_engine):
    """Create a test database session configured like the application's."""
    async_session = async_sessionmaker(
        test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )

    async with async_session() as session:
        yield session


@pytest_asyncio.fixture(scope="function")
async def catalog(test_session):
    """Seed the event and school catalog."""
    await seed_catalog(test_session)
    return test_session


@pytest_asyncio.fixture(scope="function")
async def test_app(test_session):
    """Create a test FastAPI application without lifespan, middleware or workers."""
    from fastapi import FastAPI
    from fastapi.exceptions import RequestValidationError

    from mi3ad.core.exceptions import (
        ProblemDetailsException,
        generic_exception_handler,
        problem_details_handler,
        request_validation_handler,
    )
    from mi3ad.routers import API_ROUTERS, metrics_router

    app = FastAPI(title="Mi3AD API (Test)", version="1.0.0-test")

    app.add_exception_handler(ProblemDetailsException, problem_details_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, generic_exception_handler)

    for router in API_ROUTERS:
        app.include_router(router)
    app.include_router(metrics_router)

    async def override_get_db():
        yield test_session

    app.dependency_overrides[get_db] = override_get_db

    yield app

    app.dependency_overrides.clear()


@pytest_asyncio.fixture(scope="function")
async def test_client(test_app, catalog):
    """Create a test HTTP client over a seeded catalog."""
    transport = ASGITransport(app=test_app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def sample_registration():
    """Sample registration data."""
    return {
        "name": "Sara Ali",
        "email": "sara@example.com",
        "phone": "0912345678",
        "password": TEST_PASSWORD,
        "account_type": "personal",
    }


@pytest_asyncio.fixture(scope="function")
async def user(catalog, sample_registration) -> User:
    """A registered user with starter notifications and default security settings."""
    response = await AuthService(catalog).register(RegisterRequest(**sample_registration))
    return await catalog.get(User, response.user.id)


@pytest_asyncio.fixture(scope="function")
async def other_user(catalog) -> User:
    """A second registered user."""
    response = await AuthService(catalog).register(RegisterRequest(
        name="Omar Salem",
        email="omar@example.com",
        phone="0923456789",
        password=TEST_PASSWORD,
    ))
    return await catalog.get(User, response.user.id)


@pytest_asyncio.fixture(scope="function")
async def auth_headers(test_client, sample_registration):
    """Register through the API and return bearer headers."""
    response = await test_client.post("/v1/auth/register", json=sample_registration)
    assert response.status_code == 201
    token = response.json()["access_token"]
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def rng():
    """Deterministic random source for simulation code."""
    return random.Random(1234)


@pytest.fixture
def password():
    """Password of the registered test users."""
    return TEST_PASSWORD
