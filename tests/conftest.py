"""
Test configuration and fixtures for the Real Estate Listings API.
Every test gets a fresh in-memory SQLite database injected through get_db.
"""

import pytest
import uuid
from datetime import timedelta
from typing import AsyncGenerator, Dict, Optional
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from httpx import AsyncClient, ASGITransport

from realestate_api.config import Settings
from realestate_api.database import create_engine_from_settings, create_session_factory, create_tables, get_db
from realestate_api.main import create_app
from realestate_api.models.user import User, UserRole
from realestate_api.models.real_estate import RealEstate
from realestate_api.repositories.user import UserRepository
from realestate_api.repositories.real_estate import RealEstateRepository
from realestate_api.repositories.favorite import FavoriteRepository
from realestate_api.repositories.visit import VisitRepository
from realestate_api.services.access_policy import AccessPolicy
from realestate_api.utils.auth import create_access_token


TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"
TEST_JWT_SECRET = "test-secret-key-that-is-long-enough-for-hs256"
TEST_PASSWORD = "testpassword123"


def make_settings(**overrides) -> Settings:
    """Settings for tests, ignoring any .env file."""
    values = {
        "database_url": TEST_DATABASE_URL,
        "jwt_secret_key": TEST_JWT_SECRET,
        "environment": "testing",
        "bootstrap_admin": False,
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


@pytest.fixture
def settings() -> Settings:
    return make_settings()


@pytest.fixture
async def engine(settings: Settings):
    """Fresh in-memory database with all tables."""
    engine = create_engine_from_settings(settings)
    await create_tables(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine) -> async_sessionmaker[AsyncSession]:
    return create_session_factory(engine)


@pytest.fixture
async def db_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    """Session used by tests to seed and inspect data."""
    async with session_factory() as session:
        yield session


@pytest.fixture
async def app(settings: Settings, engine, session_factory):
    """Application wired to the test database."""
    application = create_app(settings)
    await application.state.engine.dispose()
    application.state.engine = engine
    application.state.session_factory = session_factory

    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        async with session_factory() as session:
            yield session

    application.dependency_overrides[get_db] = override_get_db
    yield application
    application.dependency_overrides.clear()


@pytest.fixture
async def client(app) -> AsyncGenerator[AsyncClient, None]:
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as async_client:
        yield async_client


@pytest.fixture
def policy(settings: Settings) -> AccessPolicy:
    return AccessPolicy.from_settings(settings)


# Repository fixtures
@pytest.fixture
def user_repository(db_session: AsyncSession) -> UserRepository:
    return UserRepository(db_session)


@pytest.fixture
def real_estate_repository(db_session: AsyncSession) -> RealEstateRepository:
    return RealEstateRepository(db_session)


@pytest.fixture
def favorite_repository(db_session: AsyncSession) -> FavoriteRepository:
    return FavoriteRepository(db_session)


@pytest.fixture
def visit_repository(db_session: AsyncSession) -> VisitRepository:
    return VisitRepository(db_session)


# Test data factories
class UserFactory:
    """Factory for creating test users."""

    @staticmethod
    def create_user_data(
        email: Optional[str] = None,
        password: str = TEST_PASSWORD,
        name: str = "Test User",
        role: UserRole = UserRole.USER
    ) -> dict:
        return {
            "name": name,
            "email": email or f"test{uuid.uuid4().hex[:8]}@example.com",
            "password": password,
            "role": role,
        }

    @staticmethod
    def signup_payload(email: Optional[str] = None, password: str = TEST_PASSWORD, name: str = "Test User") -> dict:
        """Request body as the API expects it."""
        return {
            "nome": name,
            "email": email or f"test{uuid.uuid4().hex[:8]}@example.com",
            "senha": password,
        }

    @staticmethod
    async def create_user(user_repo: UserRepository, **kwargs) -> User:
        return await user_repo.create_user(UserFactory.create_user_data(**kwargs))


class RealEstateFactory:
    """Factory for creating test listings."""

    @staticmethod
    def create_real_estate_data(**overrides) -> dict:
        data = {
            "name": "Apartamento Centro",
            "address": "Rua das Flores, 100",
            "price": 150000,
            "image": "https://example.com/images/centro.jpg",
            "area": 80,
            "location": "Centro",
            "bedrooms": 2,
        }
        data.update(overrides)
        return data

    @staticmethod
    async def create_real_estate(real_estate_repo: RealEstateRepository, **overrides) -> RealEstate:
        return await real_estate_repo.create(RealEstateFactory.create_real_estate_data(**overrides))


# User fixtures
@pytest.fixture
async def admin_user(user_repository: UserRepository) -> User:
    return await UserFactory.create_user(
        user_repository, email="admin@example.com", name="Admin", role=UserRole.ADMIN
    )


@pytest.fixture
async def regular_user(user_repository: UserRepository) -> User:
    return await UserFactory.create_user(user_repository, email="maria@example.com", name="Maria Silva")


@pytest.fixture
async def other_user(user_repository: UserRepository) -> User:
    return await UserFactory.create_user(user_repository, email="joao@example.com", name="Joao Souza")


@pytest.fixture
async def real_estate(real_estate_repository: RealEstateRepository) -> RealEstate:
    return await RealEstateFactory.create_real_estate(real_estate_repository)


def token_for(user: User, settings: Settings, expires_delta: Optional[timedelta] = None) -> str:
    return create_access_token(user.id, user.role.value, settings, expires_delta=expires_delta)


def auth_headers(user: User, settings: Settings) -> Dict[str, str]:
    """Authorization header carrying the raw token, as clients send it."""
    return {"Authorization": token_for(user, settings)}


@pytest.fixture
def admin_headers(admin_user: User, settings: Settings) -> Dict[str, str]:
    return auth_headers(admin_user, settings)


@pytest.fixture
def user_headers(regular_user: User, settings: Settings) -> Dict[str, str]:
    return auth_headers(regular_user, settings)


def assert_error(response, status_code: int, code: Optional[str] = None) -> dict:
    """Assert a structured error response and return its error body."""
    assert response.status_code == status_code, response.text
    body = response.json()
    assert "error" in body
    error = body["error"]
    assert error["message"]
    assert error["timestamp"]
    if code is not None:
        assert error["code"] == code
    return error
