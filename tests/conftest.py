"""
Test configuration and fixtures for the estate listing API.
Provides database fixtures, test data factories, and common test utilities.
"""

import os

# Must be set before the application modules read their settings
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("ENVIRONMENT", "testing")

import pytest
import uuid
from typing import AsyncGenerator, Dict, List, Optional
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.pool import StaticPool
from httpx import AsyncClient, ASGITransport

from estate_api.main import app
from estate_api.database import Base, get_db
from estate_api.models.user import User
from estate_api.models.listing import Listing, ListingType
from estate_api.repositories.user import UserRepository
from estate_api.repositories.listing import ListingRepository
from estate_api.services.auth import AuthService
from estate_api.services.listing import ListingService
from estate_api.services.user import UserService
from estate_api.utils.auth import create_access_token


TEST_DATABASE_URL = os.getenv("TEST_DATABASE_URL", "sqlite+aiosqlite:///:memory:")

TEST_PASSWORD = "testpassword123"


@pytest.fixture
async def db_session() -> AsyncGenerator[AsyncSession, None]:
    """Create a fresh database and session for each test."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False} if "sqlite" in TEST_DATABASE_URL else {}
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    session_factory = async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)

    async with session_factory() as session:
        try:
            yield session
        finally:
            await session.rollback()
            await session.close()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def async_client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """Create an async test client with database session override."""
    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()


# Repository fixtures
@pytest.fixture
def user_repository(db_session: AsyncSession) -> UserRepository:
    """Create a user repository instance."""
    return UserRepository(db_session)


@pytest.fixture
def listing_repository(db_session: AsyncSession) -> ListingRepository:
    """Create a listing repository instance."""
    return ListingRepository(db_session)


# Service fixtures
@pytest.fixture
def auth_service(db_session: AsyncSession) -> AuthService:
    """Create an auth service instance."""
    return AuthService(db_session)


@pytest.fixture
def listing_service(db_session: AsyncSession) -> ListingService:
    """Create a listing service instance."""
    return ListingService(db_session)


@pytest.fixture
def user_service(db_session: AsyncSession) -> UserService:
    """Create a user service instance."""
    return UserService(db_session)


# Test data factories
class UserFactory:
    """Factory for creating test users."""

    @staticmethod
    def create_user_data(
        email: str = None,
        password: str = TEST_PASSWORD,
        username: str = "testuser"
    ) -> dict:
        """Create user data dictionary."""
        return {
            "username": username,
            "email": email or f"test{uuid.uuid4().hex[:8]}@example.com",
            "password": password
        }

    @staticmethod
    async def create_user(
        user_repo: UserRepository,
        email: str = None,
        password: str = TEST_PASSWORD,
        username: str = "testuser"
    ) -> User:
        """Create a test user in the database."""
        user_data = UserFactory.create_user_data(email=email, password=password, username=username)
        return await user_repo.create_user(user_data)


class ListingFactory:
    """Factory for creating test listings."""

    @staticmethod
    def create_listing_data(
        name: str = "Test Listing",
        description: str = "A lovely test listing",
        address: str = "1 Test Street",
        regular_price: float = 1000,
        discount_price: Optional[float] = None,
        bathrooms: int = 1,
        bedrooms: int = 2,
        furnished: bool = False,
        parking: bool = False,
        type: ListingType = ListingType.RENT,
        offer: bool = False,
        image_urls: List[str] = None,
        owner_ref: uuid.UUID = None
    ) -> dict:
        """Create listing data dictionary (column names)."""
        data = {
            "name": name,
            "description": description,
            "address": address,
            "regular_price": regular_price,
            "discount_price": discount_price,
            "bathrooms": bathrooms,
            "bedrooms": bedrooms,
            "furnished": furnished,
            "parking": parking,
            "type": type,
            "offer": offer,
            "image_urls": image_urls if image_urls is not None else ["https://example.com/cover.jpg"]
        }
        if owner_ref is not None:
            data["owner_ref"] = owner_ref
        return data

    @staticmethod
    def create_listing_payload(**overrides) -> dict:
        """Create a camelCase JSON payload as the client sends it."""
        payload = {
            "name": "Test Listing",
            "description": "A lovely test listing",
            "address": "1 Test Street",
            "regularPrice": 1000,
            "discountPrice": None,
            "bathrooms": 1,
            "bedrooms": 2,
            "furnished": False,
            "parking": False,
            "type": "rent",
            "offer": False,
            "imageUrls": ["https://example.com/cover.jpg"]
        }
        payload.update(overrides)
        return payload

    @staticmethod
    async def create_listing(
        listing_repo: ListingRepository,
        owner_ref: uuid.UUID,
        **fields
    ) -> Listing:
        """Create a test listing in the database."""
        listing_data = ListingFactory.create_listing_data(owner_ref=owner_ref, **fields)
        return await listing_repo.create_listing(listing_data)


# Common test fixtures
@pytest.fixture
async def test_user(user_repository: UserRepository) -> User:
    """Create a test user."""
    return await UserFactory.create_user(user_repository, email="owner@test.com", username="owner")


@pytest.fixture
async def other_user(user_repository: UserRepository) -> User:
    """Create a second user who owns nothing."""
    return await UserFactory.create_user(user_repository, email="other@test.com", username="other")


@pytest.fixture
async def test_listing(listing_repository: ListingRepository, test_user: User) -> Listing:
    """Create a test listing owned by ``test_user``."""
    return await ListingFactory.create_listing(
        listing_repository,
        owner_ref=test_user.id,
        name="Garden flat",
        regular_price=1500,
        discount_price=1200,
        offer=True
    )


def auth_headers(user: User) -> Dict[str, str]:
    """Authorization header for the given user."""
    token = create_access_token(user_id=user.id, email=user.email)
    return {"Authorization": f"Bearer {token}"}
