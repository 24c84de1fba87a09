"""
Pytest configuration and fixtures for Photo Vault tests.
"""

import pytest
from datetime import datetime, timedelta
from typing import Generator
from sqlalchemy.orm import Session
from sqlalchemy.pool import StaticPool
from fastapi.testclient import TestClient

from app.core.database import Database, get_db
from app.core.exceptions import PhotoVaultError, photo_vault_error_handler
from app.core.rate_limit import limiter
from app.models.user import User
from app.models.photo import Photo
from app.models.tag import Tag


# Use in-memory SQLite database for tests
TEST_DATABASE_URL = "sqlite:///:memory:"

PROVIDER_URL = "https://images.unsplash.com/photo-1500000000000-abcdef"


@pytest.fixture(scope="function")
def database() -> Generator[Database, None, None]:
    """Create a test storage context with all tables."""
    database = Database(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    database.create_all()
    yield database
    database.drop_all()
    database.dispose()


@pytest.fixture(scope="function")
def db_session(database) -> Generator[Session, None, None]:
    """Create a test database session."""
    session = database.session()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture(scope="function")
def test_app(db_session):
    """Create a FastAPI test app without lifespan events."""
    from fastapi import FastAPI
    from app.api.endpoints import photos, search_history

    # Create app without lifespan to avoid opening the configured database
    test_app = FastAPI(title="Photo Vault - Test", version="1.0.0")
    test_app.state.limiter = limiter
    test_app.add_exception_handler(PhotoVaultError, photo_vault_error_handler)

    test_app.include_router(photos.router, prefix="/api/photos", tags=["photos"])
    test_app.include_router(
        search_history.router, prefix="/api/search-history", tags=["search-history"]
    )

    @test_app.get("/health")
    def health():
        return {"status": "ok"}

    # Override database dependency
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    test_app.dependency_overrides[get_db] = override_get_db

    return test_app


@pytest.fixture(scope="function")
def client(test_app) -> TestClient:
    """Create a test client without entering context manager."""
    return TestClient(test_app, raise_server_exceptions=False)


@pytest.fixture(autouse=True)
def disable_rate_limits():
    """Keep the shared in-memory limiter from tripping across tests."""
    limiter.enabled = False
    yield
    limiter.enabled = True


@pytest.fixture(scope="function")
def test_user(db_session) -> User:
    """Create a test user."""
    user = User(username="testuser", email="test@example.com")
    db_session.add(user)
    db_session.commit()
    db_session.refresh(user)
    return user


@pytest.fixture(scope="function")
def other_user(db_session) -> User:
    """Create a second user."""
    user = User(username="otheruser", email="other@example.com")
    db_session.add(user)
    db_session.commit()
    db_session.refresh(user)
    return user


@pytest.fixture(scope="function")
def make_photo(db_session):
    """Factory inserting a photo with tags directly, bypassing the stores."""

    def _make_photo(owner, tags=(), date_saved=None, description="A photo"):
        photo = Photo(
            image_url=PROVIDER_URL,
            description=description,
            alt_description="alt",
            owner_id=owner.id,
            date_saved=date_saved or datetime.utcnow(),
        )
        db_session.add(photo)
        db_session.flush()
        for name in tags:
            db_session.add(Tag(name=name, photo_id=photo.id))
        db_session.commit()
        db_session.refresh(photo)
        return photo

    return _make_photo


@pytest.fixture(scope="function")
def tagged_photos(make_photo, test_user):
    """Two 'sunset' photos for the test user, saved a day apart (oldest first)."""
    now = datetime.utcnow()
    older = make_photo(
        test_user,
        tags=["sunset", "beach"],
        date_saved=now - timedelta(days=1),
        description="Older sunset",
    )
    newer = make_photo(
        test_user, tags=["sunset"], date_saved=now, description="Newer sunset"
    )
    return [older, newer]


@pytest.fixture
def mock_unsplash_payload():
    """Mock Unsplash search API response."""
    return {
        "total": 2,
        "results": [
            {
                "id": "abc",
                "description": "A sketch of the Kia Concept EV4.",
                "alt_description": "white car on road",
                "urls": {
                    "regular": "https://images.unsplash.com/photo-1704340142770-b52988e5b6eb"
                },
            },
            {
                "id": "def",
                "description": None,
                "alt_description": None,
                "urls": {},
            },
        ],
    }
