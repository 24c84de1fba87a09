"""Tests for the assembled application and its lifespan."""

import pytest
from fastapi.testclient import TestClient

from app.core.config import settings
from app.main import create_app
from app.models.user import User


@pytest.mark.integration
class TestApplication:
    @pytest.fixture
    def live_client(self, tmp_path, monkeypatch):
        monkeypatch.setattr(
            settings, "SQLALCHEMY_DATABASE_URI", f"sqlite:///{tmp_path / 'app.db'}"
        )
        app = create_app()
        with TestClient(app) as client:
            yield client

    def test_root_and_health(self, live_client):
        assert live_client.get("/health").json() == {"status": "healthy"}
        assert live_client.get("/").json()["name"] == "Photo Vault"

    def test_lifespan_opens_database(self, live_client):
        database = live_client.app.state.database
        session = database.session()
        try:
            session.add(User(username="alice", email="alice@example.com"))
            session.commit()
            user_id = session.query(User).one().id
        finally:
            session.close()

        response = live_client.post(
            "/api/photos/",
            json={
                "image_url": "https://images.unsplash.com/photo-1",
                "tags": ["sunset"],
                "user_id": user_id,
            },
        )
        assert response.status_code == 201
        assert "X-Correlation-ID" in response.headers

        response = live_client.get(
            "/api/photos/tag/search", params={"tags": "sunset", "user_id": user_id}
        )
        assert response.status_code == 200
        assert len(response.json()["photos"]) == 1

    def test_domain_errors_mapped(self, live_client):
        response = live_client.get("/api/search-history", params={"user_id": "x"})
        assert response.status_code == 400
        assert response.json() == {"detail": "Valid userId is required."}
