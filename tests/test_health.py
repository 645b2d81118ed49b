import pytest
from fastapi.testclient import TestClient

from app.main import create_app
from app.platform.config import Settings, settings


@pytest.fixture(autouse=True)
def database_file(tmp_path, monkeypatch):
    """The lifespan builds its own engine, so point it at a file database."""
    monkeypatch.setattr(settings, "DATABASE_URL", f"sqlite+aiosqlite:///{tmp_path / 'app.db'}")


def test_health_and_startup():
    """Runs the real lifespan: engine, tables and mailer are set up on app.state."""
    app = create_app()

    with TestClient(app) as client:
        response = client.get("/health")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "success"
        assert data["data"]["status"] == "ok"
        assert data["data"]["service"] == "Rental Site API"

        response = client.get("/")
        assert response.json()["api_base"] == "/api/v1"

        # Tables exist because AUTO_CREATE_TABLES is on for tests
        response = client.get("/api/v1/properties")
        assert response.status_code == 200
        assert response.json()["data"]["pagination"]["total"] == 0


def test_unknown_route_uses_envelope():
    with TestClient(create_app()) as client:
        response = client.get("/api/v1/nope")

    assert response.status_code == 404
    assert response.json()["status"] == "error"


def test_unhandled_errors_become_500():
    app = create_app()

    @app.get("/boom")
    async def boom():
        raise RuntimeError("kaboom")

    with TestClient(app, raise_server_exceptions=False) as client:
        response = client.get("/boom")

    assert response.status_code == 500
    assert response.json()["message"] == "Internal server error"
    assert "kaboom" not in response.text


def test_debug_is_off_by_default(monkeypatch):
    monkeypatch.delenv("DEBUG", raising=False)

    assert Settings(_env_file=None).DEBUG is False
    assert create_app().debug is False
