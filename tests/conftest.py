"""
Test configuration and fixtures for the Rental Site API.

Every test gets its own SQLite database and an app whose mailer records
messages instead of sending them.
"""

import os

# Settings are read at import time, so the environment is set first
os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"
os.environ["DEBUG"] = "false"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["AUTO_CREATE_TABLES"] = "true"
os.environ["ALLOW_OPEN_REGISTRATION"] = "false"
os.environ["JWT_ACCESS_SECRET"] = "test-access-secret-0123456789abcdef0123456789"
os.environ["JWT_REFRESH_SECRET"] = "test-refresh-secret-0123456789abcdef012345678"

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy import select

from app.features.admin.models.admin import Admin
from app.main import create_app
from app.platform.db.session import build_engine, build_sessionmaker, create_tables
from app.platform.exceptions import EmailDeliveryError
from app.platform.services.email import Mailer

STRONG_PASSWORD = "Str0ng!Pass"


class RecordingMailer(Mailer):
    """Renders templates for real but keeps messages in memory."""

    def __init__(self):
        super().__init__()
        self.sent = []
        self.fail = False

    def send_email(self, to_email, subject, body, reply_to=None):
        if self.fail:
            raise EmailDeliveryError("SMTP delivery failed: connection refused")
        self.sent.append({"to": to_email, "subject": subject, "body": body, "reply_to": reply_to})


@pytest_asyncio.fixture
async def app(tmp_path):
    application = create_app()

    engine = build_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    await create_tables(engine)
    application.state.engine = engine
    application.state.sessionmaker = build_sessionmaker(engine)
    application.state.mailer = RecordingMailer()

    yield application

    await engine.dispose()


@pytest_asyncio.fixture
async def client(app):
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://testserver") as ac:
        yield ac


@pytest.fixture
def mailer(app) -> RecordingMailer:
    return app.state.mailer


@pytest.fixture
def fetch_admin(app):
    """Load an admin row in a fresh session so no stale state is returned."""

    async def _fetch(email: str) -> Admin:
        async with app.state.sessionmaker() as session:
            result = await session.execute(select(Admin).where(Admin.email == email))
            return result.scalar_one()

    return _fetch


@pytest.fixture
def update_admin(app):
    async def _update(email: str, **values) -> None:
        async with app.state.sessionmaker() as session:
            result = await session.execute(select(Admin).where(Admin.email == email))
            admin = result.scalar_one()
            for key, value in values.items():
                setattr(admin, key, value)
            await session.commit()

    return _update


@pytest.fixture
def register(client):
    async def _register(
        email="admin@example.com",
        password=STRONG_PASSWORD,
        name="Site Admin",
        role="admin",
        token=None,
        confirm_password=None,
    ):
        headers = {"Authorization": f"Bearer {token}"} if token else {}
        return await client.post(
            "/api/v1/auth/register",
            json={
                "email": email,
                "password": password,
                "confirm_password": confirm_password if confirm_password is not None else password,
                "name": name,
                "role": role,
            },
            headers=headers,
        )

    return _register


@pytest.fixture
def login(client):
    async def _login(email="admin@example.com", password=STRONG_PASSWORD):
        return await client.post("/api/v1/auth/login", json={"email": email, "password": password})

    return _login


@pytest_asyncio.fixture
async def superadmin(register, login):
    """First account (bootstrap registration) as a logged-in superadmin."""
    response = await register(email="owner@example.com", name="Owner", role="superadmin")
    assert response.status_code == 201

    response = await login("owner@example.com")
    assert response.status_code == 200
    return response.json()["data"]


@pytest.fixture
def auth_headers():
    def _headers(token: str) -> dict:
        return {"Authorization": f"Bearer {token}"}

    return _headers


@pytest_asyncio.fixture
async def admin_headers(superadmin, auth_headers):
    return auth_headers(superadmin["access_token"])
