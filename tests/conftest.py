"""
Shared fixtures.

Every test gets a fresh application built on an in-memory SQLite database.
API tests drive it through FastAPI's TestClient; service tests open a
SQLModel Session on the same engine.
"""
from typing import Callable, Dict, Optional

import pytest
from fastapi.testclient import TestClient
from sqlmodel import Session

from tailorbook.core.config import Settings
from tailorbook.core.security import get_password_hash
from tailorbook.main import create_app
from tailorbook.models.client import Client
from tailorbook.models.user import User, UserRole
from tailorbook.services.identity import (
    AnonymousIdentity,
    ClientIdentity,
    TailorIdentity,
)

PASSWORD = "correct-horse-battery"


@pytest.fixture()
def settings() -> Settings:
    return Settings(
        _env_file=None,
        DATABASE_URL="sqlite://",
        SECRET_KEY="test-secret-key",
        LOG_LEVEL="WARNING",
    )


@pytest.fixture()
def app(settings):
    return create_app(settings)


@pytest.fixture()
def client(app):
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture()
def db(app):
    with Session(app.state.engine) as session:
        yield session


# ---------------------------------------------------------------------------
# Direct database helpers for service tests
# ---------------------------------------------------------------------------


@pytest.fixture()
def make_user(db) -> Callable[..., User]:
    def _make_user(role: Optional[UserRole], email: Optional[str] = None, password: Optional[str] = None) -> User:
        user = User(
            email=email,
            name=email.split("@")[0] if email else None,
            password=get_password_hash(password) if password else None,
            role=role,
            is_anonymous=role is None,
        )
        db.add(user)
        db.commit()
        db.refresh(user)
        return user

    return _make_user


@pytest.fixture()
def make_client(db) -> Callable[..., Client]:
    def _make_client(tailor_id: Optional[str], client_user_id: Optional[str] = None, **fields) -> Client:
        client_row = Client(tailor_id=tailor_id, client_user_id=client_user_id, **fields)
        db.add(client_row)
        db.commit()
        db.refresh(client_row)
        return client_row

    return _make_client


@pytest.fixture()
def tailor(make_user) -> TailorIdentity:
    return TailorIdentity(user_id=make_user(UserRole.TAILOR, "tailor@example.com").id)


@pytest.fixture()
def other_tailor(make_user) -> TailorIdentity:
    return TailorIdentity(user_id=make_user(UserRole.TAILOR, "rival@example.com").id)


@pytest.fixture()
def client_user(make_user) -> ClientIdentity:
    return ClientIdentity(user_id=make_user(UserRole.CLIENT, "customer@example.com").id)


@pytest.fixture()
def anonymous(make_user) -> AnonymousIdentity:
    return AnonymousIdentity(user_id=make_user(None).id)


# ---------------------------------------------------------------------------
# API helpers
# ---------------------------------------------------------------------------


def auth_header(token: str) -> Dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture()
def register(client) -> Callable[..., Dict]:
    """Register through the API and return the response body (token + user)."""
    def _register(email: str, role: str = "tailor", password: str = PASSWORD, name: str = "Test User") -> Dict:
        response = client.post(
            "/auth/register",
            json={"name": name, "email": email, "password": password, "role": role},
        )
        assert response.status_code == 201, response.text
        return response.json()

    return _register


@pytest.fixture()
def tailor_token(register) -> str:
    return register("atelier@example.com")["token"]


@pytest.fixture()
def add_client(client) -> Callable[..., Dict]:
    """Provision a client through the API and return the response body."""
    def _add_client(token: str, email: str, **extra) -> Dict:
        response = client.post(
            "/clients",
            json={"name": "Client Person", "email": email, **extra},
            headers=auth_header(token),
        )
        assert response.status_code == 201, response.text
        return response.json()

    return _add_client
