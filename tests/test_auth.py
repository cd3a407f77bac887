import pytest
from sqlmodel import select

from conftest import PASSWORD, auth_header
from tailorbook.core.errors import Conflict
from tailorbook.models.client import Client
from tailorbook.models.user import User, UserRole
from tailorbook.services import accounts


class TestRegisterAndLogin:
    def test_register_then_login(self, client, register):
        registered = register("new@example.com", role="tailor", name="Ada Tailor")
        assert registered["user"]["role"] == "tailor"
        assert registered["user"]["isAnonymous"] is False

        response = client.post("/auth/login", json={"email": "new@example.com", "password": PASSWORD})
        assert response.status_code == 200
        assert response.json()["user"]["id"] == registered["user"]["id"]
        assert response.json()["token"]

    def test_duplicate_email(self, client, register):
        register("dup@example.com")
        response = client.post(
            "/auth/register",
            json={"name": "Again", "email": "dup@example.com", "password": PASSWORD, "role": "client"},
        )
        assert response.status_code == 409

    def test_wrong_password(self, client, register):
        register("who@example.com")
        response = client.post("/auth/login", json={"email": "who@example.com", "password": "nope"})
        assert response.status_code == 401
        assert response.json()["detail"] == "Invalid credentials"

    def test_unknown_email_looks_like_wrong_password(self, client):
        response = client.post("/auth/login", json={"email": "ghost@example.com", "password": "nope"})
        assert response.status_code == 401
        assert response.json()["detail"] == "Invalid credentials"

    def test_invalid_register_payload(self, client):
        response = client.post(
            "/auth/register",
            json={"name": "A", "email": "not-an-email", "password": "short", "role": "admin"},
        )
        assert response.status_code == 422
        assert response.json()["error"] == "validation_failed"

    def test_registered_client_has_unassigned_profile(self, client, register):
        token = register("self@example.com", role="client")["token"]
        profile = client.get("/clients", headers=auth_header(token)).json()
        assert profile["tailorId"] is None
        assert profile["clientUser"]["email"] == "self@example.com"


class TestBearerToken:
    def test_missing_token(self, client):
        response = client.get("/clients")
        assert response.status_code == 401
        assert response.headers["WWW-Authenticate"] == "Bearer"

    def test_garbage_token(self, client):
        assert client.get("/clients", headers=auth_header("not-a-jwt")).status_code == 401

    def test_anonymous_identity(self, client):
        response = client.post("/auth/anonymous")
        assert response.status_code == 201
        user = response.json()["user"]
        assert user["isAnonymous"] is True
        assert user["role"] is None
        assert user["email"] is None


class TestUpdateProfile:
    def test_names_and_email(self, client, register):
        token = register("first@example.com")["token"]
        response = client.patch(
            "/auth/update-profile",
            json={"firstName": "Grace", "lastName": "Hopper", "email": "grace@example.com"},
            headers=auth_header(token),
        )
        assert response.status_code == 200
        user = response.json()["user"]
        assert user["name"] == "Grace Hopper"
        assert user["email"] == "grace@example.com"

    def test_email_taken_by_someone_else(self, client, register):
        register("taken@example.com")
        token = register("mine@example.com")["token"]
        response = client.patch("/auth/update-profile", json={"email": "taken@example.com"}, headers=auth_header(token))
        assert response.status_code == 409

    def test_anonymous_profile_stays_anonymous(self, client):
        token = client.post("/auth/anonymous").json()["token"]
        response = client.patch("/auth/update-profile", json={"firstName": "Sam"}, headers=auth_header(token))
        user = response.json()["user"]
        assert user["firstName"] == "Sam"
        assert user["isAnonymous"] is True

    def test_anonymous_cannot_take_an_email(self, client, register):
        token = client.post("/auth/anonymous").json()["token"]
        response = client.patch("/auth/update-profile", json={"email": "squat@example.com"}, headers=auth_header(token))
        assert response.status_code == 403

        assert register("squat@example.com")["user"]["email"] == "squat@example.com"

    @pytest.mark.parametrize("email", ["not-an-email", ""])
    def test_malformed_email_is_rejected(self, client, register, email):
        token = register("kept@example.com")["token"]
        response = client.patch("/auth/update-profile", json={"email": email}, headers=auth_header(token))
        assert response.status_code == 422

    def test_registered_account_keeps_its_email(self, client, register):
        token = register("kept@example.com")["token"]
        response = client.patch("/auth/update-profile", json={"email": None}, headers=auth_header(token))
        assert response.status_code == 422

        login = client.post("/auth/login", json={"email": "kept@example.com", "password": PASSWORD})
        assert login.status_code == 200


class TestConcurrentRegistration:
    def test_email_taken_after_the_check_is_a_conflict(self, db, settings, monkeypatch):
        real_hash = accounts.get_password_hash

        def hash_after_rival_signup(password):
            db.add(User(email="race@example.com", role=UserRole.TAILOR, password=real_hash(password)))
            db.commit()
            return real_hash(password)

        monkeypatch.setattr(accounts, "get_password_hash", hash_after_rival_signup)
        with pytest.raises(Conflict):
            accounts.register(
                db, settings, name="Second", email="race@example.com", password=PASSWORD, role=UserRole.CLIENT
            )

        assert db.exec(select(Client)).all() == []


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"
