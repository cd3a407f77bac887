import pytest
from sqlmodel import select

from conftest import auth_header
from tailorbook.core.errors import Conflict, Forbidden
from tailorbook.core.security import verify_password
from tailorbook.models.client import Client
from tailorbook.models.user import User, UserRole
from tailorbook.services import provisioning
from tailorbook.services.provisioning import provision_client


class TestProvisionClient:
    def test_new_email_without_password_gets_temporary_password(self, db, settings, tailor):
        summary, temporary_password = provision_client(
            db, tailor, settings, email="new@example.com", name="New Person", store_name="Shop"
        )

        assert len(temporary_password) == 12
        assert summary.tailor_id == tailor.user_id
        assert summary.store_name == "Shop"
        assert summary.client_user.email == "new@example.com"

        user = db.exec(select(User).where(User.email == "new@example.com")).one()
        assert user.role == UserRole.CLIENT
        assert verify_password(temporary_password, user.password)

    def test_new_email_with_password_returns_no_temporary_password(self, db, settings, tailor):
        _, temporary_password = provision_client(
            db, tailor, settings, email="new@example.com", name="New Person", password="chosen-password"
        )
        assert temporary_password is None

        user = db.exec(select(User).where(User.email == "new@example.com")).one()
        assert verify_password("chosen-password", user.password)

    def test_only_tailors_provision(self, db, settings, client_user, anonymous):
        for identity in (client_user, anonymous):
            with pytest.raises(Forbidden):
                provision_client(db, identity, settings, email="x@example.com", name="X Person")

    def test_email_of_a_tailor_is_a_conflict(self, db, settings, tailor, other_tailor):
        with pytest.raises(Conflict, match="non-client"):
            provision_client(db, tailor, settings, email="rival@example.com", name="Rival")

    def test_client_of_another_tailor_is_a_conflict(self, db, settings, tailor, other_tailor, client_user, make_client):
        make_client(other_tailor.user_id, client_user.user_id)
        with pytest.raises(Conflict, match="different tailor"):
            provision_client(db, tailor, settings, email="customer@example.com", name="Customer")

    def test_unassigned_client_profile_is_claimed(self, db, settings, tailor, client_user, make_client):
        profile = make_client(None, client_user.user_id)

        summary, temporary_password = provision_client(
            db, tailor, settings, email="customer@example.com", name="Customer", notes="Prefers wool"
        )

        assert temporary_password is None
        assert summary.id == profile.id
        assert summary.tailor_id == tailor.user_id
        assert summary.notes == "Prefers wool"

    def test_claiming_can_be_disabled(self, db, settings, tailor, client_user, make_client):
        make_client(None, client_user.user_id)
        strict = settings.model_copy(update={"ALLOW_CLAIM_UNASSIGNED_CLIENTS": False})
        with pytest.raises(Conflict):
            provision_client(db, tailor, strict, email="customer@example.com", name="Customer")

    def test_existing_client_account_without_profile_gets_one(self, db, settings, tailor, client_user):
        summary, _ = provision_client(db, tailor, settings, email="customer@example.com", name="Customer")

        profile = db.exec(select(Client).where(Client.client_user_id == client_user.user_id)).one()
        assert profile.id == summary.id
        assert profile.tailor_id == tailor.user_id

    def test_reprovisioning_own_client_overwrites_details(self, db, settings, tailor, client_user, make_client):
        make_client(tailor.user_id, client_user.user_id, store_name="Old", notes="Old notes")

        summary, _ = provision_client(
            db, tailor, settings, email="customer@example.com", name="Customer", store_name="New"
        )

        assert summary.store_name == "New"
        assert summary.notes is None


class TestConcurrentProvisioning:
    def test_account_created_by_a_concurrent_request_is_a_conflict(self, db, settings, tailor, monkeypatch):
        real_hash = provisioning.get_password_hash

        def hash_after_rival_signup(password):
            db.add(User(email="new@example.com", role=UserRole.CLIENT, password=real_hash("rival-password")))
            db.commit()
            return real_hash(password)

        monkeypatch.setattr(provisioning, "get_password_hash", hash_after_rival_signup)
        with pytest.raises(Conflict):
            provision_client(db, tailor, settings, email="new@example.com", name="New Person")

        assert db.exec(select(Client)).all() == []

    def test_profile_created_by_a_concurrent_request_is_a_conflict(
        self, db, settings, tailor, other_tailor, client_user, monkeypatch
    ):
        real_utcnow = provisioning.utcnow

        def utcnow_after_rival_profile():
            db.add(Client(tailor_id=other_tailor.user_id, client_user_id=client_user.user_id))
            db.commit()
            return real_utcnow()

        monkeypatch.setattr(provisioning, "utcnow", utcnow_after_rival_profile)
        with pytest.raises(Conflict):
            provision_client(db, tailor, settings, email="customer@example.com", name="Customer")

        profile = db.exec(select(Client).where(Client.client_user_id == client_user.user_id)).one()
        assert profile.tailor_id == other_tailor.user_id


class TestProvisioningScenario:
    def test_temporary_password_login_and_rival_conflict(self, client, register, tailor_token, add_client):
        body = add_client(tailor_token, "e@x.com")
        temporary_password = body["temporaryPassword"]
        assert len(temporary_password) == 12
        assert body["client"]["clientUser"]["email"] == "e@x.com"

        login = client.post("/auth/login", json={"email": "e@x.com", "password": temporary_password})
        assert login.status_code == 200
        assert login.json()["user"]["role"] == "client"

        rival_token = register("rival@example.com")["token"]
        response = client.post(
            "/clients",
            json={"name": "Client Person", "email": "e@x.com"},
            headers=auth_header(rival_token),
        )
        assert response.status_code == 409
        assert response.json()["error"] == "conflict"

    def test_password_supplied_means_no_temporary_password(self, tailor_token, add_client):
        body = add_client(tailor_token, "chosen@example.com", password="chosen-password")
        assert body["temporaryPassword"] is None

    def test_client_role_cannot_add_clients(self, client, register):
        token = register("customer@example.com", role="client")["token"]
        response = client.post(
            "/clients",
            json={"name": "Someone Else", "email": "someone@example.com"},
            headers=auth_header(token),
        )
        assert response.status_code == 403

    def test_self_registered_client_is_claimed_by_first_tailor(self, client, register, tailor_token, add_client):
        customer = register("customer@example.com", role="client")
        body = add_client(tailor_token, "customer@example.com", storeName="Downtown")

        assert body["temporaryPassword"] is None
        assert body["client"]["clientUser"]["id"] == customer["user"]["id"]
        assert body["client"]["storeName"] == "Downtown"
