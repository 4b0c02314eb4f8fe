"""
Tests for registration, email confirmation, login, logout and the session
store.
"""
import pytest

import config
from services import identity_service
from services.exceptions import AuthError
from services.identity_service import IdentityService, SIGNED_IN, SIGNED_OUT
from services.session_store import SessionSnapshot, SessionStore
from utils.email import EmailDeliveryError

REGISTRATION = {
    "email": "Priya@Example.com",
    "password": "sunshine42",
    "name": "Priya Raman",
    "phone": "9876543210",
    "is_solar_provider": False,
}


@pytest.mark.integration
class TestRegister:
    def test_register_returns_profile_without_token(self, client):
        response = client.post("/api/auth/register", json=REGISTRATION)
        assert response.status_code == 201
        body = response.json()
        assert "token" not in body
        assert body["user"]["email"] == "priya@example.com"
        assert body["user"]["is_solar_provider"] is False
        assert body["email_confirmation_required"] is False

    def test_register_does_not_sign_in(self, client):
        client.post("/api/auth/register", json=REGISTRATION)
        response = client.get("/api/auth/session")
        assert response.json() == {"user": None, "loading": False}

    def test_duplicate_email_conflicts(self, client):
        client.post("/api/auth/register", json=REGISTRATION)
        response = client.post("/api/auth/register", json={**REGISTRATION, "email": "priya@example.com"})
        assert response.status_code == 409

    @pytest.mark.parametrize("field, value", [
        ("password", "12345"),
        ("name", "P"),
        ("phone", "12345"),
        ("email", "not-an-email"),
    ])
    def test_invalid_fields_rejected(self, client, field, value):
        response = client.post("/api/auth/register", json={**REGISTRATION, field: value})
        assert response.status_code == 422


@pytest.mark.integration
class TestLoginLogout:
    def test_login_returns_token_and_session(self, client, make_user):
        headers = make_user("sam@example.com", "Sam")
        response = client.get("/api/auth/session", headers=headers)
        assert response.status_code == 200
        assert response.json()["user"]["email"] == "sam@example.com"
        assert response.json()["loading"] is False

    def test_wrong_password(self, client, make_user):
        make_user("sam@example.com")
        response = client.post("/api/auth/login", json={"email": "sam@example.com", "password": "wrong-one"})
        assert response.status_code == 401

    def test_unknown_email(self, client):
        response = client.post("/api/auth/login", json={"email": "nobody@example.com", "password": "whatever"})
        assert response.status_code == 401

    def test_logout_revokes_token(self, client, make_user):
        headers = make_user("sam@example.com")
        response = client.post("/api/auth/logout", headers=headers)
        assert response.status_code == 204

        assert client.get("/api/auth/session", headers=headers).json()["user"] is None
        assert client.get("/api/communities/mine", headers=headers).status_code == 401

    def test_logout_without_session(self, client):
        response = client.post("/api/auth/logout")
        assert response.status_code == 401

    def test_protected_route_requires_token(self, client):
        response = client.get("/api/dashboard")
        assert response.status_code == 401

    def test_garbage_token_is_signed_out(self, client):
        response = client.get("/api/auth/session", headers={"Authorization": "Bearer not.a.token"})
        assert response.json()["user"] is None


@pytest.mark.integration
class TestEmailConfirmation:
    @pytest.fixture
    def sent_codes(self, monkeypatch):
        codes = {}
        monkeypatch.setattr(config, "EMAIL_CONFIRMATION_REQUIRED", True)
        monkeypatch.setattr(
            identity_service, "send_confirmation_email",
            lambda to_email, otp: codes.__setitem__(to_email, otp),
        )
        return codes

    def test_login_blocked_until_confirmed(self, client, sent_codes):
        response = client.post("/api/auth/register", json=REGISTRATION)
        assert response.status_code == 201
        assert response.json()["email_confirmation_required"] is True

        credentials = {"email": "priya@example.com", "password": "sunshine42"}
        assert client.post("/api/auth/login", json=credentials).status_code == 403

        code = sent_codes["priya@example.com"]
        response = client.post("/api/auth/confirm", json={"email": "priya@example.com", "code": code})
        assert response.status_code == 200

        assert client.post("/api/auth/login", json=credentials).status_code == 200

    def test_wrong_code_rejected(self, client, sent_codes):
        client.post("/api/auth/register", json=REGISTRATION)
        wrong = "000000" if sent_codes["priya@example.com"] != "000000" else "111111"
        response = client.post("/api/auth/confirm", json={"email": "priya@example.com", "code": wrong})
        assert response.status_code == 422

    def test_email_failure_rolls_back_registration(self, client, monkeypatch):
        def failing_sender(to_email, otp):
            raise EmailDeliveryError("Brevo returned 401")

        monkeypatch.setattr(config, "EMAIL_CONFIRMATION_REQUIRED", True)
        monkeypatch.setattr(identity_service, "send_confirmation_email", failing_sender)

        response = client.post("/api/auth/register", json=REGISTRATION)
        assert response.status_code == 500
        assert "send confirmation email" in response.json()["detail"]

        monkeypatch.setattr(identity_service, "send_confirmation_email", lambda to_email, otp: None)
        assert client.post("/api/auth/register", json=REGISTRATION).status_code == 201


@pytest.mark.unit
class TestSessionStore:
    def test_initial_snapshot_is_loading(self, db):
        store = SessionStore(IdentityService(db))
        assert store.snapshot == SessionSnapshot(current_user=None, loading=True)

    def test_load_without_token(self, db):
        store = SessionStore(IdentityService(db))
        snapshot = store.load(None)
        assert snapshot.current_user is None
        assert snapshot.loading is False

    def test_login_and_logout_publish_snapshots(self, db):
        store = SessionStore(IdentityService(db))
        seen = []
        store.subscribe(seen.append)

        store.register("lee@example.com", "sunshine42", "Lee", "9876543210")
        assert seen == []

        session = store.login("lee@example.com", "sunshine42")
        assert store.current_user.email == "lee@example.com"
        assert seen[-1].current_user == session.user

        store.logout()
        assert store.current_user is None
        assert seen[-1] == SessionSnapshot(current_user=None, loading=False)

    def test_snapshots_are_immutable(self, db):
        store = SessionStore(IdentityService(db))
        with pytest.raises(Exception):
            store.snapshot.loading = False

    def test_close_stops_notifications(self, db):
        identity = IdentityService(db)
        store = SessionStore(identity)
        seen = []
        store.subscribe(seen.append)
        store.register("lee@example.com", "sunshine42", "Lee", "9876543210")
        store.close()

        identity.sign_in("lee@example.com", "sunshine42")
        assert seen == []
        assert store.current_user is None

    def test_unsubscribe(self, db):
        store = SessionStore(IdentityService(db))
        seen = []
        unsubscribe = store.subscribe(seen.append)
        unsubscribe()
        store.load(None)
        assert seen == []

    def test_logout_when_signed_out(self, db):
        store = SessionStore(IdentityService(db))
        store.load(None)
        with pytest.raises(AuthError):
            store.logout()


@pytest.mark.unit
class TestIdentityEvents:
    def test_sign_in_and_out_events(self, db):
        identity = IdentityService(db)
        events = []
        identity.on_auth_state_change(lambda event, session: events.append((event, session)))
        identity.sign_up("kim@example.com", "sunshine42", "Kim", "9876543210")

        session = identity.sign_in("kim@example.com", "sunshine42")
        identity.sign_out(session.access_token)

        assert [event for event, _ in events] == [SIGNED_IN, SIGNED_OUT]
        assert events[0][1] == session
        assert events[1][1] is None
        assert identity.get_session(session.access_token) is None
