import pytest
from lookin.models.user import User


class TestAuthentication:
    """Test authentication endpoints."""

    def test_register_user(self, client):
        """Test user registration without email confirmation."""
        response = client.post(
            "/api/auth/register",
            json={
                "email": "Test@Example.com",
                "password": "testpass123",
                "full_name": "Test User"
            }
        )
        assert response.status_code == 201
        data = response.json()
        assert data["confirmation_required"] is False
        assert data["access_token"]
        assert data["user"]["email"] == "test@example.com"
        assert data["user"]["full_name"] == "Test User"
        assert data["user"]["email_confirmed"] is True

    def test_register_duplicate_email(self, client, alice):
        """Test registration with an email that is already taken."""
        response = client.post(
            "/api/auth/register",
            json={"email": "alice@example.com", "password": "testpass123"}
        )
        assert response.status_code == 400
        assert "already registered" in response.json()["detail"].lower()

    def test_register_invalid_email(self, client):
        response = client.post(
            "/api/auth/register",
            json={"email": "not-an-email", "password": "testpass123"}
        )
        assert response.status_code == 422

    def test_register_short_password(self, client):
        response = client.post(
            "/api/auth/register",
            json={"email": "short@example.com", "password": "abc"}
        )
        assert response.status_code == 422

    def test_login_success(self, client, alice):
        """Test successful login."""
        response = client.post(
            "/api/auth/login",
            json={"email": "alice@example.com", "password": "pass123"}
        )
        assert response.status_code == 200
        data = response.json()
        assert data["access_token"]
        assert data["token_type"] == "bearer"
        assert data["user"]["id"] == alice["id"]

    def test_login_wrong_password(self, client, alice):
        """Test login with wrong password."""
        response = client.post(
            "/api/auth/login",
            json={"email": "alice@example.com", "password": "wrongpassword"}
        )
        assert response.status_code == 401

    def test_login_nonexistent_user(self, client):
        """Test login with nonexistent user."""
        response = client.post(
            "/api/auth/login",
            json={"email": "nobody@example.com", "password": "password"}
        )
        assert response.status_code == 401

    def test_login_inactive_user(self, client, alice, db_session):
        user = db_session.query(User).filter(User.id == alice["id"]).first()
        user.is_active = False
        db_session.commit()

        response = client.post(
            "/api/auth/login",
            json={"email": "alice@example.com", "password": "pass123"}
        )
        assert response.status_code == 403

    def test_get_current_user(self, client, alice):
        """Test getting current user info."""
        response = client.get("/api/auth/me", headers=alice["headers"])
        assert response.status_code == 200
        data = response.json()
        assert data["email"] == "alice@example.com"
        assert data["full_name"] == "Alice"

    def test_unauthorized_access(self, client):
        """Test accessing protected endpoint without token."""
        response = client.get("/api/auth/me")
        assert response.status_code in (401, 403)

    def test_invalid_token(self, client):
        response = client.get("/api/auth/me", headers={"Authorization": "Bearer not-a-token"})
        assert response.status_code == 401

    def test_logout(self, client, alice):
        response = client.post("/api/auth/logout", headers=alice["headers"])
        assert response.status_code == 204


class TestEmailConfirmation:
    """Registration flow when the email address has to be confirmed."""

    @pytest.fixture(autouse=True)
    def require_confirmation(self, settings, monkeypatch):
        monkeypatch.setattr(settings, "EMAIL_CONFIRMATION_REQUIRED", True)

    def _register(self, client):
        response = client.post(
            "/api/auth/register",
            json={"email": "dana@example.com", "password": "pass123", "full_name": "Dana"}
        )
        assert response.status_code == 201
        return response.json()

    def _pending_token(self, db_session):
        user = db_session.query(User).filter(User.email == "dana@example.com").first()
        return user.confirmation_token

    def test_register_returns_no_token(self, client):
        data = self._register(client)
        assert data["confirmation_required"] is True
        assert data["access_token"] is None
        assert data["user"]["email_confirmed"] is False

    def test_login_before_confirmation_is_forbidden(self, client):
        self._register(client)
        response = client.post(
            "/api/auth/login",
            json={"email": "dana@example.com", "password": "pass123"}
        )
        assert response.status_code == 403
        assert response.json()["detail"] == "Email not confirmed"

    def test_confirm_then_login(self, client, db_session):
        self._register(client)
        token = self._pending_token(db_session)
        assert token

        response = client.post("/api/auth/confirm", json={"token": token})
        assert response.status_code == 200
        assert response.json()["user"]["email_confirmed"] is True

        response = client.post(
            "/api/auth/login",
            json={"email": "dana@example.com", "password": "pass123"}
        )
        assert response.status_code == 200

    def test_confirm_unknown_token(self, client):
        response = client.post("/api/auth/confirm", json={"token": "bogus"})
        assert response.status_code == 400

    def test_resend_issues_new_token(self, client, db_session):
        self._register(client)
        first = self._pending_token(db_session)

        response = client.post("/api/auth/resend-confirmation", json={"email": "dana@example.com"})
        assert response.status_code == 202

        db_session.expire_all()
        assert self._pending_token(db_session) != first

    def test_resend_for_unknown_email_is_accepted(self, client):
        response = client.post("/api/auth/resend-confirmation", json={"email": "ghost@example.com"})
        assert response.status_code == 202
