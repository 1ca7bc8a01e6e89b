"""
Tests for practice_interview/auth/service.py
"""

from datetime import timedelta
from unittest.mock import MagicMock

import pytest
from firebase_admin import auth as firebase_auth
from google.api_core import exceptions as google_exceptions

from practice_interview.auth import AuthService, SignUpParams


@pytest.fixture
def auth_client() -> MagicMock:
    client = MagicMock()
    client.create_session_cookie.return_value = "cookie-abc"
    client.verify_session_cookie.return_value = {"uid": "user-1"}
    return client


@pytest.fixture
def auth_service(repository, auth_client) -> AuthService:
    return AuthService(repository, auth_client=auth_client)


class TestSignUp:
    def test_new_user_gets_profile_defaults(self, auth_service, repository):
        result = auth_service.sign_up(SignUpParams(uid="user-1", name="Ada", email="ada@example.com"))

        assert result.success is True
        stored = repository.users["user-1"]
        assert stored["email"] == "ada@example.com"
        assert stored["role"] == "user"
        assert stored["isOnboarded"] is False
        assert stored["createdAt"] == stored["updatedAt"]

    def test_existing_user_keeps_created_at(self, auth_service, repository):
        repository.users["user-1"] = {"createdAt": "2024-01-01T00:00:00+00:00", "role": "admin"}

        result = auth_service.sign_up(SignUpParams(uid="user-1", name="Ada L", email="ada@example.com"))

        assert result.success is True
        stored = repository.users["user-1"]
        assert stored["createdAt"] == "2024-01-01T00:00:00+00:00"
        assert stored["role"] == "admin"
        assert stored["name"] == "Ada L"

    def test_permission_denied(self, auth_client):
        repository = MagicMock()
        repository.get_user.return_value = None
        repository.save_user.side_effect = google_exceptions.PermissionDenied("rules")

        result = AuthService(repository, auth_client=auth_client).sign_up(
            SignUpParams(uid="user-1", name="Ada", email="ada@example.com"))

        assert result.success is False
        assert result.message == "Permission denied. Please check Firestore rules."


class TestSignIn:
    def test_returns_verified_session_cookie(self, auth_service, auth_client):
        result = auth_service.sign_in("id-token")

        assert result.success is True
        assert result.message == "Successfully signed in!"
        assert result.session_cookie == "cookie-abc"
        auth_client.create_session_cookie.assert_called_once_with(
            "id-token", expires_in=timedelta(days=7))
        auth_client.verify_session_cookie.assert_called_once_with("cookie-abc")

    def test_invalid_token(self, auth_service, auth_client):
        auth_client.create_session_cookie.side_effect = firebase_auth.InvalidIdTokenError("bad")

        result = auth_service.sign_in("id-token")

        assert result.success is False
        assert result.message == "Invalid authentication token. Please sign in again."
        assert result.session_cookie is None

    def test_empty_cookie_is_a_failure(self, auth_service, auth_client):
        auth_client.create_session_cookie.return_value = ""

        result = auth_service.sign_in("id-token")

        assert result.success is False
        assert result.message == "Failed to create session cookie"


class TestCurrentUser:
    def test_valid_cookie_loads_profile(self, auth_service, repository, auth_client):
        repository.users["user-1"] = {"name": "Ada"}

        user = auth_service.get_current_user("cookie-abc")

        assert user == {"name": "Ada", "id": "user-1"}
        auth_client.verify_session_cookie.assert_called_once_with("cookie-abc", check_revoked=True)
        assert auth_service.is_authenticated("cookie-abc") is True

    def test_missing_cookie(self, auth_service, auth_client):
        assert auth_service.get_current_user(None) is None
        auth_client.verify_session_cookie.assert_not_called()

    def test_rejected_cookie(self, auth_service, auth_client):
        auth_client.verify_session_cookie.side_effect = firebase_auth.InvalidSessionCookieError("expired")

        assert auth_service.get_current_user("cookie-abc") is None
        assert auth_service.is_authenticated("cookie-abc") is False
