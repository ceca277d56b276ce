"""
Unit tests for password hashing, token claims and the permission decorator.
"""

from datetime import timedelta

import jwt
import pytest
from flask import Flask

from hms.core import auth_decorators
from hms.core.exceptions import AuthenticationError, PermissionDeniedError
from hms.core.security import (
    JWT_ALGORITHM,
    create_access_token,
    create_user_token,
    decode_access_token,
    get_jwt_secret_key,
    get_user_from_token,
    hash_password,
    verify_password,
)


class TestPasswords:
    def test_hash_verifies(self):
        hashed = hash_password("correct horse")
        assert hashed != "correct horse"
        assert verify_password("correct horse", hashed)

    def test_wrong_password_fails(self):
        assert not verify_password("wrong", hash_password("right"))

    def test_missing_or_unusable_hash_fails(self):
        assert not verify_password("x", None)
        assert not verify_password("x", "not-a-bcrypt-hash")


class TestTokens:
    def test_user_token_carries_permission_claims(self):
        token = create_user_token(3, "Ada", "ada@example.com", ["rooms.show", "rooms.index"])

        user = get_user_from_token(token)

        assert user == {
            "user_id": 3,
            "name": "Ada",
            "email": "ada@example.com",
            "permissions": ["rooms.index", "rooms.show"],
        }

    def test_expired_token_is_rejected(self):
        token = create_access_token({"sub": "1"}, expires_delta=timedelta(seconds=-1))
        assert decode_access_token(token) is None

    def test_foreign_audience_is_rejected(self):
        token = jwt.encode(
            {"sub": "1", "aud": "someone-else", "iss": "hms-api"},
            get_jwt_secret_key(),
            algorithm=JWT_ALGORITHM,
        )
        assert get_user_from_token(token) is None

    def test_garbage_token_is_rejected(self):
        assert get_user_from_token("not.a.token") is None


class TestRequirePermission:
    @pytest.fixture
    def flask_app(self):
        return Flask(__name__)

    def test_registers_route_name(self):
        @auth_decorators.require_permission("widgets.index")
        def view():
            return "ok"

        assert "widgets.index" in auth_decorators.PERMISSION_REGISTRY
        assert view.permission_name == "widgets.index"

    def test_login_disabled_bypasses_checks(self, flask_app):
        flask_app.config["LOGIN_DISABLED"] = True

        @auth_decorators.require_permission("widgets.show")
        def view():
            return "ok"

        with flask_app.test_request_context("/"):
            assert view() == "ok"

    def test_missing_permission_is_denied(self, flask_app, monkeypatch):
        user = auth_decorators.AuthenticatedUser(1, "Ada", "a@b.c", ["widgets.index"])
        monkeypatch.setattr(auth_decorators, "current_user", user)

        @auth_decorators.require_permission("widgets.destroy")
        def view():
            return "ok"

        with flask_app.test_request_context("/"):
            with pytest.raises(PermissionDeniedError):
                view()

    def test_anonymous_is_unauthenticated(self, flask_app, monkeypatch):
        monkeypatch.setattr(auth_decorators, "current_user", None)

        @auth_decorators.require_permission("widgets.index")
        def view():
            return "ok"

        with flask_app.test_request_context("/"):
            with pytest.raises(AuthenticationError):
                view()
