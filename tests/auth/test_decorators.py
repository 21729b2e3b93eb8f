"""Tests for access guards.

Covers the plain guard functions and the @auth_required, @admin_required,
@localhost_only and @first_time_only decorators.
"""

import jwt as pyjwt
import pytest
from flask import g, jsonify

from authgate.auth.decorators import (
    admin_required,
    auth_required,
    authenticate_token,
    authorize_admin,
)
from authgate.auth.schemas import Role, TokenPayload
from authgate.exceptions import Forbidden, Unauthorized
from authgate.utils import isodatetime


# ============================================================================
# Guard Function Tests
# ============================================================================


class TestAuthenticateToken:
    """Tests for authenticate_token."""

    def test_valid_token_returns_claims(self, service):
        token = service.tokens.issue("alice")
        claims = authenticate_token(service.tokens, token)
        assert claims.username == "alice"
        assert claims.role is Role.USER

    @pytest.mark.parametrize("token", [None, ""])
    def test_missing_token_unauthorized(self, service, token):
        with pytest.raises(Unauthorized) as exc_info:
            authenticate_token(service.tokens, token)
        assert exc_info.value.details["code"] == "missing_auth"

    def test_malformed_token_unauthorized(self, service):
        with pytest.raises(Unauthorized) as exc_info:
            authenticate_token(service.tokens, "not-a-jwt")
        assert exc_info.value.details["code"] == "invalid_token"

    def test_forged_token_unauthorized(self, service):
        forged = pyjwt.encode(
            {"username": "alice", "role": "admin", "iat": isodatetime.now_unix()},
            "some-other-secret-that-is-32-bytes-long",
            algorithm="HS256",
        )
        with pytest.raises(Unauthorized):
            authenticate_token(service.tokens, forged)

    def test_expired_token_unauthorized(self, service, settings):
        past_ts = isodatetime.now_unix() - 60
        expired = pyjwt.encode(
            {"username": "alice", "iat": past_ts - 60, "exp": past_ts},
            settings.jwt_secret_key,
            algorithm="HS256",
        )
        with pytest.raises(Unauthorized) as exc_info:
            authenticate_token(service.tokens, expired)
        assert exc_info.value.details["code"] == "token_expired"


class TestAuthorizeAdmin:
    """Tests for authorize_admin."""

    def test_admin_claims_allowed(self):
        claims = TokenPayload(username="root", role=Role.ADMIN, iat=0)
        assert authorize_admin(claims) is claims

    def test_user_claims_forbidden(self):
        claims = TokenPayload(username="bob", role=Role.USER, iat=0)
        with pytest.raises(Forbidden):
            authorize_admin(claims)


# ============================================================================
# Decorator Tests
# ============================================================================


@pytest.fixture
def guarded_app(app):
    """App with extra routes that record whether the view ran."""
    calls = []

    @app.route("/test/authenticated")
    @auth_required
    def authenticated_view():
        calls.append("authenticated")
        return jsonify({"username": g.username, "role": g.role.value})

    @app.route("/test/admin")
    @admin_required
    def admin_view():
        calls.append("admin")
        return jsonify({"username": g.username})

    app.view_calls = calls
    return app


@pytest.fixture
def guarded_client(guarded_app):
    with guarded_app.test_client() as test_client:
        yield test_client


class TestAuthRequiredDecorator:
    """Tests for @auth_required."""

    def test_valid_token_allowed(self, guarded_client, guarded_app, auth_headers):
        """Valid token reaches the view with username in flask.g."""
        response = guarded_client.get("/test/authenticated", headers=auth_headers)

        assert response.status_code == 200
        assert response.get_json() == {"username": "bob", "role": "user"}
        assert guarded_app.view_calls == ["authenticated"]

    def test_missing_token_rejected(self, guarded_client, guarded_app):
        response = guarded_client.get("/test/authenticated")

        assert response.status_code == 401
        assert response.get_json()["error"]["type"] == "Unauthorized"
        assert guarded_app.view_calls == []

    def test_malformed_header_rejected(self, guarded_client, guarded_app, user_token):
        response = guarded_client.get(
            "/test/authenticated",
            headers={"Authorization": f"Token {user_token}"}
        )

        assert response.status_code == 401
        assert "header format" in response.get_json()["error"]["message"]
        assert guarded_app.view_calls == []

    def test_invalid_token_rejected(self, guarded_client, guarded_app):
        response = guarded_client.get(
            "/test/authenticated",
            headers={"Authorization": "Bearer invalid.token.here"}
        )

        assert response.status_code == 401
        assert response.get_json()["error"]["message"] == "Invalid token"
        assert guarded_app.view_calls == []


class TestAdminRequiredDecorator:
    """Tests for @admin_required."""

    def test_admin_token_allowed(self, guarded_client, guarded_app, admin_headers):
        response = guarded_client.get("/test/admin", headers=admin_headers)

        assert response.status_code == 200
        assert response.get_json() == {"username": "root"}
        assert guarded_app.view_calls == ["admin"]

    def test_user_token_forbidden(self, guarded_client, guarded_app, auth_headers):
        response = guarded_client.get("/test/admin", headers=auth_headers)

        assert response.status_code == 403
        assert response.get_json()["error"]["type"] == "Forbidden"
        assert guarded_app.view_calls == []

    def test_missing_token_unauthorized(self, guarded_client, guarded_app):
        """No token is 401, not 403."""
        response = guarded_client.get("/test/admin")

        assert response.status_code == 401
        assert guarded_app.view_calls == []


class TestLocalhostOnlyDecorator:
    """Tests for @localhost_only on admin bootstrap."""

    def test_localhost_allowed(self, client):
        response = client.post(
            "/admin/register",
            json={"username": "root", "password": "s3cret-admin"},
        )
        assert response.status_code == 201

    def test_remote_address_blocked(self, client):
        response = client.post(
            "/admin/register",
            json={"username": "root", "password": "s3cret-admin"},
            environ_base={"REMOTE_ADDR": "192.168.1.100"},
        )
        assert response.status_code == 403
        assert "only accessible from localhost" in response.get_json()["error"]["message"]

    def test_bypass_setting_blocks_localhost(self, make_settings):
        from authgate.app import create_app

        bypass_app = create_app(make_settings(bypass_localhost_check=True))
        with bypass_app.test_client() as bypass_client:
            response = bypass_client.post(
                "/admin/register",
                json={"username": "root", "password": "s3cret-admin"},
            )
        assert response.status_code == 403


class TestFirstTimeOnlyDecorator:
    """Tests for @first_time_only on admin bootstrap."""

    def test_blocks_when_admin_exists(self, client, admin_user):
        response = client.post(
            "/admin/register",
            json={"username": "root2", "password": "s3cret-admin"},
        )
        assert response.status_code == 403
        assert "Setup has already been completed" in response.get_json()["error"]["message"]

    def test_regular_user_does_not_count_as_admin(self, client, registered_user):
        response = client.post(
            "/admin/register",
            json={"username": "root", "password": "s3cret-admin"},
        )
        assert response.status_code == 201
