"""
Homebase Backend: Caller Identity Tests
=======================================

What we test:
    ✅ Valid token resolves to the numeric userId
    ✅ Expired, badly signed and malformed tokens are rejected
    ✅ Missing, zero, fractional and boolean userId claims are rejected
    ✅ Routes answer 401 with WWW-Authenticate when no identity resolves
"""

from datetime import timedelta

import pytest
from jose import jwt

from homebase.auth import AuthContext, decode_token
from homebase.config import settings
from homebase.exceptions import AuthenticationError


class TestDecodeToken:

    def test_valid_token(self, make_token):
        assert decode_token(make_token(7)) == AuthContext(user_id=7)

    def test_numeric_string_claim_accepted(self, make_token):
        assert decode_token(make_token("12")).user_id == 12

    def test_expired_token_rejected(self, make_token):
        token = make_token(7, expires_in=timedelta(seconds=-30))
        with pytest.raises(AuthenticationError, match="expired"):
            decode_token(token)

    def test_wrong_secret_rejected(self, make_token):
        token = make_token(7, secret="someone-elses-secret")
        with pytest.raises(AuthenticationError):
            decode_token(token)

    def test_garbage_rejected(self):
        with pytest.raises(AuthenticationError):
            decode_token("not-a-jwt")

    def test_missing_claim_rejected(self):
        token = jwt.encode({"sub": "7"}, settings.token_secret, algorithm=settings.token_algorithm)
        with pytest.raises(AuthenticationError):
            decode_token(token)

    @pytest.mark.parametrize("claim", [0, -3, 12.7, True, "abc"])
    def test_unusable_user_id_rejected(self, make_token, claim):
        with pytest.raises(AuthenticationError):
            decode_token(make_token(claim))

    def test_error_carries_401(self):
        with pytest.raises(AuthenticationError) as excinfo:
            decode_token("not-a-jwt")
        assert excinfo.value.status_code == 401


class TestAuthOnRoutes:

    @pytest.mark.asyncio
    async def test_missing_header_is_401(self, test_client):
        response = await test_client.get("/api/movies")
        assert response.status_code == 401
        assert response.headers["WWW-Authenticate"] == "Bearer"
        body = response.json()
        assert body["error"] == "authentication_required"
        assert body["message"] == "Authentication required"

    @pytest.mark.asyncio
    async def test_non_bearer_scheme_is_401(self, test_client):
        response = await test_client.get(
            "/api/properties", headers={"Authorization": "Basic dXNlcjpwYXNz"}
        )
        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_invalid_token_is_401(self, test_client):
        response = await test_client.get(
            "/api/properties", headers={"Authorization": "Bearer nope"}
        )
        assert response.status_code == 401
        assert response.json()["message"] == "Invalid authentication token"
