"""
Unit tests for TokenService: bcrypt hashing, user/admin JWTs and reset tokens.
"""

from datetime import datetime, timedelta, timezone

import pytest

from app.core.exceptions import UnauthorizedError
from app.services.token_service import ADMIN_TOKEN, TokenService


@pytest.fixture
def tokens() -> TokenService:
    return TokenService()


@pytest.mark.unit
class TestPasswords:
    def test_hash_and_verify(self, tokens):
        hashed = tokens.get_password_hash("s3cret!")

        assert hashed != "s3cret!"
        assert tokens.verify_password("s3cret!", hashed)
        assert not tokens.verify_password("wrong", hashed)

    def test_malformed_hash_does_not_verify(self, tokens):
        assert tokens.verify_password("s3cret!", "not-a-bcrypt-hash") is False


@pytest.mark.unit
class TestJwt:
    def test_user_token_round_trip(self, tokens):
        token = tokens.create_user_token("user-1")

        assert tokens.decode_user_token(token) == "user-1"

    def test_admin_token_round_trip(self, tokens):
        token = tokens.create_admin_token("admin-1")

        assert tokens.decode_admin_token(token) == "admin-1"

    def test_user_token_is_rejected_as_admin(self, tokens):
        token = tokens.create_user_token("user-1")

        with pytest.raises(UnauthorizedError, match="Not authorized, token failed"):
            tokens.decode_admin_token(token)

    def test_admin_token_is_rejected_as_user(self, tokens):
        token = tokens.create_admin_token("admin-1")

        with pytest.raises(UnauthorizedError):
            tokens.decode_user_token(token)

    def test_expired_token(self, tokens):
        token = tokens.create_access_token("user-1", expires_delta=timedelta(seconds=-10))

        with pytest.raises(UnauthorizedError) as exc_info:
            tokens.decode_user_token(token)

        assert exc_info.value.status_code == 401

    def test_garbage_token(self, tokens):
        with pytest.raises(UnauthorizedError):
            tokens.decode_user_token("definitely.not.a-jwt")

    def test_default_lifetime_is_thirty_days(self, tokens):
        token = tokens.create_access_token("admin-1", ADMIN_TOKEN)
        payload = tokens.decode_token(token, ADMIN_TOKEN)

        lifetime = payload["exp"] - payload["iat"]
        assert lifetime == int(timedelta(days=30).total_seconds())


@pytest.mark.unit
def test_generate_reset_token(tokens):
    token, expires = tokens.generate_reset_token()

    assert len(token) == 40
    int(token, 16)
    remaining = expires - datetime.now(timezone.utc)
    assert timedelta(minutes=59) < remaining <= timedelta(minutes=60)
