"""Tests for bearer token issue and verification."""

from datetime import UTC, datetime, timedelta

import jwt
import pytest
from marketplace.identity.tokens import ALGORITHM, issue_token, read_token
from marketplace.shared.errors import AuthenticationError
from marketplace.utils import settings


class TestTokens:
    def test_round_trip_subject(self):
        assert read_token(issue_token("user-001")) == "user-001"

    def test_token_expires_after_ttl(self):
        payload = jwt.decode(issue_token("user-001"), settings.jwt_secret(), algorithms=[ALGORITHM])
        assert payload["exp"] - payload["iat"] == settings.token_ttl_seconds()

    def test_expired_token_is_rejected(self):
        past = datetime.now(UTC) - timedelta(hours=2)
        token = jwt.encode(
            {"uid": "user-001", "iat": past, "exp": past + timedelta(hours=1)},
            settings.jwt_secret(),
            algorithm=ALGORITHM,
        )
        with pytest.raises(AuthenticationError):
            read_token(token)

    def test_foreign_signature_is_rejected(self):
        token = jwt.encode({"uid": "user-001"}, "not-the-secret", algorithm=ALGORITHM)
        with pytest.raises(AuthenticationError):
            read_token(token)

    def test_token_without_subject_is_rejected(self):
        token = jwt.encode({"sub": "user-001"}, settings.jwt_secret(), algorithm=ALGORITHM)
        with pytest.raises(AuthenticationError):
            read_token(token)

    def test_garbage_is_rejected(self):
        with pytest.raises(AuthenticationError) as exc:
            read_token("not-a-jwt")
        assert exc.value.message == "Token tidak valid"
