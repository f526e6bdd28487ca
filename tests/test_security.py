"""
Unit Tests for Security Module
Tests for: password hashing, JWT tokens
"""
import time

import pytest
from jose import jwt

from project_tracker.core.exceptions import UnauthenticatedError
from project_tracker.core.security import (
    create_access_token,
    decode_access_token,
    get_password_hash,
    verify_password,
)


class TestPasswordHashing:
    """Test password hashing functions"""

    def test_hash_is_not_plaintext(self):
        hashed = get_password_hash("testpassword123", rounds=4)

        assert hashed != "testpassword123"
        assert hashed.startswith("$2")

    def test_hash_different_each_time(self):
        """Bcrypt generates different salts"""
        assert get_password_hash("testpassword123", rounds=4) != get_password_hash("testpassword123", rounds=4)

    def test_verify_password_correct(self):
        hashed = get_password_hash("testpassword123", rounds=4)

        assert verify_password("testpassword123", hashed) is True

    def test_verify_password_incorrect(self):
        hashed = get_password_hash("testpassword123", rounds=4)

        assert verify_password("wrongpassword", hashed) is False

    def test_verify_empty_password(self):
        hashed = get_password_hash("testpassword123", rounds=4)

        assert verify_password("", hashed) is False

    def test_long_password_truncated(self):
        long_password = "a" * 100
        hashed = get_password_hash(long_password, rounds=4)

        assert verify_password(long_password, hashed) is True


class TestAccessToken:
    """Test JWT issuance and decoding"""

    def test_round_trip(self, settings):
        token = create_access_token("user-123", settings)

        assert decode_access_token(token, settings) == "user-123"

    def test_payload_has_only_subject_and_expiry(self, settings):
        token = create_access_token("user-123", settings)

        claims = jwt.get_unverified_claims(token)

        assert set(claims) == {"sub", "exp"}

    def test_expiry_is_thirty_days(self, settings):
        token = create_access_token("user-123", settings)

        claims = jwt.get_unverified_claims(token)
        header = jwt.get_unverified_header(token)

        assert header["alg"] == "HS256"
        # exp is an absolute timestamp; 30 days is 2,592,000 seconds
        assert abs(claims["exp"] - time.time() - 30 * 24 * 3600) < 60

    def test_wrong_key_rejected(self, settings):
        token = jwt.encode({"sub": "user-123"}, "other-key", algorithm="HS256")

        with pytest.raises(UnauthenticatedError):
            decode_access_token(token, settings)

    def test_missing_subject_rejected(self, settings):
        token = jwt.encode({"foo": "bar"}, settings.SECRET_KEY, algorithm=settings.ALGORITHM)

        with pytest.raises(UnauthenticatedError):
            decode_access_token(token, settings)
