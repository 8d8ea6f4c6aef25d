"""Unit tests for authentication primitives (JWT + password hashing)."""

from datetime import UTC, datetime, timedelta

import pytest
from jose import jwt

from app.auth.security import TokenService, hash_password, verify_password
from app.config import get_settings
from app.exceptions import ExpiredTokenError, InvalidTokenError
from app.models.user import Identity, UserRole
from tests.conftest import TEST_SECRET, FakeClock

IDENTITY = Identity("detective1", "dcooper", UserRole.detective, "David", "Cooper")


class TestPasswordHashing:
    def test_hash_and_verify(self):
        password = "secure-password-123"
        hashed = hash_password(password, rounds=4)
        assert hashed != password
        assert verify_password(password, hashed)

    def test_wrong_password(self):
        hashed = hash_password("correct-password", rounds=4)
        assert not verify_password("wrong-password", hashed)

    def test_hash_is_unique(self):
        h1 = hash_password("same-password", rounds=4)
        h2 = hash_password("same-password", rounds=4)
        assert h1 != h2  # bcrypt uses random salt

    def test_rounds_default_from_settings(self):
        hashed = hash_password("pw")
        assert hashed.startswith(f"$2b${get_settings().bcrypt_rounds:02d}$")

    def test_malformed_hash_does_not_verify(self):
        assert not verify_password("pw", "not-a-bcrypt-hash")


class TestIssueToken:
    def test_claims(self):
        clock = FakeClock()
        service = TokenService(TEST_SECRET, clock=clock)
        token = service.issue(IDENTITY)
        payload = jwt.decode(token, TEST_SECRET, algorithms=["HS256"], options={"verify_exp": False})
        assert payload["sub"] == "detective1"
        assert payload["username"] == "dcooper"
        assert payload["role"] == "detective"
        assert payload["first_name"] == "David"
        assert payload["last_name"] == "Cooper"
        assert payload["type"] == "access"
        assert payload["exp"] - payload["iat"] == 24 * 3600
        assert payload["iat"] == int(clock.now.timestamp())

    def test_verify_round_trip(self):
        service = TokenService(TEST_SECRET)
        assert service.verify(service.issue(IDENTITY)) == IDENTITY

    def test_expires_in_from_settings(self):
        service = TokenService.from_settings(get_settings())
        assert service.expires_in == 24 * 3600


class TestTokenExpiryWindow:
    def test_accepted_at_issuance(self):
        clock = FakeClock()
        service = TokenService(TEST_SECRET, clock=clock)
        token = service.issue(IDENTITY)
        assert service.verify(token).username == "dcooper"

    def test_accepted_just_before_24h(self):
        clock = FakeClock()
        service = TokenService(TEST_SECRET, clock=clock)
        token = service.issue(IDENTITY)
        clock.advance(hours=24, seconds=-1)
        assert service.verify(token).role is UserRole.detective

    def test_rejected_at_24h(self):
        clock = FakeClock()
        service = TokenService(TEST_SECRET, clock=clock)
        token = service.issue(IDENTITY)
        clock.advance(hours=24)
        with pytest.raises(ExpiredTokenError):
            service.verify(token)

    def test_rejected_after_24h(self):
        clock = FakeClock()
        service = TokenService(TEST_SECRET, clock=clock)
        token = service.issue(IDENTITY)
        clock.advance(days=3)
        with pytest.raises(ExpiredTokenError):
            service.verify(token)

    def test_fractional_second_issuance(self):
        clock = FakeClock(datetime(2025, 4, 18, 10, 0, 0, 900_000, tzinfo=UTC))
        service = TokenService(TEST_SECRET, clock=clock)
        token = service.issue(IDENTITY)
        clock.advance(hours=24, milliseconds=-500)
        assert service.verify(token).username == "dcooper"
        clock.advance(milliseconds=499, microseconds=999)
        assert service.verify(token).username == "dcooper"
        clock.advance(microseconds=1)
        with pytest.raises(ExpiredTokenError):
            service.verify(token)

    def test_default_clock_rejects_expired(self):
        payload = {
            "sub": "user-1",
            "username": "admin",
            "role": "admin",
            "type": "access",
            "exp": datetime.now(UTC) - timedelta(hours=1),
        }
        token = jwt.encode(payload, TEST_SECRET, algorithm="HS256")
        with pytest.raises(ExpiredTokenError):
            TokenService(TEST_SECRET).verify(token)


class TestVerifyTokenRejections:
    def test_garbage(self):
        with pytest.raises(InvalidTokenError):
            TokenService(TEST_SECRET).verify("not-a-valid-token")

    def test_empty(self):
        with pytest.raises(InvalidTokenError):
            TokenService(TEST_SECRET).verify("")

    def test_wrong_secret(self):
        token = TokenService("some-other-secret").issue(IDENTITY)
        with pytest.raises(InvalidTokenError):
            TokenService(TEST_SECRET).verify(token)

    def test_tampered_payload(self):
        token = TokenService(TEST_SECRET).issue(IDENTITY)
        header, _, signature = token.split(".")
        forged = TokenService("attacker").issue(
            Identity("detective1", "dcooper", UserRole.admin, "David", "Cooper")
        )
        forged_payload = forged.split(".")[1]
        with pytest.raises(InvalidTokenError):
            TokenService(TEST_SECRET).verify(f"{header}.{forged_payload}.{signature}")

    def test_missing_expiry(self):
        token = jwt.encode(
            {"sub": "u1", "username": "admin", "role": "admin", "type": "access"},
            TEST_SECRET,
            algorithm="HS256",
        )
        with pytest.raises(InvalidTokenError):
            TokenService(TEST_SECRET).verify(token)

    def test_unknown_role(self):
        token = jwt.encode(
            {
                "sub": "u1",
                "username": "admin",
                "role": "superuser",
                "type": "access",
                "exp": datetime.now(UTC) + timedelta(hours=1),
            },
            TEST_SECRET,
            algorithm="HS256",
        )
        with pytest.raises(InvalidTokenError):
            TokenService(TEST_SECRET).verify(token)

    def test_wrong_token_type(self):
        token = jwt.encode(
            {
                "sub": "u1",
                "username": "admin",
                "role": "admin",
                "type": "refresh",
                "exp": datetime.now(UTC) + timedelta(hours=1),
            },
            TEST_SECRET,
            algorithm="HS256",
        )
        with pytest.raises(InvalidTokenError):
            TokenService(TEST_SECRET).verify(token)
