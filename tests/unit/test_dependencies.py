"""Unit tests for dependency helpers."""

import pytest

from app.auth.dependencies import extract_bearer_token
from app.config import get_settings
from app.dependencies import create_authority, create_evidence_repository
from app.exceptions import UnauthorizedError


class TestExtractBearerToken:
    def test_valid(self):
        assert extract_bearer_token("Bearer abc.def.ghi") == "abc.def.ghi"

    def test_scheme_case_insensitive(self):
        assert extract_bearer_token("bearer abc") == "abc"

    def test_missing_header(self):
        with pytest.raises(UnauthorizedError, match="header missing"):
            extract_bearer_token(None)

    @pytest.mark.parametrize("header", ["Bearer", "Bearer ", "Token abc", "abc"])
    def test_missing_token(self, header):
        with pytest.raises(UnauthorizedError, match="Token missing"):
            extract_bearer_token(header)


class TestFactories:
    def test_seeded_authority(self):
        authority = create_authority(get_settings())
        assert authority.user_count == 6
        assert [u.username for u in authority.list_pending_users()] == ["rwilson"]

    def test_unseeded_authority(self, monkeypatch):
        monkeypatch.setenv("SEED_DEMO_DATA", "false")
        get_settings.cache_clear()
        settings = get_settings()
        assert create_authority(settings).user_count == 0
        assert len(create_evidence_repository(settings)) == 0

    def test_seeded_evidence(self):
        assert len(create_evidence_repository(get_settings())) == 5
