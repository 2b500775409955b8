"""Unit tests for core.auth API-key dependencies."""

from unittest.mock import MagicMock

import pytest
from fastapi import HTTPException, Request

from core.auth import require_public_key, require_service_role
from core.config import clear_settings_cache


def _make_request(headers: dict | None = None) -> Request:
    request = MagicMock(spec=Request)
    request.headers = {k.lower(): v for k, v in (headers or {}).items()}
    request.url.path = "/api/admin/companies"
    return request


@pytest.fixture
def keys(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("SERVICE_ROLE_KEY", "service-key")
    monkeypatch.setenv("PUBLIC_API_KEY", "anon-key")
    clear_settings_cache()


@pytest.mark.unit
class TestRequireServiceRole:
    def test_accepts_service_key(self, keys):
        request = _make_request({"Authorization": "Bearer service-key"})
        assert require_service_role(request) == "service"

    def test_scheme_is_case_insensitive(self, keys):
        request = _make_request({"Authorization": "bearer service-key"})
        assert require_service_role(request) == "service"

    def test_missing_header_is_401(self, keys):
        with pytest.raises(HTTPException) as exc_info:
            require_service_role(_make_request())
        assert exc_info.value.status_code == 401

    def test_non_bearer_scheme_is_401(self, keys):
        request = _make_request({"Authorization": "Basic service-key"})
        with pytest.raises(HTTPException) as exc_info:
            require_service_role(request)
        assert exc_info.value.status_code == 401

    def test_public_key_is_403(self, keys):
        request = _make_request({"Authorization": "Bearer anon-key"})
        with pytest.raises(HTTPException) as exc_info:
            require_service_role(request)
        assert exc_info.value.status_code == 403

    def test_unconfigured_key_is_500(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("SERVICE_ROLE_KEY", "")
        monkeypatch.setenv("DEBUG", "true")
        clear_settings_cache()

        request = _make_request({"Authorization": "Bearer anything"})
        with pytest.raises(HTTPException) as exc_info:
            require_service_role(request)
        assert exc_info.value.status_code == 500


@pytest.mark.unit
class TestRequirePublicKey:
    def test_open_without_configured_key(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("PUBLIC_API_KEY", "")
        clear_settings_cache()
        assert require_public_key(_make_request()) == "anon"

    def test_apikey_header(self, keys):
        assert require_public_key(_make_request({"apikey": "anon-key"})) == "anon"

    def test_bearer_public_key(self, keys):
        request = _make_request({"Authorization": "Bearer anon-key"})
        assert require_public_key(request) == "anon"

    def test_service_key_is_accepted(self, keys):
        request = _make_request({"Authorization": "Bearer service-key"})
        assert require_public_key(request) == "service"

    @pytest.mark.parametrize("headers", [{}, {"apikey": "wrong"}])
    def test_rejects_missing_or_wrong_key(self, keys, headers):
        with pytest.raises(HTTPException) as exc_info:
            require_public_key(_make_request(headers))
        assert exc_info.value.status_code == 401
