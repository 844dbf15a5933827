"""
Tests for the clinic API client and appointment fetching.
"""

import asyncio
import json

import httpx
import pytest

from core.api_client import ApiClient, ApiError, AuthExpiredError, SessionContext
from core.config import normalize_api_url
from services.appointments import (
    build_query_params,
    fetch_appointments,
    get_appointment,
    normalize_list_response,
)

BASE_URL = "https://clinic.test/api"


def make_client(handler, token: str | None = "secret") -> ApiClient:
    session = SessionContext(base_url=BASE_URL, access_token=token)
    return ApiClient(session, transport=httpx.MockTransport(handler))


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("https://x.test/api", "https://x.test/api"),
        ("https://x.test/", "https://x.test/api"),
        ("https://x.test", "https://x.test/api"),
    ],
)
def test_normalize_api_url(raw, expected):
    assert normalize_api_url(raw) == expected


def test_build_query_params_drops_empty_values():
    params = build_query_params({"status": "CONFIRMED", "clientId": "", "page": 1, "limit": None})
    assert params == {"status": "CONFIRMED", "page": "1"}


class TestNormalizeListResponse:
    def test_items_shape_unchanged(self):
        raw = {"items": [{"id": "a"}], "pagination": {"page": 2, "limit": 5, "total": 6, "totalPages": 2}}
        assert normalize_list_response(raw, {}) is raw

    def test_appointments_shape(self):
        raw = {"appointments": [{"id": "a"}, {"id": "b"}], "page": 1, "limit": 1, "total": 2}
        result = normalize_list_response(raw, {})
        assert [r["id"] for r in result["items"]] == ["a", "b"]
        assert result["pagination"] == {"page": 1, "limit": 1, "total": 2, "totalPages": 2}

    def test_data_shape_falls_back_to_query(self):
        result = normalize_list_response({"data": [{"id": "a"}]}, {"page": 3, "limit": 20})
        assert result["pagination"] == {"page": 3, "limit": 20, "total": 1, "totalPages": 1}

    def test_unknown_shape_is_empty(self):
        result = normalize_list_response(None, {})
        assert result["items"] == []
        assert result["pagination"] == {"page": 1, "limit": 10, "total": 0, "totalPages": 1}


class TestApiClient:
    def test_fetch_sends_query_and_token(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["url"] = str(request.url)
            seen["auth"] = request.headers.get("Authorization")
            return httpx.Response(200, json={"items": [{"id": "a"}]})

        result = asyncio.run(fetch_appointments(make_client(handler), {"status": "CONFIRMED", "page": 1}))

        assert result["items"] == [{"id": "a"}]
        assert seen["url"].startswith(f"{BASE_URL}/appointments?")
        assert "status=CONFIRMED" in seen["url"]
        assert seen["auth"] == "Bearer secret"

    def test_no_token_no_authorization_header(self):
        def handler(request: httpx.Request) -> httpx.Response:
            assert "Authorization" not in request.headers
            return httpx.Response(200, json={"id": "a"})

        record = asyncio.run(get_appointment(make_client(handler, token=None), "a"))
        assert record == {"id": "a"}

    def test_401_raises_auth_expired(self):
        def handler(request):
            return httpx.Response(401, json={"message": "Unauthorized"})

        with pytest.raises(AuthExpiredError) as exc_info:
            asyncio.run(fetch_appointments(make_client(handler), {}))
        assert exc_info.value.status_code == 401
        assert str(exc_info.value) == "Token expirado - faça login novamente"

    def test_error_message_from_body(self):
        def handler(request):
            return httpx.Response(500, json={"message": "Database unavailable"})

        with pytest.raises(ApiError, match="Database unavailable"):
            asyncio.run(fetch_appointments(make_client(handler), {}))

    def test_error_without_body_uses_status(self):
        def handler(request):
            return httpx.Response(503, text="down")

        with pytest.raises(ApiError, match="HTTP 503"):
            asyncio.run(fetch_appointments(make_client(handler), {}))

    def test_non_json_success_is_empty(self):
        def handler(request):
            return httpx.Response(200, text="ok", headers={"content-type": "text/plain"})

        result = asyncio.run(fetch_appointments(make_client(handler), {"limit": 5}))
        assert result["items"] == []

    def test_json_body_posted(self):
        def handler(request):
            return httpx.Response(200, json=json.loads(request.content))

        client = make_client(handler)
        assert asyncio.run(client.request("POST", "/echo", json={"a": 1})) == {"a": 1}

    def test_broken_json_body_raises(self):
        def handler(request):
            return httpx.Response(200, text="{not json", headers={"content-type": "application/json"})

        with pytest.raises(ApiError, match="Resposta JSON inválida"):
            asyncio.run(fetch_appointments(make_client(handler), {}))
