from __future__ import annotations

import asyncio
import json

import httpx
import pytest

from verdict.client.api import (
    AuthApiClient,
    AuthApiError,
    AuthenticationApiError,
    ConflictApiError,
    InvalidResponseError,
    NetworkError,
    NotFoundApiError,
    ServerApiError,
    SessionRejectedError,
    ValidationApiError,
)

USER = {
    "id": 1,
    "email": "a@b.com",
    "name": "A",
    "createdAt": "2026-01-01T12:00:00Z",
    "updatedAt": "2026-01-01T12:00:00Z",
}


def _client(handler) -> AuthApiClient:
    return AuthApiClient("http://auth.test", transport=httpx.MockTransport(handler))


def test_login_posts_credentials_and_parses_response() -> None:
    seen: dict[str, object] = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["path"] = request.url.path
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json={"user": USER, "sessionToken": "tok"})

    async def run():
        api = _client(handler)
        try:
            return await api.login("a@b.com", "secret1")
        finally:
            await api.aclose()

    result = asyncio.run(run())

    assert seen == {"path": "/auth/login", "body": {"email": "a@b.com", "password": "secret1"}}
    assert result.session_token == "tok"
    assert result.user.email == "a@b.com"


def test_me_sends_bearer_token() -> None:
    seen: dict[str, str | None] = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["auth"] = request.headers.get("Authorization")
        return httpx.Response(200, json=USER)

    async def run():
        api = _client(handler)
        try:
            return await api.me("tok")
        finally:
            await api.aclose()

    user = asyncio.run(run())

    assert seen["auth"] == "Bearer tok"
    assert user.id == 1


def test_error_body_becomes_auth_api_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(401, json={"error": "Session has expired", "code": "EXPIRED_SESSION"})

    async def run():
        api = _client(handler)
        try:
            await api.me("tok")
        finally:
            await api.aclose()

    with pytest.raises(SessionRejectedError) as exc:
        asyncio.run(run())

    assert exc.value.code == "EXPIRED_SESSION"
    assert exc.value.message == "Session has expired"
    assert exc.value.status == 401


def test_transport_failure_is_network_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("refused", request=request)

    async def run():
        api = _client(handler)
        try:
            await api.refresh("tok")
        finally:
            await api.aclose()

    with pytest.raises(NetworkError) as exc:
        asyncio.run(run())

    assert exc.value.code == "NETWORK_ERROR"
    assert exc.value.status is None


def test_logout_returns_session_id() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"message": "Successfully logged out", "sessionId": 3})

    async def run():
        api = _client(handler)
        try:
            return await api.logout("tok")
        finally:
            await api.aclose()

    assert asyncio.run(run()) == 3


@pytest.mark.parametrize(
    ("status", "code", "error_type"),
    [
        (400, "WEAK_PASSWORD", ValidationApiError),
        (401, "INVALID_CREDENTIALS", AuthenticationApiError),
        (401, "INVALID_SESSION", SessionRejectedError),
        (404, "SESSION_NOT_FOUND", NotFoundApiError),
        (409, "DUPLICATE_EMAIL", ConflictApiError),
        (500, "INTERNAL_ERROR", ServerApiError),
        (503, "UNKNOWN_ERROR", ServerApiError),
        (418, "TEAPOT", AuthApiError),
    ],
)
def test_error_status_selects_error_type(status: int, code: str, error_type: type) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(status, json={"error": "failed", "code": code})

    async def run():
        api = _client(handler)
        try:
            await api.login("a@b.com", "secret1")
        finally:
            await api.aclose()

    with pytest.raises(AuthApiError) as exc:
        asyncio.run(run())

    assert type(exc.value) is error_type
    assert exc.value.code == code
    assert exc.value.status == status


def test_invalid_credentials_is_not_a_session_rejection() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(401, json={"error": "Invalid credentials", "code": "INVALID_CREDENTIALS"})

    async def run():
        api = _client(handler)
        try:
            await api.login("a@b.com", "wrong")
        finally:
            await api.aclose()

    with pytest.raises(AuthenticationApiError) as exc:
        asyncio.run(run())

    assert not isinstance(exc.value, SessionRejectedError)


def test_malformed_payload_is_invalid_response() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"unexpected": True})

    async def run():
        api = _client(handler)
        try:
            await api.refresh("tok")
        finally:
            await api.aclose()

    with pytest.raises(InvalidResponseError) as exc:
        asyncio.run(run())

    assert exc.value.code == "INVALID_RESPONSE"
