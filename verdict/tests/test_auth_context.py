from __future__ import annotations

import asyncio

import httpx
import pytest

from verdict import client
from verdict.client.context import AuthContext
from verdict.client.state import AuthStatus
from verdict.client.token_store import FileTokenStore, MemoryTokenStore
from verdict.shared.config import ClientConfig, SessionConfig

USER = {
    "id": 1,
    "email": "a@b.com",
    "name": "A",
    "createdAt": "2026-01-01T12:00:00Z",
    "updatedAt": "2026-01-01T12:00:00Z",
}


def test_context_restores_session_and_logs_out() -> None:
    paths: list[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        paths.append(f"{request.method} {request.url.path}")
        if request.url.path == "/auth/me":
            return httpx.Response(200, json=USER)
        return httpx.Response(200, json={"message": "Successfully logged out", "sessionId": 1})

    store = MemoryTokenStore("saved")
    config = ClientConfig(base_url="http://auth.test", check_interval=30, refresh_interval=30)

    async def run() -> list[AuthStatus]:
        seen: list[AuthStatus] = []
        context = AuthContext.from_config(
            config, store=store, transport=httpx.MockTransport(handler)
        )
        async with context:
            seen.append(context.state.status)
            context.subscribe(lambda state: seen.append(state.status))
            await context.logout()
        return seen

    seen = asyncio.run(run())

    assert seen == [AuthStatus.AUTHENTICATED, AuthStatus.UNAUTHENTICATED]
    assert paths == ["GET /auth/me", "POST /auth/logout"]
    assert store.get() is None


def test_from_config_uses_token_file_when_configured(tmp_path) -> None:
    config = ClientConfig(
        base_url="http://auth.test",
        token_file=tmp_path / "token.json",
        token_poll_interval=0.5,
    )

    async def run() -> AuthContext:
        context = AuthContext.from_config(config, url_prefix="/auth")
        await context._api.aclose()
        return context

    context = asyncio.run(run())

    assert isinstance(context.controller._store, FileTokenStore)


def test_exit_closes_client_even_when_stop_fails() -> None:
    closed: list[bool] = []

    class FailingController:
        status = AuthStatus.UNAUTHENTICATED

        async def start(self) -> None:
            return None

        async def stop(self) -> None:
            raise RuntimeError("stop failed")

    class RecordingApi:
        async def aclose(self) -> None:
            closed.append(True)

    async def run() -> None:
        async with AuthContext(FailingController(), api=RecordingApi()):
            pass

    with pytest.raises(RuntimeError):
        asyncio.run(run())

    assert closed == [True]


def test_client_package_exposes_controller_and_stores() -> None:
    assert client.SessionController is not None
    assert client.AuthContext is AuthContext
    assert SessionConfig().url_prefix == "/auth"
