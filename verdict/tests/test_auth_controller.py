from __future__ import annotations

from datetime import UTC, datetime, timedelta
from typing import cast
from unittest.mock import MagicMock

import pytest
from flask import Flask

from verdict.application.use_cases.users.get_current_user import GetCurrentUserUseCase
from verdict.application.use_cases.users.refresh_session import (
    RefreshResult,
    RefreshSessionUseCase,
)
from verdict.application.use_cases.users.register_user import RegisterUserUseCase
from verdict.domain.users.entities import PublicUser
from verdict.domain.users.exceptions import InvalidSessionError
from verdict.interfaces.http.controllers.auth_controller import AuthController
from verdict.shared.middleware.error_handler import configure_error_handling

NOW = datetime(2026, 1, 1, 12, 0, tzinfo=UTC)
ALICE = PublicUser(id=1, email="a@b.com", name="Alice", created_at=NOW, updated_at=NOW)


@pytest.fixture()
def flask_app() -> Flask:
    app = Flask(__name__)
    configure_error_handling(app)
    return app


def _mount(app: Flask, **use_cases) -> dict[str, MagicMock]:
    mocks = {
        "register_use_case": MagicMock(),
        "login_use_case": MagicMock(),
        "refresh_use_case": MagicMock(),
        "logout_use_case": MagicMock(),
        "current_user_use_case": MagicMock(),
    }
    mocks.update(use_cases)
    app.register_blueprint(AuthController(**mocks).as_blueprint())
    return mocks


def test_register_returns_created_user(flask_app: Flask) -> None:
    register_called: dict[str, tuple] = {}

    class StubRegister:
        def execute(self, email, password, name) -> PublicUser:
            register_called["args"] = (email, password, name)
            return ALICE

    _mount(flask_app, register_use_case=cast(RegisterUserUseCase, StubRegister()))

    with flask_app.test_client() as client:
        response = client.post(
            "/auth/register",
            json={"email": "a@b.com", "password": "secret1", "name": "Alice", "extra": 1},
        )

    assert response.status_code == 201
    assert register_called["args"] == ("a@b.com", "secret1", "Alice")
    body = response.get_json()
    assert body == {
        "id": 1,
        "email": "a@b.com",
        "name": "Alice",
        "createdAt": "2026-01-01T12:00:00Z",
        "updatedAt": "2026-01-01T12:00:00Z",
    }


def test_register_without_body_passes_missing_fields(flask_app: Flask) -> None:
    mocks = _mount(flask_app)
    mocks["register_use_case"].execute.return_value = ALICE

    with flask_app.test_client() as client:
        client.post("/auth/register", data="not json", content_type="text/plain")

    mocks["register_use_case"].execute.assert_called_once_with(None, None, None)


def test_refresh_prefers_header_over_body(flask_app: Flask) -> None:
    mocks = _mount(flask_app)
    mocks["refresh_use_case"].execute.return_value = RefreshResult(
        session_token="new-token",
        expires_at=NOW + timedelta(hours=24),
        user=ALICE,
    )

    with flask_app.test_client() as client:
        response = client.post(
            "/auth/refresh",
            json={"sessionToken": "body-token"},
            headers={"Authorization": "Bearer header-token"},
        )

    assert response.status_code == 200
    mocks["refresh_use_case"].execute.assert_called_once_with("header-token")
    body = response.get_json()
    assert body["sessionToken"] == "new-token"
    assert body["expiresAt"] == "2026-01-02T12:00:00Z"
    assert body["user"]["email"] == "a@b.com"


def test_logout_reads_token_from_body(flask_app: Flask) -> None:
    mocks = _mount(flask_app)
    mocks["logout_use_case"].execute.return_value = 7

    with flask_app.test_client() as client:
        response = client.post("/auth/logout", json={"sessionToken": "body-token"})

    assert response.status_code == 200
    assert response.get_json() == {"message": "Successfully logged out", "sessionId": 7}
    mocks["logout_use_case"].execute.assert_called_once_with("body-token")


def test_refresh_without_token_returns_400(flask_app: Flask) -> None:
    _mount(flask_app, refresh_use_case=RefreshSessionUseCase(sessions=MagicMock(), tokens=MagicMock()))

    with flask_app.test_client() as client:
        response = client.post("/auth/refresh", json={})

    assert response.status_code == 400
    assert response.get_json()["code"] == "MISSING_SESSION_TOKEN"


@pytest.mark.parametrize(
    ("headers", "code"),
    [
        ({}, "MISSING_AUTH_HEADER"),
        ({"Authorization": "Token abc"}, "MISSING_AUTH_HEADER"),
    ],
)
def test_me_header_errors(flask_app: Flask, headers: dict[str, str], code: str) -> None:
    _mount(
        flask_app,
        current_user_use_case=GetCurrentUserUseCase(sessions=MagicMock(), tokens=MagicMock()),
    )

    with flask_app.test_client() as client:
        response = client.get("/auth/me", headers=headers)

    assert response.status_code == 401
    assert response.get_json()["code"] == code


def test_me_maps_domain_error(flask_app: Flask) -> None:
    mocks = _mount(flask_app)
    mocks["current_user_use_case"].execute.side_effect = InvalidSessionError()

    with flask_app.test_client() as client:
        response = client.get("/auth/me", headers={"Authorization": "Bearer abc"})

    assert response.status_code == 401
    assert response.get_json() == {
        "error": "Invalid or expired session token",
        "code": "INVALID_SESSION",
    }


def test_unexpected_error_returns_generic_500(flask_app: Flask) -> None:
    mocks = _mount(flask_app)
    mocks["login_use_case"].execute.side_effect = RuntimeError("db exploded")

    with flask_app.test_client() as client:
        response = client.post("/auth/login", json={"email": "a@b.com", "password": "x"})

    assert response.status_code == 500
    assert response.get_json() == {"error": "Internal server error", "code": "INTERNAL_ERROR"}
