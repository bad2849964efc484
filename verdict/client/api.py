# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Protocol

import httpx

from verdict.shared.logging import logger

from .state import User


class AuthApiError(Exception):
    """Non-2xx answer from the auth service, or a transport failure.

    Callers match on the subclass; ``code`` carries the server's error code.
    """

    default_code = "UNKNOWN_ERROR"

    def __init__(self, message: str, code: str | None = None, status: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.code = code or self.default_code
        self.status = status


class NetworkError(AuthApiError):
    default_code = "NETWORK_ERROR"


class InvalidResponseError(AuthApiError):
    default_code = "INVALID_RESPONSE"


class ValidationApiError(AuthApiError):
    pass


class AuthenticationApiError(AuthApiError):
    pass


class SessionRejectedError(AuthenticationApiError):
    """The presented session token is unknown or past its expiry."""


class NotFoundApiError(AuthApiError):
    pass


class ConflictApiError(AuthApiError):
    pass


class ServerApiError(AuthApiError):
    pass


_REJECTED_SESSION_CODES = frozenset({"INVALID_SESSION", "EXPIRED_SESSION", "SESSION_EXPIRED"})

_STATUS_ERRORS: dict[int, type[AuthApiError]] = {
    400: ValidationApiError,
    401: AuthenticationApiError,
    404: NotFoundApiError,
    409: ConflictApiError,
}


def error_for_response(status: int, message: str, code: str) -> AuthApiError:
    if status == 401 and code in _REJECTED_SESSION_CODES:
        return SessionRejectedError(message, code, status)
    if status >= 500:
        return ServerApiError(message, code, status)
    return _STATUS_ERRORS.get(status, AuthApiError)(message, code, status)


@dataclass(slots=True, frozen=True)
class LoginResponse:
    user: User
    session_token: str


@dataclass(slots=True, frozen=True)
class RefreshResponse:
    session_token: str
    expires_at: str
    user: User


class AuthApi(Protocol):
    async def register(self, name: str, email: str, password: str) -> User: ...
    async def login(self, email: str, password: str) -> LoginResponse: ...
    async def refresh(self, token: str) -> RefreshResponse: ...
    async def logout(self, token: str) -> int: ...
    async def me(self, token: str) -> User: ...


class AuthApiClient(AuthApi):
    def __init__(
        self,
        base_url: str,
        *,
        prefix: str = "/auth",
        timeout: float = 15.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._prefix = prefix.rstrip("/")
        self._client = httpx.AsyncClient(
            base_url=base_url,
            timeout=timeout,
            transport=transport,
            headers={"Content-Type": "application/json"},
        )

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _request(
        self,
        method: str,
        path: str,
        *,
        token: str | None = None,
        json: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        headers = {"Authorization": f"Bearer {token}"} if token else None
        try:
            response = await self._client.request(
                method, f"{self._prefix}{path}", json=json, headers=headers
            )
        except httpx.HTTPError as exc:
            logger.warning(f"auth_api: {method} {path} transport error {type(exc).__name__}")
            raise NetworkError("Network error") from exc

        try:
            data = response.json()
        except ValueError:
            data = {}
        if not isinstance(data, dict):
            data = {}

        if response.is_error:
            raise error_for_response(
                response.status_code,
                str(data.get("error") or "An error occurred"),
                str(data.get("code") or "UNKNOWN_ERROR"),
            )
        return data

    async def _user_request(self, method: str, path: str, **kwargs: Any) -> User:
        data = await self._request(method, path, **kwargs)
        try:
            return User.from_dict(data)
        except (KeyError, TypeError, ValueError) as exc:
            raise InvalidResponseError("Malformed user payload") from exc

    async def register(self, name: str, email: str, password: str) -> User:
        return await self._user_request(
            "POST", "/register", json={"name": name, "email": email, "password": password}
        )

    async def login(self, email: str, password: str) -> LoginResponse:
        data = await self._request("POST", "/login", json={"email": email, "password": password})
        try:
            return LoginResponse(
                user=User.from_dict(data["user"]), session_token=str(data["sessionToken"])
            )
        except (KeyError, TypeError, ValueError) as exc:
            raise InvalidResponseError("Malformed login payload") from exc

    async def refresh(self, token: str) -> RefreshResponse:
        data = await self._request("POST", "/refresh", token=token)
        try:
            return RefreshResponse(
                session_token=str(data["sessionToken"]),
                expires_at=str(data["expiresAt"]),
                user=User.from_dict(data["user"]),
            )
        except (KeyError, TypeError, ValueError) as exc:
            raise InvalidResponseError("Malformed refresh payload") from exc

    async def logout(self, token: str) -> int:
        data = await self._request("POST", "/logout", token=token)
        session_id = data.get("sessionId")
        return session_id if isinstance(session_id, int) else 0

    async def me(self, token: str) -> User:
        return await self._user_request("GET", "/me", token=token)
