# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from http import HTTPStatus
from typing import Any, TypeVar

from flask import Blueprint, Response, jsonify, request
from pydantic import BaseModel, ValidationError

from verdict.application.use_cases.users.get_current_user import GetCurrentUserUseCase
from verdict.application.use_cases.users.login_user import LoginUserUseCase
from verdict.application.use_cases.users.logout_user import LogoutUserUseCase
from verdict.application.use_cases.users.refresh_session import RefreshSessionUseCase
from verdict.application.use_cases.users.register_user import RegisterUserUseCase
from verdict.domain.users.entities import isoformat
from verdict.domain.users.exceptions import MissingAuthHeaderError
from verdict.interfaces.http.dto.auth import (
    LoginRequestDTO,
    LoginResponseDTO,
    LogoutResponseDTO,
    RefreshResponseDTO,
    RegisterRequestDTO,
    SessionTokenRequestDTO,
)
from verdict.shared.errors.validation import raise_validation_error
from verdict.shared.logging import logger

_BEARER_PREFIX = "Bearer "

T = TypeVar("T", bound=BaseModel)


def _parse_body(model: type[T]) -> T:
    try:
        return model.model_validate(request.get_json(silent=True) or {})
    except ValidationError as exc:
        raise_validation_error(exc)


def _bearer_from_header() -> str | None:
    auth_header = request.headers.get("Authorization", "")
    if auth_header.startswith(_BEARER_PREFIX):
        return auth_header[len(_BEARER_PREFIX):]
    return None


def _token_from_header_or_body() -> str | None:
    token = _bearer_from_header()
    if token:
        return token
    return _parse_body(SessionTokenRequestDTO).session_token


def _json(payload: dict[str, Any], status: HTTPStatus) -> tuple[Response, int]:
    return jsonify(payload), int(status)


class AuthController:
    def __init__(
        self,
        *,
        register_use_case: RegisterUserUseCase,
        login_use_case: LoginUserUseCase,
        refresh_use_case: RefreshSessionUseCase,
        logout_use_case: LogoutUserUseCase,
        current_user_use_case: GetCurrentUserUseCase,
        url_prefix: str = "/auth",
    ) -> None:
        self._register_use_case = register_use_case
        self._login_use_case = login_use_case
        self._refresh_use_case = refresh_use_case
        self._logout_use_case = logout_use_case
        self._current_user_use_case = current_user_use_case
        self._url_prefix = url_prefix

    def register(self) -> tuple[Response, int]:
        dto = _parse_body(RegisterRequestDTO)
        user = self._register_use_case.execute(dto.email, dto.password, dto.name)
        return _json(user.to_dict(), HTTPStatus.CREATED)

    def login(self) -> tuple[Response, int]:
        dto = _parse_body(LoginRequestDTO)
        result = self._login_use_case.execute(dto.email, dto.password)
        payload = LoginResponseDTO(user=result.user.to_dict(), session_token=result.session_token)
        return _json(payload.model_dump(by_alias=True), HTTPStatus.OK)

    def refresh(self) -> tuple[Response, int]:
        result = self._refresh_use_case.execute(_token_from_header_or_body())
        payload = RefreshResponseDTO(
            session_token=result.session_token,
            expires_at=isoformat(result.expires_at),
            user=result.user.to_dict(),
        )
        return _json(payload.model_dump(by_alias=True), HTTPStatus.OK)

    def logout(self) -> tuple[Response, int]:
        session_id = self._logout_use_case.execute(_token_from_header_or_body())
        payload = LogoutResponseDTO(session_id=session_id)
        return _json(payload.model_dump(by_alias=True), HTTPStatus.OK)

    def me(self) -> tuple[Response, int]:
        token = _bearer_from_header()
        if token is None:
            logger.debug(f"auth.me: no bearer header from {request.remote_addr}")
            raise MissingAuthHeaderError()
        user = self._current_user_use_case.execute(token)
        return _json(user.to_dict(), HTTPStatus.OK)

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("auth", __name__, url_prefix=self._url_prefix)
        bp.add_url_rule("/register", view_func=self.register, methods=["POST"])
        bp.add_url_rule("/login", view_func=self.login, methods=["POST"])
        bp.add_url_rule("/refresh", view_func=self.refresh, methods=["POST"])
        bp.add_url_rule("/logout", view_func=self.logout, methods=["POST"])
        bp.add_url_rule("/me", view_func=self.me, methods=["GET"])
        return bp
