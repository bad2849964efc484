# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from datetime import timedelta
from functools import cached_property

from verdict.application.services.password_hashing import WerkzeugPasswordHasher
from verdict.application.services.session_tokens import SecureTokenIssuer
from verdict.application.use_cases.users.get_current_user import GetCurrentUserUseCase
from verdict.application.use_cases.users.login_user import LoginUserUseCase
from verdict.application.use_cases.users.logout_user import LogoutUserUseCase
from verdict.application.use_cases.users.refresh_session import RefreshSessionUseCase
from verdict.application.use_cases.users.register_user import RegisterUserUseCase
from verdict.infrastructure.db import SessionLocal
from verdict.infrastructure.repositories.users.sqlalchemy_user_repository import (
    SqlAlchemySessionRepository,
    SqlAlchemyUserRepository,
)
from verdict.interfaces.http.controllers.auth_controller import AuthController
from verdict.shared.config import AppConfig, load_config


class Container:
    def __init__(self, config: AppConfig | None = None) -> None:
        self._config = config or load_config()

    @cached_property
    def password_hasher(self) -> WerkzeugPasswordHasher:
        return WerkzeugPasswordHasher(method=self._config.session.password_hash_method)

    @cached_property
    def token_issuer(self) -> SecureTokenIssuer:
        return SecureTokenIssuer(
            ttl=timedelta(hours=self._config.session.ttl_hours),
            token_bytes=self._config.session.token_bytes,
        )

    @cached_property
    def user_repository(self) -> SqlAlchemyUserRepository:
        return SqlAlchemyUserRepository(SessionLocal)

    @cached_property
    def session_repository(self) -> SqlAlchemySessionRepository:
        return SqlAlchemySessionRepository(SessionLocal)

    @cached_property
    def register_user_use_case(self) -> RegisterUserUseCase:
        return RegisterUserUseCase(
            users=self.user_repository,
            password_hasher=self.password_hasher,
            tokens=self.token_issuer,
            min_password_length=self._config.session.min_password_length,
        )

    @cached_property
    def login_user_use_case(self) -> LoginUserUseCase:
        return LoginUserUseCase(
            users=self.user_repository,
            sessions=self.session_repository,
            password_hasher=self.password_hasher,
            tokens=self.token_issuer,
        )

    @cached_property
    def refresh_session_use_case(self) -> RefreshSessionUseCase:
        return RefreshSessionUseCase(sessions=self.session_repository, tokens=self.token_issuer)

    @cached_property
    def logout_user_use_case(self) -> LogoutUserUseCase:
        return LogoutUserUseCase(sessions=self.session_repository, tokens=self.token_issuer)

    @cached_property
    def get_current_user_use_case(self) -> GetCurrentUserUseCase:
        return GetCurrentUserUseCase(sessions=self.session_repository, tokens=self.token_issuer)

    @cached_property
    def auth_controller(self) -> AuthController:
        return AuthController(
            register_use_case=self.register_user_use_case,
            login_use_case=self.login_user_use_case,
            refresh_use_case=self.refresh_session_use_case,
            logout_use_case=self.logout_user_use_case,
            current_user_use_case=self.get_current_user_use_case,
            url_prefix=self._config.session.url_prefix,
        )


container = Container()
