# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from verdict.domain.users.entities import PublicUser, Session, normalize_email
from verdict.domain.users.exceptions import InvalidCredentialsError, MissingFieldError
from verdict.domain.users.repositories import (
    PasswordHasher,
    SessionRepository,
    TokenIssuer,
    UserRepository,
)
from verdict.shared.logging import logger


@dataclass(slots=True, frozen=True)
class LoginResult:
    user: PublicUser
    session_token: str
    expires_at: datetime


class LoginUserUseCase:
    def __init__(
        self,
        *,
        users: UserRepository,
        sessions: SessionRepository,
        password_hasher: PasswordHasher,
        tokens: TokenIssuer,
    ) -> None:
        self._users = users
        self._sessions = sessions
        self._password_hasher = password_hasher
        self._tokens = tokens

    def execute(self, email: str | None, password: str | None) -> LoginResult:
        if not email or not email.strip():
            raise MissingFieldError("email")
        if not password:
            raise MissingFieldError("password")

        user = self._users.find_by_email(normalize_email(email))
        password_valid = user is not None and self._password_hasher.verify(
            password, user.password_hash
        )

        if not password_valid:
            logger.warning("auth.login: invalid credentials")
            raise InvalidCredentialsError()

        now = self._tokens.now()
        session = self._sessions.add(
            Session(
                id=0,
                user_id=user.id,
                token=self._tokens.new_token(),
                expires_at=self._tokens.expiry_from(now),
                created_at=now,
            )
        )
        logger.info(
            f"auth.login: ok user_id={user.id} session_id={session.id} "
            f"exp={session.expires_at.isoformat()}"
        )
        return LoginResult(
            user=user.public(),
            session_token=session.token,
            expires_at=session.expires_at,
        )
