# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from verdict.domain.users.entities import PublicUser
from verdict.domain.users.exceptions import (
    ExpiredSessionError,
    InvalidSessionError,
    MissingBearerTokenError,
)
from verdict.domain.users.repositories import SessionRepository, TokenIssuer
from verdict.shared.logging import logger


class GetCurrentUserUseCase:
    def __init__(self, *, sessions: SessionRepository, tokens: TokenIssuer) -> None:
        self._sessions = sessions
        self._tokens = tokens

    def execute(self, token: str | None) -> PublicUser:
        if not token:
            raise MissingBearerTokenError()

        # the presented session is checked explicitly below so its caller learns it expired
        self._sessions.delete_expired(self._tokens.now(), exclude_token=token)

        found = self._sessions.find_with_user(token)
        if found is None:
            raise InvalidSessionError()

        if found.session.is_expired(self._tokens.now()):
            self._sessions.delete_by_token(token)
            logger.info(f"auth.me: expired session_id={found.session.id} removed")
            raise ExpiredSessionError()

        return found.user
