# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from verdict.domain.users.entities import PublicUser
from verdict.domain.users.exceptions import (
    MissingSessionTokenError,
    SessionExpiredError,
    SessionNotFoundError,
    SessionUpdateFailedError,
)
from verdict.domain.users.repositories import SessionRepository, TokenIssuer
from verdict.shared.logging import logger


@dataclass(slots=True, frozen=True)
class RefreshResult:
    session_token: str
    expires_at: datetime
    user: PublicUser


class RefreshSessionUseCase:
    """Rotates a live session's token and expiry in place."""

    def __init__(self, *, sessions: SessionRepository, tokens: TokenIssuer) -> None:
        self._sessions = sessions
        self._tokens = tokens

    def execute(self, token: str | None) -> RefreshResult:
        token = (token or "").strip()
        if not token:
            raise MissingSessionTokenError()

        found = self._sessions.find_with_user(token)
        if found is None:
            raise SessionNotFoundError()

        now = self._tokens.now()
        if found.session.is_expired(now):
            logger.info(f"auth.refresh: rejected expired session_id={found.session.id}")
            raise SessionExpiredError()

        new_token = self._tokens.new_token()
        expires_at = self._tokens.expiry_from(now)
        if not self._sessions.rotate(found.session.id, new_token, expires_at):
            raise SessionUpdateFailedError()

        logger.info(
            f"auth.refresh: rotated session_id={found.session.id} exp={expires_at.isoformat()}"
        )
        return RefreshResult(session_token=new_token, expires_at=expires_at, user=found.user)
