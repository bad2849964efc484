"""Use-case for revoking session tokens."""

from __future__ import annotations

from verdict.domain.users.exceptions import MissingSessionTokenError, SessionNotFoundError
from verdict.domain.users.repositories import SessionRepository, TokenIssuer
from verdict.shared.logging import logger


class LogoutUserUseCase:
    def __init__(self, *, sessions: SessionRepository, tokens: TokenIssuer) -> None:
        self._sessions = sessions
        self._tokens = tokens

    def execute(self, token: str | None) -> int:
        token = (token or "").strip()
        if not token:
            raise MissingSessionTokenError()

        swept = self._sessions.delete_expired(self._tokens.now())
        if swept:
            logger.debug(f"auth.logout: swept {swept} expired sessions")

        deleted = self._sessions.delete_by_token(token)
        if deleted is None:
            raise SessionNotFoundError()

        logger.info(f"auth.logout: ok session_id={deleted.id} user_id={deleted.user_id}")
        return deleted.id
