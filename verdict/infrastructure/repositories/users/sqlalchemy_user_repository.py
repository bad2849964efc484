# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime

from sqlalchemy import delete, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload

from verdict.domain.users.entities import Session as DomainSession
from verdict.domain.users.entities import SessionWithUser
from verdict.domain.users.entities import User as DomainUser
from verdict.domain.users.exceptions import DuplicateEmailError
from verdict.domain.users.repositories import SessionRepository, UserRepository
from verdict.infrastructure.db.models import SessionToken, User
from verdict.infrastructure.unit_of_work import unit_of_work_scope


def _to_domain_user(row: User) -> DomainUser:
    return DomainUser(
        id=row.id,
        email=row.email,
        name=row.name,
        password_hash=row.password_hash,
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


def _to_domain_session(row: SessionToken) -> DomainSession:
    return DomainSession(
        id=row.id,
        user_id=row.user_id,
        token=row.token,
        expires_at=row.expires_at,
        created_at=row.created_at,
    )


class SqlAlchemyUserRepository(UserRepository):
    def __init__(self, session_factory: Callable[[], Session]):
        self._session_factory = session_factory

    def find_by_email(self, email: str) -> DomainUser | None:
        with unit_of_work_scope(self._session_factory) as session:
            row = session.scalars(select(User).where(User.email == email)).first()
            return _to_domain_user(row) if row else None

    def add(self, user: DomainUser) -> DomainUser:
        try:
            with unit_of_work_scope(self._session_factory) as session:
                row = User(
                    email=user.email,
                    name=user.name,
                    password_hash=user.password_hash,
                    created_at=user.created_at,
                    updated_at=user.updated_at,
                )
                session.add(row)
                session.flush()
                return _to_domain_user(row)
        except IntegrityError as exc:
            raise DuplicateEmailError() from exc


class SqlAlchemySessionRepository(SessionRepository):
    def __init__(self, session_factory: Callable[[], Session]):
        self._session_factory = session_factory

    def add(self, session_token: DomainSession) -> DomainSession:
        with unit_of_work_scope(self._session_factory) as session:
            row = SessionToken(
                user_id=session_token.user_id,
                token=session_token.token,
                expires_at=session_token.expires_at,
                created_at=session_token.created_at,
            )
            session.add(row)
            session.flush()
            return _to_domain_session(row)

    def find_with_user(self, token: str) -> SessionWithUser | None:
        with unit_of_work_scope(self._session_factory) as session:
            row = session.scalars(
                select(SessionToken)
                .options(joinedload(SessionToken.user))
                .where(SessionToken.token == token)
            ).first()
            if row is None or row.user is None:
                return None
            return SessionWithUser(
                session=_to_domain_session(row),
                user=_to_domain_user(row.user).public(),
            )

    def rotate(self, session_id: int, token: str, expires_at: datetime) -> bool:
        with unit_of_work_scope(self._session_factory) as session:
            result = session.execute(
                update(SessionToken)
                .where(SessionToken.id == session_id)
                .values(token=token, expires_at=expires_at)
            )
            return result.rowcount == 1

    def delete_by_token(self, token: str) -> DomainSession | None:
        with unit_of_work_scope(self._session_factory) as session:
            row = session.scalars(
                select(SessionToken).where(SessionToken.token == token)
            ).first()
            if row is None:
                return None
            deleted = _to_domain_session(row)
            session.delete(row)
            return deleted

    def delete_expired(self, now: datetime, *, exclude_token: str | None = None) -> int:
        with unit_of_work_scope(self._session_factory) as session:
            stmt = delete(SessionToken).where(SessionToken.expires_at <= now)
            if exclude_token:
                stmt = stmt.where(SessionToken.token != exclude_token)
            result = session.execute(stmt)
            return result.rowcount or 0
