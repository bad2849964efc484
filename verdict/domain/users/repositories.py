# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from datetime import datetime
from typing import Protocol

from .entities import Session, SessionWithUser, User


class UserRepository(Protocol):
    def find_by_email(self, email: str) -> User | None: ...
    def add(self, user: User) -> User: ...


class SessionRepository(Protocol):
    def add(self, session: Session) -> Session: ...
    def find_with_user(self, token: str) -> SessionWithUser | None: ...
    def rotate(self, session_id: int, token: str, expires_at: datetime) -> bool: ...
    def delete_by_token(self, token: str) -> Session | None: ...
    def delete_expired(self, now: datetime, *, exclude_token: str | None = None) -> int: ...


class PasswordHasher(Protocol):
    def hash(self, password: str) -> str: ...
    def verify(self, password: str, hashed: str) -> bool: ...


class TokenIssuer(Protocol):
    def new_token(self) -> str: ...
    def now(self) -> datetime: ...
    def expiry_from(self, moment: datetime) -> datetime: ...
