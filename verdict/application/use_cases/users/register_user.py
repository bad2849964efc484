# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import re

from verdict.domain.users.entities import PublicUser, User, normalize_email
from verdict.domain.users.exceptions import (
    DuplicateEmailError,
    InvalidEmailFormatError,
    MissingFieldError,
    WeakPasswordError,
)
from verdict.domain.users.repositories import PasswordHasher, TokenIssuer, UserRepository
from verdict.shared.logging import logger

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


class RegisterUserUseCase:
    def __init__(
        self,
        *,
        users: UserRepository,
        password_hasher: PasswordHasher,
        tokens: TokenIssuer,
        min_password_length: int = 6,
    ) -> None:
        self._users = users
        self._password_hasher = password_hasher
        self._tokens = tokens
        self._min_password_length = min_password_length

    def execute(
        self, email: str | None, password: str | None, name: str | None
    ) -> PublicUser:
        email = normalize_email(email or "")
        name = (name or "").strip()
        if not email:
            raise MissingFieldError("email")
        if not password:
            raise MissingFieldError("password")
        if not name:
            raise MissingFieldError("name")

        if not EMAIL_PATTERN.match(email):
            raise InvalidEmailFormatError()
        if len(password) < self._min_password_length:
            raise WeakPasswordError(self._min_password_length)

        if self._users.find_by_email(email):
            raise DuplicateEmailError()

        now = self._tokens.now()
        hashed = self._password_hasher.hash(password)
        user = User(
            id=0,
            email=email,
            name=name,
            password_hash=hashed,
            created_at=now,
            updated_at=now,
        )
        persisted = self._users.add(user)
        logger.info(f"auth.register: created user_id={persisted.id}")
        return persisted.public()
