# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Any


class AuthStatus(StrEnum):
    LOADING = "loading"
    AUTHENTICATED = "authenticated"
    UNAUTHENTICATED = "unauthenticated"


@dataclass(slots=True, frozen=True)
class User:
    id: int
    email: str
    name: str
    created_at: str
    updated_at: str

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> User:
        return cls(
            id=int(data["id"]),
            email=str(data["email"]),
            name=str(data["name"]),
            created_at=str(data.get("createdAt", "")),
            updated_at=str(data.get("updatedAt", "")),
        )


@dataclass(slots=True, frozen=True)
class AuthError:
    message: str
    code: str | None = None


@dataclass(slots=True, frozen=True)
class AuthState:
    status: AuthStatus = AuthStatus.LOADING
    user: User | None = None
    error: AuthError | None = None


@dataclass(slots=True, frozen=True)
class LoginCredentials:
    email: str
    password: str


@dataclass(slots=True, frozen=True)
class RegisterCredentials:
    name: str
    email: str
    password: str

    def as_login(self) -> LoginCredentials:
        return LoginCredentials(email=self.email, password=self.password)
