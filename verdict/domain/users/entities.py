# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any


def normalize_email(email: str) -> str:
    return email.strip().lower()


def isoformat(value: datetime) -> str:
    return value.isoformat().replace("+00:00", "Z")


@dataclass(slots=True, frozen=True)
class PublicUser:
    """User as seen by every caller: never carries the password hash."""

    id: int
    email: str
    name: str
    created_at: datetime
    updated_at: datetime

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "email": self.email,
            "name": self.name,
            "createdAt": isoformat(self.created_at),
            "updatedAt": isoformat(self.updated_at),
        }


@dataclass(slots=True, frozen=True)
class User:

    id: int
    email: str
    name: str
    password_hash: str
    created_at: datetime
    updated_at: datetime

    def public(self) -> PublicUser:
        return PublicUser(
            id=self.id,
            email=self.email,
            name=self.name,
            created_at=self.created_at,
            updated_at=self.updated_at,
        )


@dataclass(slots=True, frozen=True)
class Session:

    id: int
    user_id: int
    token: str
    expires_at: datetime
    created_at: datetime

    def is_expired(self, now: datetime) -> bool:
        return self.expires_at <= now


@dataclass(slots=True, frozen=True)
class SessionWithUser:

    session: Session
    user: PublicUser
