# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import secrets
from collections.abc import Callable
from datetime import UTC, datetime, timedelta

from verdict.domain.users.repositories import TokenIssuer


def _utcnow() -> datetime:
    return datetime.now(UTC)


class SecureTokenIssuer(TokenIssuer):
    """Hex bearer tokens from the OS CSPRNG with a fixed lifetime."""

    def __init__(
        self,
        *,
        ttl: timedelta = timedelta(hours=24),
        token_bytes: int = 32,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._ttl = ttl
        self._token_bytes = token_bytes
        self._clock = clock

    def new_token(self) -> str:
        return secrets.token_hex(self._token_bytes)

    def now(self) -> datetime:
        return self._clock()

    def expiry_from(self, moment: datetime) -> datetime:
        return moment + self._ttl
