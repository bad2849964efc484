# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .users.entities import PublicUser, Session, SessionWithUser, User, normalize_email

__all__ = [
    "PublicUser",
    "Session",
    "SessionWithUser",
    "User",
    "normalize_email",
]
