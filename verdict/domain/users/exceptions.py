# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from verdict.shared.errors.base import (
    AuthenticationError,
    ConflictError,
    InternalError,
    NotFoundError,
    ValidationError,
)


class MissingFieldError(ValidationError):
    def __init__(self, field: str) -> None:
        super().__init__(
            f"MISSING_{field.upper()}",
            f"{field.capitalize()} is required",
            context={"field": field},
        )


class InvalidEmailFormatError(ValidationError):
    def __init__(self) -> None:
        super().__init__("INVALID_EMAIL_FORMAT", "Invalid email format")


class WeakPasswordError(ValidationError):
    def __init__(self, min_length: int) -> None:
        super().__init__(
            "WEAK_PASSWORD",
            f"Password must be at least {min_length} characters long",
            context={"min_length": min_length},
        )


class MissingSessionTokenError(ValidationError):
    def __init__(self) -> None:
        super().__init__("MISSING_SESSION_TOKEN", "Session token is required")


class DuplicateEmailError(ConflictError):
    def __init__(self) -> None:
        super().__init__("DUPLICATE_EMAIL", "Email already registered")


class InvalidCredentialsError(AuthenticationError):
    def __init__(self) -> None:
        super().__init__("INVALID_CREDENTIALS", "Invalid credentials")


class SessionExpiredError(AuthenticationError):
    def __init__(self) -> None:
        super().__init__("SESSION_EXPIRED", "Session has expired")


class MissingAuthHeaderError(AuthenticationError):
    def __init__(self) -> None:
        super().__init__("MISSING_AUTH_HEADER", "Missing or invalid authorization header")


class MissingBearerTokenError(AuthenticationError):
    def __init__(self) -> None:
        super().__init__("MISSING_SESSION_TOKEN", "Session token is required")


class InvalidSessionError(AuthenticationError):
    def __init__(self) -> None:
        super().__init__("INVALID_SESSION", "Invalid or expired session token")


class ExpiredSessionError(AuthenticationError):
    def __init__(self) -> None:
        super().__init__("EXPIRED_SESSION", "Session has expired")


class SessionNotFoundError(NotFoundError):
    def __init__(self) -> None:
        super().__init__("SESSION_NOT_FOUND", "Session not found or already expired")


class SessionUpdateFailedError(InternalError):
    def __init__(self) -> None:
        super().__init__("SESSION_UPDATE_FAILED", "Failed to update session")
