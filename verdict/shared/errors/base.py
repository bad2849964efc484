# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from http import HTTPStatus
from typing import Any, ClassVar


@dataclass(slots=True)
class AppError(Exception):
    code: str
    status: HTTPStatus
    message: str
    context: Mapping[str, Any] | None = None

    def __post_init__(self) -> None:
        Exception.__init__(self, self.code)

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"error": self.message, "code": self.code}
        if self.context:
            payload["context"] = dict(self.context)
        return payload


class _TaggedError(AppError):
    """Base for the closed set of error kinds; each fixes its own HTTP status."""

    default_status: ClassVar[HTTPStatus]

    def __init__(
        self,
        code: str,
        message: str,
        *,
        context: Mapping[str, Any] | None = None,
    ) -> None:
        super().__init__(
            code=code,
            status=self.default_status,
            message=message,
            context=context,
        )


class ValidationError(_TaggedError):
    default_status = HTTPStatus.BAD_REQUEST


class AuthenticationError(_TaggedError):
    default_status = HTTPStatus.UNAUTHORIZED


class NotFoundError(_TaggedError):
    default_status = HTTPStatus.NOT_FOUND


class ConflictError(_TaggedError):
    default_status = HTTPStatus.CONFLICT


class InternalError(_TaggedError):
    default_status = HTTPStatus.INTERNAL_SERVER_ERROR

    def __init__(
        self,
        code: str = "INTERNAL_ERROR",
        message: str = "Internal server error",
        *,
        context: Mapping[str, Any] | None = None,
    ) -> None:
        super().__init__(code, message, context=context)


__all__ = [
    "AppError",
    "AuthenticationError",
    "ConflictError",
    "InternalError",
    "NotFoundError",
    "ValidationError",
]
