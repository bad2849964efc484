# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .api import (
    AuthApi,
    AuthApiClient,
    AuthApiError,
    AuthenticationApiError,
    ConflictApiError,
    InvalidResponseError,
    NetworkError,
    NotFoundApiError,
    ServerApiError,
    SessionRejectedError,
    ValidationApiError,
)
from .context import AuthContext
from .controller import SessionController
from .state import AuthError, AuthState, AuthStatus, LoginCredentials, RegisterCredentials, User
from .token_store import FileTokenStore, MemoryTokenStore, TokenChange, TokenStore

__all__ = [
    "AuthApi",
    "AuthApiClient",
    "AuthApiError",
    "AuthContext",
    "AuthError",
    "AuthState",
    "AuthStatus",
    "AuthenticationApiError",
    "ConflictApiError",
    "FileTokenStore",
    "InvalidResponseError",
    "LoginCredentials",
    "MemoryTokenStore",
    "NetworkError",
    "NotFoundApiError",
    "RegisterCredentials",
    "ServerApiError",
    "SessionController",
    "SessionRejectedError",
    "TokenChange",
    "TokenStore",
    "User",
    "ValidationApiError",
]
