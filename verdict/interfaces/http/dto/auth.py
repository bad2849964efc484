from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class _LenientRequest(BaseModel):
    """Accepts any scalar for string fields; presence rules live in the use cases."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    @field_validator("*", mode="before")
    @classmethod
    def _coerce_to_str(cls, value: Any) -> str | None:
        if value is None or isinstance(value, str):
            return value
        if isinstance(value, (int, float, bool)):
            return str(value)
        return None


class RegisterRequestDTO(_LenientRequest):
    email: str | None = None
    password: str | None = None
    name: str | None = None


class LoginRequestDTO(_LenientRequest):
    email: str | None = None
    password: str | None = None


class SessionTokenRequestDTO(_LenientRequest):
    session_token: str | None = Field(None, alias="sessionToken")


class LoginResponseDTO(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    user: dict[str, Any]
    session_token: str = Field(alias="sessionToken")


class RefreshResponseDTO(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    session_token: str = Field(alias="sessionToken")
    expires_at: str = Field(alias="expiresAt")
    user: dict[str, Any]


class LogoutResponseDTO(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    message: str = "Successfully logged out"
    session_id: int = Field(alias="sessionId")
