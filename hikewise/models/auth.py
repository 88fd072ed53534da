"""Account registration and login payloads."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field


class RegisterRequest(BaseModel):
    """Payload for creating an account."""

    email: Optional[str] = Field(default=None, description="Account email address")
    password: Optional[str] = Field(default=None, description="Plaintext password")
    confirm_password: Optional[str] = Field(
        default=None, description="Must repeat the password exactly"
    )


class LoginRequest(BaseModel):
    """Payload for verifying account credentials."""

    email: Optional[str] = Field(default=None, description="Account email address")
    password: Optional[str] = Field(default=None, description="Plaintext password")


class AuthResponse(BaseModel):
    """Outcome message for registration and login."""

    message: str = Field(..., description="Human-readable outcome")
