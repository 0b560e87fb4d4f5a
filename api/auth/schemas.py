"""
Auth API schemas (request/response models).
"""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

from users.schemas import UserCandidate


class RegisterRequest(UserCandidate):
    pass


class LoginRequest(BaseModel):
    # Missing or null fields are treated as bad credentials, not as a 400.
    email: str = Field(default="", max_length=320)
    password: str = Field(default="", max_length=128)

    @field_validator("email", "password", mode="before")
    @classmethod
    def _none_as_empty(cls, value: str | None) -> str | None:
        return "" if value is None else value


class TokenResponse(BaseModel):
    message: str = "Success"
    token: str
