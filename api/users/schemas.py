"""
Pydantic schemas for user endpoints.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class UserCandidate(BaseModel):
    """
    Incoming user record for registration, creation and update.

    Every field is optional here; which ones are required is decided by
    `users.validation` so that all failures are reported together with the
    same 400 shape. Unknown keys (e.g. a client-supplied `passwordHash`) are
    dropped.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    username: str | None = Field(default=None, max_length=64)
    email: str | None = Field(default=None, max_length=320)
    password: str | None = Field(default=None, max_length=128)
    password_confirmation: str | None = Field(
        default=None,
        alias="passwordConfirmation",
        max_length=128,
    )


class UserResponse(BaseModel):
    id: int
    username: str
    email: str
    created_at: datetime | None = None
    updated_at: datetime | None = None
