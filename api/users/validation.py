"""
Pre-persistence checks for user records.

Raw passwords only exist on the incoming candidate; this step turns them
into a bcrypt digest (or a validation failure) before anything is written.
"""

from __future__ import annotations

from auth import security
from core.errors import ValidationFailed

from .schemas import UserCandidate


def normalize_email(email: str | None) -> str:
    return (email or "").strip().lower()


def normalize_username(username: str | None) -> str:
    return (username or "").strip()


def prepare_credentials(candidate: UserCandidate, *, creating: bool, rounds: int = 8) -> dict:
    """
    Return the column values to write for `candidate`.

    On creation username, email and password are required. Whenever a
    password is supplied it must equal `passwordConfirmation`, and the
    digest is derived from it. On update, omitted fields are left alone.
    """
    errors: dict[str, str] = {}
    fields: dict[str, str] = {}

    if creating or candidate.username is not None:
        username = normalize_username(candidate.username)
        if not username:
            errors["username"] = "A username is required"
        fields["username"] = username

    if creating or candidate.email is not None:
        email = normalize_email(candidate.email)
        if not email:
            errors["email"] = "An email is required"
        fields["email"] = email

    password = candidate.password
    if password is None or password == "":
        if creating:
            errors["password"] = "A password is required"
        elif password == "":
            errors["password"] = "Password cannot be empty"
    elif len(password.encode("utf-8")) > security.MAX_PASSWORD_BYTES:
        errors["password"] = f"Password cannot be longer than {security.MAX_PASSWORD_BYTES} bytes"
    elif password != candidate.password_confirmation:
        errors["passwordConfirmation"] = "Passwords do not match"

    if errors:
        raise ValidationFailed(errors, "User validation failed")

    if password:
        fields["password_hash"] = security.hash_password(password, rounds=rounds)
    return fields
