"""
Auth business logic: registration and login.
"""

from __future__ import annotations

import logging

from core.errors import InvalidCredentials
from users import repository as user_repository
from users import service as user_service
from users.validation import normalize_email

from . import schemas, security

logger = logging.getLogger(__name__)


def _token_response(tokens: security.TokenService, *, user_id: int, username: str) -> schemas.TokenResponse:
    token = tokens.issue(security.IdentityRef(id=user_id, username=username))
    return schemas.TokenResponse(message="Success", token=token)


async def register(
    payload: schemas.RegisterRequest,
    *,
    tokens: security.TokenService,
    rounds: int,
) -> schemas.TokenResponse:
    # Validation and uniqueness failures raise before a token is issued.
    user = await user_service.create_user(payload, rounds=rounds)
    logger.info("user_registered id=%s username=%s", user.id, user.username)
    return _token_response(tokens, user_id=user.id, username=user.username)


async def login(
    payload: schemas.LoginRequest,
    *,
    tokens: security.TokenService,
) -> schemas.TokenResponse:
    # A store failure propagates as StoreError (500); it is never reported
    # as bad credentials.
    user_row = await user_repository.get_user_by_email(normalize_email(payload.email))

    password_hash = str(user_row.get("password_hash") or "") if user_row is not None else ""
    if user_row is None or not security.verify_password(payload.password, password_hash):
        logger.warning("login_failed")
        raise InvalidCredentials()

    logger.info("user_logged_in id=%s", user_row["id"])
    return _token_response(tokens, user_id=int(user_row["id"]), username=str(user_row["username"]))
