"""
User management business logic.
"""

from __future__ import annotations

import logging

from core.errors import NotFound

from . import repository, schemas, validation

logger = logging.getLogger(__name__)


def _to_user_response(user_row: dict) -> schemas.UserResponse:
    return schemas.UserResponse(
        id=int(user_row["id"]),
        username=str(user_row["username"]),
        email=str(user_row["email"]),
        created_at=user_row.get("created_at"),
        updated_at=user_row.get("updated_at"),
    )


def _parse_user_id(raw_id: str | int) -> int:
    text = str(raw_id).strip()
    if not text.isdigit():
        # Not an identifier we could ever have assigned.
        raise NotFound("User not found.")
    return int(text)


async def create_user(candidate: schemas.UserCandidate, *, rounds: int) -> schemas.UserResponse:
    fields = validation.prepare_credentials(candidate, creating=True, rounds=rounds)
    user_row = await repository.create_user(
        username=fields["username"],
        email=fields["email"],
        password_hash=fields["password_hash"],
    )
    logger.info("user_created id=%s username=%s", user_row["id"], user_row["username"])
    return _to_user_response(user_row)


async def list_users() -> list[schemas.UserResponse]:
    rows = await repository.list_users()
    return [_to_user_response(row) for row in rows]


async def get_user(raw_id: str | int) -> schemas.UserResponse:
    user_row = await repository.get_user_by_id(_parse_user_id(raw_id))
    if user_row is None:
        raise NotFound("User not found.")
    return _to_user_response(user_row)


async def update_user(
    raw_id: str | int,
    candidate: schemas.UserCandidate,
    *,
    rounds: int,
) -> schemas.UserResponse:
    user_id = _parse_user_id(raw_id)
    fields = validation.prepare_credentials(candidate, creating=False, rounds=rounds)
    user_row = await repository.update_user(user_id, fields)
    if user_row is None:
        raise NotFound("User not found.")
    logger.info("user_updated id=%s fields=%s", user_id, ",".join(sorted(fields)))
    return _to_user_response(user_row)


async def delete_user(raw_id: str | int) -> None:
    user_id = _parse_user_id(raw_id)
    if not await repository.delete_user(user_id):
        raise NotFound("User not found.")
    logger.info("user_deleted id=%s", user_id)
