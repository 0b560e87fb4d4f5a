"""
User persistence (raw SQL).

Only `get_user_by_email` returns the password digest; every other query
selects the public columns.
"""

from __future__ import annotations

from core import db
from core.errors import ValidationFailed

PUBLIC_COLUMNS = "id, username, email, created_at, updated_at"
UPDATABLE_COLUMNS = ("username", "email", "password_hash")


async def ensure_schema() -> None:
    await db.execute(
        """
        CREATE TABLE IF NOT EXISTS users (
            id BIGSERIAL PRIMARY KEY,
            username TEXT NOT NULL UNIQUE,
            email TEXT NOT NULL UNIQUE,
            password_hash TEXT NOT NULL,
            created_at TIMESTAMPTZ NOT NULL DEFAULT now(),
            updated_at TIMESTAMPTZ NOT NULL DEFAULT now()
        )
        """
    )


def duplicate_key_failure(exc: db.DuplicateKeyError) -> ValidationFailed:
    constraint = exc.constraint.lower()
    if "username" in constraint:
        field = "username"
    elif "email" in constraint:
        field = "email"
    else:
        field = "user"
    return ValidationFailed({field: f"{field} is already taken"}, "User validation failed")


async def create_user(*, username: str, email: str, password_hash: str) -> dict:
    try:
        row = await db.fetch_one(
            f"""
            INSERT INTO users (username, email, password_hash)
            VALUES ($1, $2, $3)
            RETURNING {PUBLIC_COLUMNS}
            """,
            username,
            email,
            password_hash,
        )
    except db.DuplicateKeyError as exc:
        raise duplicate_key_failure(exc) from exc
    if row is None:
        raise RuntimeError("Failed to create user.")
    return row


async def list_users() -> list[dict]:
    return await db.fetch_all(
        f"""
        SELECT {PUBLIC_COLUMNS}
        FROM users
        ORDER BY id
        """
    )


async def get_user_by_id(user_id: int) -> dict | None:
    return await db.fetch_one(
        f"""
        SELECT {PUBLIC_COLUMNS}
        FROM users
        WHERE id = $1
        """,
        user_id,
    )


async def get_user_by_email(email: str) -> dict | None:
    return await db.fetch_one(
        """
        SELECT id, username, email, password_hash
        FROM users
        WHERE email = $1
        """,
        email,
    )


async def update_user(user_id: int, fields: dict) -> dict | None:
    columns = [name for name in UPDATABLE_COLUMNS if name in fields]
    if not columns:
        return await get_user_by_id(user_id)

    assignments = ", ".join(f"{name} = ${index}" for index, name in enumerate(columns, start=2))
    try:
        return await db.fetch_one(
            f"""
            UPDATE users
            SET {assignments}, updated_at = now()
            WHERE id = $1
            RETURNING {PUBLIC_COLUMNS}
            """,
            user_id,
            *(fields[name] for name in columns),
        )
    except db.DuplicateKeyError as exc:
        raise duplicate_key_failure(exc) from exc


async def delete_user(user_id: int) -> bool:
    row = await db.fetch_one(
        """
        DELETE FROM users
        WHERE id = $1
        RETURNING id
        """,
        user_id,
    )
    return row is not None
