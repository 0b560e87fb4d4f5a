"""
Async database access helpers (raw SQL) using asyncpg.

This module owns the connection pool. FastAPI initializes it on startup and
closes it on shutdown (see `api/main.py`).

SQL parameter style:
- asyncpg uses positional placeholders: $1, $2, $3, ...

Driver failures are translated here: unique-constraint violations become
`DuplicateKeyError`, everything else becomes `errors.StoreError`.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

import asyncpg

from .errors import StoreError

logger = logging.getLogger(__name__)

_pool: asyncpg.Pool | None = None

# command_timeout surfaces as asyncio.TimeoutError.
_DRIVER_ERRORS = (asyncpg.PostgresError, asyncpg.InterfaceError, OSError, asyncio.TimeoutError)


class DuplicateKeyError(RuntimeError):
    def __init__(self, constraint: str | None) -> None:
        self.constraint = constraint or ""
        super().__init__(f"Unique constraint violated: {self.constraint or '?'}")


def sanitize_database_url(url: str) -> str:
    parts = urlsplit(url)
    if not parts.query:
        return url

    params = [(k, v) for (k, v) in parse_qsl(parts.query, keep_blank_values=True) if k != "sslmode"]
    query = urlencode(params)
    return urlunsplit((parts.scheme, parts.netloc, parts.path, query, parts.fragment))


async def init_pool(database_url: str) -> None:
    global _pool
    if _pool is not None:
        return None
    if not (database_url or "").strip():
        raise RuntimeError("Database URL is not set.")
    _pool = await asyncpg.create_pool(
        dsn=sanitize_database_url(database_url.strip()),
        min_size=1,
        max_size=5,
        command_timeout=30,
    )


async def close_pool() -> None:
    global _pool
    if _pool is None:
        return None
    await _pool.close()
    _pool = None


def pool() -> asyncpg.Pool:
    if _pool is None:
        raise StoreError("DB pool is not initialized. Call init_pool() on startup.")
    return _pool


def _record_to_dict(record: asyncpg.Record) -> dict[str, Any]:
    return dict(record)


def _translate(exc: Exception) -> Exception:
    if isinstance(exc, asyncpg.UniqueViolationError):
        return DuplicateKeyError(getattr(exc, "constraint_name", None))
    logger.exception("store_failure")
    return StoreError()


async def fetch_one(sql: str, *args: Any) -> dict[str, Any] | None:
    """
    Run a query and return a single row as a dict (or None).
    """
    try:
        row = await pool().fetchrow(sql, *args)
    except _DRIVER_ERRORS as exc:
        raise _translate(exc) from exc
    return _record_to_dict(row) if row is not None else None


async def fetch_all(sql: str, *args: Any) -> list[dict[str, Any]]:
    """
    Run a query and return all rows as a list of dicts.
    """
    try:
        rows = await pool().fetch(sql, *args)
    except _DRIVER_ERRORS as exc:
        raise _translate(exc) from exc
    return [_record_to_dict(r) for r in rows]


async def execute(sql: str, *args: Any) -> None:
    """
    Run a statement (INSERT/UPDATE/DELETE/DDL). No result returned.
    """
    try:
        await pool().execute(sql, *args)
    except _DRIVER_ERRORS as exc:
        raise _translate(exc) from exc
