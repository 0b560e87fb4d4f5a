"""
Shared pytest fixtures.

The asyncpg-backed user repository is swapped for an in-memory store with
the same uniqueness rules, so the API can be exercised with TestClient
without a database. The app lifespan (pool + schema) is not run.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

import pytest
from fastapi.testclient import TestClient

from core import db
from core.config import Settings
from main import create_app
from users import repository


PUBLIC_FIELDS = ("id", "username", "email", "created_at", "updated_at")


@dataclass
class FakeUserStore:
    """In-memory stand-in for users.repository."""

    rows: Dict[int, Dict[str, Any]] = field(default_factory=dict)
    next_id: int = 1
    calls: List[str] = field(default_factory=list)

    @staticmethod
    def _public(row: Dict[str, Any]) -> Dict[str, Any]:
        return {name: row[name] for name in PUBLIC_FIELDS}

    def _check_unique(self, fields: Dict[str, Any], *, exclude_id: Optional[int] = None) -> None:
        for row in self.rows.values():
            if row["id"] == exclude_id:
                continue
            for column in ("username", "email"):
                if column in fields and row[column] == fields[column]:
                    raise repository.duplicate_key_failure(db.DuplicateKeyError(f"users_{column}_key"))

    async def ensure_schema(self) -> None:
        self.calls.append("ensure_schema")

    async def create_user(self, *, username: str, email: str, password_hash: str) -> Dict[str, Any]:
        self.calls.append("create_user")
        self._check_unique({"username": username, "email": email})
        now = datetime.now(timezone.utc)
        row = {
            "id": self.next_id,
            "username": username,
            "email": email,
            "password_hash": password_hash,
            "created_at": now,
            "updated_at": now,
        }
        self.rows[self.next_id] = row
        self.next_id += 1
        return self._public(row)

    async def list_users(self) -> List[Dict[str, Any]]:
        self.calls.append("list_users")
        return [self._public(row) for _, row in sorted(self.rows.items())]

    async def get_user_by_id(self, user_id: int) -> Optional[Dict[str, Any]]:
        self.calls.append("get_user_by_id")
        row = self.rows.get(user_id)
        return self._public(row) if row is not None else None

    async def get_user_by_email(self, email: str) -> Optional[Dict[str, Any]]:
        self.calls.append("get_user_by_email")
        for row in self.rows.values():
            if row["email"] == email:
                return {name: row[name] for name in ("id", "username", "email", "password_hash")}
        return None

    async def update_user(self, user_id: int, fields: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        self.calls.append("update_user")
        row = self.rows.get(user_id)
        if row is None:
            return None
        self._check_unique(fields, exclude_id=user_id)
        row.update({k: v for k, v in fields.items() if k in repository.UPDATABLE_COLUMNS})
        row["updated_at"] = datetime.now(timezone.utc)
        return self._public(row)

    async def delete_user(self, user_id: int) -> bool:
        self.calls.append("delete_user")
        return self.rows.pop(user_id, None) is not None


@pytest.fixture
def settings() -> Settings:
    # Minimum bcrypt cost keeps the suite fast.
    return Settings(environment="test", jwt_secret="test-secret", bcrypt_rounds=4)


@pytest.fixture
def user_store(monkeypatch) -> FakeUserStore:
    store = FakeUserStore()
    for name in (
        "ensure_schema",
        "create_user",
        "list_users",
        "get_user_by_id",
        "get_user_by_email",
        "update_user",
        "delete_user",
    ):
        monkeypatch.setattr(repository, name, getattr(store, name))
    return store


@pytest.fixture
def app(settings, user_store):
    return create_app(settings)


@pytest.fixture
def client(app) -> TestClient:
    return TestClient(app)


@pytest.fixture
def register(client):
    """Register a user and return the response; keyword args override the body."""

    def _register(**overrides):
        body = {
            "username": "chansec",
            "email": "chanse@chanse.com",
            "password": "password",
            "passwordConfirmation": "password",
        }
        body.update(overrides)
        return client.post("/api/register", json=body)

    return _register


@pytest.fixture
def auth_headers(register):
    response = register()
    assert response.status_code == 200
    return {"Authorization": f"Bearer {response.json()['token']}"}
