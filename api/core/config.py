"""
Process settings, read from the environment once at startup.

The resulting `Settings` object is passed explicitly to whatever needs it
(token service, DB pool, CORS, logging).
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Mapping

DEFAULT_DATABASE_URLS = {
    "test": "postgresql://localhost/auth_api_test",
    "development": "postgresql://localhost/auth_api",
    "production": "postgresql://localhost/auth_api",
}


def _env_str(environ: Mapping[str, str], name: str, default: str) -> str:
    return (environ.get(name) or "").strip() or default


def _env_int(environ: Mapping[str, str], name: str, default: int) -> int:
    raw = (environ.get(name) or "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _split_origins(raw: str) -> tuple[str, ...]:
    origins = tuple(item.strip() for item in raw.split(",") if item.strip())
    return origins or ("*",)


@dataclass(frozen=True)
class Settings:
    environment: str = "development"
    database_url: str = DEFAULT_DATABASE_URLS["development"]
    jwt_secret: str = "dev-change-this-secret"
    jwt_algorithm: str = "HS256"
    token_ttl_seconds: int = 60 * 60 * 24
    bcrypt_rounds: int = 8
    host: str = "0.0.0.0"
    port: int = 3000
    cors_origins: tuple[str, ...] = field(default=("*",))
    log_level: str = "INFO"

    @property
    def is_test(self) -> bool:
        return self.environment == "test"

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "Settings":
        environ = os.environ if environ is None else environ

        environment = _env_str(environ, "APP_ENV", "development").lower()
        default_url = DEFAULT_DATABASE_URLS.get(environment, DEFAULT_DATABASE_URLS["development"])
        rounds = _env_int(environ, "BCRYPT_ROUNDS", 8)

        return cls(
            environment=environment,
            database_url=_env_str(environ, "DATABASE_URL", default_url),
            # In production, set JWT_SECRET in environment.
            jwt_secret=_env_str(environ, "JWT_SECRET", "dev-change-this-secret"),
            jwt_algorithm=_env_str(environ, "JWT_ALG", "HS256"),
            token_ttl_seconds=_env_int(environ, "TOKEN_TTL_SECONDS", 60 * 60 * 24),
            bcrypt_rounds=max(4, min(rounds, 31)),
            host=_env_str(environ, "HOST", "0.0.0.0"),
            port=_env_int(environ, "PORT", 3000),
            cors_origins=_split_origins(_env_str(environ, "CORS_ORIGINS", "*")),
            log_level=_env_str(environ, "LOG_LEVEL", "INFO").upper(),
        )
