"""
Auth security helpers: password digests and session tokens.
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Any, Callable

import bcrypt
import jwt

from core.config import Settings


# bcrypt only reads the first 72 bytes and newer releases refuse longer input.
MAX_PASSWORD_BYTES = 72


class AuthSecurityError(RuntimeError):
    pass


@dataclass(frozen=True)
class IdentityRef:
    """The identity embedded in a session token."""

    id: int
    username: str


def hash_password(plain_password: str, *, rounds: int = 8) -> str:
    password = (plain_password or "").encode("utf-8")
    if not password:
        raise AuthSecurityError("Password is empty.")
    if len(password) > MAX_PASSWORD_BYTES:
        raise AuthSecurityError("Password is longer than 72 bytes.")
    return bcrypt.hashpw(password, bcrypt.gensalt(rounds=rounds)).decode("utf-8")


def verify_password(plain_password: str, password_hash: str) -> bool:
    password = (plain_password or "").encode("utf-8")
    hashed = (password_hash or "").encode("utf-8")
    if not password or not hashed:
        return False
    try:
        return bcrypt.checkpw(password, hashed)
    except ValueError:
        return False


class TokenService:
    """
    Issues and verifies signed session tokens.

    Tokens are stateless: nothing is stored server side and there is no
    revocation, a token is good until `exp`. Expiry is checked against the
    injected clock so that `verify` is deterministic in tests.
    """

    def __init__(self, settings: Settings, *, clock: Callable[[], float] = time.time) -> None:
        if not settings.jwt_secret:
            raise AuthSecurityError("Token secret is empty.")
        self._secret = settings.jwt_secret
        self._algorithm = settings.jwt_algorithm
        self._ttl_seconds = settings.token_ttl_seconds
        self._clock = clock

    @property
    def ttl_seconds(self) -> int:
        return self._ttl_seconds

    def now_epoch_s(self) -> int:
        return int(self._clock())

    def issue(self, identity: IdentityRef) -> str:
        issued_at = self.now_epoch_s()
        payload = {
            "sub": str(identity.id),
            "username": identity.username,
            "iat": issued_at,
            "exp": issued_at + self._ttl_seconds,
        }
        return jwt.encode(payload, self._secret, algorithm=self._algorithm)

    def verify(self, token: str) -> IdentityRef:
        raw = (token or "").strip()
        if not raw:
            raise AuthSecurityError("Token is empty.")

        try:
            payload: dict[str, Any] = jwt.decode(
                raw,
                self._secret,
                algorithms=[self._algorithm],
                # exp is checked below against our own clock.
                options={"verify_exp": False, "verify_iat": False, "require": ["sub", "exp"]},
            )
        except jwt.InvalidTokenError as exc:
            raise AuthSecurityError("Invalid token.") from exc

        expires_at = payload.get("exp")
        if not isinstance(expires_at, (int, float)) or self.now_epoch_s() >= expires_at:
            raise AuthSecurityError("Token is expired.")

        subject = str(payload.get("sub") or "").strip()
        username = payload.get("username")
        if not subject.isdigit() or not isinstance(username, str):
            raise AuthSecurityError("Token payload is malformed.")

        return IdentityRef(id=int(subject), username=username)
