"""
Auth dependencies for protected FastAPI routes.

`require_identity` is the access gate: it needs a `Bearer` token in the
`Authorization` header, verifies it and stores the decoded identity on
`request.state.identity`. Every failure is the same 401.
"""

from __future__ import annotations

import logging

from fastapi import Depends, Header, Request

from core.config import Settings
from core.errors import Unauthorized

from .security import AuthSecurityError, IdentityRef, TokenService

logger = logging.getLogger(__name__)


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_token_service(request: Request) -> TokenService:
    return request.app.state.token_service


def _extract_bearer_token(authorization: str | None) -> str:
    raw = (authorization or "").strip()
    if not raw:
        logger.warning("access_denied reason=missing_authorization_header")
        raise Unauthorized()

    parts = raw.split(" ", 1)
    if len(parts) != 2:
        logger.warning("access_denied reason=malformed_authorization_header")
        raise Unauthorized()

    scheme, token = parts[0].strip().lower(), parts[1].strip()
    if scheme != "bearer" or not token:
        logger.warning("access_denied reason=not_bearer")
        raise Unauthorized()
    return token


async def get_bearer_token(authorization: str | None = Header(default=None)) -> str:
    return _extract_bearer_token(authorization)


async def require_identity(
    request: Request,
    token: str = Depends(get_bearer_token),
    tokens: TokenService = Depends(get_token_service),
) -> IdentityRef:
    try:
        identity = tokens.verify(token)
    except AuthSecurityError as exc:
        logger.warning("access_denied reason=%s", exc)
        raise Unauthorized() from exc

    request.state.identity = identity
    return identity
