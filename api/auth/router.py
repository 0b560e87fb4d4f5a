"""
Auth API endpoints. These are the only routes reachable without a token.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from core.config import Settings

from . import dependencies, schemas, service
from .security import TokenService

router = APIRouter()


@router.post("/register", response_model=schemas.TokenResponse)
async def register(
    payload: schemas.RegisterRequest,
    settings: Settings = Depends(dependencies.get_settings),
    tokens: TokenService = Depends(dependencies.get_token_service),
) -> schemas.TokenResponse:
    return await service.register(payload, tokens=tokens, rounds=settings.bcrypt_rounds)


@router.post("/login", response_model=schemas.TokenResponse)
async def login(
    payload: schemas.LoginRequest,
    tokens: TokenService = Depends(dependencies.get_token_service),
) -> schemas.TokenResponse:
    return await service.login(payload, tokens=tokens)
