"""
User-management API endpoints. Every route sits behind the access gate.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Response, status

from auth import dependencies as auth_dependencies
from core.config import Settings

from . import schemas, service

router = APIRouter(
    prefix="/users",
    dependencies=[Depends(auth_dependencies.require_identity)],
)


@router.get("", response_model=list[schemas.UserResponse])
async def list_users() -> list[schemas.UserResponse]:
    return await service.list_users()


@router.post("", response_model=schemas.UserResponse, status_code=status.HTTP_201_CREATED)
async def create_user(
    candidate: schemas.UserCandidate,
    settings: Settings = Depends(auth_dependencies.get_settings),
) -> schemas.UserResponse:
    return await service.create_user(candidate, rounds=settings.bcrypt_rounds)


@router.get("/{user_id}", response_model=schemas.UserResponse)
async def get_user(user_id: str) -> schemas.UserResponse:
    return await service.get_user(user_id)


@router.api_route("/{user_id}", methods=["PUT", "PATCH"], response_model=schemas.UserResponse)
async def update_user(
    user_id: str,
    candidate: schemas.UserCandidate,
    settings: Settings = Depends(auth_dependencies.get_settings),
) -> schemas.UserResponse:
    return await service.update_user(user_id, candidate, rounds=settings.bcrypt_rounds)


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_user(user_id: str) -> Response:
    await service.delete_user(user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
