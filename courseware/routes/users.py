"""
courseware/routes/users.py
User management API
"""
from fastapi import APIRouter, Depends, Path, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from courseware.database import get_db
from courseware.routes.dependencies import get_user_service
from courseware.schemas.user import (
    UserCreateRequest,
    UserUpdateRequest,
    UserResponse,
    UserListResponse,
)
from courseware.services import UserService

router = APIRouter(prefix="/users", tags=["users"])


@router.post("", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def create_user(
    payload: UserCreateRequest,
    db: AsyncSession = Depends(get_db),
    service: UserService = Depends(get_user_service)
):
    user = await service.create(db, payload.name)
    return UserResponse.model_validate(user)


@router.get("", response_model=UserListResponse)
async def list_users(
    db: AsyncSession = Depends(get_db),
    service: UserService = Depends(get_user_service)
):
    users = await service.list(db)
    return UserListResponse(users=[UserResponse.model_validate(u) for u in users])


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(
    user_id: int = Path(..., ge=1),
    db: AsyncSession = Depends(get_db),
    service: UserService = Depends(get_user_service)
):
    return UserResponse.model_validate(await service.get(db, user_id))


@router.put("/{user_id}", response_model=UserResponse)
async def update_user(
    payload: UserUpdateRequest,
    user_id: int = Path(..., ge=1),
    db: AsyncSession = Depends(get_db),
    service: UserService = Depends(get_user_service)
):
    user = await service.update(db, user_id, payload.name)
    return UserResponse.model_validate(user)


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_user(
    user_id: int = Path(..., ge=1),
    db: AsyncSession = Depends(get_db),
    service: UserService = Depends(get_user_service)
):
    """Deletes the user together with their progress and achievements."""
    await service.delete(db, user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
