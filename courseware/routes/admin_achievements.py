"""
courseware/routes/admin_achievements.py
Achievement catalog management API

`type` and `target` can only be chosen at creation. PUT accepts name,
description and courseId; any other field fails validation.
"""
from fastapi import APIRouter, Depends, Path, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from courseware.database import get_db
from courseware.routes.dependencies import get_admin_achievement_service
from courseware.schemas.achievement import (
    AchievementCreateRequest,
    AchievementUpdateRequest,
    AchievementResponse,
    AchievementListResponse,
)
from courseware.services import AdminAchievementService

router = APIRouter(prefix="/admin/achievements", tags=["admin"])


@router.post("", response_model=AchievementResponse, status_code=status.HTTP_201_CREATED)
async def create_achievement(
    payload: AchievementCreateRequest,
    db: AsyncSession = Depends(get_db),
    service: AdminAchievementService = Depends(get_admin_achievement_service)
):
    achievement = await service.create(
        db,
        name=payload.name,
        description=payload.description,
        type=payload.type,
        target=payload.target,
        course_id=payload.course_id
    )
    return AchievementResponse.model_validate(achievement)


@router.get("", response_model=AchievementListResponse)
async def list_achievements(
    db: AsyncSession = Depends(get_db),
    service: AdminAchievementService = Depends(get_admin_achievement_service)
):
    achievements = await service.list(db)
    return AchievementListResponse(
        achievements=[AchievementResponse.model_validate(a) for a in achievements]
    )


@router.get("/{achievement_id}", response_model=AchievementResponse)
async def get_achievement(
    achievement_id: int = Path(..., ge=1),
    db: AsyncSession = Depends(get_db),
    service: AdminAchievementService = Depends(get_admin_achievement_service)
):
    return AchievementResponse.model_validate(await service.get(db, achievement_id))


@router.put("/{achievement_id}", response_model=AchievementResponse)
async def update_achievement(
    payload: AchievementUpdateRequest,
    achievement_id: int = Path(..., ge=1),
    db: AsyncSession = Depends(get_db),
    service: AdminAchievementService = Depends(get_admin_achievement_service)
):
    achievement = await service.update(
        db,
        achievement_id,
        name=payload.name,
        description=payload.description,
        course_id=payload.course_id
    )
    return AchievementResponse.model_validate(achievement)


@router.delete("/{achievement_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_achievement(
    achievement_id: int = Path(..., ge=1),
    db: AsyncSession = Depends(get_db),
    service: AdminAchievementService = Depends(get_admin_achievement_service)
):
    await service.delete(db, achievement_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
