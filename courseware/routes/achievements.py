"""
courseware/routes/achievements.py
Learner achievement read-out
"""
from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from courseware.database import get_db
from courseware.routes.dependencies import get_achievement_service
from courseware.schemas.achievement import UserAchievementListResponse, UserAchievementResponse
from courseware.services import AchievementService

router = APIRouter(prefix="/achievements", tags=["achievements"])


@router.get("", response_model=UserAchievementListResponse)
async def get_user_achievements(
    user_id: int = Query(..., alias="userId", ge=1),
    db: AsyncSession = Depends(get_db),
    service: AchievementService = Depends(get_achievement_service)
):
    rows = await service.get_user_achievements(db, user_id)
    return UserAchievementListResponse(
        achievements=[UserAchievementResponse(**row) for row in rows]
    )
