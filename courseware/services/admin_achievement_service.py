"""
courseware/services/admin_achievement_service.py
Achievement catalog management

Business rules:
- only specific_course_completed achievements carry a course id
- specific_course_completed always has target 1 and a course id
- type and target are fixed at creation (the update schema does not accept them)
"""
import logging
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from courseware.errors import BadRequestError, NotFoundError, ErrorCode
from courseware.orm.achievement import Achievement, ObjectiveType, COURSE_SCOPED_TYPES
from courseware.services.course_service import CourseService

logger = logging.getLogger(__name__)

COURSE_ID_NOT_ALLOWED = "Course ID can only be set for course completion achievements"
TARGET_MUST_BE_ONE = "Target must be 1 for course completion achievements"
COURSE_ID_REQUIRED = "Course ID is required for course completion achievements"


class AdminAchievementService:

    def __init__(self, course_service: CourseService):
        self.course_service = course_service

    def _reject(self, message: str) -> BadRequestError:
        logger.warning(f"Rejected achievement change: {message}")
        return BadRequestError(message, code=ErrorCode.INVALID_ACHIEVEMENT)

    async def get(self, db: AsyncSession, achievement_id: int) -> Achievement:
        result = await db.execute(select(Achievement).where(Achievement.id == achievement_id))
        achievement = result.scalar_one_or_none()
        if not achievement:
            raise NotFoundError("Achievement", achievement_id, code=ErrorCode.ACHIEVEMENT_NOT_FOUND)
        return achievement

    async def list(self, db: AsyncSession) -> List[Achievement]:
        result = await db.execute(select(Achievement).order_by(Achievement.id.asc()))
        return list(result.scalars().all())

    async def create(
        self,
        db: AsyncSession,
        name: str,
        description: str,
        type: ObjectiveType,
        target: int,
        course_id: Optional[int] = None
    ) -> Achievement:
        if type in COURSE_SCOPED_TYPES:
            if target != 1:
                raise self._reject(TARGET_MUST_BE_ONE)
            if course_id is None:
                raise self._reject(COURSE_ID_REQUIRED)
            await self.course_service.get(db, course_id)
        elif course_id is not None:
            raise self._reject(COURSE_ID_NOT_ALLOWED)

        achievement = Achievement(
            name=name,
            description=description,
            type=type,
            target=target,
            course_id=course_id
        )
        db.add(achievement)
        await db.commit()
        logger.info(f"Created achievement {achievement.id} ({type.value}, target {target})")
        return achievement

    async def update(
        self,
        db: AsyncSession,
        achievement_id: int,
        name: Optional[str] = None,
        description: Optional[str] = None,
        course_id: Optional[int] = None
    ) -> Achievement:
        achievement = await self.get(db, achievement_id)

        if course_id is not None:
            if achievement.type not in COURSE_SCOPED_TYPES:
                raise self._reject(COURSE_ID_NOT_ALLOWED)
            await self.course_service.get(db, course_id)
            achievement.course_id = course_id

        if name is not None:
            achievement.name = name
        if description is not None:
            achievement.description = description

        await db.commit()
        logger.info(f"Updated achievement {achievement_id}")
        return achievement

    async def delete(self, db: AsyncSession, achievement_id: int) -> None:
        achievement = await self.get(db, achievement_id)
        await db.delete(achievement)
        await db.commit()
        logger.info(f"Deleted achievement {achievement_id}")
