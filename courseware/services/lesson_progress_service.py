"""
courseware/services/lesson_progress_service.py
Lesson completion recording

Flow for one POST /api/lesson-progress:
1. Lock the user row, check the lesson exists
2. Decide whether this is the user's first completion of the lesson
3. Append a progress row (repeat completions are kept)
4. On a first completion, work out whether the lesson's chapter and the
   chapter's course are now fully complete
5. Hand the event to AchievementService.reconcile in the same transaction
6. Commit once
"""
import logging
from datetime import datetime
from typing import Optional

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from courseware.orm.chapter import Chapter
from courseware.orm.lesson import Lesson
from courseware.orm.lesson_progress import LessonProgress
from courseware.services.achievement_service import AchievementService
from courseware.services.lesson_service import LessonService
from courseware.services.user_service import UserService

logger = logging.getLogger(__name__)


class LessonProgressService:

    def __init__(
        self,
        user_service: UserService,
        lesson_service: LessonService,
        achievement_service: AchievementService
    ):
        self.user_service = user_service
        self.lesson_service = lesson_service
        self.achievement_service = achievement_service

    @staticmethod
    def _completed_lessons(user_id: int):
        return (
            select(LessonProgress.lesson_id)
            .where(
                LessonProgress.user_id == user_id,
                LessonProgress.completed.is_(True)
            )
        )

    async def has_completed(self, db: AsyncSession, user_id: int, lesson_id: int) -> bool:
        result = await db.execute(
            select(LessonProgress.id)
            .where(
                LessonProgress.user_id == user_id,
                LessonProgress.lesson_id == lesson_id,
                LessonProgress.completed.is_(True)
            )
            .limit(1)
        )
        return result.scalar_one_or_none() is not None

    async def is_chapter_completed(self, db: AsyncSession, user_id: int, chapter_id: int) -> bool:
        """True when no lesson of the chapter is missing a completed row for this user."""
        result = await db.execute(
            select(func.count(Lesson.id)).where(
                Lesson.chapter_id == chapter_id,
                Lesson.id.not_in(self._completed_lessons(user_id))
            )
        )
        return result.scalar_one() == 0

    async def is_course_completed(self, db: AsyncSession, user_id: int, course_id: int) -> bool:
        """True when every chapter of the course is completed by this user."""
        result = await db.execute(
            select(func.count(Lesson.id))
            .join(Chapter, Lesson.chapter_id == Chapter.id)
            .where(
                Chapter.course_id == course_id,
                Lesson.id.not_in(self._completed_lessons(user_id))
            )
        )
        return result.scalar_one() == 0

    async def count_lessons_completed(self, db: AsyncSession, user_id: int) -> int:
        """Distinct lessons this user has completed at least once."""
        await self.user_service.get(db, user_id)
        result = await db.execute(
            select(func.count(func.distinct(LessonProgress.lesson_id))).where(
                LessonProgress.user_id == user_id,
                LessonProgress.completed.is_(True)
            )
        )
        return result.scalar_one()

    async def record_progress(
        self,
        db: AsyncSession,
        user_id: int,
        lesson_id: int,
        started_at: Optional[datetime],
        completed_at: datetime
    ) -> LessonProgress:
        await self.user_service.get(db, user_id, lock=True)
        lesson = await self.lesson_service.get(db, lesson_id)

        is_first_completion = not await self.has_completed(db, user_id, lesson_id)

        record = LessonProgress(
            user_id=user_id,
            lesson_id=lesson_id,
            completed=True,
            started_at=started_at,
            completed_at=completed_at
        )
        db.add(record)
        await db.flush()

        if is_first_completion:
            completed_chapter_id = None
            completed_course_id = None

            if await self.is_chapter_completed(db, user_id, lesson.chapter_id):
                completed_chapter_id = lesson.chapter_id
                chapter = await db.get(Chapter, lesson.chapter_id)
                if await self.is_course_completed(db, user_id, chapter.course_id):
                    completed_course_id = chapter.course_id

            await self.achievement_service.reconcile(
                db,
                user_id,
                lesson_id,
                chapter_id=completed_chapter_id,
                course_id=completed_course_id
            )
            logger.info(
                f"User {user_id} completed lesson {lesson_id} "
                f"(chapter completed: {completed_chapter_id is not None}, "
                f"course completed: {completed_course_id is not None})"
            )
        else:
            logger.info(f"User {user_id} repeated lesson {lesson_id}")

        await db.commit()
        return record
