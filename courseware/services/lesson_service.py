"""
courseware/services/lesson_service.py
Lessons: ordered children of a chapter
"""
import logging
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from courseware.errors import NotFoundError, ErrorCode
from courseware.orm.lesson import Lesson
from courseware.services.chapter_service import ChapterService
from courseware.services.ordering import OrderedSiblings

logger = logging.getLogger(__name__)


class LessonService:
    """Same contract as ChapterService, one level down: the chapter row is the lock."""

    def __init__(self, chapter_service: ChapterService):
        self.chapter_service = chapter_service
        self.siblings = OrderedSiblings(Lesson, "chapter_id", kind="lesson")

    async def get(self, db: AsyncSession, lesson_id: int, lock: bool = False) -> Lesson:
        query = select(Lesson).where(Lesson.id == lesson_id).execution_options(populate_existing=True)
        if lock:
            query = query.with_for_update()
        result = await db.execute(query)
        lesson = result.scalar_one_or_none()
        if not lesson:
            raise NotFoundError("Lesson", lesson_id, code=ErrorCode.LESSON_NOT_FOUND)
        return lesson

    async def _get_with_chapter_locked(self, db: AsyncSession, lesson_id: int) -> Lesson:
        lesson = await self.get(db, lesson_id)
        await self.chapter_service.get(db, lesson.chapter_id, lock=True)
        return await self.get(db, lesson_id, lock=True)

    async def list_for_chapter(self, db: AsyncSession, chapter_id: int) -> List[Lesson]:
        lessons = await self.siblings.list(db, chapter_id)
        if not lessons:
            await self.chapter_service.get(db, chapter_id)
        return lessons

    async def create(self, db: AsyncSession, chapter_id: int, name: str, order: int) -> Lesson:
        await self.chapter_service.get(db, chapter_id, lock=True)
        lesson = await self.siblings.insert(db, chapter_id, order, {"name": name})
        await db.commit()
        logger.info(f"Created lesson {lesson.id} in chapter {chapter_id} at order {order}")
        return lesson

    async def update(
        self,
        db: AsyncSession,
        lesson_id: int,
        name: Optional[str] = None,
        order: Optional[int] = None
    ) -> Lesson:
        lesson = await self._get_with_chapter_locked(db, lesson_id)
        previous = lesson.order
        await self.siblings.move(db, lesson, position=order, name=name)
        await db.commit()
        if lesson.order != previous:
            logger.info(f"Moved lesson {lesson_id} from order {previous} to {lesson.order}")
        return lesson

    async def delete(self, db: AsyncSession, lesson_id: int) -> None:
        lesson = await self._get_with_chapter_locked(db, lesson_id)
        await self.siblings.remove(db, lesson)
        await db.commit()
        logger.info(f"Deleted lesson {lesson_id}")
