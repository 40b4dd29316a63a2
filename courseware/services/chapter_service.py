"""
courseware/services/chapter_service.py
Chapters: ordered children of a course

Every mutation locks the parent course row first, then delegates the
renumbering to OrderedSiblings and commits once. Update and delete re-read
the chapter after the lock is held, since its order may have shifted while
another request held it.
"""
import logging
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from courseware.errors import NotFoundError, ErrorCode
from courseware.orm.chapter import Chapter
from courseware.services.course_service import CourseService
from courseware.services.ordering import OrderedSiblings

logger = logging.getLogger(__name__)


class ChapterService:

    def __init__(self, course_service: CourseService):
        self.course_service = course_service
        self.siblings = OrderedSiblings(Chapter, "course_id", kind="chapter")

    async def get(self, db: AsyncSession, chapter_id: int, lock: bool = False) -> Chapter:
        query = select(Chapter).where(Chapter.id == chapter_id).execution_options(populate_existing=True)
        if lock:
            query = query.with_for_update()
        result = await db.execute(query)
        chapter = result.scalar_one_or_none()
        if not chapter:
            raise NotFoundError("Chapter", chapter_id, code=ErrorCode.CHAPTER_NOT_FOUND)
        return chapter

    async def _get_with_course_locked(self, db: AsyncSession, chapter_id: int) -> Chapter:
        chapter = await self.get(db, chapter_id)
        await self.course_service.get(db, chapter.course_id, lock=True)
        # Fresh order under the lock
        return await self.get(db, chapter_id, lock=True)

    async def list_for_course(self, db: AsyncSession, course_id: int) -> List[Chapter]:
        chapters = await self.siblings.list(db, course_id)
        if not chapters:
            # Empty list is only valid for a course that exists
            await self.course_service.get(db, course_id)
        return chapters

    async def create(self, db: AsyncSession, course_id: int, name: str, order: int) -> Chapter:
        await self.course_service.get(db, course_id, lock=True)
        chapter = await self.siblings.insert(db, course_id, order, {"name": name})
        await db.commit()
        logger.info(f"Created chapter {chapter.id} in course {course_id} at order {order}")
        return chapter

    async def update(
        self,
        db: AsyncSession,
        chapter_id: int,
        name: Optional[str] = None,
        order: Optional[int] = None
    ) -> Chapter:
        chapter = await self._get_with_course_locked(db, chapter_id)
        previous = chapter.order
        await self.siblings.move(db, chapter, position=order, name=name)
        await db.commit()
        if chapter.order != previous:
            logger.info(f"Moved chapter {chapter_id} from order {previous} to {chapter.order}")
        return chapter

    async def delete(self, db: AsyncSession, chapter_id: int) -> None:
        chapter = await self._get_with_course_locked(db, chapter_id)
        await self.siblings.remove(db, chapter)
        await db.commit()
        logger.info(f"Deleted chapter {chapter_id}")
