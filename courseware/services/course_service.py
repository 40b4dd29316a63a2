"""
courseware/services/course_service.py
Course management

Deleting a course cascades to its chapters, their lessons, the progress
rows on those lessons and any course-bound achievements.
"""
import logging
from typing import List

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from courseware.errors import NotFoundError, ErrorCode
from courseware.orm.course import Course

logger = logging.getLogger(__name__)


class CourseService:

    async def get(self, db: AsyncSession, course_id: int, lock: bool = False) -> Course:
        query = select(Course).where(Course.id == course_id)
        if lock:
            # Chapter renumbering for this course serialises on the course row
            query = query.with_for_update()
        result = await db.execute(query)
        course = result.scalar_one_or_none()
        if not course:
            raise NotFoundError("Course", course_id, code=ErrorCode.COURSE_NOT_FOUND)
        return course

    async def list(self, db: AsyncSession) -> List[Course]:
        result = await db.execute(select(Course).order_by(Course.id.asc()))
        return list(result.scalars().all())

    async def create(self, db: AsyncSession, name: str) -> Course:
        course = Course(name=name)
        db.add(course)
        await db.commit()
        logger.info(f"Created course {course.id} ({name})")
        return course

    async def update(self, db: AsyncSession, course_id: int, name: str) -> Course:
        course = await self.get(db, course_id, lock=True)
        course.name = name
        await db.commit()
        logger.info(f"Renamed course {course_id}")
        return course

    async def delete(self, db: AsyncSession, course_id: int) -> None:
        course = await self.get(db, course_id, lock=True)
        await db.delete(course)
        await db.commit()
        logger.info(f"Deleted course {course_id}")
