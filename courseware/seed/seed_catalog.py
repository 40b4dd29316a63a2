"""
courseware/seed/seed_catalog.py
Demo catalog

Three courses with five chapters of five lessons each, one default user and
the standard achievement ladder plus one "<Course> Expert" achievement per
course. Safe to run repeatedly: nothing is written once any course exists.
"""
import logging
from typing import Dict

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from courseware.orm.achievement import Achievement, ObjectiveType, UserAchievement
from courseware.orm.chapter import Chapter
from courseware.orm.course import Course
from courseware.orm.lesson import Lesson
from courseware.orm.user import User

logger = logging.getLogger(__name__)

COURSE_NAMES = ["Swift", "Javascript", "C#"]
CHAPTERS_PER_COURSE = 5
LESSONS_PER_CHAPTER = 5
DEFAULT_USER_NAME = "Default User"

ACHIEVEMENT_LADDER = [
    ("Beginner Learner", "Complete 5 lessons", ObjectiveType.LESSONS_COMPLETED, 5),
    ("Intermediate Learner", "Complete 25 lessons", ObjectiveType.LESSONS_COMPLETED, 25),
    ("Advanced Learner", "Complete 50 lessons", ObjectiveType.LESSONS_COMPLETED, 50),
    ("Chapter Novice", "Complete 1 chapter", ObjectiveType.CHAPTERS_COMPLETED, 1),
    ("Chapter Master", "Complete 5 chapters", ObjectiveType.CHAPTERS_COMPLETED, 5),
    ("Course Novice", "Complete 1 course", ObjectiveType.COURSES_COMPLETED, 1),
    ("Course Master", "Complete 5 courses", ObjectiveType.COURSES_COMPLETED, 5),
]


async def seed_catalog(db: AsyncSession) -> Dict[str, int]:
    """
    Insert the demo catalog if the database has no courses yet.

    Returns the number of rows inserted per table (all zeros when skipped).
    """
    counts = {"courses": 0, "chapters": 0, "lessons": 0, "users": 0, "achievements": 0}

    try:
        result = await db.execute(select(func.count()).select_from(Course))
        existing = result.scalar()
        if existing:
            logger.info(f"✓ Catalog already present ({existing} courses) - skipping seed")
            return counts

        logger.info("No courses found - seeding demo catalog")

        courses = [Course(name=name) for name in COURSE_NAMES]
        db.add_all(courses)
        await db.flush()
        counts["courses"] = len(courses)

        for course in courses:
            for chapter_number in range(1, CHAPTERS_PER_COURSE + 1):
                chapter = Chapter(
                    name=f"{course.name} Chapter {chapter_number}",
                    order=chapter_number,
                    course_id=course.id
                )
                db.add(chapter)
                await db.flush()
                counts["chapters"] += 1

                db.add_all([
                    Lesson(name=f"Lesson {lesson_number}", order=lesson_number, chapter_id=chapter.id)
                    for lesson_number in range(1, LESSONS_PER_CHAPTER + 1)
                ])
                counts["lessons"] += LESSONS_PER_CHAPTER

        user = User(name=DEFAULT_USER_NAME)
        db.add(user)
        await db.flush()
        counts["users"] = 1

        achievements = [
            Achievement(name=name, description=description, type=type_, target=target)
            for name, description, type_, target in ACHIEVEMENT_LADDER
        ]
        achievements.extend(
            Achievement(
                name=f"{course.name} Expert",
                description=f"Complete the {course.name} course",
                type=ObjectiveType.SPECIFIC_COURSE_COMPLETED,
                target=1,
                course_id=course.id
            )
            for course in courses
        )
        db.add_all(achievements)
        await db.flush()
        counts["achievements"] = len(achievements)

        # The default user starts with a zero row for every achievement
        db.add_all([
            UserAchievement(user_id=user.id, achievement_id=achievement.id, progress=0, completed=False)
            for achievement in achievements
        ])

        await db.commit()
        logger.info(f"✓ Seeded demo catalog: {counts}")
        return counts

    except Exception as e:
        logger.error(f"Failed to seed catalog: {str(e)}")
        await db.rollback()
        raise
