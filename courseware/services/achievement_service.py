"""
courseware/services/achievement_service.py
Achievement reconciliation

Achievements are event-driven counters. A first-time lesson completion is
one event; it may also complete a chapter and, through that chapter, a
course. reconcile() turns one such event into +1 on every not-yet-completed
achievement whose objective it matches.

Guarantees:
- Runs inside the caller's transaction, never commits
- One batched UPDATE for all increments (progress = progress + 1)
- Completion is decided from the progress read before the increment
- A user-achievement row is never incremented past completion
"""
import logging
from datetime import datetime
from typing import Dict, List, Optional

from sqlalchemy import and_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from courseware.orm.achievement import Achievement, ObjectiveType, UserAchievement
from courseware.services.user_service import UserService

logger = logging.getLogger(__name__)


class AchievementService:
    """Learner-facing side of achievements: progress updates and read-out."""

    def __init__(self, user_service: UserService):
        self.user_service = user_service

    @staticmethod
    def eligible_types(chapter_id: Optional[int], course_id: Optional[int]) -> List[ObjectiveType]:
        """Objective types that one completion event counts towards."""
        types = [ObjectiveType.LESSONS_COMPLETED]
        if chapter_id is not None:
            types.append(ObjectiveType.CHAPTERS_COMPLETED)
        if course_id is not None:
            types.append(ObjectiveType.COURSES_COMPLETED)
        return types

    async def _load_user_rows(self, db: AsyncSession, user_id: int):
        """Every catalog achievement paired with this user's row, creating missing rows."""
        result = await db.execute(
            select(Achievement, UserAchievement)
            .outerjoin(
                UserAchievement,
                and_(
                    UserAchievement.achievement_id == Achievement.id,
                    UserAchievement.user_id == user_id
                )
            )
            .order_by(Achievement.id.asc())
        )

        pairs = []
        created = 0
        for achievement, user_achievement in result.all():
            if user_achievement is None:
                user_achievement = UserAchievement(
                    user_id=user_id,
                    achievement_id=achievement.id,
                    progress=0,
                    completed=False
                )
                db.add(user_achievement)
                created += 1
            pairs.append((achievement, user_achievement))

        if created:
            await db.flush()
            logger.info(f"Created {created} achievement rows for user {user_id}")
        return pairs

    async def reconcile(
        self,
        db: AsyncSession,
        user_id: int,
        lesson_id: Optional[int],
        chapter_id: Optional[int] = None,
        course_id: Optional[int] = None
    ) -> List[int]:
        """
        Apply one completion event for `user_id`.

        chapter_id / course_id are passed only when this event completed that
        chapter / course. Returns the ids of achievements completed by it.
        """
        if lesson_id is None:
            return []

        pairs = await self._load_user_rows(db, user_id)
        eligible = self.eligible_types(chapter_id, course_id)

        selected = []
        for achievement, user_achievement in pairs:
            if user_achievement.completed:
                continue
            if achievement.type in eligible:
                selected.append((achievement, user_achievement))
            elif (
                course_id is not None
                and achievement.type == ObjectiveType.SPECIFIC_COURSE_COMPLETED
                and achievement.course_id == course_id
            ):
                selected.append((achievement, user_achievement))

        if not selected:
            return []

        prior_progress: Dict[int, int] = {ua.id: ua.progress for _, ua in selected}
        finished = [
            (achievement, ua) for achievement, ua in selected
            if prior_progress[ua.id] + 1 >= achievement.target
        ]

        await db.execute(
            update(UserAchievement)
            .where(UserAchievement.id.in_(list(prior_progress)))
            .values(progress=UserAchievement.progress + 1)
        )

        if finished:
            await db.execute(
                update(UserAchievement)
                .where(UserAchievement.id.in_([ua.id for _, ua in finished]))
                .values(completed=True, completed_at=datetime.utcnow())
            )
            logger.info(
                f"User {user_id} completed achievements "
                f"{[achievement.id for achievement, _ in finished]}"
            )

        return [achievement.id for achievement, _ in finished]

    async def get_user_achievements(self, db: AsyncSession, user_id: int) -> List[dict]:
        """
        Achievements this user has a row for, in catalog order.

        Reads never create rows: a user who has not completed anything yet
        gets an empty list.
        """
        await self.user_service.get(db, user_id)

        result = await db.execute(
            select(Achievement, UserAchievement)
            .join(UserAchievement, UserAchievement.achievement_id == Achievement.id)
            .where(UserAchievement.user_id == user_id)
            .order_by(Achievement.id.asc())
        )

        return [
            {
                "id": achievement.id,
                "name": achievement.name,
                "description": achievement.description,
                "progress": user_achievement.reported_progress(achievement.target),
                "completed": user_achievement.completed,
                "target": achievement.target,
            }
            for achievement, user_achievement in result.all()
        ]
