"""
courseware/orm/achievement.py
Achievement catalog and per-user achievement state

Achievement:
- Defined by an admin; `type` and `target` never change after creation
- SPECIFIC_COURSE_COMPLETED achievements are bound to one course and
  always have target = 1

UserAchievement:
- Created lazily the first time reconciliation runs for a user
- A missing row means "zero progress", not "not eligible"
- `progress` is an event-driven counter (+1 per qualifying event); it never
  exceeds the achievement target
"""
from enum import Enum

from sqlalchemy import (
    Column, Integer, String, DateTime, Boolean, ForeignKey, UniqueConstraint,
    Enum as SQLEnum
)
from sqlalchemy.orm import relationship

from courseware.orm.base import BaseModel


class ObjectiveType(str, Enum):
    """
    What an achievement counts.

    - LESSONS_COMPLETED: distinct lessons completed
    - CHAPTERS_COMPLETED: chapters fully completed
    - COURSES_COMPLETED: courses fully completed
    - SPECIFIC_COURSE_COMPLETED: one particular course fully completed
    """
    LESSONS_COMPLETED = "lessons_completed"
    CHAPTERS_COMPLETED = "chapters_completed"
    COURSES_COMPLETED = "courses_completed"
    SPECIFIC_COURSE_COMPLETED = "specific_course_completed"


COURSE_SCOPED_TYPES = (ObjectiveType.SPECIFIC_COURSE_COMPLETED,)


class Achievement(BaseModel):
    """Achievement catalog entry."""
    __tablename__ = "achievements"

    name = Column(String(100), nullable=False)
    description = Column(String(500), nullable=False)

    type = Column(
        SQLEnum(
            ObjectiveType,
            values_callable=lambda enum_cls: [member.value for member in enum_cls],
            native_enum=False,
            length=32
        ),
        nullable=False,
        index=True
    )

    target = Column(Integer, nullable=False)

    course_id = Column(
        Integer,
        ForeignKey("courses.id", ondelete="CASCADE"),
        nullable=True,
        index=True,
        comment="Only set for SPECIFIC_COURSE_COMPLETED"
    )

    # Relationships
    user_achievements = relationship(
        "UserAchievement",
        back_populates="achievement",
        cascade="all, delete-orphan",
        passive_deletes=True
    )

    def __repr__(self):
        return f"<Achievement(id={self.id}, type={self.type}, target={self.target})>"


class UserAchievement(BaseModel):
    """Per-user progress towards one achievement."""
    __tablename__ = "user_achievements"

    user_id = Column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )

    achievement_id = Column(
        Integer,
        ForeignKey("achievements.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )

    progress = Column(Integer, default=0, nullable=False)
    completed = Column(Boolean, default=False, nullable=False)
    completed_at = Column(DateTime, nullable=True)

    # Relationships
    user = relationship("User", back_populates="achievements")
    achievement = relationship("Achievement", back_populates="user_achievements")

    __table_args__ = (
        UniqueConstraint(
            "user_id",
            "achievement_id",
            name="uq_user_achievement"
        ),
    )

    def reported_progress(self, target: int) -> int:
        """Progress as shown to users: completed rows always read as target."""
        if self.completed:
            return target
        return min(self.progress, target)

    def __repr__(self):
        return (
            f"<UserAchievement("
            f"user_id={self.user_id}, "
            f"achievement_id={self.achievement_id}, "
            f"progress={self.progress}, "
            f"completed={self.completed})>"
        )
