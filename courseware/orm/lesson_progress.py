"""
courseware/orm/lesson_progress.py
LessonProgress - one row per lesson completion attempt

Key Design Decisions:
- Append-only log: every attempt inserts a new row, repeat completions of
  the same lesson are kept (no unique constraint on user_id + lesson_id)
- "Has the user completed lesson X" means "at least one completed row exists"
- Achievement counters only react to the first completed row per lesson
"""
from sqlalchemy import Column, Integer, DateTime, Boolean, ForeignKey, Index
from sqlalchemy.orm import relationship

from courseware.orm.base import BaseModel


class LessonProgress(BaseModel):
    """
    Tracks lesson completion attempts.

    Fields:
    - user_id: Who completed the lesson (FK)
    - lesson_id: Which lesson (FK)
    - completed: True for completed attempts
    - started_at: When the attempt started (as reported by the client)
    - completed_at: When the attempt finished (NULL if not completed)
    """
    __tablename__ = "lesson_progress"

    user_id = Column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )

    lesson_id = Column(
        Integer,
        ForeignKey("lessons.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )

    completed = Column(
        Boolean,
        default=False,
        nullable=False,
        comment="True when the attempt finished the lesson"
    )

    started_at = Column(DateTime, nullable=True)

    completed_at = Column(
        DateTime,
        nullable=True,
        comment="Timestamp when the lesson was completed (NULL if not completed)"
    )

    # Relationships
    user = relationship("User", back_populates="progress")
    lesson = relationship("Lesson", back_populates="progress")

    __table_args__ = (
        Index("ix_lesson_progress_user_lesson", "user_id", "lesson_id"),
    )

    def __repr__(self):
        return (
            f"<LessonProgress("
            f"user_id={self.user_id}, "
            f"lesson_id={self.lesson_id}, "
            f"completed={self.completed})>"
        )
