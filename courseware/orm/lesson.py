"""
courseware/orm/lesson.py
Lesson model - ordered children of a chapter
"""
from sqlalchemy import Column, Integer, String, ForeignKey, Index
from sqlalchemy.orm import relationship

from courseware.orm.base import BaseModel


class Lesson(BaseModel):
    """
    A lesson inside a chapter.

    `order` is 1-based and dense per chapter, same rules as Chapter.order.
    """
    __tablename__ = "lessons"

    name = Column(String(100), nullable=False)

    order = Column(
        Integer,
        nullable=False,
        comment="1-based position inside the chapter"
    )

    chapter_id = Column(
        Integer,
        ForeignKey("chapters.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )

    # Relationships
    chapter = relationship("Chapter", back_populates="lessons")

    progress = relationship(
        "LessonProgress",
        back_populates="lesson",
        cascade="all, delete-orphan",
        passive_deletes=True
    )

    __table_args__ = (
        Index("ix_lesson_chapter_order", "chapter_id", "order"),
    )

    def __repr__(self):
        return f"<Lesson(id={self.id}, chapter_id={self.chapter_id}, order={self.order})>"
