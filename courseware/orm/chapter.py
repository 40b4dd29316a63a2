"""
courseware/orm/chapter.py
Chapter model - ordered children of a course
"""
from sqlalchemy import Column, Integer, String, ForeignKey, Index
from sqlalchemy.orm import relationship

from courseware.orm.base import BaseModel


class Chapter(BaseModel):
    """
    A chapter inside a course.

    Ordering:
    - `order` is 1-based and dense per course (1..N, no gaps, no duplicates)
    - the invariant is maintained by services.ordering.OrderedSiblings,
      never by writing `order` directly
    """
    __tablename__ = "chapters"

    name = Column(String(100), nullable=False)

    order = Column(
        Integer,
        nullable=False,
        comment="1-based position inside the course"
    )

    course_id = Column(
        Integer,
        ForeignKey("courses.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )

    # Relationships
    course = relationship("Course", back_populates="chapters")

    lessons = relationship(
        "Lesson",
        back_populates="chapter",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="Lesson.order"
    )

    __table_args__ = (
        # Not unique: renumbering shifts whole ranges in a single UPDATE
        Index("ix_chapter_course_order", "course_id", "order"),
    )

    def __repr__(self):
        return f"<Chapter(id={self.id}, course_id={self.course_id}, order={self.order})>"
