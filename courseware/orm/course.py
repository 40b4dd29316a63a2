"""
courseware/orm/course.py
Course model - the top of the course > chapter > lesson tree
"""
from sqlalchemy import Column, String
from sqlalchemy.orm import relationship

from courseware.orm.base import BaseModel


class Course(BaseModel):
    """
    Stores courses.

    A course owns an ordered list of chapters. Deleting a course removes its
    chapters, their lessons and every progress row recorded against them.
    """
    __tablename__ = "courses"

    name = Column(String(100), nullable=False)

    # Relationships
    chapters = relationship(
        "Chapter",
        back_populates="course",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="Chapter.order"
    )

    def __repr__(self):
        return f"<Course(id={self.id}, name='{self.name}')>"
