"""
courseware/orm/user.py
Learner accounts
"""
from sqlalchemy import Column, String
from sqlalchemy.orm import relationship

from courseware.orm.base import BaseModel


class User(BaseModel):
    """
    A learner.

    Owns lesson-progress rows and user-achievement rows; both are removed
    with the user (ON DELETE CASCADE).
    """
    __tablename__ = "users"

    name = Column(String(100), nullable=False)

    # Relationships
    progress = relationship(
        "LessonProgress",
        back_populates="user",
        cascade="all, delete-orphan",
        passive_deletes=True
    )

    achievements = relationship(
        "UserAchievement",
        back_populates="user",
        cascade="all, delete-orphan",
        passive_deletes=True
    )

    def __repr__(self):
        return f"<User(id={self.id}, name='{self.name}')>"
