from .base import Base, BaseModel

# Catalog
from .user import User
from .course import Course
from .chapter import Chapter
from .lesson import Lesson

# Progress + achievements
from .lesson_progress import LessonProgress
from .achievement import Achievement, UserAchievement, ObjectiveType, COURSE_SCOPED_TYPES

__all__ = [
    "Base",
    "BaseModel",
    "User",
    "Course",
    "Chapter",
    "Lesson",
    "LessonProgress",
    "Achievement",
    "UserAchievement",
    "ObjectiveType",
    "COURSE_SCOPED_TYPES",
]
