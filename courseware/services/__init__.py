"""
courseware/services
Business logic layer

Services hold no per-request state. build_services() wires one instance of
each together; the app factory keeps the result on app.state and routes
reach it through the providers in courseware.routes.dependencies.
"""
from dataclasses import dataclass

from .ordering import OrderedSiblings
from .user_service import UserService
from .course_service import CourseService
from .chapter_service import ChapterService
from .lesson_service import LessonService
from .achievement_service import AchievementService
from .admin_achievement_service import AdminAchievementService
from .lesson_progress_service import LessonProgressService


@dataclass
class ServiceContainer:
    users: UserService
    courses: CourseService
    chapters: ChapterService
    lessons: LessonService
    achievements: AchievementService
    admin_achievements: AdminAchievementService
    lesson_progress: LessonProgressService


def build_services() -> ServiceContainer:
    users = UserService()
    courses = CourseService()
    chapters = ChapterService(courses)
    lessons = LessonService(chapters)
    achievements = AchievementService(users)
    return ServiceContainer(
        users=users,
        courses=courses,
        chapters=chapters,
        lessons=lessons,
        achievements=achievements,
        admin_achievements=AdminAchievementService(courses),
        lesson_progress=LessonProgressService(users, lessons, achievements),
    )


__all__ = [
    "OrderedSiblings",
    "UserService",
    "CourseService",
    "ChapterService",
    "LessonService",
    "AchievementService",
    "AdminAchievementService",
    "LessonProgressService",
    "ServiceContainer",
    "build_services",
]
