"""
courseware/routes/dependencies.py
FastAPI providers for the service container built in create_app()
"""
from fastapi import Depends, Request

from courseware.services import (
    ServiceContainer,
    UserService,
    CourseService,
    ChapterService,
    LessonService,
    AchievementService,
    AdminAchievementService,
    LessonProgressService,
)


def get_services(request: Request) -> ServiceContainer:
    return request.app.state.services


def get_user_service(services: ServiceContainer = Depends(get_services)) -> UserService:
    return services.users


def get_course_service(services: ServiceContainer = Depends(get_services)) -> CourseService:
    return services.courses


def get_chapter_service(services: ServiceContainer = Depends(get_services)) -> ChapterService:
    return services.chapters


def get_lesson_service(services: ServiceContainer = Depends(get_services)) -> LessonService:
    return services.lessons


def get_achievement_service(services: ServiceContainer = Depends(get_services)) -> AchievementService:
    return services.achievements


def get_admin_achievement_service(
    services: ServiceContainer = Depends(get_services)
) -> AdminAchievementService:
    return services.admin_achievements


def get_lesson_progress_service(
    services: ServiceContainer = Depends(get_services)
) -> LessonProgressService:
    return services.lesson_progress
