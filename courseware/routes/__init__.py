"""
courseware/routes
HTTP layer. Every resource router is mounted under /api.
"""
from fastapi import APIRouter

from courseware.errors import ERROR_RESPONSES
from . import users, courses, chapters, lessons, lesson_progress, achievements, admin_achievements

api_router = APIRouter(prefix="/api", responses=ERROR_RESPONSES)
api_router.include_router(users.router)
api_router.include_router(courses.router)
api_router.include_router(chapters.router)
api_router.include_router(lessons.router)
api_router.include_router(lesson_progress.router)
api_router.include_router(achievements.router)
api_router.include_router(admin_achievements.router)

__all__ = ["api_router"]
