"""
courseware/routes/lessons.py
Lesson API (ordered inside a chapter, same rules as chapters)
"""
from fastapi import APIRouter, Depends, Path, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from courseware.database import get_db
from courseware.routes.dependencies import get_lesson_service
from courseware.schemas.lesson import (
    LessonCreateRequest,
    LessonUpdateRequest,
    LessonResponse,
    LessonListResponse,
)
from courseware.services import LessonService

router = APIRouter(prefix="/lessons", tags=["lessons"])


@router.post("", response_model=LessonResponse, status_code=status.HTTP_201_CREATED)
async def create_lesson(
    payload: LessonCreateRequest,
    db: AsyncSession = Depends(get_db),
    service: LessonService = Depends(get_lesson_service)
):
    lesson = await service.create(db, payload.chapter_id, payload.name, payload.order)
    return LessonResponse.model_validate(lesson)


@router.get("", response_model=LessonListResponse)
async def list_lessons(
    chapter_id: int = Query(..., alias="chapterId", ge=1),
    db: AsyncSession = Depends(get_db),
    service: LessonService = Depends(get_lesson_service)
):
    lessons = await service.list_for_chapter(db, chapter_id)
    return LessonListResponse(lessons=[LessonResponse.model_validate(lesson) for lesson in lessons])


@router.get("/{lesson_id}", response_model=LessonResponse)
async def get_lesson(
    lesson_id: int = Path(..., ge=1),
    db: AsyncSession = Depends(get_db),
    service: LessonService = Depends(get_lesson_service)
):
    return LessonResponse.model_validate(await service.get(db, lesson_id))


@router.put("/{lesson_id}", response_model=LessonResponse)
async def update_lesson(
    payload: LessonUpdateRequest,
    lesson_id: int = Path(..., ge=1),
    db: AsyncSession = Depends(get_db),
    service: LessonService = Depends(get_lesson_service)
):
    lesson = await service.update(db, lesson_id, name=payload.name, order=payload.order)
    return LessonResponse.model_validate(lesson)


@router.delete("/{lesson_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_lesson(
    lesson_id: int = Path(..., ge=1),
    db: AsyncSession = Depends(get_db),
    service: LessonService = Depends(get_lesson_service)
):
    """Deleting a lesson also removes every progress row recorded against it."""
    await service.delete(db, lesson_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
