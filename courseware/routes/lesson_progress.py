"""
courseware/routes/lesson_progress.py
Lesson completion API
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from courseware.database import get_db
from courseware.routes.dependencies import get_lesson_progress_service
from courseware.schemas.progress import (
    RecordProgressRequest,
    RecordProgressResponse,
    ProgressRecord,
)
from courseware.services import LessonProgressService

router = APIRouter(prefix="/lesson-progress", tags=["lesson-progress"])


@router.post("", response_model=RecordProgressResponse, status_code=status.HTTP_201_CREATED)
async def record_lesson_progress(
    payload: RecordProgressRequest,
    db: AsyncSession = Depends(get_db),
    service: LessonProgressService = Depends(get_lesson_progress_service)
):
    """
    Record that a user completed a lesson.

    Every call appends a progress row. Achievement progress only moves the
    first time a user completes a given lesson.
    """
    record = await service.record_progress(
        db,
        user_id=payload.user_id,
        lesson_id=payload.lesson_id,
        started_at=payload.started_at,
        completed_at=payload.completed_at
    )
    return RecordProgressResponse(
        message="Lesson progress recorded successfully",
        progress=ProgressRecord.model_validate(record)
    )
