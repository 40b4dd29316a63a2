"""
courseware/routes/chapters.py
Chapter API

Creating at an occupied position shifts later chapters down; moving a
chapter shifts the chapters in between; deleting closes the gap.
"""
from fastapi import APIRouter, Depends, Path, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from courseware.database import get_db
from courseware.routes.dependencies import get_chapter_service
from courseware.schemas.chapter import (
    ChapterCreateRequest,
    ChapterUpdateRequest,
    ChapterResponse,
    ChapterListResponse,
)
from courseware.services import ChapterService

router = APIRouter(prefix="/chapters", tags=["chapters"])


@router.post("", response_model=ChapterResponse, status_code=status.HTTP_201_CREATED)
async def create_chapter(
    payload: ChapterCreateRequest,
    db: AsyncSession = Depends(get_db),
    service: ChapterService = Depends(get_chapter_service)
):
    """
    Create a chapter at `order` inside `courseId`.

    400 if order > 1 and there is no chapter at order - 1.
    404 if the course does not exist.
    """
    chapter = await service.create(db, payload.course_id, payload.name, payload.order)
    return ChapterResponse.model_validate(chapter)


@router.get("", response_model=ChapterListResponse)
async def list_chapters(
    course_id: int = Query(..., alias="courseId", ge=1),
    db: AsyncSession = Depends(get_db),
    service: ChapterService = Depends(get_chapter_service)
):
    chapters = await service.list_for_course(db, course_id)
    return ChapterListResponse(chapters=[ChapterResponse.model_validate(c) for c in chapters])


@router.get("/{chapter_id}", response_model=ChapterResponse)
async def get_chapter(
    chapter_id: int = Path(..., ge=1),
    db: AsyncSession = Depends(get_db),
    service: ChapterService = Depends(get_chapter_service)
):
    return ChapterResponse.model_validate(await service.get(db, chapter_id))


@router.put("/{chapter_id}", response_model=ChapterResponse)
async def update_chapter(
    payload: ChapterUpdateRequest,
    chapter_id: int = Path(..., ge=1),
    db: AsyncSession = Depends(get_db),
    service: ChapterService = Depends(get_chapter_service)
):
    chapter = await service.update(db, chapter_id, name=payload.name, order=payload.order)
    return ChapterResponse.model_validate(chapter)


@router.delete("/{chapter_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_chapter(
    chapter_id: int = Path(..., ge=1),
    db: AsyncSession = Depends(get_db),
    service: ChapterService = Depends(get_chapter_service)
):
    await service.delete(db, chapter_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
