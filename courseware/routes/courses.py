"""
courseware/routes/courses.py
Course management API
"""
from fastapi import APIRouter, Depends, Path, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from courseware.database import get_db
from courseware.routes.dependencies import get_course_service
from courseware.schemas.course import (
    CourseCreateRequest,
    CourseUpdateRequest,
    CourseResponse,
    CourseListResponse,
)
from courseware.services import CourseService

router = APIRouter(prefix="/courses", tags=["courses"])


@router.post("", response_model=CourseResponse, status_code=status.HTTP_201_CREATED)
async def create_course(
    payload: CourseCreateRequest,
    db: AsyncSession = Depends(get_db),
    service: CourseService = Depends(get_course_service)
):
    course = await service.create(db, payload.name)
    return CourseResponse.model_validate(course)


@router.get("", response_model=CourseListResponse)
async def list_courses(
    db: AsyncSession = Depends(get_db),
    service: CourseService = Depends(get_course_service)
):
    courses = await service.list(db)
    return CourseListResponse(courses=[CourseResponse.model_validate(c) for c in courses])


@router.get("/{course_id}", response_model=CourseResponse)
async def get_course(
    course_id: int = Path(..., ge=1),
    db: AsyncSession = Depends(get_db),
    service: CourseService = Depends(get_course_service)
):
    return CourseResponse.model_validate(await service.get(db, course_id))


@router.put("/{course_id}", response_model=CourseResponse)
async def update_course(
    payload: CourseUpdateRequest,
    course_id: int = Path(..., ge=1),
    db: AsyncSession = Depends(get_db),
    service: CourseService = Depends(get_course_service)
):
    course = await service.update(db, course_id, payload.name)
    return CourseResponse.model_validate(course)


@router.delete("/{course_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_course(
    course_id: int = Path(..., ge=1),
    db: AsyncSession = Depends(get_db),
    service: CourseService = Depends(get_course_service)
):
    """Deletes the course with its chapters, lessons and course-bound achievements."""
    await service.delete(db, course_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
