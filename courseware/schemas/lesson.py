"""
courseware/schemas/lesson.py
Pydantic schemas for lessons

`order` is the 1-based position inside the chapter. Creating at an occupied
position shifts the lessons at and after it; updating `order` moves the
lesson and shifts the lessons in between.
"""
from typing import List, Optional

from pydantic import Field, field_validator

from courseware.schemas.base import CamelModel, RequestModel, clean_name


class LessonCreateRequest(RequestModel):
    """Used by: POST /api/lessons"""
    name: str = Field(..., min_length=1, max_length=100)
    order: int = Field(..., ge=1, description="1-based position inside the chapter")
    chapter_id: int = Field(..., ge=1)

    @field_validator('name')
    @classmethod
    def validate_name(cls, v: str) -> str:
        return clean_name(v)

    class Config:
        json_schema_extra = {
            "example": {"name": "Variables and types", "order": 1, "chapterId": 1}
        }


class LessonUpdateRequest(RequestModel):
    """
    Used by: PUT /api/lessons/{lessonId}

    Both fields are optional; a lesson cannot be moved to another chapter.
    """
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    order: Optional[int] = Field(None, ge=1)

    @field_validator('name')
    @classmethod
    def validate_name(cls, v: Optional[str]) -> Optional[str]:
        return clean_name(v)


class LessonResponse(CamelModel):
    id: int
    name: str
    order: int
    chapter_id: int


class LessonListResponse(CamelModel):
    lessons: List[LessonResponse]
