"""
courseware/schemas/chapter.py
Pydantic schemas for chapters

`order` is the 1-based position inside the course. Creating at an occupied
position shifts the chapters at and after it; updating `order` moves the
chapter and shifts the chapters in between.
"""
from typing import List, Optional

from pydantic import Field, field_validator

from courseware.schemas.base import CamelModel, RequestModel, clean_name


class ChapterCreateRequest(RequestModel):
    """Used by: POST /api/chapters"""
    name: str = Field(..., min_length=1, max_length=100)
    order: int = Field(..., ge=1, description="1-based position inside the course")
    course_id: int = Field(..., ge=1)

    @field_validator('name')
    @classmethod
    def validate_name(cls, v: str) -> str:
        return clean_name(v)

    class Config:
        json_schema_extra = {
            "example": {"name": "Getting started", "order": 1, "courseId": 1}
        }


class ChapterUpdateRequest(RequestModel):
    """
    Used by: PUT /api/chapters/{chapterId}

    Both fields are optional; a chapter cannot be moved to another course.
    """
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    order: Optional[int] = Field(None, ge=1)

    @field_validator('name')
    @classmethod
    def validate_name(cls, v: Optional[str]) -> Optional[str]:
        return clean_name(v)


class ChapterResponse(CamelModel):
    id: int
    name: str
    order: int
    course_id: int


class ChapterListResponse(CamelModel):
    chapters: List[ChapterResponse]
