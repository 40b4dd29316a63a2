"""
courseware/schemas/course.py
Pydantic schemas for course management
"""
from typing import List

from pydantic import Field, field_validator

from courseware.schemas.base import CamelModel, RequestModel, clean_name


class CourseCreateRequest(RequestModel):
    """Used by: POST /api/courses"""
    name: str = Field(..., min_length=1, max_length=100)

    @field_validator('name')
    @classmethod
    def validate_name(cls, v: str) -> str:
        return clean_name(v)


class CourseUpdateRequest(CourseCreateRequest):
    """Used by: PUT /api/courses/{courseId}"""


class CourseResponse(CamelModel):
    id: int
    name: str


class CourseListResponse(CamelModel):
    courses: List[CourseResponse]
