"""
courseware/schemas/base.py
Shared pydantic configuration

The public API speaks camelCase (courseId, lessonId, completedAt) while the
Python side keeps snake_case attribute names.
"""
from typing import Optional

from pydantic import BaseModel
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Response base: snake_case attributes, camelCase JSON."""

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True


class RequestModel(CamelModel):
    """Request base: unknown fields are rejected instead of silently dropped."""

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        extra = "forbid"


def clean_name(value: Optional[str]) -> Optional[str]:
    """Strip surrounding whitespace and refuse names that are only whitespace."""
    if value is None:
        return value
    if not value.strip():
        raise ValueError("should not be empty")
    return value.strip()
