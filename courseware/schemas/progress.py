"""
courseware/schemas/progress.py
Pydantic schemas for lesson progress

Timestamps arrive as ISO-8601 strings. They are normalised to naive UTC,
which is how every timestamp column in the database is stored.
"""
from datetime import datetime, timezone

from pydantic import Field, field_validator, model_validator

from courseware.schemas.base import CamelModel, RequestModel


def to_naive_utc(value: datetime) -> datetime:
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


class RecordProgressRequest(RequestModel):
    """
    Request schema for recording a lesson completion.

    Used by: POST /api/lesson-progress
    """
    lesson_id: int = Field(..., ge=1)
    user_id: int = Field(..., ge=1)
    started_at: datetime
    completed_at: datetime

    @field_validator('started_at', 'completed_at')
    @classmethod
    def normalise_timestamp(cls, v: datetime) -> datetime:
        return to_naive_utc(v)

    @model_validator(mode='after')
    def check_chronology(self):
        if self.completed_at < self.started_at:
            raise ValueError("completedAt must not be earlier than startedAt")
        return self

    class Config:
        json_schema_extra = {
            "example": {
                "lessonId": 42,
                "userId": 1,
                "startedAt": "2024-05-01T10:00:00Z",
                "completedAt": "2024-05-01T10:05:00Z"
            }
        }


class ProgressRecord(CamelModel):
    id: int
    lesson_id: int
    user_id: int
    started_at: datetime
    completed_at: datetime


class RecordProgressResponse(CamelModel):
    message: str
    progress: ProgressRecord
