"""
courseware/schemas/achievement.py
Pydantic schemas for achievements

Two audiences:
- admin catalog management (/api/admin/achievements)
- learner progress read-out (/api/achievements?userId=)

`type` and `target` are fixed at creation. The update request does not
declare them, so a payload carrying either one fails validation (400)
instead of being silently ignored.
"""
from typing import List, Optional

from pydantic import Field, field_validator

from courseware.orm.achievement import ObjectiveType
from courseware.schemas.base import CamelModel, RequestModel, clean_name


# ================= REQUEST SCHEMAS =================

class AchievementCreateRequest(RequestModel):
    """Used by: POST /api/admin/achievements"""
    name: str = Field(..., min_length=1, max_length=100)
    description: str = Field(..., min_length=1, max_length=500)
    type: ObjectiveType
    target: int = Field(..., ge=1)
    course_id: Optional[int] = Field(None, ge=1, description="Only for specific_course_completed")

    @field_validator('name', 'description')
    @classmethod
    def validate_text(cls, v: str) -> str:
        return clean_name(v)

    class Config:
        json_schema_extra = {
            "example": {
                "name": "Swift Expert",
                "description": "Complete the Swift course",
                "type": "specific_course_completed",
                "target": 1,
                "courseId": 1
            }
        }


class AchievementUpdateRequest(RequestModel):
    """Used by: PUT /api/admin/achievements/{achievementId}"""
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    description: Optional[str] = Field(None, min_length=1, max_length=500)
    course_id: Optional[int] = Field(None, ge=1)

    @field_validator('name', 'description')
    @classmethod
    def validate_text(cls, v: Optional[str]) -> Optional[str]:
        return clean_name(v)


# ================= RESPONSE SCHEMAS =================

class AchievementResponse(CamelModel):
    """Catalog entry as seen by admins."""
    id: int
    name: str
    description: str
    type: ObjectiveType
    target: int
    course_id: Optional[int] = None


class AchievementListResponse(CamelModel):
    achievements: List[AchievementResponse]


class UserAchievementResponse(CamelModel):
    """One achievement as seen by a learner."""
    id: int
    name: str
    description: str
    progress: int
    completed: bool
    target: int


class UserAchievementListResponse(CamelModel):
    achievements: List[UserAchievementResponse]
