"""
courseware/schemas/user.py
Pydantic schemas for user management
"""
from typing import List

from pydantic import Field, field_validator

from courseware.schemas.base import CamelModel, RequestModel, clean_name


class UserCreateRequest(RequestModel):
    """Used by: POST /api/users"""
    name: str = Field(..., min_length=1, max_length=100)

    @field_validator('name')
    @classmethod
    def validate_name(cls, v: str) -> str:
        return clean_name(v)


class UserUpdateRequest(UserCreateRequest):
    """Used by: PUT /api/users/{userId}"""


class UserResponse(CamelModel):
    id: int
    name: str


class UserListResponse(CamelModel):
    users: List[UserResponse]
