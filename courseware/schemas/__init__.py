from .user import UserCreateRequest, UserUpdateRequest, UserResponse, UserListResponse
from .course import CourseCreateRequest, CourseUpdateRequest, CourseResponse, CourseListResponse
from .chapter import ChapterCreateRequest, ChapterUpdateRequest, ChapterResponse, ChapterListResponse
from .lesson import LessonCreateRequest, LessonUpdateRequest, LessonResponse, LessonListResponse
from .progress import RecordProgressRequest, RecordProgressResponse, ProgressRecord
from .achievement import (
    AchievementCreateRequest,
    AchievementUpdateRequest,
    AchievementResponse,
    AchievementListResponse,
    UserAchievementResponse,
    UserAchievementListResponse,
)
