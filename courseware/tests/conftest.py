"""
Shared fixtures for the courseware test suite.

Every test gets its own in-memory SQLite database (StaticPool keeps the
single connection alive across sessions) and its own app instance with
`get_db` overridden to hand out sessions bound to that database.
"""
from typing import AsyncGenerator, Dict, List, Optional

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.pool import StaticPool

from courseware.database import build_engine, build_session_factory, get_db, init_db
from courseware.main import create_app


TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest_asyncio.fixture
async def engine():
    """Create test database engine."""
    engine = build_engine(TEST_DATABASE_URL, poolclass=StaticPool)
    await init_db(engine)

    yield engine

    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return build_session_factory(engine)


@pytest_asyncio.fixture
async def app(session_factory):
    """Fresh application wired to the test database."""
    app = create_app(use_lifespan=False)

    async def override_get_db():
        async with session_factory() as session:
            try:
                yield session
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db

    yield app

    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def client(app) -> AsyncGenerator[AsyncClient, None]:
    """Create test client with database override."""
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client


class CatalogBuilder:
    """Small helpers that build test data through the public API."""

    def __init__(self, client: AsyncClient):
        self.client = client

    async def user(self, name: str = "Test Learner") -> int:
        response = await self.client.post("/api/users", json={"name": name})
        assert response.status_code == 201, response.text
        return response.json()["id"]

    async def course(self, name: str = "Test Course") -> int:
        response = await self.client.post("/api/courses", json={"name": name})
        assert response.status_code == 201, response.text
        return response.json()["id"]

    async def chapter(self, course_id: int, order: int, name: Optional[str] = None) -> int:
        response = await self.client.post(
            "/api/chapters",
            json={"name": name or f"Chapter {order}", "order": order, "courseId": course_id}
        )
        assert response.status_code == 201, response.text
        return response.json()["id"]

    async def lesson(self, chapter_id: int, order: int, name: Optional[str] = None) -> int:
        response = await self.client.post(
            "/api/lessons",
            json={"name": name or f"Lesson {order}", "order": order, "chapterId": chapter_id}
        )
        assert response.status_code == 201, response.text
        return response.json()["id"]

    async def full_course(self, chapters: int = 2, lessons: int = 2, name: str = "Test Course") -> Dict:
        """
        A course with `chapters` chapters of `lessons` lessons each.

        Returns {"course_id": int, "chapter_ids": [...], "lesson_ids": [[...], ...]}
        """
        course_id = await self.course(name)
        chapter_ids: List[int] = []
        lesson_ids: List[List[int]] = []
        for chapter_order in range(1, chapters + 1):
            chapter_id = await self.chapter(course_id, chapter_order)
            chapter_ids.append(chapter_id)
            lesson_ids.append([
                await self.lesson(chapter_id, lesson_order)
                for lesson_order in range(1, lessons + 1)
            ])
        return {"course_id": course_id, "chapter_ids": chapter_ids, "lesson_ids": lesson_ids}

    async def achievement(self, type: str, target: int, course_id: Optional[int] = None, name: Optional[str] = None) -> int:
        payload = {
            "name": name or f"{type} x{target}",
            "description": f"Reach {target} for {type}",
            "type": type,
            "target": target,
        }
        if course_id is not None:
            payload["courseId"] = course_id
        response = await self.client.post("/api/admin/achievements", json=payload)
        assert response.status_code == 201, response.text
        return response.json()["id"]

    async def complete(self, user_id: int, lesson_id: int):
        response = await self.client.post(
            "/api/lesson-progress",
            json={
                "lessonId": lesson_id,
                "userId": user_id,
                "startedAt": "2024-05-01T10:00:00Z",
                "completedAt": "2024-05-01T10:05:00Z",
            }
        )
        assert response.status_code == 201, response.text
        return response.json()

    async def user_achievements(self, user_id: int) -> Dict[int, Dict]:
        response = await self.client.get("/api/achievements", params={"userId": user_id})
        assert response.status_code == 200, response.text
        return {a["id"]: a for a in response.json()["achievements"]}


@pytest.fixture
def catalog(client) -> CatalogBuilder:
    return CatalogBuilder(client)
