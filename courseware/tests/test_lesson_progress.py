"""
Lesson progress recording tests.
"""
from sqlalchemy import func, select

from courseware.orm.lesson_progress import LessonProgress


def progress_payload(user_id, lesson_id, **overrides):
    payload = {
        "lessonId": lesson_id,
        "userId": user_id,
        "startedAt": "2024-05-01T10:00:00Z",
        "completedAt": "2024-05-01T10:05:00Z",
    }
    payload.update(overrides)
    return payload


class TestRecordProgress:

    async def test_records_completion(self, client, catalog):
        user_id = await catalog.user()
        course = await catalog.full_course(chapters=1, lessons=1)
        lesson_id = course["lesson_ids"][0][0]

        response = await client.post("/api/lesson-progress", json=progress_payload(user_id, lesson_id))
        assert response.status_code == 201
        data = response.json()
        assert data["message"] == "Lesson progress recorded successfully"
        assert data["progress"]["userId"] == user_id
        assert data["progress"]["lessonId"] == lesson_id
        assert data["progress"]["startedAt"].startswith("2024-05-01T10:00:00")
        assert data["progress"]["completedAt"].startswith("2024-05-01T10:05:00")
        assert "id" in data["progress"]

    async def test_timezone_offsets_are_normalised_to_utc(self, client, catalog):
        user_id = await catalog.user()
        course = await catalog.full_course(chapters=1, lessons=1)
        response = await client.post(
            "/api/lesson-progress",
            json=progress_payload(
                user_id,
                course["lesson_ids"][0][0],
                startedAt="2024-05-01T12:00:00+02:00",
                completedAt="2024-05-01T12:30:00+02:00"
            )
        )
        assert response.status_code == 201
        assert response.json()["progress"]["startedAt"].startswith("2024-05-01T10:00:00")

    async def test_repeat_completions_are_all_stored(self, client, catalog, session_factory):
        user_id = await catalog.user()
        course = await catalog.full_course(chapters=1, lessons=1)
        lesson_id = course["lesson_ids"][0][0]

        first = await catalog.complete(user_id, lesson_id)
        second = await catalog.complete(user_id, lesson_id)
        assert first["progress"]["id"] != second["progress"]["id"]

        async with session_factory() as session:
            result = await session.execute(
                select(func.count(LessonProgress.id)).where(
                    LessonProgress.user_id == user_id,
                    LessonProgress.lesson_id == lesson_id
                )
            )
            assert result.scalar_one() == 2

    async def test_unknown_user(self, client, catalog):
        course = await catalog.full_course(chapters=1, lessons=1)
        response = await client.post(
            "/api/lesson-progress",
            json=progress_payload(999, course["lesson_ids"][0][0])
        )
        assert response.status_code == 404
        assert response.json()["message"] == "User with ID 999 not found"

    async def test_unknown_lesson(self, client, catalog):
        user_id = await catalog.user()
        response = await client.post("/api/lesson-progress", json=progress_payload(user_id, 999))
        assert response.status_code == 404
        assert response.json()["message"] == "Lesson with ID 999 not found"

    async def test_completed_before_started_is_rejected(self, client, catalog):
        user_id = await catalog.user()
        course = await catalog.full_course(chapters=1, lessons=1)
        response = await client.post(
            "/api/lesson-progress",
            json=progress_payload(
                user_id,
                course["lesson_ids"][0][0],
                startedAt="2024-05-01T10:05:00Z",
                completedAt="2024-05-01T10:00:00Z"
            )
        )
        assert response.status_code == 400
        assert response.json()["message"] == "Validation failed"

    async def test_missing_and_malformed_fields(self, client):
        response = await client.post(
            "/api/lesson-progress",
            json={"lessonId": "abc", "startedAt": "yesterday"}
        )
        assert response.status_code == 400
        data = response.json()
        assert data["message"] == "Validation failed"
        # lessonId, userId, startedAt and completedAt each fail
        assert len(data["errors"]) >= 4


class TestCompletionCounting:

    async def test_count_lessons_completed_counts_distinct_lessons(self, app, catalog, session_factory):
        user_id = await catalog.user()
        course = await catalog.full_course(chapters=1, lessons=3)
        lessons = course["lesson_ids"][0]
        await catalog.complete(user_id, lessons[0])
        await catalog.complete(user_id, lessons[0])
        await catalog.complete(user_id, lessons[2])

        service = app.state.services.lesson_progress
        async with session_factory() as session:
            assert await service.count_lessons_completed(session, user_id) == 2

    async def test_chapter_and_course_completion_checks(self, app, catalog, session_factory):
        user_id = await catalog.user()
        course = await catalog.full_course(chapters=2, lessons=2)
        service = app.state.services.lesson_progress

        for lesson_id in course["lesson_ids"][0]:
            await catalog.complete(user_id, lesson_id)

        async with session_factory() as session:
            assert await service.is_chapter_completed(session, user_id, course["chapter_ids"][0])
            assert not await service.is_chapter_completed(session, user_id, course["chapter_ids"][1])
            assert not await service.is_course_completed(session, user_id, course["course_id"])

        for lesson_id in course["lesson_ids"][1]:
            await catalog.complete(user_id, lesson_id)

        async with session_factory() as session:
            assert await service.is_course_completed(session, user_id, course["course_id"])
