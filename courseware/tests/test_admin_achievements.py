"""
Achievement catalog management tests.
"""
import pytest


def achievement_payload(**overrides):
    payload = {
        "name": "Fast Starter",
        "description": "Complete 3 lessons",
        "type": "lessons_completed",
        "target": 3,
    }
    payload.update(overrides)
    return payload


class TestCreateAchievement:

    async def test_create_counter_achievement(self, client):
        response = await client.post("/api/admin/achievements", json=achievement_payload())
        assert response.status_code == 201
        data = response.json()
        assert data["name"] == "Fast Starter"
        assert data["type"] == "lessons_completed"
        assert data["target"] == 3
        assert data["courseId"] is None

    async def test_create_course_achievement(self, client, catalog):
        course_id = await catalog.course("Swift")
        response = await client.post(
            "/api/admin/achievements",
            json=achievement_payload(
                name="Swift Expert",
                type="specific_course_completed",
                target=1,
                courseId=course_id
            )
        )
        assert response.status_code == 201
        assert response.json()["courseId"] == course_id

    async def test_course_achievement_target_must_be_one(self, client, catalog):
        course_id = await catalog.course()
        response = await client.post(
            "/api/admin/achievements",
            json=achievement_payload(type="specific_course_completed", target=2, courseId=course_id)
        )
        assert response.status_code == 400
        assert "Target must be 1" in response.json()["message"]

    async def test_course_achievement_requires_course(self, client):
        response = await client.post(
            "/api/admin/achievements",
            json=achievement_payload(type="specific_course_completed", target=1)
        )
        assert response.status_code == 400
        assert response.json()["message"] == "Course ID is required for course completion achievements"

    @pytest.mark.parametrize("type", ["lessons_completed", "chapters_completed", "courses_completed"])
    async def test_course_id_only_for_course_achievements(self, client, catalog, type):
        course_id = await catalog.course()
        response = await client.post(
            "/api/admin/achievements",
            json=achievement_payload(type=type, courseId=course_id)
        )
        assert response.status_code == 400
        assert response.json()["message"] == "Course ID can only be set for course completion achievements"

    async def test_course_must_exist(self, client):
        response = await client.post(
            "/api/admin/achievements",
            json=achievement_payload(type="specific_course_completed", target=1, courseId=999)
        )
        assert response.status_code == 404
        assert response.json()["message"] == "Course with ID 999 not found"

    @pytest.mark.parametrize("overrides", [
        {"type": "minutes_watched"},
        {"target": 0},
        {"name": ""},
        {"description": "x" * 501},
    ])
    async def test_invalid_payload(self, client, overrides):
        response = await client.post("/api/admin/achievements", json=achievement_payload(**overrides))
        assert response.status_code == 400
        assert response.json()["message"] == "Validation failed"


class TestUpdateAchievement:

    async def test_rename(self, client, catalog):
        achievement_id = await catalog.achievement("lessons_completed", 3)
        response = await client.put(
            f"/api/admin/achievements/{achievement_id}",
            json={"name": "Renamed", "description": "New text"}
        )
        assert response.status_code == 200
        assert response.json()["name"] == "Renamed"
        assert response.json()["description"] == "New text"
        assert response.json()["target"] == 3

    @pytest.mark.parametrize("body", [{"target": 10}, {"type": "courses_completed"}, {"name": "X", "target": 10}])
    async def test_target_and_type_are_immutable(self, client, catalog, body):
        achievement_id = await catalog.achievement("lessons_completed", 3, name="Original")

        response = await client.put(f"/api/admin/achievements/{achievement_id}", json=body)
        assert response.status_code == 400
        assert response.json()["message"] == "Validation failed"

        stored = (await client.get(f"/api/admin/achievements/{achievement_id}")).json()
        assert stored["target"] == 3
        assert stored["type"] == "lessons_completed"
        assert stored["name"] == "Original"

    async def test_move_course_achievement_to_another_course(self, client, catalog):
        first = await catalog.course("First")
        second = await catalog.course("Second")
        achievement_id = await catalog.achievement("specific_course_completed", 1, course_id=first)

        response = await client.put(f"/api/admin/achievements/{achievement_id}", json={"courseId": second})
        assert response.status_code == 200
        assert response.json()["courseId"] == second

        response = await client.put(f"/api/admin/achievements/{achievement_id}", json={"courseId": 999})
        assert response.status_code == 404

    async def test_course_id_rejected_for_counter_achievement(self, client, catalog):
        course_id = await catalog.course()
        achievement_id = await catalog.achievement("chapters_completed", 2)
        response = await client.put(f"/api/admin/achievements/{achievement_id}", json={"courseId": course_id})
        assert response.status_code == 400
        assert response.json()["message"] == "Course ID can only be set for course completion achievements"

    async def test_unknown_achievement(self, client):
        response = await client.put("/api/admin/achievements/999", json={"name": "Ghost"})
        assert response.status_code == 404
        assert response.json()["message"] == "Achievement with ID 999 not found"


class TestReadAndDeleteAchievements:

    async def test_list_and_get(self, client, catalog):
        first = await catalog.achievement("lessons_completed", 1)
        second = await catalog.achievement("courses_completed", 2)

        response = await client.get("/api/admin/achievements")
        assert response.status_code == 200
        assert [a["id"] for a in response.json()["achievements"]] == [first, second]

        response = await client.get(f"/api/admin/achievements/{second}")
        assert response.status_code == 200
        assert response.json()["type"] == "courses_completed"

    async def test_delete_removes_user_rows(self, client, catalog):
        user_id = await catalog.user()
        course = await catalog.full_course(chapters=1, lessons=1)
        achievement_id = await catalog.achievement("lessons_completed", 1)
        await catalog.complete(user_id, course["lesson_ids"][0][0])
        assert achievement_id in await catalog.user_achievements(user_id)

        response = await client.delete(f"/api/admin/achievements/{achievement_id}")
        assert response.status_code == 204
        assert await catalog.user_achievements(user_id) == {}

        response = await client.get(f"/api/admin/achievements/{achievement_id}")
        assert response.status_code == 404

    async def test_deleting_course_removes_its_achievements(self, client, catalog):
        course_id = await catalog.course()
        achievement_id = await catalog.achievement("specific_course_completed", 1, course_id=course_id)

        await client.delete(f"/api/courses/{course_id}")

        response = await client.get(f"/api/admin/achievements/{achievement_id}")
        assert response.status_code == 404
