"""
Application-level behaviour: health, error envelope, seed data and CLI.
"""
from unittest.mock import patch

from sqlalchemy import func, select

from courseware.cli import create_parser, main
from courseware.config.settings import Settings, get_bool_env, get_list_env
from courseware.orm.achievement import Achievement, UserAchievement
from courseware.orm.course import Course
from courseware.orm.lesson import Lesson
from courseware.seed.seed_catalog import seed_catalog


class TestHealth:

    async def test_health(self, client):
        response = await client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    async def test_unknown_route_uses_error_envelope(self, client):
        response = await client.get("/api/nowhere")
        assert response.status_code == 404
        data = response.json()
        assert data["success"] is False
        assert "message" in data


class TestOpenAPI:

    async def test_error_envelope_is_documented(self, app):
        schema = app.openapi()
        assert "ErrorResponse" in schema["components"]["schemas"]

        responses = schema["paths"]["/api/chapters/{chapter_id}"]["put"]["responses"]
        for status_code in ("400", "404"):
            ref = responses[status_code]["content"]["application/json"]["schema"]["$ref"]
            assert ref.endswith("/ErrorResponse")

    async def test_course_handlers_are_named_for_courses(self, app):
        names = {
            route.name for route in app.routes
            if getattr(route, "path", "").startswith("/api/courses")
        }
        assert names == {"create_course", "list_courses", "get_course", "update_course", "delete_course"}


class TestSeedCatalog:

    async def test_seed_is_idempotent(self, session_factory):
        async with session_factory() as session:
            counts = await seed_catalog(session)
        assert counts == {"courses": 3, "chapters": 15, "lessons": 75, "users": 1, "achievements": 10}

        async with session_factory() as session:
            assert not any((await seed_catalog(session)).values())

            assert (await session.execute(select(func.count(Course.id)))).scalar_one() == 3
            assert (await session.execute(select(func.count(Lesson.id)))).scalar_one() == 75
            experts = (await session.execute(
                select(Achievement.name).where(Achievement.course_id.is_not(None)).order_by(Achievement.id)
            )).scalars().all()
            assert experts == ["Swift Expert", "Javascript Expert", "C# Expert"]
            assert (await session.execute(select(func.count(UserAchievement.id)))).scalar_one() == 10

    async def test_seeded_catalog_drives_achievements(self, client, session_factory):
        async with session_factory() as session:
            await seed_catalog(session)

        users = (await client.get("/api/users")).json()["users"]
        user_id = users[0]["id"]
        chapters = (await client.get("/api/chapters", params={"courseId": 1})).json()["chapters"]
        lessons = (await client.get("/api/lessons", params={"chapterId": chapters[0]["id"]})).json()["lessons"]

        for lesson in lessons:
            response = await client.post(
                "/api/lesson-progress",
                json={
                    "lessonId": lesson["id"],
                    "userId": user_id,
                    "startedAt": "2024-05-01T10:00:00Z",
                    "completedAt": "2024-05-01T10:05:00Z",
                }
            )
            assert response.status_code == 201

        achievements = {
            a["name"]: a
            for a in (await client.get("/api/achievements", params={"userId": user_id})).json()["achievements"]
        }
        assert achievements["Beginner Learner"]["completed"] is True
        assert achievements["Chapter Novice"]["completed"] is True
        assert achievements["Intermediate Learner"]["progress"] == 5
        assert achievements["Swift Expert"]["progress"] == 0


class TestSettings:

    def test_bool_env(self, monkeypatch):
        monkeypatch.setenv("COURSEWARE_FLAG", "yes")
        assert get_bool_env("COURSEWARE_FLAG") is True
        monkeypatch.setenv("COURSEWARE_FLAG", "off")
        assert get_bool_env("COURSEWARE_FLAG") is False
        assert get_bool_env("COURSEWARE_MISSING", True) is True

    def test_settings_read_environment(self, monkeypatch):
        monkeypatch.setenv("DATABASE_URL", "postgresql+asyncpg://db/courseware")
        monkeypatch.setenv("ALLOWED_ORIGINS", "https://a.example, https://b.example")
        monkeypatch.setenv("ENVIRONMENT", "production")
        settings = Settings()
        assert not settings.is_sqlite
        assert not settings.is_development
        assert settings.ALLOWED_ORIGINS == ["https://a.example", "https://b.example"]
        assert get_list_env("COURSEWARE_MISSING") == []


class TestCLI:

    def test_db_reset_parsing(self):
        args = create_parser().parse_args(["db", "reset", "--force", "--seed"])
        assert args.command == "db"
        assert args.db_action == "reset"
        assert args.force is True
        assert args.seed is True

    def test_stats_parsing(self):
        args = create_parser().parse_args(["stats", "--user-id", "7"])
        assert args.command == "stats"
        assert args.user_id == 7

    def test_no_command_prints_help(self, capsys):
        assert main([]) == 1
        assert "usage" in capsys.readouterr().out.lower()

    def test_dry_run_touches_nothing(self, capsys):
        with patch("courseware.cli.db_commands.drop_db") as drop_db:
            assert main(["--dry-run", "db", "reset", "--force"]) == 0
            drop_db.assert_not_called()
        assert "[DRY RUN]" in capsys.readouterr().out

    def test_config_command(self, capsys):
        assert main(["config"]) == 0
        assert "DATABASE_URL" in capsys.readouterr().out
