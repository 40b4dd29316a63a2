"""
Read-only CLI commands: learner stats and configuration
"""
import asyncio

from courseware.config import settings
from courseware.database import AsyncSessionLocal, engine
from courseware.errors import APIError
from courseware.services import build_services


class StatsCommand:
    """Print one learner's progress summary."""

    def __init__(self, dry_run: bool = False):
        self.dry_run = dry_run
        self.services = build_services()

    def execute(self, args) -> int:
        try:
            lessons, achievements = asyncio.run(self._collect(args.user_id))
        except APIError as e:
            print(f"Error: {e.message}")
            return 1

        completed = [a for a in achievements if a["completed"]]
        print(f"=== Stats for user {args.user_id} ===")
        print(f"Lessons completed:      {lessons}")
        print(f"Achievements completed: {len(completed)}/{len(achievements)}")
        for achievement in achievements:
            mark = "x" if achievement["completed"] else " "
            print(f"  [{mark}] {achievement['name']} ({achievement['progress']}/{achievement['target']})")
        return 0

    async def _collect(self, user_id: int):
        try:
            async with AsyncSessionLocal() as session:
                lessons = await self.services.lesson_progress.count_lessons_completed(session, user_id)
                achievements = await self.services.achievements.get_user_achievements(session, user_id)
                return lessons, achievements
        finally:
            await engine.dispose()


class ConfigCommand:
    """Show the settings the API would start with."""

    def __init__(self, dry_run: bool = False):
        self.dry_run = dry_run

    def execute(self, args) -> int:
        print("=== Configuration ===")
        for key, value in settings.as_dict().items():
            print(f"  {key}: {value}")
        return 0
