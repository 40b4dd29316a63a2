"""
Database CLI commands: init, seed, reset
"""
import asyncio

from courseware.database import AsyncSessionLocal, engine, init_db, drop_db
from courseware.seed.seed_catalog import seed_catalog


class DbCommand:
    """Database CLI command handler."""

    def __init__(self, dry_run: bool = False):
        self.dry_run = dry_run

    def execute(self, args) -> int:
        """Execute database command."""
        if args.db_action == "init":
            return self._init(args)
        elif args.db_action == "seed":
            return self._seed(args)
        elif args.db_action == "reset":
            return self._reset(args)
        else:
            print("Error: Unknown database action")
            return 1

    def _init(self, args) -> int:
        print("=== Database Init ===")
        print(f"Database: {engine.url.render_as_string(hide_password=True)}")
        if self.dry_run:
            print("[DRY RUN] Would create missing tables")
            return 0
        asyncio.run(self._run(init_db()))
        print("Tables created")
        return 0

    def _seed(self, args) -> int:
        print("=== Database Seed ===")
        if self.dry_run:
            print("[DRY RUN] Would seed the demo catalog")
            return 0
        counts = asyncio.run(self._run(self._seed_catalog()))
        if not any(counts.values()):
            print("Catalog already present, nothing to do")
        else:
            for table, count in counts.items():
                print(f"  {table}: {count}")
        return 0

    def _reset(self, args) -> int:
        print("=== Database Reset ===")
        if self.dry_run:
            print("[DRY RUN] Would drop and recreate every table")
            return 0
        if not args.force:
            answer = input("This deletes ALL data. Type 'reset' to continue: ")
            if answer.strip() != "reset":
                print("Aborted")
                return 1

        asyncio.run(self._run(self._reset_tables(args.seed)))
        print("Database reset complete")
        return 0

    async def _seed_catalog(self):
        await init_db()
        async with AsyncSessionLocal() as session:
            return await seed_catalog(session)

    async def _reset_tables(self, seed: bool):
        await drop_db()
        await init_db()
        if seed:
            async with AsyncSessionLocal() as session:
                await seed_catalog(session)

    @staticmethod
    async def _run(coro):
        """Await `coro`, then release pooled connections before the loop closes."""
        try:
            return await coro
        finally:
            await engine.dispose()
