#!/usr/bin/env python3
"""
Courseware management CLI

Usage:
    python -m courseware.cli <command> [options]

Commands:
    db          Database operations (init, seed, reset)
    stats       Learner statistics (completed lessons, achievements)
    config      Show the effective configuration

Environment:
    DATABASE_URL    Async SQLAlchemy URL (default: local SQLite file)
    LOG_LEVEL       DEBUG|INFO|WARNING|ERROR
"""
import sys
import argparse
import logging
from typing import Optional

from courseware.cli.db_commands import DbCommand
from courseware.cli.stats_commands import StatsCommand, ConfigCommand


def setup_logging(level: str = "INFO") -> None:
    """Configure logging."""
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )


def create_parser() -> argparse.ArgumentParser:
    """Create CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="courseware",
        description="Courseware management CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s db init
  %(prog)s db seed
  %(prog)s db reset --force
  %(prog)s stats --user-id 1
        """
    )

    parser.add_argument(
        "--version",
        action="version",
        version="%(prog)s 1.0.0"
    )

    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: INFO)"
    )

    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Show what would be done without executing"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Database commands
    db_parser = subparsers.add_parser("db", help="Database operations")
    db_subparsers = db_parser.add_subparsers(dest="db_action")

    db_subparsers.add_parser("init", help="Create missing tables")
    db_subparsers.add_parser("seed", help="Insert the demo catalog (skipped if courses exist)")

    reset_parser = db_subparsers.add_parser("reset", help="Drop and recreate every table")
    reset_parser.add_argument("--force", action="store_true", help="Skip confirmation")
    reset_parser.add_argument("--seed", action="store_true", help="Seed the demo catalog afterwards")

    # Stats
    stats_parser = subparsers.add_parser("stats", help="Learner statistics")
    stats_parser.add_argument("--user-id", "-u", type=int, required=True, help="User ID")

    # Config
    subparsers.add_parser("config", help="Show configuration")

    return parser


def main(args: Optional[list] = None) -> int:
    """Main entry point."""
    parser = create_parser()
    parsed = parser.parse_args(args)

    if not parsed.command:
        parser.print_help()
        return 1

    setup_logging(parsed.log_level)

    command_map = {
        "db": DbCommand,
        "stats": StatsCommand,
        "config": ConfigCommand,
    }

    if parsed.command in command_map:
        handler = command_map[parsed.command](dry_run=parsed.dry_run)
        return handler.execute(parsed)

    parser.print_help()
    return 1
