from __future__ import annotations

import argparse
import asyncio
import sys

from music_library.core.errors import StorageError
from music_library.core.logging import logger, setup_logging
from music_library.db.session import DatabaseManager


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Create the tracks table")
    p.add_argument(
        "--reset",
        action="store_true",
        help="Drop and recreate the table (destroys all tracks)",
    )
    p.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Log verbosity",
    )
    return p.parse_args(argv)


async def setup_database(db: DatabaseManager, reset: bool = False) -> None:
    try:
        await db.ping()
        logger.info("Connection to database successfully established.")
        await db.init_schema(reset=reset)
        logger.info("Database file ready at: %s", db.settings.url)
    finally:
        await db.dispose()
        logger.info("Database connection closed")


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    setup_logging(args.log_level)

    try:
        asyncio.run(setup_database(DatabaseManager(), reset=args.reset))
    except StorageError:
        logger.exception("Unable to connect to the database")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
