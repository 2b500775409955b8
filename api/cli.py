#!/usr/bin/env python3
"""CLI for directory API management tasks.

Usage:
    python -m cli <command>

Commands:
    migrate    Run database migrations (alembic upgrade)
    seed       Load sample catalog entries and companies
"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def _get_alembic_config():
    from alembic.config import Config

    api_dir = Path(__file__).resolve().parent
    cfg = Config(str(api_dir / "alembic.ini"))
    # Absolute script_location so it works from any working directory.
    cfg.set_main_option("script_location", str(api_dir / "alembic"))
    return cfg


def cmd_migrate(target: str) -> int:
    """Run database migrations."""
    from alembic import command

    logger.info("Running database migrations to %s...", target)
    command.upgrade(_get_alembic_config(), target)
    logger.info("Migrations complete")
    return 0


async def _seed() -> None:
    from core.database import create_engine, create_session_maker, dispose_engine
    from services.seed_service import seed_sample_data

    engine = create_engine()
    try:
        session_maker = create_session_maker(engine)
        async with session_maker() as session:
            result = await seed_sample_data(session)
            await session.commit()
        logger.info(
            "Seeded %d services, %d companies, %d assignments",
            result.services_created,
            result.companies_created,
            result.assignments_created,
        )
    finally:
        await dispose_engine(engine)


def cmd_seed() -> int:
    """Load sample data."""
    logger.info("Seeding sample data...")
    asyncio.run(_seed())
    return 0


def main() -> int:
    parser = argparse.ArgumentParser(
        description="Local service directory CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    migrate = subparsers.add_parser(
        "migrate",
        help="Run database migrations",
    )
    migrate.add_argument(
        "target",
        nargs="?",
        default="head",
        help="Target revision (default: head)",
    )
    subparsers.add_parser(
        "seed",
        help="Load sample catalog entries and companies",
    )

    args = parser.parse_args()

    if args.command == "migrate":
        return cmd_migrate(args.target)
    elif args.command == "seed":
        return cmd_seed()
    else:
        parser.print_help()
        return 1


if __name__ == "__main__":
    sys.exit(main())
