#!/usr/bin/env python
"""
Seed the development database with a demo story.

Creates the tables if needed and inserts "The Enchanted Garden" with three
sample episodes, unless the database already holds stories.

Usage:
    python scripts/seed_demo_data.py
    python scripts/seed_demo_data.py --database-url sqlite+aiosqlite:///storyvote_dev.db
"""

import sys
import asyncio
import logging
import argparse
from pathlib import Path

from dotenv import load_dotenv

# Allow running from a checkout without installing the package
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

# Load environment variables
load_dotenv()

from storyvote.utils.database import create_tables, get_engine, get_session_local
from storyvote.utils.seed import seed_demo_data

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger("seed_demo_data")


async def run(database_url=None) -> int:
    engine = get_engine(database_url)
    try:
        await create_tables(engine)
        session_factory = get_session_local(engine)
        async with session_factory() as session:
            story = await seed_demo_data(session)
        if story is None:
            logger.info("Database already has stories, nothing to do")
        else:
            logger.info(f"Seeded story #{story.story_number} ({story.id})")
        return 0
    except Exception as e:
        logger.error(f"Seeding failed: {e}")
        return 1
    finally:
        await engine.dispose()


def main():
    parser = argparse.ArgumentParser(description="Seed the database with a demo story.")
    parser.add_argument(
        "--database-url",
        help="Database URL (defaults to the URL derived from the environment)"
    )
    args = parser.parse_args()
    return asyncio.run(run(args.database_url))


if __name__ == "__main__":
    sys.exit(main())
