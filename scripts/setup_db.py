#!/usr/bin/env python3
"""Setup script for the Mi3AD API database."""

import asyncio
import logging
import sys
from pathlib import Path

# Add the server directory to the Python path
server_dir = Path(__file__).parent.parent / "server"
sys.path.insert(0, str(server_dir))

from alembic import command
from alembic.config import Config
from mi3ad.core.database import async_session_factory, close_db
from mi3ad.services.catalog_service import seed_catalog

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def setup_database():
    """Bring the schema up to the latest migration."""
    logger.info("Setting up database...")

    alembic_cfg = Config(str(server_dir / "db" / "alembic.ini"))
    alembic_cfg.set_main_option("script_location", str(server_dir / "db" / "alembic"))

    logger.info("Running database migrations...")
    command.upgrade(alembic_cfg, "head")
    logger.info("Database migrations completed")


async def load_catalog():
    """Load the event and school catalog."""
    logger.info("Loading catalog...")

    try:
        async with async_session_factory() as db:
            inserted = await seed_catalog(db)
        if inserted:
            logger.info(f"Catalog loaded ({inserted} rows)")
        else:
            logger.info("Catalog already present, skipping...")
    finally:
        await close_db()


def main():
    """Main setup function."""
    logger.info("Starting Mi3AD API setup...")

    setup_database()
    asyncio.run(load_catalog())

    logger.info("Setup completed successfully!")
    logger.info("You can now start the API server with: cd server && uvicorn mi3ad.main:app --reload")


if __name__ == "__main__":
    main()
