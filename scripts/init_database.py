"""Initialize the database schema and seed the first admin.

Creates all tables from the models and, when given, records an admin uid so
that user can sign in to the ingestion tool.

Usage:
    python scripts/init_database.py [--admin-uid UID] [--reset]

Environment Variables:
    DATABASE_URL: Database connection string
"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path

# Add project root to Python path
sys.path.insert(0, str(Path(__file__).parent.parent))

from core.database import close_db, get_session_maker, init_db
from core.logging_config import setup_logging
from storage.user_store import UserStore

logger = logging.getLogger(__name__)


async def main(admin_uid: str | None, reset: bool) -> None:
    """Initialize database."""
    logger.info("Dropping and recreating all tables..." if reset else "Creating database tables...")
    await init_db(drop_existing=reset)
    logger.info("All tables created successfully")

    if admin_uid:
        async with get_session_maker()() as session:
            store = UserStore(session)
            await store.add_admin(admin_uid)
            await store.set_custom_claims(admin_uid, admin=True)
        logger.info(f"Added admin: {admin_uid}")

    await close_db()
    logger.info("Database initialization complete")


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Initialize the database")
    parser.add_argument("--admin-uid", help="Identity provider uid to grant admin rights")
    parser.add_argument("--reset", action="store_true", help="Drop existing tables first")
    args = parser.parse_args()

    setup_logging()
    asyncio.run(main(args.admin_uid, args.reset))
