"""
Database initialization script

Run once to create collections and indexes:
    python scripts/init_db.py
    python scripts/init_db.py --reset    # drop custom indexes first
"""

import argparse
import asyncio
import sys
from pathlib import Path
from dotenv import load_dotenv

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

# Load environment variables
load_dotenv()

import logging

from contacts_api.db.mongo import connect_to_mongo, close_mongo_connection, get_database
from contacts_api.db.indexes import create_indexes, drop_all_indexes

logging.basicConfig(level=logging.INFO, format='%(levelname)s: %(message)s')
logger = logging.getLogger(__name__)


async def main(reset: bool):
    await connect_to_mongo()
    try:
        database = await get_database()

        if reset:
            await drop_all_indexes(database)

        await create_indexes(database)

        for name in ("users", "contacts"):
            indexes = await database[name].index_information()
            count = await database[name].count_documents({})
            logger.info(f"{name}: {count} documents, indexes: {', '.join(sorted(indexes))}")

        logger.info("Database initialization complete")
    finally:
        await close_mongo_connection()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Create MongoDB indexes for the contacts API")
    parser.add_argument("--reset", action="store_true", help="drop custom indexes before creating them")
    args = parser.parse_args()
    asyncio.run(main(args.reset))
