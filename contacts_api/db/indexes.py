"""
contacts_api/db/indexes.py

Purpose: Database index management

- Unique email index (duplicate registrations fail at the store level)
- Lookup index for verification tokens
- Owner-scoped indexes for contact listing
"""

from pymongo import ASCENDING

from contacts_api.db.mongo import get_users_collection, get_contacts_collection
from contacts_api.core.logging import get_logger

logger = get_logger(__name__)


async def create_indexes(database):
    """
    Creates all necessary database indexes.
    This function is idempotent - safe to run multiple times.
    """
    try:
        users = get_users_collection(database)
        contacts = get_contacts_collection(database)

        logger.info("Creating database indexes...")

        # ==============================================
        # USERS COLLECTION INDEXES
        # ==============================================

        await users.create_index([("email", ASCENDING)], unique=True, name="email_unique")
        logger.debug("Created unique index on users.email")

        await users.create_index(
            [("verificationToken", ASCENDING)],
            sparse=True,
            name="verification_token_idx"
        )
        logger.debug("Created index on users.verificationToken")

        # ==============================================
        # CONTACTS COLLECTION INDEXES
        # ==============================================

        await contacts.create_index([("owner", ASCENDING)], name="owner_idx")
        logger.debug("Created index on contacts.owner")

        await contacts.create_index(
            [("owner", ASCENDING), ("favorite", ASCENDING)],
            name="owner_favorite_idx"
        )
        logger.debug("Created compound index on contacts.owner + favorite")

        user_indexes = await users.index_information()
        contact_indexes = await contacts.index_information()

        logger.info(
            f"Index summary: Users={len(user_indexes)}, Contacts={len(contact_indexes)}"
        )

    except Exception as e:
        logger.error(f"Failed to create indexes: {str(e)}", exc_info=True)
        raise


async def drop_all_indexes(database):
    """
    Drops all custom indexes (keeps _id index).
    Only for maintenance/migration.
    """
    users = get_users_collection(database)
    contacts = get_contacts_collection(database)

    logger.warning("Dropping all database indexes...")

    await users.drop_indexes()
    await contacts.drop_indexes()

    logger.info("All indexes dropped")
