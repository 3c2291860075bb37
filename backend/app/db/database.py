"""
MongoDB Database Configuration and Connection
"""

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorCollection
from pymongo import ASCENDING, DESCENDING
from pymongo.server_api import ServerApi

from app.core.config import DATABASE_NAME, MONGODB_URI, TRIPS_COLLECTION
from app.core.logging import get_logger

logger = get_logger(__name__)

# Global database client
_client = None
_database = None


def get_database():
    """
    Get MongoDB database instance
    Creates a new connection if one doesn't exist
    """
    global _client, _database

    if _database is None:
        if not MONGODB_URI:
            raise ValueError("MONGODB_URI environment variable is not set")

        # tz_aware so stored dates come back as UTC datetimes
        _client = AsyncIOMotorClient(MONGODB_URI, server_api=ServerApi("1"), tz_aware=True)
        _database = _client[DATABASE_NAME]

        logger.info("mongodb_client_created", database=DATABASE_NAME)

    return _database


async def init_indexes():
    """
    Initialize database indexes for better query performance
    """
    try:
        trips_collection = get_trips_collection()

        # Owner-scoped listing, newest first
        await trips_collection.create_index(
            [("userId", ASCENDING), ("createdAt", DESCENDING)], name="owner_created"
        )

        logger.info("mongodb_indexes_created", collection=TRIPS_COLLECTION)
    except Exception as e:
        logger.warning("mongodb_index_creation_failed", error=str(e))


async def close_database_connection():
    """
    Close the MongoDB connection
    Call this when shutting down the application
    """
    global _client, _database

    if _client:
        _client.close()
        _client = None
        _database = None
        logger.info("mongodb_connection_closed")


async def test_connection():
    """
    Test the MongoDB connection
    """
    try:
        db = get_database()
        await db.command("ping")
        logger.info("mongodb_connection_ok")
        return True
    except Exception as e:
        logger.error("mongodb_connection_failed", error=str(e))
        return False


def get_trips_collection() -> AsyncIOMotorCollection:
    """
    Get the trips collection from the database
    """
    db = get_database()
    return db[TRIPS_COLLECTION]
