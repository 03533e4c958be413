"""

songapp/core/database.py

"""


from motor.motor_asyncio import AsyncIOMotorClient
from pymongo import ASCENDING, DESCENDING
from songapp.core.config import settings
import logging

logger = logging.getLogger(__name__)

class Database:
    client: AsyncIOMotorClient = None
    db = None

db = Database()

async def connect_to_mongo():
    """Create database connection."""
    try:
        db.client = AsyncIOMotorClient(settings.MONGODB_URL, tz_aware=True)
        db.db = db.client[settings.DATABASE_NAME]

        # Fail fast when the server is unreachable
        await db.client.admin.command("ping")

        await create_indexes()

        logger.info(f"Connected to MongoDB database '{settings.DATABASE_NAME}'")
    except Exception as e:
        logger.error(f"Could not connect to MongoDB: {e}")
        raise

async def close_mongo_connection():
    """Close database connection."""
    if db.client:
        db.client.close()
        db.client = None
        db.db = None
        logger.info("Disconnected from MongoDB")

async def create_indexes():
    """Create song indexes used by the filter and sort paths"""
    songs = db.db[settings.SONGS_COLLECTION]
    try:
        await songs.create_index([("artist", ASCENDING)])
        await songs.create_index([("genre", ASCENDING)])
        await songs.create_index([("album", ASCENDING)])
        await songs.create_index([("created_at", DESCENDING)])

        logger.info("Database indexes created")
    except Exception as e:
        logger.error(f"Error creating indexes: {e}")

def get_database():
    """Get database instance"""
    return db.db
