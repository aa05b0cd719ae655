import logging

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase

from config import get_settings

logger = logging.getLogger(__name__)

settings = get_settings()
client = AsyncIOMotorClient(settings.mongo_url, serverSelectionTimeoutMS=5000)
db = client[settings.db_name]


def get_db() -> AsyncIOMotorDatabase:
    """FastAPI dependency; tests override it with an in-memory database."""
    return db


async def ensure_indexes(database: AsyncIOMotorDatabase):
    await database.users.create_index("id", unique=True)
    await database.users.create_index("email", unique=True)
    await database.users.create_index([("role", 1), ("blood_type", 1), ("region", 1)])
    await database.donors.create_index("user_id", unique=True)
    await database.blood_inventory.create_index("blood_type", unique=True)
    await database.requests.create_index("id", unique=True)
    await database.requests.create_index([("region", 1), ("createdAt", -1)])
    await database.notifications.create_index("id", unique=True)
    await database.blood_banks.create_index("name", unique=True)
    logger.info("Indexes ensured on %s", database.name)
