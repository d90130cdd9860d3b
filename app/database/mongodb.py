# app/database/mongodb.py

import functools

from motor.motor_asyncio import AsyncIOMotorClient
from pymongo.errors import PyMongoError

from app.core.config import get_settings
from app.core.errors import CollaboratorError

settings = get_settings()

client = AsyncIOMotorClient(settings.mongo_url)

db = client[settings.mongo_db]
practice_sessions_collection = db["practice_sessions"]
knowledge_files_collection = db["knowledge_files"]


def storage_call(func):
    """Wrap an async storage method so driver failures surface as CollaboratorError."""

    @functools.wraps(func)
    async def wrapper(*args, **kwargs):
        try:
            return await func(*args, **kwargs)
        except PyMongoError as exc:
            raise CollaboratorError(f"Storage error: {exc}") from exc

    return wrapper
