import os
import logging
from datetime import timezone
from pymongo import MongoClient
from pymongo.errors import PyMongoError

logger = logging.getLogger(__name__)

# Driver-level logs are noisy at INFO
logging.getLogger('pymongo').setLevel(logging.WARNING)

MONGO_URL = os.getenv('MONGO_URL')
DATABASE_NAME = os.getenv('MONGODB_DATABASE', 'accounts')
MONGO_TIMEOUT_MS = int(os.getenv('MONGO_TIMEOUT_MS', '5000'))
USERS_COLLECTION_NAME = 'users'

_client = None


def reset_client():
    global _client
    if _client is not None:
        _client.close()
    _client = None


def get_mongodb_client() -> MongoClient | None:
    """Return the shared MongoDB client, connecting on first use.

    The client reads dates back as UTC-aware datetimes. Returns None when
    MONGO_URL is unset or the server does not answer the initial ping; the
    next call tries again. Once connected, the driver handles reconnects.
    """
    global _client

    if _client is not None:
        return _client

    if not MONGO_URL:
        logger.error("[MONGODB] MONGO_URL not configured.")
        return None

    client = MongoClient(
        MONGO_URL,
        tz_aware=True,
        tzinfo=timezone.utc,
        serverSelectionTimeoutMS=MONGO_TIMEOUT_MS,
        connectTimeoutMS=MONGO_TIMEOUT_MS,
        maxPoolSize=10,
        retryWrites=True,
        retryReads=True,
    )
    try:
        client.admin.command('ping')
    except PyMongoError as e:
        logger.error("[MONGODB] Connection failed", extra={"error": str(e)[:200]})
        client.close()
        return None

    logger.info(f"[MONGODB] Connected successfully to {DATABASE_NAME}")
    _client = client
    return client
