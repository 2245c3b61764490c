import logging
from contextlib import contextmanager
from typing import Iterator

from pymongo import MongoClient
from pymongo.database import Database
from pymongo.errors import PyMongoError

from recitations.core.config import MONGODB, Settings
from recitations.core.errors import DatabaseConnectionError

logger = logging.getLogger(__name__)


def connect(settings: Settings, client_factory=MongoClient) -> MongoClient:
    logger.info("[%s] Connecting...", MONGODB)
    client = None
    try:
        client = client_factory(
            settings.mongo_uri,
            serverSelectionTimeoutMS=settings.server_selection_timeout_ms,
        )
        # MongoClient connects lazily; ping forces server selection now
        client.admin.command("ping")
    except PyMongoError as exc:
        logger.error("[%s] Connection error: %s", MONGODB, exc)
        if client is not None:
            client.close()
        raise DatabaseConnectionError(str(exc)) from exc
    logger.info("[%s] Connected", MONGODB)
    return client


def disconnect(client: MongoClient) -> None:
    logger.info("[%s] Disconnecting...", MONGODB)
    try:
        client.close()
    except PyMongoError as exc:
        logger.warning("[%s] Disconnection error: %s", MONGODB, exc)
        return
    logger.info("[%s] Disconnected", MONGODB)


# the run gets one database handle, and the client always closes.
@contextmanager
def get_db(settings: Settings, client_factory=MongoClient) -> Iterator[Database]:
    client = connect(settings, client_factory=client_factory)
    try:
        yield client[settings.mongo_db]
    finally:
        disconnect(client)
