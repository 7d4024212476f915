"""Database Client — async MongoDB handle with index setup and health checks.

Invariants:
    - One MongoStore per process, built in the lifespan and held on app.state
    - indexes_ready flips to True only after every unique index was created;
      until then entity routes retry ensure_indexes and answer 503 on failure
    - Driver failures during startup are mapped to DatabaseError (core/errors.py)

Design Decisions:
    - motor AsyncIOMotorClient: requests suspend on storage IO instead of blocking the loop
    - No module-level client: handlers receive the store through get_store (api/dependencies.py)
"""

import logging
from typing import Iterable

from motor.motor_asyncio import AsyncIOMotorClient
from pymongo import ASCENDING
from pymongo.errors import PyMongoError

from app.config import Settings
from app.core.errors import DatabaseError
from app.core.repository_protocols import DocumentCollection
from app.core.validation import EntitySchema

logger = logging.getLogger(__name__)


class MongoStore:
    """Owns the motor client and hands out entity collections."""

    def __init__(
        self, uri: str, default_db_name: str,
        server_selection_timeout_ms: int = 5000,
    ):
        self.client = AsyncIOMotorClient(
            uri, serverSelectionTimeoutMS=server_selection_timeout_ms,
        )
        self.db = self.client.get_default_database(default=default_db_name)
        self.indexes_ready = False

    @classmethod
    def from_settings(cls, settings: Settings) -> "MongoStore":
        return cls(
            settings.mongo_uri,
            settings.mongo_db_name,
            settings.mongo_server_selection_timeout_ms,
        )

    def collection(self, name: str) -> DocumentCollection:
        return self.db[name]

    async def ensure_indexes(self, schemas: Iterable[EntitySchema]) -> None:
        """Create one unique index per unique field (idempotent)."""
        for schema in schemas:
            for field_name in schema.unique_fields:
                try:
                    await self.db[schema.collection].create_index(
                        [(field_name, ASCENDING)], unique=True,
                    )
                except PyMongoError as e:
                    logger.error(
                        f"Index creation failed for {schema.collection}.{field_name}: {e}",
                    )
                    raise DatabaseError(str(e), "create_index")
                logger.info(
                    f"Unique index ensured on {schema.collection}.{field_name}",
                    extra={"entity": schema.name},
                )
        self.indexes_ready = True

    async def ping(self) -> bool:
        """Check database connectivity (for readiness probes)."""
        try:
            await self.client.admin.command("ping")
            return True
        except PyMongoError as e:
            logger.error(f"DB health check failed: {e}")
            return False

    def close(self) -> None:
        self.client.close()
