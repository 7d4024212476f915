"""Route Dependencies — inject the storage handle and entity services.

Invariants:
    - The store is read from app.state, where the lifespan placed it
    - Entity services are only built on an indexed store: a failed startup
      index build is retried here, and a still-failing one answers 503
    - Services are built per request; they hold no state beyond the collection handle
"""

from fastapi import Depends, Request

from app.core.entity_schemas import ENTITY_SCHEMAS, GROUP_SCHEMA, USER_SCHEMA
from app.core.errors import DatabaseError
from app.core.repository_protocols import DocumentStore
from app.services.entity_service import EntityService


def get_store(request: Request) -> DocumentStore:
    """FastAPI dependency for the shared storage handle."""
    store = getattr(request.app.state, "store", None)
    if store is None:
        raise DatabaseError("Database not initialized", "connect")
    return store


async def get_indexed_store(store: DocumentStore = Depends(get_store)) -> DocumentStore:
    """The shared store, once its unique indexes exist."""
    if not store.indexes_ready:
        await store.ensure_indexes(ENTITY_SCHEMAS)
    return store


def get_user_service(store: DocumentStore = Depends(get_indexed_store)) -> EntityService:
    return EntityService(USER_SCHEMA, store.collection(USER_SCHEMA.collection))


def get_group_service(store: DocumentStore = Depends(get_indexed_store)) -> EntityService:
    return EntityService(GROUP_SCHEMA, store.collection(GROUP_SCHEMA.collection))
