"""Boundary Protocols — contracts between the entity service and storage.

Invariants:
    - Services NEVER import the Mongo driver client directly
    - All IO operations accessed through Protocol types
    - Implementations provided by infrastructure (or test fakes) via dependency injection

Design Decisions:
    - Protocol over ABC: structural subtyping, the motor collection satisfies it as-is
    - Method names and signatures mirror the async driver so no adapter layer is needed
"""

from typing import Any, Mapping, Protocol


class DocumentCursor(Protocol):
    """Async cursor returned by find()."""
    async def to_list(self, length: int | None = None) -> list[dict]: ...


class InsertResult(Protocol):
    inserted_id: Any


class DocumentCollection(Protocol):
    """Contract for one collection of entity documents."""
    def find(self, filter: Mapping[str, Any] | None = None) -> DocumentCursor: ...
    async def find_one(self, filter: Mapping[str, Any]) -> dict | None: ...
    async def insert_one(self, document: dict) -> InsertResult: ...
    async def find_one_and_update(
        self, filter: Mapping[str, Any], update: Mapping[str, Any], **kwargs: Any,
    ) -> dict | None: ...
    async def find_one_and_delete(self, filter: Mapping[str, Any]) -> dict | None: ...


class DocumentStore(Protocol):
    """Contract for the storage handle shared by all requests."""
    indexes_ready: bool

    def collection(self, name: str) -> DocumentCollection: ...
    async def ping(self) -> bool: ...
    async def ensure_indexes(self, schemas) -> None: ...
