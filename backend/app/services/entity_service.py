"""Entity Service — the validate-then-persist contract shared by users and groups.

Invariants:
    - Every operation performs at most one write and returns exactly one Outcome
    - Nothing is written unless validate_document accepted the full document
    - Malformed identifiers never reach the collection
    - Unique-index violations surface as Conflict, never as a raised driver error
    - Returned documents expose _id as a string

Design Decisions:
    - Update reads, merges and validates in Python, then writes with $set:
      the merged document is checked against the same rules as a create
    - Unexpected driver faults propagate to the global catch-all handler
"""

import logging
from typing import Any, Mapping

from pymongo import ReturnDocument
from pymongo.errors import DuplicateKeyError

from app.core.domain_types import Document, parse_document_id
from app.core.outcomes import (
    Conflict, InvalidIdentifier, NotFound, Outcome, Success, ValidationFailed,
)
from app.core.repository_protocols import DocumentCollection
from app.core.validation import (
    EntitySchema, ValidationResult, merge_for_update, validate_document,
)

logger = logging.getLogger(__name__)


def to_public(document: Mapping[str, Any]) -> Document:
    """Stored document → JSON-ready dict with a string _id first."""
    public: Document = {"_id": str(document["_id"])}
    public.update({k: v for k, v in document.items() if k != "_id"})
    return public


class EntityService:
    """CRUD operations for one entity schema over one collection."""

    def __init__(self, schema: EntitySchema, collection: DocumentCollection):
        self.schema = schema
        self.collection = collection

    async def create(self, payload: Mapping[str, Any]) -> Outcome:
        result = validate_document(self.schema, payload)
        if not result.ok:
            return self._validation_failed(
                result, f"{self.schema.name} validation failed",
            )
        document = dict(result.document)
        try:
            inserted = await self.collection.insert_one(document)
        except DuplicateKeyError as e:
            return self._conflict(e, document)
        document["_id"] = inserted.inserted_id
        logger.info(
            f"{self.schema.name} created",
            extra={"entity": self.schema.name, "document_id": str(inserted.inserted_id)},
        )
        return Success(to_public(document), created=True)

    async def list_all(self) -> list[Document]:
        documents = await self.collection.find({}).to_list(length=None)
        return [to_public(d) for d in documents]

    async def get(self, raw_id: str) -> Outcome:
        doc_id = parse_document_id(raw_id)
        if doc_id is None:
            return InvalidIdentifier(raw_id)
        document = await self.collection.find_one({"_id": doc_id})
        if document is None:
            return NotFound()
        return Success(to_public(document))

    async def update(self, raw_id: str, changes: Mapping[str, Any]) -> Outcome:
        doc_id = parse_document_id(raw_id)
        if doc_id is None:
            return InvalidIdentifier(raw_id)
        existing = await self.collection.find_one({"_id": doc_id})
        if existing is None:
            return NotFound()

        merged = merge_for_update(self.schema, existing, changes)
        result = validate_document(self.schema, merged)
        if not result.ok:
            return self._validation_failed(result, "Validation failed")

        update: dict[str, Any] = {}
        if result.document:
            update["$set"] = result.document
        removed = [
            name for name in self.schema.field_names
            if name in existing and name not in result.document
        ]
        if removed:
            update["$unset"] = {name: "" for name in removed}
        if not update:
            return Success(to_public(existing))
        try:
            updated = await self.collection.find_one_and_update(
                {"_id": doc_id}, update, return_document=ReturnDocument.AFTER,
            )
        except DuplicateKeyError as e:
            return self._conflict(e, result.document)
        if updated is None:
            # deleted between the read and the write
            return NotFound()
        logger.info(
            f"{self.schema.name} updated",
            extra={"entity": self.schema.name, "document_id": raw_id},
        )
        return Success(to_public(updated))

    async def delete(self, raw_id: str) -> Outcome:
        doc_id = parse_document_id(raw_id)
        if doc_id is None:
            return InvalidIdentifier(raw_id)
        deleted = await self.collection.find_one_and_delete({"_id": doc_id})
        if deleted is None:
            return NotFound()
        logger.info(
            f"{self.schema.name} deleted",
            extra={"entity": self.schema.name, "document_id": raw_id},
        )
        return Success(to_public(deleted))

    # ─── Failure outcomes ───────────────────────────────────────

    def _validation_failed(
        self, result: ValidationResult, prefix: str,
    ) -> ValidationFailed:
        message = result.summary(prefix)
        logger.warning(
            message, extra={"entity": self.schema.name, "outcome": "validation_failed"},
        )
        return ValidationFailed(message, result.messages)

    def _conflict(
        self, error: DuplicateKeyError, document: Mapping[str, Any],
    ) -> Conflict:
        key_value = (error.details or {}).get("keyValue") or {}
        if key_value:
            field_name, value = next(iter(key_value.items()))
        else:
            field_name = next(
                (f for f in self.schema.unique_fields if f in document), "_id",
            )
            value = document.get(field_name)
        logger.warning(
            f"Duplicate {field_name} for {self.schema.name}",
            extra={"entity": self.schema.name, "outcome": "conflict"},
        )
        return Conflict(field_name, value)
