"""Domain Types — identifier and outcome vocabulary shared across layers.

Invariants:
    - DocumentId wraps bson.ObjectId — never pass raw request strings to storage
    - parse_document_id never raises: malformed input yields None
    - All outcome kinds encoded as an Enum — no raw string matching

Design Decisions:
    - NewType over wrapper classes: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON (and log extras) without custom encoders
"""

from enum import Enum
from typing import Any, NewType

from bson import ObjectId
from bson.errors import InvalidId


# ─── Identity Types ──────────────────────────────────────────────

DocumentId = NewType("DocumentId", ObjectId)


def parse_document_id(raw: str) -> DocumentId | None:
    """Parse a path identifier; None when it is not a 24-hex ObjectId."""
    if not isinstance(raw, str) or len(raw) != 24:
        return None
    try:
        return DocumentId(ObjectId(raw))
    except (InvalidId, TypeError):
        return None


# ─── Document Types ──────────────────────────────────────────────

Document = dict[str, Any]


# ─── Enums ───────────────────────────────────────────────────────

class OutcomeKind(str, Enum):
    """Every shape a storage-backed operation can resolve to."""
    SUCCESS = "success"
    NOT_FOUND = "not_found"
    INVALID_IDENTIFIER = "invalid_identifier"
    VALIDATION_FAILED = "validation_failed"
    CONFLICT = "conflict"

