"""Outcome Responses — map service outcomes onto HTTP responses.

Invariants:
    - Success → 201 when created, else 200, body is the document
    - Every failure → {"error": message} with the status of its ApiError
    - The mapping is by outcome type, never by message text
    - No logging here: the service logs each failure outcome once
"""

from fastapi import status
from fastapi.responses import JSONResponse

from app.core.errors import error_for_outcome
from app.core.outcomes import Outcome, Success
from app.core.validation import EntitySchema

DELETED_MESSAGE = "Deleted successfully"


def outcome_response(
    schema: EntitySchema, outcome: Outcome, *, deleted: bool = False,
) -> JSONResponse:
    """Render an outcome. deleted=True swaps the document for a confirmation."""
    if isinstance(outcome, Success):
        if deleted:
            return JSONResponse({"msg": DELETED_MESSAGE})
        return JSONResponse(
            outcome.document,
            status_code=(
                status.HTTP_201_CREATED if outcome.created else status.HTTP_200_OK
            ),
        )
    error = error_for_outcome(schema, outcome)
    return JSONResponse(error.to_response(), status_code=error.http_status)
