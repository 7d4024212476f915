"""Health & Readiness Probes — liveness string and readiness endpoints.

Invariants:
    - GET / always returns the plain-text liveness string if the process is up
    - GET /health always returns 200 if the process is up (liveness)
    - GET /health/ready returns 503 if the database does not answer a ping
      or its unique indexes still cannot be built (readiness)
"""

from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse, PlainTextResponse

from app.core.entity_schemas import ENTITY_SCHEMAS
from app.core.errors import DatabaseError

router = APIRouter(tags=["health"])

LIVENESS_TEXT = "API is running"


def _not_ready(reason: str) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"status": "not_ready", "reason": reason},
    )


@router.get("/", response_class=PlainTextResponse)
async def root():
    return LIVENESS_TEXT


@router.get("/health", status_code=status.HTTP_200_OK)
async def health_check(request: Request):
    """Basic liveness probe. Returns 200 if the process is up."""
    return {
        "status": "healthy",
        "service": "users-rest-api",
        "version": request.app.version,
    }


@router.get("/health/ready")
async def readiness_check(request: Request):
    """Readiness probe — database connectivity plus unique indexes."""
    store = getattr(request.app.state, "store", None)
    db_ok = await store.ping() if store else False
    if not db_ok:
        return _not_ready("database_unavailable")
    if not store.indexes_ready:
        try:
            await store.ensure_indexes(ENTITY_SCHEMAS)
        except DatabaseError:
            return _not_ready("indexes_missing")
    return {"status": "ready", "checks": {"database": "healthy", "indexes": "ready"}}
