"""Entity Routes — the five CRUD endpoints, parameterized by entity schema.

Invariants:
    - Each handler performs exactly one service call and returns exactly one response
    - Request bodies are untyped JSON objects; field rules live in core/validation.py
    - A missing body is treated as an empty object

Design Decisions:
    - One factory for both resources: users and groups differ only in their rule table
"""

from typing import Any, Callable

from fastapi import APIRouter, Body, Depends
from fastapi.responses import JSONResponse

from app.api.outcome_responses import outcome_response
from app.core.validation import EntitySchema
from app.services.entity_service import EntityService


def build_entity_router(
    schema: EntitySchema,
    service_dependency: Callable[..., EntityService],
) -> APIRouter:
    """Build the APIRouter mounted at /<collection>."""
    router = APIRouter(prefix=f"/{schema.collection}", tags=[schema.collection])

    @router.post("", status_code=201)
    async def create_entity(
        payload: dict[str, Any] | None = Body(None),
        service: EntityService = Depends(service_dependency),
    ) -> JSONResponse:
        outcome = await service.create(payload or {})
        return outcome_response(schema, outcome)

    @router.get("")
    async def list_entities(
        service: EntityService = Depends(service_dependency),
    ) -> list[dict[str, Any]]:
        return await service.list_all()

    @router.get("/{entity_id}")
    async def get_entity(
        entity_id: str, service: EntityService = Depends(service_dependency),
    ) -> JSONResponse:
        return outcome_response(schema, await service.get(entity_id))

    @router.put("/{entity_id}")
    async def update_entity(
        entity_id: str,
        payload: dict[str, Any] | None = Body(None),
        service: EntityService = Depends(service_dependency),
    ) -> JSONResponse:
        outcome = await service.update(entity_id, payload or {})
        return outcome_response(schema, outcome)

    @router.delete("/{entity_id}")
    async def delete_entity(
        entity_id: str, service: EntityService = Depends(service_dependency),
    ) -> JSONResponse:
        outcome = await service.delete(entity_id)
        return outcome_response(schema, outcome, deleted=True)

    return router
