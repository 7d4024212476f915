"""Groups Routes — CRUD for /groups."""

from app.api.dependencies import get_group_service
from app.api.routes.entity_routes import build_entity_router
from app.core.entity_schemas import GROUP_SCHEMA

router = build_entity_router(GROUP_SCHEMA, get_group_service)
