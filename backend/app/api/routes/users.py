"""Users Routes — CRUD for /users.

Invariants:
    - username 3-50 chars, email pattern-checked and unique, password >= 6 chars
"""

from app.api.dependencies import get_user_service
from app.api.routes.entity_routes import build_entity_router
from app.core.entity_schemas import USER_SCHEMA

router = build_entity_router(USER_SCHEMA, get_user_service)
