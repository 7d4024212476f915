"""Route Modules — one file per resource/concern.

Invariants:
    - Each module exposes an APIRouter with its own prefix and tags
    - Routes never contain business logic (delegate to services)
"""
