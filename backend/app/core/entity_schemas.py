"""Entity Schemas — the static rule tables for users and groups.

Invariants:
    - users.email is the only unique field (enforced by a storage index)
    - username and groupname share the 3-50 length bound
"""

import re

from app.core.validation import EntitySchema, FieldRule

EMAIL_PATTERN = re.compile(r"\S+@\S+\.\S+")

USER_SCHEMA = EntitySchema(
    name="User",
    collection="users",
    rules=(
        FieldRule(
            "username", required=True, required_message="Username required",
            min_length=3, max_length=50,
        ),
        FieldRule(
            "email", required=True, required_message="Email required",
            pattern=EMAIL_PATTERN, pattern_message="Email invalid",
            unique=True,
        ),
        FieldRule(
            "password", required=True, required_message="Password required",
            min_length=6,
        ),
    ),
)

GROUP_SCHEMA = EntitySchema(
    name="Group",
    collection="groups",
    rules=(
        FieldRule(
            "groupname", required=True, required_message="Group name required",
            min_length=3, max_length=50,
        ),
    ),
)

# Every schema whose unique fields need an index before writes are accepted
ENTITY_SCHEMAS = (USER_SCHEMA, GROUP_SCHEMA)
