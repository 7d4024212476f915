"""Document Validation — tests for the generic rule-table validator.

Tests cover:
    - Required fields (missing, None, empty string) use the rule's message
    - Length bounds inclusive at both ends
    - Lengths counted in UTF-16 code units (astral characters count twice)
    - Pattern rules use the custom message
    - Scalars cast to text; objects and arrays rejected
    - Undeclared fields and _id dropped
    - Error order follows schema declaration order
    - merge_for_update overlays only declared fields
"""

import re

from app.core.entity_schemas import GROUP_SCHEMA, USER_SCHEMA
from app.core.validation import (
    EntitySchema, FieldRule, merge_for_update, validate_document,
)

VALID_USER = {
    "username": "john_doe",
    "email": "john@example.com",
    "password": "secret123",
}


# ─── happy path ──────────────────────────────────────────────────

def test_valid_user_passes_and_keeps_fields():
    result = validate_document(USER_SCHEMA, VALID_USER)
    assert result.ok
    assert result.document == VALID_USER


def test_undeclared_fields_and_id_are_dropped():
    payload = {**VALID_USER, "role": "admin", "_id": "abc"}
    result = validate_document(USER_SCHEMA, payload)
    assert result.ok
    assert "role" not in result.document
    assert "_id" not in result.document


# ─── required ────────────────────────────────────────────────────

def test_missing_fields_report_custom_required_messages():
    result = validate_document(USER_SCHEMA, {})
    assert not result.ok
    assert result.messages == (
        "username: Username required",
        "email: Email required",
        "password: Password required",
    )


def test_none_and_empty_string_count_as_missing():
    result = validate_document(GROUP_SCHEMA, {"groupname": None})
    assert result.messages == ("groupname: Group name required",)
    result = validate_document(GROUP_SCHEMA, {"groupname": ""})
    assert result.messages == ("groupname: Group name required",)


def test_required_default_message_when_none_configured():
    schema = EntitySchema("Thing", "things", (FieldRule("label", required=True),))
    result = validate_document(schema, {})
    assert result.errors[0].message == "Path `label` is required."
    assert result.errors[0].kind == "required"


def test_optional_empty_string_is_stored_and_absent_is_skipped():
    schema = EntitySchema("Thing", "things", (
        FieldRule("note", min_length=3), FieldRule("other"),
    ))
    result = validate_document(schema, {"note": ""})
    assert result.ok
    assert result.document == {"note": ""}


# ─── length bounds ───────────────────────────────────────────────

def test_username_length_bounds_are_inclusive():
    assert validate_document(USER_SCHEMA, {**VALID_USER, "username": "abc"}).ok
    assert validate_document(USER_SCHEMA, {**VALID_USER, "username": "a" * 50}).ok


def test_username_too_short():
    result = validate_document(USER_SCHEMA, {**VALID_USER, "username": "ab"})
    assert result.errors[0].kind == "minlength"
    assert result.errors[0].message == (
        "Path `username` (`ab`) is shorter than the minimum allowed length (3)."
    )


def test_username_too_long():
    result = validate_document(USER_SCHEMA, {**VALID_USER, "username": "a" * 51})
    assert result.errors[0].kind == "maxlength"
    assert "longer than the maximum allowed length (50)" in result.errors[0].message


def test_length_counts_utf16_code_units():
    assert validate_document(USER_SCHEMA, {**VALID_USER, "username": "\U0001F600\U0001F600"}).ok
    too_long = validate_document(
        USER_SCHEMA, {**VALID_USER, "username": "\U0001F600" * 26},
    )
    assert too_long.errors[0].kind == "maxlength"
    assert validate_document(USER_SCHEMA, {**VALID_USER, "username": "é" * 50}).ok


def test_password_minimum_six():
    assert not validate_document(USER_SCHEMA, {**VALID_USER, "password": "12345"}).ok
    assert validate_document(USER_SCHEMA, {**VALID_USER, "password": "123456"}).ok


# ─── pattern ─────────────────────────────────────────────────────

def test_invalid_email_uses_custom_message():
    result = validate_document(USER_SCHEMA, {**VALID_USER, "email": "invalid"})
    assert result.messages == ("email: Email invalid",)
    assert result.errors[0].kind == "regexp"


def test_pattern_default_message():
    schema = EntitySchema("Thing", "things", (
        FieldRule("code", pattern=re.compile(r"^\d+$")),
    ))
    result = validate_document(schema, {"code": "x1"})
    assert result.errors[0].message == "Path `code` is invalid (x1)."


# ─── casting ─────────────────────────────────────────────────────

def test_numbers_and_booleans_cast_to_text():
    result = validate_document(USER_SCHEMA, {
        "username": 12345, "email": "a@b.co", "password": 1234567.0,
    })
    assert result.ok
    assert result.document["username"] == "12345"
    assert result.document["password"] == "1234567"
    result = validate_document(GROUP_SCHEMA, {"groupname": True})
    assert result.document == {"groupname": "true"}


def test_objects_and_arrays_are_cast_errors():
    result = validate_document(GROUP_SCHEMA, {"groupname": {"a": 1}})
    assert result.errors[0].kind == "cast"
    assert 'at path "groupname"' in result.errors[0].message
    result = validate_document(GROUP_SCHEMA, {"groupname": ["abc"]})
    assert result.errors[0].kind == "cast"


# ─── summary ─────────────────────────────────────────────────────

def test_summary_joins_messages_in_schema_order():
    result = validate_document(USER_SCHEMA, {"email": "nope", "username": "ab"})
    summary = result.summary("User validation failed")
    assert summary.startswith("User validation failed: username: Path `username`")
    assert summary.index("username:") < summary.index("email:") < summary.index("password:")


# ─── merge_for_update ────────────────────────────────────────────

def test_merge_overlays_declared_fields_only():
    existing = {"_id": "x", **VALID_USER}
    merged = merge_for_update(
        USER_SCHEMA, existing, {"username": "updated", "role": "admin", "_id": "y"},
    )
    assert merged == {**VALID_USER, "username": "updated"}


def test_merge_keeps_explicit_null_so_required_fails():
    merged = merge_for_update(GROUP_SCHEMA, {"groupname": "team"}, {"groupname": None})
    assert merged == {"groupname": None}
    assert not validate_document(GROUP_SCHEMA, merged).ok
