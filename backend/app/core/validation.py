"""Document Validation — generic rule-table validator for entity payloads.

Invariants:
    - Pure: no IO, no async; uniqueness is left to the storage layer
    - At most one FieldError per field, reported in schema declaration order
    - Undeclared fields and client-supplied _id never reach the returned document
    - None and "" count as missing for required fields
    - Lengths are counted in UTF-16 code units (an emoji counts as two)

Design Decisions:
    - Rules are data (FieldRule) so both entities share one validator
    - Scalars are cast to text (123 → "123", true → "true");
      objects and arrays are cast errors
"""

import re
from dataclasses import dataclass, field
from typing import Any, Mapping

from app.core.domain_types import Document


@dataclass(frozen=True)
class FieldRule:
    """Constraints for a single text field."""
    name: str
    required: bool = False
    required_message: str | None = None
    min_length: int | None = None
    max_length: int | None = None
    pattern: re.Pattern | None = None
    pattern_message: str | None = None
    unique: bool = False


@dataclass(frozen=True)
class EntitySchema:
    """Rule table for one entity plus the names used in messages and storage."""
    name: str
    collection: str
    rules: tuple[FieldRule, ...]

    @property
    def label(self) -> str:
        return self.name.lower()

    @property
    def field_names(self) -> tuple[str, ...]:
        return tuple(rule.name for rule in self.rules)

    @property
    def unique_fields(self) -> tuple[str, ...]:
        return tuple(rule.name for rule in self.rules if rule.unique)


@dataclass(frozen=True)
class FieldError:
    field: str
    message: str
    kind: str


@dataclass
class ValidationResult:
    document: Document
    errors: list[FieldError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors

    @property
    def messages(self) -> tuple[str, ...]:
        return tuple(f"{e.field}: {e.message}" for e in self.errors)

    def summary(self, prefix: str) -> str:
        return f"{prefix}: {', '.join(self.messages)}"


# ─── Public API ──────────────────────────────────────────────────

def validate_document(
    schema: EntitySchema, payload: Mapping[str, Any],
) -> ValidationResult:
    """Check payload against every rule and build the storable document."""
    document: Document = {}
    errors: list[FieldError] = []
    for rule in schema.rules:
        value, cast_error = _cast_to_text(rule.name, payload.get(rule.name))
        if cast_error:
            errors.append(cast_error)
            continue
        if value is None or value == "":
            if rule.required:
                errors.append(FieldError(
                    rule.name,
                    rule.required_message or f"Path `{rule.name}` is required.",
                    "required",
                ))
            elif value == "":
                document[rule.name] = value
            continue
        error = _check_rule(rule, value)
        if error:
            errors.append(error)
            continue
        document[rule.name] = value
    return ValidationResult(document=document, errors=errors)


def merge_for_update(
    schema: EntitySchema, existing: Mapping[str, Any], changes: Mapping[str, Any],
) -> dict[str, Any]:
    """Overlay declared fields from changes onto the stored document."""
    merged = {k: v for k, v in existing.items() if k in schema.field_names}
    for name in schema.field_names:
        if name in changes:
            merged[name] = changes[name]
    return merged


# ─── Rule checks ─────────────────────────────────────────────────

def _check_rule(rule: FieldRule, value: str) -> FieldError | None:
    if rule.min_length is not None and _text_length(value) < rule.min_length:
        return FieldError(
            rule.name,
            f"Path `{rule.name}` (`{value}`) is shorter than the minimum "
            f"allowed length ({rule.min_length}).",
            "minlength",
        )
    if rule.max_length is not None and _text_length(value) > rule.max_length:
        return FieldError(
            rule.name,
            f"Path `{rule.name}` (`{value}`) is longer than the maximum "
            f"allowed length ({rule.max_length}).",
            "maxlength",
        )
    if rule.pattern is not None and not rule.pattern.search(value):
        return FieldError(
            rule.name,
            rule.pattern_message or f"Path `{rule.name}` is invalid ({value}).",
            "regexp",
        )
    return None


def _text_length(value: str) -> int:
    # UTF-16 code units, so characters outside the BMP count as two
    return len(value.encode("utf-16-le", "surrogatepass")) // 2


def _cast_to_text(name: str, value: Any) -> tuple[Any, FieldError | None]:
    if value is None or isinstance(value, str):
        return value, None
    if isinstance(value, bool):
        return ("true" if value else "false"), None
    if isinstance(value, float) and value.is_integer():
        return str(int(value)), None
    if isinstance(value, (int, float)):
        return str(value), None
    return None, FieldError(
        name,
        f'Cast to string failed for value "{value}" '
        f'(type {type(value).__name__}) at path "{name}"',
        "cast",
    )
