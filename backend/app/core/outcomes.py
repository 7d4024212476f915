"""Operation Outcomes — tagged results returned by every entity operation.

Invariants:
    - Exactly one outcome per operation; handlers map outcome.kind to a status code
    - Success carries the stored document; failures carry only what the response needs
    - Outcomes are immutable (frozen dataclasses)

Design Decisions:
    - Tagged union over exceptions for expected failures: callers branch on kind,
      no inspection of driver exception names or codes
"""

from dataclasses import dataclass, field

from app.core.domain_types import Document, OutcomeKind


@dataclass(frozen=True)
class Success:
    document: Document
    created: bool = False
    kind: OutcomeKind = field(default=OutcomeKind.SUCCESS, init=False)


@dataclass(frozen=True)
class NotFound:
    kind: OutcomeKind = field(default=OutcomeKind.NOT_FOUND, init=False)


@dataclass(frozen=True)
class InvalidIdentifier:
    raw_id: str
    kind: OutcomeKind = field(default=OutcomeKind.INVALID_IDENTIFIER, init=False)


@dataclass(frozen=True)
class ValidationFailed:
    """Field rules rejected the document. message is the joined summary."""
    message: str
    messages: tuple[str, ...] = ()
    kind: OutcomeKind = field(default=OutcomeKind.VALIDATION_FAILED, init=False)


@dataclass(frozen=True)
class Conflict:
    """Storage refused the write because a unique field already holds value."""
    field_name: str
    value: object = None
    kind: OutcomeKind = field(default=OutcomeKind.CONFLICT, init=False)

    @property
    def message(self) -> str:
        return f"{self.field_name} '{self.value}' already exists"


Outcome = Success | NotFound | InvalidIdentifier | ValidationFailed | Conflict
