"""Domain errors: missing references, invalid input and conflicting state."""

from __future__ import annotations

from typing import Any

from teamcart_sync.kernel.errors.base import BaseError


class DomainError(BaseError):
    """Raised when a domain rule is violated."""

    default_code = "domain_error"


class ValidationError(DomainError):
    """Input data does not meet validation rules."""

    default_code = "validation_error"


class NotFoundError(DomainError):
    """The referenced resource does not exist."""

    default_code = "not_found"

    def __init__(
        self,
        resource: str,
        identifier: Any = None,
        **kwargs: Any,
    ) -> None:
        msg = f"{resource} not found"
        if identifier is not None:
            msg = f"{resource} '{identifier}' not found"
        super().__init__(msg, **kwargs)
        self.resource = resource
        self.identifier = identifier


class ConflictError(DomainError):
    """The operation conflicts with existing state."""

    default_code = "conflict"


class DuplicateLedgerEntryError(ConflictError):
    """A ``(event_id, handler_name)`` pair was recorded twice.

    Raised by ledger adapters when the composite uniqueness constraint
    rejects an insert, i.e. two workers finished the same event for the
    same handler concurrently.
    """

    default_code = "duplicate_ledger_entry"

    def __init__(self, event_id: str, handler_name: str, **kwargs: Any) -> None:
        super().__init__(
            f"Event '{event_id}' already recorded for handler '{handler_name}'",
            detail={"event_id": event_id, "handler_name": handler_name},
            event_id=event_id,
            **kwargs,
        )
        self.handler_name = handler_name


__all__ = [
    "ConflictError",
    "DomainError",
    "DuplicateLedgerEntryError",
    "NotFoundError",
    "ValidationError",
]
