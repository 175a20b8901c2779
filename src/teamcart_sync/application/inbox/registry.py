"""Application inbox – static event-type → handlers registry."""
from __future__ import annotations

from teamcart_sync.application.inbox.idempotent import LedgerGatedHandler
from teamcart_sync.kernel.ddd import DomainEvent


class HandlerRegistry:
    """Ordered handler lists keyed by event type tag, built once at startup."""

    def __init__(self) -> None:
        self._handlers: dict[str, list[LedgerGatedHandler]] = {}

    def register(self, event_type: str | type[DomainEvent], handler: LedgerGatedHandler) -> None:
        tag = event_type if isinstance(event_type, str) else event_type.__name__
        bucket = self._handlers.setdefault(tag, [])
        if any(h.name == handler.name for h in bucket):
            raise ValueError(f"Handler '{handler.name}' is already registered for '{tag}'")
        bucket.append(handler)

    def handlers_for(self, event_type: str) -> tuple[LedgerGatedHandler, ...]:
        return tuple(self._handlers.get(event_type, ()))

    def event_types(self) -> frozenset[str]:
        return frozenset(self._handlers)

    def __contains__(self, event_type: object) -> bool:
        return event_type in self._handlers

    def __len__(self) -> int:
        return sum(len(v) for v in self._handlers.values())


__all__ = ["HandlerRegistry"]
