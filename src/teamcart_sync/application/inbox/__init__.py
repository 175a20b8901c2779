"""Application inbox – ledger-gated handlers, registry and dispatcher."""
from teamcart_sync.application.inbox.dispatcher import EventDispatcher
from teamcart_sync.application.inbox.idempotent import (
    HandlerOutcome,
    LedgerGatedHandler,
    best_effort,
    idempotent,
)
from teamcart_sync.application.inbox.registry import HandlerRegistry

__all__ = [
    "EventDispatcher",
    "HandlerOutcome",
    "HandlerRegistry",
    "LedgerGatedHandler",
    "best_effort",
    "idempotent",
]
