"""Application inbox – idempotent and best-effort handler wrappers.

A projection handler is a plain ``async (event) -> None`` function. The
wrappers here gate it on the deduplication ledger:

* :func:`idempotent` runs the handler, then records ``(event_id, name)``.
  A raised exception (cancellation included) leaves the entry unset so a
  redelivery re-runs the whole handler.
* :func:`best_effort` records the entry first and hands the handler to a
  :class:`BackgroundTaskRunner`; nothing it does can fail the event.
"""
from __future__ import annotations

import functools
from enum import StrEnum
from typing import Any, Awaitable, Callable

from teamcart_sync.application.background import BackgroundTaskRunner
from teamcart_sync.kernel.ddd import DomainEvent
from teamcart_sync.kernel.errors import BackgroundCapacityError, DuplicateLedgerEntryError
from teamcart_sync.kernel.messaging import DedupLedger
from teamcart_sync.observability.logging import get_logger

type HandlerFunc = Callable[[Any], Awaitable[None]]


class HandlerOutcome(StrEnum):
    PROCESSED = "processed"
    DUPLICATE = "duplicate"
    SCHEDULED = "scheduled"


class LedgerGatedHandler:
    """An event handler bound to a stable ledger name."""

    def __init__(self, name: str, func: Callable[[DomainEvent], Awaitable[HandlerOutcome]]) -> None:
        self.name = name
        self._func = func

    async def __call__(self, event: DomainEvent) -> HandlerOutcome:
        return await self._func(event)

    def __repr__(self) -> str:
        return f"LedgerGatedHandler({self.name!r})"


def idempotent(
    name: str,
    ledger: DedupLedger,
    logger: Any = None,
) -> Callable[[HandlerFunc], LedgerGatedHandler]:
    """Decorator: run *handler* at most once per ``(event_id, name)``.

    Usage::

        @idempotent("item_added.projection", ledger)
        async def project(event: ItemAdded) -> None:
            ...
    """
    log = logger or get_logger(__name__)

    def decorator(handler: HandlerFunc) -> LedgerGatedHandler:
        @functools.wraps(handler)
        async def run(event: DomainEvent) -> HandlerOutcome:
            if await ledger.has_processed(event.event_id, name):
                log.debug("inbox.duplicate_skipped", handler=name, event_id=event.event_id)
                return HandlerOutcome.DUPLICATE

            await handler(event)

            try:
                await ledger.mark_processed(event.event_id, name)
            except DuplicateLedgerEntryError:
                # a concurrent worker finished the same pair first
                log.warning("inbox.concurrent_duplicate", handler=name, event_id=event.event_id)
                return HandlerOutcome.DUPLICATE
            return HandlerOutcome.PROCESSED

        return LedgerGatedHandler(name, run)

    return decorator


def best_effort(
    name: str,
    ledger: DedupLedger,
    runner: BackgroundTaskRunner,
    logger: Any = None,
) -> Callable[[HandlerFunc], LedgerGatedHandler]:
    """Decorator: schedule *handler* in the background, never awaited or retried."""
    log = logger or get_logger(__name__)

    def decorator(handler: HandlerFunc) -> LedgerGatedHandler:
        @functools.wraps(handler)
        async def run(event: DomainEvent) -> HandlerOutcome:
            if await ledger.has_processed(event.event_id, name):
                return HandlerOutcome.DUPLICATE
            try:
                await ledger.mark_processed(event.event_id, name)
            except DuplicateLedgerEntryError:
                return HandlerOutcome.DUPLICATE

            try:
                runner.spawn(handler(event), name=f"{name}:{event.event_id}")
            except BackgroundCapacityError as exc:
                log.warning("inbox.best_effort_dropped", handler=name, event_id=event.event_id, error=exc.message)
            return HandlerOutcome.SCHEDULED

        return LedgerGatedHandler(name, run)

    return decorator


__all__ = ["HandlerFunc", "HandlerOutcome", "LedgerGatedHandler", "best_effort", "idempotent"]
