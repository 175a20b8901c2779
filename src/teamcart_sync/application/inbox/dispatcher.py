"""Application inbox – EventDispatcher.

Runs every handler registered for an event and turns the outcome into a
``Result``: ``Ok(outcomes)`` when all succeeded (or were duplicates),
``Retryable(first_error)`` when any raised. Handlers that succeeded have
already recorded their ledger entries, so a redelivery only re-runs the
ones that failed. Cancellation always propagates.
"""
from __future__ import annotations

from typing import Any

from teamcart_sync.application.inbox.idempotent import HandlerOutcome
from teamcart_sync.application.inbox.registry import HandlerRegistry
from teamcart_sync.kernel.ddd import DomainEvent
from teamcart_sync.kernel.errors import BaseError
from teamcart_sync.kernel.types import Ok, Result, Retryable
from teamcart_sync.observability.logging import get_logger


class EventDispatcher:
    def __init__(self, registry: HandlerRegistry, logger: Any = None) -> None:
        self._registry = registry
        self._logger = logger or get_logger(__name__)

    async def dispatch(self, event: DomainEvent) -> Result[list[HandlerOutcome], Exception]:
        handlers = self._registry.handlers_for(event.event_type)
        if not handlers:
            self._logger.debug("dispatcher.no_handlers", event_type=event.event_type, event_id=event.event_id)
            return Ok([])

        outcomes: list[HandlerOutcome] = []
        first_error: Exception | None = None
        for handler in handlers:
            try:
                outcomes.append(await handler(event))
            except Exception as exc:  # noqa: BLE001
                self._logger.error(
                    "dispatcher.handler_failed",
                    handler=handler.name,
                    event_type=event.event_type,
                    event_id=event.event_id,
                    error=self._describe(exc, event),
                )
                if first_error is None:
                    first_error = exc
        if first_error is not None:
            return Retryable(first_error)
        return Ok(outcomes)

    @staticmethod
    def _describe(exc: Exception, event: DomainEvent) -> Any:
        if isinstance(exc, BaseError):
            return exc.bind_event(event_id=event.event_id, cart_id=getattr(event, "cart_id", None)).to_dict()
        return repr(exc)

    async def dispatch_or_raise(self, event: DomainEvent) -> list[HandlerOutcome]:
        """Like :meth:`dispatch`, but re-raises the first handler failure."""
        return (await self.dispatch(event)).unwrap()


__all__ = ["EventDispatcher"]
