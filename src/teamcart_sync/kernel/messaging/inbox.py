"""Kernel messaging – deduplication ledger (inbox) port.

The ledger is a write-once set of ``(event_id, handler_name)`` pairs.
Presence of a pair means the handler already fully executed the event.
"""
from __future__ import annotations

import abc
import dataclasses
from datetime import UTC, datetime


@dataclasses.dataclass(frozen=True)
class LedgerEntry:
    """Composite identity of an (event, handler) execution."""

    event_id: str
    handler_name: str
    processed_at: datetime = dataclasses.field(
        default_factory=lambda: datetime.now(UTC), compare=False
    )

    @property
    def key(self) -> tuple[str, str]:
        return (self.event_id, self.handler_name)


class DedupLedger(abc.ABC):
    """Port: idempotency gate for event handlers.

    ``mark_processed`` must either raise
    :class:`~teamcart_sync.kernel.errors.DuplicateLedgerEntryError` or be a
    no-op when the pair already exists; it must never record it twice.
    """

    @abc.abstractmethod
    async def has_processed(self, event_id: str, handler_name: str) -> bool: ...

    @abc.abstractmethod
    async def mark_processed(self, event_id: str, handler_name: str) -> None: ...


__all__ = ["DedupLedger", "LedgerEntry"]
