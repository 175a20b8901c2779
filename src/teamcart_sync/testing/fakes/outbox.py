"""Testing fakes – InMemoryOutboxSource."""
from __future__ import annotations

from datetime import UTC, datetime

from teamcart_sync.kernel.ddd import DomainEvent
from teamcart_sync.kernel.messaging import OutboxRecord, OutboxSource, OutboxStatus
from teamcart_sync.teamcart.events import encode_event


class InMemoryOutboxSource(OutboxSource):
    """Dict-backed outbox; failed records are redelivered until ``max_retries``."""

    def __init__(self, max_retries: int = 5) -> None:
        self._records: dict[str, OutboxRecord] = {}
        self.max_retries = max_retries

    def add(self, record: OutboxRecord) -> OutboxRecord:
        self._records[record.id] = record
        return record

    def add_event(self, event: DomainEvent, aggregate_id: str = "") -> OutboxRecord:
        return self.add(
            OutboxRecord(
                id=event.event_id,
                aggregate_id=aggregate_id or getattr(event, "cart_id", ""),
                event_type=event.event_type,
                payload=encode_event(event),
            )
        )

    def get(self, record_id: str) -> OutboxRecord:
        return self._records[record_id]

    async def get_pending(self, limit: int = 100) -> list[OutboxRecord]:
        pending = [
            r
            for r in self._records.values()
            if r.status == OutboxStatus.PENDING
            or (r.status == OutboxStatus.FAILED and r.retry_count < self.max_retries)
        ]
        return pending[:limit]

    async def mark_dispatched(self, record_id: str) -> None:
        record = self._records[record_id]
        record.status = OutboxStatus.DISPATCHED
        record.dispatched_at = datetime.now(UTC)

    async def mark_failed(self, record_id: str, error: str) -> None:
        record = self._records[record_id]
        record.status = OutboxStatus.FAILED
        record.retry_count += 1
        record.last_error = error

    def all_records(self) -> list[OutboxRecord]:
        return list(self._records.values())


__all__ = ["InMemoryOutboxSource"]
