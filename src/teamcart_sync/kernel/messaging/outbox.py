"""Kernel messaging – outbox source port.

The outbox itself lives outside this package; the pipeline only drains it.
"""
from __future__ import annotations

import abc
import dataclasses
from datetime import UTC, datetime
from enum import Enum
from uuid import uuid4


class OutboxStatus(str, Enum):
    PENDING = "PENDING"
    DISPATCHED = "DISPATCHED"
    FAILED = "FAILED"


@dataclasses.dataclass
class OutboxRecord:
    """A committed domain event waiting to be projected.

    ``id`` doubles as the event id: the producer writes it once and every
    redelivery carries the same value.
    """

    id: str = dataclasses.field(default_factory=lambda: str(uuid4()))
    aggregate_id: str = ""
    event_type: str = ""
    payload: bytes = b""
    status: OutboxStatus = OutboxStatus.PENDING
    created_at: datetime = dataclasses.field(default_factory=lambda: datetime.now(UTC))
    dispatched_at: datetime | None = None
    retry_count: int = 0
    last_error: str | None = None


class OutboxSource(abc.ABC):
    """Port: at-least-once supply of committed events."""

    @abc.abstractmethod
    async def get_pending(self, limit: int = 100) -> list[OutboxRecord]: ...

    @abc.abstractmethod
    async def mark_dispatched(self, record_id: str) -> None: ...

    @abc.abstractmethod
    async def mark_failed(self, record_id: str, error: str) -> None: ...


__all__ = ["OutboxRecord", "OutboxSource", "OutboxStatus"]
