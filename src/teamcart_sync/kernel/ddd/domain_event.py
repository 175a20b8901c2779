"""Domain events delivered by the outbox."""

from __future__ import annotations

import dataclasses
from datetime import UTC, datetime
from uuid import uuid4


@dataclasses.dataclass(frozen=True)
class DomainEvent:
    """Base class for committed domain events.

    ``event_id`` is the stable identity the outbox keeps across
    redeliveries; the deduplication ledger is keyed on it. Base fields are
    keyword-only so subclasses can declare required payload fields::

        @dataclasses.dataclass(frozen=True)
        class TipApplied(DomainEvent):
            cart_id: str
            tip: Money
    """

    event_id: str = dataclasses.field(default_factory=lambda: str(uuid4()), kw_only=True)
    occurred_at: datetime = dataclasses.field(
        default_factory=lambda: datetime.now(UTC), kw_only=True
    )

    @property
    def event_type(self) -> str:
        return type(self).__name__


__all__ = ["DomainEvent"]
