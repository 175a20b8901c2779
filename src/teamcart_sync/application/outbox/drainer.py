"""Application outbox – OutboxDrainer.

Pulls pending records from an :class:`OutboxSource`, decodes each into a
typed event keyed by the record id, and dispatches them on a bounded pool
of concurrent workers. A record is acknowledged only when every handler
succeeded; otherwise it is marked failed and the source redelivers it.
A worker that raises (an acknowledgement the source rejects) is logged
and counted without stopping the rest of the batch.
Draining repeatedly is safe because the ledger makes dispatch idempotent.
"""
from __future__ import annotations

import asyncio
import dataclasses
from typing import Any

from teamcart_sync.application.inbox import EventDispatcher
from teamcart_sync.kernel.errors import HandlerNotRegisteredError, SerializationError
from teamcart_sync.kernel.messaging import OutboxRecord, OutboxSource
from teamcart_sync.observability.logging import get_logger
from teamcart_sync.teamcart.events import decode_event


@dataclasses.dataclass
class DrainReport:
    fetched: int = 0
    dispatched: int = 0
    failed: int = 0
    undecodable: int = 0
    errored: int = 0


class OutboxDrainer:
    def __init__(
        self,
        source: OutboxSource,
        dispatcher: EventDispatcher,
        *,
        concurrency: int = 8,
        batch_size: int = 100,
        logger: Any = None,
    ) -> None:
        self._source = source
        self._dispatcher = dispatcher
        self._semaphore = asyncio.Semaphore(concurrency)
        self._batch_size = batch_size
        self._logger = logger or get_logger(__name__)

    async def drain_once(self) -> DrainReport:
        """Process one batch of pending records."""
        records = await self._source.get_pending(self._batch_size)
        report = DrainReport(fetched=len(records))
        results = await asyncio.gather(
            *(self._process(record, report) for record in records), return_exceptions=True
        )
        for record, outcome in zip(records, results):
            if isinstance(outcome, asyncio.CancelledError):
                raise outcome
            if isinstance(outcome, Exception):
                # the outcome was not recorded, so the source hands the record out again
                report.errored += 1
                self._logger.error(
                    "outbox.record_errored",
                    record_id=record.id,
                    event_type=record.event_type,
                    error=repr(outcome),
                )
        if records:
            self._logger.info("outbox.drained", **dataclasses.asdict(report))
        return report

    async def _process(self, record: OutboxRecord, report: DrainReport) -> None:
        async with self._semaphore:
            try:
                event = decode_event(record.event_type, record.payload, event_id=record.id)
            except (HandlerNotRegisteredError, SerializationError) as exc:
                self._logger.error(
                    "outbox.undecodable",
                    record_id=record.id,
                    event_type=record.event_type,
                    error=exc.message,
                )
                report.undecodable += 1
                await self._source.mark_failed(record.id, exc.message)
                return

            result = await self._dispatcher.dispatch(event)
            if result.is_ok():
                await self._source.mark_dispatched(record.id)
                report.dispatched += 1
            else:
                report.failed += 1
                await self._source.mark_failed(record.id, repr(result.error))

    async def run(self, stop: asyncio.Event, poll_interval: float = 1.0) -> None:
        """Drain until *stop* is set; back off unless a full batch made progress."""
        while not stop.is_set():
            report = await self.drain_once()
            if report.fetched >= self._batch_size and report.dispatched:
                continue
            try:
                await asyncio.wait_for(stop.wait(), timeout=poll_interval)
            except TimeoutError:
                pass


__all__ = ["DrainReport", "OutboxDrainer"]
